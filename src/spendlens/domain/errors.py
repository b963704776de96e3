"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def unknown_provider(name: str, available: list[str]) -> str:
    """Return message for a provider name with no registered client."""
    return f"Unknown provider '{name}'. Available providers: {', '.join(available)}"


def missing_csv_columns(columns: set[str]) -> str:
    """Return message when mapped columns are absent from a CSV header."""
    return f"CSV file missing required columns: {', '.join(sorted(columns))}"
