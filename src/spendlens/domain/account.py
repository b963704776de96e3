"""Account domain service."""

from decimal import Decimal
from typing import Iterable, Sequence

from spendlens.domain.entities import Account, AccountSummary
from spendlens.domain.providers import ProviderClient


class AccountService:
    """Service for listing and summarizing provider accounts."""

    def __init__(self, clients: Sequence[ProviderClient]):
        """Initialize account service.

        Args:
            clients: Provider clients to read accounts from
        """
        self.clients = clients

    def list_accounts(self) -> list[Account]:
        """List accounts from every configured provider."""
        accounts = []
        for client in self.clients:
            accounts.extend(client.list_accounts())
        return accounts

    def get_summary(self) -> AccountSummary:
        """Summarize balances across every configured provider."""
        return summarize_accounts(self.list_accounts())


def summarize_accounts(accounts: Iterable[Account]) -> AccountSummary:
    """Compute total bank balance, card debt and remaining credit.

    Card balances are negative when money is owed.
    """
    total_balance = Decimal("0")
    total_debt = Decimal("0")
    total_limit = Decimal("0")
    for account in accounts:
        if account.type == "bank":
            total_balance += account.balance
        elif account.type == "credit":
            if account.balance < 0:
                total_debt += -account.balance
            total_limit += account.limit or Decimal("0")

    return AccountSummary(
        total_balance=total_balance,
        total_debt=total_debt,
        available_credit=total_limit - total_debt,
    )
