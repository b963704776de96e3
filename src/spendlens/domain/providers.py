"""Mock bank provider clients.

Each provider reports accounts and transactions in its own native shape and
declares the ``SourceKind`` the normalizer should read them with. Randomness
comes from an injected ``random.Random`` so a seed reproduces the same data.
"""

import random
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, tzinfo
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from dateutil import tz as dateutil_tz

from spendlens.database.base import TransactionStore
from spendlens.domain.entities import Account, ImportResult, RowError, SourceKind
from spendlens.domain.errors import ValidationError, unknown_provider
from spendlens.domain.normalizer import normalize
from spendlens.logging_setup import get_logger
from spendlens.utils.date_parser import parse_timestamp

logger = get_logger("spendlens.domain.providers")

MERCHANTS: dict[str, tuple[str, ...]] = {
    "Groceries": ("Tesco", "Sainsbury's", "Waitrose", "ASDA", "Lidl", "Aldi"),
    "Dining": ("Nando's", "Pizza Express", "Wagamama", "Pret A Manger", "Costa Coffee", "Starbucks"),
    "Entertainment": ("Netflix", "Spotify", "Cinema", "Amazon Prime", "Disney+", "Theater"),
    "Transport": ("TFL", "Uber", "National Rail", "Bolt", "EasyJet", "British Airways"),
    "Shopping": ("Amazon", "ASOS", "John Lewis", "Apple", "Currys", "Ikea"),
    "Utilities": ("British Gas", "EDF Energy", "Thames Water", "BT", "Sky", "Virgin Media"),
    "Rent": ("Rent Payment", "Mortgage"),
    "Income": ("Salary", "Freelance Payment", "Refund", "Interest"),
}
ACCOUNTS = ("Starling", "Amex")
STATUSES = ("COMPLETED", "PENDING", "SCHEDULED")


class MockTransactionGenerator:
    """Generates mock-shaped transactions from an injected random source."""

    def __init__(self, rng: random.Random, now: Optional[datetime] = None):
        self.rng = rng
        self.now = now or datetime.now(dateutil_tz.UTC)

    def generate(self, count: int = 20, days: int = 30) -> list[dict[str, Any]]:
        """Generate ``count`` transactions spread over the last ``days`` days.

        Returns:
            Mock-shaped dicts (negative amounts are expenses), newest first
        """
        categories = list(MERCHANTS)
        transactions = []
        for i in range(count):
            category = self.rng.choice(categories)
            merchant = self.rng.choice(MERCHANTS[category])
            account = self.rng.choice(ACCOUNTS)
            if category == "Income":
                amount = Decimal(self.rng.randrange(200000)) / 100
            else:
                amount = -Decimal(self.rng.randrange(15000)) / 100
            when = self.now - timedelta(days=self.rng.randrange(days))
            transactions.append(
                {
                    "id": f"tr-{i}-{self.rng.getrandbits(32):08x}",
                    "date": when.isoformat(),
                    "merchant": merchant,
                    "description": f"Payment to {merchant}",
                    "amount": amount,
                    "category": category,
                    "account": account,
                    "status": self.rng.choice(STATUSES),
                    "reference": f"REF{self.rng.randrange(1000000)}",
                    "provider": account.lower(),
                }
            )
        transactions.sort(key=lambda t: t["date"], reverse=True)
        return transactions


class ProviderClient(ABC):
    """Uniform interface over a bank or card provider."""

    name: str
    source_kind: SourceKind

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """Return the provider's accounts."""
        pass

    @abstractmethod
    def list_transactions(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[dict[str, Any]]:
        """Return raw transactions in the provider's native shape."""
        pass


class _MockProviderClient(ProviderClient):
    account_label: str

    def __init__(self, mock_transactions: Iterable[dict[str, Any]], now: datetime):
        self.now = now
        self._transactions = [
            t for t in mock_transactions if t["account"] == self.account_label
        ]

    def list_transactions(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[dict[str, Any]]:
        selected = []
        for txn in self._transactions:
            when = parse_timestamp(txn["date"], dateutil_tz.UTC)
            if start is not None and when < start:
                continue
            if end is not None and when > end:
                continue
            selected.append(self._to_native(txn))
        return selected

    @abstractmethod
    def _to_native(self, txn: dict[str, Any]) -> dict[str, Any]:
        pass


class StarlingClient(_MockProviderClient):
    """Starling-style current account feed. Amounts are signed minor units."""

    name = "starling"
    source_kind = SourceKind.STARLING
    account_label = "Starling"

    def list_accounts(self) -> list[Account]:
        return [
            Account(
                id="acc-1",
                name="Starling Current Account",
                type="bank",
                provider=self.name,
                balance=Decimal("1458.67"),
            )
        ]

    def _to_native(self, txn: dict[str, Any]) -> dict[str, Any]:
        return {
            "feedItemUid": txn["id"],
            "transactionTime": txn["date"],
            "amount": {"minorUnits": int(txn["amount"] * 100)},
            "counterPartyName": txn["merchant"],
            "reference": txn["reference"],
            "spendingCategory": txn["category"],
            "status": txn["status"],
            "account": self.account_label,
            "provider": self.name,
        }


class AmexClient(_MockProviderClient):
    """Amex-style card feed. Charges are reported as positive amounts."""

    name = "amex"
    source_kind = SourceKind.AMEX
    account_label = "Amex"

    def list_accounts(self) -> list[Account]:
        return [
            Account(
                id="acc-2",
                name="American Express Gold",
                type="credit",
                provider=self.name,
                balance=Decimal("-678.21"),
                limit=Decimal("5000"),
                due_date=self.now + timedelta(days=15),
            )
        ]

    def _to_native(self, txn: dict[str, Any]) -> dict[str, Any]:
        return {
            "transactionId": txn["id"],
            "date": txn["date"],
            "amount": str(-txn["amount"]),
            "description": txn["description"],
            "category": txn["category"],
            "merchantName": txn["merchant"],
            "status": txn["status"],
            "referenceNumber": txn["reference"],
            "account": self.account_label,
            "provider": self.name,
        }


PROVIDERS: dict[str, type[_MockProviderClient]] = {
    StarlingClient.name: StarlingClient,
    AmexClient.name: AmexClient,
}


def create_provider_clients(
    names: Sequence[str],
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
    count: int = 50,
) -> list[ProviderClient]:
    """Build the named provider clients over one shared mock data set.

    Args:
        names: Provider names, e.g. ``["starling", "amex"]``
        seed: Seed for the random source; None draws fresh data
        now: Reference time for generated dates
        count: Number of mock transactions shared across providers

    Raises:
        ValidationError: If a name has no registered provider
    """
    for name in names:
        if name not in PROVIDERS:
            raise ValidationError(unknown_provider(name, sorted(PROVIDERS)))

    now = now or datetime.now(dateutil_tz.UTC)
    generator = MockTransactionGenerator(random.Random(seed), now=now)
    mock_transactions = generator.generate(count)
    return [PROVIDERS[name](mock_transactions, now) for name in names]


class ProviderSync:
    """Pulls transactions from provider clients into the store."""

    def __init__(
        self,
        clients: Sequence[ProviderClient],
        store: TransactionStore,
        zone: tzinfo = dateutil_tz.UTC,
    ):
        self.clients = clients
        self.store = store
        self.zone = zone

    def sync(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> ImportResult:
        """Normalize and store every provider transaction in the window.

        Returns:
            ImportResult with stored records and rejected items; the row number
            is the item's 1-based position in its provider's feed
        """
        records = []
        errors = []
        for client in self.clients:
            raw_items = client.list_transactions(start=start, end=end)
            for position, raw in enumerate(raw_items, start=1):
                try:
                    records.append(normalize(raw, client.source_kind, self.zone))
                except ValidationError as e:
                    errors.append(RowError(position, f"{client.name}: {e}"))
            logger.info("Fetched %d transactions from %s", len(raw_items), client.name)

        self.store.put_many(records)
        return ImportResult(records=tuple(records), errors=tuple(errors))
