"""Generic SQLAlchemy transaction store implementation."""

from datetime import datetime, time, tzinfo
from typing import Any, Iterable, Optional, Union

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from spendlens.database.base import INDEX_NAMES, KeyRange, TransactionStore
from spendlens.database.mappers import record_to_row, row_to_record, to_storage_timestamp
from spendlens.database.models import TransactionRow, create_session_factory
from spendlens.domain.entities import TransactionRecord
from spendlens.logging_setup import get_logger
from spendlens.utils.date_parser import parse_month_key

logger = get_logger("spendlens.database")


class SQLAlchemyTransactionStore(TransactionStore):
    """SQLAlchemy-based implementation of the TransactionStore interface."""

    def __init__(self, database_url: str, zone: tzinfo = dateutil_tz.UTC):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            zone: Reporting time zone records are returned in
        """
        self.database_url = database_url
        self.zone = zone
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get_all(self) -> list[TransactionRecord]:
        """Return every record, newest first."""
        session = self._get_session()
        rows = (
            session.query(TransactionRow)
            .order_by(TransactionRow.timestamp.desc(), TransactionRow.id)
            .all()
        )
        return [row_to_record(row, self.zone) for row in rows]

    def get(self, record_id: str) -> Optional[TransactionRecord]:
        """Get a record by id."""
        session = self._get_session()
        row = session.get(TransactionRow, record_id)
        if row is None:
            return None
        return row_to_record(row, self.zone)

    def put(self, record: TransactionRecord) -> None:
        """Insert a record, replacing any record with the same id."""
        session = self._get_session()
        session.merge(record_to_row(record))
        session.commit()

    def put_many(self, records: Iterable[TransactionRecord]) -> int:
        """Upsert several records in one transaction."""
        session = self._get_session()
        count = 0
        for record in records:
            session.merge(record_to_row(record))
            count += 1
        session.commit()
        logger.debug("Stored %d records", count)
        return count

    def delete(self, record_id: str) -> bool:
        """Delete a record by id."""
        session = self._get_session()
        row = session.get(TransactionRow, record_id)
        if row is None:
            return False
        session.delete(row)
        session.commit()
        return True

    def clear(self) -> int:
        """Delete every record."""
        session = self._get_session()
        deleted = session.query(TransactionRow).delete()
        session.commit()
        logger.info("Cleared %d records", deleted)
        return deleted

    def query_by_index(
        self, index_name: str, key_or_range: Union[KeyRange, Any]
    ) -> list[TransactionRecord]:
        """Return records matching a key or inclusive range on an index."""
        if index_name not in INDEX_NAMES:
            raise ValueError(
                f"Unknown index '{index_name}'. Must be one of: {', '.join(INDEX_NAMES)}"
            )
        if index_name == "month_key":
            return self._query_by_month(key_or_range)

        column = getattr(TransactionRow, index_name)
        session = self._get_session()
        query = session.query(TransactionRow)

        if isinstance(key_or_range, KeyRange):
            if key_or_range.lower is not None:
                query = query.filter(column >= self._index_key(key_or_range.lower))
            if key_or_range.upper is not None:
                query = query.filter(column <= self._index_key(key_or_range.upper))
        else:
            query = query.filter(column == self._index_key(key_or_range))

        rows = query.order_by(column, TransactionRow.id).all()
        return [row_to_record(row, self.zone) for row in rows]

    def _query_by_month(self, key_or_range: Union[KeyRange, str]) -> list[TransactionRecord]:
        # month keys follow this store's zone, so match on the UTC timestamp
        if isinstance(key_or_range, KeyRange):
            lower, upper = key_or_range.lower, key_or_range.upper
        else:
            lower = upper = key_or_range

        session = self._get_session()
        query = session.query(TransactionRow)
        if lower is not None:
            query = query.filter(TransactionRow.timestamp >= self._month_start(lower))
        if upper is not None:
            query = query.filter(TransactionRow.timestamp < self._month_start(upper, offset=1))

        rows = query.order_by(TransactionRow.timestamp, TransactionRow.id).all()
        return [row_to_record(row, self.zone) for row in rows]

    def _month_start(self, month_key: str, offset: int = 0) -> datetime:
        first = parse_month_key(month_key) + relativedelta(months=offset)
        return to_storage_timestamp(datetime.combine(first, time.min, tzinfo=self.zone))

    def _index_key(self, key: Any) -> Any:
        if isinstance(key, datetime):
            if key.tzinfo is None:
                key = key.replace(tzinfo=self.zone)
            return to_storage_timestamp(key)
        return key
