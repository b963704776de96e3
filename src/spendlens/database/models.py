"""SQLAlchemy models for the spendlens store."""

from sqlalchemy import Column, DateTime, Numeric, String, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class TransactionRow(Base):
    """Persisted transaction record."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    # stored as naive UTC
    timestamp = Column(DateTime, nullable=False, index=True)
    month_key = Column(String(7), nullable=False, index=True)
    amount = Column(Numeric(18, 6), nullable=False, index=True)
    category = Column(String, nullable=False, index=True)
    merchant = Column(String, nullable=False)
    description = Column(String, nullable=False)
    account = Column(String, nullable=False)
    status = Column(String, nullable=False)
    reference = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    provider = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
