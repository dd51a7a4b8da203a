"""SQLAlchemy models for fintrack storage."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class LedgerRecord(Base):
    """Per-owner ledger settings."""

    __tablename__ = "ledgers"

    owner_key = Column(String, primary_key=True)
    currency = Column(String, nullable=False, default="BRL")
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class CategoryRecord(Base):
    """Category row, ordered within its ledger by position."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    owner_key = Column(String, ForeignKey("ledgers.owner_key"), nullable=False, index=True)
    category_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    position = Column(Integer, nullable=False)


class TransactionRecord(Base):
    """Transaction row.

    Sub-items are stored as their own rows pointing at the parent's
    transaction_id. Position is the index in the flattened snapshot.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_key = Column(String, ForeignKey("ledgers.owner_key"), nullable=False, index=True)
    transaction_id = Column(String, nullable=False)
    parent_id = Column(String, nullable=True)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    priority = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
