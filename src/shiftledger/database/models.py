"""SQLAlchemy models for the shiftledger database."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    create_engine,
    text,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from shiftledger.utils.date_parser import utcnow

Base = declarative_base()

OPEN_SHIFT_FILTER = text("status = 'open'")


class Shift(Base):
    """Cash-register shift model."""

    __tablename__ = "cash_register_shifts"

    id = Column(Integer, primary_key=True)
    opened_by = Column(String, nullable=False)
    closed_by = Column(String, nullable=True)
    opening_amount = Column(Numeric(10, 2), nullable=False)
    closing_amount = Column(Numeric(10, 2), nullable=True)
    expected_amount = Column(Numeric(10, 2), nullable=True)
    difference_amount = Column(Numeric(10, 2), nullable=True)
    status = Column(String, nullable=False, default="open")
    opened_at = Column(DateTime, default=utcnow, nullable=False)
    closed_at = Column(DateTime, nullable=True)
    notes = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # At most one row may be open at a time
    __table_args__ = (
        Index(
            "uq_one_open_shift",
            "status",
            unique=True,
            sqlite_where=OPEN_SHIFT_FILTER,
            postgresql_where=OPEN_SHIFT_FILTER,
        ),
    )

    # Relationships
    transactions = relationship("Transaction", back_populates="shift")


class Transaction(Base):
    """Sale model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    client_id = Column(String, nullable=True)
    cash_register_shift_id = Column(
        Integer, ForeignKey("cash_register_shifts.id"), nullable=True
    )
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    status = Column(String, nullable=False, default="completed")
    notes = Column(String, nullable=False, default="")
    message_sent = Column(Boolean, nullable=False, default=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    shift = relationship("Shift", back_populates="transactions")
    items = relationship(
        "TransactionItem", back_populates="transaction", cascade="all, delete-orphan"
    )


class TransactionItem(Base):
    """Sale line item model."""

    __tablename__ = "transaction_items"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="items")
    service = relationship("Service")


class Service(Base):
    """Catalog service model."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=False, default="")
    duration_minutes = Column(Integer, nullable=False, default=30)
    price = Column(Numeric(10, 2), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
