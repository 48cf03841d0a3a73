"""Domain model entities for shiftledger.

These are pure data classes representing the register's business concepts,
independent of the database schema. Stored string values (status, payment
method) are exposed as enumerations so the rest of the code never compares
raw strings.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class ShiftStatus(str, Enum):
    """Lifecycle state of a cash-register shift."""

    OPEN = "open"
    CLOSED = "closed"


class TransactionStatus(str, Enum):
    """Sale status. Only completed sales count toward reconciliation."""

    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Payment method stored on each sale."""

    CASH = "cash"
    CARD = "card"
    DEBIT = "debit"
    CREDIT = "credit"
    TRANSFER = "transfer"
    PAYPAL = "paypal"
    OTHER = "other"


class PaymentBucket(str, Enum):
    """Reporting bucket a payment method is aggregated into."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    OTHER = "other"


@dataclass(frozen=True)
class Shift:
    """Cash-register shift domain entity."""

    id: int
    opening_amount: Decimal
    status: ShiftStatus
    opened_at: datetime
    opened_by: str
    closing_amount: Optional[Decimal] = None
    expected_amount: Optional[Decimal] = None
    difference_amount: Optional[Decimal] = None
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    notes: str = ""

    @property
    def is_open(self) -> bool:
        return self.status == ShiftStatus.OPEN


@dataclass(frozen=True)
class Transaction:
    """Completed (or pending/cancelled) sale domain entity."""

    id: int
    total_amount: Decimal
    payment_method: PaymentMethod
    status: TransactionStatus
    created_at: datetime
    created_by: str
    shift_id: Optional[int] = None
    client_id: Optional[str] = None
    notes: str = ""
    message_sent: bool = False


@dataclass(frozen=True)
class TransactionItem:
    """Line item linking a sale to the catalog service it charged for."""

    id: int
    transaction_id: int
    service_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Service:
    """Catalog service domain entity."""

    id: int
    name: str
    price: Decimal
    duration_minutes: int
    active: bool
    created_at: datetime
    description: str = ""


@dataclass(frozen=True)
class ShiftSummary:
    """Running totals of a shift, by payment bucket."""

    total: Decimal
    cash_total: Decimal
    card_total: Decimal
    transfer_total: Decimal
    other_total: Decimal
    expected_cash: Decimal
    transaction_count: int

    def bucket_total(self, bucket: PaymentBucket) -> Decimal:
        """Return the total for one reporting bucket."""
        return {
            PaymentBucket.CASH: self.cash_total,
            PaymentBucket.CARD: self.card_total,
            PaymentBucket.TRANSFER: self.transfer_total,
            PaymentBucket.OTHER: self.other_total,
        }[bucket]
