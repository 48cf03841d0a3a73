"""Abstract store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from shiftledger.domain.entities import (
    PaymentMethod,
    Service,
    Shift,
    Transaction,
    TransactionItem,
    TransactionStatus,
)


class Database(ABC):
    """Abstract store interface for shiftledger.

    Every method is one round trip. Implementations raise StoreError for
    transport failures and the domain conflict errors for rejected writes.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Shift operations
    @abstractmethod
    def get_open_shift(self) -> Optional[Shift]:
        """Get the open shift, if any."""
        pass

    @abstractmethod
    def get_shift(self, shift_id: int) -> Optional[Shift]:
        """Get shift by ID."""
        pass

    @abstractmethod
    def insert_shift(self, opening_amount: Decimal, opened_by: str, opened_at: datetime) -> Shift:
        """Insert a new open shift.

        Raises:
            ShiftAlreadyOpenError: If another shift is already open
        """
        pass

    @abstractmethod
    def close_shift(
        self,
        shift_id: int,
        closing_amount: Decimal,
        expected_amount: Decimal,
        difference_amount: Decimal,
        closed_by: str,
        closed_at: datetime,
        notes: str = "",
    ) -> Shift:
        """Close a shift, only if it is still open.

        Raises:
            ShiftNotOpenError: If the shift is not open when the update runs
        """
        pass

    @abstractmethod
    def list_closed_shifts(self, limit: int = 10) -> list[Shift]:
        """List closed shifts, most recently closed first."""
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(
        self,
        total_amount: Decimal,
        payment_method: PaymentMethod,
        created_by: str,
        created_at: datetime,
        shift_id: Optional[int] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
        client_id: Optional[str] = None,
        notes: str = "",
    ) -> Transaction:
        """Insert a sale."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions_since(
        self, since: datetime, until: Optional[datetime] = None
    ) -> list[Transaction]:
        """List transactions created at or after ``since`` (and before ``until``), oldest first."""
        pass

    @abstractmethod
    def list_shift_transactions(self, shift_id: int) -> list[Transaction]:
        """List transactions owned by a shift, oldest first."""
        pass

    @abstractmethod
    def list_recent_transactions(
        self, limit: int = 50, since: Optional[datetime] = None
    ) -> list[Transaction]:
        """List the latest transactions (created at or after ``since``), newest first."""
        pass

    @abstractmethod
    def set_transaction_message_sent(self, transaction_id: int, sent: bool = True) -> None:
        """Set the cosmetic message-sent flag on a transaction."""
        pass

    @abstractmethod
    def insert_transaction_item(
        self,
        transaction_id: int,
        service_id: int,
        quantity: int,
        unit_price: Decimal,
        subtotal: Decimal,
    ) -> TransactionItem:
        """Insert a sale line item."""
        pass

    @abstractmethod
    def list_transaction_items(self, transaction_id: int) -> list[TransactionItem]:
        """List the line items of a sale."""
        pass

    # Service catalog operations
    @abstractmethod
    def create_service(
        self,
        name: str,
        price: Decimal,
        duration_minutes: int = 30,
        description: str = "",
    ) -> int:
        """Create a catalog service. Returns service ID.

        Raises:
            ConflictError: If a service with the same name exists
        """
        pass

    @abstractmethod
    def get_service(self, service_id: int) -> Optional[Service]:
        """Get service by ID."""
        pass

    @abstractmethod
    def get_service_by_name(self, name: str) -> Optional[Service]:
        """Get service by name."""
        pass

    @abstractmethod
    def list_services(self, include_inactive: bool = False) -> list[Service]:
        """List services ordered by name."""
        pass

    @abstractmethod
    def update_service(
        self,
        service_id: int,
        price: Optional[Decimal] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update a service's price and/or active flag."""
        pass
