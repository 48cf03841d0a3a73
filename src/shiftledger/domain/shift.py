"""Cash-register shift domain service.

The open shift is never cached: every operation asks the store for it
again, so a shift opened or closed elsewhere is seen immediately.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from shiftledger.database.base import Database
from shiftledger.domain import errors
from shiftledger.domain.entities import (
    PaymentMethod,
    Shift,
    ShiftSummary,
    Transaction,
    TransactionItem,
)
from shiftledger.domain.summary import parse_payment_method, summarize
from shiftledger.utils.amount_parser import to_money
from shiftledger.utils.date_parser import utcnow

logger = logging.getLogger(__name__)


def _amount(value: Decimal, label: str) -> Decimal:
    try:
        return to_money(value)
    except ValueError as e:
        raise errors.ValidationError(f"{label}: {e}")


def _identity(value: Optional[str], label: str) -> str:
    if value is None or not str(value).strip():
        raise errors.ValidationError(f"{label} is required")
    return str(value).strip()


class ShiftService:
    """Service for opening, selling against, and closing register shifts."""

    def __init__(self, db: Database, clock: Callable[[], datetime] = utcnow):
        """Initialize shift service.

        Args:
            db: Database instance
            clock: Returns the current UTC-naive time
        """
        self.db = db
        self.clock = clock

    def get_current_shift(self) -> Optional[Shift]:
        """Return the open shift, or None when the register is closed."""
        return self.db.get_open_shift()

    def get_shift(self, shift_id: int) -> Shift:
        """Get shift by ID.

        Raises:
            NotFoundError: If the shift doesn't exist
        """
        shift = self.db.get_shift(shift_id)
        if shift is None:
            raise errors.NotFoundError(errors.shift_not_found(shift_id))
        return shift

    def open_shift(self, opening_amount: Decimal, opened_by: str) -> Shift:
        """Open the register with a declared opening balance.

        Args:
            opening_amount: Cash in the drawer at open (>= 0)
            opened_by: Identity of the user opening the register

        Returns:
            The new open shift

        Raises:
            ValidationError: If the amount is negative or opened_by is empty
            ShiftAlreadyOpenError: If a shift is already open
        """
        opening_amount = _amount(opening_amount, "Opening amount")
        if opening_amount < 0:
            raise errors.ValidationError(
                errors.amount_must_not_be_negative("Opening amount", opening_amount)
            )
        opened_by = _identity(opened_by, "Opened by")

        current = self.db.get_open_shift()
        if current is not None:
            raise errors.ShiftAlreadyOpenError(errors.shift_already_open(current.id))

        # The store rejects a second open shift even if one slipped in since the check
        shift = self.db.insert_shift(
            opening_amount=opening_amount,
            opened_by=opened_by,
            opened_at=self.clock(),
        )
        logger.info("Opened shift %s with %s by %s", shift.id, opening_amount, opened_by)
        return shift

    def record_transaction(
        self,
        amount: Decimal,
        payment_method: PaymentMethod | str,
        created_by: str,
        client_id: Optional[str] = None,
        notes: str = "",
    ) -> Transaction:
        """Record a completed sale against the open shift.

        Args:
            amount: Sale total (> 0)
            payment_method: One of the PaymentMethod values
            created_by: Identity of the user recording the sale
            client_id: Optional client reference
            notes: Optional notes

        Returns:
            The stored transaction

        Raises:
            ValidationError: If amount, method or identity is invalid
            RegisterClosedError: If no shift is open
        """
        amount = _amount(amount, "Amount")
        if amount <= 0:
            raise errors.ValidationError(errors.amount_must_be_positive(amount))
        method = parse_payment_method(payment_method)
        created_by = _identity(created_by, "Created by")

        shift = self.db.get_open_shift()
        if shift is None:
            raise errors.RegisterClosedError(errors.register_closed())

        txn = self.db.insert_transaction(
            total_amount=amount,
            payment_method=method,
            created_by=created_by,
            created_at=self.clock(),
            shift_id=shift.id,
            client_id=client_id or None,
            notes=notes or "",
        )
        logger.info(
            "Recorded transaction %s: %s %s on shift %s", txn.id, amount, method.value, shift.id
        )
        return txn

    def record_sale(
        self,
        service_id: int,
        payment_method: PaymentMethod | str,
        created_by: str,
        client_id: Optional[str] = None,
        notes: str = "",
        quantity: int = 1,
    ) -> tuple[Transaction, TransactionItem]:
        """Record a sale of a catalog service at its current price.

        Args:
            service_id: Catalog service being sold
            payment_method: One of the PaymentMethod values
            created_by: Identity of the user recording the sale
            client_id: Optional client reference
            notes: Optional notes
            quantity: Units sold (>= 1)

        Returns:
            Tuple of (transaction, line item)

        Raises:
            NotFoundError: If the service doesn't exist
            ValidationError: If the service is inactive or the quantity invalid
            RegisterClosedError: If no shift is open
        """
        if quantity < 1:
            raise errors.ValidationError(f"Quantity must be at least 1 (got {quantity})")
        service = self.db.get_service(service_id)
        if service is None:
            raise errors.NotFoundError(errors.service_not_found(service_id))
        if not service.active:
            raise errors.ValidationError(f"Service '{service.name}' is not active")

        subtotal = service.price * quantity
        txn = self.record_transaction(
            amount=subtotal,
            payment_method=payment_method,
            created_by=created_by,
            client_id=client_id,
            notes=notes,
        )
        item = self.db.insert_transaction_item(
            transaction_id=txn.id,
            service_id=service.id,
            quantity=quantity,
            unit_price=service.price,
            subtotal=subtotal,
        )
        return txn, item

    def current_summary(self) -> Optional[ShiftSummary]:
        """Summarize the open shift, or return None when the register is closed."""
        shift = self.db.get_open_shift()
        if shift is None:
            return None
        return summarize(shift, self.db.list_transactions_since(shift.opened_at))

    def shift_summary(self, shift_id: int) -> ShiftSummary:
        """Summarize any shift, bounded by its close time when closed."""
        shift = self.get_shift(shift_id)
        transactions = self.db.list_transactions_since(shift.opened_at, until=shift.closed_at)
        return summarize(shift, transactions)

    def close_shift(
        self,
        closing_amount: Decimal,
        closed_by: str,
        notes: str = "",
        shift_id: Optional[int] = None,
    ) -> Shift:
        """Close a shift and reconcile counted vs. expected cash.

        Args:
            closing_amount: Cash actually counted in the drawer (>= 0)
            closed_by: Identity of the user closing the register
            notes: Optional closing notes
            shift_id: Shift to close; defaults to the open shift

        Returns:
            The closed shift. difference_amount is positive for a surplus
            and negative for a shortage.

        Raises:
            ValidationError: If the amount is negative or closed_by is empty
            NotFoundError: If shift_id doesn't exist
            ShiftNotOpenError: If the shift is not open, or none is open
        """
        closing_amount = _amount(closing_amount, "Closing amount")
        if closing_amount < 0:
            raise errors.ValidationError(
                errors.amount_must_not_be_negative("Closing amount", closing_amount)
            )
        closed_by = _identity(closed_by, "Closed by")

        if shift_id is None:
            shift = self.db.get_open_shift()
            if shift is None:
                raise errors.ShiftNotOpenError(errors.shift_not_open())
        else:
            shift = self.get_shift(shift_id)
            if not shift.is_open:
                raise errors.ShiftNotOpenError(errors.shift_not_open(shift.id))

        closed_at = self.clock()
        summary = summarize(
            shift,
            self.db.list_transactions_since(shift.opened_at, until=closed_at),
            until=closed_at,
        )
        # Sums of in-range sales can still overflow the money columns
        expected = _amount(summary.expected_cash, "Expected amount")
        difference = _amount(closing_amount - expected, "Difference amount")

        # Matches only while the row is still open; a concurrent close loses here
        closed = self.db.close_shift(
            shift_id=shift.id,
            closing_amount=closing_amount,
            expected_amount=expected,
            difference_amount=difference,
            closed_by=closed_by,
            closed_at=closed_at,
            notes=notes or "",
        )
        logger.info(
            "Closed shift %s: expected %s, counted %s, difference %s",
            closed.id,
            expected,
            closing_amount,
            difference,
        )
        return closed

    def list_shift_history(self, limit: int = 10) -> list[Shift]:
        """List closed shifts, most recently closed first."""
        if limit < 1:
            raise errors.ValidationError(f"Limit must be at least 1 (got {limit})")
        return self.db.list_closed_shifts(limit=limit)

    def list_shift_transactions(self, shift_id: int) -> list[Transaction]:
        """List the sales recorded against a shift."""
        self.get_shift(shift_id)
        return self.db.list_shift_transactions(shift_id)

    def list_recent_transactions(
        self, limit: int = 50, since: Optional[datetime] = None
    ) -> list[Transaction]:
        """List the latest sales, newest first, optionally from ``since`` on."""
        return self.db.list_recent_transactions(limit=limit, since=since)

    def mark_message_sent(self, transaction_id: int) -> None:
        """Flag that the client was messaged about a sale."""
        if self.db.get_transaction(transaction_id) is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        self.db.set_transaction_message_sent(transaction_id, True)
