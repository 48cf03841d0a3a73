"""Shift summary and payment-method bucketing.

Everything here is pure: no store access, no clock. The same shift and
transactions always produce the same summary.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from shiftledger.domain.entities import (
    PaymentBucket,
    PaymentMethod,
    Shift,
    ShiftSummary,
    Transaction,
    TransactionStatus,
)
from shiftledger.domain.errors import ValidationError

PAYMENT_BUCKETS: dict[PaymentMethod, PaymentBucket] = {
    PaymentMethod.CASH: PaymentBucket.CASH,
    PaymentMethod.CARD: PaymentBucket.CARD,
    PaymentMethod.CREDIT: PaymentBucket.CARD,
    PaymentMethod.DEBIT: PaymentBucket.CARD,
    PaymentMethod.TRANSFER: PaymentBucket.TRANSFER,
    PaymentMethod.PAYPAL: PaymentBucket.OTHER,
    PaymentMethod.OTHER: PaymentBucket.OTHER,
}


def parse_payment_method(value: PaymentMethod | str) -> PaymentMethod:
    """Coerce a stored or user-supplied value into a PaymentMethod.

    Raises:
        ValidationError: If the value is not a known payment method
    """
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().lower())
    except ValueError:
        known = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Unknown payment method '{value}'. Expected one of: {known}")


def bucket_for(method: PaymentMethod | str) -> PaymentBucket:
    """Return the reporting bucket for a payment method."""
    return PAYMENT_BUCKETS[parse_payment_method(method)]


def in_shift_window(
    shift: Shift, transaction: Transaction, until: Optional[datetime] = None
) -> bool:
    """Check whether a transaction falls inside a shift's time window.

    The window starts at opened_at (inclusive). It ends at closed_at for a
    closed shift, otherwise at ``until`` when given (both exclusive).
    Transactions owned by another shift never belong to this one.
    """
    if transaction.shift_id is not None and transaction.shift_id != shift.id:
        return False
    if transaction.created_at < shift.opened_at:
        return False
    upper = shift.closed_at if shift.closed_at is not None else until
    if upper is not None and transaction.created_at >= upper:
        return False
    return True


def summarize(
    shift: Shift,
    transactions: Iterable[Transaction],
    until: Optional[datetime] = None,
) -> ShiftSummary:
    """Compute bucket totals and expected cash for a shift.

    Args:
        shift: Shift being summarized
        transactions: Candidate transactions; anything outside the shift's
            window or not completed is ignored
        until: Upper bound for an open shift's window

    Returns:
        ShiftSummary with expected_cash = opening_amount + cash_total
    """
    totals = {bucket: Decimal("0.00") for bucket in PaymentBucket}
    count = 0
    for txn in transactions:
        if txn.status != TransactionStatus.COMPLETED:
            continue
        if not in_shift_window(shift, txn, until):
            continue
        totals[bucket_for(txn.payment_method)] += txn.total_amount
        count += 1

    return ShiftSummary(
        total=sum(totals.values(), Decimal("0.00")),
        cash_total=totals[PaymentBucket.CASH],
        card_total=totals[PaymentBucket.CARD],
        transfer_total=totals[PaymentBucket.TRANSFER],
        other_total=totals[PaymentBucket.OTHER],
        expected_cash=shift.opening_amount + totals[PaymentBucket.CASH],
        transaction_count=count,
    )
