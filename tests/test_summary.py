"""Tests for shift summaries and payment-method buckets."""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from shiftledger.domain.entities import (
    PaymentBucket,
    PaymentMethod,
    Shift,
    ShiftStatus,
    Transaction,
    TransactionStatus,
)
from shiftledger.domain.errors import ValidationError
from shiftledger.domain.summary import (
    PAYMENT_BUCKETS,
    bucket_for,
    in_shift_window,
    parse_payment_method,
    summarize,
)

OPENED_AT = datetime(2024, 3, 1, 9, 0, 0)


def make_shift(opening="100.00", closed_at=None, shift_id=1):
    return Shift(
        id=shift_id,
        opening_amount=Decimal(opening),
        status=ShiftStatus.CLOSED if closed_at else ShiftStatus.OPEN,
        opened_at=OPENED_AT,
        opened_by="user-1",
        closed_at=closed_at,
    )


def make_txn(amount, method, minutes=5, status=TransactionStatus.COMPLETED, shift_id=1, txn_id=1):
    return Transaction(
        id=txn_id,
        total_amount=Decimal(amount),
        payment_method=PaymentMethod(method),
        status=status,
        created_at=OPENED_AT + timedelta(minutes=minutes),
        created_by="user-1",
        shift_id=shift_id,
    )


class TestBuckets:
    """Tests for the payment-method to bucket mapping."""

    def test_every_method_has_exactly_one_bucket(self):
        """Every payment method maps to one bucket, and nothing else is mapped."""
        assert set(PAYMENT_BUCKETS) == set(PaymentMethod)
        for method in PaymentMethod:
            assert isinstance(bucket_for(method), PaymentBucket)

    @pytest.mark.parametrize(
        "method,bucket",
        [
            ("cash", PaymentBucket.CASH),
            ("card", PaymentBucket.CARD),
            ("credit", PaymentBucket.CARD),
            ("debit", PaymentBucket.CARD),
            ("transfer", PaymentBucket.TRANSFER),
            ("paypal", PaymentBucket.OTHER),
            ("other", PaymentBucket.OTHER),
        ],
    )
    def test_bucket_for(self, method, bucket):
        """Test each stored method lands in its reporting bucket."""
        assert bucket_for(method) == bucket

    def test_parse_payment_method_is_case_insensitive(self):
        assert parse_payment_method(" CASH ") == PaymentMethod.CASH

    def test_parse_unknown_payment_method(self):
        with pytest.raises(ValidationError, match="Unknown payment method 'bitcoin'"):
            parse_payment_method("bitcoin")


class TestSummarize:
    """Tests for the pure summarize function."""

    def test_empty_shift(self):
        """A shift with no sales expects exactly its opening balance."""
        summary = summarize(make_shift("0.00"), [])
        assert summary.total == Decimal("0.00")
        assert summary.expected_cash == Decimal("0.00")
        assert summary.transaction_count == 0

    def test_totals_by_bucket(self):
        """Test each bucket accumulates its methods."""
        txns = [
            make_txn("50.00", "cash", txn_id=1),
            make_txn("30.00", "card", txn_id=2),
            make_txn("20.00", "debit", txn_id=3),
            make_txn("10.00", "credit", txn_id=4),
            make_txn("15.00", "transfer", txn_id=5),
            make_txn("7.50", "paypal", txn_id=6),
            make_txn("2.50", "other", txn_id=7),
        ]
        summary = summarize(make_shift(), txns)

        assert summary.cash_total == Decimal("50.00")
        assert summary.card_total == Decimal("60.00")
        assert summary.transfer_total == Decimal("15.00")
        assert summary.other_total == Decimal("10.00")
        assert summary.total == Decimal("135.00")
        assert summary.expected_cash == Decimal("150.00")
        assert summary.transaction_count == 7
        assert summary.bucket_total(PaymentBucket.CARD) == Decimal("60.00")

    @pytest.mark.parametrize(
        "amounts",
        [
            [("0.01", "cash"), ("0.02", "card"), ("0.03", "transfer")],
            [("999.99", "paypal"), ("0.01", "other")],
            [("12.34", "credit"), ("56.78", "debit"), ("90.12", "cash"), ("3.45", "transfer")],
        ],
    )
    def test_total_equals_sum_of_buckets(self, amounts):
        """total always equals cash + card + transfer + other."""
        txns = [make_txn(a, m, txn_id=i) for i, (a, m) in enumerate(amounts)]
        summary = summarize(make_shift(), txns)
        assert summary.total == (
            summary.cash_total + summary.card_total + summary.transfer_total + summary.other_total
        )
        assert summary.expected_cash == Decimal("100.00") + summary.cash_total

    def test_only_completed_transactions_count(self):
        """Pending and cancelled sales are left out."""
        txns = [
            make_txn("50.00", "cash", txn_id=1),
            make_txn("40.00", "cash", status=TransactionStatus.PENDING, txn_id=2),
            make_txn("30.00", "cash", status=TransactionStatus.CANCELLED, txn_id=3),
        ]
        summary = summarize(make_shift(), txns)
        assert summary.cash_total == Decimal("50.00")
        assert summary.transaction_count == 1

    def test_transactions_before_open_are_excluded(self):
        summary = summarize(make_shift(), [make_txn("50.00", "cash", minutes=-1, shift_id=None)])
        assert summary.total == Decimal("0.00")

    def test_closed_shift_excludes_transactions_after_close(self):
        """A closed shift's window ends at closed_at."""
        shift = make_shift(closed_at=OPENED_AT + timedelta(hours=8))
        txns = [
            make_txn("50.00", "cash", minutes=60, txn_id=1),
            make_txn("20.00", "cash", minutes=8 * 60, shift_id=None, txn_id=2),
            make_txn("10.00", "cash", minutes=9 * 60, shift_id=None, txn_id=3),
        ]
        summary = summarize(shift, txns)
        assert summary.cash_total == Decimal("50.00")

    def test_until_bounds_an_open_shift(self):
        txns = [
            make_txn("50.00", "cash", minutes=10, txn_id=1),
            make_txn("20.00", "cash", minutes=30, txn_id=2),
        ]
        summary = summarize(make_shift(), txns, until=OPENED_AT + timedelta(minutes=30))
        assert summary.cash_total == Decimal("50.00")

    def test_transactions_of_another_shift_are_excluded(self):
        txns = [
            make_txn("50.00", "cash", txn_id=1),
            make_txn("25.00", "cash", shift_id=2, txn_id=2),
        ]
        summary = summarize(make_shift(), txns)
        assert summary.cash_total == Decimal("50.00")

    def test_unassigned_transactions_in_window_count(self):
        summary = summarize(make_shift(), [make_txn("5.00", "cash", shift_id=None)])
        assert summary.cash_total == Decimal("5.00")

    def test_summarize_is_pure(self):
        """Same inputs give the same summary every time."""
        shift = make_shift()
        txns = [make_txn("50.00", "cash", txn_id=1), make_txn("30.00", "card", txn_id=2)]
        assert summarize(shift, txns) == summarize(shift, txns)

    def test_in_shift_window_start_is_inclusive(self):
        txn = make_txn("1.00", "cash", minutes=0)
        assert in_shift_window(make_shift(), txn)
