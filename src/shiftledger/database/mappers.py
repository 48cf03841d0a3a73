"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so stored strings and numerics
become enumerations and two-place Decimals in exactly one place.
"""

from decimal import Decimal
from typing import Optional

from shiftledger.domain import entities as domain
from shiftledger.database.models import (
    Shift as ORMShift,
    Transaction as ORMTransaction,
    TransactionItem as ORMTransactionItem,
    Service as ORMService,
)
from shiftledger.utils.amount_parser import to_money


def _money(value) -> Optional[Decimal]:
    if value is None:
        return None
    return to_money(str(value))


def shift_to_domain(orm_shift: ORMShift) -> domain.Shift:
    """Convert SQLAlchemy Shift model to domain Shift entity."""
    return domain.Shift(
        id=orm_shift.id,
        opening_amount=_money(orm_shift.opening_amount),
        status=domain.ShiftStatus(orm_shift.status),
        opened_at=orm_shift.opened_at,
        opened_by=orm_shift.opened_by,
        closing_amount=_money(orm_shift.closing_amount),
        expected_amount=_money(orm_shift.expected_amount),
        difference_amount=_money(orm_shift.difference_amount),
        closed_at=orm_shift.closed_at,
        closed_by=orm_shift.closed_by,
        notes=orm_shift.notes or "",
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        total_amount=_money(orm_transaction.total_amount),
        payment_method=domain.PaymentMethod(orm_transaction.payment_method),
        status=domain.TransactionStatus(orm_transaction.status),
        created_at=orm_transaction.created_at,
        created_by=orm_transaction.created_by,
        shift_id=orm_transaction.cash_register_shift_id,
        client_id=orm_transaction.client_id,
        notes=orm_transaction.notes or "",
        message_sent=bool(orm_transaction.message_sent),
    )


def transaction_item_to_domain(orm_item: ORMTransactionItem) -> domain.TransactionItem:
    """Convert SQLAlchemy TransactionItem model to domain TransactionItem entity."""
    return domain.TransactionItem(
        id=orm_item.id,
        transaction_id=orm_item.transaction_id,
        service_id=orm_item.service_id,
        quantity=orm_item.quantity,
        unit_price=_money(orm_item.unit_price),
        subtotal=_money(orm_item.subtotal),
        created_at=orm_item.created_at,
    )


def service_to_domain(orm_service: ORMService) -> domain.Service:
    """Convert SQLAlchemy Service model to domain Service entity."""
    return domain.Service(
        id=orm_service.id,
        name=orm_service.name,
        price=_money(orm_service.price),
        duration_minutes=orm_service.duration_minutes,
        active=bool(orm_service.active),
        created_at=orm_service.created_at,
        description=orm_service.description or "",
    )
