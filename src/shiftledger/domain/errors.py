"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or wrong shift state."""


class ShiftAlreadyOpenError(ConflictError):
    """A shift is already open, so a new one cannot be opened."""


class ShiftNotOpenError(ConflictError):
    """The shift being closed is not open (or no shift is open at all)."""


class RegisterClosedError(ConflictError):
    """A sale was attempted while no shift is open."""


class StoreError(RuntimeError):
    """The store call failed (connection, timeout, driver error)."""


def shift_not_found(shift_id: int) -> str:
    """Return message for missing shift."""
    return f"Shift {shift_id} not found"


def shift_already_open(shift_id: int) -> str:
    """Return message when opening while another shift is open."""
    return f"Shift already open (shift {shift_id}). Close it before opening a new one."


def shift_not_open(shift_id: int | None = None) -> str:
    """Return message when closing a shift that is not open."""
    if shift_id is None:
        return "Shift not open: there is no open shift to close"
    return f"Shift not open: shift {shift_id} is already closed"


def register_closed() -> str:
    """Return message when selling with no open shift."""
    return "Register closed: open a shift before recording sales"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def service_not_found(service_ref: int | str) -> str:
    """Return message for missing catalog service by ID or name."""
    if isinstance(service_ref, int):
        return f"Service {service_ref} not found"
    return f"Service '{service_ref}' not found"


def duplicate_service_name(name: str) -> str:
    """Return message for duplicate catalog service names."""
    return f"Service with name '{name}' already exists"


def amount_must_be_positive(amount: Decimal) -> str:
    """Return message for sale amounts that are zero or negative."""
    return f"Amount must be greater than zero (got {amount})"


def amount_must_not_be_negative(label: str, amount: Decimal) -> str:
    """Return message for balances below zero."""
    return f"{label} cannot be negative (got {amount})"
