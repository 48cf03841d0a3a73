"""Text formatting helpers shared by CLI commands."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import click

from shiftledger.domain.entities import Shift, ShiftSummary, Transaction


def money(amount: Optional[Decimal]) -> str:
    """Format an amount as $1,234.56 (or '-' when missing)."""
    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def describe_difference(difference: Optional[Decimal]) -> str:
    """Describe a close difference as balanced, surplus or shortage."""
    if difference is None:
        return "-"
    if difference == 0:
        return "balanced"
    label = "surplus" if difference > 0 else "shortage"
    return f"{money(abs(difference))} {label}"


def echo_summary(summary: ShiftSummary) -> None:
    click.echo(f"  Sales:         {summary.transaction_count}")
    click.echo(f"  Total:         {money(summary.total)}")
    click.echo(f"  Cash:          {money(summary.cash_total)}")
    click.echo(f"  Card:          {money(summary.card_total)}")
    click.echo(f"  Transfer:      {money(summary.transfer_total)}")
    click.echo(f"  Other:         {money(summary.other_total)}")
    click.echo(f"  Expected cash: {money(summary.expected_cash)}")


def echo_closed_shift(shift: Shift) -> None:
    click.echo(f"  Expected:   {money(shift.expected_amount)}")
    click.echo(f"  Counted:    {money(shift.closing_amount)}")
    click.echo(f"  Difference: {describe_difference(shift.difference_amount)}")


def transaction_row(txn: Transaction) -> str:
    client = txn.client_id or "No client"
    return (
        f"ID: {txn.id:4d} | {timestamp(txn.created_at)} | {client:15s} | "
        f"{txn.payment_method.value:8s} | {money(txn.total_amount):>10s}"
    )
