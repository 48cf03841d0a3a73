"""Cash-register shift commands."""

import click
from shiftledger.cli.error_handling import handle_domain_error
from shiftledger.cli.formatting import (
    echo_closed_shift,
    echo_summary,
    money,
    timestamp,
    describe_difference,
)
from shiftledger.cli.identity import require_user_or_exit
from shiftledger.domain.errors import DomainError, StoreError
from shiftledger.domain.shift import ShiftService
from shiftledger.utils.amount_parser import parse_amount


@click.group()
def shift_group():
    """Open, close and review register shifts."""
    pass


@shift_group.command("open")
@click.argument("amount", metavar="OPENING_AMOUNT")
@click.pass_context
def open_shift(ctx, amount: str):
    """Open the register with the cash currently in the drawer.

    Examples:
        shiftledger --user ana shift open 100.00
        shiftledger --user ana shift open 0
    """
    user = require_user_or_exit(ctx)
    service = ShiftService(ctx.obj["db"])

    try:
        opening_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        shift = service.open_shift(opening_amount=opening_amount, opened_by=user)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Opened shift {shift.id} with {money(shift.opening_amount)}")


@shift_group.command("close")
@click.argument("amount", metavar="COUNTED_AMOUNT")
@click.option("--notes", default="", help="Closing notes")
@click.pass_context
def close_shift(ctx, amount: str, notes: str):
    """Close the open shift with the cash actually counted in the drawer.

    The difference is counted minus expected: positive means surplus,
    negative means shortage.

    Examples:
        shiftledger --user ana shift close 150.00
        shiftledger --user ana shift close 110.00 --notes "Gave wrong change"
    """
    user = require_user_or_exit(ctx)
    service = ShiftService(ctx.obj["db"])

    try:
        closing_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        shift = service.close_shift(closing_amount=closing_amount, closed_by=user, notes=notes)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Closed shift {shift.id}")
    echo_closed_shift(shift)


@shift_group.command("status")
@click.pass_context
def shift_status(ctx):
    """Show the open shift and its running totals."""
    service = ShiftService(ctx.obj["db"])

    try:
        shift = service.get_current_shift()
        summary = service.current_summary() if shift is not None else None
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    if shift is None or summary is None:
        click.echo("Register closed. Open a shift to start recording sales.")
        return

    click.echo(f"\nShift {shift.id} (open)")
    click.echo("-" * 40)
    click.echo(f"  Opened:        {timestamp(shift.opened_at)} by {shift.opened_by}")
    click.echo(f"  Opening:       {money(shift.opening_amount)}")
    echo_summary(summary)


@shift_group.command("show")
@click.argument("shift_id", type=int)
@click.pass_context
def show_shift(ctx, shift_id: int):
    """Show one shift with its totals."""
    service = ShiftService(ctx.obj["db"])

    try:
        shift = service.get_shift(shift_id)
        summary = service.shift_summary(shift_id)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nShift {shift.id} ({shift.status.value})")
    click.echo("-" * 40)
    click.echo(f"  Opened:        {timestamp(shift.opened_at)} by {shift.opened_by}")
    if not shift.is_open:
        click.echo(f"  Closed:        {timestamp(shift.closed_at)} by {shift.closed_by}")
    click.echo(f"  Opening:       {money(shift.opening_amount)}")
    echo_summary(summary)
    if not shift.is_open:
        echo_closed_shift(shift)
    if shift.notes:
        click.echo(f"  Notes:      {shift.notes}")


@shift_group.command("history")
@click.option("--limit", type=int, default=10, show_default=True, help="Number of shifts")
@click.pass_context
def shift_history(ctx, limit: int):
    """List recently closed shifts."""
    service = ShiftService(ctx.obj["db"])

    try:
        shifts = service.list_shift_history(limit=limit)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    if not shifts:
        click.echo("No closed shifts found.")
        return

    click.echo("\nClosed shifts:")
    click.echo("-" * 90)
    for s in shifts:
        click.echo(
            f"ID: {s.id:3d} | {timestamp(s.opened_at)} -> {timestamp(s.closed_at)} | "
            f"Expected: {money(s.expected_amount):>10s} | Counted: {money(s.closing_amount):>10s} | "
            f"{describe_difference(s.difference_amount)}"
        )
        if s.notes:
            click.echo(f"       {s.notes}")


def register_commands(cli):
    """Register shift commands with main CLI."""
    cli.add_command(shift_group, name="shift")
