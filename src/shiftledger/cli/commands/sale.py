"""Sale recording and listing commands."""

import click
from shiftledger.cli.error_handling import handle_domain_error
from shiftledger.cli.formatting import money, transaction_row
from shiftledger.cli.identity import require_user_or_exit
from shiftledger.cli.service_resolution import resolve_service_or_exit
from shiftledger.domain.catalog import ServiceCatalogService
from shiftledger.domain.entities import PaymentMethod
from shiftledger.domain.errors import DomainError, StoreError
from shiftledger.domain.shift import ShiftService
from shiftledger.utils.amount_parser import parse_amount
from shiftledger.utils.date_parser import parse_datetime

PAYMENT_METHOD_CHOICES = [m.value for m in PaymentMethod]


@click.group()
def sale_group():
    """Record and list sales."""
    pass


@sale_group.command("record")
@click.option("--amount", help="Sale total (e.g., 250.00)")
@click.option("--service", "service_ref", help="Catalog service name or ID (charged at its price)")
@click.option("--quantity", type=int, help="Units of the service (with --service, default 1)")
@click.option(
    "--method",
    required=True,
    type=click.Choice(PAYMENT_METHOD_CHOICES, case_sensitive=False),
    help="Payment method",
)
@click.option("--client", help="Client reference")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def record_sale(
    ctx,
    amount: str | None,
    service_ref: str | None,
    quantity: int | None,
    method: str,
    client: str | None,
    notes: str,
):
    """Record a sale against the open shift.

    Give either --amount for a free-form sale or --service to charge a
    catalog service at its current price.

    Examples:
        shiftledger --user ana sale record --amount 250.00 --method cash
        shiftledger --user ana sale record --service "Haircut" --method card --client C-104
    """
    user = require_user_or_exit(ctx)
    db = ctx.obj["db"]
    service = ShiftService(db)

    if (amount is None) == (service_ref is None):
        click.echo("Error: Give exactly one of --amount or --service", err=True)
        ctx.exit(1)
    if amount is not None and quantity is not None:
        click.echo("Error: --quantity only applies with --service", err=True)
        ctx.exit(1)

    try:
        if service_ref is not None:
            catalog_service = resolve_service_or_exit(ctx, ServiceCatalogService(db), service_ref)
            txn, item = service.record_sale(
                service_id=catalog_service.id,
                payment_method=method,
                created_by=user,
                client_id=client,
                notes=notes,
                quantity=quantity if quantity is not None else 1,
            )
            click.echo(f"Recorded sale {txn.id}: {item.quantity} x {catalog_service.name}")
        else:
            try:
                sale_amount = parse_amount(amount)
            except ValueError as e:
                click.echo(f"Error: Invalid amount format: {e}", err=True)
                ctx.exit(1)
            txn = service.record_transaction(
                amount=sale_amount,
                payment_method=method,
                created_by=user,
                client_id=client,
                notes=notes,
            )
            click.echo(f"Recorded sale {txn.id}")
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"  Amount: {money(txn.total_amount)}")
    click.echo(f"  Method: {txn.payment_method.value}")
    click.echo(f"  Shift:  {txn.shift_id}")


@sale_group.command("list")
@click.option("--shift", "shift_id", type=int, help="Only sales of this shift")
@click.option("--since", help="Only sales from this time on (e.g., 'today', '2024-01-15 09:00')")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum sales shown")
@click.pass_context
def list_sales(ctx, shift_id: int | None, since: str | None, limit: int):
    """List sales, newest first.

    Without options, lists the sales of the open shift, or the latest sales
    when the register is closed.
    """
    service = ShiftService(ctx.obj["db"])

    start = None
    if since:
        try:
            start = parse_datetime(since)
        except ValueError as e:
            click.echo(f"Error: Invalid --since value: {e}", err=True)
            ctx.exit(1)

    try:
        if shift_id is None and start is None:
            current = service.get_current_shift()
            shift_id = current.id if current is not None else None
        if shift_id is not None:
            transactions = list(reversed(service.list_shift_transactions(shift_id)))[:limit]
            heading = f"Sales of shift {shift_id}"
        else:
            transactions = service.list_recent_transactions(limit=limit, since=start)
            heading = "Latest sales"
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No sales found.")
        return

    click.echo(f"\n{heading}:")
    click.echo("-" * 70)
    for txn in transactions:
        click.echo(transaction_row(txn))


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
