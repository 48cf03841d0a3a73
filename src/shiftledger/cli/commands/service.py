"""Service catalog commands."""

import click
from shiftledger.cli.error_handling import handle_domain_error
from shiftledger.cli.formatting import money
from shiftledger.cli.service_resolution import resolve_service_or_exit
from shiftledger.domain.catalog import ServiceCatalogService
from shiftledger.domain.errors import DomainError, StoreError
from shiftledger.utils.amount_parser import parse_amount


@click.group()
def service_group():
    """Manage the service catalog."""
    pass


@service_group.command("add")
@click.argument("name", metavar="SERVICE_NAME")
@click.option("--price", required=True, help="Price (e.g., 250.00)")
@click.option("--duration", type=int, default=30, show_default=True, help="Duration in minutes")
@click.option("--description", default="", help="Description")
@click.pass_context
def add_service(ctx, name: str, price: str, duration: int, description: str):
    """Add a service to the catalog.

    Examples:
        shiftledger service add "Haircut" --price 250.00
        shiftledger service add "Manicure" --price 180 --duration 45
    """
    catalog = ServiceCatalogService(ctx.obj["db"])

    try:
        service_price = parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid price format: {e}", err=True)
        ctx.exit(1)

    try:
        service_id = catalog.create_service(
            name=name, price=service_price, duration_minutes=duration, description=description
        )
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created service '{name}' (ID: {service_id}) at {money(service_price)}")


@service_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive services")
@click.pass_context
def list_services(ctx, include_inactive: bool):
    """List catalog services."""
    catalog = ServiceCatalogService(ctx.obj["db"])

    services = catalog.list_services(include_inactive=include_inactive)
    if not services:
        click.echo("No services found.")
        return

    click.echo("\nServices:")
    click.echo("-" * 70)
    for svc in services:
        state = "" if svc.active else " (inactive)"
        click.echo(
            f"ID: {svc.id:3d} | {svc.name:25s} | {money(svc.price):>10s} | "
            f"{svc.duration_minutes:3d} min{state}"
        )


@service_group.command("price")
@click.argument("service", metavar="SERVICE")
@click.argument("price", metavar="NEW_PRICE")
@click.pass_context
def set_price(ctx, service: str, price: str):
    """Change a service's price.

    SERVICE can be a service name or ID.
    """
    catalog = ServiceCatalogService(ctx.obj["db"])
    svc = resolve_service_or_exit(ctx, catalog, service)

    try:
        new_price = parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid price format: {e}", err=True)
        ctx.exit(1)

    try:
        catalog.update_price(svc.id, new_price)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated '{svc.name}' price to {money(new_price)}")


@service_group.command("deactivate")
@click.argument("service", metavar="SERVICE")
@click.pass_context
def deactivate_service(ctx, service: str):
    """Stop selling a service. SERVICE can be a service name or ID."""
    catalog = ServiceCatalogService(ctx.obj["db"])
    svc = resolve_service_or_exit(ctx, catalog, service)

    catalog.deactivate_service(svc.id)
    click.echo(f"Deactivated service '{svc.name}'")


@service_group.command("activate")
@click.argument("service", metavar="SERVICE")
@click.pass_context
def activate_service(ctx, service: str):
    """Sell a deactivated service again. SERVICE can be a service name or ID."""
    catalog = ServiceCatalogService(ctx.obj["db"])
    svc = resolve_service_or_exit(ctx, catalog, service)

    catalog.activate_service(svc.id)
    click.echo(f"Activated service '{svc.name}'")


def register_commands(cli):
    """Register service commands with main CLI."""
    cli.add_command(service_group, name="service")
