"""CLI helper for catalog service resolution."""

from __future__ import annotations

import click
from shiftledger.domain.catalog import ServiceCatalogService
from shiftledger.domain.entities import Service
from shiftledger.domain.errors import DomainError, StoreError


def resolve_service_or_exit(
    ctx: click.Context, catalog: ServiceCatalogService, service: str
) -> Service:
    """Resolve service name or ID, or exit with a CLI error."""
    try:
        return catalog.resolve_service(service)
    except (DomainError, StoreError) as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
