"""CLI helper for the acting user's identity."""

from __future__ import annotations

import click


def require_user_or_exit(ctx: click.Context) -> str:
    """Return the acting user from --user / SHIFTLEDGER_USER, or exit with a CLI error."""
    user = ctx.obj.get("user")
    if not user:
        click.echo(
            "Error: No user given. Pass --user or set SHIFTLEDGER_USER.", err=True
        )
        ctx.exit(1)
    return user
