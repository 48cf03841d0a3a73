"""Main CLI entry point."""

import logging

import click
from shiftledger.database.factories import create_database, create_sqlite_database

# Import and register all commands at module level
from shiftledger.cli.commands import sale, service, shift


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHIFTLEDGER_DB_PATH environment variable)",
    envvar="SHIFTLEDGER_DB_PATH",
)
@click.option(
    "--user",
    help="Identity of the acting user (overrides SHIFTLEDGER_USER environment variable)",
    envvar="SHIFTLEDGER_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, verbose: bool):
    """Shiftledger - salon cash register.

    Open and close register shifts, record sales by payment method, and
    reconcile the counted cash against what the drawer should hold.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if db_path is not None:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database()
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.call_on_close(db.disconnect)


# Register all commands
shift.register_commands(cli)
sale.register_commands(cli)
service.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
