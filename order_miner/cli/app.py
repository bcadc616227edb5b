"""
Order Miner command line application.
"""
from datetime import datetime

import typer
from loguru import logger

from config.settings import settings
from order_miner.core import CursorStore, ErrorPolicy, OrderSync
from order_miner.database import OrderRepository, db_manager
from order_miner.exceptions import OrderMinerError
from order_miner.parsing import parse_cursor
from order_miner.utils.logging import setup_logging

from .panels import ConditionPanel, StatsPanel

app = typer.Typer(
    help=f"{settings.app.name}: extract order confirmations from Gmail and explore them."
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"{settings.app.name} {settings.app.version}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show the version and exit."
    ),
):
    """Order confirmations from Gmail, stored and summarized."""


def _prepare() -> OrderRepository:
    setup_logging()
    db_manager.create_tables()
    return OrderRepository(db_manager)


def _sync(repository: OrderRepository, policy: ErrorPolicy) -> None:
    store = CursorStore()
    cursor = store.load()
    try:
        result = OrderSync(repository=repository).sync(cursor, policy=policy)
    except OrderMinerError as e:
        logger.error(f"Sync failed, keeping cursor {cursor}: {e}")
        raise typer.Exit(code=1)

    store.save(result.cursor)
    for failure in result.failures:
        typer.echo(f"Could not read message {failure.message_id}: {failure.reason}")
    typer.echo(
        f"Stored {len(result.orders)} orders. Latest update is now {result.cursor}"
    )


@app.command()
def sync(
    policy: ErrorPolicy = typer.Option(ErrorPolicy.SKIP, help="Skip or abort on a bad message"),
):
    """Fetch new order confirmations and store them."""
    _sync(_prepare(), policy)


@app.command()
def view():
    """Filter and list stored orders."""
    ConditionPanel(_prepare()).run()


@app.command()
def stats():
    """Summarize purchase patterns."""
    StatsPanel(_prepare()).run()


@app.command()
def run():
    """Offer a sync, then open the control panel."""
    repository = _prepare()
    logger.info("Starting Order Miner")

    cursor = CursorStore().load()
    elapsed = (datetime.now() - datetime.combine(parse_cursor(cursor), datetime.min.time()))
    typer.echo(f"Your last update is on {cursor}")
    typer.echo(f"You have not updated your database for {elapsed.total_seconds() / 3600:.0f} hours")

    if typer.confirm("Do you want to update your database?"):
        _sync(repository, ErrorPolicy.SKIP)
    else:
        typer.echo(f"Not Updating Database. Latest Update is {cursor}")

    typer.echo("Directing you to Control Panel")
    while True:
        typer.echo("Choose Options: \n1: View Order Records\n2: Get Stats\n3: Quit")
        action = typer.prompt("Choice", default="", show_default=False).strip()
        if action == "1":
            ConditionPanel(repository).run()
        elif action == "2":
            StatsPanel(repository).run()
        elif action == "3":
            typer.echo("Bye bye")
            break
        else:
            typer.echo("Not a valid choice")
