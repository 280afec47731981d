"""CLI commands for the book catalog."""

from __future__ import annotations

import click

from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import order_entry_session


@click.command("search")
@click.argument("query", default="")
@click.option("--employee", "employee_id", required=True, help="Acting employee ID.")
def catalog_search(query: str, employee_id: str) -> None:
    """Search books stocked at the employee's branch."""
    session = order_entry_session(employee_id)

    try:
        session.start()
        found = session.search(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not found:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'Title':<30} {'Price':>14} {'Stock':>6}")
    click.echo("-" * 59)
    for item in found:
        click.echo(
            f"{item.item_id:<6} {item.title:<30} {item.unit_price:>14} {item.available_stock:>6}"
        )
