"""CLI commands for entering orders."""

from __future__ import annotations

import asyncio

import click

from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import order_entry_session, order_submitter


def _parse_items(raw: str) -> list[tuple[str, int]]:
    """Parse '1:3,4:1' into (book id, copies) pairs."""
    specs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'BookId:Quantity'."
            )
        item_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for book '{item_id}'."
            )
        if qty <= 0:
            raise click.BadParameter(f"Quantity for book '{item_id}' must be positive.")
        specs.append((item_id.strip(), qty))
    return specs


@click.command("create")
@click.option("--employee", "employee_id", required=True, help="Acting employee ID.")
@click.option("--client", "client_id", required=True, help="Client ID.")
@click.option("--items", required=True, help="Books as 'BookId:Qty,BookId:Qty'.")
def order_create(employee_id: str, client_id: str, items: str) -> None:
    """Create an order at the employee's branch.

    Every copy is selected one at a time, so a quantity beyond the
    branch stock is refused.
    """
    specs = _parse_items(items)
    session = order_entry_session(employee_id)

    try:
        session.start()
        session.search("")
        for item_id, qty in specs:
            for _ in range(qty):
                session.select_book(item_id)
        session.select_client(client_id)
        saved = asyncio.run(session.save_order())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{saved.order_id} saved  (branch={saved.branch_id})")
    click.echo(f"Client: {saved.client_id}")
    click.echo()
    click.echo(f"  {'Book':<30} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*66}")
    for line in saved.lines:
        click.echo(
            f"  {line.title:<30} {line.quantity:>5} {line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*66}")
    click.echo(f"  {'Order Total':<36} {saved.total:>29}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show a saved order."""
    snapshot = order_submitter().get_by_id(order_id)
    if snapshot is None:
        raise click.ClickException(f"Order #{order_id} not found")

    click.echo(f"Order #{order_id}")
    click.echo(f"Client:   {snapshot.client_id}")
    click.echo(f"Employee: {snapshot.employee_id}  (branch={snapshot.branch_id})")
    click.echo(f"Date:     {snapshot.order_date.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Book ID':<10} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*46}")
    for line in snapshot.lines:
        click.echo(
            f"  {line.item_id:<10} {line.quantity:>5} "
            f"{str(line.unit_price):>14} {str(line.line_total):>14}"
        )
    click.echo(f"  {'-'*46}")
    click.echo(f"  {'Order Total':<16} {str(snapshot.total):>29}")
