"""CLI commands for clients."""

from __future__ import annotations

import click

from bookstore.infrastructure.bootstrap import client_directory


@click.command("list")
def client_list() -> None:
    """List all clients."""
    clients = client_directory().list_all()

    if not clients:
        click.echo("No clients found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30}")
    click.echo("-" * 37)
    for c in clients:
        click.echo(f"{c.id:<6} {c.name:<30}")
