import click

from bookstore.infrastructure.cli.catalog_commands import catalog_search
from bookstore.infrastructure.cli.client_commands import client_list
from bookstore.infrastructure.cli.order_commands import order_create, order_show
from bookstore.infrastructure.cli.seed_commands import seed
from bookstore.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Bookstore order entry"""
    configure_logging(verbose)


@cli.group()
def order() -> None:
    """Enter and inspect orders."""


@cli.group()
def catalog() -> None:
    """Search the book catalog."""


@cli.group()
def client() -> None:
    """Browse clients."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
catalog.add_command(catalog_search)
client.add_command(client_list)
cli.add_command(seed)
