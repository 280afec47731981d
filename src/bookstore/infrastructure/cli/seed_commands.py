"""CLI command that recreates the data directory."""

from __future__ import annotations

from pathlib import Path

import click

from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import data_dir
from bookstore.infrastructure.seed import load_employees, seed_data_dir


@click.command("seed")
@click.option(
    "--employees",
    "employees_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with employees to create.",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite existing data.")
def seed(employees_path: Path | None, force: bool) -> None:
    """Recreate branches, employees, clients and catalog."""
    target = data_dir()

    try:
        employees = load_employees(employees_path) if employees_path else None
        counts = seed_data_dir(target, employees=employees, force=force)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Seeded {target}")
    for name, count in counts.items():
        click.echo(f"  {name:<16} {count:>4}")
