from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import click

from minicrm.cli.menu import print_contacts, run_menu
from minicrm.config import load_config
from minicrm.errors import ContactError
from minicrm.logging_config import configure_logging
from minicrm.models import Contact
from minicrm.storage import open_store
from minicrm.storage.base import ContactStore


@contextmanager
def reported() -> Iterator[None]:
    """Turn store errors into a click error (exit code 1, 'Error: ...')."""
    try:
        yield
    except ContactError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(invoke_without_command=True)
@click.option("--data", "data_path", type=click.Path(dir_okay=False), default=None, help="JSON contacts file")
@click.option("--memory", is_flag=True, default=False, help="Keep contacts in memory only (lost on exit)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="YAML config file")
@click.pass_context
def cli(ctx: click.Context, data_path: Optional[str], memory: bool, config_path: Optional[str]) -> None:
    """Mini CRM: manage contacts from the terminal. Without a command, starts the menu."""
    cfg = load_config(config_path)
    configure_logging(level=cfg.logging.level, fmt=cfg.logging.format)

    backend = "memory" if memory else cfg.storage.backend
    path = data_path or cfg.storage.path
    try:
        store = open_store(backend, path, fsync=cfg.storage.fsync)
    except ContactError as exc:
        raise click.ClickException(f"could not open contact store: {exc}") from exc

    ctx.obj = store
    if ctx.invoked_subcommand is None:
        run_menu(store)


@cli.command()
@click.option("--name", required=True, help="Contact name")
@click.option("--email", required=True, help="Contact email")
@click.option("--id", "contact_id", type=click.IntRange(min=1), default=None, help="Use this id instead of the next free one")
@click.pass_obj
def add(store: ContactStore, name: str, email: str, contact_id: Optional[int]) -> None:
    """Add a contact and exit."""
    with reported():
        if contact_id is None:
            new_id = store.add(Contact(name=name, email=email))
        else:
            new_id = store.insert(Contact(id=contact_id, name=name, email=email))
        click.echo("Contact added.")
        click.echo(store.get_by_id(new_id).describe())


@cli.command("list")
@click.pass_obj
def list_contacts(store: ContactStore) -> None:
    """List all contacts by id."""
    print_contacts(store)


@cli.command()
@click.argument("contact_id", type=int)
@click.pass_obj
def show(store: ContactStore, contact_id: int) -> None:
    """Show one contact."""
    with reported():
        click.echo(store.get_by_id(contact_id).describe())


@cli.command()
@click.argument("contact_id", type=int)
@click.option("--name", default="", help="New name (empty keeps the current one)")
@click.option("--email", default="", help="New email (empty keeps the current one)")
@click.pass_obj
def update(store: ContactStore, contact_id: int, name: str, email: str) -> None:
    """Update name and/or email of a contact."""
    with reported():
        store.update(contact_id, name, email)
        click.echo("Contact updated.")
        click.echo(store.get_by_id(contact_id).describe())


@cli.command()
@click.argument("contact_id", type=int)
@click.pass_obj
def delete(store: ContactStore, contact_id: int) -> None:
    """Delete a contact."""
    with reported():
        store.delete(contact_id)
        click.echo("Contact deleted.")


@cli.command()
@click.pass_obj
def menu(store: ContactStore) -> None:
    """Interactive menu."""
    run_menu(store)


if __name__ == "__main__":
    cli()
