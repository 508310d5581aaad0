"""Interactive menu loop over a ContactStore."""

from __future__ import annotations

import sys
from typing import Callable, Dict

import click

from minicrm.errors import ContactError, ValidationError
from minicrm.models import Contact
from minicrm.storage.base import ContactStore
from minicrm.validation import require_non_empty, trim

MENU = "\n".join(
    [
        "",
        "====== Mini-CRM ======",
        "1) Show this menu",
        "2) Add a contact (name, email)",
        "3) List all contacts",
        "4) Delete a contact by ID",
        "5) Update a contact",
        "6) Quit",
    ]
)

QUIT = "6"


def ask(label: str) -> str:
    """Read one line. An empty line is "", end of input raises EOFError."""
    click.echo(f"{label}: ", nl=False)
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


def ask_int(label: str) -> int:
    s = trim(ask(label))
    if not s:
        raise ValidationError("empty value")
    # optional sign, then ASCII digits only: int() would also take "1_0" and "٣"
    digits = s[1:] if s[0] in "+-" else s
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationError(f"enter a valid number (got {s!r})")
    return int(s)


def print_contacts(store: ContactStore) -> None:
    contacts = store.get_all()
    if not contacts:
        click.echo("No contacts.")
        return
    click.echo("\n--- Contacts ---")
    for c in contacts:
        click.echo(c.describe())


def _show_menu(store: ContactStore) -> None:
    return None


def _add(store: ContactStore) -> None:
    name = require_non_empty(ask("Name"), "name")
    email = require_non_empty(ask("Email"), "email")
    contact_id = store.add(Contact(name=name, email=email))
    click.echo(f"Contact added (id {contact_id}).")


def _delete(store: ContactStore) -> None:
    contact_id = ask_int("ID to delete")
    store.delete(contact_id)
    click.echo("Contact deleted.")


def _update(store: ContactStore) -> None:
    contact_id = ask_int("ID to update")
    current = store.get_by_id(contact_id)

    click.echo(f"Current name: {current.name} (leave empty to keep)")
    name = ask("New name")
    click.echo(f"Current email: {current.email} (leave empty to keep)")
    email = ask("New email")

    store.update(contact_id, name, email)
    click.echo("Contact updated.")


ACTIONS: Dict[str, Callable[[ContactStore], None]] = {
    "1": _show_menu,
    "2": _add,
    "3": print_contacts,
    "4": _delete,
    "5": _update,
}


def run_menu(store: ContactStore) -> None:
    """Loop until the user quits or input ends. Store errors are reported, not raised."""
    while True:
        click.echo(MENU)
        try:
            choice = trim(ask("> Choice"))
            if choice == QUIT:
                break
            action = ACTIONS.get(choice)
            if action is None:
                click.echo("Invalid choice.")
                continue
            action(store)
        except (EOFError, KeyboardInterrupt):
            click.echo("")
            break
        except ContactError as exc:
            click.echo(f"Error: {exc}")
    click.echo("Goodbye.")
