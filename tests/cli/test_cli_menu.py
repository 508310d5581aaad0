"""Interactive menu driven through stdin."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from minicrm.cli.main import cli
from minicrm.cli.menu import MENU


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for k in ("MINICRM_STORE_BACKEND", "MINICRM_DATA_PATH", "MINICRM_FSYNC"):
        monkeypatch.delenv(k, raising=False)
    cfg = tmp_path / "minicrm.yml"
    cfg.write_text("storage:\n  fsync: false\n", encoding="utf-8")
    monkeypatch.setenv("MINICRM_CONFIG", str(cfg))


def _menu(path: Path, keys: str, *, subcommand: bool = True):
    args = ["--data", str(path)] + (["menu"] if subcommand else [])
    return CliRunner().invoke(cli, args, input=keys)


def test_add_list_and_quit(contacts_path: Path) -> None:
    r = _menu(contacts_path, "2\nAnn\nann@x.com\n3\n6\n")
    assert r.exit_code == 0, r.output
    assert "Contact added (id 1)." in r.output
    assert "- ID: 1 | Name: Ann | Email: ann@x.com" in r.output
    assert r.output.rstrip().endswith("Goodbye.")
    assert json.loads(contacts_path.read_text(encoding="utf-8"))["next_id"] == 2


def test_group_without_command_starts_menu(contacts_path: Path) -> None:
    r = _menu(contacts_path, "3\n6\n", subcommand=False)
    assert r.exit_code == 0, r.output
    assert "====== Mini-CRM ======" in r.output
    assert "No contacts." in r.output


def test_menu_is_shown_every_round(contacts_path: Path) -> None:
    r = _menu(contacts_path, "1\n1\n6\n")
    assert r.output.count("====== Mini-CRM ======") == 3
    assert MENU.strip().splitlines()[-1] == "6) Quit"


def test_invalid_choice_keeps_looping(contacts_path: Path) -> None:
    r = _menu(contacts_path, "9\n\n3\n6\n")
    assert r.exit_code == 0
    assert r.output.count("Invalid choice.") == 2
    assert "No contacts." in r.output


def test_errors_are_reported_and_loop_continues(contacts_path: Path) -> None:
    keys = "".join(
        [
            "2\nAnn\nnot-an-email\n",  # rejected email
            "2\n\n",                   # empty name
            "4\nabc\n",                # not a number
            "4\n42\n",                 # unknown id
            "2\nAnn\nann@x.com\n",
            "3\n6\n",
        ]
    )
    r = _menu(contacts_path, keys)
    assert r.exit_code == 0, r.output
    assert "Error: invalid email format" in r.output
    assert "Error: name must not be empty" in r.output
    assert "Error: enter a valid number (got 'abc')" in r.output
    assert "Error: no contact with id 42" in r.output
    assert "- ID: 1 | Name: Ann | Email: ann@x.com" in r.output


def test_update_keeps_empty_fields(contacts_path: Path) -> None:
    r = _menu(contacts_path, "2\nAnn\nann@x.com\n5\n1\n\nannie@x.com\n3\n6\n")
    assert r.exit_code == 0, r.output
    assert "Current name: Ann (leave empty to keep)" in r.output
    assert "Current email: ann@x.com (leave empty to keep)" in r.output
    assert "Contact updated." in r.output
    assert "- ID: 1 | Name: Ann | Email: annie@x.com" in r.output


def test_delete_then_ids_are_not_reused(contacts_path: Path) -> None:
    r = _menu(contacts_path, "2\nAnn\nann@x.com\n2\nBob\nbob@y.org\n4\n1\n2\nCid\ncid@z.net\n3\n6\n")
    assert r.exit_code == 0, r.output
    assert "Contact deleted." in r.output
    assert "Contact added (id 3)." in r.output
    assert "- ID: 1 |" not in r.output.split("--- Contacts ---")[-1]


def test_end_of_input_exits_cleanly(contacts_path: Path) -> None:
    r = _menu(contacts_path, "2\nAnn\n")
    assert r.exit_code == 0, r.output
    assert r.output.rstrip().endswith("Goodbye.")
    assert not contacts_path.exists()


@pytest.mark.parametrize("raw", ["1_0", "١", "1.0", "+", "0x1"])
def test_id_input_only_takes_plain_decimal(contacts_path: Path, raw: str) -> None:
    r = _menu(contacts_path, f"4\n{raw}\n6\n")
    assert r.exit_code == 0, r.output
    assert f"Error: enter a valid number (got {raw!r})" in r.output


def test_id_input_accepts_sign_and_padding(contacts_path: Path) -> None:
    r = _menu(contacts_path, "2\nAnn\nann@x.com\n4\n +1 \n3\n6\n")
    assert r.exit_code == 0, r.output
    assert "Contact deleted." in r.output
    assert "No contacts." in r.output
