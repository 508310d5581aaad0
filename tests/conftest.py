from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, settings

# File-backed property tests hit the disk on every example; slow CI disks
# trip the too_slow health check without any functional problem.
settings.register_profile(
    "minicrm_stable",
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

settings.load_profile("minicrm_stable")


@pytest.fixture()
def contacts_path(tmp_path: Path) -> Path:
    return tmp_path / "contacts.json"


@pytest.fixture()
def write_doc(contacts_path: Path):
    def _write(doc: Any) -> Path:
        text = doc if isinstance(doc, str) else json.dumps(doc)
        contacts_path.write_text(text, encoding="utf-8")
        return contacts_path

    return _write
