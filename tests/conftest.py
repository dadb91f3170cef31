"""Shared fixtures for waymark tests."""

from pathlib import Path

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    """A route directory with two YAML files and one unrelated file."""
    (tmp_path / "10-users.yaml").write_text(
        """
- path: /users
  name: users.index
  controller: app.controllers:UserController
  method: index
- path: /users/{id}
  name: users.show
  controller: app.controllers:UserController
  method: show
  verb: GET
  auth: true
""",
        encoding="utf-8",
    )
    (tmp_path / "20-admin.yml").write_text(
        """
admin.dashboard:
  path: /admin
  controller: app.controllers:AdminController
  method: dashboard
  auth: true
  admin: true
""",
        encoding="utf-8",
    )
    (tmp_path / "notes.txt").write_text("- path: /ignored\n  name: ignored\n", encoding="utf-8")
    return tmp_path
