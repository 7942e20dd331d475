"""TOML reading utilities.

Project configuration lives in the [tool.changeset-changelog] table of a
pyproject.toml, read with tomlkit like every other pyproject.toml access in
this tool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit

TOOL_NAME = "changeset-changelog"


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_tool_table(doc: tomlkit.TOMLDocument, name: str = TOOL_NAME) -> dict[str, Any]:
    """Extract [tool.<name>] as plain Python values.

    Returns an empty dict when the table is missing.
    """
    tool = doc.unwrap().get("tool", {})
    return dict(tool.get(name, {}))
