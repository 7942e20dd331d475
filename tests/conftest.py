"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from changeset_changelog.models import ReleasePlan


@pytest.fixture
def plan_data() -> dict:
    """A release event: pkg-a depends on pkg-b, pkg-c is unrelated."""
    return {
        "releases": [
            {
                "name": "pkg-a",
                "type": "minor",
                "old_version": "1.0.0",
                "new_version": "1.1.0",
                "changesets": ["brave-lions"],
                "dir": "packages/a",
                "manifest": {
                    "name": "pkg-a",
                    "version": "1.0.0",
                    "dependencies": {"pkg-b": "^1.0.0"},
                },
            },
            {
                "name": "pkg-b",
                "type": "major",
                "old_version": "1.4.0",
                "new_version": "2.0.0",
                "changesets": ["quiet-owls"],
                "dir": "packages/b",
                "manifest": {"name": "pkg-b", "version": "1.4.0"},
            },
            {
                "name": "pkg-c",
                "type": "none",
                "old_version": "0.3.0",
                "new_version": "0.3.0",
                "changesets": [],
                "dir": "packages/c",
            },
        ],
        "changesets": [
            {
                "id": "brave-lions",
                "summary": "Add feature X",
                "commit": "1a2b3c4d5e6f",
                "releases": {"pkg-a": "minor"},
            },
            {
                "id": "quiet-owls",
                "summary": "Drop legacy API",
                "commit": "abcdef123456",
                "releases": {"pkg-b": "major"},
            },
        ],
    }


@pytest.fixture
def sample_plan(plan_data: dict) -> ReleasePlan:
    return ReleasePlan.model_validate(plan_data)


@pytest.fixture
def plan_file(tmp_path: Path, plan_data: dict) -> Path:
    """Write the sample release plan as JSON."""
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(plan_data))
    return path


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml with a tool table."""
    content = """\
[project]
name = "workspace-root"
version = "1.0.0"

[tool.changeset-changelog]
update-internal-dependencies = "minor"
only-update-peer-dependents-when-out-of-range = true
changelog-options = { repo = "org/repo" }
"""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject
