"""Configuration for changeset-changelog.

Example pyproject.toml:

    [tool.changeset-changelog]
    update-internal-dependencies = "minor"
    only-update-peer-dependents-when-out-of-range = true
    changelog = "my_package.changelog:FUNCTIONS"
    changelog-options = { repo = "org/repo" }

Set changelog = false to turn CHANGELOG.md writing off.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .policy import PolicyConfig
from .toml import get_tool_table, load_pyproject

DEFAULT_CHANGELOG = "changeset_changelog.changelog_functions:DEFAULT_CHANGELOG_FUNCTIONS"


class ChangelogConfig(BaseModel):
    """The [tool.changeset-changelog] table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    update_internal_dependencies: Literal["patch", "minor"] = Field(
        "patch", alias="update-internal-dependencies"
    )
    only_update_peer_dependents_when_out_of_range: bool = Field(
        False, alias="only-update-peer-dependents-when-out-of-range"
    )
    changelog: str | Literal[False] = Field(DEFAULT_CHANGELOG, alias="changelog")
    changelog_options: dict[str, Any] = Field(
        default_factory=dict, alias="changelog-options"
    )

    @property
    def policy(self) -> PolicyConfig:
        return PolicyConfig(
            update_internal_dependencies=self.update_internal_dependencies,
            only_update_peer_dependents_when_out_of_range=(
                self.only_update_peer_dependents_when_out_of_range
            ),
        )


def load_config(pyproject_path: Path | None) -> ChangelogConfig:
    """Load configuration from a pyproject.toml.

    A missing file or table yields the defaults.

    Raises:
        pydantic.ValidationError: If the table holds unknown keys or bad values.
    """
    if pyproject_path is None or not pyproject_path.exists():
        return ChangelogConfig()
    return ChangelogConfig.model_validate(get_tool_table(load_pyproject(pyproject_path)))
