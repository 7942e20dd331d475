"""Pluggable changelog line renderers.

A ChangelogFunctions object turns changesets into markdown lines. Renderers
may be plain functions or coroutines (e.g. to look up commit metadata); the
entry builder accepts either.
"""

from __future__ import annotations

import importlib
from collections.abc import Awaitable, Sequence
from typing import Any, Protocol, Union

import click

from .models import BumpType, Changeset, ReleasePlanEntry

Line = Union[str, Awaitable[str]]


class ChangelogFunctions(Protocol):
    """Renderers used to build a changelog entry."""

    def get_release_line(
        self, changeset: Changeset, type: BumpType, options: Any
    ) -> Line:
        """Render one changeset's contribution to a package's changelog.

        Return an empty string to leave the changeset out.
        """
        ...

    def get_dependency_release_line(
        self,
        changesets: Sequence[Changeset],
        dependent_releases: Sequence[ReleasePlanEntry],
        options: Any,
    ) -> Line:
        """Render the note for updated internal dependencies.

        Must return an empty string when dependent_releases is empty.
        """
        ...


def _short_hash(commit: str | None) -> str | None:
    return commit[:7] if commit else None


class DefaultChangelogFunctions:
    """Plain markdown list items.

    - abc1234: First line of the summary
      Further lines, indented under the item
    """

    def get_release_line(
        self, changeset: Changeset, type: BumpType, options: Any
    ) -> str:
        first_line, *rest = [line.rstrip() for line in changeset.summary.split("\n")]
        commit = _short_hash(changeset.commit)
        line = f"- {commit}: {first_line}" if commit else f"- {first_line}"
        if rest:
            line += "\n" + "\n".join(f"  {extra}" for extra in rest)
        return line

    def get_dependency_release_line(
        self,
        changesets: Sequence[Changeset],
        dependent_releases: Sequence[ReleasePlanEntry],
        options: Any,
    ) -> str:
        if not dependent_releases:
            return ""

        lines: list[str] = []
        for changeset in changesets:
            commit = _short_hash(changeset.commit)
            lines.append(
                f"- Updated dependencies [{commit}]"
                if commit
                else "- Updated dependencies"
            )
        for release in dependent_releases:
            lines.append(f"  - {release.name}@{release.new_version}")
        return "\n".join(lines)


DEFAULT_CHANGELOG_FUNCTIONS = DefaultChangelogFunctions()


def load_changelog_functions(reference: str) -> ChangelogFunctions:
    """Import a ChangelogFunctions object from a "module:attribute" reference.

    A bare module name loads its DEFAULT_CHANGELOG_FUNCTIONS attribute.

    Raises:
        click.ClickException: If the module or attribute can't be found.
    """
    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.ClickException(
            f"Cannot import changelog module {module_name!r}: {e}"
        ) from e

    functions = getattr(module, attribute or "DEFAULT_CHANGELOG_FUNCTIONS", None)
    if functions is None:
        raise click.ClickException(
            f"Changelog module {module_name!r} has no attribute "
            f"{attribute or 'DEFAULT_CHANGELOG_FUNCTIONS'!r}"
        )
    return functions
