"""Tests for changeset_changelog.changelog_functions."""

from __future__ import annotations

import click
import pytest

from changeset_changelog.changelog_functions import (
    DEFAULT_CHANGELOG_FUNCTIONS,
    DefaultChangelogFunctions,
    load_changelog_functions,
)
from changeset_changelog.models import BumpType, Changeset, ReleasePlanEntry


class TestGetReleaseLine:
    def test_single_line(self) -> None:
        cs = Changeset(id="cs1", summary="Fix the thing")
        line = DEFAULT_CHANGELOG_FUNCTIONS.get_release_line(cs, BumpType.PATCH, None)
        assert line == "- Fix the thing"

    def test_with_commit(self) -> None:
        cs = Changeset(id="cs1", summary="Fix the thing", commit="1234567890abcdef")
        line = DEFAULT_CHANGELOG_FUNCTIONS.get_release_line(cs, BumpType.PATCH, None)
        assert line == "- 1234567: Fix the thing"

    def test_multiline_summary_is_indented(self) -> None:
        cs = Changeset(id="cs1", summary="Add X   \n\nDetails here  \n- bullet")
        line = DEFAULT_CHANGELOG_FUNCTIONS.get_release_line(cs, BumpType.MINOR, None)
        assert line == "- Add X\n  \n  Details here\n  - bullet"


class TestGetDependencyReleaseLine:
    def test_empty_without_dependents(self) -> None:
        cs = Changeset(id="cs1", summary="x", commit="abcdef123")
        assert DEFAULT_CHANGELOG_FUNCTIONS.get_dependency_release_line([cs], [], None) == ""

    def test_lists_changesets_and_releases(self) -> None:
        changesets = [
            Changeset(id="cs1", summary="x", commit="abcdef123"),
            Changeset(id="cs2", summary="y"),
        ]
        releases = [
            ReleasePlanEntry(name="pkg-b", type=BumpType.MAJOR, new_version="2.0.0"),
            ReleasePlanEntry(name="@scope/c", type=BumpType.PATCH, new_version="0.1.1"),
        ]
        line = DEFAULT_CHANGELOG_FUNCTIONS.get_dependency_release_line(
            changesets, releases, None
        )
        assert line == (
            "- Updated dependencies [abcdef1]\n"
            "- Updated dependencies\n"
            "  - pkg-b@2.0.0\n"
            "  - @scope/c@0.1.1"
        )


class TestLoadChangelogFunctions:
    def test_module_and_attribute(self) -> None:
        functions = load_changelog_functions(
            "changeset_changelog.changelog_functions:DEFAULT_CHANGELOG_FUNCTIONS"
        )
        assert functions is DEFAULT_CHANGELOG_FUNCTIONS

    def test_bare_module_uses_default_attribute(self) -> None:
        functions = load_changelog_functions("changeset_changelog.changelog_functions")
        assert isinstance(functions, DefaultChangelogFunctions)

    def test_missing_module(self) -> None:
        with pytest.raises(click.ClickException, match="Cannot import"):
            load_changelog_functions("does_not_exist_anywhere:FUNCS")

    def test_missing_attribute(self) -> None:
        with pytest.raises(click.ClickException, match="no attribute"):
            load_changelog_functions("changeset_changelog.changelog_functions:NOPE")
