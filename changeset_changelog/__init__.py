"""Changelog entries for packages released together from a monorepo."""

from __future__ import annotations

from changeset_changelog.changelog_functions import (
    DEFAULT_CHANGELOG_FUNCTIONS,
    ChangelogFunctions,
    DefaultChangelogFunctions,
)
from changeset_changelog.entry import get_changelog_entry, select_dependent_releases
from changeset_changelog.models import (
    BumpType,
    Changeset,
    ChangelogEntry,
    PackageManifest,
    ReleasePlan,
    ReleasePlanEntry,
)
from changeset_changelog.policy import (
    DependencyRangeInfo,
    DependentReleaseInfo,
    PolicyConfig,
    should_update_dependency_based_on_config,
)
from changeset_changelog.versions import satisfies, valid_range

__all__ = [
    "DEFAULT_CHANGELOG_FUNCTIONS",
    "BumpType",
    "ChangelogEntry",
    "ChangelogFunctions",
    "Changeset",
    "DefaultChangelogFunctions",
    "DependencyRangeInfo",
    "DependentReleaseInfo",
    "PackageManifest",
    "PolicyConfig",
    "ReleasePlan",
    "ReleasePlanEntry",
    "get_changelog_entry",
    "satisfies",
    "select_dependent_releases",
    "should_update_dependency_based_on_config",
    "valid_range",
]
