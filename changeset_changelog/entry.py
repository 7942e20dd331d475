"""Changelog entry generation for a single package release.

An entry has two sources of content:
1. Changesets that name the package directly, grouped by bump severity.
2. Releases of internal dependencies that the package declares, filtered by
   the reporting policy and summarized in one dependency line that is
   folded into the patch section.

Line rendering is delegated to a ChangelogFunctions object. All renders for
a release are started before any is awaited, and each section is joined in
issue order.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from typing import Any

from .changelog_functions import ChangelogFunctions, Line
from .models import (
    SEVERITY_ORDER,
    BumpType,
    Changeset,
    ChangelogEntry,
    DependencyType,
    PackageManifest,
    ReleasePlanEntry,
)
from .policy import (
    DependencyRangeInfo,
    DependentReleaseInfo,
    PolicyConfig,
    should_update_dependency_based_on_config,
)
from .versions import parse_constraint

ChangelogLines = dict[BumpType, list["asyncio.Future[str]"]]


def _issue(line: Line) -> asyncio.Future[str]:
    """Start a render, wrapping plain strings in a completed future."""
    if inspect.isawaitable(line):
        return asyncio.ensure_future(line)
    future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
    future.set_result(line)
    return future


def collect_direct_changes(
    release: ReleasePlanEntry,
    changesets: Sequence[Changeset],
    functions: ChangelogFunctions,
    options: Any,
) -> ChangelogLines:
    """Start rendering every changeset that bumps this package.

    Must be called from a running event loop. Pending lines are bucketed by
    the severity the changeset declares for the package, in input order.
    """
    lines: ChangelogLines = {severity: [] for severity in SEVERITY_ORDER}
    for changeset in changesets:
        severity = changeset.releases.get(release.name, BumpType.NONE)
        if severity is BumpType.NONE:
            continue
        lines[severity].append(
            _issue(functions.get_release_line(changeset, severity, options))
        )
    return lines


def get_dependency_range(
    manifest: PackageManifest, name: str
) -> tuple[str, DependencyType] | None:
    """Find the range a manifest declares for a package.

    Regular dependencies take precedence over peer dependencies. An empty
    range counts as undeclared.
    """
    if manifest.dependencies.get(name):
        return manifest.dependencies[name], DependencyType.DEPENDENCIES
    if manifest.peer_dependencies.get(name):
        return manifest.peer_dependencies[name], DependencyType.PEER_DEPENDENCIES
    return None


def select_dependent_releases(
    release: ReleasePlanEntry,
    releases: Sequence[ReleasePlanEntry],
    changesets: Sequence[Changeset],
    config: PolicyConfig,
) -> tuple[list[ReleasePlanEntry], list[Changeset]]:
    """Pick the dependency releases worth reporting in this package's changelog.

    Only direct dependencies are considered. Undeclared dependencies and
    ranges that are neither semver nor workspace ranges are skipped.

    Returns:
        Tuple of (dependent releases in event order, changesets behind them
        in input order, without duplicates).
    """
    dependent_releases: list[ReleasePlanEntry] = []
    for other in releases:
        if other.name == release.name:
            continue
        declared = get_dependency_range(release.manifest, other.name)
        if declared is None:
            continue
        range_str, dep_type = declared
        constraint = parse_constraint(range_str)
        if constraint is None:
            continue
        if should_update_dependency_based_on_config(
            DependentReleaseInfo(type=other.type, version=other.new_version),
            DependencyRangeInfo(dep_version_range=constraint, dep_type=dep_type),
            config,
        ):
            dependent_releases.append(other)

    relevant_ids = {cs for rel in dependent_releases for cs in rel.changesets}
    relevant_changesets = [cs for cs in changesets if cs.id in relevant_ids]
    return dependent_releases, relevant_changesets


async def render_changes_section(
    lines: ChangelogLines, severity: BumpType
) -> str | None:
    """Render one severity section, or None if it has no content."""
    rendered = [line for line in await asyncio.gather(*lines[severity]) if line]
    if not rendered:
        return None
    heading = f"### {severity.value.capitalize()} Changes"
    return f"{heading}\n\n" + "\n".join(rendered) + "\n"


async def assemble_body(lines: ChangelogLines) -> str:
    """Join the major, minor and patch sections, skipping empty ones.

    If a render fails, pending renders are cancelled before the error
    propagates.
    """
    try:
        sections = [await render_changes_section(lines, s) for s in SEVERITY_ORDER]
    finally:
        for future in (f for bucket in lines.values() for f in bucket):
            if not future.done():
                future.cancel()
            elif not future.cancelled():
                future.exception()
    return "\n".join(section for section in sections if section)


async def get_changelog_entry(
    release: ReleasePlanEntry,
    releases: Sequence[ReleasePlanEntry],
    changesets: Sequence[Changeset],
    functions: ChangelogFunctions,
    options: Any,
    config: PolicyConfig,
) -> ChangelogEntry | None:
    """Build the changelog entry for one package of a release event.

    Args:
        release: The package being released.
        releases: Every release in the event (may include release itself).
        changesets: Every changeset in the event.
        functions: Line renderers.
        options: Passed through untouched to the renderers.
        config: Reporting policy for dependency releases.

    Returns:
        The entry, or None if the package isn't actually released.
    """
    if release.type is BumpType.NONE:
        return None

    lines = collect_direct_changes(release, changesets, functions, options)

    dependent_releases, relevant_changesets = select_dependent_releases(
        release, releases, changesets, config
    )
    lines[BumpType.PATCH].append(
        _issue(
            functions.get_dependency_release_line(
                relevant_changesets, dependent_releases, options
            )
        )
    )

    return ChangelogEntry(
        title=f"## {release.new_version}",
        body=await assemble_body(lines),
    )
