"""Changelog pipeline: plan → entries → CHANGELOG.md files.

Runs the per-package entry builder for every release of a release event and
prepends the results to each package's CHANGELOG.md.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from .changelog_functions import ChangelogFunctions
from .entry import get_changelog_entry
from .models import ChangelogEntry, ReleasePlan
from .policy import PolicyConfig
from .shell import step


async def generate_changelog_entries(
    plan: ReleasePlan,
    functions: ChangelogFunctions,
    options: Any,
    config: PolicyConfig,
) -> dict[str, ChangelogEntry]:
    """Build changelog entries for every release in the plan concurrently.

    Returns:
        Map of package name → entry, in plan order. Releases of type "none"
        are left out.
    """
    entries = await asyncio.gather(
        *(
            get_changelog_entry(
                release, plan.releases, plan.changesets, functions, options, config
            )
            for release in plan.releases
        )
    )
    return {
        release.name: entry
        for release, entry in zip(plan.releases, entries)
        if entry is not None
    }


def write_changelog(path: Path, package_name: str, entry: ChangelogEntry) -> None:
    """Prepend an entry to a CHANGELOG.md, creating it if needed.

    The first line of an existing changelog is its "# <package>" heading; the
    new entry goes right below it so releases read newest first.
    """
    content = f"\n\n{entry.markdown.strip()}\n"
    existing = path.read_text() if path.exists() else ""
    if not existing:
        path.write_text(f"# {package_name}{content}")
    elif "\n" not in existing:
        path.write_text(existing + content)
    else:
        path.write_text(existing.replace("\n", content, 1))


def apply_changelogs(
    plan: ReleasePlan,
    root: Path,
    functions: ChangelogFunctions,
    options: Any,
    config: PolicyConfig,
) -> list[Path]:
    """Write changelog entries into each released package's directory.

    Releases without a dir are skipped.

    Returns:
        Paths of the CHANGELOG.md files written.
    """
    step("Generating changelog entries")
    entries = asyncio.run(generate_changelog_entries(plan, functions, options, config))

    written: list[Path] = []
    for release in plan.releases:
        entry = entries.get(release.name)
        if entry is None:
            continue
        if release.dir is None:
            print(f"  {release.name}: no package directory, skipped")
            continue
        path = root / release.dir / "CHANGELOG.md"
        write_changelog(path, release.name, entry)
        print(f"  {release.name} {release.new_version} → {path.relative_to(root)}")
        written.append(path)

    return written
