"""Data models for changeset-changelog.

These Pydantic models represent the release plan handed in by upstream
tooling: the changesets of a release event and the per-package outcome of
that event. They are frozen; nothing in this package mutates them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BumpType(str, Enum):
    """Severity of a version bump, ordered none < patch < minor < major."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def level(self) -> int:
        return _LEVELS[self]


_LEVELS = {
    BumpType.NONE: 0,
    BumpType.PATCH: 1,
    BumpType.MINOR: 2,
    BumpType.MAJOR: 3,
}

# Order in which severity sections appear in a changelog entry.
SEVERITY_ORDER: tuple[BumpType, ...] = (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH)


class DependencyType(str, Enum):
    """Manifest section a dependency range was declared in."""

    DEPENDENCIES = "dependencies"
    PEER_DEPENDENCIES = "peerDependencies"


class Changeset(BaseModel):
    """A user-authored change record.

    Attributes:
        id: Unique identifier (usually the changeset file name).
        summary: Free-text markdown describing the change.
        commit: Commit that introduced the changeset, if known.
        releases: Map of package name → bump severity for that package.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str
    commit: str | None = None
    releases: dict[str, BumpType] = Field(default_factory=dict)


class PackageManifest(BaseModel):
    """The parts of a package manifest relevant to changelog generation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    version: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="peerDependencies"
    )


class ReleasePlanEntry(BaseModel):
    """One package's resolved outcome within a release event.

    Attributes:
        name: Package name.
        type: Bump severity this package receives.
        old_version: Version before the release, if known.
        new_version: Version after the release.
        changesets: Ids of the changesets that contributed to the bump.
        manifest: Declared dependency ranges of the package.
        dir: Package directory relative to the workspace root. Only needed
             when writing CHANGELOG.md files.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: BumpType
    old_version: str | None = None
    new_version: str
    changesets: list[str] = Field(default_factory=list)
    manifest: PackageManifest = Field(default_factory=PackageManifest)
    dir: str | None = None


class ChangelogEntry(BaseModel):
    """Changelog section generated for a single release."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str

    @property
    def markdown(self) -> str:
        return f"{self.title}\n\n{self.body}"


class ReleasePlan(BaseModel):
    """A release event as serialized by upstream tooling."""

    model_config = ConfigDict(frozen=True)

    releases: list[ReleasePlanEntry] = Field(default_factory=list)
    changesets: list[Changeset] = Field(default_factory=list)
