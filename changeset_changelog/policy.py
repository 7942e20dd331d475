"""Reporting policy for internal dependency bumps.

Decides whether a dependency's release is worth mentioning in a dependent
package's changelog, given the range the dependent declares for it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from .models import BumpType, DependencyType
from .versions import VersionConstraint


class PolicyConfig(BaseModel):
    """Policy knobs for dependency-driven changelog lines.

    Attributes:
        update_internal_dependencies: Minimum bump severity a dependency must
            receive before its release is reported at all.
        only_update_peer_dependents_when_out_of_range: When set, a peer
            dependency's release is only reported if its new version leaves
            the declared range.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    update_internal_dependencies: Literal["patch", "minor"] = "patch"
    only_update_peer_dependents_when_out_of_range: bool = False

    @property
    def min_release_type(self) -> BumpType:
        return BumpType(self.update_internal_dependencies)


class DependentReleaseInfo(BaseModel):
    """The bump a dependency receives in this release event."""

    model_config = ConfigDict(frozen=True)

    type: BumpType
    version: str


class DependencyRangeInfo(BaseModel):
    """How the dependent package declares the dependency."""

    model_config = ConfigDict(frozen=True)

    dep_version_range: VersionConstraint
    dep_type: DependencyType


def should_update_dependency_based_on_config(
    release: DependentReleaseInfo,
    dependency: DependencyRangeInfo,
    config: PolicyConfig,
) -> bool:
    """Decide whether a dependency's release should be reported.

    1. Bumps below config.update_internal_dependencies are never reported.
    2. Peer dependencies under only_update_peer_dependents_when_out_of_range
       are reported only when the new version leaves the declared range.
       Workspace ranges never leave their range.
    3. Everything else is reported.
    """
    if release.type.level < config.min_release_type.level:
        return False

    if (
        dependency.dep_type is DependencyType.PEER_DEPENDENCIES
        and config.only_update_peer_dependents_when_out_of_range
    ):
        return not dependency.dep_version_range.contains(release.version)

    return True
