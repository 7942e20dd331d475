"""Version parsing and range matching utilities.

Dependency ranges in package manifests use the npm range grammar
("^1.2.0", "~1.2", "1.x || >=2.5.0", "1.0.0 - 2.0.0", ...). Ranges are
desugared into sets of primitive comparators over semver.Version objects:
a range is a list of comparator sets, satisfied when any one set is.

Workspace-protocol ranges ("workspace:^") are not semver ranges at all and
are modelled separately as WorkspaceRange.
"""

from __future__ import annotations

import operator
import re
from typing import Annotated, Literal, NamedTuple, Union

import semver
from pydantic import BaseModel, ConfigDict, Field

WORKSPACE_PREFIX = "workspace:"

_PARTIAL = re.compile(
    r"^v?(?P<major>0|[1-9]\d*|[xX*])"
    r"(?:\.(?P<minor>0|[1-9]\d*|[xX*])"
    r"(?:\.(?P<patch>0|[1-9]\d*|[xX*])"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r")?)?$"
)
_HYPHEN = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_OPERATOR_SPACE = re.compile(r"(~>|~|\^|<=|>=|<|>|=)\s+")
_TOKEN = re.compile(r"^(?P<op>~>|~|\^|<=|>=|<|>|=)?(?P<version>.*)$")
_WILDCARDS = {"x", "X", "*"}

_COMPARE = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "=": operator.eq,
}


def parse_version(version_str: str) -> semver.Version:
    """Parse a full version string into a semver.Version object.

    A leading "v" or "=" is ignored, as npm does:
    - "1.2.3" → 1.2.3
    - "v1.2.3-beta.1" → 1.2.3-beta.1

    Raises:
        ValueError: If the string is not a complete semantic version.
    """
    return semver.Version.parse(version_str.strip().lstrip("=v").strip())


class _Partial(NamedTuple):
    """A possibly incomplete version; None marks a wildcard component."""

    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str | None


class _Comparator(NamedTuple):
    operator: str
    version: semver.Version

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL.match(text)
    if not match:
        raise ValueError(f"Invalid version in range: {text!r}")

    def component(value: str | None) -> int | None:
        return None if value is None or value in _WILDCARDS else int(value)

    major = component(match["major"])
    minor = component(match["minor"]) if major is not None else None
    patch = component(match["patch"]) if minor is not None else None
    # A prerelease tag only means something on a complete version
    prerelease = match["prerelease"] if patch is not None else None
    return _Partial(major, minor, patch, prerelease)


def _cmp(
    op: str, major: int, minor: int, patch: int, prerelease: str | None = None
) -> _Comparator:
    return _Comparator(op, semver.Version(major, minor, patch, prerelease))


def _tilde(p: _Partial) -> list[_Comparator]:
    """~1.2.3 → >=1.2.3 <1.3.0-0, ~1.2 → >=1.2.0 <1.3.0-0, ~1 → >=1.0.0 <2.0.0-0"""
    if p.major is None:
        return []
    if p.minor is None:
        return [_cmp(">=", p.major, 0, 0), _cmp("<", p.major + 1, 0, 0, "0")]
    lower = _cmp(">=", p.major, p.minor, p.patch or 0, p.prerelease)
    return [lower, _cmp("<", p.major, p.minor + 1, 0, "0")]


def _caret(p: _Partial) -> list[_Comparator]:
    """Allow changes that do not modify the left-most non-zero component.

    ^1.2.3 → >=1.2.3 <2.0.0-0
    ^0.2.3 → >=0.2.3 <0.3.0-0
    ^0.0.3 → >=0.0.3 <0.0.4-0
    ^0.x   → >=0.0.0 <1.0.0-0
    """
    if p.major is None:
        return []
    if p.minor is None:
        return [_cmp(">=", p.major, 0, 0), _cmp("<", p.major + 1, 0, 0, "0")]
    if p.patch is None:
        lower = _cmp(">=", p.major, p.minor, 0)
        if p.major == 0:
            return [lower, _cmp("<", 0, p.minor + 1, 0, "0")]
        return [lower, _cmp("<", p.major + 1, 0, 0, "0")]

    lower = _cmp(">=", p.major, p.minor, p.patch, p.prerelease)
    if p.major > 0:
        upper = _cmp("<", p.major + 1, 0, 0, "0")
    elif p.minor > 0:
        upper = _cmp("<", 0, p.minor + 1, 0, "0")
    else:
        upper = _cmp("<", 0, 0, p.patch + 1, "0")
    return [lower, upper]


def _xrange(op: str, p: _Partial) -> list[_Comparator]:
    """Desugar a primitive comparator whose version may contain wildcards."""
    if p.patch is not None:
        return [_cmp(op or "=", p.major, p.minor, p.patch, p.prerelease)]
    if op == "=":
        op = ""

    if p.major is None:
        # ">*" and "<*" can never match
        return [_cmp("<", 0, 0, 0, "0")] if op in (">", "<") else []

    minor = p.minor or 0
    if op == ">":
        if p.minor is None:
            return [_cmp(">=", p.major + 1, 0, 0)]
        return [_cmp(">=", p.major, p.minor + 1, 0)]
    if op == "<=":
        if p.minor is None:
            return [_cmp("<", p.major + 1, 0, 0, "0")]
        return [_cmp("<", p.major, p.minor + 1, 0, "0")]
    if op == "<":
        return [_cmp("<", p.major, minor, 0, "0")]
    if op == ">=":
        return [_cmp(">=", p.major, minor, 0)]

    if p.minor is None:
        return [_cmp(">=", p.major, 0, 0), _cmp("<", p.major + 1, 0, 0, "0")]
    return [_cmp(">=", p.major, p.minor, 0), _cmp("<", p.major, p.minor + 1, 0, "0")]


def _hyphen(low: _Partial, high: _Partial) -> list[_Comparator]:
    """1.2 - 2.3.4 → >=1.2.0 <=2.3.4, 1.2.3 - 2.3 → >=1.2.3 <2.4.0-0"""
    comparators: list[_Comparator] = []

    if low.major is not None:
        comparators.append(
            _cmp(">=", low.major, low.minor or 0, low.patch or 0, low.prerelease)
        )

    if high.major is None:
        pass
    elif high.minor is None:
        comparators.append(_cmp("<", high.major + 1, 0, 0, "0"))
    elif high.patch is None:
        comparators.append(_cmp("<", high.major, high.minor + 1, 0, "0"))
    else:
        comparators.append(
            _cmp("<=", high.major, high.minor, high.patch, high.prerelease)
        )
    return comparators


def _parse_comparator_set(text: str) -> list[_Comparator]:
    hyphen = _HYPHEN.match(text)
    if hyphen:
        return _hyphen(_parse_partial(hyphen[1]), _parse_partial(hyphen[2]))

    comparators: list[_Comparator] = []
    # ">= 1.2.3" is the same as ">=1.2.3"
    for token in _OPERATOR_SPACE.sub(r"\1", text).split():
        match = _TOKEN.match(token)
        op = match["op"] or ""
        partial = _parse_partial(match["version"])
        if op in ("~", "~>"):
            comparators.extend(_tilde(partial))
        elif op == "^":
            comparators.extend(_caret(partial))
        else:
            comparators.extend(_xrange(op, partial))
    return comparators


def _parse_range(range_str: str) -> list[list[_Comparator]]:
    """Parse a range into comparator sets.

    Raises:
        ValueError: If any part of the range is not valid range syntax.
    """
    return [
        _parse_comparator_set(alternative.strip())
        for alternative in re.split(r"\s*\|\|\s*", range_str.strip())
    ]


def _test_set(comparators: list[_Comparator], version: semver.Version) -> bool:
    if not all(_COMPARE[c.operator](version, c.version) for c in comparators):
        return False
    if version.prerelease:
        # Prereleases only match when a comparator opts into the same
        # major.minor.patch tuple explicitly.
        return any(
            c.version.prerelease
            and (c.version.major, c.version.minor, c.version.patch)
            == (version.major, version.minor, version.patch)
            for c in comparators
        )
    return True


def valid_range(range_str: str) -> str | None:
    """Return the normalized form of a range, or None if it doesn't parse.

    Examples:
        valid_range("^1.2.3") → ">=1.2.3 <2.0.0-0"
        valid_range("1.x || 3") → ">=1.0.0 <2.0.0-0||>=3.0.0 <4.0.0-0"
        valid_range("not-a-range") → None
    """
    try:
        sets = _parse_range(range_str)
    except ValueError:
        return None
    return "||".join(" ".join(str(c) for c in s) or "*" for s in sets)


def satisfies(version: str, range_str: str) -> bool:
    """Check whether a version falls inside a range.

    Invalid versions and invalid ranges never satisfy anything.
    """
    try:
        parsed = parse_version(version)
        sets = _parse_range(range_str)
    except ValueError:
        return False
    return any(_test_set(s, parsed) for s in sets)


class WorkspaceRange(BaseModel):
    """A "workspace:" range: whatever version the same release event ships.

    Always structurally valid and always considered satisfied.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["workspace"] = "workspace"
    raw: str

    def contains(self, version: str) -> bool:
        return True


class SemverRange(BaseModel):
    """A dependency range that parsed as a semver range."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["semver"] = "semver"
    raw: str

    def contains(self, version: str) -> bool:
        return satisfies(version, self.raw)


VersionConstraint = Annotated[
    Union[WorkspaceRange, SemverRange], Field(discriminator="kind")
]


def parse_constraint(range_str: str) -> VersionConstraint | None:
    """Classify a declared dependency range.

    Returns None for ranges that are neither workspace-protocol markers nor
    valid semver ranges.

    Examples:
        parse_constraint("workspace:^") → WorkspaceRange(raw="workspace:^")
        parse_constraint("^1.0.0") → SemverRange(raw="^1.0.0")
        parse_constraint("not-a-range") → None
    """
    if range_str.startswith(WORKSPACE_PREFIX):
        return WorkspaceRange(raw=range_str)
    if valid_range(range_str) is None:
        return None
    return SemverRange(raw=range_str)
