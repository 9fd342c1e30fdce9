"""
Semantic versions for source/target platform releases.

Accepts ``MAJOR.MINOR.PATCH`` with an optional ``v`` prefix, pre-release
and build metadata (``v2.25.0-rc.1+abc``). Short forms like ``3.0`` are
padded with zeros, since operators commonly type them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

_SEMVER_RE = re.compile(
    r"^v?"
    r"(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


class VersionError(ValueError):
    """Raised for strings that are not semantic versions."""


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A parsed semantic version.

    Ordered by semver precedence: a pre-release sorts below its release
    (``3.0.0-rc.1 < 3.0.0``), pre-release identifiers compare numerically
    when both are digits, and build metadata is ignored.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, value: str) -> Version:
        match = _SEMVER_RE.match(value.strip())
        if match is None:
            raise VersionError(f"invalid semantic version: {value!r}")
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"] or 0),
            patch=int(match["patch"] or 0),
            prerelease=match["pre"] or "",
            build=match["build"] or "",
        )

    def _precedence(self) -> tuple:
        if not self.prerelease:
            return (self.major, self.minor, self.patch, 1, ())
        # Numeric identifiers sort below alphanumeric ones.
        idents = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return (self.major, self.minor, self.patch, 0, idents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() == other._precedence()

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __hash__(self) -> int:
        return hash(self._precedence())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_optional(value: str | None) -> Version | None:
    """Parse ``value``, returning None for empty or unparseable input."""
    if not value:
        return None
    try:
        return Version.parse(value)
    except VersionError:
        return None


def is_upgrade_from_2x_to_3x(current: Version | None, target: Version | None) -> bool:
    """True only for a 2.x → 3.x (or later) transition with both versions known."""
    if current is None or target is None:
        return False
    return current.major == 2 and target.major >= 3
