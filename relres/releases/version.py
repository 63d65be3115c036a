"""Version string helpers.

Feeds normally carry ``version_major``/``version_extra`` explicitly; these
helpers derive them when a document omits them, and classify the version a
user asked for.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto


# "8.x-2.3", "8.x-2.x-dev", "7.x-1.0-beta2", "2.1", "8.6.0", "2.0-dev"
_VERSION_RE = re.compile(
    r"^(?:\d+\.x-)?(?P<major>\d+)(?P<rest>(?:\.(?:\d+|x))*)(?:-(?P<extra>[0-9A-Za-z.]+))?$"
)
_BRANCH_RE = re.compile(r"^\d+\.x-(?P<major>\d+)$")


@dataclass(frozen=True, slots=True)
class VersionParts:
    major: int
    patch: int | None
    extra: str | None


def parse_version(version: str) -> VersionParts | None:
    m = _VERSION_RE.match(version.strip())
    if m is None:
        return None
    rest = [part for part in m.group("rest").split(".") if part]
    patch = int(rest[-1]) if rest and rest[-1].isdigit() else None
    return VersionParts(major=int(m.group("major")), patch=patch, extra=m.group("extra"))


class QueryKind(Enum):
    BRANCH = auto()  # every release of one major line
    EXACT = auto()  # one version string


@dataclass(frozen=True, slots=True)
class VersionQuery:
    kind: QueryKind
    major: int | None = None
    version: str | None = None


def classify_request(requested: str) -> VersionQuery:
    """Turn a requested version into what to match against.

    "8.x-2" matches the whole major line 2; a trailing ".x" names the dev
    snapshot of that branch ("8.x-2.x" -> "8.x-2.x-dev"); anything else is an
    exact version string.
    """
    requested = requested.strip()
    m = _BRANCH_RE.match(requested)
    if m is not None:
        return VersionQuery(kind=QueryKind.BRANCH, major=int(m.group("major")))
    if requested.endswith(".x"):
        return VersionQuery(kind=QueryKind.EXACT, version=f"{requested}-dev")
    return VersionQuery(kind=QueryKind.EXACT, version=requested)
