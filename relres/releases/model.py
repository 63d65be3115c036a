from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import Enum, StrEnum


class StatusTag(StrEnum):
    """Per-release status computed while building a catalog."""

    SUPPORTED = "Supported"
    RECOMMENDED = "Recommended"
    DEVELOPMENT = "Development"
    SECURITY = "Security"
    INSTALLED = "Installed"


class RestrictTo(Enum):
    NONE = "none"
    DEV = "dev"
    VERSION = "version"


class SelectionStrategy(StrEnum):
    """What to do when nothing satisfies a request.

    never: a missing stable release is fatal.
    auto: fall back to offering the filtered candidate list.
    ignore: warn and carry on without a pick.
    """

    NEVER = "never"
    AUTO = "auto"
    IGNORE = "ignore"


DEV_EXTRA = "dev"


@dataclass(frozen=True, slots=True)
class ReleaseTerm:
    """Taxonomy term attached to a release (e.g. Release type: Bug fixes)."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """One published version of a project."""

    version: str
    version_major: int
    version_extra: str | None = None
    date: int = 0
    release_link: str | None = None
    download_link: str | None = None
    status_tags: tuple[StatusTag, ...] = ()
    name: str | None = None
    version_patch: int | None = None
    terms: tuple[ReleaseTerm, ...] = ()

    @property
    def is_stable(self) -> bool:
        return self.version_extra is None

    @property
    def is_dev(self) -> bool:
        return self.version_extra == DEV_EXTRA

    def has_tag(self, tag: StatusTag) -> bool:
        return tag in self.status_tags

    def with_tag(self, tag: StatusTag) -> ReleaseRecord:
        """Return a copy with ``tag`` appended (no-op if already present)."""
        if tag in self.status_tags:
            return self
        return replace(self, status_tags=(*self.status_tags, tag))

    @property
    def status_text(self) -> str:
        return ", ".join(str(tag) for tag in self.status_tags)

    @property
    def date_text(self) -> str:
        """Release date as YYYY-Mon-DD (UTC)."""
        return datetime.fromtimestamp(self.date, tz=UTC).strftime("%Y-%b-%d")


@dataclass(frozen=True, slots=True)
class ProjectCatalog:
    """Immutable snapshot of every published release of one project.

    ``releases`` keeps document order; it is not sorted by date.
    """

    name: str
    releases: Mapping[str, ReleaseRecord]
    recommended_major: int | None = None
    supported_majors: tuple[int, ...] = ()
    default_major: int | None = None
    recommended_version: str | None = None
    installed_version: str | None = None
    title: str | None = None
    project_type: str | None = None
    api_version: str | None = None
    project_status: str | None = None
    link: str | None = None

    def __iter__(self) -> Iterator[ReleaseRecord]:
        return iter(self.releases.values())

    def __len__(self) -> int:
        return len(self.releases)

    def get(self, version: str) -> ReleaseRecord | None:
        return self.releases.get(version)

    @property
    def recommended(self) -> ReleaseRecord | None:
        if self.recommended_version is None:
            return None
        return self.releases.get(self.recommended_version)

    @property
    def installed(self) -> ReleaseRecord | None:
        if self.installed_version is None:
            return None
        return self.releases.get(self.installed_version)


@dataclass(frozen=True, slots=True)
class SelectionRequest:
    name: str
    requested_version: str | None = None
    restrict_to: RestrictTo = RestrictTo.NONE

    def __str__(self) -> str:
        if self.requested_version:
            return f"{self.name}-{self.requested_version}"
        return self.name
