"""Reduce a catalog to the releases worth offering in a choice list.

Releases are ordered newest major first, newest date first within a major.
Without ``show_all`` only the first release of each (major, status) pair is
kept, plus everything in the installed major line above the installed
release.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

from relres.releases.model import ProjectCatalog, ReleaseRecord, RestrictTo, StatusTag

__all__ = ["compare_releases", "filter_releases", "sort_releases"]


def compare_releases(a: ReleaseRecord, b: ReleaseRecord) -> int:
    """Order by major descending, then date descending within a major."""
    if a.version_major != b.version_major:
        return -1 if a.version_major > b.version_major else 1
    if a.date != b.date:
        return -1 if a.date > b.date else 1
    return 0


def sort_releases(releases: Iterable[ReleaseRecord]) -> list[ReleaseRecord]:
    # sorted() is stable: equal keys keep document order.
    return sorted(releases, key=cmp_to_key(compare_releases))


@dataclass(frozen=True, slots=True)
class _Pass:
    releases: dict[str, ReleaseRecord]
    installed_seen: bool


def _filter_pass(
    ordered: list[ReleaseRecord],
    *,
    show_all: bool,
    restrict_to: RestrictTo,
    show_all_until_installed: bool,
    installed_major: int | None,
) -> _Pass:
    seen: set[tuple[int, StatusTag]] = set()
    out: dict[str, ReleaseRecord] = {}
    installed_seen = False

    for release in ordered:
        if restrict_to == RestrictTo.DEV and not release.is_dev:
            continue

        first_of_kind = False
        for tag in release.status_tags:
            key = (release.version_major, tag)
            if key in seen:
                continue
            seen.add(key)
            first_of_kind = True
            if tag == StatusTag.INSTALLED:
                show_all_until_installed = False
                installed_seen = True

        in_installed_line = show_all_until_installed and release.version_major == installed_major
        if show_all or in_installed_line or first_of_kind:
            out[release.version] = release

    return _Pass(releases=out, installed_seen=installed_seen)


def filter_releases(
    catalog: ProjectCatalog,
    show_all: bool,
    restrict_to: RestrictTo,
    show_all_until_installed: bool = True,
) -> dict[str, ReleaseRecord]:
    """Return the display-ordered releases to offer for ``catalog``.

    Args:
        catalog: Project catalog
        show_all: Keep every release
        restrict_to: RestrictTo.DEV keeps only dev snapshots
        show_all_until_installed: Keep every release of the installed major
            line until the installed release itself is reached

    Returns:
        Mapping of version to release, newest major first. Never empty
        when the catalog (after the dev restriction) has releases.
    """
    ordered = sort_releases(catalog)

    installed_major: int | None = None
    for release in ordered:
        if release.has_tag(StatusTag.INSTALLED):
            installed_major = release.version_major
            break

    # Escalate at most twice: stop waiting for an installed release,
    # then show everything.
    result = _filter_pass(
        ordered,
        show_all=show_all,
        restrict_to=restrict_to,
        show_all_until_installed=show_all_until_installed,
        installed_major=installed_major,
    )
    if show_all or not show_all_until_installed or result.installed_seen:
        return result.releases

    result = _filter_pass(
        ordered,
        show_all=False,
        restrict_to=restrict_to,
        show_all_until_installed=False,
        installed_major=installed_major,
    )
    if result.releases:
        return result.releases

    return _filter_pass(
        ordered,
        show_all=True,
        restrict_to=restrict_to,
        show_all_until_installed=False,
        installed_major=installed_major,
    ).releases
