"""Pick one release from a catalog.

The search runs in stages, each one short-circuiting:

1. dev-forced: only dev snapshots qualify, and having none is final
2. requested version: a branch ("8.x-2"), a dev branch ("8.x-2.x") or an
   exact version; no match is final
3. most appropriate: the recommended major, then each supported major
4. best_release() breaks the tie inside whichever candidate set won
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from relres.core.result import Err, Ok, Result
from relres.releases.errors import NotFound, SelectionError
from relres.releases.model import (
    ProjectCatalog,
    ReleaseRecord,
    RestrictTo,
    SelectionRequest,
    SelectionStrategy,
)
from relres.releases.version import QueryKind, classify_request

__all__ = [
    "best_release",
    "match_requested",
    "most_appropriate",
    "parse_request",
    "parse_strategy",
    "select_release",
]


# "views", "views-8.x-3.x", "token-1.2-rc1"
_REQUEST_RE = re.compile(r"^(?P<name>[A-Za-z0-9_]+)(?:-(?P<version>\d[0-9A-Za-z.\-]*))?$")


def best_release(candidates: Iterable[ReleaseRecord]) -> ReleaseRecord | None:
    """First stable release in document order, else the first release at all."""
    first: ReleaseRecord | None = None
    for release in candidates:
        if release.is_stable:
            return release
        if first is None:
            first = release
    return first


def match_requested(catalog: ProjectCatalog, requested: str) -> list[ReleaseRecord]:
    query = classify_request(requested)
    if query.kind == QueryKind.BRANCH:
        return [r for r in catalog if r.version_major == query.major]
    return [r for r in catalog if r.version == query.version]


def most_appropriate(catalog: ProjectCatalog) -> list[ReleaseRecord]:
    """Releases of the recommended major, else of the first supported major that has any."""
    majors: list[int] = []
    if catalog.recommended_major is not None:
        majors.append(catalog.recommended_major)
    majors.extend(catalog.supported_majors)

    for major in majors:
        matches = [r for r in catalog if r.version_major == major]
        if matches:
            return matches
    return []


def select_release(
    catalog: ProjectCatalog,
    request: SelectionRequest,
) -> Result[ReleaseRecord, NotFound]:
    """Select the release that best satisfies ``request``.

    Args:
        catalog: Catalog of the requested project
        request: Version/dev constraints

    Returns:
        Ok(ReleaseRecord), or Err(NotFound) explaining which stage gave up
    """
    candidates: Sequence[ReleaseRecord]

    if request.restrict_to == RestrictTo.DEV:
        candidates = [r for r in catalog if r.is_dev]
        if not candidates:
            return Err(
                NotFound(
                    reason="no_dev_release",
                    message=f"There is no development release for project {catalog.name}.",
                )
            )
    elif request.requested_version:
        candidates = match_requested(catalog, request.requested_version)
        if not candidates:
            return Err(
                NotFound(
                    reason="version_not_found",
                    message=(
                        f"Could not locate {catalog.name} version {request.requested_version}."
                    ),
                    hint="Run `relres releases` to list the available versions.",
                )
            )
    else:
        candidates = most_appropriate(catalog)

    release = best_release(candidates)
    if release is None:
        return Err(
            NotFound(
                reason="no_stable_release",
                message=f"There is no recommended release for project {catalog.name}.",
                hint="Request a version explicitly or pick one from the release list.",
            )
        )
    return Ok(release)


def parse_strategy(text: str) -> Result[SelectionStrategy, SelectionError]:
    value = text.strip().lower()
    for strategy in SelectionStrategy:
        if strategy.value == value:
            return Ok(strategy)
    allowed = ", ".join(s.value for s in SelectionStrategy)
    return Err(
        SelectionError(
            kind="unknown_strategy",
            message=f"unknown selection strategy: {text}",
            hint=f"Expected one of: {allowed}",
        )
    )


def parse_request(text: str, *, dev: bool = False) -> SelectionRequest | None:
    """Parse "name" or "name-version" into a SelectionRequest.

    Returns None when ``text`` is not a valid project request.
    """
    m = _REQUEST_RE.match(text.strip())
    if m is None:
        return None

    version = m.group("version")
    if dev:
        restrict_to = RestrictTo.DEV
    elif version:
        restrict_to = RestrictTo.VERSION
    else:
        restrict_to = RestrictTo.NONE
    return SelectionRequest(
        name=m.group("name"), requested_version=version, restrict_to=restrict_to
    )
