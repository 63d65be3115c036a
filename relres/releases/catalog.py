"""Build a ProjectCatalog from a parsed release-history document.

The document is the already-parsed form of an update-service feed:

    {
        "short_name": "views",
        "recommended_major": "3",
        "supported_majors": "2,3",
        "project_status": "published",
        "releases": [
            {"version": "8.x-3.0", "version_major": "3", "date": "1400000000",
             "status": "published", "terms": [{"name": "Release type",
             "value": "Security update"}]},
            ...
        ],
    }

Status tags are computed in one pass over the releases in document order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType

from relres.core.result import Err, Ok, Result
from relres.core.structured import (
    as_str_dict,
    get_int,
    get_list,
    get_str,
    get_table,
    parse_int,
)
from relres.releases.errors import CatalogError
from relres.releases.model import ProjectCatalog, ReleaseRecord, ReleaseTerm, StatusTag
from relres.releases.version import parse_version

__all__ = ["InstalledVersionFn", "build_catalog", "parse_release", "parse_supported_majors"]


type InstalledVersionFn = Callable[[str], str | None]

UNPUBLISHED = "unpublished"
PUBLISHED = "published"


def build_catalog(
    document: Mapping[str, object],
    installed_lookup: InstalledVersionFn | None = None,
) -> Result[ProjectCatalog, CatalogError]:
    """Turn a parsed feed document into a catalog.

    Args:
        document: Parsed release-history document
        installed_lookup: Returns the installed version of a project, if any.
            Called at most once.

    Returns:
        Ok(ProjectCatalog), or Err(CatalogError) when the document is an
        error marker or the project is unpublished
    """
    if "error" in document:
        return Err(
            CatalogError(
                kind="feed_error",
                message=f"release feed error: {document['error']}",
            )
        )

    name = get_str(document, "short_name")
    if name is None:
        return Err(CatalogError(kind="feed_error", message="release feed has no short_name"))

    status = get_str(document, "project_status")
    if status == UNPUBLISHED:
        return Err(
            CatalogError(
                kind="project_unpublished",
                message=f"project {name} is unpublished",
                hint="Unpublished projects have no downloadable releases.",
            )
        )

    # An empty or zero recommended major means the project has none.
    recommended_major = get_int(document, "recommended_major") or None
    supported_majors = parse_supported_majors(document.get("supported_majors"))

    installed = installed_lookup(name) if installed_lookup is not None else None

    remaining_supported = set(supported_majors)
    recommended_version: str | None = None
    latest_version: str | None = None
    installed_version: str | None = None
    records: dict[str, ReleaseRecord] = {}

    for node_obj in get_list(document, "releases") or []:
        node = as_str_dict(node_obj)
        if node is None:
            continue
        release = parse_release(node)
        if release is None or release.version in records:
            continue

        major = release.version_major
        tags: list[StatusTag] = []

        if major in remaining_supported:
            tags.append(StatusTag.SUPPORTED)
            remaining_supported.discard(major)

        if recommended_major is not None and major == recommended_major:
            if latest_version is None:
                latest_version = release.version
            if recommended_version is None and release.is_stable:
                recommended_version = release.version
                tags.append(StatusTag.RECOMMENDED)

        if release.is_dev:
            tags.append(StatusTag.DEVELOPMENT)

        if any("Security" in term.value for term in release.terms):
            tags.append(StatusTag.SECURITY)

        if installed is not None and installed == release.version:
            tags.append(StatusTag.INSTALLED)
            installed_version = release.version

        records[release.version] = replace(release, status_tags=tuple(tags))

    # A major line with only dev snapshots still gets a recommendation.
    if recommended_version is None and latest_version is not None:
        records[latest_version] = records[latest_version].with_tag(StatusTag.RECOMMENDED)
        recommended_version = latest_version

    return Ok(
        ProjectCatalog(
            name=name,
            releases=MappingProxyType(records),
            recommended_major=recommended_major,
            default_major=get_int(document, "default_major"),
            supported_majors=supported_majors,
            recommended_version=recommended_version,
            installed_version=installed_version,
            title=get_str(document, "title"),
            project_type=get_str(document, "type"),
            api_version=get_str(document, "api_version"),
            project_status=status,
            link=get_str(document, "link"),
        )
    )


def parse_supported_majors(value: object) -> tuple[int, ...]:
    """Parse "2,3" (or a list) into majors, deduplicated in document order."""
    if isinstance(value, str):
        items: list[object] = list(value.split(","))
    elif isinstance(value, list):
        items = list(value)  # pyright: ignore[reportUnknownArgumentType]
    else:
        items = [value]

    majors: list[int] = []
    for item in items:
        major = parse_int(item)
        if major is not None and major not in majors:
            majors.append(major)
    return tuple(majors)


def parse_release(node: Mapping[str, object]) -> ReleaseRecord | None:
    """Build an untagged ReleaseRecord from one release node.

    Returns None for unpublished releases and for nodes whose version or
    major line cannot be determined.
    """
    status = get_str(node, "status")
    if status is not None and status != PUBLISHED:
        return None

    version = get_str(node, "version")
    if version is None:
        return None

    major = get_int(node, "version_major")
    if major is not None:
        extra = get_str(node, "version_extra")
        patch = get_int(node, "version_patch")
    else:
        parts = parse_version(version)
        if parts is None:
            return None
        major, patch, extra = parts.major, parts.patch, parts.extra

    return ReleaseRecord(
        version=version,
        version_major=major,
        version_extra=extra,
        date=get_int(node, "date") or 0,
        release_link=get_str(node, "release_link"),
        download_link=get_str(node, "download_link"),
        name=get_str(node, "name"),
        version_patch=patch,
        terms=_parse_terms(node),
    )


def _parse_terms(node: Mapping[str, object]) -> tuple[ReleaseTerm, ...]:
    terms: list[ReleaseTerm] = []

    # {"Release type": ["Security update", "Bug fixes"]}
    table = get_table(node, "terms")
    if table is not None:
        for term_name, values in table.items():
            if isinstance(values, str):
                terms.append(ReleaseTerm(name=term_name, value=values))
                continue
            for value in get_list(table, term_name) or []:
                if isinstance(value, str):
                    terms.append(ReleaseTerm(name=term_name, value=value))
        return tuple(terms)

    # [{"name": "Release type", "value": "Security update"}]
    for item in get_list(node, "terms") or []:
        term = as_str_dict(item)
        if term is None:
            continue
        value = get_str(term, "value")
        if value is not None:
            terms.append(ReleaseTerm(name=get_str(term, "name") or "", value=value))
    return tuple(terms)
