from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from relres.core.result import Err, Ok, Result
from relres.feed.installed import InstalledLookup
from relres.feed.source import FeedSource
from relres.output.console import ConsoleProtocol, Style
from relres.releases.catalog import build_catalog
from relres.releases.errors import NotFound
from relres.releases.filter import filter_releases
from relres.releases.model import (
    ProjectCatalog,
    ReleaseRecord,
    RestrictTo,
    SelectionRequest,
    SelectionStrategy,
)
from relres.releases.selector import select_release

# -----------------------------------------------------------------------------
# Result Types
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolveError:
    """A project could not be resolved."""

    kind: Literal["feed_error", "io_error", "project_unpublished", "not_found"]
    name: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one request.

    ``release`` is None when a missing stable release was tolerated by the
    strategy; ``candidates`` then holds the choices to offer instead.
    """

    request: SelectionRequest
    catalog: ProjectCatalog
    release: ReleaseRecord | None
    candidates: tuple[ReleaseRecord, ...] = ()
    not_found: NotFound | None = None

    @property
    def degraded(self) -> bool:
        return self.release is None


@dataclass(frozen=True, slots=True)
class BatchReport:
    resolved: tuple[Resolution, ...]
    failures: tuple[ResolveError, ...]

    @property
    def ok(self) -> bool:
        return not self.failures


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class ResolveService:
    """Fetch, catalog and select releases for one or many projects.

    Policy:
    - The feed and the installed lookup are each consulted once per project.
    - A failing project never stops the rest of a batch.
    - NotFound(no_stable_release) degrades under auto/ignore; every other
      NotFound is fatal for its project.
    """

    def __init__(
        self,
        *,
        feed: FeedSource,
        installed: InstalledLookup,
        console: ConsoleProtocol,
        api_version: str,
    ) -> None:
        self._feed = feed
        self._installed = installed
        self._console = console
        self._api_version = api_version

    def load_catalog(self, name: str) -> Result[ProjectCatalog, ResolveError]:
        doc_result = self._feed.fetch(name, self._api_version)
        if isinstance(doc_result, Err):
            return Err(
                ResolveError(
                    kind="io_error" if doc_result.error.kind == "io" else "feed_error",
                    name=name,
                    message=str(doc_result.error),
                    hint="Check the feed directory and the api_version setting.",
                )
            )

        catalog_result = build_catalog(doc_result.value, self._installed.installed_version)
        if isinstance(catalog_result, Err):
            error = catalog_result.error
            return Err(
                ResolveError(kind=error.kind, name=name, message=error.message, hint=error.hint)
            )
        return Ok(catalog_result.value)

    def resolve(
        self,
        request: SelectionRequest,
        strategy: SelectionStrategy,
    ) -> Result[Resolution, ResolveError]:
        catalog_result = self.load_catalog(request.name)
        if isinstance(catalog_result, Err):
            return catalog_result
        catalog = catalog_result.value

        selected = select_release(catalog, request)
        if isinstance(selected, Ok):
            return Ok(Resolution(request=request, catalog=catalog, release=selected.value))

        not_found = selected.error
        if not_found.is_fatal(strategy):
            return Err(
                ResolveError(
                    kind="not_found",
                    name=request.name,
                    message=not_found.message,
                    hint=not_found.hint,
                )
            )

        self._console.warning(not_found.message)
        candidates: tuple[ReleaseRecord, ...] = ()
        if strategy == SelectionStrategy.AUTO:
            offered = filter_releases(catalog, show_all=False, restrict_to=request.restrict_to)
            candidates = tuple(offered.values())
        return Ok(
            Resolution(
                request=request,
                catalog=catalog,
                release=None,
                candidates=candidates,
                not_found=not_found,
            )
        )

    def resolve_all(
        self,
        requests: Iterable[SelectionRequest],
        strategy: SelectionStrategy,
    ) -> BatchReport:
        resolved: list[Resolution] = []
        failures: list[ResolveError] = []

        for request in requests:
            result = self.resolve(request, strategy)
            if isinstance(result, Err):
                self._console.error(f"{request}: {result.error.message}")
                if result.error.hint:
                    self._console.print(f"hint: {result.error.hint}", Style.DIM)
                failures.append(result.error)
                continue
            resolved.append(result.value)

        return BatchReport(resolved=tuple(resolved), failures=tuple(failures))

    def candidates(
        self,
        name: str,
        *,
        show_all: bool,
        restrict_to: RestrictTo = RestrictTo.NONE,
    ) -> Result[tuple[ProjectCatalog, dict[str, ReleaseRecord]], ResolveError]:
        """Catalog plus the filtered, display-ordered releases for ``name``."""
        catalog_result = self.load_catalog(name)
        if isinstance(catalog_result, Err):
            return catalog_result
        catalog = catalog_result.value
        return Ok((catalog, filter_releases(catalog, show_all, restrict_to)))
