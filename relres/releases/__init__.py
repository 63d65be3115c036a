"""Release catalog, selection and filtering.

Pure functions over immutable values; nothing in this package performs I/O
or prints.
"""

from relres.releases.catalog import build_catalog
from relres.releases.errors import CatalogError, NotFound, SelectionError
from relres.releases.filter import compare_releases, filter_releases, sort_releases
from relres.releases.model import (
    ProjectCatalog,
    ReleaseRecord,
    ReleaseTerm,
    RestrictTo,
    SelectionRequest,
    SelectionStrategy,
    StatusTag,
)
from relres.releases.selector import (
    best_release,
    parse_request,
    parse_strategy,
    select_release,
)

__all__ = [
    # model
    "ProjectCatalog",
    "ReleaseRecord",
    "ReleaseTerm",
    "RestrictTo",
    "SelectionRequest",
    "SelectionStrategy",
    "StatusTag",
    # errors
    "CatalogError",
    "NotFound",
    "SelectionError",
    # operations
    "best_release",
    "build_catalog",
    "compare_releases",
    "filter_releases",
    "parse_request",
    "parse_strategy",
    "select_release",
    "sort_releases",
]
