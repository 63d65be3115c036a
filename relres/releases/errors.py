from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relres.releases.model import SelectionStrategy


NotFoundReason = Literal["no_dev_release", "version_not_found", "no_stable_release"]


@dataclass(frozen=True, slots=True)
class NotFound:
    """No release satisfied a selection request."""

    reason: NotFoundReason
    message: str
    hint: str | None = None

    def is_fatal(self, strategy: SelectionStrategy) -> bool:
        # Only a missing stable release may degrade to a candidate list.
        if self.reason != "no_stable_release":
            return True
        return strategy == SelectionStrategy.NEVER


@dataclass(frozen=True, slots=True)
class CatalogError:
    """The feed document cannot be turned into a catalog."""

    kind: Literal["project_unpublished", "feed_error"]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SelectionError:
    kind: Literal["unknown_strategy"]
    message: str
    hint: str | None = None
