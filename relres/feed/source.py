"""Release document supply.

This module provides:
- FeedSource: Protocol for fetching a project's parsed release document
- DirectoryFeedSource: reads JSON snapshots from a local directory
- MockFeedSource: predefined documents for testing

Fetching from the network and parsing the update-service markup happen
upstream; a FeedSource only hands over the already-parsed document.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from relres.core.result import Err, Ok, Result
from relres.core.structured import StrDict, as_str_dict

__all__ = [
    "DirectoryFeedSource",
    "FeedError",
    "FeedSource",
    "MockFeedSource",
]


@dataclass(frozen=True, slots=True)
class FeedError:
    """Release document could not be obtained.

    Attributes:
        name: Project short name
        message: Human-readable error message
        location: File or URL that failed, if any
        kind: "missing" (no document), "invalid" (unusable content) or
            "io" (the document exists but could not be read)
    """

    name: str
    message: str
    location: str | None = None
    kind: Literal["missing", "invalid", "io"] = "missing"

    def __str__(self) -> str:
        if self.location:
            return f"{self.name}: {self.message} ({self.location})"
        return f"{self.name}: {self.message}"


@runtime_checkable
class FeedSource(Protocol):
    """Supplies parsed release documents, one per project."""

    def fetch(self, name: str, api_version: str) -> Result[StrDict, FeedError]:
        """Return the parsed release document for ``name``.

        Args:
            name: Project short name
            api_version: Host platform version (e.g. "8.x")

        Returns:
            Ok with the document, or Err with FeedError
        """
        ...


class DirectoryFeedSource:
    """Reads ``<root>/<name>/<api_version>.json``, falling back to ``<root>/<name>.json``."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str, api_version: str) -> Path:
        versioned = self._root / name / f"{api_version}.json"
        if versioned.is_file():
            return versioned
        return self._root / f"{name}.json"

    def fetch(self, name: str, api_version: str) -> Result[StrDict, FeedError]:
        path = self.path_for(name, api_version)
        location = str(path)
        try:
            data_obj: object = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return Err(FeedError(name=name, message="no release history found", location=location))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(
                FeedError(
                    name=name,
                    message=f"invalid JSON: {e}",
                    location=location,
                    kind="invalid",
                )
            )
        except OSError as e:
            return Err(FeedError(name=name, message=str(e), location=location, kind="io"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(
                FeedError(
                    name=name,
                    message="expected JSON object",
                    location=location,
                    kind="invalid",
                )
            )
        return Ok(data)


class MockFeedSource:
    """Feed source with predefined documents, for tests.

    Usage:
        feed = MockFeedSource()
        feed.set_document("views", {"short_name": "views", "releases": []})
        result = feed.fetch("views", "8.x")
    """

    def __init__(self) -> None:
        self._responses: dict[str, StrDict | FeedError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_document(self, name: str, document: StrDict | FeedError) -> None:
        self._responses[name] = document

    def fetch(self, name: str, api_version: str) -> Result[StrDict, FeedError]:
        self.calls.append((name, api_version))

        if name not in self._responses:
            return Err(FeedError(name=name, message="no release history found (mock)"))

        response = self._responses[name]
        if isinstance(response, FeedError):
            return Err(response)
        return Ok(response)
