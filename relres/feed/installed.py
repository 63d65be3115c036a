from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

__all__ = ["InstalledLookup", "NoInstalledLookup", "StaticInstalledLookup"]


@runtime_checkable
class InstalledLookup(Protocol):
    """Reports which version of a project is currently installed."""

    def installed_version(self, name: str) -> str | None: ...


class StaticInstalledLookup:
    """Installed versions from a fixed mapping (the [installed] config table)."""

    def __init__(self, versions: Mapping[str, str]) -> None:
        self._versions = dict(versions)
        self.calls: list[str] = []

    def installed_version(self, name: str) -> str | None:
        self.calls.append(name)
        return self._versions.get(name)


class NoInstalledLookup:
    def installed_version(self, name: str) -> str | None:
        return None
