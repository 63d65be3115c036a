"""Collaborators that supply release documents and installed versions."""

from relres.feed.installed import InstalledLookup, NoInstalledLookup, StaticInstalledLookup
from relres.feed.source import DirectoryFeedSource, FeedError, FeedSource, MockFeedSource

__all__ = [
    "DirectoryFeedSource",
    "FeedError",
    "FeedSource",
    "InstalledLookup",
    "MockFeedSource",
    "NoInstalledLookup",
    "StaticInstalledLookup",
]
