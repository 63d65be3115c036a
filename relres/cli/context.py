from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relres.core.config import Config, default_config_path, load_config
from relres.core.errors import ErrorCode
from relres.core.result import Err
from relres.feed.installed import InstalledLookup, StaticInstalledLookup
from relres.feed.source import DirectoryFeedSource, FeedSource
from relres.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    feed: FeedSource
    installed: InstalledLookup


def build_context() -> CLIContext:
    """Load config (if present) and wire the feed collaborators.

    A missing config file means defaults; a broken one is an error.
    """
    path = default_config_path()
    config = Config()
    if path.exists():
        config_result = load_config(path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        config = config_result.value

    feed_dir = Path(config.feed.dir).expanduser()
    if not feed_dir.is_absolute():
        feed_dir = path.parent / feed_dir

    return CLIContext(
        config=config,
        console=RichConsole(),
        feed=DirectoryFeedSource(feed_dir),
        installed=StaticInstalledLookup(config.installed),
    )
