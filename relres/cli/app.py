from __future__ import annotations

import os
from pathlib import Path

import typer

from relres import __version__
from relres.cli.commands.releases_cmd import releases
from relres.cli.commands.resolve_cmd import resolve
from relres.core.config import CONFIG_ENV_VAR
from relres.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(resolve)
app.command()(releases)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_print_version,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to relres.toml (overrides $RELRES_CONFIG).",
    ),
) -> None:
    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' is not a file", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        os.environ[CONFIG_ENV_VAR] = str(path.resolve())


def main() -> None:
    app()
