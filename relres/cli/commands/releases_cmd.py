from __future__ import annotations

import typer

from relres.cli.commands._helpers import (
    RELEASE_COLUMNS,
    release_rows,
    resolve_error_code,
    unwrap_or_exit,
)
from relres.cli.context import build_context
from relres.core.errors import ErrorCode
from relres.core.result import Err
from relres.output.console import Style
from relres.releases.model import RestrictTo
from relres.services.resolve import ResolveService


def releases(
    project: str = typer.Argument(..., help="Project short name."),
    show_all: bool | None = typer.Option(
        None,
        "--all/--filtered",
        help="Show every release instead of one per major line and status.",
    ),
    dev: bool = typer.Option(False, "--dev", help="Only list development snapshots."),
) -> None:
    """List the releases of a project, newest major line first."""
    ctx = build_context()

    service = ResolveService(
        feed=ctx.feed,
        installed=ctx.installed,
        console=ctx.console,
        api_version=ctx.config.feed.api_version,
    )
    result = service.candidates(
        project,
        show_all=show_all if show_all is not None else ctx.config.selection.show_all,
        restrict_to=RestrictTo.DEV if dev else RestrictTo.NONE,
    )
    error_code = ErrorCode.FEED_ERROR
    if isinstance(result, Err):
        error_code = resolve_error_code(result.error)
    catalog, offered = unwrap_or_exit(result, ctx, error_code)

    ctx.console.header(f"{catalog.title or catalog.name} ({catalog.api_version or '-'})")
    if not offered:
        ctx.console.warning("no releases found")
        return
    ctx.console.table(RELEASE_COLUMNS, release_rows(offered.values()))
    recommended = catalog.recommended
    if recommended is not None and not dev:
        ctx.console.info(f"recommended: {recommended.version}")
    if catalog.link:
        ctx.console.print(catalog.link, Style.DIM)
