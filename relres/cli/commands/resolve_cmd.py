from __future__ import annotations

import typer

from relres.cli.commands._helpers import (
    RELEASE_COLUMNS,
    exit_with_code,
    release_rows,
    resolve_error_code,
    unwrap_or_exit,
)
from relres.cli.context import CLIContext, build_context
from relres.core.errors import ErrorCode
from relres.output.console import Style
from relres.releases.model import SelectionRequest
from relres.releases.selector import parse_request, parse_strategy
from relres.services.resolve import BatchReport, Resolution, ResolveService


def resolve(
    projects: list[str] = typer.Argument(
        ...,
        help="Projects to resolve, optionally with a version (views, views-8.x-3.x).",
    ),
    dev: bool = typer.Option(False, "--dev", help="Only consider development snapshots."),
    strategy: str | None = typer.Option(
        None,
        "--strategy",
        help="When no stable release exists: never (fail), auto (list choices), ignore (warn).",
    ),
) -> None:
    """Pick the best release for each project."""
    ctx = build_context()

    chosen = unwrap_or_exit(
        parse_strategy(strategy or ctx.config.selection.strategy),
        ctx,
        ErrorCode.USER_ERROR,
    )

    requests: list[SelectionRequest] = []
    for text in projects:
        request = parse_request(text, dev=dev)
        if request is None:
            ctx.console.error(f"invalid project request: {text}")
            ctx.console.print("hint: use NAME or NAME-VERSION (e.g. views-8.x-3.x)", Style.DIM)
            exit_with_code(int(ErrorCode.USER_ERROR))
        requests.append(request)

    service = ResolveService(
        feed=ctx.feed,
        installed=ctx.installed,
        console=ctx.console,
        api_version=ctx.config.feed.api_version,
    )
    report = service.resolve_all(requests, chosen)

    for resolution in report.resolved:
        _print_resolution(ctx, resolution)

    if not report.ok:
        exit_with_code(_exit_code(report))


def _print_resolution(ctx: CLIContext, resolution: Resolution) -> None:
    console = ctx.console
    release = resolution.release
    if release is not None:
        console.success(f"{resolution.catalog.name} {release.version}")
        details = release.date_text
        if release.status_text:
            details = f"{details}, {release.status_text}"
        console.print(details, Style.DIM)
        if release.download_link:
            console.print(release.download_link, Style.DIM)
        return

    if resolution.candidates:
        console.header(f"Choose a release for {resolution.catalog.name}:")
        console.table(RELEASE_COLUMNS, release_rows(resolution.candidates))


def _exit_code(report: BatchReport) -> int:
    codes = {resolve_error_code(f) for f in report.failures}
    for code in (ErrorCode.IO_ERROR, ErrorCode.FEED_ERROR):
        if code in codes:
            return int(code)
    return int(ErrorCode.NOT_FOUND)
