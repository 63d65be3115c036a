"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relres.core.errors import ErrorCode
from relres.core.result import Err, Result
from relres.output.console import Style
from relres.releases.model import ReleaseRecord
from relres.services.resolve import ResolveError

if TYPE_CHECKING:
    from relres.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def unwrap_or_exit[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> T:
    """Return the Ok value, or print the error and exit.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


RELEASE_COLUMNS = ("Release", "Date", "Status")


def release_rows(releases: Iterable[ReleaseRecord]) -> list[list[str]]:
    return [[r.version, r.date_text, r.status_text] for r in releases]


def resolve_error_code(error: ResolveError) -> ErrorCode:
    """Exit code for a failed project: unreadable feed, bad feed, or no match."""
    if error.kind == "io_error":
        return ErrorCode.IO_ERROR
    if error.kind == "not_found":
        return ErrorCode.NOT_FOUND
    return ErrorCode.FEED_ERROR
