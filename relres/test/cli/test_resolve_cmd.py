from __future__ import annotations

import pytest
import typer

from relres.cli.context import CLIContext
from relres.core.config import Config, SelectionConfig
from relres.core.errors import ErrorCode
from relres.feed.installed import StaticInstalledLookup
from relres.feed.source import FeedError, MockFeedSource
from relres.output.console import MockConsole


def _feed() -> MockFeedSource:
    feed = MockFeedSource()
    feed.set_document(
        "views",
        {
            "short_name": "views",
            "project_status": "published",
            "recommended_major": "3",
            "supported_majors": "3",
            "releases": [
                {
                    "version": "8.x-3.1",
                    "version_major": "3",
                    "date": "1400000000",
                    "download_link": "https://ftp.example.org/views-8.x-3.1.tar.gz",
                },
                {"version": "8.x-3.x-dev", "version_major": "3", "version_extra": "dev"},
            ],
        },
    )
    feed.set_document(
        "token",
        {
            "short_name": "token",
            "project_status": "published",
            "releases": [{"version": "8.x-1.x-dev", "version_major": "1", "version_extra": "dev"}],
        },
    )
    return feed


def _ctx(config: Config | None = None) -> CLIContext:
    return CLIContext(
        config=config or Config(),
        console=MockConsole(),
        feed=_feed(),
        installed=StaticInstalledLookup({}),
    )


def _install(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    monkeypatch.setattr(resolve_cmd, "build_context", lambda: ctx)


def _console(ctx: CLIContext) -> MockConsole:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


def test_resolve_prints_selected_release(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    resolve_cmd.resolve(projects=["views"], dev=False, strategy="never")

    console = _console(ctx)
    assert console.messages[0] == "OK views 8.x-3.1"
    assert len(console.find("views-8.x-3.1.tar.gz")) == 1


def test_resolve_dev_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    resolve_cmd.resolve(projects=["views"], dev=True, strategy=None)

    assert _console(ctx).messages[0] == "OK views 8.x-3.x-dev"


def test_resolve_unknown_strategy(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["views"], dev=False, strategy="sometimes")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert _console(ctx).has_error()


def test_resolve_strategy_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx(Config(selection=SelectionConfig(strategy="never")))
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["token"], dev=False, strategy=None)

    assert exc.value.exit_code == int(ErrorCode.NOT_FOUND)


def test_resolve_invalid_request(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["views-latest"], dev=False, strategy=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert len(_console(ctx).find("invalid project request")) == 1


def test_resolve_auto_lists_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    resolve_cmd.resolve(projects=["token"], dev=False, strategy="auto")

    console = _console(ctx)
    assert console.has_warning()
    assert len(console.find("Choose a release for token")) == 1
    assert any(m.startswith("8.x-1.x-dev") for m in console.messages)


def test_resolve_missing_version_exits_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["views-8.x-9.0"], dev=False, strategy="auto")

    assert exc.value.exit_code == int(ErrorCode.NOT_FOUND)


def test_resolve_batch_reports_feed_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["pathauto", "views"], dev=False, strategy="never")

    assert exc.value.exit_code == int(ErrorCode.FEED_ERROR)
    # The failing project does not stop the rest of the batch.
    assert _console(ctx).has_success()


def test_resolve_unreadable_feed_exits_io_error(monkeypatch: pytest.MonkeyPatch) -> None:
    import relres.cli.commands.resolve_cmd as resolve_cmd

    ctx = _ctx()
    assert isinstance(ctx.feed, MockFeedSource)
    ctx.feed.set_document("views", FeedError(name="views", message="Is a directory", kind="io"))
    _install(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.resolve(projects=["views", "pathauto"], dev=False, strategy="never")

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)
