"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_table in JSON and plain modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from gemauth.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("gemauth.output._is_tty", lambda: False)


@pytest.fixture()
def plain() -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True)


class TestFormatResolution:
    def test_auto_non_tty_is_plain(self, non_tty) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_tty_is_rich(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        monkeypatch.setattr("gemauth.output._is_tty", lambda: True)
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_tty_without_color_is_plain(self, monkeypatch) -> None:
        monkeypatch.setattr("gemauth.output._is_tty", lambda: True)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_format_wins(self, non_tty) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_data_goes_to_stdout(self, plain, capsys) -> None:
        plain.print_data("https://rubygems.org")
        captured = capsys.readouterr()
        assert captured.out == "https://rubygems.org\n"
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, plain, capsys) -> None:
        plain.info("Signed in.")
        plain.error("Access Denied.")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Signed in." in captured.err
        assert "Error: Access Denied." in captured.err

    def test_quiet_suppresses_info_not_errors(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        out.info("hidden")
        out.suggest("hidden too")
        out.error("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_debug_only_when_verbose(self, capsys) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("nope")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("yes")
        err = capsys.readouterr().err
        assert "nope" not in err
        assert "[debug] yes" in err

    def test_markup_in_error_is_printed_verbatim(self, capsys) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=False).error("[bold]x[/bold]")
        assert "[bold]x[/bold]" in capsys.readouterr().err


    def test_coloured_diagnostics_keep_text(self, monkeypatch, capsys) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        out = OutputManager(format=OutputFormat.PLAIN)
        out.success("Signed in.")
        out.suggest("Sign in: gemauth signin")
        out.error("Access Denied.")
        err = capsys.readouterr().err
        assert "Signed in." in err
        assert "→ Sign in: gemauth signin" in err
        assert "Error: Access Denied." in err


class TestFormatResponse:
    def test_json_mode_pretty_prints_json_text(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.JSON, no_color=True)
        out.format_response('{"name":"freebird"}', "application/json")
        assert json.loads(capsys.readouterr().out) == {"name": "freebird"}

    def test_json_mode_passes_plain_text_through(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.JSON, no_color=True)
        out.format_response("Successfully deleted gem", "text/plain")
        assert capsys.readouterr().out == "Successfully deleted gem\n"

    def test_plain_mode_list(self, plain, capsys) -> None:
        plain.format_response(["freebird", "rake"])
        assert capsys.readouterr().out == "freebird\nrake\n"


class TestTables:
    def test_json_table(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.JSON, no_color=True)
        out.print_table(["Key Name", "Active"], [[":rubygems_api_key", "*"]])
        assert json.loads(capsys.readouterr().out) == [
            {"Key Name": ":rubygems_api_key", "Active": "*"}
        ]

    def test_plain_table(self, plain, capsys) -> None:
        plain.print_table(["Key Name", "Active"], [[":other", ""]])
        assert capsys.readouterr().out == "Key Name\tActive\n:other\t\n"


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self, plain) -> None:
        set_output(plain)
        assert get_output() is plain
        reset_output()
        assert get_output() is not plain
