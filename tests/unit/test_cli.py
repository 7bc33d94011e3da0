# tests/unit/test_cli.py
"""
Tests for the rxpipe CLI.
"""

from __future__ import annotations

import io

from typer.testing import CliRunner

from rxpipe.cli.cli import app

runner = CliRunner()


class TestHelp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "replace" in result.output
        assert "parse" in result.output

    def test_command_help(self):
        result = runner.invoke(app, ["replace", "--help"])

        assert result.exit_code == 0
        assert "--line-by-line" in result.output

    def test_delimiters_lists_builtins(self):
        result = runner.invoke(app, ["delimiters"])

        assert result.exit_code == 0
        assert "LINE_BY_LINE" in result.output


class TestReplaceCommand:
    def test_file_to_file(self, workdir):
        (workdir / "in.txt").write_text("foo=1\nbar=2\n")

        result = runner.invoke(app, ["replace", "in.txt", "out.txt", r"(\w+)=(\d+)", "$2=$1", "-l"])

        assert result.exit_code == 0, result.output
        assert (workdir / "out.txt").read_text() == "1=foo\n2=bar\n"

    def test_stdin_to_stdout_global_ignore_case(self):
        result = runner.invoke(app, ["replace", "-", "-", "cat", "dog", "-g", "-i"], input="Cat cat CAT")

        assert result.exit_code == 0, result.output
        assert result.output == "dog dog dog"

    def test_custom_delimiter(self):
        result = runner.invoke(app, ["replace", "-", "-", "^x", "y", "-d", ","], input="xa,xb,xc")

        assert result.exit_code == 0, result.output
        assert result.output == "ya,yb,yc"

    def test_missing_input_file(self, workdir):
        result = runner.invoke(app, ["replace", "missing.txt", "out.txt", "a", "b"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (workdir / "out.txt").exists()

    def test_line_by_line_and_delimiter_conflict(self):
        result = runner.invoke(app, ["replace", "-", "-", "a", "b", "-l", "-d", ";"], input="a")

        assert result.exit_code == 2

    def test_invalid_pattern(self):
        result = runner.invoke(app, ["replace", "-", "-", "(", "b"], input="a")

        assert result.exit_code == 2

    def test_config_file(self, workdir):
        (workdir / "rxpipe.yaml").write_text("read_size: 1\n")

        result = runner.invoke(
            app, ["replace", "-", "-", r"(\d)", "<$1>", "-g", "-c", "rxpipe.yaml"], input="a1b2"
        )

        assert result.exit_code == 0, result.output
        assert result.output == "a<1>b<2>"

    def test_bad_config_file(self, workdir):
        (workdir / "rxpipe.yaml").write_text("nope: 1\n")

        result = runner.invoke(app, ["replace", "-", "-", "a", "b", "-c", "rxpipe.yaml"], input="a")

        assert result.exit_code == 1
        assert "Error" in result.output


class TestParseCommand:
    def test_stdin_to_stdout(self):
        result = runner.invoke(app, ["parse", "-", "-", r"(\w)(\d)", "$2$1,", "-g"], input="a1 b2")

        assert result.exit_code == 0, result.output
        assert result.output == "1a,2b,"

    def test_match_failure_exits_1(self):
        result = runner.invoke(app, ["parse", "-", "-", r"(\w)(\d)", "$2$1", "-l"], input="a1\nzz\n")

        assert result.exit_code == 1
        assert "doesn't match the regex" in result.output
        assert "1a" in result.output


class TestStdio:
    def test_stdio_uses_configured_encoding(self, workdir):
        (workdir / "rxpipe.yaml").write_text("encoding: latin-1\n")

        result = runner.invoke(
            app, ["replace", "-", "-", "caf", "CAF", "-c", "rxpipe.yaml"], input="café".encode("latin-1")
        )

        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == "CAFé".encode("latin-1")

    def test_stdio_defaults_to_utf8(self):
        result = runner.invoke(app, ["replace", "-", "-", "→", "->"], input="a → b".encode("utf-8"))

        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"a -> b"

    def test_dash_maps_to_binary_buffers(self, monkeypatch):
        from rxpipe.cli import utils

        stdin = io.TextIOWrapper(io.BytesIO(b"x"))
        stdout = io.TextIOWrapper(io.BytesIO())
        monkeypatch.setattr("sys.stdin", stdin)
        monkeypatch.setattr("sys.stdout", stdout)

        assert utils.endpoint("-", reading=True) is stdin.buffer
        assert utils.endpoint("-", reading=False) is stdout.buffer
        assert utils.endpoint("data.txt", reading=True) == "data.txt"
