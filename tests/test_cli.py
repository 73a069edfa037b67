"""Tests for the CLI module: arg parsing, exit codes, file and prompt modes."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from lox.cli import (
    EXIT_NO_INPUT,
    EXIT_RUNTIME_ERROR,
    EXIT_SYNTAX_ERROR,
    CliOptions,
    build_parser,
    main,
    run_prompt,
    run_source,
)
from lox.reporter import Reporter

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_no_arguments(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.script is None
        assert ns.debug is False
        assert ns.tokens is False

    def test_script(self) -> None:
        ns = build_parser().parse_args(["expr.lox"])
        assert ns.script == "expr.lox"

    def test_flags(self) -> None:
        ns = build_parser().parse_args(["expr.lox", "--debug", "--tokens", "--prompt", "lox> "])
        assert ns.debug is True
        assert ns.tokens is True
        assert ns.prompt == "lox> "

    def test_too_many_arguments(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.lox", "b.lox"])


# ---------------------------------------------------------------------------
# File mode and exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "ok.lox"
        script.write_text("1 + 1 * 2 - 3 / 4;\n")
        assert main([str(script)]) == 0
        assert capsys.readouterr().out == "2.25\n"

    def test_scan_error_returns_65(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "bad.lox"
        script.write_text("1 @ 2")
        assert main([str(script)]) == EXIT_SYNTAX_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[line 1] Error: unexpected character" in captured.err

    def test_parse_error_returns_65(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "bad.lox"
        script.write_text("(1 + 2")
        assert main([str(script)]) == EXIT_SYNTAX_ERROR
        assert "Error at end: expect ')' after expression" in capsys.readouterr().err

    def test_runtime_error_returns_70(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "neg.lox"
        script.write_text('\n-"a"')
        assert main([str(script)]) == EXIT_RUNTIME_ERROR
        err = capsys.readouterr().err
        assert err == "Cannot apply negative operand on non-numeric values\n[line 2]\n"

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.lox")]) == EXIT_NO_INPUT
        assert "cannot read" in capsys.readouterr().err

    def test_whole_file_is_one_unit(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "multi.lox"
        script.write_text("1 +\n2 *\n3\n")
        assert main([str(script)]) == 0
        assert capsys.readouterr().out == "7\n"


# ---------------------------------------------------------------------------
# Debug output
# ---------------------------------------------------------------------------


class TestDebugOutput:
    def test_debug_dumps_ast(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "ast.lox"
        script.write_text("3.14 * (2 + 2)")
        assert main([str(script), "--debug"]) == 0
        captured = capsys.readouterr()
        assert "(* 3.14 (group (+ 2 2)))" in captured.err
        assert captured.out == "12.56\n"

    def test_tokens_dumps_stream(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "tok.lox"
        script.write_text('"a" + 1')
        assert main([str(script), "--tokens"]) == 0
        captured = capsys.readouterr()
        assert "a + 1 EOF" in captured.err
        assert captured.out == "a1\n"


# ---------------------------------------------------------------------------
# Interactive mode
# ---------------------------------------------------------------------------


def _options(prompt: str = "> ") -> CliOptions:
    return CliOptions(script=None, prompt=prompt, debug=False, tokens=False)


class TestPrompt:
    def test_lines_run_independently(self, capsys) -> None:
        stdin = io.StringIO('1 + 2\n"a" + "b"\n\n99\n')
        assert run_prompt(_options(), Reporter(), stdin) == 0
        out = capsys.readouterr().out
        assert out == "> 3\n> ab\n> "

    def test_errors_do_not_stop_prompt(self, capsys) -> None:
        stdin = io.StringIO('-"a"\n(1\n2 * 2\n')
        assert run_prompt(_options(), Reporter(), stdin) == 0
        captured = capsys.readouterr()
        assert "4\n" in captured.out
        assert "Cannot apply negative operand" in captured.err
        assert "expect ')' after expression" in captured.err

    def test_end_of_input_stops(self, capsys) -> None:
        assert run_prompt(_options("lox> "), Reporter(), io.StringIO("")) == 0
        assert capsys.readouterr().out == "lox> "

    def test_main_without_script_reads_stdin(self, monkeypatch, tmp_path: Path, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.stdin", io.StringIO("!nil\n\n"))
        assert main([]) == 0
        assert capsys.readouterr().out == "> true\n> "


# ---------------------------------------------------------------------------
# run_source
# ---------------------------------------------------------------------------


class TestRunSource:
    def test_prints_to_given_stream(self) -> None:
        out = io.StringIO()
        run_source("nil", Reporter(io.StringIO()), _options(), out=out)
        assert out.getvalue() == "nil\n"

    def test_syntax_error_skips_evaluation(self) -> None:
        out = io.StringIO()
        reporter = Reporter(io.StringIO())
        run_source("1 +", reporter, _options(), out=out)
        assert out.getvalue() == ""
        assert reporter.had_error
        assert not reporter.had_runtime_error


# ---------------------------------------------------------------------------
# Input size
# ---------------------------------------------------------------------------


class TestLargeInput:
    def test_long_chain_file(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "chain.lox"
        script.write_text(" + ".join(["1"] * 1500))
        assert main([str(script), "--debug"]) == 0
        assert capsys.readouterr().out == "1500\n"

    def test_deep_nesting_file(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "deep.lox"
        script.write_text("(" * 120 + "1" + ")" * 120)
        assert main([str(script)]) == EXIT_SYNTAX_ERROR
        assert "expression nested too deeply" in capsys.readouterr().err
