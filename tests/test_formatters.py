"""Tests for assetflow.formatters."""

from __future__ import annotations

import json
from io import StringIO

from rich.console import Console

import assetflow.linter  # noqa: F401
from assetflow.formatters import (
    format_lint_json,
    format_lint_markdown,
    format_lint_table,
    format_processors_table,
    format_rules_table,
)
from assetflow.models import (
    LintReport,
    LintViolation,
    ProcessorDescriptor,
    ProcessorRole,
    ResourceType,
)
from assetflow.rules import get_all_rules


def _make_console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, force_terminal=False, width=120), buf


def _sample_report() -> LintReport:
    return LintReport(
        source="app.js",
        options=["eqeqeq", "undef"],
        violations=[
            LintViolation(line=1, column=0, reason="Unexpected token [", rule_id=None),
            LintViolation(line=3, column=8, reason="'$' is not defined.", rule_id="undef"),
        ],
    )


class TestLintTable:
    def test_violations(self) -> None:
        console, buf = _make_console()
        format_lint_table(_sample_report(), console)
        output = buf.getvalue()
        assert "app.js" in output
        assert "eqeqeq, undef" in output
        assert "Unexpected token [" in output
        assert "syntax" in output
        assert "2 violation(s)" in output

    def test_clean(self) -> None:
        console, buf = _make_console()
        format_lint_table(LintReport(source="ok.js"), console)
        assert "No violations" in buf.getvalue()


class TestLintJson:
    def test_array_of_reports(self) -> None:
        console, buf = _make_console()
        format_lint_json([_sample_report()], console)
        data = json.loads(buf.getvalue())
        assert data[0]["source"] == "app.js"
        assert data[0]["violations"][1]["rule_id"] == "undef"


class TestLintMarkdown:
    def test_table(self) -> None:
        console, buf = _make_console()
        format_lint_markdown(_sample_report(), console)
        output = buf.getvalue()
        assert "# Lint Report: app.js" in output
        assert "| 3 | 8 | undef | '$' is not defined. |" in output

    def test_clean(self) -> None:
        console, buf = _make_console()
        format_lint_markdown(LintReport(source="ok.js"), console)
        assert "No violations." in buf.getvalue()


class TestProcessorsTable:
    def test_rows(self) -> None:
        console, buf = _make_console()
        format_processors_table(
            [
                ProcessorDescriptor(
                    alias="jsMin",
                    role=ProcessorRole.PRE,
                    affinity=ResourceType.JS,
                    minimize_aware=True,
                ),
                ProcessorDescriptor(alias="multilinecomment", role=ProcessorRole.POST),
            ],
            console,
        )
        output = buf.getvalue()
        assert "jsMin" in output
        assert "any" in output
        assert "yes" in output

    def test_description_column(self) -> None:
        console, buf = _make_console()
        format_processors_table(
            [ProcessorDescriptor(alias="jsMin", role=ProcessorRole.PRE, description="Minify [js]")],
            console,
        )
        output = buf.getvalue()
        assert "Description" in output
        assert "Minify [js]" in output


class TestRulesTable:
    def test_rows(self) -> None:
        console, buf = _make_console()
        format_rules_table(get_all_rules(), console)
        output = buf.getvalue()
        assert "eqeqeq" in output
        assert "Prohibit bitwise operators" in output
