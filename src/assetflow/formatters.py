"""Output formatters for assetflow (table, json, markdown)."""

from __future__ import annotations

import json as json_mod
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from assetflow.models import LintReport, ProcessorDescriptor
from assetflow.rules import RuleEntry

# ---------------------------------------------------------------------------
# Lint formatters
# ---------------------------------------------------------------------------


def format_lint_table(report: LintReport, console: Console) -> None:
    """Print lint report as a Rich table."""
    console.print(f"\n[bold]SCRIPT:[/bold] {escape(report.source)}")
    if report.options:
        console.print(f"[bold]Options:[/bold] {', '.join(report.options)}")

    if report.violations:
        table = Table()
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Rule", style="dim")
        table.add_column("Reason")

        for v in report.violations:
            table.add_row(str(v.line), str(v.column), v.rule_id or "syntax", escape(v.reason))

        console.print(table)
        console.print(f"[red]{len(report.violations)} violation(s)[/red]")
    else:
        console.print("[green]No violations![/green]")
    console.print()


def format_lint_json(reports: Sequence[LintReport], console: Console) -> None:
    """Print lint reports as a JSON array."""
    console.print_json(json_mod.dumps([r.model_dump(mode="json") for r in reports], indent=2))


def format_lint_markdown(report: LintReport, console: Console) -> None:
    """Print lint report as markdown."""
    lines = [f"# Lint Report: {report.source}", ""]
    if report.violations:
        lines.extend(
            [
                "| Line | Col | Rule | Reason |",
                "|-----:|----:|------|--------|",
            ]
        )
        for v in report.violations:
            lines.append(f"| {v.line} | {v.column} | {v.rule_id or 'syntax'} | {v.reason} |")
    else:
        lines.append("No violations.")
    console.print("\n".join(lines), markup=False)


# ---------------------------------------------------------------------------
# Processor formatters
# ---------------------------------------------------------------------------


def format_processors_table(descriptors: Sequence[ProcessorDescriptor], console: Console) -> None:
    """Print registered processors as a Rich table."""
    table = Table()
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Role", style="dim")
    table.add_column("Type")
    table.add_column("Minimize only", justify="center")
    table.add_column("Description")

    for d in descriptors:
        table.add_row(
            d.alias,
            d.role.value,
            d.affinity.value if d.affinity else "any",
            "yes" if d.minimize_aware else "",
            escape(d.description),
        )

    console.print(table)


def format_rules_table(rules: Sequence[RuleEntry], console: Console) -> None:
    """Print the available lint rules as a Rich table."""
    table = Table()
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Description")

    for rule in rules:
        table.add_row(rule.rule_id, escape(rule.description))

    console.print(table)
