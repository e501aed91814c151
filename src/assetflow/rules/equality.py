"""Equality lint rules."""

from __future__ import annotations

from assetflow.models import LintViolation
from assetflow.rules import LintContext, lint_rule, walk

_STRICT_COUNTERPART = {"==": "===", "!=": "!=="}


@lint_rule(rule_id="eqeqeq", description="Require === and !== instead of == and !=")
def check_loose_equality(ctx: LintContext) -> list[LintViolation]:
    """Flag comparisons that use type-coercing equality."""
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        if node.get("type") != "BinaryExpression":
            continue
        operator = node.get("operator")
        if operator in _STRICT_COUNTERPART:
            findings.append(
                ctx.violation(
                    node,
                    f"Expected '{_STRICT_COUNTERPART[operator]}' and instead saw '{operator}'.",
                    "eqeqeq",
                )
            )
    return findings
