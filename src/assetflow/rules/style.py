"""Style and hazard lint rules."""

from __future__ import annotations

import logging

from assetflow.config import BITWISE_OPERATORS, NATIVE_OBJECTS
from assetflow.models import LintViolation
from assetflow.rules import LintContext, Node, lint_rule, walk

logger = logging.getLogger(__name__)

_LOOP_KEYWORDS = {
    "ForStatement": "for",
    "ForInStatement": "for",
    "ForOfStatement": "for",
    "WhileStatement": "while",
    "DoWhileStatement": "do",
}


def _is_block(node: Node | None) -> bool:
    return bool(node) and node.get("type") == "BlockStatement"


@lint_rule(rule_id="curly", description="Require braces around loop and conditional bodies")
def check_curly(ctx: LintContext) -> list[LintViolation]:
    """Flag if/else/loop bodies that are not block statements."""
    findings: list[LintViolation] = []

    def _expect_block(body: Node | None, keyword: str) -> None:
        if body and not _is_block(body):
            findings.append(
                ctx.violation(body, f"Expected '{{' around the body of '{keyword}'.", "curly")
            )

    for node in walk(ctx.program):
        kind = node.get("type")
        if kind == "IfStatement":
            _expect_block(node.get("consequent"), "if")
            alternate = node.get("alternate")
            if alternate and alternate.get("type") != "IfStatement":
                _expect_block(alternate, "else")
        elif kind in _LOOP_KEYWORDS:
            _expect_block(node.get("body"), _LOOP_KEYWORDS[kind])
    return findings


@lint_rule(rule_id="bitwise", description="Prohibit bitwise operators")
def check_bitwise(ctx: LintContext) -> list[LintViolation]:
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        kind = node.get("type")
        operator = node.get("operator") or ""
        if kind == "AssignmentExpression":
            operator = operator[:-1]
        elif kind not in ("BinaryExpression", "UnaryExpression"):
            continue
        if operator in BITWISE_OPERATORS:
            findings.append(ctx.violation(node, f"Unexpected use of '{operator}'.", "bitwise"))
    return findings


@lint_rule(rule_id="plusplus", description="Prohibit ++ and --")
def check_plusplus(ctx: LintContext) -> list[LintViolation]:
    return [
        ctx.violation(node, f"Unexpected use of '{node.get('operator')}'.", "plusplus")
        for node in walk(ctx.program)
        if node.get("type") == "UpdateExpression"
    ]


@lint_rule(rule_id="nonew", description="Prohibit 'new' used only for its side effects")
def check_nonew(ctx: LintContext) -> list[LintViolation]:
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        if node.get("type") != "ExpressionStatement":
            continue
        expression = node.get("expression") or {}
        if expression.get("type") == "NewExpression":
            findings.append(
                ctx.violation(expression, "Do not use 'new' for side effects.", "nonew")
            )
    return findings


@lint_rule(rule_id="forin", description="Require for-in bodies to filter with an if statement")
def check_forin(ctx: LintContext) -> list[LintViolation]:
    """Flag for-in loops that may iterate inherited prototype properties."""
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        if node.get("type") != "ForInStatement":
            continue
        body = node.get("body") or {}
        if _is_block(body):
            statements = body.get("body") or []
            filtered = not statements or statements[0].get("type") == "IfStatement"
        else:
            filtered = body.get("type") == "IfStatement"
        if not filtered:
            findings.append(
                ctx.violation(
                    node,
                    "The body of a for in should be wrapped in an if statement to filter "
                    "unwanted properties from the prototype.",
                    "forin",
                )
            )
    return findings


@lint_rule(rule_id="noarg", description="Prohibit arguments.caller and arguments.callee")
def check_noarg(ctx: LintContext) -> list[LintViolation]:
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        if node.get("type") != "MemberExpression" or node.get("computed"):
            continue
        target = node.get("object") or {}
        prop = node.get("property") or {}
        if target.get("name") == "arguments" and prop.get("name") in ("callee", "caller"):
            findings.append(ctx.violation(node, f"Avoid arguments.{prop['name']}.", "noarg"))
    return findings


@lint_rule(rule_id="freeze", description="Prohibit extending prototypes of native objects")
def check_freeze(ctx: LintContext) -> list[LintViolation]:
    findings: list[LintViolation] = []
    for node in walk(ctx.program):
        if node.get("type") != "AssignmentExpression":
            continue
        left = node.get("left") or {}
        if left.get("type") != "MemberExpression":
            continue
        owner = left.get("object") or {}
        if owner.get("type") != "MemberExpression" or owner.get("computed"):
            continue
        native = (owner.get("object") or {}).get("name")
        if native in NATIVE_OBJECTS and (owner.get("property") or {}).get("name") == "prototype":
            findings.append(
                ctx.violation(node, f"Extending prototype of native object: '{native}'.", "freeze")
            )
    return findings


@lint_rule(rule_id="maxlen", description="Limit line length (maxlen=N)")
def check_maxlen(ctx: LintContext) -> list[LintViolation]:
    raw = ctx.option_value("maxlen")
    if raw is None:
        return []
    try:
        limit = int(raw)
    except ValueError:
        logger.debug("Ignoring non-numeric maxlen option: %r", raw)
        return []
    if limit < 0:
        return []

    return [
        LintViolation(
            line=number,
            column=limit,
            reason="Line is too long.",
            rule_id="maxlen",
            evidence=line,
        )
        for number, line in enumerate(ctx.lines, start=1)
        if len(line) > limit
    ]
