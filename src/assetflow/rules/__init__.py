"""Lint rule registry, decorator and AST helpers.

Rules receive a :class:`LintContext` holding the parsed program as the plain
ESTree dictionaries produced by ``esprima`` and return the violations they
find. A rule only runs when its ``rule_id`` appears among the linter options.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from assetflow.config import OPTION_VALUE_SEPARATOR
from assetflow.models import LintViolation

Node = dict[str, Any]

# Type alias for rule functions.
RuleFunc = Callable[["LintContext"], list[LintViolation]]

_NON_CHILD_KEYS = frozenset({"type", "loc", "range"})


@dataclass
class RuleEntry:
    """Registered lint rule metadata."""

    rule_id: str
    description: str
    func: RuleFunc


@dataclass
class LintContext:
    """Everything a rule may inspect for one script."""

    source: str
    program: Node
    options: frozenset[str] = frozenset()
    known_globals: frozenset[str] = frozenset()
    lines: list[str] = field(init=False)

    def __post_init__(self) -> None:
        self.lines = self.source.splitlines()

    def option_value(self, name: str) -> str | None:
        """Return the value of a ``name=value`` option, if configured."""
        prefix = name + OPTION_VALUE_SEPARATOR
        for option in self.options:
            if option.startswith(prefix):
                return option[len(prefix) :].strip()
        return None

    def evidence(self, line: int) -> str | None:
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return None

    def violation(self, node: Node, reason: str, rule_id: str) -> LintViolation:
        """Build a violation located at the start of ``node``."""
        start = (node.get("loc") or {}).get("start") or {}
        line = max(int(start.get("line") or 1), 1)
        column = max(int(start.get("column") or 0), 0)
        return LintViolation(
            line=line,
            column=column,
            reason=reason,
            rule_id=rule_id,
            evidence=self.evidence(line),
        )


_RULE_REGISTRY: list[RuleEntry] = []


def lint_rule(rule_id: str, description: str) -> Callable[[RuleFunc], RuleFunc]:
    """Decorator to register a lint rule function."""

    def decorator(func: RuleFunc) -> RuleFunc:
        _RULE_REGISTRY.append(RuleEntry(rule_id=rule_id, description=description, func=func))
        return func

    return decorator


def get_all_rules() -> list[RuleEntry]:
    """Return all registered lint rules."""
    return list(_RULE_REGISTRY)


def option_names(options: Iterable[str]) -> frozenset[str]:
    """Strip ``=value`` parts, leaving the bare flag names."""
    return frozenset(o.split(OPTION_VALUE_SEPARATOR, 1)[0].strip() for o in options)


def get_rules_for_options(options: Iterable[str]) -> list[RuleEntry]:
    """Return rules switched on by the given option flags."""
    names = option_names(options)
    return [r for r in _RULE_REGISTRY if r.rule_id in names]


# ---------------------------------------------------------------------------
# AST helpers
# ---------------------------------------------------------------------------


def children(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of an ESTree node."""
    for key, value in node.items():
        if key in _NON_CHILD_KEYS:
            continue
        if isinstance(value, dict) and "type" in value:
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, dict) and "type" in item:
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(children(current))))
