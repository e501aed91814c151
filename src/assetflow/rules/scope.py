"""Scope lint rules: every referenced identifier must be declared."""

from __future__ import annotations

from collections.abc import Iterator

from assetflow.models import LintViolation
from assetflow.rules import LintContext, Node, children, lint_rule

_FUNCTION_TYPES = frozenset(
    {"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"}
)
_CLASS_TYPES = frozenset({"ClassDeclaration", "ClassExpression"})


def _pattern_names(pattern: Node | None) -> Iterator[str]:
    """Yield the names bound by a declaration target."""
    if not pattern:
        return
    kind = pattern.get("type")
    if kind == "Identifier":
        yield pattern["name"]
    elif kind == "ObjectPattern":
        for prop in pattern.get("properties") or []:
            if prop.get("type") == "RestElement":
                yield from _pattern_names(prop)
            else:
                yield from _pattern_names(prop.get("value"))
    elif kind == "ArrayPattern":
        for element in pattern.get("elements") or []:
            yield from _pattern_names(element)
    elif kind == "AssignmentPattern":
        yield from _pattern_names(pattern.get("left"))
    elif kind == "RestElement":
        yield from _pattern_names(pattern.get("argument"))


def _hoisted_names(root: Node) -> set[str]:
    """Collect names declared anywhere in a function body, without entering nested functions.

    Block-scoped declarations are treated as function scoped.
    """
    names: set[str] = set()
    stack = list(children(root))
    while stack:
        node = stack.pop()
        kind = node.get("type")
        if kind in ("FunctionDeclaration", "ClassDeclaration"):
            names.update(_pattern_names(node.get("id")))
            continue
        if kind in _FUNCTION_TYPES or kind == "ClassExpression":
            continue
        if kind == "VariableDeclaration":
            for declarator in node.get("declarations") or []:
                names.update(_pattern_names(declarator.get("id")))
        elif kind == "CatchClause":
            names.update(_pattern_names(node.get("param")))
        stack.extend(children(node))
    return names


# (node, visible names, True when node is a binding pattern)
_Task = tuple[Node, frozenset[str], bool]


class _UndefChecker:
    """Scope-aware identifier check, driven by an explicit work stack."""

    def __init__(self, ctx: LintContext) -> None:
        self.ctx = ctx
        self.findings: list[LintViolation] = []

    def check(self) -> list[LintViolation]:
        visible = frozenset(self.ctx.known_globals | _hoisted_names(self.ctx.program))
        pending: list[_Task] = [(child, visible, False) for child in children(self.ctx.program)]
        pending.reverse()
        while pending:
            node, scope, is_pattern = pending.pop()
            expand = self._pattern_tasks if is_pattern else self._node_tasks
            pending.extend(reversed(expand(node, scope)))
        return self.findings

    def _node_tasks(self, node: Node, visible: frozenset[str]) -> list[_Task]:
        kind = node.get("type")

        if kind == "Identifier":
            if node["name"] not in visible:
                self.findings.append(
                    self.ctx.violation(node, f"'{node['name']}' is not defined.", "undef")
                )
            return []
        if kind in _FUNCTION_TYPES:
            return self._function_tasks(node, visible)
        if kind in _CLASS_TYPES:
            tasks: list[_Task] = []
            if node.get("superClass"):
                tasks.append((node["superClass"], visible, False))
            named = visible | frozenset(_pattern_names(node.get("id")))
            tasks.append((node["body"], named, False))
            return tasks
        if kind == "VariableDeclarator":
            tasks = [(node["id"], visible, True)] if node.get("id") else []
            if node.get("init"):
                tasks.append((node["init"], visible, False))
            return tasks
        if kind == "MemberExpression":
            tasks = [(node["object"], visible, False)]
            if node.get("computed"):
                tasks.append((node["property"], visible, False))
            return tasks
        if kind in ("Property", "MethodDefinition"):
            tasks = []
            if node.get("computed"):
                tasks.append((node["key"], visible, False))
            if node.get("value"):
                tasks.append((node["value"], visible, False))
            return tasks
        if kind == "CatchClause":
            caught = visible | frozenset(_pattern_names(node.get("param")))
            return [(node["body"], caught, False)]
        if kind == "LabeledStatement":
            return [(node["body"], visible, False)]
        if kind in ("BreakStatement", "ContinueStatement", "MetaProperty"):
            return []
        if (
            kind == "UnaryExpression"
            and node.get("operator") == "typeof"
            and (node.get("argument") or {}).get("type") == "Identifier"
        ):
            # typeof on an undeclared name is the portable existence check.
            return []
        return [(child, visible, False) for child in children(node)]

    def _function_tasks(self, node: Node, visible: frozenset[str]) -> list[_Task]:
        local: set[str] = set()
        if node["type"] == "FunctionExpression":
            local.update(_pattern_names(node.get("id")))
        if node["type"] != "ArrowFunctionExpression":
            local.add("arguments")
        params = node.get("params") or []
        for param in params:
            local.update(_pattern_names(param))
        body = node.get("body") or {}
        if body.get("type") == "BlockStatement":
            local.update(_hoisted_names(body))

        inner = visible | frozenset(local)
        tasks: list[_Task] = [(param, inner, True) for param in params]
        if body:
            tasks.append((body, inner, False))
        return tasks

    def _pattern_tasks(self, pattern: Node, visible: frozenset[str]) -> list[_Task]:
        """Expand a binding pattern into its default and computed-key expressions."""
        kind = pattern.get("type")
        if kind == "AssignmentPattern":
            tasks: list[_Task] = []
            if pattern.get("left"):
                tasks.append((pattern["left"], visible, True))
            tasks.append((pattern["right"], visible, False))
            return tasks
        if kind == "ObjectPattern":
            tasks = []
            for prop in pattern.get("properties") or []:
                if prop.get("type") == "RestElement":
                    tasks.append((prop, visible, True))
                    continue
                if prop.get("computed"):
                    tasks.append((prop["key"], visible, False))
                if prop.get("value"):
                    tasks.append((prop["value"], visible, True))
            return tasks
        if kind == "ArrayPattern":
            elements = pattern.get("elements") or []
            return [(element, visible, True) for element in elements if element]
        if kind == "RestElement" and pattern.get("argument"):
            return [(pattern["argument"], visible, True)]
        return []


@lint_rule(rule_id="undef", description="Require every referenced identifier to be declared")
def check_undefined_identifiers(ctx: LintContext) -> list[LintViolation]:
    """Flag references to names that are neither declared nor known globals."""
    return _UndefChecker(ctx).check()
