"""Lint engine: option handling, rule evaluation and violation aggregation."""

from __future__ import annotations

import logging

import esprima
from esprima.error_handler import Error as EsprimaError

# Ensure rules are registered by importing the modules.
import assetflow.rules.equality  # noqa: F401
import assetflow.rules.scope  # noqa: F401
import assetflow.rules.style  # noqa: F401
from assetflow.config import ECMASCRIPT_GLOBALS, ENVIRONMENT_GLOBALS, OPTION_SEPARATOR
from assetflow.exceptions import InvalidArgumentError, LinterError
from assetflow.models import LintReport, LintViolation
from assetflow.rules import LintContext, get_rules_for_options, option_names

logger = logging.getLogger(__name__)


def parse_options(raw: str | None) -> frozenset[str]:
    """Split a comma separated option string into trimmed, non-empty flags."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(OPTION_SEPARATOR) if part.strip())


class RuleEvaluator:
    """Parses scripts and runs the rules selected by one option set."""

    def __init__(self, options: frozenset[str]) -> None:
        self.options = options
        self.rules = get_rules_for_options(options)

        known = set(ECMASCRIPT_GLOBALS)
        for name in option_names(options):
            known.update(ENVIRONMENT_GLOBALS.get(name, ()))
        self.known_globals = frozenset(known)

    def evaluate(self, script: str) -> list[LintViolation]:
        """Return all violations in ``script``, ordered by position."""
        try:
            tree = esprima.parseScript(script, {"loc": True}).toDict()
        except EsprimaError as exc:
            return [self._syntax_violation(exc, script)]
        except RecursionError:
            # esprima parses and converts recursively; nesting past the
            # interpreter's recursion limit cannot be represented.
            logger.debug("Script exceeded the recursion limit while parsing")
            return [
                LintViolation(
                    line=1,
                    column=0,
                    reason="Script is nested too deeply to parse.",
                    evidence=script.splitlines()[0] if script else None,
                )
            ]

        ctx = LintContext(
            source=script,
            program=tree,
            options=self.options,
            known_globals=self.known_globals,
        )
        violations: list[LintViolation] = []
        for rule in self.rules:
            violations.extend(rule.func(ctx))
        return sorted(violations, key=lambda v: (v.line, v.column))

    @staticmethod
    def _syntax_violation(exc: EsprimaError, script: str) -> LintViolation:
        line = max(int(getattr(exc, "lineNumber", None) or 1), 1)
        # esprima reports 1-based columns for syntax errors.
        column = max(int(getattr(exc, "column", None) or 1) - 1, 0)
        lines = script.splitlines()
        return LintViolation(
            line=line,
            column=column,
            reason=getattr(exc, "description", None) or str(exc),
            evidence=lines[line - 1] if line <= len(lines) else None,
        )


class JsLinter:
    """JSHint-style script validator configured by a comma separated option string.

    Instances keep their options and rule evaluator as plain mutable state and
    are not safe to share between threads; use one linter per thread.
    """

    def __init__(self, options: str | None = None) -> None:
        self._options: frozenset[str] = frozenset()
        self._configured = False
        self._evaluator: RuleEvaluator | None = None
        if options is not None:
            self.set_options(options)

    @property
    def options(self) -> frozenset[str]:
        return self._options

    @property
    def configured(self) -> bool:
        return self._configured

    def set_options(self, raw: str | None) -> None:
        """Replace the active option set; None or "" means no extra rules."""
        self._options = parse_options(raw)
        self._configured = True
        self._evaluator = None

    def _get_evaluator(self) -> RuleEvaluator:
        if self._evaluator is None:
            self._evaluator = RuleEvaluator(self._options)
            logger.debug(
                "Created rule evaluator with %d rule(s) for options %s",
                len(self._evaluator.rules),
                sorted(self._options),
            )
        return self._evaluator

    def lint(self, script: str) -> list[LintViolation]:
        """Return every violation in ``script`` without raising."""
        if script is None:
            raise InvalidArgumentError("script must not be None")
        return self._get_evaluator().evaluate(script)

    def validate(self, script: str) -> None:
        """Raise LinterError carrying all violations if ``script`` has any."""
        violations = self.lint(script)
        if violations:
            raise LinterError(violations)


def run_lint(script: str, *, source: str = "<script>", options: str | None = None) -> LintReport:
    """Lint one script and wrap the outcome in a report."""
    linter = JsLinter(options)
    return LintReport(
        source=source,
        options=sorted(linter.options),
        violations=linter.lint(script),
    )
