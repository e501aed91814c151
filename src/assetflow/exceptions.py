"""Custom exceptions for assetflow."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assetflow.models import LintViolation


class AssetFlowError(Exception):
    """Base exception for all assetflow errors."""


class InvalidArgumentError(AssetFlowError, ValueError):
    """A required argument was None."""


class RegistryError(AssetFlowError):
    """Processor registration or registry population failed."""


class ConfigError(AssetFlowError):
    """Pipeline configuration could not be loaded or resolved."""


class LinterError(AssetFlowError):
    """Script validation found one or more violations."""

    def __init__(self, violations: Sequence[LintViolation]) -> None:
        if not violations:
            raise InvalidArgumentError("LinterError requires at least one violation")
        self.violations: list[LintViolation] = list(violations)
        first = self.violations[0]
        super().__init__(
            f"{len(self.violations)} violation(s), first at line {first.line}, "
            f"column {first.column}: {first.reason}"
        )
