"""Processor that validates scripts with the linter and passes content through unchanged."""

from __future__ import annotations

import logging
from collections.abc import Callable

from assetflow.exceptions import LinterError
from assetflow.linter import JsLinter
from assetflow.models import Resource, ResourceType
from assetflow.processors import TextProcessor, register_processor, supported_type

logger = logging.getLogger(__name__)

LinterErrorHandler = Callable[[LinterError, Resource | None], None]


@register_processor("jsHint", "Validate scripts against linter options")
@supported_type(ResourceType.JS)
class JsLintProcessor(TextProcessor):
    """Run each script through a fresh JsLinter.

    Violations are logged and handed to ``on_error``; with ``fail_on_error``
    the LinterError is re-raised and stops the pipeline.
    """

    def __init__(
        self,
        options: str | None = None,
        *,
        fail_on_error: bool = False,
        on_error: LinterErrorHandler | None = None,
    ) -> None:
        self.options = options
        self.fail_on_error = fail_on_error
        self.on_error = on_error

    def transform(self, content: str, resource: Resource | None) -> str:
        # A linter per call keeps this processor safe to share between threads.
        linter = JsLinter(self.options)
        try:
            linter.validate(content)
        except LinterError as exc:
            self.on_linter_error(exc, resource)
        return content

    def on_linter_error(self, error: LinterError, resource: Resource | None) -> None:
        uri = resource.uri if resource is not None else "<merged content>"
        logger.warning("%s has %d lint violation(s)", uri, len(error.violations))
        for violation in error.violations:
            logger.debug("%s:%d:%d %s", uri, violation.line, violation.column, violation.reason)
        if self.on_error is not None:
            self.on_error(error, resource)
        if self.fail_on_error:
            raise error

    def __repr__(self) -> str:
        return f"JsLintProcessor(options={self.options!r}, fail_on_error={self.fail_on_error})"
