"""Built-in JavaScript processors."""

from __future__ import annotations

from rjsmin import jsmin

from assetflow.models import Resource, ResourceType
from assetflow.processors import TextProcessor, minimize, register_processor, supported_type


@register_processor("semicolonAppender", "Terminate scripts with a semicolon before merging")
@supported_type(ResourceType.JS)
class SemicolonAppenderPreProcessor(TextProcessor):
    """Append ``;`` to scripts that do not end with one, so merged scripts stay valid."""

    def transform(self, content: str, resource: Resource | None) -> str:
        stripped = content.rstrip()
        if not stripped or stripped.endswith(";"):
            return content
        return content + ";"


@register_processor("jsMin", "Minify JavaScript (rjsmin)")
@minimize
@supported_type(ResourceType.JS)
class JSMinProcessor(TextProcessor):
    """Minify JavaScript; only runs in minimize mode."""

    def transform(self, content: str, resource: Resource | None) -> str:
        return jsmin(content)
