"""Processors that apply to any resource type."""

from __future__ import annotations

import re

from assetflow.models import Resource
from assetflow.processors import TextProcessor, minimize, register_processor

# /* ... */ comments, including ones spanning several lines.
_MULTILINE_COMMENT_PATTERN = re.compile(r"/\*[^*]*\*+(?:[^/*][^*]*\*+)*/")


@register_processor("multilinecomment", "Strip /* ... */ comments")
@minimize
class MultiLineCommentStripperProcessor(TextProcessor):
    def transform(self, content: str, resource: Resource | None) -> str:
        return _MULTILINE_COMMENT_PATTERN.sub("", content)
