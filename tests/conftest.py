"""Shared test fixtures for assetflow."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import pytest

from assetflow.models import Resource, ResourceType
from assetflow.processors import (
    ResourcePostProcessor,
    ResourcePreProcessor,
    minimize,
    supported_type,
)

# ---------------------------------------------------------------------------
# Sample resources
# ---------------------------------------------------------------------------

SAMPLE_JS = """\
/* greeting helpers */
function greet(name) {
    return "Hello, " + name
}
"""

SAMPLE_CSS = """\
/* layout */
.header {
    color: rgb(255, 0, 0);
    background: url(images/bg.png);
}
"""

PIPELINE_CONFIG = """\
minimize: true
pre_processors:
  - cssUrlRewriting
  - semicolonAppender
  - jsHint
post_processors:
  - multilinecomment
linter:
  options: "undef,eqeqeq"
  fail_on_error: false
"""


# ---------------------------------------------------------------------------
# Recording processors
# ---------------------------------------------------------------------------


class TagPre(ResourcePreProcessor):
    """Appends its tag and records the resource it was given."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.seen: list[Resource | None] = []

    def process(self, resource: Resource | None, reader: TextIO, writer: TextIO) -> None:
        self.seen.append(resource)
        writer.write(reader.read() + self.tag)

    def __repr__(self) -> str:
        return f"TagPre({self.tag!r})"


class TagPost(ResourcePostProcessor):
    """Appends its tag."""

    def __init__(self, tag: str) -> None:
        self.tag = tag

    def process(self, reader: TextIO, writer: TextIO) -> None:
        writer.write(reader.read() + self.tag)

    def __repr__(self) -> str:
        return f"TagPost({self.tag!r})"


@supported_type(ResourceType.JS)
class JsTagPre(TagPre):
    pass


@supported_type(ResourceType.CSS)
class CssTagPre(TagPre):
    pass


@minimize
class MinTagPre(TagPre):
    pass


@minimize
@supported_type(ResourceType.JS)
class JsMinTagPre(TagPre):
    pass


class FailingPost(ResourcePostProcessor):
    def process(self, reader: TextIO, writer: TextIO) -> None:
        raise RuntimeError("boom")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def js_resource() -> Resource:
    return Resource(uri="/static/js/app.js", type=ResourceType.JS)


@pytest.fixture
def css_resource() -> Resource:
    return Resource(uri="/static/css/site.css", type=ResourceType.CSS)


@pytest.fixture
def js_path(tmp_path: Path) -> Path:
    p = tmp_path / "app.js"
    p.write_text(SAMPLE_JS, encoding="utf-8")
    return p


@pytest.fixture
def css_path(tmp_path: Path) -> Path:
    p = tmp_path / "site.css"
    p.write_text(SAMPLE_CSS, encoding="utf-8")
    return p


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Write a pipeline config to a temp file."""
    p = tmp_path / "assetflow.yaml"
    p.write_text(PIPELINE_CONFIG, encoding="utf-8")
    return p
