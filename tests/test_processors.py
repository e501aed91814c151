"""Tests for the built-in processors."""

from __future__ import annotations

import logging
from io import StringIO

import pytest

from assetflow.capabilities import get_supported_type, is_minimize_aware
from assetflow.exceptions import LinterError
from assetflow.models import Resource, ResourceType
from assetflow.processors import ResourcePreProcessor, to_post_processor
from assetflow.processors.common import MultiLineCommentStripperProcessor
from assetflow.processors.css import (
    ConformColorsCssProcessor,
    CssMinProcessor,
    CssUrlRewritingProcessor,
    CssVariablesProcessor,
    VariablizeColorsCssProcessor,
)
from assetflow.processors.js import JSMinProcessor, SemicolonAppenderPreProcessor
from assetflow.processors.lint import JsLintProcessor


def _run(processor: ResourcePreProcessor, content: str, resource: Resource | None = None) -> str:
    writer = StringIO()
    processor.process(resource, StringIO(content), writer)
    return writer.getvalue()


class TestCapabilities:
    @pytest.mark.parametrize(
        ("processor", "affinity", "minimize_aware"),
        [
            (CssUrlRewritingProcessor(), ResourceType.CSS, False),
            (CssVariablesProcessor(), ResourceType.CSS, False),
            (ConformColorsCssProcessor(), ResourceType.CSS, False),
            (VariablizeColorsCssProcessor(), ResourceType.CSS, False),
            (CssMinProcessor(), ResourceType.CSS, True),
            (SemicolonAppenderPreProcessor(), ResourceType.JS, False),
            (JSMinProcessor(), ResourceType.JS, True),
            (MultiLineCommentStripperProcessor(), None, True),
            (JsLintProcessor(), ResourceType.JS, False),
        ],
    )
    def test_declared(
        self,
        processor: ResourcePreProcessor,
        affinity: ResourceType | None,
        minimize_aware: bool,
    ) -> None:
        assert get_supported_type(processor) == affinity
        assert is_minimize_aware(processor) is minimize_aware


class TestCssUrlRewriting:
    def test_relative_url_rewritten(self, css_resource: Resource) -> None:
        css = "a { background: url(img/bg.png); }"
        result = _run(CssUrlRewritingProcessor(), css, css_resource)
        assert result == "a { background: url(/static/css/img/bg.png); }"

    def test_quotes_preserved(self, css_resource: Resource) -> None:
        css = "a { background: url('../img/x.png'); }"
        result = _run(CssUrlRewritingProcessor(), css, css_resource)
        assert "url('/static/img/x.png')" in result

    @pytest.mark.parametrize(
        "url",
        ["/abs/x.png", "http://cdn.example.com/x.png", "data:image/png;base64,AAAA", "#frag"],
    )
    def test_non_relative_untouched(self, css_resource: Resource, url: str) -> None:
        css = f"a {{ background: url({url}); }}"
        assert _run(CssUrlRewritingProcessor(), css, css_resource) == css

    def test_without_resource_untouched(self) -> None:
        css = "a { background: url(img/bg.png); }"
        writer = StringIO()
        to_post_processor(CssUrlRewritingProcessor()).process(StringIO(css), writer)
        assert writer.getvalue() == css


class TestCssVariables:
    def test_variables_expanded(self) -> None:
        css = (
            "@variables { mainColor: #333; pad: 4px; }\n"
            "a { color: var(mainColor); padding: var(pad); }"
        )
        assert _run(CssVariablesProcessor(), css) == "a { color: #333; padding: 4px; }"

    def test_unknown_reference_kept(self) -> None:
        css = "@variables { a: 1px; }\nb { margin: var(missing); }"
        assert "var(missing)" in _run(CssVariablesProcessor(), css)

    def test_no_block_untouched(self) -> None:
        css = "a { color: var(--x); }"
        assert _run(CssVariablesProcessor(), css) == css


class TestConformColors:
    def test_rgb_to_hex(self) -> None:
        assert _run(ConformColorsCssProcessor(), "a { color: rgb(255, 0, 16); }") == (
            "a { color: #ff0010; }"
        )

    def test_channels_clamped(self) -> None:
        assert _run(ConformColorsCssProcessor(), "rgb(300,0,0)") == "#ff0000"


class TestVariablizeColors:
    def test_colors_moved_to_variables(self) -> None:
        css = "a { color: #FFF; border: 1px solid rgb(0, 0, 0); }\nb { color: #fff; }"
        assert _run(VariablizeColorsCssProcessor(), css) == (
            "@variables {\n  color0: #fff;\n  color1: rgb(0, 0, 0);\n}\n"
            "a { color: var(color0); border: 1px solid var(color1); }\nb { color: var(color0); }"
        )

    def test_selectors_untouched(self) -> None:
        css = "#abc, #nav:hover { color: #123456; }"
        result = _run(VariablizeColorsCssProcessor(), css)
        assert "#abc, #nav:hover { color: var(color0); }" in result

    def test_nested_blocks(self) -> None:
        css = "@media print { a { color: #000; } }"
        assert _run(VariablizeColorsCssProcessor(), css).endswith(
            "@media print { a { color: var(color0); } }"
        )

    def test_no_colors_untouched(self) -> None:
        css = "a { margin: 0; }"
        assert _run(VariablizeColorsCssProcessor(), css) == css

    def test_expanded_back_by_css_variables(self) -> None:
        css = "a { color: #336699; background: #fff; }"
        variablized = _run(VariablizeColorsCssProcessor(), css)
        assert _run(CssVariablesProcessor(), variablized) == css


class TestMinifiers:
    def test_css_min(self) -> None:
        result = _run(CssMinProcessor(), "a {\n  color: red;\n}\n\n/* gone */\n")
        assert result.startswith("a{color:red")
        assert "gone" not in result
        assert "\n" not in result

    def test_js_min(self) -> None:
        result = _run(JSMinProcessor(), "var  a = 1;\n\n// note\nvar b = 2;\n")
        assert "note" not in result
        assert "var a=1;" in result


class TestSemicolonAppender:
    def test_appended(self) -> None:
        assert _run(SemicolonAppenderPreProcessor(), "var a = 1") == "var a = 1;"

    def test_already_terminated(self) -> None:
        assert _run(SemicolonAppenderPreProcessor(), "var a = 1;\n") == "var a = 1;\n"

    def test_empty(self) -> None:
        assert _run(SemicolonAppenderPreProcessor(), "  ") == "  "


class TestMultiLineCommentStripper:
    def test_strips_comments(self) -> None:
        source = "/* header\n * lines */a();/**/b();"
        assert _run(MultiLineCommentStripperProcessor(), source) == "a();b();"


class TestJsLintProcessor:
    def test_content_passes_through(self, js_resource: Resource) -> None:
        assert _run(JsLintProcessor("undef"), "leak = 1;", js_resource) == "leak = 1;"

    def test_violations_logged(
        self, js_resource: Resource, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="assetflow.processors.lint"):
            _run(JsLintProcessor("undef"), "leak = 1;", js_resource)
        assert "/static/js/app.js has 1 lint violation(s)" in caplog.text

    def test_callback_receives_error(self, js_resource: Resource) -> None:
        seen = []
        processor = JsLintProcessor("eqeqeq", on_error=lambda e, r: seen.append((e, r)))
        _run(processor, "a == b;", js_resource)
        [(error, resource)] = seen
        assert isinstance(error, LinterError)
        assert resource is js_resource

    def test_fail_on_error(self, js_resource: Resource) -> None:
        with pytest.raises(LinterError):
            _run(JsLintProcessor(fail_on_error=True), "al ert(1)", js_resource)

    def test_clean_script_no_callback(self, js_resource: Resource) -> None:
        seen = []
        _run(JsLintProcessor("undef", on_error=lambda e, r: seen.append(e)), "var a;", js_resource)
        assert seen == []
