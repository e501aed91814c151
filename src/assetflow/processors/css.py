"""Built-in CSS processors."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlparse

from rcssmin import cssmin

from assetflow.models import Resource, ResourceType
from assetflow.processors import TextProcessor, minimize, register_processor, supported_type

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"""url\(\s*(['"]?)(?P<url>[^'")]+?)\1\s*\)""", re.IGNORECASE)

_VARIABLES_BLOCK_PATTERN = re.compile(r"@variables\s*\{(?P<body>[^}]*)\}\s*", re.IGNORECASE)
_VARIABLE_DECLARATION_PATTERN = re.compile(r"(?P<name>[\w-]+)\s*:\s*(?P<value>[^;]+);?")
_VARIABLE_REFERENCE_PATTERN = re.compile(r"var\(\s*(?P<name>[\w-]+)\s*\)")

_RULE_BLOCK_PATTERN = re.compile(r"(?P<prelude>[^{}]*)\{(?P<body>[^{}]*)\}")
_COLOR_PATTERN = re.compile(
    r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![\w-])|rgba?\([^)]*\)", re.IGNORECASE
)

_RGB_PATTERN = re.compile(
    r"rgb\(\s*(?P<r>\d{1,3})\s*,\s*(?P<g>\d{1,3})\s*,\s*(?P<b>\d{1,3})\s*\)", re.IGNORECASE
)


def _is_rewritable(url: str) -> bool:
    """Relative URLs only: no scheme, no root path, no fragment or data URI."""
    if url.startswith(("/", "#")):
        return False
    return not urlparse(url).scheme


@register_processor("cssUrlRewriting", "Rewrite relative url(...) against the resource URI")
@supported_type(ResourceType.CSS)
class CssUrlRewritingProcessor(TextProcessor):
    """Rewrite relative ``url()`` references so they resolve from the resource's location."""

    def transform(self, content: str, resource: Resource | None) -> str:
        if resource is None:
            return content

        def _rewrite(match: re.Match[str]) -> str:
            url = match.group("url").strip()
            if not _is_rewritable(url):
                return match.group(0)
            rewritten = urljoin(resource.uri, url)
            logger.debug("Rewriting url %s -> %s in %s", url, rewritten, resource.uri)
            return f"url({match.group(1)}{rewritten}{match.group(1)})"

        return _URL_PATTERN.sub(_rewrite, content)


@register_processor("cssVariables", "Expand @variables blocks and var(name) references")
@supported_type(ResourceType.CSS)
class CssVariablesProcessor(TextProcessor):
    """Replace ``var(name)`` with values declared in ``@variables { ... }`` blocks."""

    def transform(self, content: str, resource: Resource | None) -> str:
        variables: dict[str, str] = {}
        for block in _VARIABLES_BLOCK_PATTERN.finditer(content):
            for decl in _VARIABLE_DECLARATION_PATTERN.finditer(block.group("body")):
                variables[decl.group("name")] = decl.group("value").strip()

        if not variables:
            return content

        stripped = _VARIABLES_BLOCK_PATTERN.sub("", content)

        def _expand(match: re.Match[str]) -> str:
            return variables.get(match.group("name"), match.group(0))

        return _VARIABLE_REFERENCE_PATTERN.sub(_expand, stripped)


@register_processor("conformColors", "Convert rgb(r, g, b) colors to hex notation")
@supported_type(ResourceType.CSS)
class ConformColorsCssProcessor(TextProcessor):
    """Normalize ``rgb(r, g, b)`` colors to ``#rrggbb``."""

    def transform(self, content: str, resource: Resource | None) -> str:
        def _to_hex(match: re.Match[str]) -> str:
            channels = [min(int(match.group(c)), 255) for c in ("r", "g", "b")]
            return "#" + "".join(f"{c:02x}" for c in channels)

        return _RGB_PATTERN.sub(_to_hex, content)


@register_processor("variablizeColors", "Move colors into an @variables block")
@supported_type(ResourceType.CSS)
class VariablizeColorsCssProcessor(TextProcessor):
    """Replace every color in declarations with ``var(colorN)``.

    The colors are declared once, in order of first use, in an ``@variables``
    block prepended to the content; ``cssVariables`` expands them back.
    Selectors and existing ``@variables`` blocks are left alone.
    """

    def transform(self, content: str, resource: Resource | None) -> str:
        names: dict[str, str] = {}

        def _variable(match: re.Match[str]) -> str:
            color = match.group(0).lower()
            if color not in names:
                names[color] = f"color{len(names)}"
            return f"var({names[color]})"

        def _block(match: re.Match[str]) -> str:
            prelude = match.group("prelude")
            if prelude.rstrip().lower().endswith("@variables"):
                return match.group(0)
            return prelude + "{" + _COLOR_PATTERN.sub(_variable, match.group("body")) + "}"

        body = _RULE_BLOCK_PATTERN.sub(_block, content)
        if not names:
            return content

        declarations = "".join(f"  {name}: {color};\n" for color, name in names.items())
        return f"@variables {{\n{declarations}}}\n{body}"


@register_processor("cssMin", "Minify CSS (rcssmin)")
@minimize
@supported_type(ResourceType.CSS)
class CssMinProcessor(TextProcessor):
    """Minify CSS; only runs in minimize mode."""

    def transform(self, content: str, resource: Resource | None) -> str:
        return cssmin(content)
