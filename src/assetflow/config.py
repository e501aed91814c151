"""Configuration constants and defaults for assetflow."""

from __future__ import annotations

from assetflow.models import ResourceType

# ---------------------------------------------------------------------------
# Linter option parsing.
# ---------------------------------------------------------------------------
OPTION_SEPARATOR: str = ","

# Flags of the form "name=value" carry a parameter (e.g. maxlen=80).
OPTION_VALUE_SEPARATOR: str = "="

# ---------------------------------------------------------------------------
# Globals known to the undef rule.
# ---------------------------------------------------------------------------
ECMASCRIPT_GLOBALS: frozenset[str] = frozenset(
    {
        "Array",
        "ArrayBuffer",
        "Boolean",
        "DataView",
        "Date",
        "decodeURI",
        "decodeURIComponent",
        "encodeURI",
        "encodeURIComponent",
        "Error",
        "escape",
        "eval",
        "EvalError",
        "Float32Array",
        "Float64Array",
        "Function",
        "Infinity",
        "Int8Array",
        "Int16Array",
        "Int32Array",
        "isFinite",
        "isNaN",
        "JSON",
        "Map",
        "Math",
        "NaN",
        "Number",
        "Object",
        "parseFloat",
        "parseInt",
        "Promise",
        "Proxy",
        "RangeError",
        "ReferenceError",
        "Reflect",
        "RegExp",
        "Set",
        "String",
        "Symbol",
        "SyntaxError",
        "TypeError",
        "Uint8Array",
        "Uint8ClampedArray",
        "Uint16Array",
        "Uint32Array",
        "undefined",
        "unescape",
        "URIError",
        "WeakMap",
        "WeakSet",
    }
)

# Extra globals switched on by environment flags.
ENVIRONMENT_GLOBALS: dict[str, frozenset[str]] = {
    "browser": frozenset(
        {
            "addEventListener",
            "atob",
            "blur",
            "btoa",
            "clearInterval",
            "clearTimeout",
            "close",
            "document",
            "Element",
            "Event",
            "event",
            "fetch",
            "focus",
            "FormData",
            "frames",
            "history",
            "HTMLElement",
            "Image",
            "localStorage",
            "location",
            "navigator",
            "Node",
            "open",
            "parent",
            "removeEventListener",
            "requestAnimationFrame",
            "screen",
            "self",
            "sessionStorage",
            "setInterval",
            "setTimeout",
            "top",
            "URL",
            "window",
            "XMLHttpRequest",
        }
    ),
    "jquery": frozenset({"$", "jQuery"}),
    "node": frozenset(
        {
            "__dirname",
            "__filename",
            "Buffer",
            "clearImmediate",
            "clearInterval",
            "clearTimeout",
            "console",
            "exports",
            "global",
            "module",
            "process",
            "require",
            "setImmediate",
            "setInterval",
            "setTimeout",
        }
    ),
    "devel": frozenset({"alert", "confirm", "console", "print", "prompt"}),
}

# Built-in constructors whose prototypes the freeze rule protects.
NATIVE_OBJECTS: frozenset[str] = frozenset(
    {
        "Array",
        "Boolean",
        "Date",
        "Error",
        "Function",
        "JSON",
        "Map",
        "Math",
        "Number",
        "Object",
        "Promise",
        "RegExp",
        "Set",
        "String",
        "Symbol",
    }
)

BITWISE_OPERATORS: frozenset[str] = frozenset({"&", "|", "^", "<<", ">>", ">>>", "~"})

# ---------------------------------------------------------------------------
# Resource detection.
# ---------------------------------------------------------------------------
EXTENSION_TYPE_MAP: dict[str, ResourceType] = {
    ".js": ResourceType.JS,
    ".mjs": ResourceType.JS,
    ".css": ResourceType.CSS,
}

# ---------------------------------------------------------------------------
# Paths.
# ---------------------------------------------------------------------------
DEFAULT_CONFIG_FILE: str = "assetflow.yaml"
