"""assetflow: processor pipeline and script linter for web resources."""

from __future__ import annotations

__version__ = "0.1.0"
