"""Pipeline configuration loading and alias resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from assetflow.config import EXTENSION_TYPE_MAP
from assetflow.exceptions import ConfigError
from assetflow.models import PipelineConfig, ProcessorRole, ResourceType
from assetflow.pipeline import ProcessingPipeline
from assetflow.processors import ResourcePostProcessor, ResourcePreProcessor, to_post_processor
from assetflow.processors.lint import JsLintProcessor
from assetflow.registry import ProcessorRegistry, create_default_registry

logger = logging.getLogger(__name__)

_LINT_ALIAS = "jsHint"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from ``path``."""
    if not path.is_file():
        raise ConfigError(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected YAML mapping at top level in {path}")
    return raw


def parse_pipeline_config(raw: dict[str, Any], *, source_path: str | None = None) -> PipelineConfig:
    """Validate a raw mapping into a PipelineConfig."""
    try:
        return PipelineConfig.model_validate({**raw, "source_path": source_path})
    except ValidationError as exc:
        where = f" in {source_path}" if source_path else ""
        raise ConfigError(f"Invalid pipeline configuration{where}: {exc}") from exc


def load_pipeline_config(path: Path) -> PipelineConfig:
    """Load and validate a pipeline config file."""
    return parse_pipeline_config(load_yaml(path), source_path=str(path))


def _resolve(registry: ProcessorRegistry, role: ProcessorRole, alias: str) -> Any:
    processor = registry.lookup_by_alias(role, alias)
    if processor is None:
        available = ", ".join(registry.aliases(role)) or "none"
        raise ConfigError(
            f"Unknown {role.value}-processor alias {alias!r}. Available: {available}"
        )
    return processor


def build_pipeline(
    config: PipelineConfig,
    registry: ProcessorRegistry | None = None,
) -> ProcessingPipeline:
    """Resolve the configured aliases into a ProcessingPipeline.

    The lint processor is built from the config's linter section rather than
    taken from the registry, so its options never leak into shared state.
    """
    if registry is None:
        registry = create_default_registry()

    pre: list[ResourcePreProcessor] = []
    for alias in config.pre_processors:
        if alias == _LINT_ALIAS:
            pre.append(_lint_processor(config))
        else:
            pre.append(_resolve(registry, ProcessorRole.PRE, alias))

    post: list[ResourcePostProcessor] = []
    for alias in config.post_processors:
        if alias == _LINT_ALIAS:
            post.append(to_post_processor(_lint_processor(config)))
        else:
            post.append(_resolve(registry, ProcessorRole.POST, alias))

    logger.debug("Built pipeline: pre=%s post=%s", config.pre_processors, config.post_processors)
    return ProcessingPipeline(pre, post, minimize=config.minimize)


def _lint_processor(config: PipelineConfig) -> JsLintProcessor:
    return JsLintProcessor(config.linter.options, fail_on_error=config.linter.fail_on_error)


def detect_resource_type(path: Path) -> ResourceType:
    """Guess a resource's type from its file extension."""
    resource_type = EXTENSION_TYPE_MAP.get(path.suffix.lower())
    if resource_type is None:
        raise ConfigError(f"Cannot infer resource type of {path}; pass --type js|css")
    return resource_type
