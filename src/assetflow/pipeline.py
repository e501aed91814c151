"""Processor selection and sequential application."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from io import StringIO
from typing import TypeVar

from assetflow.capabilities import get_supported_type, is_minimize_aware
from assetflow.exceptions import InvalidArgumentError
from assetflow.models import Resource, ResourceType
from assetflow.processors import ResourcePostProcessor, ResourcePreProcessor

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def filter_processors_to_apply(
    minimize: bool,
    resource_type: ResourceType | None,
    available: Iterable[_T] | None,
) -> list[_T]:
    """Return the processors eligible for a resource type and minimize mode, in input order.

    There are three cases for ``resource_type``:

    * None: only processors that apply to any type;
    * JS: JS processors and processors that apply to any type;
    * CSS: CSS processors and processors that apply to any type.

    Minimize-aware processors are dropped unless ``minimize`` is true.
    """
    if available is None:
        raise InvalidArgumentError("available processors must not be None")
    found: list[_T] = []
    for processor in available:
        affinity = get_supported_type(processor)
        type_satisfied = affinity is None or affinity == resource_type
        minimize_satisfied = minimize or not is_minimize_aware(processor)
        if type_satisfied and minimize_satisfied:
            found.append(processor)
    return found


@dataclass(frozen=True)
class PipelineRequest:
    """One selection request over an ordered candidate sequence."""

    minimize: bool
    resource_type: ResourceType | None
    candidates: tuple

    def eligible(self) -> list:
        return filter_processors_to_apply(self.minimize, self.resource_type, self.candidates)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def apply_pre_processors(
    resource: Resource | None,
    content: str,
    processors: Iterable[ResourcePreProcessor],
) -> str:
    """Feed ``content`` through each pre-processor in order."""
    for processor in processors:
        logger.debug("Applying %r to %s", processor, resource.uri if resource else "<content>")
        writer = StringIO()
        processor.process(resource, StringIO(content), writer)
        content = writer.getvalue()
    return content


def apply_post_processors(content: str, processors: Iterable[ResourcePostProcessor]) -> str:
    """Feed ``content`` through each post-processor in order."""
    for processor in processors:
        logger.debug("Applying %r", processor)
        writer = StringIO()
        processor.process(StringIO(content), writer)
        content = writer.getvalue()
    return content


class ProcessingPipeline:
    """Ordered pre- and post-processors applied to one resource at a time.

    Holds no per-request state; any number of resources may be processed
    concurrently provided the processors themselves are reentrant.
    """

    def __init__(
        self,
        pre_processors: Sequence[ResourcePreProcessor] = (),
        post_processors: Sequence[ResourcePostProcessor] = (),
        *,
        minimize: bool = True,
    ) -> None:
        self.pre_processors = tuple(pre_processors)
        self.post_processors = tuple(post_processors)
        self.minimize = minimize

    def process(self, resource: Resource, content: str, *, minimize: bool | None = None) -> str:
        """Apply the eligible pre- then post-processors to a resource's content.

        Pre-processors run in minimize mode only when both the pipeline and
        the resource allow it.
        """
        if resource is None:
            raise InvalidArgumentError("resource must not be None")
        group_minimize = self.minimize if minimize is None else minimize

        pre = filter_processors_to_apply(
            group_minimize and resource.minimize, resource.type, self.pre_processors
        )
        post = filter_processors_to_apply(group_minimize, resource.type, self.post_processors)
        logger.debug(
            "Processing %s with %d pre- and %d post-processor(s)", resource.uri, len(pre), len(post)
        )

        content = apply_pre_processors(resource, content, pre)
        return apply_post_processors(content, post)
