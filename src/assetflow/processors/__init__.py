"""Processor contracts, role adapters and the built-in processor catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO, TypeVar

from assetflow.capabilities import get_supported_type, is_minimize_aware, minimize, supported_type
from assetflow.exceptions import InvalidArgumentError, RegistryError
from assetflow.models import Resource, ResourceType

__all__ = [
    "Processor",
    "ProcessorEntry",
    "ResourcePostProcessor",
    "ResourcePreProcessor",
    "TextProcessor",
    "get_all_processors",
    "minimize",
    "register_processor",
    "supported_type",
    "to_post_processor",
    "to_pre_processor",
]

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class ResourcePreProcessor(ABC):
    """Transform applied to a single resource, with access to the resource."""

    @abstractmethod
    def process(self, resource: Resource | None, reader: TextIO, writer: TextIO) -> None:
        """Read content from ``reader`` and write the result to ``writer``."""


class ResourcePostProcessor(ABC):
    """Transform applied to already merged content; no resource is known."""

    @abstractmethod
    def process(self, reader: TextIO, writer: TextIO) -> None:
        """Read content from ``reader`` and write the result to ``writer``."""


Processor = ResourcePreProcessor | ResourcePostProcessor


class TextProcessor(ResourcePreProcessor):
    """Pre-processor that transforms the whole content as one string."""

    def process(self, resource: Resource | None, reader: TextIO, writer: TextIO) -> None:
        writer.write(self.transform(reader.read(), resource))

    @abstractmethod
    def transform(self, content: str, resource: Resource | None) -> str:
        """Return the transformed content."""


# ---------------------------------------------------------------------------
# Role adapters
# ---------------------------------------------------------------------------


class _PreAsPost(ResourcePostProcessor):
    """Post-processor view of a pre-processor; the resource is always None."""

    def __init__(self, pre: ResourcePreProcessor) -> None:
        self._pre = pre

    def process(self, reader: TextIO, writer: TextIO) -> None:
        self._pre.process(None, reader, writer)

    def get_supported_type(self) -> ResourceType | None:
        return get_supported_type(self._pre)

    def is_minimize(self) -> bool:
        return is_minimize_aware(self._pre)

    def __repr__(self) -> str:
        return f"to_post_processor({self._pre!r})"


class _PostAsPre(ResourcePreProcessor):
    """Pre-processor view of a post-processor; the resource is discarded."""

    def __init__(self, post: ResourcePostProcessor) -> None:
        self._post = post

    def process(self, resource: Resource | None, reader: TextIO, writer: TextIO) -> None:
        self._post.process(reader, writer)

    def get_supported_type(self) -> ResourceType | None:
        return get_supported_type(self._post)

    def is_minimize(self) -> bool:
        return is_minimize_aware(self._post)

    def __repr__(self) -> str:
        return f"to_pre_processor({self._post!r})"


def to_post_processor(pre: ResourcePreProcessor) -> ResourcePostProcessor:
    """Expose a pre-processor through the post-processor interface."""
    if pre is None:
        raise InvalidArgumentError("pre-processor must not be None")
    return _PreAsPost(pre)


def to_pre_processor(post: ResourcePostProcessor) -> ResourcePreProcessor:
    """Expose a post-processor through the pre-processor interface."""
    if post is None:
        raise InvalidArgumentError("post-processor must not be None")
    return _PostAsPre(post)


# ---------------------------------------------------------------------------
# Built-in catalog
# ---------------------------------------------------------------------------

_P = TypeVar("_P", bound=type[ResourcePreProcessor])


@dataclass
class ProcessorEntry:
    """Registered built-in processor metadata."""

    alias: str
    factory: Callable[[], ResourcePreProcessor]
    description: str


_PROCESSOR_CATALOG: dict[str, ProcessorEntry] = {}


def register_processor(alias: str, description: str) -> Callable[[_P], _P]:
    """Decorator to add a processor class to the built-in catalog."""

    def decorator(cls: _P) -> _P:
        if alias in _PROCESSOR_CATALOG:
            raise RegistryError(f"Processor alias already registered: {alias!r}")
        _PROCESSOR_CATALOG[alias] = ProcessorEntry(
            alias=alias, factory=cls, description=description
        )
        return cls

    return decorator


def get_all_processors() -> list[ProcessorEntry]:
    """Return all catalog entries in registration order."""
    return list(_PROCESSOR_CATALOG.values())
