"""Capability resolution: resource-type affinity and minimize-awareness.

A processor declares its capabilities in one of two ways:

* statically, with the ``@supported_type(...)`` and ``@minimize`` class
  decorators;
* explicitly, by implementing :class:`SupportedTypeAware` and/or
  :class:`MinimizeAware`. Decorating processors (such as the role adapters)
  use this to report the capabilities of the processor they wrap.

An explicit capability always wins over static metadata.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from assetflow.exceptions import InvalidArgumentError
from assetflow.models import ProcessorCapabilities, ResourceType

_T = TypeVar("_T", bound=type)

_SUPPORTED_TYPE_ATTR = "_supported_resource_type"
_MINIMIZE_ATTR = "_minimize"


@runtime_checkable
class SupportedTypeAware(Protocol):
    """Processor that reports its resource-type affinity at runtime."""

    def get_supported_type(self) -> ResourceType | None: ...


@runtime_checkable
class MinimizeAware(Protocol):
    """Processor that reports at runtime whether it only runs in minimize mode."""

    def is_minimize(self) -> bool: ...


# ---------------------------------------------------------------------------
# Static metadata markers
# ---------------------------------------------------------------------------


def supported_type(resource_type: ResourceType) -> Callable[[_T], _T]:
    """Class decorator binding a processor class to one resource type."""

    def decorator(cls: _T) -> _T:
        setattr(cls, _SUPPORTED_TYPE_ATTR, ResourceType(resource_type))
        return cls

    return decorator


def minimize(cls: _T) -> _T:
    """Class decorator marking a processor as minimize-only."""
    setattr(cls, _MINIMIZE_ATTR, True)
    return cls


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def get_supported_type(processor: Any) -> ResourceType | None:
    """Return the processor's resource-type affinity, None meaning any type."""
    if processor is None:
        raise InvalidArgumentError("processor must not be None")
    if isinstance(processor, SupportedTypeAware):
        return processor.get_supported_type()
    return getattr(type(processor), _SUPPORTED_TYPE_ATTR, None)


def is_minimize_aware(processor: Any) -> bool:
    """Return True if the processor must be skipped outside minimize mode."""
    if processor is None:
        raise InvalidArgumentError("processor must not be None")
    if isinstance(processor, MinimizeAware):
        return bool(processor.is_minimize())
    return bool(getattr(type(processor), _MINIMIZE_ATTR, False))


def resolve(processor: Any) -> ProcessorCapabilities:
    """Resolve both capabilities of a processor."""
    return ProcessorCapabilities(
        affinity=get_supported_type(processor),
        minimize_aware=is_minimize_aware(processor),
    )
