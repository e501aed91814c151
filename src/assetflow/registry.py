"""Alias-keyed processor registry, one mapping per role."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from assetflow.capabilities import resolve
from assetflow.exceptions import InvalidArgumentError, RegistryError
from assetflow.models import ProcessorDescriptor, ProcessorRole
from assetflow.processors import (
    Processor,
    ResourcePostProcessor,
    ResourcePreProcessor,
    get_all_processors,
    to_post_processor,
)

logger = logging.getLogger(__name__)

ProcessorMatcher = type | Callable[[Processor], bool]


def _import_builtin_processors() -> None:
    """Import built-in processor modules to trigger catalog registration."""
    import assetflow.processors.common  # noqa: F401
    import assetflow.processors.css  # noqa: F401
    import assetflow.processors.js  # noqa: F401
    import assetflow.processors.lint  # noqa: F401


class ProcessorRegistry:
    """Read-only alias lookup for pre- and post-processors.

    Each role is populated exactly once, before the registry serves any
    pipeline; afterwards the mappings cannot change, so a registry can be
    shared freely between threads.
    """

    def __init__(self) -> None:
        self._maps: dict[ProcessorRole, Mapping[str, Processor]] = {}

    def populate(self, role: ProcessorRole, processors: Mapping[str, Processor]) -> None:
        """Install the alias mapping for ``role``."""
        if processors is None:
            raise InvalidArgumentError("processors must not be None")
        role = ProcessorRole(role)
        if role in self._maps:
            raise RegistryError(f"Registry already populated for role {role.value!r}")
        self._maps[role] = MappingProxyType(dict(processors))
        logger.debug("Registered %d %s-processor(s)", len(processors), role.value)

    def is_populated(self, role: ProcessorRole) -> bool:
        return ProcessorRole(role) in self._maps

    def _mapping(self, role: ProcessorRole) -> Mapping[str, Processor]:
        return self._maps.get(ProcessorRole(role), MappingProxyType({}))

    def lookup_by_alias(self, role: ProcessorRole, alias: str) -> Processor | None:
        """Return the processor registered under ``alias``, or None."""
        return self._mapping(role).get(alias)

    def lookup_by_class(self, role: ProcessorRole, matcher: ProcessorMatcher) -> Processor | None:
        """Return the first processor matching a class or predicate, or None.

        Iteration follows registration order and stops at the first match;
        any further matches are ignored.
        """
        if matcher is None:
            raise InvalidArgumentError("matcher must not be None")
        if isinstance(matcher, type):
            cls = matcher

            def predicate(processor: Processor) -> bool:
                return isinstance(processor, cls)

        else:
            predicate = matcher

        for processor in self._mapping(role).values():
            if predicate(processor):
                return processor
        return None

    def aliases(self, role: ProcessorRole) -> list[str]:
        return list(self._mapping(role))

    def processors(self, role: ProcessorRole) -> list[Processor]:
        """Return the role's processors in registration order."""
        return list(self._mapping(role).values())

    def descriptors(self, role: ProcessorRole) -> list[ProcessorDescriptor]:
        """Describe every processor registered for ``role``.

        Aliases that come from the built-in catalog carry its description.
        """
        role = ProcessorRole(role)
        described = {entry.alias: entry.description for entry in get_all_processors()}
        result: list[ProcessorDescriptor] = []
        for alias, processor in self._mapping(role).items():
            caps = resolve(processor)
            result.append(
                ProcessorDescriptor(
                    alias=alias,
                    role=role,
                    affinity=caps.affinity,
                    minimize_aware=caps.minimize_aware,
                    description=described.get(alias, ""),
                )
            )
        return result


# ---------------------------------------------------------------------------
# Built-in maps
# ---------------------------------------------------------------------------


def create_pre_processors_map() -> dict[str, ResourcePreProcessor]:
    """Instantiate every built-in processor, keyed by alias."""
    _import_builtin_processors()
    return {entry.alias: entry.factory() for entry in get_all_processors()}


def create_post_processors_map() -> dict[str, ResourcePostProcessor]:
    """Instantiate every built-in processor behind the post-processor interface."""
    return {alias: to_post_processor(p) for alias, p in create_pre_processors_map().items()}


def create_default_registry() -> ProcessorRegistry:
    """Build a registry holding all built-in processors in both roles."""
    registry = ProcessorRegistry()
    registry.populate(ProcessorRole.PRE, create_pre_processors_map())
    registry.populate(ProcessorRole.POST, create_post_processors_map())
    return registry
