"""Pydantic v2 models for assetflow."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ResourceType(StrEnum):
    """Web resource types a processor can be bound to."""

    JS = "js"
    CSS = "css"


class ProcessorRole(StrEnum):
    """Processor roles: pre-transform sees the resource, post-transform does not."""

    PRE = "pre"
    POST = "post"


# ---------------------------------------------------------------------------
# Processor models
# ---------------------------------------------------------------------------


class Resource(BaseModel):
    """A web resource handed to pre-transform processors."""

    model_config = ConfigDict(frozen=True)

    uri: str
    type: ResourceType
    minimize: bool = True


class ProcessorCapabilities(BaseModel):
    """Resolved affinity and minimize-awareness of one processor.

    ``affinity`` is None when the processor applies to any resource type.
    """

    model_config = ConfigDict(frozen=True)

    affinity: ResourceType | None = None
    minimize_aware: bool = False


class ProcessorDescriptor(BaseModel):
    """Registry entry describing a processor under its alias."""

    model_config = ConfigDict(frozen=True)

    alias: str
    role: ProcessorRole
    affinity: ResourceType | None = None
    minimize_aware: bool = False
    description: str = ""


# ---------------------------------------------------------------------------
# Lint models
# ---------------------------------------------------------------------------


class LintViolation(BaseModel):
    """A single syntax error or rule infraction."""

    line: int = Field(ge=1)
    column: int = Field(ge=0)
    reason: str
    rule_id: str | None = None
    evidence: str | None = None


class LintReport(BaseModel):
    """Outcome of linting one script source."""

    source: str
    options: list[str] = Field(default_factory=list)
    violations: list[LintViolation] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class LinterConfig(BaseModel):
    """Linter section of a pipeline config file."""

    options: str | None = None
    fail_on_error: bool = False


class PipelineConfig(BaseModel):
    """Processor aliases to activate and the pipeline's minimize mode."""

    minimize: bool = True
    pre_processors: list[str] = Field(default_factory=list)
    post_processors: list[str] = Field(default_factory=list)
    linter: LinterConfig = Field(default_factory=LinterConfig)
    source_path: str | None = None
