"""Interfaces for the collaborators the compatibility engine consults.

The engine never talks to a node registry, mapping advisor or alternative
finder directly; it goes through these interfaces so that the built-in
implementations can be swapped for live ones. Every call is wrapped by
``call_collaborator`` which turns a failure into an explicit
``CollaboratorResult`` instead of an exception.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import structlog

from compat_engine.models.compatibility import MappingSuggestion
from compat_engine.models.node import NodeDescriptor

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class AlternativeCandidate:
    """A substitute node proposed by an alternative finder."""

    node: NodeDescriptor
    reason: str
    benefits: list[str] = field(default_factory=list)


class NodeCatalog(ABC):
    """Source of node descriptors."""

    @abstractmethod
    async def resolve_node(self, identifier: str) -> Optional[NodeDescriptor]:
        """Return the descriptor named ``identifier``, or None if unknown."""
        pass


class MappingAdvisor(ABC):
    """Suggests field mappings for feeding data into a node."""

    @abstractmethod
    async def suggest_field_mappings(
        self,
        target: NodeDescriptor,
        context: dict[str, Any],
    ) -> list[MappingSuggestion]:
        """Suggest mappings for ``target``.

        ``context["source_node"]`` holds the upstream NodeDescriptor.
        """
        pass


class AlternativeFinder(ABC):
    """Finds substitute nodes for a poorly matching target."""

    @abstractmethod
    async def find_alternatives(
        self,
        target: NodeDescriptor,
        required_features: list[str],
    ) -> list[AlternativeCandidate]:
        """Return candidates best first."""
        pass


@dataclass
class CollaboratorResult(Generic[T]):
    """Outcome of a collaborator call: a value, or the reason there is none."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, value: T) -> "CollaboratorResult[T]":
        return cls(value=value)

    @classmethod
    def unavailable(cls, error: str) -> "CollaboratorResult[T]":
        return cls(error=error or "unavailable")


async def call_collaborator(
    collaborator: str,
    call: Callable[..., Awaitable[T]],
    *args: Any,
) -> CollaboratorResult[T]:
    """Invoke a collaborator, capturing a failure as an unavailable result."""
    try:
        value = await call(*args)
    except Exception as e:
        logger.warning(
            "collaborator_unavailable",
            collaborator=collaborator,
            error=str(e),
            error_type=type(e).__name__,
        )
        return CollaboratorResult.unavailable(str(e) or type(e).__name__)
    return CollaboratorResult.ok(value)
