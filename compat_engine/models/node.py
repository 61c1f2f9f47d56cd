"""Node descriptor models.

A NodeDescriptor is the canonical, read-only snapshot of an n8n node as the
compatibility engine sees it: identity, classification, ports and the
boolean flags its capability tags are derived from.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAIN_PORT_TYPE = "main"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Port(CamelModel):
    """A typed input or output slot on a node."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(MAIN_PORT_TYPE, description="Port type tag")

    def accepts(self, other: "Port") -> bool:
        """Whether data can flow between this port and ``other``."""
        if self.type == other.type:
            return True
        return self.type == MAIN_PORT_TYPE or other.type == MAIN_PORT_TYPE


class NodeDescriptor(CamelModel):
    """Canonical shape of a workflow node."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique node identifier, e.g. n8n-nodes-base.webhook")
    display_name: Optional[str] = Field(None, description="Human-readable name")
    description: str = Field("", description="What the node does")
    category: str = Field("", description="Catalog category")
    subcategory: Optional[str] = Field(None, description="Catalog subcategory")

    inputs: list[Port] = Field(default_factory=list)
    outputs: list[Port] = Field(default_factory=list)

    # Capability flags
    trigger_node: bool = False
    webhook_support: bool = False
    regular_node: bool = False
    codeable: bool = False

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _coerce_ports(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [{"type": port} if isinstance(port, str) else port for port in value]
        return value

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def capability_tags(self) -> list[str]:
        """Capability tags in a stable order."""
        tags = []
        if self.webhook_support:
            tags.append("webhook")
        if self.trigger_node:
            tags.append("trigger")
        if self.regular_node:
            tags.append("processing")
        if self.codeable:
            tags.append("custom-code")
        if self.subcategory:
            sub = self.subcategory.lower()
            if sub not in tags:
                tags.append(sub)
        return tags

    @property
    def capabilities(self) -> frozenset[str]:
        return frozenset(self.capability_tags())

    @property
    def is_trigger(self) -> bool:
        return self.trigger_node


# A node named by identifier, or given inline. Resolved once by the
# NodeResolver; everything downstream only sees NodeDescriptor.
NodeRef = Union[NodeDescriptor, str]


def describe_ref(ref: Any) -> str:
    """Short printable form of a node reference, for logs and diagnostics."""
    if isinstance(ref, NodeDescriptor):
        return ref.name
    return str(ref)
