"""Node Descriptor Resolver.

Turns a NodeRef (identifier string or inline descriptor) into a
NodeDescriptor. Inline descriptors pass through untouched; identifiers are
looked up in the node catalog. This is the only place a NodeRef is
inspected.
"""
from typing import Any

import structlog

from compat_engine.compatibility.errors import NodeNotFoundError
from compat_engine.models.node import NodeDescriptor
from compat_engine.n8n.collaborators import NodeCatalog, call_collaborator

logger = structlog.get_logger()


class NodeResolver:
    """Resolves node references against a NodeCatalog."""

    def __init__(self, catalog: NodeCatalog):
        self.catalog = catalog

    async def resolve(self, ref: Any) -> NodeDescriptor:
        """Resolve ``ref`` or raise NodeNotFoundError."""
        if isinstance(ref, NodeDescriptor):
            return ref

        if isinstance(ref, dict):
            return NodeDescriptor.model_validate(ref)

        if not isinstance(ref, str) or not ref.strip():
            raise NodeNotFoundError(ref)

        lookup = await call_collaborator("node_catalog", self.catalog.resolve_node, ref)
        if not lookup.available:
            raise NodeNotFoundError(ref, f"Node catalog unavailable while resolving {ref}: {lookup.error}")
        if lookup.value is None:
            raise NodeNotFoundError(ref)

        logger.debug("node_resolved", identifier=ref, name=lookup.value.name)
        return lookup.value
