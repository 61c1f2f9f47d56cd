"""Alternative node finder backed by the node catalog.

Candidates come from the target's own category; they are ranked by how many
of the required features (the source node's capability tags) they carry,
keeping catalog order among equals.
"""
from typing import Optional

from compat_engine.models.node import NodeDescriptor
from compat_engine.n8n.collaborators import AlternativeCandidate, AlternativeFinder
from compat_engine.n8n.node_catalog import StaticNodeCatalog

MAX_CANDIDATES = 5


class CatalogAlternativeFinder(AlternativeFinder):
    """AlternativeFinder that searches a StaticNodeCatalog."""

    def __init__(self, catalog: Optional[StaticNodeCatalog] = None):
        self.catalog = catalog or StaticNodeCatalog()

    async def find_alternatives(
        self,
        target: NodeDescriptor,
        required_features: list[str],
    ) -> list[AlternativeCandidate]:
        if not target.category:
            return []

        candidates = [
            node for node in self.catalog.nodes_in_category(target.category)
            if node.name != target.name
        ]

        ranked = sorted(
            candidates,
            key=lambda node: -len(node.capabilities.intersection(required_features)),
        )

        return [
            self._to_candidate(node, target, required_features)
            for node in ranked[:MAX_CANDIDATES]
        ]

    def _to_candidate(
        self,
        node: NodeDescriptor,
        target: NodeDescriptor,
        required_features: list[str],
    ) -> AlternativeCandidate:
        covered = [f for f in required_features if f in node.capabilities]
        benefits = [f"Supports {feature}" for feature in covered]
        if not benefits:
            benefits.append(f"Comparable {target.category} functionality")
        if node.description:
            benefits.append(node.description)

        return AlternativeCandidate(
            node=node,
            reason=f"Same {target.category} category as {target.label}",
            benefits=benefits,
        )
