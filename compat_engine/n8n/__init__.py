"""n8n-side collaborators: node catalog, mapping advisor, alternative finder."""
from compat_engine.n8n.collaborators import (
    AlternativeCandidate,
    AlternativeFinder,
    CollaboratorResult,
    MappingAdvisor,
    NodeCatalog,
    call_collaborator,
)
from compat_engine.n8n.node_catalog import (
    N8N_NODE_CATALOG,
    StaticNodeCatalog,
    get_node_descriptor,
)
from compat_engine.n8n.mapping_advisor import ParameterMappingAdvisor
from compat_engine.n8n.alternatives import CatalogAlternativeFinder

__all__ = [
    "AlternativeCandidate",
    "AlternativeFinder",
    "CollaboratorResult",
    "MappingAdvisor",
    "NodeCatalog",
    "call_collaborator",
    "N8N_NODE_CATALOG",
    "StaticNodeCatalog",
    "get_node_descriptor",
    "ParameterMappingAdvisor",
    "CatalogAlternativeFinder",
]
