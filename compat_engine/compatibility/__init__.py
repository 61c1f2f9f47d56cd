"""Node compatibility analysis modules."""
from compat_engine.compatibility.errors import (
    CompatibilityError,
    CompatibilityRequestError,
    CompatibilityRulesError,
    NodeNotFoundError,
)
from compat_engine.compatibility.rules import (
    CompatibilityRules,
    build_rules,
    default_rules,
    load_rules,
)
from compat_engine.compatibility.resolver import NodeResolver
from compat_engine.compatibility.dataflow import DataFlowChecker
from compat_engine.compatibility.scorer import CompatibilityScorer, level_for
from compat_engine.compatibility.analyzer import PairAnalyzer
from compat_engine.compatibility.remediation import RemediationPlanner
from compat_engine.compatibility.alternatives import AlternativesAdapter
from compat_engine.compatibility.aggregator import Aggregator
from compat_engine.compatibility.engine import (
    CompatibilityEngine,
    analyze_compatibility,
    get_engine,
)

__all__ = [
    "CompatibilityError",
    "CompatibilityRequestError",
    "CompatibilityRulesError",
    "NodeNotFoundError",
    "CompatibilityRules",
    "build_rules",
    "default_rules",
    "load_rules",
    "NodeResolver",
    "DataFlowChecker",
    "CompatibilityScorer",
    "level_for",
    "PairAnalyzer",
    "RemediationPlanner",
    "AlternativesAdapter",
    "Aggregator",
    "CompatibilityEngine",
    "analyze_compatibility",
    "get_engine",
]
