"""Compatibility Scorer.

Additive model over independently explainable terms:

    data_flow               +0.4 if the ports connect
    transformation_partial  +0.2 if they don't, but a transformation is expected anyway
    category                +0.2 x [category families are adjacent]
    capability              +0.2 x Jaccard(source capabilities, target capabilities)
    mapping_penalty         -0.1 if field mapping is required
    workflow_idiom          +bonus of the best matching idiom

The sum is clamped to [0, 1]. Weights come from the rules registry.
"""
from compat_engine.compatibility.rules import CompatibilityRules
from compat_engine.models.compatibility import (
    CompatibilityLevel,
    CompatibilityScore,
    DataFlowAssessment,
)
from compat_engine.models.node import NodeDescriptor

# (minimum score, level), checked top-down
LEVEL_THRESHOLDS: list[tuple[float, CompatibilityLevel]] = [
    (0.9, CompatibilityLevel.EXCELLENT),
    (0.7, CompatibilityLevel.GOOD),
    (0.5, CompatibilityLevel.FAIR),
    (0.3, CompatibilityLevel.POOR),
]

SCORE_PRECISION = 6


def level_for(score: float) -> CompatibilityLevel:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return CompatibilityLevel.INCOMPATIBLE


def capability_overlap(source: frozenset[str] | set[str], target: frozenset[str] | set[str]) -> float:
    """Jaccard similarity of two tag sets; 0.0 when both are empty."""
    union = set(source) | set(target)
    if not union:
        return 0.0
    return len(set(source) & set(target)) / len(union)


class CompatibilityScorer:
    """Pure scoring function bound to a rules registry."""

    def __init__(self, rules: CompatibilityRules):
        self.rules = rules

    def factors(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        flow: DataFlowAssessment,
    ) -> dict[str, float]:
        """Signed contribution of every term that applies to the pair."""
        w = self.rules.weights
        factors: dict[str, float] = {}

        if flow.compatible:
            factors["data_flow"] = w.data_flow
        elif flow.transformation_needed:
            factors["transformation_partial"] = w.transformation_partial

        if self.rules.categories_compatible(source.category, target.category):
            factors["category"] = w.category

        overlap = capability_overlap(source.capabilities, target.capabilities)
        if overlap > 0:
            factors["capability"] = overlap * w.capability

        if flow.mapping_required:
            factors["mapping_penalty"] = -w.mapping_penalty

        bonus = self.rules.idiom_bonus(source.name, target.name)
        if bonus:
            factors["workflow_idiom"] = bonus

        return factors

    def score(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        flow: DataFlowAssessment,
    ) -> CompatibilityScore:
        factors = self.factors(source, target, flow)
        total = max(0.0, min(1.0, sum(factors.values())))
        total = round(total, SCORE_PRECISION)
        return CompatibilityScore(score=total, level=level_for(total), factors=factors)
