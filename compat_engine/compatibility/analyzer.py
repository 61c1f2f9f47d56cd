"""Pair Analyzer - turns score factors into strengths, challenges and advice.

Every sentence comes from the tables below; nothing is generated freely.
"""
from typing import Optional

from compat_engine.models.compatibility import (
    CompatibilityScore,
    DataFlowAssessment,
    PairAnalysis,
    WorkflowContext,
)

# score factor -> strength
STRENGTHS: dict[str, str] = {
    "data_flow": "Direct data flow compatibility",
    "category": "Complementary node categories",
    "workflow_idiom": "Common workflow pattern - proven compatibility",
}

CHALLENGE_MAPPING = "Parameter mapping required for optimal data flow"
CHALLENGE_TRANSFORMATION = "Data transformation may be needed"

ADVICE_MAPPING = "Insert a data-mapping step (Set or Code node) between the nodes"
ADVICE_INTERMEDIATE = "Consider adding an intermediate processing node"
ADVICE_PURPOSE = "Optimize configuration for {purpose} use case"
ADVICE_CONSTRAINT = "Verify the connection satisfies constraint: {constraint}"


class PairAnalyzer:
    """Rule-based narrative for one analyzed pair."""

    def analyze(
        self,
        flow: DataFlowAssessment,
        score: CompatibilityScore,
        context: Optional[WorkflowContext] = None,
    ) -> PairAnalysis:
        strengths = [text for factor, text in STRENGTHS.items() if factor in score.factors]

        challenges = []
        if flow.mapping_required:
            challenges.append(CHALLENGE_MAPPING)
        if flow.transformation_needed:
            challenges.append(CHALLENGE_TRANSFORMATION)
        challenges.extend(flow.potential_issues)

        recommendations = []
        if flow.mapping_required:
            recommendations.append(ADVICE_MAPPING)
        if not flow.compatible:
            recommendations.append(ADVICE_INTERMEDIATE)
        if context:
            if context.purpose:
                recommendations.append(ADVICE_PURPOSE.format(purpose=context.purpose))
            for constraint in context.constraints:
                recommendations.append(ADVICE_CONSTRAINT.format(constraint=constraint))

        return PairAnalysis(
            strengths=strengths,
            challenges=challenges,
            recommendations=recommendations,
        )
