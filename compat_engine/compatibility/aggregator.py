"""Aggregator - rolls pair results into the overall assessment.

Also synthesizes the suggested workflow at comprehensive depth:
1. Seed with the source node, connected to the two strongest targets
2. Append every target scoring at least WORKFLOW_THRESHOLD, best first
3. Label each step with a purpose from the rules' name keywords
"""
import structlog

from compat_engine.compatibility.rules import CompatibilityRules
from compat_engine.models.compatibility import (
    OverallAssessment,
    PairResult,
    SuggestedWorkflow,
    WorkflowStep,
    WorkflowViability,
)
from compat_engine.models.node import NodeDescriptor

logger = structlog.get_logger()

BEST_MATCH_THRESHOLD = 0.7
MAX_BEST_MATCHES = 3
EXCELLENT_THRESHOLD = 0.9
WORKFLOW_THRESHOLD = 0.5
SEED_CONNECTIONS = 2

# (minimum average, viability), checked top-down
VIABILITY_THRESHOLDS: list[tuple[float, WorkflowViability]] = [
    (0.7, WorkflowViability.HIGH),
    (0.4, WorkflowViability.MEDIUM),
]

VIABILITY_ADVICE: dict[WorkflowViability, str] = {
    WorkflowViability.HIGH: "High compatibility - workflow should execute smoothly",
    WorkflowViability.MEDIUM: "Medium compatibility - consider intermediate processing nodes",
    WorkflowViability.LOW: "Low compatibility - significant configuration required",
}

ADVICE_NOTHING_RESOLVED = "No target nodes could be resolved - check node names against the catalog"
SOURCE_PURPOSE = "Data source/trigger"


def viability_for(average: float) -> WorkflowViability:
    for threshold, viability in VIABILITY_THRESHOLDS:
        if average >= threshold:
            return viability
    return WorkflowViability.LOW


def rank_results(results: list[PairResult]) -> list[PairResult]:
    """Descending score; equal scores keep input order."""
    return sorted(results, key=lambda result: -result.score)


class Aggregator:
    """Builds the overall assessment and the suggested workflow."""

    def __init__(self, rules: CompatibilityRules):
        self.rules = rules

    def assess(self, results: list[PairResult], skipped: list[str]) -> OverallAssessment:
        scores = [result.score for result in results]
        average = round(sum(scores) / len(scores), 6) if scores else 0.0

        best_matches = [
            result.name for result in rank_results(results)
            if result.score >= BEST_MATCH_THRESHOLD
        ][:MAX_BEST_MATCHES]

        viability = viability_for(average)

        return OverallAssessment(
            best_matches=best_matches,
            average_compatibility=average,
            workflow_viability=viability,
            recommendations=self._recommendations(results, skipped, viability),
        )

    def _recommendations(
        self,
        results: list[PairResult],
        skipped: list[str],
        viability: WorkflowViability,
    ) -> list[str]:
        if not results and skipped:
            return [ADVICE_NOTHING_RESOLVED]

        recommendations = [VIABILITY_ADVICE[viability]]
        excellent = [r for r in results if r.score >= EXCELLENT_THRESHOLD]
        if excellent:
            recommendations.append(f"{len(excellent)} excellent compatibility matches found")
        return recommendations

    def suggest_workflow(self, source: NodeDescriptor, results: list[PairResult]) -> SuggestedWorkflow:
        eligible = [r for r in rank_results(results) if r.score >= WORKFLOW_THRESHOLD]

        sequence = [
            WorkflowStep(
                node=source.name,
                purpose=SOURCE_PURPOSE,
                connections=[r.name for r in eligible[:SEED_CONNECTIONS]],
            )
        ]
        sequence.extend(
            WorkflowStep(node=r.name, purpose=self.rules.purpose_for(r.name))
            for r in eligible
        )

        if eligible:
            mean = sum(r.score for r in eligible) / len(eligible)
            reasoning = (
                "Suggested workflow based on compatibility analysis. "
                f"{len(eligible)} compatible nodes found with average compatibility of "
                f"{round(mean * 100)}%."
            )
        else:
            reasoning = (
                "No target node scored at least "
                f"{round(WORKFLOW_THRESHOLD * 100)}% compatibility; "
                "the sequence contains only the source node."
            )

        logger.debug("workflow_suggested", source=source.name, steps=len(sequence))
        return SuggestedWorkflow(sequence=sequence, reasoning=reasoning)

    def summary(self, results: list[PairResult], assessment: OverallAssessment) -> str:
        return (
            f"Compatibility analysis completed: {len(results)} nodes analyzed, "
            f"average compatibility {round(assessment.average_compatibility * 100)}%"
        )
