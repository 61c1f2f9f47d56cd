"""Compatibility Engine - orchestrates one compatibility analysis.

The engine coordinates:
1. Resolver - source node (fatal if missing), then each target
2. Data-Flow Checker - ports, mapping, transformation, issues
3. Scorer - additive score and level
4. Pair Analyzer - strengths, challenges, recommendations
5. Remediation Planner - for pairs below SOLUTIONS_THRESHOLD
6. Alternatives Adapter - for pairs below ALTERNATIVES_THRESHOLD
7. Aggregator - overall assessment and suggested workflow

Targets are analyzed concurrently; the engine keeps no state between
requests.
"""
import asyncio
from typing import Any, Optional

import structlog

from compat_engine.compatibility.aggregator import Aggregator
from compat_engine.compatibility.alternatives import ALTERNATIVES_THRESHOLD, AlternativesAdapter
from compat_engine.compatibility.analyzer import PairAnalyzer
from compat_engine.compatibility.dataflow import DataFlowChecker
from compat_engine.compatibility.errors import CompatibilityRequestError, NodeNotFoundError
from compat_engine.compatibility.remediation import SOLUTIONS_THRESHOLD, RemediationPlanner
from compat_engine.compatibility.resolver import NodeResolver
from compat_engine.compatibility.rules import CompatibilityRules, build_rules
from compat_engine.compatibility.scorer import CompatibilityScorer
from compat_engine.config import get_settings
from compat_engine.models.compatibility import (
    AnalysisDepth,
    CompatibilityReport,
    CompatibilityRequest,
    NodeSummary,
    PairCompatibility,
    PairResult,
)
from compat_engine.models.node import NodeDescriptor, describe_ref
from compat_engine.n8n.alternatives import CatalogAlternativeFinder
from compat_engine.n8n.collaborators import AlternativeFinder, MappingAdvisor, NodeCatalog
from compat_engine.n8n.mapping_advisor import ParameterMappingAdvisor
from compat_engine.n8n.node_catalog import StaticNodeCatalog

logger = structlog.get_logger()


class CompatibilityEngine:
    """Scores how well a source node composes with candidate targets."""

    def __init__(
        self,
        catalog: Optional[NodeCatalog] = None,
        mapping_advisor: Optional[MappingAdvisor] = None,
        alternative_finder: Optional[AlternativeFinder] = None,
        rules: Optional[CompatibilityRules] = None,
        max_alternatives: Optional[int] = None,
    ):
        settings = get_settings()
        catalog = catalog or StaticNodeCatalog()

        self.rules = rules or build_rules(settings)
        self.resolver = NodeResolver(catalog)
        self.data_flow = DataFlowChecker(mapping_advisor or ParameterMappingAdvisor(), self.rules)
        self.scorer = CompatibilityScorer(self.rules)
        self.analyzer = PairAnalyzer()
        self.planner = RemediationPlanner()
        self.alternatives = AlternativesAdapter(
            alternative_finder or self._default_finder(catalog),
            max_alternatives=settings.max_alternatives if max_alternatives is None else max_alternatives,
        )
        self.aggregator = Aggregator(self.rules)

    @staticmethod
    def _default_finder(catalog: NodeCatalog) -> AlternativeFinder:
        if isinstance(catalog, StaticNodeCatalog):
            return CatalogAlternativeFinder(catalog)
        return CatalogAlternativeFinder()

    async def analyze(self, request: CompatibilityRequest) -> CompatibilityReport:
        """Run a full compatibility analysis.

        Raises:
            CompatibilityRequestError: source or targets missing
            NodeNotFoundError: the source node does not resolve
        """
        self._validate(request)

        logger.info(
            "compatibility_analysis_start",
            source=describe_ref(request.source_node),
            target_count=len(request.target_nodes),
            depth=request.analysis_depth.value,
        )

        try:
            source = await self.resolver.resolve(request.source_node)
        except NodeNotFoundError as e:
            logger.error("compatibility_source_not_found", identifier=describe_ref(e.identifier))
            raise NodeNotFoundError(
                e.identifier,
                f"Source node not found: {describe_ref(e.identifier)}",
            ) from e

        outcomes = await asyncio.gather(
            *[self._analyze_target(source, ref, request) for ref in request.target_nodes],
            return_exceptions=True,
        )

        results: list[PairResult] = []
        skipped: list[str] = []
        for ref, outcome in zip(request.target_nodes, outcomes):
            if isinstance(outcome, NodeNotFoundError):
                logger.warning("compatibility_target_not_found", identifier=describe_ref(ref))
                skipped.append(describe_ref(ref))
            elif isinstance(outcome, BaseException):
                # Includes CancelledError raised by a collaborator for this pair only
                logger.error(
                    "compatibility_pair_failed",
                    target=describe_ref(ref),
                    error=str(outcome),
                    error_type=type(outcome).__name__,
                )
                skipped.append(describe_ref(ref))
            else:
                results.append(outcome)

        assessment = self.aggregator.assess(results, skipped)

        suggested_workflow = None
        if request.analysis_depth == AnalysisDepth.COMPREHENSIVE:
            suggested_workflow = self.aggregator.suggest_workflow(source, results)

        report = CompatibilityReport(
            source_node=NodeSummary(
                name=source.name,
                type=source.name,
                outputs=list(source.outputs),
                capabilities=source.capability_tags(),
            ),
            compatibility_results=results,
            overall_assessment=assessment,
            suggested_workflow=suggested_workflow,
            skipped_targets=skipped,
            summary=self.aggregator.summary(results, assessment),
        )

        logger.info(
            "compatibility_analysis_complete",
            source=source.name,
            analyzed=len(results),
            skipped=len(skipped),
            average=assessment.average_compatibility,
            viability=assessment.workflow_viability.value,
        )
        return report

    def _validate(self, request: CompatibilityRequest) -> None:
        source = request.source_node
        if source is None or (isinstance(source, str) and not source.strip()):
            raise CompatibilityRequestError("Source node is required for compatibility analysis")
        if not request.target_nodes:
            raise CompatibilityRequestError("Target nodes array is required and must not be empty")

    async def _analyze_target(
        self,
        source: NodeDescriptor,
        ref: Any,
        request: CompatibilityRequest,
    ) -> PairResult:
        target = await self.resolver.resolve(ref)
        return await self.analyze_pair(source, target, request)

    async def analyze_pair(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        request: Optional[CompatibilityRequest] = None,
    ) -> PairResult:
        """Analyze one already-resolved source/target pair."""
        request = request or CompatibilityRequest()

        flow = await self.data_flow.check(source, target)
        score = self.scorer.score(source, target, flow)
        analysis = self.analyzer.analyze(flow, score, request.workflow_context)

        solutions = None
        if request.include_solutions and score.score < SOLUTIONS_THRESHOLD:
            plan = self.planner.plan(source, target, flow)
            solutions = None if plan.is_empty else plan

        alternatives = None
        if request.include_alternatives and score.score < ALTERNATIVES_THRESHOLD:
            alternatives = await self.alternatives.suggest(source, target)

        logger.debug(
            "compatibility_pair_scored",
            source=source.name,
            target=target.name,
            score=score.score,
            level=score.level.value,
        )

        return PairResult(
            target_node=NodeSummary(
                name=target.name,
                type=target.name,
                inputs=list(target.inputs),
                capabilities=target.capability_tags(),
            ),
            data_flow=flow,
            compatibility=PairCompatibility(
                score=score.score,
                level=score.level,
                factors=score.factors,
                direct_connection=flow.compatible,
                data_flow_compatible=flow.compatible,
                parameter_mapping_required=flow.mapping_required,
            ),
            analysis=analysis,
            solutions=solutions,
            alternatives=alternatives,
        )


# Singleton instance
_engine = None


def get_engine() -> CompatibilityEngine:
    """Get the singleton engine built from settings and the built-in catalog."""
    global _engine
    if _engine is None:
        _engine = CompatibilityEngine()
    return _engine


async def analyze_compatibility(**kwargs: Any) -> CompatibilityReport:
    """Convenience function: build a request from keyword arguments and analyze it."""
    return await get_engine().analyze(CompatibilityRequest(**kwargs))
