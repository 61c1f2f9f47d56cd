"""Compatibility analysis models.

These records describe one analysis invocation and everything it produces:
the per-pair data-flow assessment, score, narrative analysis, remediation
plan and alternatives, the overall assessment, and the optional suggested
workflow. All of them are computed fresh per request and never persisted.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from compat_engine.models.node import CamelModel, NodeRef, Port


class AnalysisDepth(str, Enum):
    """How much work an analysis does."""
    BASIC = "basic"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"


class CompatibilityLevel(str, Enum):
    """Discrete bucket for a compatibility score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    INCOMPATIBLE = "incompatible"


class WorkflowViability(str, Enum):
    """Overall viability of composing the analyzed nodes."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# REQUEST
# =============================================================================

class WorkflowContext(CamelModel):
    """Optional hints about the workflow being assembled."""

    purpose: Optional[str] = Field(None, description="Purpose or goal of the workflow")
    data_flow: Optional[str] = Field(None, description="Expected data flow pattern")
    constraints: list[str] = Field(
        default_factory=list,
        description="Constraints or requirements",
    )


class CompatibilityRequest(CamelModel):
    """One compatibility analysis invocation.

    Presence of ``source_node`` and ``target_nodes`` is checked by the engine
    so that missing values surface as a CompatibilityRequestError rather than
    a schema error.
    """

    source_node: Optional[NodeRef] = Field(
        None,
        description="Source node name or inline descriptor",
    )
    target_nodes: list[NodeRef] = Field(
        default_factory=list,
        description="Target node names or inline descriptors",
    )
    workflow_context: Optional[WorkflowContext] = None
    analysis_depth: AnalysisDepth = AnalysisDepth.DETAILED
    include_alternatives: bool = True
    include_solutions: bool = True


# =============================================================================
# PER-PAIR RESULTS
# =============================================================================

class MappingSuggestion(CamelModel):
    """A suggested source-field to target-field mapping."""

    source_field: str
    target_field: str
    transformation: Optional[str] = None


class DataFlowAssessment(CamelModel):
    """Whether a source node's outputs can feed a target node's inputs."""

    compatible: bool = False
    mapping_required: bool = False
    transformation_needed: bool = False
    supported_formats: list[str] = Field(default_factory=list)
    potential_issues: list[str] = Field(default_factory=list)
    mapping_suggestions: list[MappingSuggestion] = Field(default_factory=list)


class CompatibilityScore(CamelModel):
    """Normalized compatibility score, its level and contributing factors."""

    score: float = Field(..., ge=0.0, le=1.0)
    level: CompatibilityLevel
    factors: dict[str, float] = Field(
        default_factory=dict,
        description="Contribution of each scoring term, before clamping",
    )


class PairCompatibility(CompatibilityScore):
    """Score plus the data-flow flags callers most often look at."""

    direct_connection: bool = False
    data_flow_compatible: bool = False
    parameter_mapping_required: bool = False


class PairAnalysis(CamelModel):
    """Narrative explanation of a pair's score."""

    strengths: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class NodeConfigurations(CamelModel):
    """Suggested configuration fragments for a weak pair."""

    source_node_config: dict[str, Any] = Field(default_factory=dict)
    target_node_config: dict[str, Any] = Field(default_factory=dict)
    mapping_code: str = ""


class RemediationPlan(CamelModel):
    """Advisory fixes for a weak pair. Empty sections are left as None."""

    intermediate_nodes: Optional[list[str]] = None
    transformations: Optional[list[str]] = None
    configurations: Optional[NodeConfigurations] = None

    @property
    def is_empty(self) -> bool:
        return not (self.intermediate_nodes or self.transformations or self.configurations)


class Alternative(CamelModel):
    """A substitute for a poorly matching target node."""

    node: str
    reason: str
    benefit: str


class NodeSummary(CamelModel):
    """Compact view of a node inside a report."""

    name: str
    type: str
    inputs: Optional[list[Port]] = None
    outputs: Optional[list[Port]] = None
    capabilities: list[str] = Field(default_factory=list)


class PairResult(CamelModel):
    """Everything computed for one source/target pair."""

    target_node: NodeSummary
    data_flow: DataFlowAssessment
    compatibility: PairCompatibility
    analysis: PairAnalysis
    solutions: Optional[RemediationPlan] = None
    alternatives: Optional[list[Alternative]] = None

    @property
    def score(self) -> float:
        return self.compatibility.score

    @property
    def name(self) -> str:
        return self.target_node.name


# =============================================================================
# AGGREGATE RESULTS
# =============================================================================

class OverallAssessment(CamelModel):
    """Roll-up of all pair results."""

    best_matches: list[str] = Field(default_factory=list)
    average_compatibility: float = 0.0
    workflow_viability: WorkflowViability = WorkflowViability.LOW
    recommendations: list[str] = Field(default_factory=list)


class WorkflowStep(CamelModel):
    """One entry of a suggested workflow sequence."""

    node: str
    purpose: str
    connections: list[str] = Field(default_factory=list)


class SuggestedWorkflow(CamelModel):
    """Candidate workflow synthesized from the best-scoring pairs."""

    sequence: list[WorkflowStep] = Field(default_factory=list)
    reasoning: str = ""


class CompatibilityReport(CamelModel):
    """Response of a compatibility analysis."""

    source_node: NodeSummary
    compatibility_results: list[PairResult] = Field(default_factory=list)
    overall_assessment: OverallAssessment
    suggested_workflow: Optional[SuggestedWorkflow] = None
    skipped_targets: list[str] = Field(default_factory=list)
    summary: str = ""
