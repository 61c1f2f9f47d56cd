"""Pydantic models for the compatibility engine."""
from compat_engine.models.node import (
    MAIN_PORT_TYPE,
    NodeDescriptor,
    NodeRef,
    Port,
)
from compat_engine.models.compatibility import (
    AnalysisDepth,
    Alternative,
    CompatibilityLevel,
    CompatibilityReport,
    CompatibilityRequest,
    CompatibilityScore,
    DataFlowAssessment,
    MappingSuggestion,
    NodeConfigurations,
    NodeSummary,
    OverallAssessment,
    PairAnalysis,
    PairCompatibility,
    PairResult,
    RemediationPlan,
    SuggestedWorkflow,
    WorkflowContext,
    WorkflowStep,
    WorkflowViability,
)

__all__ = [
    "MAIN_PORT_TYPE",
    "NodeDescriptor",
    "NodeRef",
    "Port",
    "AnalysisDepth",
    "Alternative",
    "CompatibilityLevel",
    "CompatibilityReport",
    "CompatibilityRequest",
    "CompatibilityScore",
    "DataFlowAssessment",
    "MappingSuggestion",
    "NodeConfigurations",
    "NodeSummary",
    "OverallAssessment",
    "PairAnalysis",
    "PairCompatibility",
    "PairResult",
    "RemediationPlan",
    "SuggestedWorkflow",
    "WorkflowContext",
    "WorkflowStep",
    "WorkflowViability",
]
