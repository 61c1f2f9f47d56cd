"""Data-Flow Compatibility Checker.

Decides, for one source/target pair:
1. Whether any source output port can feed any target input port
2. Whether field mapping is required (asks the mapping advisor)
3. Whether a transformation step is needed (target category heuristic)
4. Which structural issues are present (two triggers, no output)
"""
import structlog

from compat_engine.compatibility.rules import CompatibilityRules
from compat_engine.models.compatibility import DataFlowAssessment
from compat_engine.models.node import NodeDescriptor
from compat_engine.n8n.collaborators import MappingAdvisor, call_collaborator

logger = structlog.get_logger()

SUPPORTED_FORMATS = ["json", "text", "binary"]

ISSUE_BOTH_TRIGGERS = "Both nodes are triggers - only one trigger allowed per workflow"
ISSUE_NO_OUTPUT = "Source produces no output - downstream nodes will receive no items"
ISSUE_MAPPING_UNKNOWN = "Field mapping could not be checked - mapping advisor unavailable"


def ports_compatible(source: NodeDescriptor, target: NodeDescriptor) -> bool:
    """True if some (output, input) pair has matching or generic types."""
    return any(
        output.accepts(input_port)
        for output in source.outputs
        for input_port in target.inputs
    )


def identify_potential_issues(source: NodeDescriptor, target: NodeDescriptor) -> list[str]:
    issues = []
    if source.is_trigger and target.is_trigger:
        issues.append(ISSUE_BOTH_TRIGGERS)
    if not source.outputs:
        issues.append(ISSUE_NO_OUTPUT)
    return issues


class DataFlowChecker:
    """Builds a DataFlowAssessment for a source/target pair."""

    def __init__(self, mapping_advisor: MappingAdvisor, rules: CompatibilityRules):
        self.mapping_advisor = mapping_advisor
        self.rules = rules

    async def check(self, source: NodeDescriptor, target: NodeDescriptor) -> DataFlowAssessment:
        issues = identify_potential_issues(source, target)

        mappings = await call_collaborator(
            "mapping_advisor",
            self.mapping_advisor.suggest_field_mappings,
            target,
            {"source_node": source},
        )
        suggestions = mappings.value or []
        if not mappings.available:
            logger.warning(
                "mapping_advisor_unavailable",
                source=source.name,
                target=target.name,
                error=mappings.error,
            )
            issues.append(ISSUE_MAPPING_UNKNOWN)

        return DataFlowAssessment(
            compatible=ports_compatible(source, target),
            mapping_required=len(suggestions) > 0,
            transformation_needed=self.rules.requires_transformation(target.category),
            supported_formats=list(SUPPORTED_FORMATS),
            potential_issues=issues,
            mapping_suggestions=list(suggestions),
        )
