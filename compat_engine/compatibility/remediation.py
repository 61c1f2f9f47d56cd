"""Remediation Planner - advisory fixes for weak pairs.

Works purely from the DataFlowAssessment; never touches the catalog or the
network.
"""
from compat_engine.models.compatibility import (
    DataFlowAssessment,
    MappingSuggestion,
    NodeConfigurations,
    RemediationPlan,
)
from compat_engine.models.node import NodeDescriptor

# Pairs scoring below this get a plan
SOLUTIONS_THRESHOLD = 0.8

INTERMEDIATE_NODES = [
    "n8n-nodes-base.code",
    "n8n-nodes-base.set",
    "n8n-nodes-base.merge",
    "n8n-nodes-base.filter",
]

TRANSFORMATIONS = [
    "Convert data format using a Code node",
    "Apply data filtering and validation",
    "Normalize field names and structures",
]


def build_mapping_code(suggestions: list[MappingSuggestion]) -> str:
    """Code-node snippet with one line per suggested field pair."""
    lines = ["// Data mapping generated from field suggestions", "return items.map(item => ({"]
    for suggestion in suggestions:
        comment = f"  // {suggestion.transformation}" if suggestion.transformation else ""
        lines.append(
            f"  '{suggestion.target_field}': item.json.{suggestion.source_field},{comment}"
        )
    lines.append("}));")
    return "\n".join(lines)


class RemediationPlanner:
    """Proposes intermediate nodes, transformations and configuration."""

    def plan(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        flow: DataFlowAssessment,
    ) -> RemediationPlan:
        plan = RemediationPlan()

        if not flow.compatible:
            plan.intermediate_nodes = list(INTERMEDIATE_NODES)

        if flow.transformation_needed:
            plan.transformations = list(TRANSFORMATIONS)

        plan.configurations = NodeConfigurations(
            source_node_config={
                "node": source.name,
                "outputFormat": "json",
                "includeMetadata": True,
            },
            target_node_config={
                "node": target.name,
                "inputValidation": True,
                "onError": "continueRegularOutput",
            },
            mapping_code=build_mapping_code(flow.mapping_suggestions),
        )

        return plan
