"""Utility to print compatibility reports in clean text representation."""

from compat_engine.models.compatibility import CompatibilityReport, PairResult


def print_report(report: CompatibilityReport, include_solutions: bool = False) -> str:
    """
    Convert a CompatibilityReport to a clean text representation.

    Args:
        report: Result of a compatibility analysis
        include_solutions: Include remediation plans in output (default: False)

    Returns:
        Formatted string representation of the report
    """
    lines = []

    # Header
    source = report.source_node
    lines.append("=" * 60)
    lines.append(f"  COMPATIBILITY: {_short_name(source.name)}")
    lines.append("=" * 60)
    if source.capabilities:
        lines.append(f"  Capabilities: {', '.join(source.capabilities)}")
    lines.append("")

    # Pairs
    lines.append("  TARGETS:")
    lines.append("  " + "-" * 56)

    for i, result in enumerate(report.compatibility_results, 1):
        lines.extend(_format_pair(i, result, include_solutions))

    for skipped in report.skipped_targets:
        lines.append(f"  ✗ {skipped} (not found)")

    # Overall
    overall = report.overall_assessment
    lines.append("")
    lines.append("  OVERALL:")
    lines.append("  " + "-" * 56)
    lines.append(f"  Average: {overall.average_compatibility:.0%}")
    lines.append(f"  Viability: {overall.workflow_viability.value}")
    if overall.best_matches:
        lines.append(f"  Best matches: {', '.join(_short_name(n) for n in overall.best_matches)}")
    for rec in overall.recommendations:
        lines.append(f"    • {rec}")

    # Suggested workflow
    if report.suggested_workflow:
        lines.append("")
        lines.append("  SUGGESTED WORKFLOW:")
        lines.append("  " + "-" * 56)
        for step in report.suggested_workflow.sequence:
            lines.append(f"  {_short_name(step.node)}: {step.purpose}")
            for connection in step.connections:
                lines.append(f"       → {_short_name(connection)}")
        lines.append(f"  {report.suggested_workflow.reasoning}")

    lines.append("=" * 60)
    return "\n".join(lines)


def print_report_compact(report: CompatibilityReport) -> str:
    """One line per target: icon, name, score."""
    lines = [f"📋 {_short_name(report.source_node.name)}"]
    for result in report.compatibility_results:
        lines.append(
            f"  {_get_level_icon(result.compatibility.level.value)} "
            f"{_short_name(result.name)} {result.score:.0%}"
        )
    return "\n".join(lines)


def _format_pair(index: int, result: PairResult, include_solutions: bool) -> list[str]:
    compat = result.compatibility
    icon = _get_level_icon(compat.level.value)
    lines = [
        f"  {icon} [{index}] {_short_name(result.name)}",
        f"       Score: {compat.score:.0%} ({compat.level.value})",
    ]

    for strength in result.analysis.strengths:
        lines.append(f"       + {strength}")
    for challenge in result.analysis.challenges:
        lines.append(f"       - {challenge}")
    for rec in result.analysis.recommendations:
        lines.append(f"       → {rec}")

    if include_solutions and result.solutions:
        if result.solutions.intermediate_nodes:
            lines.append(f"       Intermediate: {', '.join(result.solutions.intermediate_nodes)}")
        for transformation in result.solutions.transformations or []:
            lines.append(f"       Transform: {transformation}")

    for alt in result.alternatives or []:
        lines.append(f"       ⇄ {_short_name(alt.node)}: {alt.reason}")

    return lines


def _short_name(name: str) -> str:
    return name.replace("n8n-nodes-base.", "").replace("@n8n/n8n-nodes-langchain.", "")


def _get_level_icon(level: str) -> str:
    """Get an icon for a compatibility level."""
    icons = {
        "excellent": "🟢",
        "good": "🟢",
        "fair": "🟡",
        "poor": "🟠",
        "incompatible": "🔴",
    }
    return icons.get(level, "•")
