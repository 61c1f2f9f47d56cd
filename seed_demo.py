"""Seed demo: webhook intake compatibility analysis.

This script demonstrates the full compatibility analysis with the canonical
example: a webhook that receives customer messages and could feed

1. An HTTP Request to a status API
2. A Slack notification
3. An OpenAI classification step
4. A second trigger (which should score poorly)
5. A node that is not in the catalog (which should be skipped)

Run this script to see the end-to-end report.
"""

import asyncio
import json
from pathlib import Path

SOURCE_NODE = "n8n-nodes-base.webhook"

TARGET_NODES = [
    "n8n-nodes-base.httpRequest",
    "Slack",
    "n8n-nodes-base.openAi",
    "n8n-nodes-base.scheduleTrigger",
    "n8n-nodes-base.doesNotExist",
]

WORKFLOW_CONTEXT = {
    "purpose": "customer support triage",
    "dataFlow": "webhook -> classify -> notify",
    "constraints": ["respond within 5 seconds"],
}


async def run_seed_demo():
    """Run the seed demo analysis."""

    print("=" * 60)
    print("Node Compatibility Engine - Seed Demo")
    print("Webhook Intake")
    print("=" * 60)
    print()

    try:
        from compat_engine.compatibility.engine import analyze_compatibility
        from compat_engine.utils.report_printer import print_report

        print("🔄 Starting analysis...")
        print("-" * 40)

        report = await analyze_compatibility(
            source_node=SOURCE_NODE,
            target_nodes=TARGET_NODES,
            workflow_context=WORKFLOW_CONTEXT,
            analysis_depth="comprehensive",
        )

        print()
        print(print_report(report, include_solutions=True))
        print()
        print(report.summary)

        # Save the report
        output_dir = Path(__file__).parent / "output"
        output_dir.mkdir(exist_ok=True)

        report_path = output_dir / "webhook_intake_report.json"
        with open(report_path, "w") as f:
            json.dump(report.model_dump(by_alias=True, exclude_none=True, mode="json"), f, indent=2)
        print(f"\n💾 Report saved to: {report_path}")

        return report

    except ImportError as e:
        print(f"❌ Import error: {e}")
        print("Install the package first: pip install -e .")
        return None


if __name__ == "__main__":
    asyncio.run(run_seed_demo())
