"""Shared fixtures: node descriptors and rules."""
import pytest

from compat_engine.compatibility.rules import CompatibilityRules
from compat_engine.models.node import NodeDescriptor, Port


@pytest.fixture
def webhook_node() -> NodeDescriptor:
    return NodeDescriptor(
        name="n8n-nodes-base.webhook",
        display_name="Webhook",
        category="Trigger Nodes",
        outputs=[Port()],
        trigger_node=True,
        webhook_support=True,
    )


@pytest.fixture
def http_node() -> NodeDescriptor:
    return NodeDescriptor(
        name="n8n-nodes-base.httpRequest",
        display_name="HTTP Request",
        category="Core Utilities",
        inputs=[Port()],
        outputs=[Port()],
        regular_node=True,
    )


@pytest.fixture
def manual_trigger_no_output() -> NodeDescriptor:
    return NodeDescriptor(
        name="n8n-nodes-base.manualTrigger",
        category="Trigger Nodes",
        outputs=[],
        trigger_node=True,
    )


@pytest.fixture
def schedule_trigger() -> NodeDescriptor:
    return NodeDescriptor(
        name="n8n-nodes-base.scheduleTrigger",
        category="Schedule",
        outputs=[Port()],
        trigger_node=True,
    )


@pytest.fixture
def rules() -> CompatibilityRules:
    return CompatibilityRules()
