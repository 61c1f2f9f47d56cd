"""Parameter mapping advisor.

Knows which node parameters are normally filled from upstream item data
(recipients, message text, record fields) and suggests where that data
should come from. Nodes whose parameters are usually static configuration
(URLs, cron rules) have no entry and therefore need no mapping.
"""
from typing import Any, Optional

from compat_engine.models.compatibility import MappingSuggestion
from compat_engine.models.node import NodeDescriptor
from compat_engine.n8n.collaborators import MappingAdvisor

# target node -> [(source field, target field, transformation)]
FIELD_MAPPING_HINTS: dict[str, list[tuple[str, str, Optional[str]]]] = {
    "n8n-nodes-base.emailSend": [
        ("email", "toEmail", "direct mapping"),
        ("subject", "subject", "direct mapping"),
        ("body", "text", "string conversion"),
    ],
    "n8n-nodes-base.gmail": [
        ("email", "sendTo", "direct mapping"),
        ("subject", "subject", "direct mapping"),
        ("body", "message", "string conversion"),
    ],
    "n8n-nodes-base.slack": [
        ("message", "text", "string conversion"),
    ],
    "n8n-nodes-base.telegram": [
        ("chat.id", "chatId", "direct mapping"),
        ("message", "text", "string conversion"),
    ],
    "n8n-nodes-base.microsoftTeams": [
        ("message", "message", "string conversion"),
    ],
    "n8n-nodes-base.discord": [
        ("message", "content", "string conversion"),
    ],
    "n8n-nodes-base.hubspot": [
        ("email", "email", "direct mapping"),
        ("first_name", "firstName", "direct mapping"),
        ("last_name", "lastName", "direct mapping"),
    ],
    "n8n-nodes-base.salesforce": [
        ("last_name", "lastname", "direct mapping"),
        ("company", "company", "direct mapping"),
    ],
    "n8n-nodes-base.pipedrive": [
        ("name", "name", "direct mapping"),
    ],
    "n8n-nodes-base.googleSheets": [
        ("data", "columns", "object to row"),
    ],
    "n8n-nodes-base.airtable": [
        ("data", "fields", "direct mapping"),
    ],
    "n8n-nodes-base.postgres": [
        ("data", "columns", "object to row"),
    ],
    "n8n-nodes-base.mySql": [
        ("data", "columns", "object to row"),
    ],
    "n8n-nodes-base.openAi": [
        ("text", "prompt", "string conversion"),
    ],
    "@n8n/n8n-nodes-langchain.agent": [
        ("chatInput", "text", "string conversion"),
    ],
}

# Triggers that nest their payload under a key
PAYLOAD_PREFIXES: dict[str, str] = {
    "n8n-nodes-base.webhook": "body.",
    "n8n-nodes-base.formTrigger": "formData.",
}


class ParameterMappingAdvisor(MappingAdvisor):
    """MappingAdvisor backed by the static FIELD_MAPPING_HINTS table."""

    def __init__(self, hints: Optional[dict[str, list[tuple[str, str, Optional[str]]]]] = None):
        self.hints = FIELD_MAPPING_HINTS if hints is None else hints

    async def suggest_field_mappings(
        self,
        target: NodeDescriptor,
        context: dict[str, Any],
    ) -> list[MappingSuggestion]:
        source: Optional[NodeDescriptor] = context.get("source_node")
        prefix = PAYLOAD_PREFIXES.get(source.name, "") if source else ""

        return [
            MappingSuggestion(
                source_field=f"{prefix}{source_field}",
                target_field=target_field,
                transformation=transformation,
            )
            for source_field, target_field, transformation in self.hints.get(target.name, [])
        ]
