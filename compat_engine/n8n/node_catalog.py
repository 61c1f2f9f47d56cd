"""Built-in catalog of n8n node descriptors.

This catalog gives the compatibility engine enough knowledge to work without
a live registry:
- Common trigger, utility, communication, data, business and AI nodes
- Their ports (including LangChain sub-node ports)
- The flags capability tags are derived from

Categories follow the n8n editor groupings ("Trigger Nodes", "Core
Utilities", "Communication", "Data", "Business", "AI", "Data Transformation").
"""
from typing import Optional

from compat_engine.models.node import NodeDescriptor, Port
from compat_engine.n8n.collaborators import NodeCatalog


def _node(
    name: str,
    display_name: str,
    category: str,
    description: str,
    subcategory: Optional[str] = None,
    inputs: Optional[list[str]] = None,
    outputs: Optional[list[str]] = None,
    trigger: bool = False,
    webhook: bool = False,
    codeable: bool = False,
) -> NodeDescriptor:
    """Build a descriptor. Non-trigger nodes get one main input by default."""
    if inputs is None:
        inputs = [] if trigger else ["main"]
    if outputs is None:
        outputs = ["main"]
    return NodeDescriptor(
        name=name,
        display_name=display_name,
        description=description,
        category=category,
        subcategory=subcategory,
        inputs=[Port(type=t) for t in inputs],
        outputs=[Port(type=t) for t in outputs],
        trigger_node=trigger,
        webhook_support=webhook,
        regular_node=not trigger,
        codeable=codeable,
    )


_NODES: list[NodeDescriptor] = [
    # =========================================================================
    # TRIGGERS
    # =========================================================================
    _node(
        "n8n-nodes-base.webhook", "Webhook", "Trigger Nodes",
        "Receive HTTP requests and start workflow",
        trigger=True, webhook=True,
    ),
    _node(
        "n8n-nodes-base.manualTrigger", "Manual Trigger", "Trigger Nodes",
        "Manually start the workflow",
        trigger=True,
    ),
    _node(
        "n8n-nodes-base.scheduleTrigger", "Schedule Trigger", "Trigger Nodes",
        "Trigger workflow on a schedule (cron or interval)",
        trigger=True,
    ),
    _node(
        "n8n-nodes-base.emailReadImap", "Email Trigger (IMAP)", "Trigger Nodes",
        "Trigger when new email arrives",
        trigger=True,
    ),
    _node(
        "n8n-nodes-base.formTrigger", "n8n Form Trigger", "Trigger Nodes",
        "Start a workflow when a hosted form is submitted",
        trigger=True, webhook=True,
    ),

    # =========================================================================
    # CORE UTILITIES
    # =========================================================================
    _node(
        "n8n-nodes-base.httpRequest", "HTTP Request", "Core Utilities",
        "Make HTTP requests to any API",
    ),
    _node(
        "n8n-nodes-base.respondToWebhook", "Respond to Webhook", "Core Utilities",
        "Send response back to webhook caller",
        outputs=[],
    ),
    _node(
        "n8n-nodes-base.code", "Code", "Core Utilities",
        "Run custom JavaScript or Python over the items",
        subcategory="Data Transformation", codeable=True,
    ),
    _node(
        "n8n-nodes-base.function", "Function", "Core Utilities",
        "Run custom JavaScript over all items (legacy)",
        subcategory="Data Transformation", codeable=True,
    ),
    _node(
        "n8n-nodes-base.set", "Edit Fields (Set)", "Core Utilities",
        "Add, rename or remove item fields",
        subcategory="Data Transformation",
    ),
    _node(
        "n8n-nodes-base.merge", "Merge", "Core Utilities",
        "Merge data from two inputs",
        subcategory="Flow", inputs=["main", "main"],
    ),
    _node(
        "n8n-nodes-base.if", "If", "Core Utilities",
        "Route items to true/false branches",
        subcategory="Flow", outputs=["main", "main"],
    ),
    _node(
        "n8n-nodes-base.filter", "Filter", "Core Utilities",
        "Drop items that do not match conditions",
        subcategory="Flow",
    ),
    _node(
        "n8n-nodes-base.splitInBatches", "Loop Over Items", "Core Utilities",
        "Process items in batches",
        subcategory="Flow", outputs=["main", "main"],
    ),

    # =========================================================================
    # DATA TRANSFORMATION
    # =========================================================================
    _node(
        "n8n-nodes-base.xml", "XML", "Data Transformation",
        "Convert between XML and JSON",
    ),
    _node(
        "n8n-nodes-base.html", "HTML", "Data Transformation",
        "Extract content from or generate HTML",
    ),
    _node(
        "n8n-nodes-base.markdown", "Markdown", "Data Transformation",
        "Convert between Markdown and HTML",
    ),

    # =========================================================================
    # COMMUNICATION
    # =========================================================================
    _node(
        "n8n-nodes-base.emailSend", "Send Email", "Communication",
        "Send email over SMTP",
    ),
    _node(
        "n8n-nodes-base.gmail", "Gmail", "Communication",
        "Send and read Gmail messages",
    ),
    _node(
        "n8n-nodes-base.slack", "Slack", "Communication",
        "Post messages and manage channels in Slack",
    ),
    _node(
        "n8n-nodes-base.telegram", "Telegram", "Communication",
        "Send Telegram bot messages",
    ),
    _node(
        "n8n-nodes-base.microsoftTeams", "Microsoft Teams", "Communication",
        "Post messages to Microsoft Teams channels",
    ),
    _node(
        "n8n-nodes-base.discord", "Discord", "Communication",
        "Send messages to Discord channels",
    ),

    # =========================================================================
    # DATA
    # =========================================================================
    _node(
        "n8n-nodes-base.postgres", "Postgres", "Data",
        "Query and write PostgreSQL tables",
    ),
    _node(
        "n8n-nodes-base.mySql", "MySQL", "Data",
        "Query and write MySQL tables",
    ),
    _node(
        "n8n-nodes-base.mongoDb", "MongoDB", "Data",
        "Find, insert and update MongoDB documents",
    ),
    _node(
        "n8n-nodes-base.googleSheets", "Google Sheets", "Data",
        "Read and append Google Sheets rows",
    ),
    _node(
        "n8n-nodes-base.airtable", "Airtable", "Data",
        "Manage Airtable records",
    ),

    # =========================================================================
    # BUSINESS
    # =========================================================================
    _node(
        "n8n-nodes-base.hubspot", "HubSpot", "Business",
        "HubSpot CRM - contacts, companies, deals, tickets",
    ),
    _node(
        "n8n-nodes-base.salesforce", "Salesforce", "Business",
        "Enterprise CRM operations",
    ),
    _node(
        "n8n-nodes-base.pipedrive", "Pipedrive", "Business",
        "Sales pipeline CRM",
    ),

    # =========================================================================
    # AI
    # =========================================================================
    _node(
        "n8n-nodes-base.openAi", "OpenAI", "AI",
        "Complete text, chat and generate images with OpenAI",
    ),
    _node(
        "@n8n/n8n-nodes-langchain.agent", "AI Agent", "AI",
        "Tool-using agent driven by a chat model",
        subcategory="Agents",
        inputs=["main", "ai_languageModel", "ai_memory", "ai_tool"],
    ),
    _node(
        "@n8n/n8n-nodes-langchain.lmChatOpenAi", "OpenAI Chat Model", "AI",
        "Chat model sub-node for agents and chains",
        subcategory="Language Models",
        inputs=[], outputs=["ai_languageModel"],
    ),
    _node(
        "@n8n/n8n-nodes-langchain.lmChatAnthropic", "Anthropic Chat Model", "AI",
        "Chat model sub-node for agents and chains",
        subcategory="Language Models",
        inputs=[], outputs=["ai_languageModel"],
    ),
]


N8N_NODE_CATALOG: dict[str, NodeDescriptor] = {node.name: node for node in _NODES}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_node_descriptor(name: str) -> Optional[NodeDescriptor]:
    """Get a node descriptor by its exact name."""
    return N8N_NODE_CATALOG.get(name)


def find_nodes_by_capability(capability: str) -> list[NodeDescriptor]:
    """Find all nodes carrying a capability tag."""
    return [
        node for node in N8N_NODE_CATALOG.values()
        if capability in node.capabilities
    ]


def find_nodes_by_category(category: str) -> list[NodeDescriptor]:
    """Find all nodes in a category (case-insensitive)."""
    wanted = category.casefold()
    return [
        node for node in N8N_NODE_CATALOG.values()
        if node.category.casefold() == wanted
    ]


def find_trigger_nodes() -> list[NodeDescriptor]:
    """Get all trigger nodes."""
    return find_nodes_by_capability("trigger")


class StaticNodeCatalog(NodeCatalog):
    """NodeCatalog backed by an in-memory descriptor mapping."""

    def __init__(self, nodes: Optional[dict[str, NodeDescriptor]] = None):
        self.nodes = N8N_NODE_CATALOG if nodes is None else nodes

    @classmethod
    def from_descriptors(cls, descriptors: list[NodeDescriptor]) -> "StaticNodeCatalog":
        return cls({node.name: node for node in descriptors})

    async def resolve_node(self, identifier: str) -> Optional[NodeDescriptor]:
        """Exact match on name, then on display name."""
        node = self.nodes.get(identifier)
        if node is not None:
            return node
        for node in self.nodes.values():
            if node.display_name == identifier:
                return node
        return None

    def list_nodes(self) -> list[NodeDescriptor]:
        return list(self.nodes.values())

    def nodes_in_category(self, category: str) -> list[NodeDescriptor]:
        wanted = category.casefold()
        return [n for n in self.nodes.values() if n.category.casefold() == wanted]
