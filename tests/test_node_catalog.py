"""Tests for node descriptors, the built-in catalog and its adapters."""
import pytest

from compat_engine.models.node import NodeDescriptor, Port
from compat_engine.n8n.alternatives import MAX_CANDIDATES, CatalogAlternativeFinder
from compat_engine.n8n.collaborators import call_collaborator
from compat_engine.n8n.mapping_advisor import ParameterMappingAdvisor
from compat_engine.n8n.node_catalog import (
    N8N_NODE_CATALOG,
    StaticNodeCatalog,
    find_nodes_by_capability,
    find_nodes_by_category,
    find_trigger_nodes,
    get_node_descriptor,
)


class TestNodeDescriptor:
    """Capability tags and port handling."""

    def test_capability_tags_are_ordered(self):
        """Capability tags come out in a fixed order."""
        node = NodeDescriptor(
            name="custom.node",
            subcategory="Flow",
            webhook_support=True,
            trigger_node=True,
            regular_node=True,
            codeable=True,
        )
        assert node.capability_tags() == ["webhook", "trigger", "processing", "custom-code", "flow"]

    def test_subcategory_duplicate_is_not_repeated(self):
        """A subcategory matching a tag is not repeated."""
        node = NodeDescriptor(name="custom.node", trigger_node=True, subcategory="Trigger")
        assert node.capability_tags() == ["trigger"]

    def test_ports_accept_strings_and_none(self):
        """Port lists accept bare strings and None."""
        node = NodeDescriptor.model_validate({
            "name": "custom.node",
            "inputs": ["main", "ai_tool"],
            "outputs": None,
        })
        assert node.inputs == [Port(type="main"), Port(type="ai_tool")]
        assert node.outputs == []

    def test_camel_case_payload(self):
        """Descriptors validate from camelCase payloads."""
        node = NodeDescriptor.model_validate({
            "name": "custom.node",
            "displayName": "Custom",
            "triggerNode": True,
        })
        assert node.label == "Custom"
        assert node.is_trigger is True

    def test_label_falls_back_to_name(self):
        """Nodes without a display name are labelled by name."""
        assert NodeDescriptor(name="custom.node").label == "custom.node"

    def test_main_port_accepts_any_type(self):
        """Main ports connect to any port type."""
        assert Port().accepts(Port(type="ai_tool")) is True
        assert Port(type="ai_tool").accepts(Port()) is True
        assert Port(type="ai_languageModel").accepts(Port(type="ai_languageModel")) is True
        assert Port(type="ai_languageModel").accepts(Port(type="ai_tool")) is False


class TestBuiltInCatalog:
    """Module-level catalog helpers."""

    def test_webhook_descriptor(self):
        """The webhook node has an output and no inputs."""
        webhook = get_node_descriptor("n8n-nodes-base.webhook")

        assert webhook is not None
        assert webhook.inputs == []
        assert webhook.outputs == [Port()]
        assert webhook.capability_tags() == ["webhook", "trigger"]

    def test_regular_nodes_have_a_main_input(self):
        """Regular nodes get a main input."""
        http = get_node_descriptor("n8n-nodes-base.httpRequest")
        assert http.inputs == [Port()]
        assert http.capabilities == frozenset({"processing"})

    def test_unknown_node(self):
        """Unknown identifiers give None."""
        assert get_node_descriptor("n8n-nodes-base.nope") is None

    def test_find_by_capability(self):
        """Nodes can be found by capability tag."""
        names = {node.name for node in find_nodes_by_capability("webhook")}
        assert names == {"n8n-nodes-base.webhook", "n8n-nodes-base.formTrigger"}

    def test_find_by_category_is_case_insensitive(self):
        """Category lookup ignores case."""
        names = [node.name for node in find_nodes_by_category("data transformation")]
        assert names == ["n8n-nodes-base.xml", "n8n-nodes-base.html", "n8n-nodes-base.markdown"]

    def test_find_trigger_nodes(self):
        """Trigger nodes have no inputs."""
        triggers = find_trigger_nodes()
        assert len(triggers) == 5
        assert all(node.inputs == [] for node in triggers)

    def test_names_are_unique_keys(self):
        """Catalog keys are the node names."""
        assert all(key == node.name for key, node in N8N_NODE_CATALOG.items())


class TestStaticNodeCatalog:
    """StaticNodeCatalog lookups."""

    @pytest.fixture
    def catalog(self):
        return StaticNodeCatalog()

    @pytest.mark.asyncio
    async def test_resolve_by_name(self, catalog):
        """Nodes resolve by identifier."""
        node = await catalog.resolve_node("n8n-nodes-base.slack")
        assert node.display_name == "Slack"

    @pytest.mark.asyncio
    async def test_resolve_by_display_name(self, catalog):
        """Nodes resolve by display name."""
        node = await catalog.resolve_node("HTTP Request")
        assert node.name == "n8n-nodes-base.httpRequest"

    @pytest.mark.asyncio
    async def test_resolve_unknown(self, catalog):
        """Unknown references resolve to None."""
        assert await catalog.resolve_node("Nope") is None

    def test_from_descriptors(self, webhook_node, http_node):
        """A catalog can be built from descriptors."""
        catalog = StaticNodeCatalog.from_descriptors([webhook_node, http_node])

        assert [n.name for n in catalog.list_nodes()] == [webhook_node.name, http_node.name]
        assert catalog.nodes_in_category("core utilities") == [http_node]


class TestParameterMappingAdvisor:
    """Field mapping hints."""

    @pytest.fixture
    def advisor(self):
        return ParameterMappingAdvisor()

    @pytest.mark.asyncio
    async def test_http_request_needs_no_mapping(self, advisor, webhook_node, http_node):
        """HTTP Request has no mapping hints."""
        suggestions = await advisor.suggest_field_mappings(http_node, {"source_node": webhook_node})
        assert suggestions == []

    @pytest.mark.asyncio
    async def test_webhook_payload_is_prefixed(self, advisor, webhook_node):
        """Webhook sources map from the request body."""
        slack = get_node_descriptor("n8n-nodes-base.slack")

        suggestions = await advisor.suggest_field_mappings(slack, {"source_node": webhook_node})

        assert len(suggestions) == 1
        assert suggestions[0].source_field == "body.message"
        assert suggestions[0].target_field == "text"

    @pytest.mark.asyncio
    async def test_no_prefix_without_source(self, advisor):
        """Without a source, fields are mapped as is."""
        email = get_node_descriptor("n8n-nodes-base.emailSend")

        suggestions = await advisor.suggest_field_mappings(email, {})

        assert [s.source_field for s in suggestions] == ["email", "subject", "body"]

    @pytest.mark.asyncio
    async def test_custom_hints(self, http_node):
        """Custom hints replace the built-in ones."""
        advisor = ParameterMappingAdvisor({http_node.name: [("url", "url", None)]})

        suggestions = await advisor.suggest_field_mappings(http_node, {})

        assert suggestions[0].transformation is None


class TestCatalogAlternativeFinder:
    """Same-category alternatives."""

    @pytest.fixture
    def finder(self):
        return CatalogAlternativeFinder()

    @pytest.mark.asyncio
    async def test_same_category_excluding_target(self, finder):
        """Candidates share the category and exclude the target."""
        xml = get_node_descriptor("n8n-nodes-base.xml")

        candidates = await finder.find_alternatives(xml, ["webhook", "trigger"])

        assert [c.node.name for c in candidates] == ["n8n-nodes-base.html", "n8n-nodes-base.markdown"]
        assert candidates[0].reason == "Same Data Transformation category as XML"
        assert candidates[0].benefits == [
            "Comparable Data Transformation functionality",
            "Extract content from or generate HTML",
        ]

    @pytest.mark.asyncio
    async def test_ranked_by_feature_coverage(self, finder):
        """Candidates covering more features rank first."""
        manual = get_node_descriptor("n8n-nodes-base.manualTrigger")

        candidates = await finder.find_alternatives(manual, ["webhook"])

        names = [c.node.name for c in candidates]
        assert names[:2] == ["n8n-nodes-base.webhook", "n8n-nodes-base.formTrigger"]
        assert candidates[0].benefits[0] == "Supports webhook"

    @pytest.mark.asyncio
    async def test_capped(self, finder):
        """The finder returns at most MAX_CANDIDATES."""
        slack = get_node_descriptor("n8n-nodes-base.slack")
        candidates = await finder.find_alternatives(slack, [])
        assert len(candidates) == MAX_CANDIDATES

    @pytest.mark.asyncio
    async def test_no_category_no_alternatives(self, finder):
        """Nodes without a category have no alternatives."""
        assert await finder.find_alternatives(NodeDescriptor(name="custom.node"), []) == []


class TestCallCollaborator:
    """Failure capture around collaborator calls."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Successful calls carry their value."""
        async def lookup(value):
            return value * 2

        result = await call_collaborator("doubler", lookup, 21)

        assert result.available is True
        assert result.value == 42

    @pytest.mark.asyncio
    async def test_failure_becomes_unavailable(self):
        """Exceptions become an unavailable result."""
        async def lookup():
            raise ValueError()

        result = await call_collaborator("broken", lookup)

        assert result.available is False
        assert result.value is None
        assert result.error == "ValueError"
