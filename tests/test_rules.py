"""Tests for the compatibility rules registry.

Covers the built-in tables and the JSON overlay loader.
"""
import json

import pytest

from compat_engine.compatibility.errors import CompatibilityRulesError
from compat_engine.compatibility.rules import (
    CompatibilityRules,
    WorkflowIdiom,
    build_rules,
    default_rules,
    load_rules,
)
from compat_engine.config import Settings


class TestCategoryTables:
    """Category aliases and adjacency."""

    def test_raw_categories_map_to_families(self, rules):
        """Raw catalog categories map onto families."""
        assert rules.category_family("Trigger Nodes") == "trigger"
        assert rules.category_family("Core Utilities") == "processing"
        assert rules.category_family("Data Transformation") == "transform"
        assert rules.category_family("  AI ") == "ai"

    def test_unknown_category_is_its_own_family(self, rules):
        """Unknown categories stand for themselves."""
        assert rules.category_family("Schedule") == "schedule"
        assert rules.category_family(None) == ""

    def test_trigger_feeds_processing(self, rules):
        """Triggers feed processing nodes."""
        assert rules.categories_compatible("Trigger Nodes", "Core Utilities") is True

    def test_adjacency_is_ordered(self, rules):
        """Processing is not listed as feeding triggers."""
        assert rules.categories_compatible("Core Utilities", "Trigger Nodes") is False

    def test_same_trigger_category_is_not_adjacent(self, rules):
        """Triggers do not feed triggers."""
        assert rules.categories_compatible("Trigger Nodes", "Trigger Nodes") is False

    def test_empty_category_never_compatible(self, rules):
        """A missing category is never adjacent."""
        assert rules.categories_compatible("", "Communication") is False
        assert rules.categories_compatible("Communication", None) is False

    def test_transformation_categories(self, rules):
        """AI and transform categories need a transformation."""
        assert rules.requires_transformation("AI") is True
        assert rules.requires_transformation("Data Transformation") is True
        assert rules.requires_transformation("Communication") is False
        assert rules.requires_transformation("") is False


class TestIdiomsAndPurposes:
    """Workflow idioms and purpose keywords."""

    def test_webhook_to_http_is_an_idiom(self, rules):
        """Webhook into HTTP earns the idiom bonus."""
        assert rules.idiom_bonus("n8n-nodes-base.webhook", "n8n-nodes-base.httpRequest") == 0.2

    def test_idiom_match_is_case_insensitive(self, rules):
        """Idiom matching ignores case."""
        assert rules.idiom_bonus("WEBHOOK", "n8n-nodes-base.respondToWebhook") == 0.2

    def test_no_idiom_gives_zero(self, rules):
        """Pairs matching no idiom get no bonus."""
        assert rules.idiom_bonus("n8n-nodes-base.slack", "n8n-nodes-base.postgres") == 0.0

    def test_best_bonus_wins_when_several_match(self):
        """The largest matching bonus applies."""
        rules = CompatibilityRules(
            workflow_idioms=[
                WorkflowIdiom(source="webhook", target="http"),
                WorkflowIdiom(source="web", target="request", bonus=0.35),
            ]
        )
        assert rules.idiom_bonus("n8n-nodes-base.webhook", "n8n-nodes-base.httpRequest") == 0.35

    def test_purpose_keywords(self, rules):
        """Node names map onto workflow purposes."""
        assert rules.purpose_for("n8n-nodes-base.httpRequest") == "HTTP request/API call"
        assert rules.purpose_for("n8n-nodes-base.gmail") == "Email communication"
        assert rules.purpose_for("n8n-nodes-base.postgres") == "Data storage/retrieval"
        assert rules.purpose_for("n8n-nodes-base.microsoftTeams") == "Team notification"

    def test_purpose_defaults_to_data_processing(self, rules):
        """Unmatched names default to data processing."""
        assert rules.purpose_for("n8n-nodes-base.airtable") == "Data processing"


class TestRulesLoading:
    """Settings-driven defaults and the JSON overlay."""

    def test_default_rules_take_weights_from_settings(self):
        """Weights and idiom bonus come from settings."""
        settings = Settings(weight_data_flow=0.5, mapping_penalty=0.05, default_idiom_bonus=0.1)
        rules = default_rules(settings)

        assert rules.weights.data_flow == 0.5
        assert rules.weights.mapping_penalty == 0.05
        assert rules.default_idiom_bonus == 0.1

    def test_build_rules_without_file_is_default(self):
        """No rules file gives the default rules."""
        rules = build_rules(Settings(rules_path=None))
        assert rules == default_rules(Settings())

    def test_overlay_merges_dicts_and_extends_lists(self, tmp_path):
        """The overlay merges dicts and extends lists."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({
            "category_adjacency": {"transform": ["communication"]},
            "workflow_idioms": [{"source": "xml", "target": "slack", "bonus": 0.3}],
            "weights": {"data_flow": 0.45},
        }))

        rules = load_rules(path, base=CompatibilityRules())

        # Overlay adds a key, keeps the built-in ones
        assert rules.category_adjacency["transform"] == ["communication"]
        assert "trigger" in rules.category_adjacency
        assert rules.idiom_bonus("n8n-nodes-base.xml", "n8n-nodes-base.slack") == 0.3
        assert rules.idiom_bonus("n8n-nodes-base.webhook", "n8n-nodes-base.code") == 0.2
        assert rules.weights.data_flow == 0.45
        assert rules.weights.category == 0.2

    def test_camel_case_overlay_merges_with_defaults(self, tmp_path):
        """camelCase field names merge into the same tables as snake_case ones."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({
            "categoryAdjacency": {"transform": ["data"]},
            "weights": {"mappingPenalty": 0.15},
            "defaultIdiomBonus": 0.25,
        }))

        rules = load_rules(path, base=CompatibilityRules())

        assert rules.category_adjacency["transform"] == ["data"]
        assert rules.category_adjacency["trigger"] == ["processing", "communication", "data"]
        assert rules.weights.mapping_penalty == 0.15
        assert rules.weights.data_flow == 0.4
        assert rules.default_idiom_bonus == 0.25

    def test_rules_serialize_camel_case(self):
        """Rules dump with the same casing as every other payload."""
        dumped = CompatibilityRules().model_dump(by_alias=True)

        assert "categoryAdjacency" in dumped
        assert "dataFlow" in dumped["weights"]

    def test_build_rules_reads_rules_path(self, tmp_path):
        """build_rules overlays the configured rules file."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"default_purpose": "Step"}))

        rules = build_rules(Settings(rules_path=str(path)))

        assert rules.purpose_for("n8n-nodes-base.airtable") == "Step"

    def test_missing_file_raises(self, tmp_path):
        """A missing rules file raises with its path."""
        with pytest.raises(CompatibilityRulesError) as exc_info:
            load_rules(tmp_path / "nope.json")
        assert exc_info.value.path.endswith("nope.json")

    def test_invalid_json_raises(self, tmp_path):
        """Malformed JSON raises a rules error."""
        path = tmp_path / "rules.json"
        path.write_text("{not json")

        with pytest.raises(CompatibilityRulesError, match="not valid JSON"):
            load_rules(path)

    def test_non_object_raises(self, tmp_path):
        """A non-object rules file is rejected."""
        path = tmp_path / "rules.json"
        path.write_text("[1, 2]")

        with pytest.raises(CompatibilityRulesError, match="JSON object"):
            load_rules(path)

    def test_invalid_shape_raises(self, tmp_path):
        """Wrongly typed fields are rejected."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"weights": {"data_flow": "heavy"}}))

        with pytest.raises(CompatibilityRulesError, match="Invalid rules file"):
            load_rules(path)
