"""Compatibility rules registry.

The tables the scorer, analyzer and aggregator consult live here as data:
- category aliases and the adjacency of complementary category families
- workflow idioms (name substring pairs) and their score bonus
- categories whose nodes reinterpret data and so need a transformation
- purpose rules used when synthesizing a workflow
- scoring weights

``load_rules`` overlays a JSON file on the defaults: dict tables are merged,
list tables are extended, scalars are replaced. Field names may be given
in camelCase or snake_case.
"""
import json
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import Field, ValidationError
from pydantic.alias_generators import to_camel

from compat_engine.compatibility.errors import CompatibilityRulesError
from compat_engine.config import Settings, get_settings
from compat_engine.models.node import CamelModel

logger = structlog.get_logger()


class ScoringWeights(CamelModel):
    """Weights of the additive scoring model."""

    data_flow: float = 0.4
    transformation_partial: float = 0.2
    category: float = 0.2
    capability: float = 0.2
    mapping_penalty: float = 0.1


class WorkflowIdiom(CamelModel):
    """A known-good source -> target pairing, matched on node names."""

    source: str = Field(..., description="Substring of the source node name")
    target: str = Field(..., description="Substring of the target node name")
    bonus: Optional[float] = Field(None, description="Score bonus; rules default when unset")

    def matches(self, source_name: str, target_name: str) -> bool:
        return (
            self.source.casefold() in source_name.casefold()
            and self.target.casefold() in target_name.casefold()
        )


class PurposeRule(CamelModel):
    """Maps node-name keywords to the role the node plays in a workflow."""

    keywords: list[str]
    purpose: str

    def matches(self, name: str) -> bool:
        lowered = name.casefold()
        return any(keyword.casefold() in lowered for keyword in self.keywords)


# =============================================================================
# DEFAULT TABLES
# =============================================================================

DEFAULT_CATEGORY_ALIASES: dict[str, str] = {
    "trigger nodes": "trigger",
    "trigger": "trigger",
    "triggers": "trigger",
    "core utilities": "processing",
    "core nodes": "processing",
    "core": "processing",
    "processing": "processing",
    "helpers": "processing",
    "flow": "processing",
    "http": "processing",
    "communication": "communication",
    "email": "communication",
    "messaging": "communication",
    "data": "data",
    "data & storage": "data",
    "database": "data",
    "storage": "data",
    "business": "business",
    "crm": "business",
    "sales": "business",
    "marketing": "business",
    "productivity": "business",
    "ai": "ai",
    "ai/ml": "ai",
    "langchain": "ai",
    "data transformation": "transform",
    "transform": "transform",
}

# Category family -> families it feeds well
DEFAULT_CATEGORY_ADJACENCY: dict[str, list[str]] = {
    "trigger": ["processing", "communication", "data"],
    "communication": ["processing", "data", "business"],
    "data": ["communication", "business", "ai"],
    "ai": ["data", "processing", "communication"],
}

DEFAULT_WORKFLOW_IDIOMS: list[dict[str, Any]] = [
    {"source": "webhook", "target": "function"},
    {"source": "webhook", "target": "code"},
    {"source": "webhook", "target": "http"},
    {"source": "webhook", "target": "respondToWebhook"},
    {"source": "schedule", "target": "email"},
    {"source": "trigger", "target": "processing"},
]

DEFAULT_TRANSFORMATION_CATEGORIES: list[str] = ["ai", "transform"]

DEFAULT_PURPOSE_RULES: list[dict[str, Any]] = [
    {"keywords": ["http"], "purpose": "HTTP request/API call"},
    {"keywords": ["email", "gmail"], "purpose": "Email communication"},
    {"keywords": ["function", "code"], "purpose": "Data processing"},
    {"keywords": ["database", "postgres", "mysql", "mongo"], "purpose": "Data storage/retrieval"},
    {"keywords": ["slack", "teams", "discord", "telegram"], "purpose": "Team notification"},
]


class CompatibilityRules(CamelModel):
    """All lookup tables used to score and explain node pairs."""

    category_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_ALIASES),
    )
    category_adjacency: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORY_ADJACENCY.items()},
    )
    workflow_idioms: list[WorkflowIdiom] = Field(
        default_factory=lambda: [WorkflowIdiom(**i) for i in DEFAULT_WORKFLOW_IDIOMS],
    )
    default_idiom_bonus: float = 0.2
    transformation_categories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRANSFORMATION_CATEGORIES),
    )
    purpose_rules: list[PurposeRule] = Field(
        default_factory=lambda: [PurposeRule(**r) for r in DEFAULT_PURPOSE_RULES],
    )
    default_purpose: str = "Data processing"
    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    def category_family(self, category: Optional[str]) -> str:
        """Canonical family of a raw catalog category."""
        key = (category or "").strip().casefold()
        return self.category_aliases.get(key, key).casefold()

    def categories_compatible(self, source_category: Optional[str], target_category: Optional[str]) -> bool:
        """Whether the ordered pair of categories is in the adjacency table."""
        source = self.category_family(source_category)
        target = self.category_family(target_category)
        if not source or not target:
            return False
        adjacent = self.category_adjacency.get(source, [])
        return target in {self.category_family(c) for c in adjacent}

    def requires_transformation(self, category: Optional[str]) -> bool:
        family = self.category_family(category)
        return bool(family) and family in {
            self.category_family(c) for c in self.transformation_categories
        }

    def idiom_bonus(self, source_name: str, target_name: str) -> float:
        """Largest bonus among idioms matching the pair, 0.0 when none does."""
        bonuses = [
            self.default_idiom_bonus if idiom.bonus is None else idiom.bonus
            for idiom in self.workflow_idioms
            if idiom.matches(source_name, target_name)
        ]
        return max(bonuses) if bonuses else 0.0

    def purpose_for(self, node_name: str) -> str:
        for rule in self.purpose_rules:
            if rule.matches(node_name):
                return rule.purpose
        return self.default_purpose


# =============================================================================
# LOADING
# =============================================================================

def default_rules(settings: Optional[Settings] = None) -> CompatibilityRules:
    """Built-in rules, with weights taken from settings."""
    settings = settings or get_settings()
    return CompatibilityRules(
        weights=ScoringWeights(**settings.scoring_weights()),
        default_idiom_bonus=settings.default_idiom_bonus,
    )


def _camel_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {to_camel(key) if "_" in key else key: value for key, value in data.items()}


def _normalize(overrides: dict[str, Any]) -> dict[str, Any]:
    """camelCase the rules field names, including those inside ``weights``."""
    normalized = _camel_keys(overrides)
    if isinstance(normalized.get("weights"), dict):
        normalized["weights"] = _camel_keys(normalized["weights"])
    return normalized


def _overlay(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + value
        else:
            merged[key] = value
    return merged


def load_rules(path: str | Path, base: Optional[CompatibilityRules] = None) -> CompatibilityRules:
    """Overlay the JSON rules file at ``path`` on ``base`` (or the defaults)."""
    path = Path(path)
    base = base or default_rules()

    try:
        overrides = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CompatibilityRulesError(f"Cannot read rules file: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise CompatibilityRulesError(f"Rules file is not valid JSON: {e}", path=str(path)) from e

    if not isinstance(overrides, dict):
        raise CompatibilityRulesError("Rules file must contain a JSON object", path=str(path))

    try:
        merged = _overlay(base.model_dump(by_alias=True), _normalize(overrides))
        rules = CompatibilityRules.model_validate(merged)
    except ValidationError as e:
        raise CompatibilityRulesError(f"Invalid rules file: {e}", path=str(path)) from e

    logger.info(
        "compatibility_rules_loaded",
        path=str(path),
        idioms=len(rules.workflow_idioms),
        adjacency=len(rules.category_adjacency),
    )
    return rules


def build_rules(settings: Optional[Settings] = None) -> CompatibilityRules:
    """Rules for the current settings: defaults plus the optional rules file."""
    settings = settings or get_settings()
    rules = default_rules(settings)
    if settings.rules_path:
        rules = load_rules(settings.rules_path, base=rules)
    return rules
