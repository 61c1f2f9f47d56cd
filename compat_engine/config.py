"""Application configuration using Pydantic Settings."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = "Node Compatibility Engine"
    debug: bool = False

    # Optional JSON file overlaid on the built-in compatibility rules
    # (category adjacency, workflow idioms, purpose rules, weights)
    rules_path: Optional[str] = None

    # ==========================================================================
    # SCORING WEIGHTS
    # Heuristic defaults, tune freely. Rules files may override them too.
    # ==========================================================================

    weight_data_flow: float = 0.4
    weight_transformation_partial: float = 0.2
    weight_category: float = 0.2
    weight_capability: float = 0.2
    mapping_penalty: float = 0.1
    default_idiom_bonus: float = 0.2

    # Alternatives per weak pair (0-3; larger values are capped at 3)
    max_alternatives: int = 3

    def scoring_weights(self) -> dict[str, float]:
        """Weights keyed the way the rules registry expects them."""
        return {
            "data_flow": self.weight_data_flow,
            "transformation_partial": self.weight_transformation_partial,
            "category": self.weight_category,
            "capability": self.weight_capability,
            "mapping_penalty": self.mapping_penalty,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
