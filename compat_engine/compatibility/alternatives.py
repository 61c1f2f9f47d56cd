"""Alternative Finder Adapter.

Asks the alternative finder for substitutes of a poorly matching target and
shapes them into report entries. A missing finder answer is not an error:
the pair simply carries no alternatives.
"""
from typing import Optional

import structlog

from compat_engine.models.compatibility import Alternative
from compat_engine.models.node import NodeDescriptor
from compat_engine.n8n.collaborators import AlternativeFinder, call_collaborator

logger = structlog.get_logger()

# Pairs scoring below this get alternatives
ALTERNATIVES_THRESHOLD = 0.7

# Hard cap on alternatives per pair, whatever the configured maximum
MAX_ALTERNATIVES = 3


class AlternativesAdapter:
    """Bridges the engine and an AlternativeFinder."""

    def __init__(self, finder: AlternativeFinder, max_alternatives: int = MAX_ALTERNATIVES):
        self.finder = finder
        self.max_alternatives = max(0, min(max_alternatives, MAX_ALTERNATIVES))

    async def suggest(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
    ) -> Optional[list[Alternative]]:
        """Up to ``max_alternatives`` entries, or None when there are none."""
        result = await call_collaborator(
            "alternative_finder",
            self.finder.find_alternatives,
            target,
            source.capability_tags(),
        )
        if not result.available:
            logger.warning("alternative_finder_unavailable", target=target.name, error=result.error)
            return None

        # The source itself is never a substitute for its own target
        candidates = [
            candidate for candidate in (result.value or [])
            if candidate.node.name != source.name
        ][: self.max_alternatives]
        if not candidates:
            return None

        return [
            Alternative(
                node=candidate.node.name,
                reason=candidate.reason,
                benefit=", ".join(candidate.benefits),
            )
            for candidate in candidates
        ]
