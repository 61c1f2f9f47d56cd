"""Exceptions raised by the compatibility engine."""
from typing import Any, Optional


class CompatibilityError(Exception):
    """Base exception for compatibility analysis."""


class CompatibilityRequestError(CompatibilityError):
    """The request cannot be analyzed at all (missing source or targets)."""


class NodeNotFoundError(CompatibilityError):
    """A node identifier did not resolve to a descriptor."""

    def __init__(self, identifier: Any, message: Optional[str] = None):
        super().__init__(message or f"Node not found: {identifier}")
        self.identifier = identifier


class CompatibilityRulesError(CompatibilityError):
    """A rules file could not be read or validated."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
