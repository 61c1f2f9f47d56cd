"""API route modules."""
from compat_engine.api import compatibility

__all__ = ["compatibility"]
