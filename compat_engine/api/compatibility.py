"""Compatibility API endpoints."""
import structlog
from fastapi import APIRouter, HTTPException

from compat_engine.compatibility.engine import get_engine
from compat_engine.compatibility.errors import CompatibilityRequestError, NodeNotFoundError
from compat_engine.compatibility.rules import CompatibilityRules
from compat_engine.models.compatibility import CompatibilityReport, CompatibilityRequest

logger = structlog.get_logger()

router = APIRouter()


@router.post(
    "/compatibility/analyze",
    response_model=CompatibilityReport,
    response_model_exclude_none=True,
)
async def analyze_node_compatibility(request: CompatibilityRequest) -> CompatibilityReport:
    """
    Analyze compatibility between a source node and multiple target nodes.

    Unknown target nodes are skipped and listed in ``skippedTargets``;
    an unknown source node is a 404.
    """
    try:
        return await get_engine().analyze(request)
    except CompatibilityRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/compatibility/rules", response_model=CompatibilityRules)
async def get_compatibility_rules() -> CompatibilityRules:
    """Return the rules tables the engine is currently scoring with."""
    return get_engine().rules
