"""Specialist routes — direct access to the director's secondary agents.

- GET  /specialists         — list available specialists
- POST /specialists/{name}  — run one specialist on a brief
"""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from agent_directeur.agents.specialist_agent import SpecialistAgent
from agent_directeur.domain.enums import SpecialistName
from agent_directeur.domain.schemas import ErrorResponse, SpecialistRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/specialists", tags=["specialists"])


@router.get("")
async def list_specialists():
    """Return the names accepted by ``POST /specialists/{name}``."""
    return {"specialists": [s.value for s in SpecialistName]}


@router.post("/{name}")
async def consult_specialist(name: str, data: SpecialistRequest):
    """Run the *name* specialist on the given brief.

    Returns ``{"ok": true, "data": {...}}`` on success, 404 for an
    unknown specialist, 500 with ``{"ok": false, "error": "..."}`` when
    the model call fails.
    """
    try:
        specialist = SpecialistName(name)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown specialist: {name}",
        )

    result = await SpecialistAgent(specialist).consult(data)
    if not result.ok:
        logger.error("Specialist %s failed: %s", name, result.error)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=result.error or "Specialist call failed").model_dump(),
        )
    return {"ok": True, "data": result.data.model_dump(mode="json")}
