"""Director run route.

- POST /run — load memory, decide, optionally consult specialists, write to Notion
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from agent_directeur.app.deps import get_director_service
from agent_directeur.domain.schemas import ErrorResponse, RunRequest, RunResponse
from agent_directeur.services.director_service import DirectorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["director"])


@router.post("/run", response_model=RunResponse)
async def run_director(
    data: RunRequest,
    service: DirectorService = Depends(get_director_service),
):
    """Run the director on one client request.

    Any failure (model, schema, Notion) returns status 500 with
    ``{"ok": false, "error": "..."}``. Writes that completed before the
    failure are kept in Notion.
    """
    try:
        return await service.run(data)
    except Exception as e:
        logger.error("Director run failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(e)).model_dump(),
        )
