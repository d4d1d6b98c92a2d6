"""
Design assistant router.

Endpoints:
- POST /api/design/options: four ranked candidate designs
- POST /api/design/options/stream: same, as NDJSON progress events
- POST /api/design/score: score one option against requirements
- POST /api/design/apply: turn an option into calculator parameters and run them
"""

from typing import List, Optional

from ballmill.catalog import get_material
from ballmill.core.engine import calculate, design_to_parameters, generate_options, rank_options, score
from ballmill.core.exceptions import InvalidInput, ResourceNotFound, raise_not_found, raise_unprocessable
from ballmill.core.logging import get_logger
from ballmill.core.rate_limit import RATE_LIMITS, limiter
from ballmill.schemas.catalog import Material
from ballmill.schemas.design import (
    DesignApplyRequest,
    DesignApplyResponse,
    DesignRequirements,
    DesignScoreRequest,
    DesignScoreResponse,
    DesignStreamRequest,
    RankedDesignOption,
)
from ballmill.services.design_sessions import get_session
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

router = APIRouter(prefix="/api/design", tags=["design"])
logger = get_logger(__name__)


def _material_or_404(key: Optional[str]) -> Optional[Material]:
    if not key:
        return None
    try:
        return get_material(key)
    except ResourceNotFound:
        raise_not_found("Material", key)


@router.post("/options", response_model=List[RankedDesignOption])
@limiter.limit(RATE_LIMITS["design_operations"])
def design_options(request: Request, payload: DesignRequirements) -> List[RankedDesignOption]:
    material = _material_or_404(payload.material)
    return rank_options(generate_options(payload, material), payload)


@router.post("/options/stream")
async def design_options_stream(payload: DesignStreamRequest) -> StreamingResponse:
    """
    Stream generation progress as newline-delimited JSON.

    One GenerationEvent per phase, then a terminal event with the ranked
    options. Starting a new stream with the same session_id cancels the old
    one, which ends with a ``superseded`` event.
    """
    material = _material_or_404(payload.requirements.material)
    session = get_session(payload.session_id)
    run = session.generate(payload.requirements, material)

    async def ndjson():
        async for event in run.events():
            yield event.model_dump_json() + "\n"

    return StreamingResponse(ndjson(), media_type="application/x-ndjson")


@router.post("/score", response_model=DesignScoreResponse)
def design_score(payload: DesignScoreRequest) -> DesignScoreResponse:
    return DesignScoreResponse(score=score(payload.option, payload.requirements))


@router.post("/apply", response_model=DesignApplyResponse)
@limiter.limit(RATE_LIMITS["calc_operations"])
def design_apply(request: Request, payload: DesignApplyRequest) -> DesignApplyResponse:
    material = _material_or_404(payload.material_key)
    try:
        params = design_to_parameters(payload.option, material, payload.base)
        result = calculate(params, material)
    except InvalidInput as exc:
        logger.info("design_apply_rejected", option=payload.option.id, reason=exc.message)
        raise_unprocessable(exc)

    logger.info("design_applied", option=payload.option.id, material=payload.material_key)
    return DesignApplyResponse(parameters=params, result=result, display=result.display())
