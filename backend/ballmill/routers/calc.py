from ballmill.catalog import get_material
from ballmill.core.engine import DEFAULT_PARAMETERS, PARAMETER_INFO, analyze, calculate
from ballmill.core.exceptions import (
    InvalidInput,
    ResourceNotFound,
    raise_internal_error,
    raise_not_found,
    raise_unprocessable,
)
from ballmill.core.logging import get_logger
from ballmill.core.rate_limit import RATE_LIMITS, limiter
from ballmill.schemas.analysis import MillAnalysisResponse
from ballmill.schemas.mill import (
    CalculationResult,
    MillCalcRequest,
    MillCalcResponse,
    MillParameters,
    ParameterInfoList,
)
from fastapi import APIRouter, HTTPException, Request

router = APIRouter(prefix="/api/calc", tags=["calc"])
logger = get_logger(__name__)


@router.get("/defaults", response_model=MillParameters)
def get_defaults() -> MillParameters:
    """Form defaults: a 3 x 4 m mill grinding a medium-hardness ore."""
    return DEFAULT_PARAMETERS


@router.get("/parameters", response_model=ParameterInfoList)
def get_parameters() -> ParameterInfoList:
    return ParameterInfoList(items=PARAMETER_INFO)


@router.post("/mill", response_model=MillCalcResponse)
@limiter.limit(RATE_LIMITS["calc_operations"])
def calc_mill(request: Request, payload: MillCalcRequest) -> MillCalcResponse:
    """
    Run the ball mill calculation for one parameter set.

    The optional material only affects the ball size distribution; its Wi/Sg/k
    are expected to be in ``parameters`` already (see /api/design/apply).

    Rate limit: settings.calc_rate_limit
    """
    result = _calculate(payload)
    return MillCalcResponse(result=result, display=result.display())


@router.post("/analysis", response_model=MillAnalysisResponse)
@limiter.limit(RATE_LIMITS["calc_operations"])
def calc_analysis(request: Request, payload: MillCalcRequest) -> MillAnalysisResponse:
    """
    Mill calculation plus the advanced analysis: Bond power sizing, operating
    cost, bearing load, charge motion and the speed / charge sensitivity curves.
    """
    result = _calculate(payload)
    try:
        analysis = analyze(payload.parameters, result)
    except InvalidInput as exc:
        logger.info("mill_analysis_rejected", reason=exc.message)
        raise_unprocessable(exc)
    except Exception as exc:
        logger.exception("mill_analysis_failed")
        raise_internal_error("analyze mill", exc)

    return MillAnalysisResponse(
        result=result,
        display=result.display(),
        analysis=analysis,
        analysis_display=analysis.display(),
    )


def _calculate(payload: MillCalcRequest) -> CalculationResult:
    material = None
    if payload.material_key:
        try:
            material = get_material(payload.material_key)
        except ResourceNotFound:
            raise_not_found("Material", payload.material_key)

    try:
        return calculate(payload.parameters, material)
    except InvalidInput as exc:
        logger.info("mill_calculation_rejected", reason=exc.message)
        raise_unprocessable(exc)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("mill_calculation_failed")
        raise_internal_error("calculate mill", exc)
