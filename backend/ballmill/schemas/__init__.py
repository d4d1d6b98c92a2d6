from .analysis import ChargeMotion, ChargePoint, MillAnalysis, MillAnalysisResponse, PowerAnalysis, SpeedPoint
from .catalog import DistributionTemplate, Material
from .design import (
    DesignApplyRequest,
    DesignApplyResponse,
    DesignOption,
    DesignRequirements,
    DesignScoreRequest,
    DesignScoreResponse,
    DesignStreamRequest,
    GenerationEvent,
    RankedDesignOption,
)
from .enums import (
    Abrasiveness,
    DesignPriority,
    EnvironmentalStrictness,
    GenerationState,
    Grindability,
    Hardness,
    PowerIntensity,
    SiteLocation,
)
from .mill import (
    CalculationResult,
    MillCalcRequest,
    MillCalcResponse,
    MillParameters,
    ParameterInfo,
    ParameterInfoList,
)

__all__ = [
    "Abrasiveness",
    "CalculationResult",
    "ChargeMotion",
    "ChargePoint",
    "DesignApplyRequest",
    "DesignApplyResponse",
    "DesignOption",
    "DesignPriority",
    "DesignRequirements",
    "DesignScoreRequest",
    "DesignScoreResponse",
    "DesignStreamRequest",
    "DistributionTemplate",
    "EnvironmentalStrictness",
    "GenerationEvent",
    "GenerationState",
    "Grindability",
    "Hardness",
    "Material",
    "MillAnalysis",
    "MillAnalysisResponse",
    "MillCalcRequest",
    "MillCalcResponse",
    "MillParameters",
    "ParameterInfo",
    "ParameterInfoList",
    "PowerAnalysis",
    "PowerIntensity",
    "RankedDesignOption",
    "SiteLocation",
    "SpeedPoint",
]
