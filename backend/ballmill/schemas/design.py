from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .enums import DesignPriority, EnvironmentalStrictness, GenerationState, SiteLocation
from .mill import CalculationResult, MillParameters

DEFAULT_CAPACITY_TPH = 100.0
DEFAULT_FEED_SIZE_UM = 2000.0
DEFAULT_PRODUCT_SIZE_UM = 150.0
DEFAULT_BUDGET = 1_000_000.0


class DesignRequirements(BaseModel):
    """
    High-level requirements for the design assistant.

    Blank or zero numbers fall back to the defaults, as the form does.
    """

    capacity: float = Field(default=DEFAULT_CAPACITY_TPH, description="Target capacity, t/h")
    material: Optional[str] = Field(None, description="Material catalog key")
    feed_size: float = Field(default=DEFAULT_FEED_SIZE_UM, description="Feed F80, μm")
    product_size: float = Field(default=DEFAULT_PRODUCT_SIZE_UM, description="Product P80, μm")
    budget: float = Field(default=DEFAULT_BUDGET, description="Capital budget")
    priority: DesignPriority = DesignPriority.BALANCED
    environmental: EnvironmentalStrictness = EnvironmentalStrictness.STANDARD
    location: SiteLocation = SiteLocation.INDUSTRIAL

    model_config = {"allow_inf_nan": False}

    @field_validator("capacity", "feed_size", "product_size", "budget", mode="before")
    @classmethod
    def blank_to_default(cls, value: Any, info) -> Any:
        if value in (None, "", 0, "0"):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("capacity", "feed_size", "product_size", "budget")
    @classmethod
    def positive(cls, value: float, info) -> float:
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return value


class DesignOption(BaseModel):
    """One candidate mill configuration."""

    id: str
    name: str
    diameter: float = Field(..., description="m")
    length: float = Field(..., description="m")
    power: float = Field(..., description="kW")
    cost: float = Field(..., description="Capital cost")
    efficiency: float
    reliability: float
    environmental: float
    maintenance: float
    description: str
    advantages: List[str]
    disadvantages: List[str]
    suitability: str
    payback_period: float = Field(..., description="years")
    operating_cost: float
    ball_charge: float = Field(..., description="% of mill volume")
    critical_speed: float = Field(..., description="% of critical speed")
    throughput: float = Field(..., description="t/h")
    energy_consumption: float


class RankedDesignOption(DesignOption):
    score: int
    recommended: bool = False


class GenerationEvent(BaseModel):
    """Progress update of a design generation run; the last one carries the options or an error."""

    state: GenerationState
    phase: Optional[str] = None
    step: int = 0
    total_steps: int = 0
    progress: float = Field(0.0, ge=0, le=100)
    options: Optional[List[RankedDesignOption]] = None
    superseded: bool = False
    error: Optional[str] = None


class DesignScoreRequest(BaseModel):
    option: DesignOption
    requirements: DesignRequirements


class DesignScoreResponse(BaseModel):
    score: int


class DesignStreamRequest(BaseModel):
    session_id: str = Field(default="default", min_length=1, max_length=64)
    requirements: DesignRequirements


class DesignApplyRequest(BaseModel):
    option: DesignOption
    material_key: Optional[str] = None
    # Remaining form values (F80, ball density, porosity); defaults when omitted
    base: Optional[Dict[str, Any]] = None


class DesignApplyResponse(BaseModel):
    parameters: MillParameters
    result: CalculationResult
    display: Dict[str, Any]
