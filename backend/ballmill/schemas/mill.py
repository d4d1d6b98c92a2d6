from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ballmill.core.exceptions import ParameterValidationError
from ballmill.core.rounding import DISPLAY_PRECISION, to_fixed

from .catalog import DistributionTemplate


class MillParameters(BaseModel):
    """Snapshot of user-supplied mill and ore parameters for one calculation."""

    D: float = Field(..., description="Mill inside diameter, m")
    L: float = Field(..., description="Mill inside length, m")
    Wi: float = Field(..., description="Bond work index, kWh/t")
    F80: float = Field(..., description="Feed size passing 80%, μm")
    darsad_bar: float = Field(..., description="Ball charge, % of mill volume")
    chegali_golole: float = Field(..., description="Ball density, t/m³")
    takhalkhol: float = Field(..., description="Interstitial porosity of the charge, %")
    Sg: float = Field(..., description="Ore specific gravity")
    k: float = Field(..., description="Material constant (Morrell); 0 selects the default 350")
    Cs: float = Field(..., description="Mill speed, % of critical")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        # JSON true/false would otherwise be coerced to 1.0 / 0.0
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @classmethod
    def from_input(cls, data: Mapping[str, Any]) -> "MillParameters":
        """
        Validate raw form data.

        Raises ParameterValidationError listing every missing or non-numeric
        field instead of pydantic's ValidationError.
        """
        if data is None or not isinstance(data, Mapping):
            raise ParameterValidationError(list(cls.model_fields))
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            errors = []
            for error in exc.errors():
                field = str(error["loc"][0]) if error["loc"] else "parameters"
                errors.append({"field": field, "reason": error["msg"]})
            fields = list(dict.fromkeys(error["field"] for error in errors))
            raise ParameterValidationError(fields, errors) from exc


class ParameterInfo(BaseModel):
    """Form metadata for one input parameter."""

    key: str
    name: str
    description: str
    unit: str
    range: str


class CalculationResult(BaseModel):
    """
    Full-precision output of the mill calculation engine.

    Use ``display()`` for the rounded values shown in reports.
    """

    # Volumes and charge
    mill_volume: float = Field(..., description="m³")
    charge_volume: float = Field(..., description="Ball charge bulk volume, m³")
    ball_volume: float = Field(..., description="Ball solids volume, m³")
    ball_mass: float = Field(..., description="t")

    # Sizes and energy
    p80: float = Field(..., description="Product size, μm")
    specific_energy: float = Field(..., description="kWh/t")

    # Optimal ball diameter, mm
    bond_ball_size: float
    morrell_ball_size: float
    austin_ball_size: float
    ball_size: float = Field(..., description="Weighted blend of the three estimators, mm")

    # Speeds, rpm
    critical_speed: float
    operating_speed: float

    # Power, kW
    power_no_load: float
    power_balls: float
    total_power: float
    net_power: float

    throughput: float = Field(..., description="t/h")
    ball_wear_rate: float

    # Efficiency, %
    milling_efficiency: float
    power_efficiency: float
    overall_efficiency: float

    distribution_key: str
    distribution: DistributionTemplate
    material_key: Optional[str] = None

    model_config = {"frozen": True}

    def display(self) -> Dict[str, Any]:
        """Rounded values with the fixed per-field report precision."""
        values: Dict[str, Any] = {
            name: to_fixed(getattr(self, name), digits) for name, digits in DISPLAY_PRECISION.items()
        }
        values["distribution_name"] = self.distribution.name
        values["distribution"] = [
            {"size_mm": size, "percentage": pct} for size, pct in self.distribution.pairs()
        ]
        return values


class MillCalcRequest(BaseModel):
    # Raw dict on purpose: field errors are reported by the engine, all at once
    parameters: Dict[str, Any]
    material_key: Optional[str] = None


class MillCalcResponse(BaseModel):
    result: CalculationResult
    display: Dict[str, Any]


class ParameterInfoList(BaseModel):
    items: List[ParameterInfo]
