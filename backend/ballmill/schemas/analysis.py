from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ballmill.core.rounding import to_fixed

from .mill import CalculationResult


class PowerAnalysis(BaseModel):
    """Bond power sizing, Rowland & Kjos capacity and yearly operating cost."""

    bond_power: float = Field(..., description="Bond specific energy at 10 x Wi, kWh/t")
    total_power: float = Field(..., description="Bond power with 20% losses, kWh/t")
    motor_power: float = Field(..., description="Motor sizing with 15% margin, kW")

    base_capacity: float = Field(..., description="Rowland & Kjos base capacity, t/h")
    throughput: float = Field(..., description="Capacity net of the ball charge, t/h")
    annual_production: float = Field(..., description="t/y")
    reduction_ratio: float

    annual_power_cost: float = Field(..., description="$/y")
    annual_ball_cost: float = Field(..., description="$/y")
    cost_per_tonne: Optional[float] = Field(None, description="$/t, unset when throughput is zero")
    power_cost_share: Optional[float] = Field(None, description="% of operating cost")

    milling_efficiency: float
    power_efficiency: float

    bearing_pressure: float = Field(..., description="kg/m²")
    safety_factor: Optional[float] = Field(None, description="Unset for an empty mill")

    model_config = {"frozen": True}


class ChargeMotion(BaseModel):
    """Charge geometry from the ball filling; angles are unset when the filling leaves the mill."""

    center_height: float = Field(..., description="Charge center of gravity above the mill axis, m")
    toe_angle: Optional[float] = Field(None, description="degrees")
    shoulder_angle: Optional[float] = Field(None, description="degrees")

    model_config = {"frozen": True}


class SpeedPoint(BaseModel):
    speed: float = Field(..., description="% of critical speed")
    efficiency: float
    power: float = Field(..., description="kW")


class ChargePoint(BaseModel):
    charge: float = Field(..., description="Ball charge, % of mill volume")
    throughput: float = Field(..., description="Relative throughput, %")
    power: float = Field(..., description="kW")


class MillAnalysis(BaseModel):
    power: PowerAnalysis
    charge_motion: ChargeMotion
    speed_curve: List[SpeedPoint]
    charge_curve: List[ChargePoint]
    checks: Dict[str, bool] = Field(
        default_factory=dict, description="Operating indicators against their usual thresholds"
    )

    def display(self) -> Dict[str, Any]:
        power = self.power
        motion = self.charge_motion
        return {
            "bond_power": to_fixed(power.bond_power, 2),
            "total_power": to_fixed(power.total_power, 2),
            "motor_power": to_fixed(power.motor_power, 2),
            "throughput": to_fixed(power.throughput, 1),
            "annual_production_kt": to_fixed(power.annual_production / 1000, 0),
            "reduction_ratio": to_fixed(power.reduction_ratio, 1),
            "annual_power_cost": to_fixed(power.annual_power_cost, 0),
            "annual_ball_cost": to_fixed(power.annual_ball_cost, 0),
            "milling_efficiency": to_fixed(power.milling_efficiency, 1),
            "power_efficiency": to_fixed(power.power_efficiency, 1),
            "bearing_pressure": to_fixed(power.bearing_pressure, 0),
            "safety_factor": None if power.safety_factor is None else to_fixed(power.safety_factor, 2),
            "center_height": to_fixed(motion.center_height, 3),
            "toe_angle": None if motion.toe_angle is None else to_fixed(motion.toe_angle, 1),
            "shoulder_angle": None if motion.shoulder_angle is None else to_fixed(motion.shoulder_angle, 1),
        }


class MillAnalysisResponse(BaseModel):
    result: CalculationResult
    display: Dict[str, Any]
    analysis: MillAnalysis
    analysis_display: Dict[str, Any]
