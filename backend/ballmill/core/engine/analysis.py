"""
Advanced mill analysis.

Secondary indicators built on top of a CalculationResult:
- Bond power sizing with loss and motor margins
- Rowland & Kjos capacity and yearly operating cost
- bearing pressure and its safety factor
- charge motion (center of gravity, toe and shoulder angles)
- speed and ball charge sensitivity curves

Cost constants are typical values for a mid-size concentrator.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from ballmill.core.exceptions import DomainError
from ballmill.core.logging import get_logger
from ballmill.schemas.analysis import ChargeMotion, ChargePoint, MillAnalysis, PowerAnalysis, SpeedPoint
from ballmill.schemas.mill import CalculationResult, MillParameters

from .mill import REDUCTION_RATIO, calculate, check_domain, critical_speed, dominant_field, formula_guard

logger = get_logger(__name__)

LOSS_FACTOR = 1.2
MOTOR_MARGIN = 1.15
OPERATING_HOURS = 8000  # h/y
POWER_PRICE = 0.12  # $/kWh
BALL_CONSUMPTION = 0.5  # kg/t
BALL_PRICE = 0.8  # $/kg
MAX_BEARING_PRESSURE = 800.0  # kg/m²
BEARING_WIDTH = 0.15  # m
SHOULDER_PARAMETER = 0.3
SHOULDER_OFFSET = 74.0  # degrees past the toe

# Speed curve peaks at 75% of critical, charge curve at 40% filling
SPEED_CURVE = [60 + 2 * i for i in range(20)]
CHARGE_CURVE = [25 + 2 * i for i in range(15)]

# (indicator, minimum) pairs for the checks dict; bearing pressure is a maximum
_THRESHOLDS = {
    "milling_efficiency": 80.0,
    "power_efficiency": 75.0,
    "safety_factor": 1.5,
    "Cs": 65.0,
    "darsad_bar": 35.0,
}


def power_analysis(params: MillParameters, result: CalculationResult) -> PowerAnalysis:
    D, L, Wi, F80, Cs = params.D, params.L, params.Wi, params.F80, params.Cs
    P80 = F80 / REDUCTION_RATIO

    bond_power = 10 * Wi * (1 / math.sqrt(P80) - 1 / math.sqrt(F80))
    total_power = bond_power * LOSS_FACTOR
    motor_power = total_power * MOTOR_MARGIN

    nc = critical_speed(D)
    n = (Cs / 100) * nc
    base_capacity = 0.35 * D**2.5 * L * math.sqrt(n / nc)
    throughput = base_capacity * (1 - params.darsad_bar / 100) * 0.6
    annual_production = throughput * OPERATING_HOURS

    annual_power_cost = total_power * annual_production * POWER_PRICE
    annual_ball_cost = BALL_CONSUMPTION * annual_production * BALL_PRICE
    annual_cost = annual_power_cost + annual_ball_cost

    bearing_pressure = result.ball_mass * 1000 / (math.pi * D * BEARING_WIDTH)

    return PowerAnalysis(
        bond_power=bond_power,
        total_power=total_power,
        motor_power=motor_power,
        base_capacity=base_capacity,
        throughput=throughput,
        annual_production=annual_production,
        reduction_ratio=F80 / P80,
        annual_power_cost=annual_power_cost,
        annual_ball_cost=annual_ball_cost,
        cost_per_tonne=annual_cost / annual_production if annual_production else None,
        power_cost_share=annual_power_cost / annual_cost * 100 if annual_cost else None,
        milling_efficiency=min(95.0, 75 + (n / nc - 0.65) * 100),
        power_efficiency=min(90.0, bond_power / total_power * 100),
        bearing_pressure=bearing_pressure,
        safety_factor=MAX_BEARING_PRESSURE / bearing_pressure if bearing_pressure else None,
    )


def charge_motion(params: MillParameters) -> ChargeMotion:
    """
    Charge center of gravity and the toe/shoulder angles.

    Above roughly 59% filling the center drops below the shell and the toe
    angle has no solution; both angles are then left unset.
    """
    radius = params.D / 2
    Jb = params.darsad_bar / 100
    center_height = radius * (1 - 2 * Jb + SHOULDER_PARAMETER * Jb)

    cosine = (center_height - radius) / radius
    if not -1.0 <= cosine <= 1.0:
        return ChargeMotion(center_height=center_height)
    toe_angle = math.degrees(math.acos(cosine))
    return ChargeMotion(
        center_height=center_height,
        toe_angle=toe_angle,
        shoulder_angle=toe_angle + SHOULDER_OFFSET,
    )


def speed_curve(total_power: float) -> List[SpeedPoint]:
    """Efficiency and power draw from 60 to 98% of critical speed."""
    return [
        SpeedPoint(
            speed=speed,
            efficiency=max(0.0, 100 * math.exp(-(((speed - 75) / 15) ** 2))),
            power=total_power * (speed / 75) * 1.2,
        )
        for speed in SPEED_CURVE
    ]


def charge_curve(total_power: float) -> List[ChargePoint]:
    """Relative throughput and power draw from 25 to 53% ball charge."""
    return [
        ChargePoint(
            charge=charge,
            throughput=max(0.0, 100 * (1 - ((charge - 40) / 25) ** 2)),
            power=total_power * (0.5 + charge / 80),
        )
        for charge in CHARGE_CURVE
    ]


def _checks(params: MillParameters, power: PowerAnalysis) -> Dict[str, bool]:
    values: Dict[str, Optional[float]] = {
        "milling_efficiency": power.milling_efficiency,
        "power_efficiency": power.power_efficiency,
        "safety_factor": power.safety_factor,
        "Cs": params.Cs,
        "darsad_bar": params.darsad_bar,
    }
    checks = {
        name: values[name] is not None and values[name] > minimum for name, minimum in _THRESHOLDS.items()
    }
    checks["bearing_pressure"] = power.bearing_pressure < MAX_BEARING_PRESSURE
    return checks


def analyze(params, result: Optional[CalculationResult] = None) -> MillAnalysis:
    """
    Run the advanced analysis for one parameter set.

    ``params`` may be raw form data, like ``calculate``. Pass ``result`` to reuse
    an existing calculation; otherwise it is computed here.

    Raises:
        ParameterValidationError: malformed or missing fields
        DomainError: out-of-domain values, including float overflow
    """
    if not isinstance(params, MillParameters):
        params = MillParameters.from_input(params)
    if result is None:
        result = calculate(params)
    else:
        check_domain(params)

    with formula_guard(params):
        power = power_analysis(params, result)
        motion = charge_motion(params)
        speeds = speed_curve(result.total_power)
        charges = charge_curve(result.total_power)

    for name, value in power.model_dump().items():
        if value is not None and not math.isfinite(value):
            raise DomainError(dominant_field(params), f"{name} is not a finite number", value)

    checks = _checks(params, power)
    logger.debug(
        "mill_analyzed",
        motor_power=round(power.motor_power, 2),
        safety_factor=None if power.safety_factor is None else round(power.safety_factor, 3),
        failed_checks=sorted(name for name, ok in checks.items() if not ok),
    )
    return MillAnalysis(
        power=power,
        charge_motion=motion,
        speed_curve=speeds,
        charge_curve=charges,
        checks=checks,
    )
