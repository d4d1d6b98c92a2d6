"""
Ball mill calculation engine.

Pure functions from a parameter snapshot to a CalculationResult:
- mill and charge volumes, ball mass
- optimal ball diameter: Bond, Morrell and Austin estimators, blended 50/30/20
- critical and operating speed
- power draw (no-load + ball charge), net power at 75% mechanical efficiency
- throughput from Bond specific energy
- ball wear rate and efficiency indicators
- ball size distribution (see distribution.py)

The product size is fixed at P80 = F80 / 8.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from ballmill.core.exceptions import DomainError
from ballmill.core.logging import get_logger
from ballmill.core.rounding import to_fixed
from ballmill.schemas.catalog import Material
from ballmill.schemas.design import DesignOption
from ballmill.schemas.mill import CalculationResult, MillParameters, ParameterInfo

from .distribution import select_distribution

logger = get_logger(__name__)

REDUCTION_RATIO = 8.0
MECHANICAL_EFFICIENCY = 0.75
DEFAULT_MORRELL_K = 350.0
MIN_THROUGHPUT_TPH = 0.1

# Blend weights of the ball size estimators
BOND_WEIGHT = 0.5
MORRELL_WEIGHT = 0.3
AUSTIN_WEIGHT = 0.2

# Typical values for a medium-hardness ore in a 3 m mill
DEFAULT_PARAMETERS = MillParameters(
    D=3.0,
    L=4.0,
    Wi=15.0,
    F80=2000,
    darsad_bar=40,
    chegali_golole=7.8,
    takhalkhol=40,
    Sg=2.7,
    k=400,
    Cs=72,
)

PARAMETER_INFO = [
    ParameterInfo(key="D", name="Mill diameter", description="Inside diameter of the ball mill, usually 1 to 6 m", unit="m", range="1-6"),
    ParameterInfo(key="L", name="Mill length", description="Inside length of the mill, usually 1 to 10 m", unit="m", range="1-10"),
    ParameterInfo(key="Wi", name="Work index", description="Energy needed to reduce the ore; 10-25 for medium ores", unit="kWh/t", range="10-25"),
    ParameterInfo(key="F80", name="Feed size F80", description="Size that 80% of the feed passes", unit="μm", range="100-10000"),
    ParameterInfo(key="darsad_bar", name="Ball charge", description="Share of mill volume filled with balls, usually 35-45%", unit="%", range="35-45"),
    ParameterInfo(key="chegali_golole", name="Ball density", description="Density of the grinding media; about 7.8 for steel", unit="t/m³", range="7.6-7.9"),
    ParameterInfo(key="takhalkhol", name="Charge porosity", description="Void space between balls, usually 35-45%", unit="%", range="35-45"),
    ParameterInfo(key="Sg", name="Ore specific gravity", description="Specific gravity of the ore; 2.6-4.0 for most rocks", unit="g/cm³", range="2.6-4.0"),
    ParameterInfo(key="k", name="Material constant k", description="Ore-dependent constant of the Morrell ball size equation, usually 350-500", unit="-", range="350-500"),
    ParameterInfo(key="Cs", name="Critical speed", description="Mill speed as a share of critical speed, usually 65-78%", unit="%", range="65-78"),
]

_POSITIVE_FIELDS = ("D", "L", "Wi", "F80", "chegali_golole", "Sg", "Cs")
_PERCENT_FIELDS = ("darsad_bar", "takhalkhol")


def check_domain(params: MillParameters) -> None:
    """Reject values outside the domain of the formulas, one field at a time."""
    for name in _POSITIVE_FIELDS:
        value = getattr(params, name)
        if value <= 0:
            raise DomainError(name, "must be greater than zero", value)
    if params.k < 0:
        raise DomainError("k", "must not be negative", params.k)
    for name in _PERCENT_FIELDS:
        value = getattr(params, name)
        if not 0 <= value <= 100:
            raise DomainError(name, "must be between 0 and 100", value)


def dominant_field(params: MillParameters) -> str:
    """Field whose magnitude is furthest from 1; the likely cause of a float overflow or underflow."""
    candidates = [(name, value) for name, value in params.model_dump().items() if value]
    if not candidates:
        return "parameters"
    return max(candidates, key=lambda item: abs(math.log10(abs(item[1]))))[0]


@contextmanager
def formula_guard(params: MillParameters) -> Iterator[None]:
    """Turn float range errors inside the formulas into a DomainError."""
    try:
        yield
    except (OverflowError, ZeroDivisionError) as exc:
        field = dominant_field(params)
        raise DomainError(field, "calculation overflowed", getattr(params, field, None)) from exc


def bond_ball_size(D: float, Sg: float, Wi: float, F80: float, Cs: float) -> float:
    """Bond top ball size, mm (F80 in μm, D in m)."""
    f80_mm = F80 / 1000
    return 25.4 * ((Sg * Wi * f80_mm) / (Cs / 100 * math.sqrt(D * 3.281))) ** (1 / 3)


def morrell_ball_size(D: float, Wi: float, F80: float, Cs: float, k: float) -> float:
    k1 = k or DEFAULT_MORRELL_K
    return (k1 / 1000) * math.sqrt((Wi * F80) / (math.sqrt(D * 1000) * (Cs / 100)))


def bond_specific_energy(Wi: float, P80: float, F80: float) -> float:
    """Wi * (1/sqrt(P80) - 1/sqrt(F80)), kWh/t."""
    return Wi * (1 / math.sqrt(P80) - 1 / math.sqrt(F80))


def austin_ball_size(bond_size: float, specific_energy: float) -> float:
    return bond_size * (specific_energy / 10) ** 0.15


def blended_ball_size(bond_size: float, morrell_size: float, austin_size: float) -> float:
    return bond_size * BOND_WEIGHT + morrell_size * MORRELL_WEIGHT + austin_size * AUSTIN_WEIGHT


def critical_speed(D: float) -> float:
    """Critical speed, rpm."""
    return 42.3 / math.sqrt(D)


def mill_volume(D: float, L: float) -> float:
    return math.pi * D * D * L / 4


def _formulas(params: MillParameters) -> Dict[str, float]:
    D, L, Wi, F80 = params.D, params.L, params.Wi, params.F80
    Sg, Cs = params.Sg, params.Cs

    # Volumes and charge
    hajm_asiab = mill_volume(D, L)
    hajm_bar = (params.darsad_bar / 100) * hajm_asiab
    hajm_golole = hajm_bar * (1 - params.takhalkhol / 100)
    vazn_golole = hajm_golole * params.chegali_golole

    P80 = F80 / REDUCTION_RATIO

    # Ball size estimators
    bond_size = bond_ball_size(D, Sg, Wi, F80, Cs)
    morrell_size = morrell_ball_size(D, Wi, F80, Cs, params.k)
    specific_energy = bond_specific_energy(Wi, P80, F80)
    austin_size = austin_ball_size(bond_size, specific_energy)
    ball_size = blended_ball_size(bond_size, morrell_size, austin_size)

    # Speeds
    nc = critical_speed(D)
    n = (Cs / 100) * nc

    # Power draw
    Jb = params.darsad_bar / 100
    power_no_load = 1.68 * D**2.05 * L * (1 - 0.1 * Jb) * math.sqrt(Cs / 100)
    power_balls = 10.6 * D**1.35 * L * Jb * Sg * math.sqrt(Cs / 100)
    total_power = power_no_load + power_balls
    net_power = total_power * MECHANICAL_EFFICIENCY

    # Throughput
    A = 10 ** (0.4 * math.log10(Wi) - 1.33)  # Wi factor, reported in debug logs only
    specific_energy_sgm = bond_specific_energy(Wi, P80, F80)
    throughput = max(MIN_THROUGHPUT_TPH, net_power / specific_energy_sgm)

    speed_ratio = n / nc
    ball_wear_rate = 0.024 * specific_energy * speed_ratio**1.2 * (Sg / 2.7)

    # Efficiency
    milling_efficiency = min(95.0, max(65.0, 85 - abs(speed_ratio - 0.75) * 50))
    power_efficiency = min(90.0, net_power / total_power * 100)
    overall_efficiency = (milling_efficiency + power_efficiency) / 2

    logger.debug("mill_formulas", wi_factor=round(A, 4), speed_ratio=round(speed_ratio, 4))

    return dict(
        mill_volume=hajm_asiab,
        charge_volume=hajm_bar,
        ball_volume=hajm_golole,
        ball_mass=vazn_golole,
        p80=P80,
        specific_energy=specific_energy,
        bond_ball_size=bond_size,
        morrell_ball_size=morrell_size,
        austin_ball_size=austin_size,
        ball_size=ball_size,
        critical_speed=nc,
        operating_speed=n,
        power_no_load=power_no_load,
        power_balls=power_balls,
        total_power=total_power,
        net_power=net_power,
        throughput=throughput,
        ball_wear_rate=ball_wear_rate,
        milling_efficiency=milling_efficiency,
        power_efficiency=power_efficiency,
        overall_efficiency=overall_efficiency,
    )


def calculate(
    params: Union[MillParameters, Mapping[str, Any]],
    material: Optional[Material] = None,
) -> CalculationResult:
    """
    Run the full mill calculation.

    Args:
        params: validated MillParameters or raw form data
        material: selected catalog material; drives the distribution override

    Raises:
        ParameterValidationError: a field is missing or not numeric
        DomainError: a value is outside the domain of the formulas, or the
            formulas leave the floating point range
    """
    if not isinstance(params, MillParameters):
        params = MillParameters.from_input(params)
    check_domain(params)

    with formula_guard(params):
        values = _formulas(params)
    for name, value in values.items():
        if not math.isfinite(value):
            raise DomainError(dominant_field(params), f"{name} is not a finite number", value)

    distribution_key, distribution = select_distribution(values["p80"], params.Wi, material)

    logger.debug(
        "mill_calculated",
        diameter_m=params.D,
        length_m=params.L,
        ball_size_mm=round(values["ball_size"], 2),
        throughput_tph=round(values["throughput"], 1),
        distribution=distribution_key,
        material=material.key if material else None,
    )

    return CalculationResult(
        **values,
        distribution_key=distribution_key,
        distribution=distribution,
        material_key=material.key if material else None,
    )


def apply_material(params: MillParameters, material: Material) -> MillParameters:
    """Copy the material's Wi, Sg and recommended k into a new parameter set."""
    return params.model_copy(update={"Wi": material.Wi, "Sg": material.Sg, "k": material.recommended_k})


def design_to_parameters(
    option: DesignOption,
    material: Optional[Material] = None,
    base: Union[MillParameters, Mapping[str, Any], None] = None,
) -> MillParameters:
    """
    Turn a selected design option into a calculator parameter set.

    Geometry is rounded to 0.1 m; ball charge and speed come from the option;
    ore properties from the material when given, otherwise from ``base``.
    """
    if base is None:
        base = DEFAULT_PARAMETERS
    elif not isinstance(base, MillParameters):
        base = MillParameters.from_input({**DEFAULT_PARAMETERS.model_dump(), **dict(base)})

    update: dict[str, float] = {
        "D": to_fixed(option.diameter, 1),
        "L": to_fixed(option.length, 1),
        "darsad_bar": option.ball_charge,
        "Cs": option.critical_speed,
    }
    params = base.model_copy(update=update)
    if material is not None:
        params = apply_material(params, material)
    return params
