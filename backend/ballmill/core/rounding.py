"""
Report rounding.

Values are rounded half-up on their exact binary value, the way a browser
formats numbers with ``toFixed``, so reports match the reference figures digit
for digit. Python's ``round`` uses banker's rounding and would differ on ties.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

# Decimal places per CalculationResult field
DISPLAY_PRECISION: Dict[str, int] = {
    "mill_volume": 3,
    "charge_volume": 3,
    "ball_volume": 3,
    "ball_mass": 3,
    "ball_size": 2,
    "bond_ball_size": 2,
    "morrell_ball_size": 2,
    "austin_ball_size": 2,
    "critical_speed": 1,
    "operating_speed": 1,
    "total_power": 0,
    "net_power": 0,
    "throughput": 1,
    "ball_wear_rate": 3,
    "specific_energy": 2,
    "milling_efficiency": 1,
    "power_efficiency": 1,
    "overall_efficiency": 1,
    "p80": 0,
}


def to_fixed(value: float, digits: int) -> Union[float, int]:
    """Round half-up to ``digits`` decimals; zero digits gives an int."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def round_half_up(value: float) -> int:
    """Nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)
