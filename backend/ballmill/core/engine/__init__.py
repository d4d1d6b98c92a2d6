"""
Ball mill calculation engine.

Modules:
- mill: volumes, ball size, speed, power, throughput, efficiency
- distribution: ball size distribution selection
- design: design assistant options and scoring
- analysis: power sizing, operating cost, charge motion and sensitivity curves
- generation: cancellable design generation runs with progress
"""

from .analysis import analyze, charge_curve, charge_motion, power_analysis, speed_curve
from .design import ARCHETYPES, generate_options, rank_options, score, score_weights
from .distribution import distribution_key_for, select_distribution
from .generation import GENERATION_PHASES, DesignAssistantSession, GenerationRun
from .mill import (
    DEFAULT_PARAMETERS,
    PARAMETER_INFO,
    apply_material,
    calculate,
    check_domain,
    design_to_parameters,
)

__all__ = [
    "ARCHETYPES",
    "DEFAULT_PARAMETERS",
    "DesignAssistantSession",
    "GENERATION_PHASES",
    "GenerationRun",
    "PARAMETER_INFO",
    "analyze",
    "apply_material",
    "calculate",
    "charge_curve",
    "charge_motion",
    "check_domain",
    "design_to_parameters",
    "distribution_key_for",
    "generate_options",
    "power_analysis",
    "rank_options",
    "score",
    "score_weights",
    "select_distribution",
    "speed_curve",
]
