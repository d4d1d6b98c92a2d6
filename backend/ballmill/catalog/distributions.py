"""
Ball size distribution catalog.

Make-up ball charges after Morrell & Morrison, keyed by grinding regime plus two
ore-specific charges (hard and soft ores). Sizes are standard ball diameters in
mm (1/2" to 5"); every template sums to 100%.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from ballmill.core.exceptions import ResourceNotFound
from ballmill.schemas.catalog import DistributionTemplate
from ballmill.schemas.enums import PowerIntensity

# Standard ball diameters, mm
STANDARD_BALL_SIZES = (12.7, 19.1, 25.4, 31.8, 38.1, 44.5, 50.8, 63.5, 76.2, 88.9, 101.6, 114.3, 127.0)

ULTRA_FINE = "ultra_fine"
FINE = "fine"
MEDIUM = "medium"
COARSE = "coarse"
VERY_COARSE = "very_coarse"
HARD_ORES = "hard_ores"
SOFT_ORES = "soft_ores"


_TEMPLATES = [
    # P80 < 25 μm
    DistributionTemplate(
        key=ULTRA_FINE,
        name="Ultra-fine - cement finish grinding",
        sizes=(12.7, 19.1, 25.4, 31.8),
        percentages=(25, 35, 25, 15),
        applications=("Cement finish mills", "Ultra-fine calcium carbonate", "Industrial powders"),
        optimal_f80_range=(50, 200),
        power_intensity=PowerIntensity.HIGH,
    ),
    # P80 25-75 μm
    DistributionTemplate(
        key=FINE,
        name="Fine - regrind circuits",
        sizes=(19.1, 25.4, 31.8, 38.1, 44.5),
        percentages=(15, 25, 30, 20, 10),
        applications=("Gold regrind", "Copper regrind", "Concentrate reprocessing"),
        optimal_f80_range=(100, 500),
        power_intensity=PowerIntensity.MEDIUM_HIGH,
    ),
    # P80 75-150 μm
    DistributionTemplate(
        key=MEDIUM,
        name="Medium - secondary grinding",
        sizes=(25.4, 31.8, 38.1, 44.5, 50.8, 63.5),
        percentages=(12, 18, 22, 20, 15, 13),
        applications=("Copper secondary grinding", "Iron ore secondary grinding", "Phosphate rock"),
        optimal_f80_range=(500, 2000),
        power_intensity=PowerIntensity.MEDIUM,
    ),
    # P80 150-300 μm
    DistributionTemplate(
        key=COARSE,
        name="Coarse - primary grinding",
        sizes=(38.1, 44.5, 50.8, 63.5, 76.2, 88.9, 101.6),
        percentages=(10, 15, 18, 20, 15, 12, 10),
        applications=("Copper primary grinding", "Iron ore primary grinding", "Construction materials"),
        optimal_f80_range=(2000, 8000),
        power_intensity=PowerIntensity.LOW_MEDIUM,
    ),
    # P80 > 300 μm
    DistributionTemplate(
        key=VERY_COARSE,
        name="Very coarse - large mills",
        sizes=(63.5, 76.2, 88.9, 101.6, 114.3, 127.0),
        percentages=(15, 20, 22, 18, 15, 10),
        applications=("Large mining mills", "Limestone", "Raw clinker"),
        optimal_f80_range=(5000, 15000),
        power_intensity=PowerIntensity.LOW,
    ),
    DistributionTemplate(
        key=HARD_ORES,
        name="Hard ores",
        sizes=(31.8, 38.1, 44.5, 50.8, 63.5, 76.2, 88.9, 101.6),
        percentages=(8, 12, 15, 18, 17, 15, 10, 5),
        applications=("Quartz", "Refractory gold", "Siliceous rock"),
        optimal_f80_range=(1000, 5000),
        power_intensity=PowerIntensity.HIGH,
    ),
    DistributionTemplate(
        key=SOFT_ORES,
        name="Soft ores",
        sizes=(19.1, 25.4, 31.8, 38.1, 44.5, 50.8, 63.5),
        percentages=(18, 22, 20, 15, 12, 8, 5),
        applications=("Phosphate", "Bauxite", "Coal", "Carbonates"),
        optimal_f80_range=(500, 3000),
        power_intensity=PowerIntensity.LOW,
    ),
]


def check_standard_sizes(templates) -> None:
    """Raise ValueError if a template uses a ball diameter outside STANDARD_BALL_SIZES."""
    for template in templates:
        odd = [size for size in template.sizes if size not in STANDARD_BALL_SIZES]
        if odd:
            raise ValueError(f"Distribution '{template.key}' uses non-standard ball sizes: {odd}")


check_standard_sizes(_TEMPLATES)

DISTRIBUTIONS: Mapping[str, DistributionTemplate] = MappingProxyType({t.key: t for t in _TEMPLATES})


def get_distribution(key: str) -> DistributionTemplate:
    try:
        return DISTRIBUTIONS[key]
    except KeyError:
        raise ResourceNotFound(f"Distribution '{key}' not found", details={"key": key}) from None


def list_distributions() -> List[DistributionTemplate]:
    return list(DISTRIBUTIONS.values())
