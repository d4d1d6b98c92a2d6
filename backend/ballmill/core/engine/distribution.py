"""
Ball size distribution selection.

Material hardness always wins over the product-size bucket: a hard ore ground
to an ultra-fine product still gets the hard-ore charge. Without a material,
the work index stands in for hardness.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ballmill.catalog import distributions as catalog
from ballmill.schemas.catalog import DistributionTemplate, Material
from ballmill.schemas.enums import Hardness

HARD_WI_THRESHOLD = 16.0  # kWh/t
SOFT_WI_THRESHOLD = 10.0  # kWh/t

# Upper P80 bounds (μm, exclusive) of the size buckets
P80_BUCKETS = (
    (25.0, catalog.ULTRA_FINE),
    (75.0, catalog.FINE),
    (150.0, catalog.MEDIUM),
    (300.0, catalog.COARSE),
)


def distribution_key_for(p80: float, wi: float, material: Optional[Material] = None) -> str:
    """Catalog key of the distribution for the given product size and ore."""
    if material is not None:
        if material.hardness in (Hardness.HARD, Hardness.VERY_HARD):
            return catalog.HARD_ORES
        if material.hardness in (Hardness.SOFT, Hardness.VERY_SOFT):
            return catalog.SOFT_ORES
    else:
        if wi > HARD_WI_THRESHOLD:
            return catalog.HARD_ORES
        if wi < SOFT_WI_THRESHOLD:
            return catalog.SOFT_ORES

    for upper, key in P80_BUCKETS:
        if p80 < upper:
            return key
    return catalog.VERY_COARSE


def select_distribution(
    p80: float, wi: float, material: Optional[Material] = None
) -> Tuple[str, DistributionTemplate]:
    key = distribution_key_for(p80, wi, material)
    return key, catalog.get_distribution(key)
