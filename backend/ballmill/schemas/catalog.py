"""
Catalog contracts: ore materials and ball size distribution templates.

Both are read-only reference records. Instances live in the static tables of
``ballmill.catalog`` and are never mutated at runtime.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field, computed_field, model_validator

from .enums import Abrasiveness, Grindability, Hardness, PowerIntensity


class Material(BaseModel):
    """
    Ore / mineral entry of the material database.

    Selecting a material copies ``Wi``, ``Sg`` and ``recommended_k`` into the
    mill parameters; ``hardness`` drives the ball distribution override and
    ``wear_factor`` feeds the design assistant.
    """

    key: str = Field(..., description="Catalog key, e.g. 'hematite'")
    name: str
    category: str
    subcategory: str
    description: str = ""

    # Grinding properties
    Wi: float = Field(..., gt=0, description="Bond work index, kWh/t")
    Sg: float = Field(..., gt=0, description="Specific gravity")
    hardness: Hardness
    abrasiveness: Abrasiveness
    recommended_k: float = Field(..., gt=0, description="Recommended material constant k")
    grindability: Grindability

    # Production capacity considerations
    typical_capacity_range: Tuple[float, float] = Field(..., description="t/h")
    optimal_mill_size: Tuple[float, float] = Field(..., description="Mill diameter range, m")
    bond_fc: float
    bond_maxsize: float = Field(..., description="Largest recommended ball, mm")

    # Economic factors
    processing_cost_factor: float
    wear_factor: float

    # Grinding characteristics
    critical_size: float = Field(..., description="μm")
    competency: float
    ore_type: str
    liberation_size: float = Field(..., description="μm")

    # Regional variations and process considerations
    regions: List[str] = Field(default_factory=list)
    typical_grades: Tuple[float, float]
    flotation_recovery: float = Field(..., ge=0, le=100, description="%")
    magnetic_separation: bool = False
    gravity_separation: bool = False

    model_config = {"frozen": True}

    @computed_field  # type: ignore[misc]
    @property
    def grindability_stars(self) -> int:
        return self.grindability.stars

    @computed_field  # type: ignore[misc]
    @property
    def capacity_class(self) -> str:
        """Size class from the mean of the typical capacity range."""
        low, high = self.typical_capacity_range
        avg = (low + high) / 2
        if avg < 200:
            return "small"
        if avg < 1000:
            return "medium"
        if avg < 5000:
            return "large"
        return "very-large"

    @computed_field  # type: ignore[misc]
    @property
    def processing_complexity(self) -> str:
        complexity = 0
        if self.Wi > 15:
            complexity += 1
        if self.abrasiveness in (Abrasiveness.HIGH, Abrasiveness.VERY_HIGH):
            complexity += 1
        if self.liberation_size < 50:
            complexity += 1
        if self.flotation_recovery < 80:
            complexity += 1

        if complexity >= 3:
            return "complex"
        if complexity >= 2:
            return "moderate"
        return "simple"


class DistributionTemplate(BaseModel):
    """
    Named ball size distribution.

    ``sizes`` (mm, ascending) and ``percentages`` are paired 1:1 and the
    percentages always sum to 100.
    """

    key: str
    name: str
    sizes: Tuple[float, ...] = Field(..., min_length=1, description="Ball sizes, mm")
    percentages: Tuple[float, ...] = Field(..., min_length=1, description="Mass share, %")
    applications: Tuple[str, ...] = ()
    optimal_f80_range: Tuple[float, float] = Field(..., description="Feed F80 range, μm")
    power_intensity: PowerIntensity

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_pairs(self):
        if len(self.sizes) != len(self.percentages):
            raise ValueError(f"{self.key}: sizes and percentages must have the same length")
        if any(b <= a for a, b in zip(self.sizes, self.sizes[1:])):
            raise ValueError(f"{self.key}: sizes must be strictly ascending")
        if abs(sum(self.percentages) - 100.0) > 1e-9:
            raise ValueError(f"{self.key}: percentages must sum to 100")
        return self

    def pairs(self) -> List[Tuple[float, float]]:
        """(size_mm, percentage) in size order."""
        return list(zip(self.sizes, self.percentages))

    def cumulative(self) -> List[Tuple[float, float]]:
        """(size_mm, cumulative %) from the smallest ball up."""
        running = 0.0
        points = []
        for size, pct in self.pairs():
            running += pct
            points.append((size, running))
        return points
