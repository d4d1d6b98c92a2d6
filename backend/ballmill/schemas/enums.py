# Enums for the ball mill backend
from enum import Enum


class Hardness(str, Enum):
    """Qualitative ore hardness"""

    VERY_SOFT = "very-soft"
    SOFT = "soft"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very-hard"


class Abrasiveness(str, Enum):
    """Qualitative ore abrasiveness"""

    VERY_LOW = "very-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class Grindability(str, Enum):
    """Qualitative grindability, rated 1-5 stars"""

    EXCELLENT = "excellent"
    GOOD = "good"
    MEDIUM = "medium"
    HARD = "hard"
    POOR = "poor"

    @property
    def stars(self) -> int:
        return {
            Grindability.EXCELLENT: 5,
            Grindability.GOOD: 4,
            Grindability.MEDIUM: 3,
            Grindability.HARD: 2,
        }.get(self, 1)


class PowerIntensity(str, Enum):
    """Relative power demand of a ball size distribution"""

    LOW = "low"
    LOW_MEDIUM = "low-medium"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium-high"
    HIGH = "high"


class DesignPriority(str, Enum):
    """What the design assistant should favour"""

    COST = "cost"
    BALANCED = "balanced"
    EFFICIENCY = "efficiency"
    RELIABILITY = "reliability"


class EnvironmentalStrictness(str, Enum):
    """Environmental requirement level"""

    BASIC = "basic"
    STANDARD = "standard"
    STRICT = "strict"


class SiteLocation(str, Enum):
    """Plant location category"""

    URBAN = "urban"
    INDUSTRIAL = "industrial"
    REMOTE = "remote"


class GenerationState(str, Enum):
    """State of the design assistant workflow"""

    COLLECTING_REQUIREMENTS = "collecting-requirements"
    GENERATING = "generating"
    OPTIONS_READY = "options-ready"


__all__ = [
    "Abrasiveness",
    "DesignPriority",
    "EnvironmentalStrictness",
    "GenerationState",
    "Grindability",
    "Hardness",
    "PowerIntensity",
    "SiteLocation",
]
