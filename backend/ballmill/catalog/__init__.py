"""Static read-only catalogs: ore materials and ball size distributions."""

from .distributions import DISTRIBUTIONS, get_distribution, list_distributions
from .materials import MATERIALS, get_material, list_materials

__all__ = [
    "DISTRIBUTIONS",
    "MATERIALS",
    "get_distribution",
    "get_material",
    "list_distributions",
    "list_materials",
]
