"""
Material database.

Grinding and economic properties of common ores and industrial minerals,
compiled from the SME Mineral Processing Handbook and industry data.
Read-only: the table is built once at import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping

from ballmill.core.exceptions import ResourceNotFound
from ballmill.schemas.catalog import Material
from ballmill.schemas.enums import Abrasiveness, Grindability, Hardness

_MATERIALS = [
    # ==================== Iron ores ====================
    Material(
        key="hematite",
        name="Hematite (Fe2O3)",
        category="Iron ore",
        subcategory="Oxide",
        description="High grade oxide iron ore",
        Wi=12.8,
        Sg=5.0,
        hardness=Hardness.MEDIUM,
        abrasiveness=Abrasiveness.MEDIUM,
        recommended_k=390,
        grindability=Grindability.GOOD,
        typical_capacity_range=(500, 5000),
        optimal_mill_size=(3.5, 7.0),
        bond_fc=7.73,
        bond_maxsize=76.2,
        processing_cost_factor=1.0,
        wear_factor=1.2,
        critical_size=150,
        competency=0.8,
        ore_type="hard",
        liberation_size=75,
        regions=["Australia", "Brazil", "India", "China"],
        typical_grades=(55, 67),  # % Fe
        flotation_recovery=85,
        magnetic_separation=True,
        gravity_separation=False,
    ),
    Material(
        key="magnetite",
        name="Magnetite (Fe3O4)",
        category="Iron ore",
        subcategory="Magnetic",
        description="Magnetic iron ore with high separability",
        Wi=10.2,
        Sg=5.1,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.LOW,
        recommended_k=340,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(1000, 8000),
        optimal_mill_size=(4.0, 8.5),
        bond_fc=6.24,
        bond_maxsize=76.2,
        processing_cost_factor=0.85,
        wear_factor=0.9,
        critical_size=106,
        competency=0.9,
        ore_type="medium",
        liberation_size=45,
        regions=["Sweden", "Chile", "Norway"],
        typical_grades=(58, 72),
        flotation_recovery=75,
        magnetic_separation=True,
        gravity_separation=True,
    ),
    # ==================== Copper ores ====================
    Material(
        key="chalcopyrite",
        name="Chalcopyrite (CuFeS2)",
        category="Copper ore",
        subcategory="Sulphide",
        description="The world's principal copper ore",
        Wi=12.7,
        Sg=4.2,
        hardness=Hardness.MEDIUM,
        abrasiveness=Abrasiveness.MEDIUM,
        recommended_k=410,
        grindability=Grindability.GOOD,
        typical_capacity_range=(200, 3000),
        optimal_mill_size=(3.0, 6.5),
        bond_fc=8.95,
        bond_maxsize=76.2,
        processing_cost_factor=1.15,
        wear_factor=1.1,
        critical_size=180,
        competency=0.75,
        ore_type="medium",
        liberation_size=100,
        regions=["Chile", "Peru", "USA", "Australia"],
        typical_grades=(0.4, 2.5),  # % Cu
        flotation_recovery=92,
        magnetic_separation=False,
        gravity_separation=False,
    ),
    Material(
        key="chalcocite",
        name="Chalcocite (Cu2S)",
        category="Copper ore",
        subcategory="Secondary",
        description="High grade secondary copper ore",
        Wi=8.9,
        Sg=5.7,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.LOW,
        recommended_k=320,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(100, 1500),
        optimal_mill_size=(2.5, 5.0),
        bond_fc=5.81,
        bond_maxsize=63.5,
        processing_cost_factor=0.95,
        wear_factor=0.8,
        critical_size=125,
        competency=0.85,
        ore_type="soft",
        liberation_size=150,
        regions=["Chile", "USA", "Zambia"],
        typical_grades=(1.5, 15.0),
        flotation_recovery=95,
        magnetic_separation=False,
        gravity_separation=False,
    ),
    # ==================== Gold ores ====================
    Material(
        key="free_gold_quartz",
        name="Free gold in quartz",
        category="Gold",
        subcategory="Free milling",
        description="Free gold in a quartz matrix",
        Wi=14.8,
        Sg=2.65,
        hardness=Hardness.HARD,
        abrasiveness=Abrasiveness.HIGH,
        recommended_k=430,
        grindability=Grindability.HARD,
        typical_capacity_range=(50, 800),
        optimal_mill_size=(2.0, 4.5),
        bond_fc=11.2,
        bond_maxsize=76.2,
        processing_cost_factor=1.3,
        wear_factor=1.4,
        critical_size=75,
        competency=0.6,
        ore_type="hard",
        liberation_size=25,
        regions=["Australia", "Canada", "South Africa"],
        typical_grades=(2, 25),  # g/t Au
        flotation_recovery=80,
        magnetic_separation=False,
        gravity_separation=True,
    ),
    Material(
        key="refractory_gold",
        name="Refractory gold (pyrite/arsenopyrite)",
        category="Gold",
        subcategory="Refractory",
        description="Gold locked in sulphides",
        Wi=18.5,
        Sg=4.8,
        hardness=Hardness.VERY_HARD,
        abrasiveness=Abrasiveness.VERY_HIGH,
        recommended_k=480,
        grindability=Grindability.HARD,
        typical_capacity_range=(25, 400),
        optimal_mill_size=(1.8, 3.5),
        bond_fc=14.6,
        bond_maxsize=63.5,
        processing_cost_factor=1.8,
        wear_factor=1.8,
        critical_size=37,
        competency=0.45,
        ore_type="very_hard",
        liberation_size=15,
        regions=["Nevada", "Ghana", "Uzbekistan"],
        typical_grades=(3, 12),
        flotation_recovery=70,
        magnetic_separation=True,
        gravity_separation=False,
    ),
    # ==================== Industrial minerals ====================
    Material(
        key="limestone_cement",
        name="Cement limestone",
        category="Industrial",
        subcategory="Cement",
        description="Limestone for cement production",
        Wi=11.6,
        Sg=2.7,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.LOW,
        recommended_k=350,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(2000, 15000),
        optimal_mill_size=(4.5, 12.0),
        bond_fc=7.49,
        bond_maxsize=101.6,
        processing_cost_factor=0.7,
        wear_factor=0.6,
        critical_size=200,
        competency=1.1,
        ore_type="soft",
        liberation_size=300,
        regions=["Global"],
        typical_grades=(85, 98),  # % CaCO3
        flotation_recovery=0,
        magnetic_separation=False,
        gravity_separation=False,
    ),
    Material(
        key="cement_clinker",
        name="Cement clinker",
        category="Cement",
        subcategory="Clinker",
        description="Portland cement clinker",
        Wi=13.5,
        Sg=3.1,
        hardness=Hardness.HARD,
        abrasiveness=Abrasiveness.HIGH,
        recommended_k=440,
        grindability=Grindability.MEDIUM,
        typical_capacity_range=(1500, 8000),
        optimal_mill_size=(3.5, 8.0),
        bond_fc=9.67,
        bond_maxsize=76.2,
        processing_cost_factor=1.1,
        wear_factor=1.3,
        critical_size=45,
        competency=0.8,
        ore_type="hard",
        liberation_size=32,
        regions=["Global"],
        typical_grades=(95, 99),  # % clinker
        flotation_recovery=0,
        magnetic_separation=False,
        gravity_separation=False,
    ),
    # ==================== Phosphate ====================
    Material(
        key="phosphate_morocco",
        name="Moroccan phosphate",
        category="Fertilizer",
        subcategory="Phosphate",
        description="Moroccan phosphate rock, the largest reserves worldwide",
        Wi=9.8,
        Sg=2.9,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.LOW,
        recommended_k=320,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(800, 4000),
        optimal_mill_size=(3.0, 6.0),
        bond_fc=6.11,
        bond_maxsize=88.9,
        processing_cost_factor=0.8,
        wear_factor=0.7,
        critical_size=250,
        competency=1.0,
        ore_type="soft",
        liberation_size=150,
        regions=["Morocco", "Western Sahara"],
        typical_grades=(28, 34),  # % P2O5
        flotation_recovery=88,
        magnetic_separation=False,
        gravity_separation=True,
    ),
    # ==================== Coal ====================
    Material(
        key="bituminous_coal",
        name="Bituminous coal",
        category="Fuel",
        subcategory="Coal",
        description="High quality bituminous coal",
        Wi=11.4,
        Sg=1.3,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.VERY_LOW,
        recommended_k=300,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(1000, 6000),
        optimal_mill_size=(3.0, 7.0),
        bond_fc=8.77,
        bond_maxsize=114.3,
        processing_cost_factor=0.6,
        wear_factor=0.4,
        critical_size=300,
        competency=1.2,
        ore_type="very_soft",
        liberation_size=500,
        regions=["USA", "Australia", "Germany"],
        typical_grades=(55, 85),  # % carbon
        flotation_recovery=95,
        magnetic_separation=True,
        gravity_separation=True,
    ),
    # ==================== Platinum group metals ====================
    Material(
        key="platinum_ore",
        name="Platinum ore (PGM)",
        category="Precious metals",
        subcategory="Platinum",
        description="Ore bearing platinum group metals",
        Wi=16.2,
        Sg=3.2,
        hardness=Hardness.HARD,
        abrasiveness=Abrasiveness.HIGH,
        recommended_k=460,
        grindability=Grindability.HARD,
        typical_capacity_range=(50, 500),
        optimal_mill_size=(2.0, 4.0),
        bond_fc=12.8,
        bond_maxsize=63.5,
        processing_cost_factor=1.6,
        wear_factor=1.5,
        critical_size=38,
        competency=0.65,
        ore_type="hard",
        liberation_size=20,
        regions=["South Africa", "Russia", "Zimbabwe"],
        typical_grades=(3, 15),  # g/t PGM
        flotation_recovery=85,
        magnetic_separation=True,
        gravity_separation=True,
    ),
    # ==================== Nickel ====================
    Material(
        key="nickel_laterite",
        name="Nickel laterite",
        category="Nickel",
        subcategory="Oxide",
        description="Lateritic oxide nickel ore",
        Wi=9.1,
        Sg=2.8,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.MEDIUM,
        recommended_k=310,
        grindability=Grindability.GOOD,
        typical_capacity_range=(200, 2000),
        optimal_mill_size=(2.5, 5.5),
        bond_fc=5.94,
        bond_maxsize=76.2,
        processing_cost_factor=0.9,
        wear_factor=1.0,
        critical_size=180,
        competency=0.9,
        ore_type="soft",
        liberation_size=100,
        regions=["Indonesia", "Philippines", "Cuba"],
        typical_grades=(1.0, 2.5),  # % Ni
        flotation_recovery=65,
        magnetic_separation=True,
        gravity_separation=False,
    ),
    # ==================== Bauxite ====================
    Material(
        key="bauxite_gibbsite",
        name="Gibbsitic bauxite",
        category="Aluminium",
        subcategory="Bauxite",
        description="High quality gibbsitic bauxite",
        Wi=8.5,
        Sg=2.4,
        hardness=Hardness.SOFT,
        abrasiveness=Abrasiveness.LOW,
        recommended_k=290,
        grindability=Grindability.EXCELLENT,
        typical_capacity_range=(1000, 5000),
        optimal_mill_size=(3.5, 7.5),
        bond_fc=5.23,
        bond_maxsize=88.9,
        processing_cost_factor=0.75,
        wear_factor=0.7,
        critical_size=250,
        competency=1.0,
        ore_type="soft",
        liberation_size=200,
        regions=["Australia", "Guinea", "Brazil"],
        typical_grades=(50, 60),  # % Al2O3
        flotation_recovery=80,
        magnetic_separation=False,
        gravity_separation=True,
    ),
]

MATERIALS: Mapping[str, Material] = MappingProxyType({m.key: m for m in _MATERIALS})


def get_material(key: str) -> Material:
    try:
        return MATERIALS[key]
    except KeyError:
        raise ResourceNotFound(f"Material '{key}' not found", details={"key": key}) from None


def list_materials() -> List[Material]:
    return list(MATERIALS.values())
