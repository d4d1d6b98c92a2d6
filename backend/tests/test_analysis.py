"""
Tests for the advanced mill analysis: power sizing, cost, bearing load,
charge motion and the sensitivity curves.
"""

import math

import pytest
from ballmill.core.engine import (
    DEFAULT_PARAMETERS,
    analyze,
    calculate,
    charge_curve,
    charge_motion,
    power_analysis,
    speed_curve,
)
from ballmill.core.exceptions import DomainError, ParameterValidationError
from ballmill.schemas import MillParameters

from .utils import default_params

# ==================== Power and cost ====================


class TestPowerAnalysis:
    """Form defaults: D=3, L=4, Wi=15, F80=2000, Cs=72, 40% ball charge."""

    @pytest.fixture
    def power(self):
        return power_analysis(DEFAULT_PARAMETERS, calculate(DEFAULT_PARAMETERS))

    def test_bond_power_sizing(self, power):
        assert power.bond_power == pytest.approx(6.133, abs=1e-3)
        assert power.total_power == pytest.approx(1.2 * power.bond_power)
        assert power.motor_power == pytest.approx(8.463, abs=1e-3)
        assert power.power_efficiency == pytest.approx(100 / 1.2)

    def test_rowland_kjos_capacity(self, power):
        assert power.base_capacity == pytest.approx(18.518, abs=1e-3)
        assert power.throughput == pytest.approx(6.667, abs=1e-3)
        assert power.annual_production == pytest.approx(8000 * power.throughput)
        assert power.reduction_ratio == 8

    def test_operating_cost(self, power):
        assert power.annual_power_cost == pytest.approx(47098.9, abs=0.5)
        assert power.annual_ball_cost == pytest.approx(21332.9, abs=0.5)
        assert power.cost_per_tonne == pytest.approx(0.12 * power.total_power + 0.4)
        assert 0 < power.power_cost_share < 100

    def test_bearing_load(self, power):
        assert power.bearing_pressure == pytest.approx(37440.0, abs=0.5)
        assert power.safety_factor == pytest.approx(0.02137, abs=1e-4)

    def test_milling_efficiency_capped(self):
        params = MillParameters.from_input(default_params(Cs=99))
        power = power_analysis(params, calculate(params))
        assert power.milling_efficiency == 95.0

    def test_empty_mill_has_no_safety_factor(self):
        params = MillParameters.from_input(default_params(darsad_bar=0))
        power = power_analysis(params, calculate(params))
        assert power.bearing_pressure == 0
        assert power.safety_factor is None


# ==================== Charge motion ====================


class TestChargeMotion:
    def test_reference_angles(self):
        motion = charge_motion(DEFAULT_PARAMETERS)
        assert motion.center_height == pytest.approx(0.48)
        assert motion.toe_angle == pytest.approx(132.84, abs=0.05)
        assert motion.shoulder_angle == pytest.approx(motion.toe_angle + 74)

    def test_toe_angle_grows_with_filling(self):
        low = charge_motion(MillParameters.from_input(default_params(darsad_bar=20)))
        high = charge_motion(MillParameters.from_input(default_params(darsad_bar=45)))
        assert low.toe_angle < high.toe_angle

    def test_overfilled_mill_has_no_angles(self):
        motion = charge_motion(MillParameters.from_input(default_params(darsad_bar=70)))
        assert motion.center_height < 0
        assert motion.toe_angle is None
        assert motion.shoulder_angle is None


# ==================== Sensitivity curves ====================


class TestCurves:
    def test_speed_curve(self):
        points = speed_curve(100.0)
        assert [p.speed for p in points] == list(range(60, 100, 2))
        by_speed = {p.speed: p for p in points}
        assert by_speed[74].efficiency == pytest.approx(100 * math.exp(-1 / 225))
        assert by_speed[60].efficiency == pytest.approx(36.79, abs=0.01)
        assert by_speed[60].power == pytest.approx(96.0)
        assert max(points, key=lambda p: p.efficiency).speed in (74, 76)

    def test_charge_curve(self):
        points = charge_curve(80.0)
        assert [p.charge for p in points] == list(range(25, 55, 2))
        by_charge = {p.charge: p for p in points}
        assert by_charge[41].throughput == pytest.approx(99.84)
        assert by_charge[25].throughput == pytest.approx(64.0)
        assert by_charge[25].power == pytest.approx(80 * (0.5 + 25 / 80))
        assert all(p.throughput >= 0 for p in points)


# ==================== analyze ====================


class TestAnalyze:
    def test_reuses_result(self):
        result = calculate(DEFAULT_PARAMETERS)
        analysis = analyze(DEFAULT_PARAMETERS, result)
        assert analysis.speed_curve[0].power == pytest.approx(result.total_power * 60 / 75 * 1.2)
        assert analysis == analyze(DEFAULT_PARAMETERS)

    def test_accepts_raw_form_data(self):
        raw = {name: str(value) for name, value in default_params().items()}
        assert analyze(raw) == analyze(DEFAULT_PARAMETERS)

    def test_checks(self):
        checks = analyze(DEFAULT_PARAMETERS).checks
        assert checks == {
            "milling_efficiency": True,
            "power_efficiency": True,
            "safety_factor": False,
            "Cs": True,
            "darsad_bar": True,
            "bearing_pressure": False,
        }

    def test_display(self):
        display = analyze(DEFAULT_PARAMETERS).display()
        assert display["bond_power"] == 6.13
        assert display["motor_power"] == 8.46
        assert display["annual_production_kt"] == 53
        assert display["reduction_ratio"] == 8.0
        assert display["shoulder_angle"] == 206.8

    def test_invalid_input(self):
        with pytest.raises(ParameterValidationError) as exc_info:
            analyze(default_params(Wi="abc"))
        assert exc_info.value.fields == ["Wi"]

    def test_domain_checked_with_supplied_result(self):
        result = calculate(DEFAULT_PARAMETERS)
        with pytest.raises(DomainError) as exc_info:
            analyze(default_params(Cs=0), result)
        assert exc_info.value.field == "Cs"

    def test_overflow(self):
        with pytest.raises(DomainError) as exc_info:
            analyze(default_params(D=1e160))
        assert exc_info.value.field == "D"
