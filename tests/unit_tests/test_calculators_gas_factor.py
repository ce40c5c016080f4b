"""Tests for single-gas factor arithmetic used by GHG Protocol and ISO 14064."""

from types import SimpleNamespace

import pytest

from app.calculators.gas_factor import (
    FactorInput,
    calculate_with_factor,
    factor_from_record,
    reference_candidates,
    summarize_gas_calculations,
)
from app.calculators.gwp import get_gwp
from app.core.exceptions import BadRequestError


class TestGwp:
    """Tests for get_gwp."""

    def test_known_gases(self):
        assert get_gwp("CH4") == 28
        assert get_gwp("N2O") == 265
        assert get_gwp("SF6") == 22800

    def test_unknown_or_missing_gas_is_co2(self):
        assert get_gwp(None) == 1
        assert get_gwp("XYZ") == 1


class TestCalculateWithFactor:
    """Tests for calculate_with_factor."""

    def test_co2e_uses_gas_gwp(self):
        """Methane emissions are multiplied by 28."""
        factor = FactorInput(value=0.5, unit="kg CH4/head", gas_type="CH4", source="Farm survey")

        result = calculate_with_factor(10, "head", factor)

        assert result.gas_type == "CH4"
        assert result.emission_value == pytest.approx(5.0)
        assert result.gwp_value == 28
        assert result.co2_equivalent == pytest.approx(140.0)
        assert result.emission_factor["source"] == "Farm survey"

    def test_explicit_gas_overrides_factor_gas(self):
        """The requested gas wins over the factor's own gas."""
        factor = FactorInput(value=1.0, unit="kg/kWh", gas_type="CO2")

        result = calculate_with_factor(2, "kWh", factor, gas_type="N2O")

        assert result.co2_equivalent == pytest.approx(530.0)

    def test_defaults(self):
        """Gas defaults to CO2, source to Provided and method to custom."""
        result = calculate_with_factor(100, "kWh", FactorInput(value=0.5, unit="kg CO2e/kWh"))

        assert result.gas_type == "CO2"
        assert result.co2_equivalent == pytest.approx(50.0)
        assert result.emission_factor["source"] == "Provided"
        assert result.calculation_method == "custom"
        assert "100 kWh" in result.formula

    def test_negative_quantity_rejected(self):
        with pytest.raises(BadRequestError):
            calculate_with_factor(-1, "kWh", FactorInput(value=0.5, unit="kg/kWh"))


class TestFactorFromRecord:
    """Tests for factor_from_record."""

    def test_gas_specific_value(self):
        record = SimpleNamespace(
            id="f-1", unit="L", co2_factor=2.6, ch4_factor=0.0001, n2o_factor=None,
            co2e_factor=2.7, source="EPA", activity_name="Diesel",
        )

        factor = factor_from_record(record, "CH4")

        assert factor.value == 0.0001
        assert factor.gas_type == "CH4"
        assert factor.factor_id == "f-1"

    def test_co2_falls_back_to_co2e(self):
        """A CO2e-only record still serves CO2 requests."""
        record = SimpleNamespace(unit="kWh", co2_factor=None, co2e_factor=0.4)

        factor = factor_from_record(record)

        assert factor.value == 0.4
        assert factor.gas_type == "CO2"

    def test_missing_gas_value(self):
        record = SimpleNamespace(unit="kWh", co2_factor=None, n2o_factor=None, co2e_factor=0.4)

        with pytest.raises(BadRequestError, match="no value for N2O"):
            factor_from_record(record, "N2O")


class TestReferenceCandidates:
    """Tests for reference_candidates."""

    def test_narrowed_by_scope_and_category(self):
        candidates = reference_candidates("Scope2", "purchased_electricity")

        assert {c.activity_name for c in candidates} == {"Grid electricity", "Renewable electricity"}

    def test_unknown_category_keeps_scope_candidates(self):
        """A category that matches nothing leaves the scope filter in place."""
        candidates = reference_candidates("Scope1", "fugitive_emissions")

        assert candidates
        assert all(c.scope == "Scope1" for c in candidates)


def test_summarize_gas_calculations():
    """Totals are split by scope, gas and category; Scope 3 gets its own breakdown."""
    calcs = [
        SimpleNamespace(co2_equivalent=100.0, scope="Scope1", gas_type="CO2", category="stationary_combustion"),
        SimpleNamespace(co2_equivalent=28.0, scope="Scope1", gas_type="CH4", category="stationary_combustion"),
        SimpleNamespace(co2_equivalent=50.0, scope="Scope3", gas_type="CO2", category="business_travel"),
    ]

    summary = summarize_gas_calculations(calcs)

    assert summary["scope1_total"] == 128.0
    assert summary["scope3_total"] == 50.0
    assert summary["total_emissions"] == 178.0
    assert summary["breakdown_by_gas"] == {"CO2": 150.0, "CH4": 28.0}
    assert summary["breakdown_by_category"]["stationary_combustion"] == 128.0
    assert summary["scope3_breakdown"] == {"business_travel": 50.0}
    assert summary["calculation_count"] == 3
