"""Tests for DEFRA factor arithmetic and summary totals."""

from types import SimpleNamespace

import pytest

from app.calculators.defra import calculate_defra, summarize_defra


def make_factor(**overrides):
    values = {
        "co2_factor": None,
        "ch4_factor": None,
        "n2o_factor": None,
        "co2e_factor": None,
        "level1_category": "Fuels",
        "activity_name": "Diesel (average biofuel blend)",
        "scope": "Scope 1",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestCalculateDefra:
    """Tests for calculate_defra."""

    def test_gas_split_rebuilds_total_with_gwp(self):
        """Per-gas factors are weighted with AR5 GWPs instead of using the CO2e factor."""
        factor = make_factor(co2_factor=2.5, ch4_factor=0.01, n2o_factor=0.001, co2e_factor=99.0)

        result = calculate_defra(100, factor)

        assert result.co2_emissions == pytest.approx(250.0)
        assert result.ch4_emissions == pytest.approx(1.0)
        assert result.n2o_emissions == pytest.approx(0.1)
        assert result.total_co2e == pytest.approx(250.0 + 28 * 1.0 + 265 * 0.1)

    def test_co2e_factor_used_without_gas_split(self):
        """Only the published CO2e factor is applied when no gas factors exist."""
        factor = make_factor(co2e_factor=0.21)

        result = calculate_defra(1000, factor)

        assert result.total_co2e == pytest.approx(210.0)
        assert result.co2_emissions == 0
        assert result.ch4_emissions == 0

    def test_category_and_scope_come_from_factor(self):
        """The calculation inherits the factor's level 1 category and scope."""
        result = calculate_defra(1, make_factor(co2e_factor=1.0, scope="Scope 3", level1_category="Business travel- air"))

        assert result.category == "Business travel- air"
        assert result.scope == "Scope 3"

    def test_activity_name_used_when_category_missing(self):
        """The activity name stands in for a missing level 1 category."""
        result = calculate_defra(1, make_factor(co2e_factor=1.0, level1_category=None))

        assert result.category == "Diesel (average biofuel blend)"

    def test_partial_gas_split_treats_missing_gases_as_zero(self):
        """A CO2-only split still counts as a split."""
        result = calculate_defra(10, make_factor(co2_factor=2.0, co2e_factor=5.0))

        assert result.total_co2e == pytest.approx(20.0)


class TestSummarizeDefra:
    """Tests for summarize_defra."""

    def test_scope_totals(self):
        """Totals are split by scope."""
        calcs = [
            SimpleNamespace(total_co2e=10.0, scope="Scope 1", category="Fuels"),
            SimpleNamespace(total_co2e=5.0, scope="Scope 2", category="UK electricity"),
            SimpleNamespace(total_co2e=2.0, scope="Scope 3", category="Waste disposal"),
        ]

        summary = summarize_defra(calcs)

        assert summary["scope1_total"] == 10.0
        assert summary["scope2_total"] == 5.0
        assert summary["scope3_total"] == 2.0
        assert summary["total_co2e"] == 17.0
        assert summary["calculation_count"] == 3
        assert summary["waste_total"] == 2.0

    def test_keyword_categories_are_not_exclusive(self):
        """A category matching several keyword groups counts towards each of them."""
        calcs = [SimpleNamespace(total_co2e=4.0, scope="Scope 3", category="Business travel- car fuel")]

        summary = summarize_defra(calcs)

        assert summary["fuels_total"] == 4.0
        assert summary["business_travel_total"] == 4.0
        assert summary["material_use_total"] == 0.0

    def test_empty(self):
        """No calculations means zero totals."""
        summary = summarize_defra([])

        assert summary["total_co2e"] == 0.0
        assert summary["calculation_count"] == 0
