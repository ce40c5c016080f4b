"""Tests for IPCC 2006 arithmetic and helpers."""

from types import SimpleNamespace

import pytest

from app.calculators.ipcc import (
    CATEGORY_CATALOGUE,
    best_gas_type,
    calculate_emission,
    select_best_factor,
    suggest_tier,
    summarize_sector,
    uncertainty_for_tier,
)


def make_factor(**overrides):
    values = {
        "name": "Default factor",
        "value": 1.0,
        "unit": "kg/unit",
        "tier": "TIER_1",
        "heating_value": None,
        "heating_value_unit": None,
        "applicable_categories": [],
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestCalculateEmission:
    """Tests for calculate_emission."""

    def test_energy_with_heating_value_and_per_tj_factor(self):
        """Tons are converted to GJ, then a per-TJ factor is scaled down by 1000."""
        factor = make_factor(value=74100, unit="kg CO2/TJ", heating_value=43.0, heating_value_unit="GJ/ton")

        result = calculate_emission(10, "ton", factor, "ENERGY", 1)

        assert result.emission_value == pytest.approx(430 / 1000 * 74100)
        assert result.co2_equivalent == pytest.approx(result.emission_value)
        assert result.method == "TIER_1_ENERGY_WITH_HV"
        assert result.details["energy_content"] == pytest.approx(430)

    def test_energy_activity_already_in_energy_units(self):
        """Without a matching heating value unit the activity is taken as energy."""
        factor = make_factor(value=56.1, unit="kg CO2/GJ", tier="TIER_2", heating_value=48.0, heating_value_unit="GJ/ton")

        result = calculate_emission(100, "GJ", factor, "ENERGY", 1)

        assert result.emission_value == pytest.approx(5610)
        assert result.method == "TIER_2_ENERGY_IMPROVED"

    def test_basic_method_outside_energy(self):
        """Non-energy sectors multiply activity by factor and apply the GWP."""
        factor = make_factor(value=55.0, unit="kg CH4/head/yr", tier="TIER_1")

        result = calculate_emission(20, "head", factor, "AFOLU", 28)

        assert result.emission_value == pytest.approx(1100)
        assert result.co2_equivalent == pytest.approx(30800)
        assert result.method == "TIER_1_BASIC"

    def test_unknown_tier_treated_as_tier_1(self):
        result = calculate_emission(1, "t", make_factor(tier="TIER_9"), "WASTE", 1)

        assert result.method == "TIER_1_BASIC"


class TestSelectBestFactor:
    """Tests for select_best_factor."""

    def test_prefers_matching_category_then_highest_tier(self):
        generic = make_factor(name="generic", tier="TIER_3")
        tier1 = make_factor(name="t1", tier="TIER_1", applicable_categories=["1.A.1"])
        tier2 = make_factor(name="t2", tier="TIER_2", applicable_categories=["1.A.1"])

        assert select_best_factor([generic, tier1, tier2], "1.A.1").name == "t2"

    def test_preferred_tier(self):
        tier1 = make_factor(name="t1", tier="TIER_1", applicable_categories=["3.A.1"])
        tier2 = make_factor(name="t2", tier="TIER_2", applicable_categories=["3.A.1"])

        assert select_best_factor([tier1, tier2], "3.A.1", "TIER_1").name == "t1"

    def test_falls_back_to_any_factor(self):
        only = make_factor(name="other", applicable_categories=["4.A"])

        assert select_best_factor([only], "1.A.3").name == "other"

    def test_no_factors(self):
        assert select_best_factor([], "1.A.1") is None


@pytest.mark.parametrize(
    "code,gas",
    [("1.A.3.b", "CO2"), ("1.B.2", "CO2"), ("3.A.1", "CH4"), ("3.C.4", "N2O"), ("4.A", "CH4"), ("4.D.1", "N2O"), ("2.A.1", "CO2")],
)
def test_best_gas_type(code, gas):
    assert best_gas_type(code) == gas


class TestSuggestTier:
    """Tests for suggest_tier."""

    def test_energy_plant_specific_key_category(self):
        assert suggest_tier("1.A.1", has_plant_specific_data=True, is_key_category=True) == "TIER_3"

    def test_energy_country_specific(self):
        assert suggest_tier("1.A.2", has_country_specific_data=True) == "TIER_2"

    def test_energy_plant_data_without_key_category(self):
        assert suggest_tier("1.A.2", has_plant_specific_data=True) == "TIER_1"

    def test_other_sectors(self):
        assert suggest_tier("3.A.1", has_country_specific_data=True, is_key_category=True) == "TIER_2"
        assert suggest_tier("2.A.1", has_plant_specific_data=True) == "TIER_3"
        assert suggest_tier("4.A") == "TIER_1"


def test_uncertainty_for_tier():
    assert uncertainty_for_tier("TIER_3") == {"range": "±15%", "confidence": "High"}
    assert uncertainty_for_tier("unknown")["confidence"] == "Low"


def test_summarize_sector():
    """Main gases are summed as mass, other gases as CO2e."""
    calcs = [
        SimpleNamespace(gas_type="CO2", emission_value=100.0, co2_equivalent=100.0),
        SimpleNamespace(gas_type="CH4", emission_value=2.0, co2_equivalent=56.0),
        SimpleNamespace(gas_type="SF6", emission_value=0.001, co2_equivalent=23.5),
    ]

    totals = summarize_sector(calcs)

    assert totals["total_co2"] == 100.0
    assert totals["total_ch4"] == 2.0
    assert totals["total_other_gases"] == 23.5
    assert totals["total_co2_equivalent"] == pytest.approx(179.5)


def test_catalogue_codes_are_unique():
    codes = [code for code, _, _ in CATEGORY_CATALOGUE]

    assert len(codes) == len(set(codes))
    assert ("1.A.1", "Energy Industries", "ENERGY") in CATEGORY_CATALOGUE
