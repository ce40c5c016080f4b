"""Tests for the local ISCC calculation."""

import pytest

from app.calculators.iscc import FOSSIL_FUEL_BASELINE, calculate_iscc, production_kg
from app.core.exceptions import BadRequestError

PROJECT = {"lhv": 37.0, "production_volume": 1000.0}
ENERGY_MJ = 1000.0 * 1000 * 37.0


class TestProductionKg:
    """Tests for production_kg."""

    def test_from_production_volume(self):
        assert production_kg({"production_volume": 2.5}, None) == 2500

    def test_from_yield_and_area(self):
        assert production_kg({}, {"yield_per_ha": 3.0, "land_area": 10.0}) == 30000

    def test_missing(self):
        assert production_kg({}, {"land_area": 10.0}) is None


class TestCalculateIscc:
    """Tests for calculate_iscc."""

    def test_components_per_mj(self):
        """kg components are expressed as g CO2e per MJ of product."""
        cultivation = {"land_area": 100.0, "nitrogen_fertilizer": 10.0, "diesel_consumption": 50.0}
        processing = {"electricity_use": 100000.0}
        transport = {"feedstock_distance": 200.0, "feedstock_mode": "truck", "feedstock_weight": 1000.0}

        result = calculate_iscc(PROJECT, cultivation, processing, transport)

        assert result.eec_kg == pytest.approx(10 * 100 * 6.38 + 50 * 100 * 2.68)
        assert result.ep_kg == pytest.approx(50000)
        assert result.etd_kg == pytest.approx(20000)
        assert result.eec == pytest.approx(result.eec_kg / ENERGY_MJ * 1000)
        assert result.total_emissions == pytest.approx((19780 + 50000 + 20000) / ENERGY_MJ * 1000)
        assert result.ghg_savings == pytest.approx(
            (FOSSIL_FUEL_BASELINE - result.total_emissions) / FOSSIL_FUEL_BASELINE * 100
        )
        assert result.breakdown["transport"] == {"feedstock": pytest.approx(20000)}

    def test_land_use_and_carbon_capture(self):
        """el adds to and eccr subtracts from the total, both given per MJ."""
        result = calculate_iscc(PROJECT, el=5.0, eccr=2.0)

        assert result.total_emissions == pytest.approx(3.0)
        assert result.el_kg == pytest.approx(5.0 * ENERGY_MJ / 1000)
        assert result.eccr_kg == pytest.approx(2.0 * ENERGY_MJ / 1000)
        assert result.total_kg == pytest.approx(3.0 * ENERGY_MJ / 1000)

    def test_missing_inputs_recorded_as_assumptions(self):
        result = calculate_iscc(PROJECT)

        assert result.total_emissions == 0
        assert result.ghg_savings == pytest.approx(100.0)
        assert "No cultivation data; eec set to 0" in result.assumptions
        assert "No transport data; etd set to 0" in result.assumptions

    def test_inputs_without_default_factor_are_excluded(self):
        cultivation = {"land_area": 10.0, "pesticides": 3.0}
        transport = {"product_distance": 100.0, "product_mode": "pipeline", "product_weight": 5.0}

        result = calculate_iscc(PROJECT, cultivation, None, transport)

        assert result.eec_kg == 0
        assert result.etd_kg == 0
        assert any("pesticides" in a for a in result.assumptions)
        assert any("pipeline" in a for a in result.assumptions)

    def test_steam_is_converted_from_tons(self):
        result = calculate_iscc(PROJECT, processing={"steam_use": 10.0})

        assert result.ep_kg == pytest.approx(10 * 1000 * 0.2)

    def test_additional_transport_legs(self):
        transport = {"additional_transport": [{"distance": 50.0, "mode": "rail", "weight": 100.0, "description": "rail to port"}]}

        result = calculate_iscc(PROJECT, transport=transport)

        assert result.breakdown["transport"] == {"rail to port": pytest.approx(100.0)}

    def test_lhv_required(self):
        with pytest.raises(BadRequestError, match="LHV"):
            calculate_iscc({"production_volume": 10.0})

    def test_production_required(self):
        with pytest.raises(BadRequestError, match="Production quantity"):
            calculate_iscc({"lhv": 37.0}, {"land_area": 10.0})
