"""Tests for ISO 14064 inventories."""

import pytest

from app.services.scoped_accounting import ScopedAccountingService
from tests.fixtures.data_fixtures import API

ISO = f"{API}/iso14064"


@pytest.fixture
def project(client, owner_headers, tenant):
    response = client.post(
        f"{ISO}/projects",
        json={
            "tenant_id": tenant["id"],
            "name": "ISO inventory 2024",
            "organization_name": "Green Fields Farming",
            "reporting_period_start": "2024-01-01",
            "reporting_period_end": "2024-12-31",
            "reporting_year": 2024,
        },
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def calculate(client, headers, project, **fields):
    body = {"project_id": project["id"]}
    body.update(fields)
    return client.post(f"{ISO}/calculations", json=body, headers=headers)


def test_project_defaults(project):
    assert project["standard_version"] == "14064-1:2018"
    assert project["status"] == "draft"


def test_reference_factors(client, owner_headers):
    response = client.get(
        f"{ISO}/reference-factors", params={"scope": "Scope2", "category": "purchased_electricity"}, headers=owner_headers
    )

    assert response.status_code == 200
    factors = {f["activity_name"]: f["co2e_factor"] for f in response.json()}
    assert factors == {"Grid electricity": 0.5, "Renewable electricity": 0.0}


class TestCalculations:
    """Tests for ISO 14064 calculations."""

    def test_reference_factor_selected(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="mobile_combustion",
            activity_data={"quantity": 100, "unit": "L", "activity_name": "Diesel generator"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["emission_factor"]["activity_name"] == "Diesel"
        assert data["emission_factor"]["source"] == "ISO 14064 reference catalogue"
        assert data["co2_equivalent"] == pytest.approx(268)

    def test_grid_electricity(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 1000, "unit": "kWh", "activity_name": "Grid electricity"},
        )

        assert response.json()["co2_equivalent"] == pytest.approx(500)

    def test_provided_factor(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="fugitive_emissions",
            activity_data={"quantity": 2, "unit": "kg"},
            emission_factor={"value": 1.0, "unit": "kg SF6/kg", "gas_type": "SF6"},
        )

        assert response.status_code == 201
        assert response.json()["co2_equivalent"] == pytest.approx(2 * 22800)

    def test_gas_change_reloads_reference_factor(self, client, owner_headers, project):
        """A reference factor with no value for the new gas is refused and nothing changes."""
        calc = calculate(
            client, owner_headers, project,
            scope="Scope1", category="mobile_combustion",
            activity_data={"quantity": 100, "unit": "L", "activity_name": "Diesel generator"},
        ).json()

        response = client.patch(f"{ISO}/calculations/{calc['id']}", json={"gas_type": "CH4"}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Emission factor has no value for CH4"
        stored = client.get(f"{ISO}/calculations/{calc['id']}", headers=owner_headers).json()
        assert stored["gas_type"] == "CO2"
        assert stored["co2_equivalent"] == pytest.approx(268)
        summary = client.get(f"{ISO}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["scope1_total"] == pytest.approx(268)

    def test_gas_change_on_provided_factor(self, client, owner_headers, project):
        """A provided factor must be replaced when the gas changes."""
        calc = calculate(
            client, owner_headers, project,
            scope="Scope1", category="fugitive_emissions",
            activity_data={"quantity": 2, "unit": "kg"},
            emission_factor={"value": 1.0, "unit": "kg SF6/kg", "gas_type": "SF6"},
        ).json()
        url = f"{ISO}/calculations/{calc['id']}"

        refused = client.patch(url, json={"gas_type": "CH4"}, headers=owner_headers)
        assert refused.status_code == 400
        assert refused.json()["detail"] == "A new emission factor is required when changing the gas type"

        updated = client.patch(
            url,
            json={"gas_type": "CH4", "emission_factor": {"value": 0.5, "unit": "kg CH4/kg", "gas_type": "CH4"}},
            headers=owner_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["co2_equivalent"] == pytest.approx(2 * 0.5 * 28)

    def test_stored_factors_not_supported(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="mobile_combustion",
            activity_data={"quantity": 1, "unit": "L"},
            emission_factor_id="00000000-0000-0000-0000-000000000000",
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "ISO 14064 calculations do not use stored emission factors"


class TestSummary:
    """Tests for the ISO 14064 summary and its review fields."""

    def test_summary_review(self, client, owner_headers, project):
        calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 1000, "unit": "kWh", "activity_name": "Grid electricity"},
        )

        response = client.patch(
            f"{ISO}/projects/{project['id']}/summary",
            json={"status": "verified", "notes": "Checked against invoices"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "verified"
        assert data["notes"] == "Checked against invoices"
        assert data["scope2_total"] == pytest.approx(500)

    def test_recalculate_keeps_review_fields(self, client, owner_headers, project):
        client.patch(f"{ISO}/projects/{project['id']}/summary", json={"notes": "Draft"}, headers=owner_headers)

        response = client.post(f"{ISO}/projects/{project['id']}/summary/recalculate", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["notes"] == "Draft"
        assert response.json()["total_emissions"] == 0

    def test_delete_project(self, client, owner_headers, project):
        assert client.delete(f"{ISO}/projects/{project['id']}", headers=owner_headers).status_code == 204
        assert client.get(f"{ISO}/projects/{project['id']}", headers=owner_headers).status_code == 404


def test_service_must_supply_candidate_factors():
    class Incomplete(ScopedAccountingService):
        label = "Incomplete"

    with pytest.raises(TypeError):
        Incomplete(db=None)
