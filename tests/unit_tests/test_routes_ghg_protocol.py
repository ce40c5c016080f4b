"""Tests for GHG Protocol projects, factors, calculations and summaries."""

import pytest

from tests.fixtures.data_fixtures import API

GHG = f"{API}/ghg-protocol"

FACTORS = [
    {
        "year": 2024,
        "scope": "Scope1",
        "category": "stationary_combustion",
        "activity_name": "Natural gas",
        "unit": "m3",
        "co2_factor": 1.9,
        "ch4_factor": 0.00004,
        "co2e_factor": 1.93,
        "source": "EPA 2024",
    },
    {
        "year": 2024,
        "scope": "Scope1",
        "category": "stationary_combustion",
        "activity_name": "Fuel oil",
        "unit": "L",
        "co2_factor": 2.96,
        "source": "EPA 2024",
    },
]


@pytest.fixture
def factors(client, owner_headers):
    response = client.post(f"{GHG}/emission-factors/import", json={"factors": FACTORS}, headers=owner_headers)
    assert response.status_code == 201, response.text
    return {f["activity_name"]: f for f in response.json()}


@pytest.fixture
def project(client, owner_headers, tenant):
    response = client.post(
        f"{GHG}/projects",
        json={
            "tenant_id": tenant["id"],
            "name": "Corporate inventory 2024",
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
    return client.post(f"{GHG}/calculations", json=body, headers=headers)


class TestProjects:
    """Tests for GHG Protocol projects."""

    def test_defaults(self, project):
        assert project["status"] == "draft"
        assert project["boundary_type"] == "operational"
        assert project["standard_version"] == "GHG Protocol Corporate Standard"

    def test_period_validation(self, client, owner_headers, tenant):
        response = client.post(
            f"{GHG}/projects",
            json={
                "tenant_id": tenant["id"],
                "name": "Backwards",
                "organization_name": "Green Fields Farming",
                "reporting_period_start": "2024-12-31",
                "reporting_period_end": "2024-01-01",
                "reporting_year": 2024,
            },
            headers=owner_headers,
        )

        assert response.status_code == 400

    def test_outsider_forbidden(self, client, outsider_headers, project):
        assert client.get(f"{GHG}/projects/{project['id']}", headers=outsider_headers).status_code == 403

    def test_update_and_status(self, client, owner_headers, project):
        response = client.patch(
            f"{GHG}/projects/{project['id']}", json={"location": "Valencia", "status": "active"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["location"] == "Valencia"
        assert response.json()["status"] == "active"

        response = client.put(f"{GHG}/projects/{project['id']}/status", json={"status": "archived"}, headers=owner_headers)
        assert response.json()["status"] == "archived"


class TestCalculations:
    """Tests for GHG Protocol calculations."""

    def test_provided_factor(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="fugitive_emissions",
            activity_data={"quantity": 10, "unit": "head", "activity_name": "Dairy cattle"},
            emission_factor={"value": 0.5, "unit": "kg CH4/head", "gas_type": "CH4"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["gas_type"] == "CH4"
        assert data["emission_value"] == pytest.approx(5)
        assert data["gwp_value"] == 28
        assert data["co2_equivalent"] == pytest.approx(140)
        assert data["emission_factor"]["source"] == "Provided"
        assert data["status"] == "calculated"
        assert data["formula"] and data["explanation"]

    def test_category_must_belong_to_scope(self, client, owner_headers, project):
        response = calculate(
            client, owner_headers, project,
            scope="Scope2", category="mobile_combustion",
            activity_data={"quantity": 1, "unit": "kWh"},
            emission_factor={"value": 0.5, "unit": "kg/kWh"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Category 'mobile_combustion' is not valid for Scope2"

    def test_stored_factor_by_id_and_gas(self, client, owner_headers, project, factors):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="stationary_combustion",
            activity_data={"quantity": 1000, "unit": "m3"},
            emission_factor_id=factors["Natural gas"]["id"],
            gas_type="CH4",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["emission_value"] == pytest.approx(0.04)
        assert data["co2_equivalent"] == pytest.approx(0.04 * 28)
        assert data["emission_factor"]["id"] == factors["Natural gas"]["id"]

    def test_factor_selected_from_catalogue(self, client, owner_headers, project, factors):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="stationary_combustion",
            activity_data={"quantity": 1000, "unit": "m3", "activity_name": "Natural gas boiler"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["emission_factor"]["activity_name"] == "Natural gas"
        assert data["co2_equivalent"] == pytest.approx(1900)

    def test_missing_gas_value(self, client, owner_headers, project, factors):
        response = calculate(
            client, owner_headers, project,
            scope="Scope1", category="stationary_combustion",
            activity_data={"quantity": 10, "unit": "L"},
            emission_factor_id=factors["Fuel oil"]["id"],
            gas_type="N2O",
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Emission factor has no value for N2O"

    def test_update_recalculates(self, client, owner_headers, project, factors):
        calc = calculate(
            client, owner_headers, project,
            scope="Scope1", category="stationary_combustion",
            activity_data={"quantity": 1000, "unit": "m3", "activity_name": "Natural gas"},
            emission_factor_id=factors["Natural gas"]["id"],
        ).json()

        response = client.patch(
            f"{GHG}/calculations/{calc['id']}",
            json={"activity_data": {"quantity": 2000, "unit": "m3", "activity_name": "Natural gas"}},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["co2_equivalent"] == pytest.approx(3800)

    def test_update_notes_only(self, client, owner_headers, project):
        calc = calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 100, "unit": "kWh"},
            emission_factor={"value": 0.4, "unit": "kg CO2e/kWh"},
        ).json()

        response = client.patch(f"{GHG}/calculations/{calc['id']}", json={"notes": "Meter read"}, headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["notes"] == "Meter read"
        assert response.json()["co2_equivalent"] == pytest.approx(40)

    def test_status_workflow(self, client, owner_headers, project):
        calc = calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 100, "unit": "kWh"},
            emission_factor={"value": 0.4, "unit": "kg CO2e/kWh"},
        ).json()
        url = f"{GHG}/calculations/{calc['id']}/status"

        assert client.put(url, json={"status": "verified"}, headers=owner_headers).json()["status"] == "verified"
        assert client.put(url, json={"status": "approved"}, headers=owner_headers).json()["status"] == "approved"

        response = client.put(url, json={"status": "draft"}, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot change status from approved to draft"


class TestSummary:
    """Tests for the GHG Protocol project summary."""

    def test_totals_follow_calculations(self, client, owner_headers, project):
        calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 1000, "unit": "kWh"},
            emission_factor={"value": 0.4, "unit": "kg CO2e/kWh"},
        )
        travel = calculate(
            client, owner_headers, project,
            scope="Scope3", category="business_travel",
            activity_data={"quantity": 500, "unit": "km"},
            emission_factor={"value": 0.2, "unit": "kg CO2e/km"},
        ).json()

        summary = client.get(f"{GHG}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["scope2_total"] == pytest.approx(400)
        assert summary["scope3_total"] == pytest.approx(100)
        assert summary["total_emissions"] == pytest.approx(500)
        assert summary["scope3_breakdown"] == {"business_travel": pytest.approx(100)}
        assert summary["breakdown_by_gas"] == {"CO2": pytest.approx(500)}

        client.delete(f"{GHG}/calculations/{travel['id']}", headers=owner_headers)

        summary = client.get(f"{GHG}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["total_emissions"] == pytest.approx(400)
        assert summary["calculation_count"] == 1

    def test_project_detail(self, client, owner_headers, project):
        calculate(
            client, owner_headers, project,
            scope="Scope2", category="purchased_electricity",
            activity_data={"quantity": 10, "unit": "kWh"},
            emission_factor={"value": 0.4, "unit": "kg CO2e/kWh"},
        )

        detail = client.get(f"{GHG}/projects/{project['id']}", headers=owner_headers).json()

        assert len(detail["calculations"]) == 1
        assert detail["summary"]["calculation_count"] == 1
