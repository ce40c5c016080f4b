"""Tests for ISCC projects, their inputs and the biofuel GHG calculation."""

import pytest

from app.models.iscc import IsccCalculation, IsccCultivation, IsccProcessing, IsccTransport

from tests.fixtures.data_fixtures import API

ISCC = f"{API}/iscc"

ENERGY_MJ = 1000 * 1000 * 37
CULTIVATION_KG = 150 * 100 * 6.38 + 80 * 100 * 2.68
PROCESSING_KG = 200000 * 0.5 + 50000 * 2.0
TRANSPORT_KG = 100 * 1000 * 0.1 + 500 * 1000 * 0.01


@pytest.fixture
def project(client, owner_headers, tenant):
    response = client.post(
        f"{ISCC}/projects",
        json={
            "tenant_id": tenant["id"],
            "name": "Rapeseed biodiesel",
            "product_type": "biodiesel",
            "feedstock_type": "rapeseed",
            "production_volume": 1000,
            "lhv": 37,
        },
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def inputs(client, owner_headers, project):
    url = f"{ISCC}/projects/{project['id']}"
    client.put(
        f"{url}/cultivation",
        json={"land_area": 100, "nitrogen_fertilizer": 150, "diesel_consumption": 80},
        headers=owner_headers,
    )
    client.put(
        f"{url}/processing",
        json={"electricity_use": 200000, "natural_gas_use": 50000},
        headers=owner_headers,
    )
    client.put(
        f"{url}/transport",
        json={
            "feedstock_distance": 100,
            "feedstock_mode": "truck",
            "feedstock_weight": 1000,
            "product_distance": 500,
            "product_mode": "ship",
            "product_weight": 1000,
        },
        headers=owner_headers,
    )


class TestInputs:
    """Tests for the one-per-project input records."""

    def test_missing_input(self, client, owner_headers, project):
        response = client.get(f"{ISCC}/projects/{project['id']}/cultivation", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Cultivation data not found"

    def test_save_replaces_record(self, client, owner_headers, project):
        url = f"{ISCC}/projects/{project['id']}/processing"

        first = client.put(url, json={"electricity_use": 10}, headers=owner_headers).json()
        second = client.put(url, json={"diesel_use": 5}, headers=owner_headers).json()

        assert second["id"] == first["id"]
        assert second["diesel_use"] == 5
        assert second["electricity_use"] is None

    def test_additional_transport_legs(self, client, owner_headers, project):
        response = client.put(
            f"{ISCC}/projects/{project['id']}/transport",
            json={"additional_transport": [{"distance": 50, "mode": "rail", "weight": 200, "description": "Depot"}]},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["additional_transport"][0]["mode"] == "rail"

    def test_delete_input(self, client, owner_headers, project, inputs):
        url = f"{ISCC}/projects/{project['id']}/transport"

        assert client.delete(url, headers=owner_headers).status_code == 204
        assert client.get(url, headers=owner_headers).status_code == 404


class TestCalculations:
    """Tests for ISCC calculations."""

    def test_components_per_mj(self, client, owner_headers, project, inputs):
        response = client.post(
            f"{ISCC}/calculations", json={"project_id": project["id"], "el": 2.0}, headers=owner_headers
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert data["status"] == "calculated"
        assert data["calculator"] == "local"
        assert data["eec_kg"] == pytest.approx(CULTIVATION_KG)
        assert data["ep_kg"] == pytest.approx(PROCESSING_KG)
        assert data["etd_kg"] == pytest.approx(TRANSPORT_KG)
        assert data["el_kg"] == pytest.approx(2.0 * ENERGY_MJ / 1000)
        assert data["eec"] == pytest.approx(CULTIVATION_KG / ENERGY_MJ * 1000)

        total = (CULTIVATION_KG + PROCESSING_KG + TRANSPORT_KG) / ENERGY_MJ * 1000 + 2.0
        assert data["total_emissions"] == pytest.approx(total)
        assert data["ghg_savings"] == pytest.approx((83.8 - total) / 83.8 * 100)
        assert data["input_snapshot"]["project"]["lhv"] == 37

    def test_missing_inputs_are_assumed_zero(self, client, owner_headers, project):
        client.put(
            f"{ISCC}/projects/{project['id']}/cultivation",
            json={"land_area": 10, "pesticides": 3},
            headers=owner_headers,
        )

        data = client.post(f"{ISCC}/calculations", json={"project_id": project["id"]}, headers=owner_headers).json()

        assert data["total_emissions"] == 0
        assert "No processing data; ep set to 0" in data["assumptions"]
        assert "No default factor for cultivation input 'pesticides'; excluded" in data["assumptions"]

    def test_lhv_required(self, client, owner_headers, tenant):
        project = client.post(
            f"{ISCC}/projects",
            json={
                "tenant_id": tenant["id"],
                "name": "Used cooking oil",
                "product_type": "biodiesel",
                "feedstock_type": "used_cooking_oil",
                "production_volume": 10,
            },
            headers=owner_headers,
        ).json()

        response = client.post(f"{ISCC}/calculations", json={"project_id": project["id"]}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "LHV (Lower Heating Value) is required for calculation"

    def test_recalculate_uses_current_inputs(self, client, owner_headers, project, inputs):
        calc = client.post(
            f"{ISCC}/calculations", json={"project_id": project["id"], "el": 2.0}, headers=owner_headers
        ).json()
        client.delete(f"{ISCC}/projects/{project['id']}/transport", headers=owner_headers)

        response = client.post(f"{ISCC}/calculations/{calc['id']}/recalculate", headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == calc["id"]
        assert data["etd_kg"] == 0
        assert data["el"] == 2.0
        assert data["total_emissions"] < calc["total_emissions"]

    def test_status_workflow(self, client, owner_headers, project, inputs):
        calc = client.post(f"{ISCC}/calculations", json={"project_id": project["id"]}, headers=owner_headers).json()
        url = f"{ISCC}/calculations/{calc['id']}/status"

        assert client.put(url, json={"status": "verified"}, headers=owner_headers).json()["status"] == "verified"

        response = client.put(url, json={"status": "draft"}, headers=owner_headers)
        assert response.status_code == 400

    def test_outsider_cannot_read(self, client, owner_headers, outsider_headers, project, inputs):
        calc = client.post(f"{ISCC}/calculations", json={"project_id": project["id"]}, headers=owner_headers).json()

        response = client.get(f"{ISCC}/calculations/{calc['id']}", headers=outsider_headers)

        assert response.status_code == 403


def test_delete_project_cascades(client, owner_headers, project, inputs, count_rows):
    client.post(f"{ISCC}/calculations", json={"project_id": project["id"]}, headers=owner_headers)
    assert count_rows(IsccCalculation, project["id"]) == 1

    assert client.delete(f"{ISCC}/projects/{project['id']}", headers=owner_headers).status_code == 204

    assert client.get(f"{ISCC}/projects/{project['id']}", headers=owner_headers).status_code == 404
    for model in (IsccCultivation, IsccProcessing, IsccTransport, IsccCalculation):
        assert count_rows(model, project["id"]) == 0
