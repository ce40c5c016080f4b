"""Tests for carbon projects, their data-entry steps and the GHG worksheet."""

import pytest

from tests.fixtures.data_fixtures import API

CARBON = f"{API}/carbon-projects"


@pytest.fixture
def project(client, owner_headers, tenant):
    response = client.post(CARBON, json={"tenant_id": tenant["id"], "name": "Corn 2024"}, headers=owner_headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestProjects:
    """Tests for carbon project CRUD."""

    def test_list_for_tenant(self, client, owner_headers, tenant, project):
        response = client.get(CARBON, params={"tenant_id": tenant["id"]}, headers=owner_headers)

        assert [p["id"] for p in response.json()] == [project["id"]]

    def test_rename(self, client, owner_headers, project):
        response = client.patch(f"{CARBON}/{project['id']}", json={"name": "Corn 2025"}, headers=owner_headers)

        assert response.json()["name"] == "Corn 2025"

    def test_outsider_forbidden(self, client, outsider_headers, project):
        assert client.get(f"{CARBON}/{project['id']}", headers=outsider_headers).status_code == 403

    def test_detail_collects_steps(self, client, owner_headers, project):
        client.post(f"{CARBON}/{project['id']}/products", json={"corn_wet": 12.5}, headers=owner_headers)
        client.post(
            f"{CARBON}/{project['id']}/energy-diesel",
            json={"diesel_consumed": 80, "emission_factor_diesel": 2.68},
            headers=owner_headers,
        )
        client.post(
            f"{CARBON}/{project['id']}/worksheet/audit", json={"description": "Auditor"}, headers=owner_headers
        )

        detail = client.get(f"{CARBON}/{project['id']}", headers=owner_headers).json()

        assert detail["products"][0]["corn_wet"] == 12.5
        assert detail["energy_diesel"][0]["diesel_consumed"] == 80
        assert detail["raws"] == []
        assert detail["ghg_worksheet"][0]["section"] == "audit"

    def test_delete_project(self, client, owner_headers, project):
        client.post(f"{CARBON}/{project['id']}/raws", json={"corn_seeds_amount": 25}, headers=owner_headers)

        assert client.delete(f"{CARBON}/{project['id']}", headers=owner_headers).status_code == 204
        assert client.get(f"{CARBON}/{project['id']}/raws", headers=owner_headers).status_code == 404


class TestSteps:
    """Tests for the per-step record endpoints."""

    def test_record_lifecycle(self, client, owner_headers, project):
        url = f"{CARBON}/{project['id']}/actual-carbon"

        created = client.post(url, json={"actual_land_use": "Cropland", "socst_actual": 38.0}, headers=owner_headers)
        assert created.status_code == 201
        record = created.json()
        assert record["carbon_project_id"] == project["id"]

        updated = client.patch(f"{url}/{record['id']}", json={"flu_actual": 0.69}, headers=owner_headers).json()
        assert updated["flu_actual"] == 0.69
        assert updated["actual_land_use"] == "Cropland"

        assert client.delete(f"{url}/{record['id']}", headers=owner_headers).status_code == 204
        assert client.get(f"{url}/{record['id']}", headers=owner_headers).status_code == 404

    def test_record_belongs_to_project(self, client, owner_headers, tenant, project):
        other = client.post(CARBON, json={"tenant_id": tenant["id"], "name": "Other"}, headers=owner_headers).json()
        record = client.post(f"{CARBON}/{project['id']}/herbicides", json={"acetochlor": 1.2}, headers=owner_headers).json()

        response = client.get(f"{CARBON}/{other['id']}/herbicides/{record['id']}", headers=owner_headers)

        assert response.status_code == 404


class TestWorksheet:
    """Tests for GHG worksheet items."""

    def test_bulk_add_and_filter(self, client, owner_headers, project):
        url = f"{CARBON}/{project['id']}/worksheet"

        response = client.post(
            f"{url}/calculation/bulk",
            json={
                "items": [
                    {"description": "Cultivation", "numeric_value": 310.5, "unit": "kg CO2e/t"},
                    {"description": "Transport", "numeric_value": 12.0, "unit": "kg CO2e/t"},
                ]
            },
            headers=owner_headers,
        )
        assert response.status_code == 201
        assert len(response.json()) == 2
        client.post(f"{url}/verification", json={"description": "Scope", "text_value": "Farm"}, headers=owner_headers)

        calculation = client.get(url, params={"section": "calculation"}, headers=owner_headers).json()
        everything = client.get(url, headers=owner_headers).json()

        assert [i["description"] for i in calculation] == ["Cultivation", "Transport"]
        assert len(everything) == 3

    def test_empty_bulk_rejected(self, client, owner_headers, project):
        response = client.post(
            f"{CARBON}/{project['id']}/worksheet/audit/bulk", json={"items": []}, headers=owner_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "At least one item is required"

    def test_unknown_section(self, client, owner_headers, project):
        response = client.post(
            f"{CARBON}/{project['id']}/worksheet/summary", json={"description": "x"}, headers=owner_headers
        )

        assert response.status_code == 422

    def test_item_update_and_delete(self, client, owner_headers, project):
        item = client.post(
            f"{CARBON}/{project['id']}/worksheet/additional", json={"description": "Note"}, headers=owner_headers
        ).json()
        url = f"{CARBON}/{project['id']}/worksheet/items/{item['id']}"

        updated = client.patch(url, json={"text_value": "Checked"}, headers=owner_headers).json()
        assert updated["text_value"] == "Checked"
        assert updated["description"] == "Note"

        assert client.delete(url, headers=owner_headers).status_code == 204
        assert client.get(url, headers=owner_headers).status_code == 404
