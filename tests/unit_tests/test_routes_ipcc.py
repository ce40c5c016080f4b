"""Tests for IPCC inventories: categories, factors, activity data and calculations."""

import pytest

from app.models.ipcc import ActivityData, IpccCalculation, IpccProjectSummary, ProjectCategory

from tests.fixtures.data_fixtures import API

IPCC = f"{API}/ipcc"


@pytest.fixture
def project(client, owner_headers, tenant):
    response = client.post(
        f"{IPCC}/projects",
        json={"tenant_id": tenant["id"], "name": "National inventory 2023", "year": 2023},
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def gas_factor(client, owner_headers):
    response = client.post(
        f"{IPCC}/emission-factors",
        json={
            "name": "Natural gas combustion",
            "gas_type": "CO2",
            "tier": "TIER_1",
            "value": 56100,
            "unit": "kg/TJ",
            "applicable_categories": ["1.A.1", "1.A.2"],
            "heating_value": 48,
            "heating_value_unit": "GJ/ton",
        },
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def category_id(client, headers, code):
    return client.get(f"{IPCC}/categories/{code}", headers=headers).json()["id"]


def attach(client, headers, project, code):
    response = client.post(
        f"{IPCC}/projects/{project['id']}/categories",
        json={"category_id": category_id(client, headers, code)},
        headers=headers,
    )
    return response


def add_activity(client, headers, project, code, value, unit, name="Activity"):
    return client.post(
        f"{IPCC}/activity-data",
        json={
            "project_id": project["id"],
            "category_id": category_id(client, headers, code),
            "name": name,
            "value": value,
            "unit": unit,
        },
        headers=headers,
    )


class TestCategories:
    """Tests for the category catalogue and project categories."""

    def test_catalogue_is_seeded(self, client, owner_headers):
        response = client.get(f"{IPCC}/categories", params={"sector": "WASTE"}, headers=owner_headers)

        assert response.status_code == 200
        codes = [c["code"] for c in response.json()]
        assert "4.A" in codes
        assert all(c["sector"] == "WASTE" for c in response.json())

    def test_unknown_code(self, client, owner_headers):
        response = client.get(f"{IPCC}/categories/9.Z", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Emission category 9.Z not found"

    def test_attach_once(self, client, owner_headers, project):
        response = attach(client, owner_headers, project, "1.A.1")

        assert response.status_code == 201
        assert response.json()["category"]["code"] == "1.A.1"
        assert attach(client, owner_headers, project, "1.A.1").status_code == 409

    def test_detach(self, client, owner_headers, project):
        link = attach(client, owner_headers, project, "1.A.1").json()

        response = client.delete(
            f"{IPCC}/projects/{project['id']}/categories/{link['category_id']}", headers=owner_headers
        )

        assert response.status_code == 204
        assert client.get(f"{IPCC}/projects/{project['id']}/categories", headers=owner_headers).json() == []


class TestActivityAndCalculations:
    """Tests for activity data and emission calculations."""

    def test_activity_requires_attached_category(self, client, owner_headers, project):
        response = add_activity(client, owner_headers, project, "1.A.1", 10, "ton")

        assert response.status_code == 400
        assert response.json()["detail"] == "Category must be added to the project before recording activity data"

    def test_energy_calculation_uses_heating_value(self, client, owner_headers, project, gas_factor):
        attach(client, owner_headers, project, "1.A.1")
        activity = add_activity(client, owner_headers, project, "1.A.1", 10, "ton", "Gas turbines").json()

        response = client.post(
            f"{IPCC}/calculations",
            json={"activity_data_id": activity["id"], "preferred_tier": "AUTO"},
            headers=owner_headers,
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert data["emission_factor_id"] == gas_factor["id"]
        assert data["method"] == "TIER_1_ENERGY_WITH_HV"
        assert data["sector"] == "ENERGY"
        assert data["emission_value"] == pytest.approx(480 / 1000 * 56100)
        assert data["co2_equivalent"] == pytest.approx(26928)
        assert data["details"]["energy_content"] == pytest.approx(480)
        assert data["formula"]

        summaries = client.get(f"{IPCC}/projects/{project['id']}/summaries", headers=owner_headers).json()
        assert [s["sector"] for s in summaries["sectors"]] == ["ENERGY"]
        assert summaries["total_co2_equivalent"] == pytest.approx(26928)

    def test_no_factor_available(self, client, owner_headers, project):
        attach(client, owner_headers, project, "4.A")
        activity = add_activity(client, owner_headers, project, "4.A", 5, "ton").json()

        response = client.post(f"{IPCC}/calculations", json={"activity_data_id": activity["id"]}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No emission factors available for category 4.A"

    def test_edited_gwp_is_used(self, client, owner_headers, project):
        factor = client.post(
            f"{IPCC}/emission-factors",
            json={
                "name": "Dairy cattle enteric fermentation",
                "gas_type": "CH4",
                "tier": "TIER_1",
                "value": 128,
                "unit": "kg CH4/head",
                "applicable_categories": ["3.A.1"],
            },
            headers=owner_headers,
        ).json()
        client.put(f"{IPCC}/gwp/CH4", json={"value": 27.9, "assessment_report": "AR6"}, headers=owner_headers)
        attach(client, owner_headers, project, "3.A.1")
        activity = add_activity(client, owner_headers, project, "3.A.1", 100, "head", "Dairy herd").json()

        data = client.post(
            f"{IPCC}/calculations",
            json={"activity_data_id": activity["id"], "emission_factor_id": factor["id"]},
            headers=owner_headers,
        ).json()

        assert data["gas_type"] == "CH4"
        assert data["method"] == "TIER_1_BASIC"
        assert data["gwp_value"] == pytest.approx(27.9)
        assert data["co2_equivalent"] == pytest.approx(12800 * 27.9)

    def test_factor_in_use_cannot_be_deleted(self, client, owner_headers, project, gas_factor):
        attach(client, owner_headers, project, "1.A.1")
        activity = add_activity(client, owner_headers, project, "1.A.1", 1, "ton").json()
        calc = client.post(f"{IPCC}/calculations", json={"activity_data_id": activity["id"]}, headers=owner_headers).json()

        response = client.delete(f"{IPCC}/emission-factors/{gas_factor['id']}", headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Emission factor is used by existing calculations"

        client.delete(f"{IPCC}/calculations/{calc['id']}", headers=owner_headers)
        assert client.delete(f"{IPCC}/emission-factors/{gas_factor['id']}", headers=owner_headers).status_code == 204

    def test_factor_filter_by_category(self, client, owner_headers, gas_factor):
        listed = client.get(f"{IPCC}/emission-factors", params={"category_code": "1.A.2"}, headers=owner_headers)
        missing = client.get(f"{IPCC}/emission-factors", params={"category_code": "4.A"}, headers=owner_headers)

        assert [f["id"] for f in listed.json()] == [gas_factor["id"]]
        assert missing.json() == []


class TestGwpAndHelpers:
    """Tests for the GWP table and helper endpoints."""

    def test_gwp_table_seeded(self, client, owner_headers):
        values = {g["gas_type"]: g["value"] for g in client.get(f"{IPCC}/gwp", headers=owner_headers).json()}

        assert values["CO2"] == 1
        assert values["CH4"] == 28
        assert values["SF6"] == 23500

    def test_suggest_tier(self, client, owner_headers):
        response = client.post(
            f"{IPCC}/helpers/suggest-tier",
            json={"category_code": "1.A.1", "has_country_specific_data": True},
            headers=owner_headers,
        )

        assert response.json()["suggested_tier"] == "TIER_2"
        assert response.json()["uncertainty"]["range"] == "±50%"

    def test_uncertainty(self, client, owner_headers):
        response = client.get(f"{IPCC}/helpers/uncertainty/TIER_3", headers=owner_headers)

        assert response.json() == {"range": "±15%", "confidence": "High"}

    def test_default_factors(self, client, owner_headers):
        data = client.get(f"{IPCC}/helpers/default-factors", headers=owner_headers).json()

        assert data["heating_values"]["coal"] == 25.8
        assert data["co2_emission_factors"]["natural_gas"] == 56.1


class TestDashboard:
    """Tests for the tenant dashboard."""

    def test_overview_and_top_projects(self, client, owner_headers, tenant, project, gas_factor):
        attach(client, owner_headers, project, "1.A.1")
        activity = add_activity(client, owner_headers, project, "1.A.1", 10, "ton").json()
        client.post(f"{IPCC}/calculations", json={"activity_data_id": activity["id"]}, headers=owner_headers)
        client.post(
            f"{IPCC}/projects",
            json={"tenant_id": tenant["id"], "name": "Empty inventory", "year": 2024},
            headers=owner_headers,
        )

        overview = client.get(
            f"{IPCC}/dashboard/overview", params={"tenant_id": tenant["id"]}, headers=owner_headers
        ).json()
        assert overview["total_projects"] == 2
        assert overview["projects_by_status"] == {"draft": 2}
        assert overview["total_calculations"] == 1
        assert overview["total_emissions"] == pytest.approx(26928)
        assert [t["year"] for t in overview["yearly_trends"]] == [2023, 2024]
        assert overview["sector_breakdown"][0]["percentage"] == 100

        top = client.get(
            f"{IPCC}/dashboard/top-projects", params={"tenant_id": tenant["id"]}, headers=owner_headers
        ).json()
        assert top[0]["project_id"] == project["id"]

    def test_outsider_forbidden(self, client, outsider_headers, tenant):
        response = client.get(
            f"{IPCC}/dashboard/overview", params={"tenant_id": tenant["id"]}, headers=outsider_headers
        )

        assert response.status_code == 403


class TestSummariesAndDeletion:
    """Tests for sector summaries and what deletion takes with it."""

    @pytest.fixture
    def calculated(self, client, owner_headers, project, gas_factor):
        attach(client, owner_headers, project, "1.A.1")
        activity = add_activity(client, owner_headers, project, "1.A.1", 10, "ton", "Gas turbines").json()
        calc = client.post(
            f"{IPCC}/calculations", json={"activity_data_id": activity["id"]}, headers=owner_headers
        ).json()
        return activity, calc

    def test_sector_summary(self, client, owner_headers, project, calculated):
        response = client.get(f"{IPCC}/projects/{project['id']}/summaries/ENERGY", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["sector"] == "ENERGY"
        assert response.json()["total_co2"] == pytest.approx(26928)
        assert response.json()["total_co2_equivalent"] == pytest.approx(26928)

    def test_sector_without_summary(self, client, owner_headers, project, calculated):
        response = client.get(f"{IPCC}/projects/{project['id']}/summaries/WASTE", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "No summary for sector WASTE"

    def test_delete_activity_refreshes_summary(self, client, owner_headers, project, calculated):
        activity, calc = calculated

        assert client.delete(f"{IPCC}/activity-data/{activity['id']}", headers=owner_headers).status_code == 204

        assert client.get(f"{IPCC}/calculations/{calc['id']}", headers=owner_headers).status_code == 404
        summary = client.get(f"{IPCC}/projects/{project['id']}/summaries/ENERGY", headers=owner_headers).json()
        assert summary["total_co2_equivalent"] == 0
        totals = client.get(f"{IPCC}/projects/{project['id']}/summaries", headers=owner_headers).json()
        assert totals["total_co2_equivalent"] == 0

    def test_delete_project_cascades(self, client, owner_headers, project, gas_factor, calculated, count_rows):
        assert count_rows(IpccCalculation, project["id"]) == 1

        assert client.delete(f"{IPCC}/projects/{project['id']}", headers=owner_headers).status_code == 204

        for model in (ProjectCategory, ActivityData, IpccCalculation, IpccProjectSummary):
            assert count_rows(model, project["id"]) == 0
        assert client.delete(f"{IPCC}/emission-factors/{gas_factor['id']}", headers=owner_headers).status_code == 204
