"""Tests for DEFRA projects, conversion factors, calculations and summaries."""

import pytest

from tests.fixtures.data_fixtures import API

DEFRA = f"{API}/defra"

FACTORS_2024 = [
    {
        "year": "2024",
        "level1_category": "Fuels",
        "level2_category": "Liquid fuels",
        "activity_name": "Diesel (average biofuel blend)",
        "unit": "litres",
        "co2_factor": 2.5,
        "ch4_factor": 0.001,
        "n2o_factor": 0.0001,
        "co2e_factor": 2.51,
        "scope": "Scope 1",
    },
    {
        "year": "2024",
        "level1_category": "UK electricity",
        "activity_name": "Electricity generated",
        "unit": "kWh",
        "co2e_factor": 0.2,
        "scope": "Scope 2",
    },
    {
        "year": "2024",
        "level1_category": "Business travel- air",
        "activity_name": "Domestic flight",
        "unit": "passenger.km",
        "co2e_factor": 0.25,
        "scope": "Scope 3",
    },
]


@pytest.fixture
def factors(client, owner_headers):
    response = client.post(f"{DEFRA}/emission-factors/import", json={"factors": FACTORS_2024}, headers=owner_headers)
    assert response.status_code == 201, response.text
    return {f["activity_name"]: f for f in response.json()}


@pytest.fixture
def project(client, owner_headers, tenant, factors):
    response = client.post(
        f"{DEFRA}/projects",
        json={
            "tenant_id": tenant["id"],
            "name": "FY2024 footprint",
            "organization_name": "Green Fields Farming",
            "reporting_period_start": "2024-01-01",
            "reporting_period_end": "2024-12-31",
            "defra_year": "2024",
        },
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def calculate(client, headers, project, **fields):
    body = {"project_id": project["id"], "activity_date": "2024-03-01"}
    body.update(fields)
    return client.post(f"{DEFRA}/calculations", json=body, headers=headers)


class TestEmissionFactors:
    """Tests for the DEFRA factor catalogue."""

    def test_search(self, client, owner_headers, factors):
        response = client.get(f"{DEFRA}/emission-factors", params={"category": "electricity"}, headers=owner_headers)

        assert response.status_code == 200
        assert [f["activity_name"] for f in response.json()] == ["Electricity generated"]

    def test_search_by_scope_and_unit(self, client, owner_headers, factors):
        response = client.get(
            f"{DEFRA}/emission-factors", params={"scope": "Scope 1", "unit": "litres"}, headers=owner_headers
        )

        assert [f["activity_name"] for f in response.json()] == ["Diesel (average biofuel blend)"]

    def test_years(self, client, owner_headers, factors):
        assert client.get(f"{DEFRA}/emission-factors/years", headers=owner_headers).json() == ["2024"]

    def test_invalid_scope_rejected(self, client, owner_headers):
        bad = dict(FACTORS_2024[1], scope="Scope2")

        response = client.post(f"{DEFRA}/emission-factors/import", json={"factors": [bad]}, headers=owner_headers)

        assert response.status_code == 422


class TestProjects:
    """Tests for DEFRA projects."""

    def test_create(self, project, tenant):
        assert project["tenant_id"] == tenant["id"]
        assert project["status"] == "draft"
        assert project["defra_year"] == "2024"

    def test_year_without_factors(self, client, owner_headers, tenant, factors):
        response = client.post(
            f"{DEFRA}/projects",
            json={
                "tenant_id": tenant["id"],
                "name": "Old year",
                "organization_name": "Green Fields Farming",
                "reporting_period_start": "2019-01-01",
                "reporting_period_end": "2019-12-31",
                "defra_year": "2019",
            },
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "No emission factors found for DEFRA year 2019"

    def test_period_end_before_start(self, client, owner_headers, project):
        response = client.patch(
            f"{DEFRA}/projects/{project['id']}", json={"reporting_period_end": "2023-12-31"}, headers=owner_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Reporting period end date must be after start date"

    def test_list_for_tenant(self, client, owner_headers, tenant, project):
        response = client.get(f"{DEFRA}/projects", params={"tenant_id": tenant["id"]}, headers=owner_headers)

        assert [p["id"] for p in response.json()] == [project["id"]]

    def test_outsider_cannot_read(self, client, outsider_headers, project):
        response = client.get(f"{DEFRA}/projects/{project['id']}", headers=outsider_headers)

        assert response.status_code == 403

    def test_member_can_read(self, client, member_headers, project):
        assert client.get(f"{DEFRA}/projects/{project['id']}", headers=member_headers).status_code == 200

    def test_status_transitions(self, client, owner_headers, project):
        url = f"{DEFRA}/projects/{project['id']}/status"

        assert client.put(url, json={"status": "active"}, headers=owner_headers).json()["status"] == "active"
        assert client.put(url, json={"status": "completed"}, headers=owner_headers).status_code == 200

        response = client.put(url, json={"status": "draft"}, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot change status from completed to draft"

    def test_delete_removes_calculations(self, client, owner_headers, project, factors):
        calc = calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Electricity generated"]["id"], quantity=10, unit="kWh",
        ).json()

        assert client.delete(f"{DEFRA}/projects/{project['id']}", headers=owner_headers).status_code == 204
        assert client.get(f"{DEFRA}/calculations/{calc['id']}", headers=owner_headers).status_code == 404


class TestCalculations:
    """Tests for DEFRA calculations and the project summary."""

    def test_gas_split_factor(self, client, owner_headers, project, factors):
        response = calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Diesel (average biofuel blend)"]["id"], quantity=1000, unit="litres",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["co2_emissions"] == pytest.approx(2500)
        assert data["ch4_emissions"] == pytest.approx(1)
        assert data["n2o_emissions"] == pytest.approx(0.1)
        assert data["total_co2e"] == pytest.approx(2500 + 28 + 26.5)
        assert data["category"] == "Fuels"
        assert data["scope"] == "Scope 1"

    def test_factor_selected_from_activity_name(self, client, owner_headers, project, factors):
        response = calculate(client, owner_headers, project, activity_name="Domestic flight", quantity=400, unit="passenger.km")

        assert response.status_code == 201
        data = response.json()
        assert data["emission_factor_id"] == factors["Domestic flight"]["id"]
        assert data["total_co2e"] == pytest.approx(100)

    def test_factor_or_activity_required(self, client, owner_headers, project, factors):
        response = calculate(client, owner_headers, project, quantity=1, unit="kWh")

        assert response.status_code == 400
        assert response.json()["detail"] == "Provide emission_factor_id or an activity name"

    def test_no_candidate_for_unit(self, client, owner_headers, project, factors):
        response = calculate(client, owner_headers, project, activity_name="Coal", quantity=1, unit="tonnes")

        assert response.status_code == 400

    def test_summary_and_recalculation_on_update(self, client, owner_headers, project, factors):
        calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Diesel (average biofuel blend)"]["id"], quantity=1000, unit="litres",
        )
        electricity = calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Electricity generated"]["id"], quantity=10000, unit="kWh",
        ).json()

        summary = client.get(f"{DEFRA}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["scope1_total"] == pytest.approx(2554.5)
        assert summary["scope2_total"] == pytest.approx(2000)
        assert summary["fuels_total"] == pytest.approx(2554.5)
        assert summary["total_co2e"] == pytest.approx(4554.5)
        assert summary["calculation_count"] == 2

        response = client.patch(f"{DEFRA}/calculations/{electricity['id']}", json={"quantity": 20000}, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["total_co2e"] == pytest.approx(4000)

        summary = client.get(f"{DEFRA}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["scope2_total"] == pytest.approx(4000)
        assert summary["total_co2e"] == pytest.approx(6554.5)

    def test_delete_updates_summary(self, client, owner_headers, project, factors):
        calc = calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Electricity generated"]["id"], quantity=100, unit="kWh",
        ).json()

        assert client.delete(f"{DEFRA}/calculations/{calc['id']}", headers=owner_headers).status_code == 204

        summary = client.get(f"{DEFRA}/projects/{project['id']}/summary", headers=owner_headers).json()
        assert summary["total_co2e"] == 0
        assert summary["calculation_count"] == 0

    def test_get_includes_factor(self, client, owner_headers, project, factors):
        calc = calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Electricity generated"]["id"], quantity=100, unit="kWh",
        ).json()

        response = client.get(f"{DEFRA}/calculations/{calc['id']}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["emission_factor"]["activity_name"] == "Electricity generated"

    def test_project_detail(self, client, owner_headers, project, factors):
        calculate(
            client, owner_headers, project,
            emission_factor_id=factors["Electricity generated"]["id"], quantity=100, unit="kWh",
        )

        detail = client.get(f"{DEFRA}/projects/{project['id']}", headers=owner_headers).json()

        assert len(detail["calculations"]) == 1
        assert detail["summary"]["total_co2e"] == pytest.approx(20)

    def test_recalculate_summary(self, client, owner_headers, project):
        response = client.post(f"{DEFRA}/projects/{project['id']}/summary/recalculate", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["calculation_count"] == 0
