"""
API tests for projects, status derivation and the timeline.
"""
import pytest

PAST_SCHEDULE = {
    "fabrication_start": "2000-01-01",
    "assembly_start": "2000-01-10",
    "ship": "2000-02-01",
}

FUTURE_SCHEDULE = {
    "fabrication_start": "2999-01-01",
    "ship": "2999-02-01",
}

SCENARIO_SCHEDULE = {
    "fabrication_start": "2025-01-01",
    "assembly_start": "2025-01-10",
    "ship": "2025-02-01",
}


@pytest.fixture
def create_project(test_client):
    def _create(project_number="P-100", **fields):
        response = test_client.post(
            "/manufacturing/projects/",
            json={"project_number": project_number, **fields},
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _create


class TestProjectCrud:

    def test_create_derives_status(self, create_project):
        assert create_project("P-1", **PAST_SCHEDULE)["status"] == "COMPLETED"
        assert create_project("P-2", **FUTURE_SCHEDULE)["status"] == "NOT_STARTED"
        assert create_project("P-3")["status"] == "NOT_STARTED"

    def test_new_project_is_not_manual(self, create_project):
        assert create_project(**PAST_SCHEDULE)["manual_status"] is False

    def test_duplicate_project_number_rejected(self, test_client, create_project):
        create_project("P-1")
        response = test_client.post("/manufacturing/projects/", json={"project_number": "P-1"})
        assert response.status_code == 400

    def test_empty_project_number_rejected(self, test_client, create_project):
        for _ in range(2):
            response = test_client.post("/manufacturing/projects/", json={"project_number": ""})
            assert response.status_code == 422

        project = create_project("P-1")
        response = test_client.put(f"/manufacturing/projects/{project['id']}", json={"project_number": ""})
        assert response.status_code == 422
        assert test_client.get(f"/manufacturing/projects/{project['id']}").json()["project_number"] == "P-1"

    def test_renaming_to_taken_number_rejected(self, test_client, create_project):
        create_project("P-1")
        project = create_project("P-2")
        response = test_client.put(f"/manufacturing/projects/{project['id']}", json={"project_number": "P-1"})
        assert response.status_code == 400

    def test_schedule_dates_round_trip(self, create_project):
        project = create_project(contract_date="2024-11-01", chassis_eta="2024-12-15", delivery="2025-02-10")
        assert (project["contract_date"], project["chassis_eta"], project["delivery"]) == (
            "2024-11-01", "2024-12-15", "2025-02-10"
        )

    def test_get_and_lookup_by_number(self, test_client, create_project):
        project = create_project("P-7", name="Command truck")

        by_id = test_client.get(f"/manufacturing/projects/{project['id']}")
        by_number = test_client.get("/manufacturing/projects/by-number/P-7")

        assert by_id.status_code == 200
        assert by_number.json()["id"] == project["id"]
        assert by_id.json()["name"] == "Command truck"

    def test_missing_project_is_404(self, test_client):
        assert test_client.get("/manufacturing/projects/999").status_code == 404
        assert test_client.get("/manufacturing/projects/by-number/NOPE").status_code == 404
        assert test_client.get("/manufacturing/projects/999/status").status_code == 404
        assert test_client.delete("/manufacturing/projects/999").status_code == 404

    def test_list_filters_by_status(self, test_client, create_project):
        create_project("P-1", **PAST_SCHEDULE)
        create_project("P-2", **FUTURE_SCHEDULE)

        everything = test_client.get("/manufacturing/projects/").json()
        completed = test_client.get("/manufacturing/projects/", params={"status": "COMPLETED"}).json()

        assert len(everything) == 2
        assert [p["project_number"] for p in completed] == ["P-1"]

    def test_editing_milestones_recomputes_status(self, test_client, create_project):
        project = create_project(**FUTURE_SCHEDULE)

        response = test_client.put(
            f"/manufacturing/projects/{project['id']}",
            json={"fabrication_start": "2000-01-01"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "IN FAB"

    def test_editing_other_fields_keeps_status(self, test_client, create_project):
        project = create_project(**PAST_SCHEDULE)
        response = test_client.put(f"/manufacturing/projects/{project['id']}", json={"notes": "late chassis"})
        assert response.json()["status"] == "COMPLETED"
        assert response.json()["notes"] == "late chassis"

    def test_delete_project_removes_orders(self, test_client, create_project):
        project = create_project()
        test_client.post("/manufacturing/orders/", json={
            "order_number": "PO-1",
            "project_id": project["id"],
            "materials": [{"material_id": "M1", "required_quantity": 1}],
        })

        assert test_client.delete(f"/manufacturing/projects/{project['id']}").status_code == 200
        assert test_client.get("/manufacturing/orders/").json() == []


class TestProjectStatusEndpoint:

    @pytest.mark.parametrize("as_of,expected", [
        ("2025-01-15", "IN ASSEMBLY"),
        ("2025-02-01", "SHIPPING"),
        ("2025-02-02", "COMPLETED"),
        ("2024-12-31", "NOT_STARTED"),
    ])
    def test_status_as_of(self, test_client, create_project, as_of, expected):
        project = create_project(**SCENARIO_SCHEDULE)
        response = test_client.get(
            f"/manufacturing/projects/{project['id']}/status", params={"as_of": as_of}
        )
        body = response.json()
        assert body["status"] == expected
        assert body["as_of"] == as_of
        assert body["persisted"] is False

    def test_status_not_persisted_by_default(self, test_client, create_project):
        project = create_project(**SCENARIO_SCHEDULE)
        test_client.get(f"/manufacturing/projects/{project['id']}/status", params={"as_of": "2025-01-15"})
        stored = test_client.get(f"/manufacturing/projects/{project['id']}").json()
        assert stored["status"] == project["status"]

    def test_persist_stores_derived_status(self, test_client, create_project):
        project = create_project(**SCENARIO_SCHEDULE)
        response = test_client.get(
            f"/manufacturing/projects/{project['id']}/status",
            params={"as_of": "2025-01-15", "persist": True},
        )
        assert response.json()["persisted"] is True
        assert response.json()["stored_status"] == project["status"]

        stored = test_client.get(f"/manufacturing/projects/{project['id']}").json()
        assert stored["status"] == "IN ASSEMBLY"

    def test_malformed_dates_degrade_to_not_started(self, test_client, create_project):
        project = create_project(fabrication_start="01/02/2000", ship="whenever")
        assert project["status"] == "NOT_STARTED"
        assert project["fabrication_start"] == "01/02/2000"

    def test_reports_out_of_order_milestones(self, test_client, create_project):
        project = create_project(fabrication_start="2025-02-01", assembly_start="2025-01-01")
        body = test_client.get(
            f"/manufacturing/projects/{project['id']}/status", params={"as_of": "2025-01-15"}
        ).json()
        assert body["status"] == "IN ASSEMBLY"
        assert body["out_of_order_milestones"] == [["fabrication_start", "assembly_start"]]


    def test_reports_stage_durations(self, test_client, create_project):
        project = create_project(
            ntc_testing="2025-02-03", qc_start="2025-02-10", executive_review="2025-02-12", ship="2025-02-20"
        )
        body = test_client.get(
            f"/manufacturing/projects/{project['id']}/status", params={"as_of": "2025-02-11"}
        ).json()
        assert body["durations"] == {"ntc_days": 6, "ntc_band": "yellow", "qc_days": 3, "qc_band": "green"}


class TestCalculateStatus:

    def test_calculate_from_payload(self, test_client):
        response = test_client.post(
            "/manufacturing/projects/status/calculate",
            params={"as_of": "2025-02-01"},
            json=SCENARIO_SCHEDULE,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "SHIPPING"
        assert body["as_of"] == "2025-02-01"
        assert body["out_of_order_milestones"] == []
        assert body["durations"]["qc_days"] == 0

    def test_manual_status_in_payload_wins(self, test_client):
        response = test_client.post(
            "/manufacturing/projects/status/calculate",
            params={"as_of": "2025-02-01"},
            json={**SCENARIO_SCHEDULE, "status": "IN WRAP", "manual_status": True},
        )
        assert response.json()["status"] == "IN WRAP"

    def test_calculate_stores_nothing(self, test_client):
        test_client.post("/manufacturing/projects/status/calculate", json=SCENARIO_SCHEDULE)
        assert test_client.get("/manufacturing/projects/").json() == []

    def test_unknown_status_rejected(self, test_client):
        response = test_client.post(
            "/manufacturing/projects/status/calculate", json={"status": "ON FIRE", "manual_status": True}
        )
        assert response.status_code == 422


class TestManualOverride:

    def test_override_is_sticky(self, test_client, create_project):
        project = create_project(**SCENARIO_SCHEDULE)
        project_url = f"/manufacturing/projects/{project['id']}"

        response = test_client.put(f"{project_url}/status", json={"status": "IN QC"})
        assert response.status_code == 200
        assert response.json()["status"] == "IN QC"
        assert response.json()["manual_status"] is True

        # Milestone edits and derivation leave the manual status alone
        test_client.put(project_url, json={"ship": "2000-01-01"})
        assert test_client.get(project_url).json()["status"] == "IN QC"

        body = test_client.get(f"{project_url}/status", params={"as_of": "2025-01-15", "persist": True}).json()
        assert body["status"] == "IN QC"
        assert body["persisted"] is False

    def test_invalid_override_status_rejected(self, test_client, create_project):
        project = create_project()
        response = test_client.put(
            f"/manufacturing/projects/{project['id']}/status", json={"status": "ON FIRE"}
        )
        assert response.status_code == 422

    def test_clearing_override_recomputes(self, test_client, create_project):
        project = create_project(**SCENARIO_SCHEDULE)
        project_url = f"/manufacturing/projects/{project['id']}"
        test_client.put(f"{project_url}/status", json={"status": "IN QC"})

        response = test_client.delete(f"{project_url}/status/override", params={"as_of": "2025-01-15"})

        assert response.json()["manual_status"] is False
        assert response.json()["status"] == "IN ASSEMBLY"


class TestRefreshStatuses:

    def test_refresh_updates_non_manual_projects(self, test_client, create_project):
        first = create_project("P-1", **SCENARIO_SCHEDULE)
        create_project("P-2", **SCENARIO_SCHEDULE)
        manual = create_project("P-3", **SCENARIO_SCHEDULE)
        test_client.put(f"/manufacturing/projects/{manual['id']}/status", json={"status": "IN WRAP"})

        response = test_client.post("/manufacturing/projects/refresh-statuses", params={"as_of": "2025-02-01"})

        assert response.json() == {
            "as_of": "2025-02-01",
            "evaluated": 2,
            "updated": 2,
            "skipped_manual": 1,
        }
        assert test_client.get(f"/manufacturing/projects/{first['id']}").json()["status"] == "SHIPPING"
        assert test_client.get(f"/manufacturing/projects/{manual['id']}").json()["status"] == "IN WRAP"


class TestTimelineEndpoint:

    def test_timeline(self, test_client, create_project):
        project = create_project(**SCENARIO_SCHEDULE)
        body = test_client.get(
            f"/manufacturing/projects/{project['id']}/timeline", params={"as_of": "2025-01-29"}
        ).json()

        assert body["status"] == "IN ASSEMBLY"
        assert body["shipping_message"] == "3 days until shipping"
        assert [e["key"] for e in body["events"]] == ["fabrication_start", "assembly_start", "ship"]
        assert body["next_milestone"]["key"] == "ship"
        assert 0 < body["progress"] < 100
