"""Tests for the planner endpoints"""

import pytest


def save(client, month, items):
    return client.put(f"/planners/{month}", json={"items": items})


class TestPlannerState:
    """Tests for reading a month's planner"""

    def test_no_templates_reports_loading(self, client):
        state = client.get("/planners/2025-11").json()
        assert state["is_loading"] is True
        assert state["items"] == []

    def test_new_month_is_in_create_mode(self, client, templates):
        state = client.get("/planners/2025-11").json()

        assert state["mode"] == "create"
        assert state["is_loading"] is False
        assert state["month_label"] == "November, 2025"
        assert len(state["items"]) == len(templates)
        assert all(item["entry_id"] == 0 and item["amount"] == 0 for item in state["items"])

    def test_saved_month_views_and_edits(self, client, templates):
        save(client, "2025-11", [{"template_id": templates["Rent"]["id"], "amount": 500}])

        viewed = client.get("/planners/2025-11").json()
        assert viewed["mode"] == "view"
        assert [item["name"] for item in viewed["items"]] == ["Rent"]

        edited = client.get("/planners/2025-11", params={"editing": True}).json()
        assert edited["mode"] == "edit"
        assert len(edited["items"]) == len(templates)
        rent = next(item for item in edited["items"] if item["name"] == "Rent")
        assert rent["amount"] == 500
        assert rent["entry_id"] > 0

    def test_totals(self, client, templates):
        save(client, "2025-11", [
            {"template_id": templates["Salary"]["id"], "amount": 1000},
            {"template_id": templates["Freelance"]["id"], "amount": 200},
            {"template_id": templates["Rent"]["id"], "amount": 500},
            {"template_id": templates["Groceries"]["id"], "amount": 150},
        ])

        state = client.get("/planners/2025-11").json()
        assert state["total_inflows"] == 1200
        assert state["total_outflows"] == 650
        assert state["net_balance"] == 550

    @pytest.mark.parametrize("month", ["2025-13", "not-a-month", "2025-1", "２０２５-11"])
    def test_malformed_month_is_rejected(self, client, month):
        assert client.get(f"/planners/{month}").status_code == 422


class TestSavingPlanners:
    """Tests for saving, editing and deleting planners"""

    def test_zero_amount_rows_are_not_stored(self, client, templates):
        response = save(client, "2025-11", [
            {"template_id": templates["Salary"]["id"], "amount": 0},
            {"template_id": templates["Rent"]["id"], "amount": 500},
        ])

        assert response.status_code == 200
        saved = response.json()
        assert len(saved) == 1
        assert saved[0]["amount"] == 500
        assert saved[0]["template_id"] == templates["Rent"]["id"]

    def test_saving_again_replaces_the_month(self, client, templates):
        save(client, "2025-11", [{"template_id": templates["Salary"]["id"], "amount": 100}])
        save(client, "2025-11", [{"template_id": templates["Rent"]["id"], "amount": 300}])

        items = client.get("/planners/2025-11").json()["items"]
        assert [(item["name"], item["amount"]) for item in items] == [("Rent", 300)]

    def test_unknown_template_is_rejected(self, client, templates):
        response = save(client, "2025-11", [{"template_id": 9999, "amount": 10}])
        assert response.status_code == 400
        assert client.get("/planners/").json() == []

    def test_negative_amount_is_rejected(self, client, templates):
        response = save(client, "2025-11", [{"template_id": templates["Rent"]["id"], "amount": -5}])
        assert response.status_code == 422

    def test_full_width_month_is_not_saved(self, client, templates):
        response = save(client, "２０２５-11", [{"template_id": templates["Rent"]["id"], "amount": 10}])
        assert response.status_code == 422
        assert client.get("/planners/").json() == []

    def test_update_entry_amount(self, client, templates):
        rent_id = templates["Rent"]["id"]
        save(client, "2025-11", [{"template_id": rent_id, "amount": 500}])

        response = client.patch(f"/planners/2025-11/entries/{rent_id}", json={"amount": 650})
        assert response.status_code == 200
        assert response.json()["amount"] == 650
        assert response.json()["is_done"] is False

    def test_update_entry_creates_missing_slot(self, client, templates):
        salary_id = templates["Salary"]["id"]
        save(client, "2025-11", [{"template_id": templates["Rent"]["id"], "amount": 500}])

        response = client.patch(f"/planners/2025-11/entries/{salary_id}", json={"amount": 900})
        assert response.status_code == 200

        names = [item["name"] for item in client.get("/planners/2025-11").json()["items"]]
        assert sorted(names) == ["Rent", "Salary"]

    def test_update_entry_for_unknown_template(self, client, templates):
        response = client.patch("/planners/2025-11/entries/9999", json={"amount": 1})
        assert response.status_code == 404

    def test_toggle_done(self, client, templates):
        rent_id = templates["Rent"]["id"]
        save(client, "2025-11", [{"template_id": rent_id, "amount": 500}])

        first = client.post(f"/planners/2025-11/entries/{rent_id}/toggle").json()
        second = client.post(f"/planners/2025-11/entries/{rent_id}/toggle").json()

        assert first["is_done"] is True
        assert second["is_done"] is False
        assert second["amount"] == 500

    def test_toggle_missing_entry(self, client, templates):
        response = client.post(f"/planners/2025-11/entries/{templates['Rent']['id']}/toggle")
        assert response.status_code == 404

    def test_delete_planner_only_touches_its_month(self, client, templates):
        rent_id = templates["Rent"]["id"]
        salary_id = templates["Salary"]["id"]
        save(client, "2025-10", [{"template_id": rent_id, "amount": 1}])
        save(client, "2025-11", [
            {"template_id": rent_id, "amount": 2},
            {"template_id": salary_id, "amount": 3},
        ])

        response = client.delete("/planners/2025-11")

        assert response.json() == {"month": "2025-11", "deleted": 2}
        assert client.get("/planners/2025-11").json()["mode"] == "create"
        assert client.get("/planners/2025-10").json()["mode"] == "view"


class TestPlannerStream:
    """Tests for the planner WebSocket"""

    def test_planner_is_pushed_after_save(self, client, templates):
        with client.websocket_connect("/planners/2025-11/ws") as websocket:
            initial = websocket.receive_json()
            assert initial["mode"] == "create"

            save(client, "2025-11", [{"template_id": templates["Rent"]["id"], "amount": 500}])

            updated = websocket.receive_json()
            assert updated["mode"] == "view"
            assert updated["total_outflows"] == 500
