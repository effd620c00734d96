"""Tests for the item template endpoints"""

from components.template.schemas import CATEGORIES


class TestTemplateEndpoints:
    """Tests for managing item templates over HTTP"""

    def test_health_check(self, client):
        response = client.get("/health_check/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_and_list_templates(self, client):
        response = client.post("/templates/", json={"name": "  Salary ", "category": "Income"})
        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Salary"
        assert created["category"] == "Income"
        assert created["id"] > 0

        client.post("/templates/", json={"name": "Rent", "category": "Fixed Expenses"})

        listed = client.get("/templates/").json()
        assert [(t["category"], t["name"]) for t in listed] == [
            ("Fixed Expenses", "Rent"),
            ("Income", "Salary"),
        ]

    def test_blank_name_is_rejected(self, client):
        response = client.post("/templates/", json={"name": "   ", "category": "Income"})
        assert response.status_code == 422

    def test_unknown_category_is_rejected(self, client):
        response = client.post("/templates/", json={"name": "Lottery", "category": "Windfall"})
        assert response.status_code == 422

    def test_categories_in_display_order(self, client):
        categories = client.get("/templates/categories").json()
        assert [c["name"] for c in categories] == CATEGORIES
        assert [c["name"] for c in categories if c["is_inflow"]] == ["Income", "Receivables"]

    def test_grouped_by_category(self, client, templates):
        groups = client.get("/templates/by-category").json()

        assert [g["category"] for g in groups] == CATEGORIES
        by_category = {g["category"]: [t["name"] for t in g["templates"]] for g in groups}
        assert by_category["Income"] == ["Salary"]
        assert by_category["Receivables"] == ["Freelance"]
        assert by_category["Credit Cards"] == []

    def test_delete_template(self, client, templates):
        salary_id = templates["Salary"]["id"]
        client.put("/planners/2025-11", json={"items": [{"template_id": salary_id, "amount": 100}]})

        response = client.delete(f"/templates/{salary_id}")
        assert response.status_code == 200
        assert salary_id not in [t["id"] for t in client.get("/templates/").json()]
        assert client.get("/planners/").json() == []

        assert client.delete(f"/templates/{salary_id}").status_code == 404
