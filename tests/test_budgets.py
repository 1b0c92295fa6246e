"""Budget CRUD and the upsert/conflict rules on (category, month, year)."""

from __future__ import annotations

import pytest

from spendwise import store
from spendwise.extensions import db
from spendwise.models import Budget


def budget_body(category, amount=100, month=3, year=2024):
    return {"category": category, "amount": amount, "month": month, "year": year}


def test_create_then_upsert_same_period(app, client, make_category) -> None:
    cat = make_category("Groceries", "#123456")
    first = client.post("/budgets", json=budget_body(cat, 100))
    assert first.status_code == 201
    assert first.get_json()["category"] == "Groceries"
    assert first.get_json()["color"] == "#123456"

    second = client.post("/budgets", json=budget_body(cat, 250))
    assert second.status_code == 200
    assert second.get_json()["id"] == first.get_json()["id"]
    assert second.get_json()["amount"] == 250

    with app.app_context():
        assert db.session.query(Budget).count() == 1


def test_create_requires_fields(client) -> None:
    resp = client.post("/budgets", json={"amount": 100, "month": 3, "year": 2024})
    assert resp.status_code == 400
    assert "category" in resp.get_json()["error"]


def test_create_rejects_unknown_category(client) -> None:
    resp = client.post("/budgets", json=budget_body(404))
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Category not found"


def test_update_onto_existing_period_conflicts(app, client, make_category) -> None:
    food = make_category("Food")
    rent = make_category("Rent")
    food_id = client.post("/budgets", json=budget_body(food, 100)).get_json()["id"]
    rent_id = client.post("/budgets", json=budget_body(rent, 900)).get_json()["id"]

    resp = client.put(f"/budgets/{rent_id}", json=budget_body(food, 50))
    assert resp.status_code == 409

    with app.app_context():
        assert db.session.get(Budget, food_id).amount == 100
        rent_budget = db.session.get(Budget, rent_id)
        assert (rent_budget.category_id, rent_budget.amount) == (rent, 900)


def test_update_in_place(client, make_category) -> None:
    cat = make_category("Fun")
    budget_id = client.post("/budgets", json=budget_body(cat, 100)).get_json()["id"]
    resp = client.put(f"/budgets/{budget_id}", json=budget_body(cat, 120, month=4))
    assert resp.status_code == 200
    assert resp.get_json()["month"] == 4
    assert client.put("/budgets/999", json=budget_body(cat)).status_code == 404


def test_list_filters_by_period_and_colors_dangling(client, make_category) -> None:
    cat = make_category("Gone")
    client.post("/budgets", json=budget_body(cat, 10))
    client.post("/budgets", json=budget_body(cat, 20, month=4))
    client.delete(f"/categories/{cat}")

    budgets = client.get("/budgets?month=3&year=2024").get_json()["budgets"]
    assert len(budgets) == 1
    assert budgets[0]["category"] == "Uncategorized"
    assert budgets[0]["color"] == "#8884d8"
    assert len(client.get("/budgets").get_json()["budgets"]) == 2


def test_delete(client, make_category) -> None:
    cat = make_category("Bills")
    budget_id = client.post("/budgets", json=budget_body(cat)).get_json()["id"]
    assert client.delete(f"/budgets/{budget_id}").status_code == 200
    assert client.delete(f"/budgets/{budget_id}").status_code == 404


@pytest.mark.parametrize("literal", ["Infinity", "NaN"])
def test_budget_rejects_non_finite_amounts(client, make_category, literal) -> None:
    cat = make_category("Food")
    body = '{"category": %d, "amount": %s, "month": 3, "year": 2024}' % (cat, literal)
    assert client.post("/budgets", data=body, content_type="application/json").status_code == 400


def test_budget_rejects_out_of_range_year(client, make_category) -> None:
    cat = make_category("Food")
    assert client.post("/budgets", json=budget_body(cat, year=0)).status_code == 400
    assert client.post("/budgets", json=budget_body(cat, year=10000)).status_code == 400


def test_create_recovers_when_another_insert_wins(app, client, make_category, monkeypatch) -> None:
    cat = make_category("Food")
    existing_id = client.post("/budgets", json=budget_body(cat, 100)).get_json()["id"]

    # First lookup misses as if a concurrent request had not committed yet
    real_find = store._find_budget
    calls = []

    def stale_find(*args):
        calls.append(args)
        return None if len(calls) == 1 else real_find(*args)

    monkeypatch.setattr(store, "_find_budget", stale_find)
    resp = client.post("/budgets", json=budget_body(cat, 300))
    assert resp.status_code == 200
    assert resp.get_json()["id"] == existing_id
    assert resp.get_json()["amount"] == 300

    with app.app_context():
        assert db.session.query(Budget).count() == 1
