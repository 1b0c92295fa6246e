from __future__ import annotations

import pytest

from spendwise import create_app
from spendwise.extensions import db


@pytest.fixture()
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "DEFAULT_GLOBAL_BUDGET": 12000,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_category(client):
    def _make(name, color=None):
        body = {"name": name}
        if color:
            body["color"] = color
        resp = client.post("/categories", json=body)
        assert resp.status_code == 201
        return resp.get_json()["id"]
    return _make


@pytest.fixture()
def make_transaction(client):
    def _make(type, amount, date, category=None, description="entry"):
        resp = client.post("/transactions", json={
            "type": type,
            "amount": amount,
            "date": date,
            "category": category,
            "description": description,
        })
        assert resp.status_code == 201
        return resp.get_json()["id"]
    return _make
