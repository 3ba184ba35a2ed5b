from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from backend.app import app
from backend.errors import CatalogUnavailable
from backend.recipes.store import clear_recipes, get_store

client = TestClient(app)


def _login(c):
    c.post("/auth/login", json={"username": "user", "password": "user123"})


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def _add(c, name, category, prep, cook, difficulty="Easy"):
    resp = c.post("/recipes", json={
        "name": name, "category": category, "difficulty": difficulty,
        "prep_time": prep, "cook_time": cook,
    })
    assert resp.status_code == 201
    return resp.json()["id"]


def _search(c, **body):
    return c.post("/meal-plans/search", json=body)


def _seed_example(c):
    ids = {
        "main_30": _add(c, "Chicken Adobo", "Main", 10, 20),
        "side_20": _add(c, "Garlic Rice", "Side", 5, 15),
        "main_45": _add(c, "Kare-Kare", "Main", 15, 30, difficulty="Hard"),
    }
    return ids


def test_pairing_example():
    clear_recipes()
    _login(client)
    ids = _seed_example(client)

    resp = _search(client, target_minutes=50, tolerance_minutes=5, shape="Main+Side")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["results"]) == 1
    match = body["results"][0]
    assert [r["id"] for r in match["recipes"]] == [ids["main_30"], ids["side_20"]]
    assert match["total_time"] == 50
    assert match["combination_size"] == 2
    assert body["shape_label"] == "Pairing: Main+Side"
    assert body["window_min"] == 45
    assert body["window_max"] == 55
    assert body["warnings"] == []


def test_single_example_orders_closest_first():
    clear_recipes()
    _login(client)
    ids = _seed_example(client)

    body = _search(client, target_minutes=40, tolerance_minutes=10, shape="single_Main").json()
    assert [m["recipes"][0]["id"] for m in body["results"]] == [ids["main_45"], ids["main_30"]]


def test_default_tolerance_applies():
    clear_recipes()
    _login(client)
    _seed_example(client)

    body = _search(client, target_minutes=40, shape="single_Main").json()
    assert body["tolerance_minutes"] == 10
    assert len(body["results"]) == 2


def test_difficulty_filter():
    clear_recipes()
    _login(client)
    ids = _seed_example(client)

    body = _search(client, target_minutes=40, tolerance_minutes=10,
                   shape="single_Main", difficulty="Hard").json()
    assert [m["recipes"][0]["id"] for m in body["results"]] == [ids["main_45"]]

    body = _search(client, target_minutes=40, tolerance_minutes=10,
                   shape="single_Main", difficulty="any").json()
    assert len(body["results"]) == 2


def test_no_recipes_gives_empty_results():
    clear_recipes()
    _login(client)
    resp = _search(client, target_minutes=30, shape="Main+Side+Drink")
    assert resp.status_code == 200
    assert resp.json()["results"] == []


def test_other_users_recipes_are_never_combined():
    clear_recipes()
    owner = TestClient(app)
    _login(owner)
    _add(owner, "Chicken Adobo", "Main", 10, 20)

    other = TestClient(app)
    _login_admin(other)
    _add(other, "Garlic Rice", "Side", 5, 15)

    assert _search(owner, target_minutes=50, shape="Main+Side").json()["results"] == []
    assert _search(other, target_minutes=50, shape="Main+Side").json()["results"] == []


def test_results_capped_at_fifty():
    clear_recipes()
    _login(client)
    for i in range(8):
        _add(client, f"Main {i}", "Main", 10, 20)
        _add(client, f"Side {i}", "Side", 10, 10)

    body = _search(client, target_minutes=50, tolerance_minutes=0, shape="Main+Side").json()
    assert len(body["results"]) == 50
    assert body["total_matches"] == 64


def test_invalid_shape_is_a_client_error():
    _login(client)
    resp = _search(client, target_minutes=40, shape="Main")
    assert resp.status_code == 400
    assert "Main" in resp.json()["detail"]

    assert _search(client, target_minutes=40, shape="Main+Soup").status_code == 400
    assert _search(client, target_minutes=40, shape="").status_code == 400


def test_invalid_target_and_tolerance():
    _login(client)
    assert _search(client, target_minutes=0, shape="single_Main").status_code == 422
    assert _search(client, target_minutes=-15, shape="single_Main").status_code == 422
    assert _search(client, target_minutes=30, tolerance_minutes=-1, shape="single_Main").status_code == 422
    assert _search(client, target_minutes=30, shape="single_Main", difficulty="Extreme").status_code == 422


def test_unavailable_catalog_returns_empty_with_warning():
    _login(client)
    with patch.object(get_store(), "fetch_recipes", side_effect=CatalogUnavailable("down")):
        resp = _search(client, target_minutes=30, shape="single_Main")
    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == []
    assert len(body["warnings"]) == 1


def test_invalid_shape_does_not_read_the_catalog():
    _login(client)
    with patch.object(get_store(), "fetch_recipes") as fetch:
        resp = _search(client, target_minutes=30, shape="Main")
    assert resp.status_code == 400
    fetch.assert_not_called()
