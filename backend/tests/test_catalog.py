from __future__ import annotations

import logging

from backend.errors import CatalogUnavailable
from backend.recipes.catalog import load_catalog, recipe_out
from backend.recipes.models import Difficulty


def _record(rid, user_id=1, category="Main", difficulty="Easy", prep=10, cook=20, **extra):
    return {
        "id": rid,
        "user_id": user_id,
        "name": f"Recipe {rid}",
        "category": category,
        "difficulty": difficulty,
        "prep_time": prep,
        "cook_time": cook,
        **extra,
    }


def test_total_time_is_derived_from_prep_and_cook():
    view = load_catalog(1, fetch=lambda uid, diff: [_record(1, prep=12, cook=33)])
    assert len(view.recipes) == 1
    assert view.recipes[0].total_time == 45
    assert view.warnings == []


def test_view_is_sorted_by_total_time():
    records = [_record(1, prep=30, cook=30), _record(2, prep=5, cook=5), _record(3, prep=10, cook=10)]
    view = load_catalog(1, fetch=lambda uid, diff: records)
    assert [r.id for r in view.recipes] == [2, 3, 1]


def test_other_users_recipes_are_dropped():
    records = [_record(1, user_id=1), _record(2, user_id=2)]
    view = load_catalog(1, fetch=lambda uid, diff: records)
    assert [r.id for r in view.recipes] == [1]


def test_any_difficulty_means_no_filter():
    seen = []

    def fetch(uid, diff):
        seen.append(diff)
        return [_record(1, difficulty="Hard")]

    view = load_catalog(1, "any", fetch=fetch)
    assert seen == [None]
    assert len(view.recipes) == 1


def test_difficulty_filter_is_applied():
    seen = []

    def fetch(uid, diff):
        seen.append(diff)
        return [_record(1, difficulty="Easy"), _record(2, difficulty="Hard")]

    view = load_catalog(1, Difficulty.hard, fetch=fetch)
    assert seen == ["Hard"]
    assert [r.id for r in view.recipes] == [2]


def test_empty_catalog():
    view = load_catalog(1, fetch=lambda uid, diff: [])
    assert view.recipes == []
    assert view.warnings == []


def test_unavailable_store_gives_empty_view_with_warning(caplog):
    def fetch(uid, diff):
        raise CatalogUnavailable("database down")

    with caplog.at_level(logging.WARNING, logger="backend.recipes.catalog"):
        view = load_catalog(1, fetch=fetch)

    assert view.recipes == []
    assert len(view.warnings) == 1
    assert any("unavailable" in rec.getMessage() for rec in caplog.records)


def test_recipe_out_adds_total_time():
    out = recipe_out(_record(5, prep=7, cook=8, ingredients="rice", created_at=1.0))
    assert out.total_time == 15
    assert out.ingredients == "rice"


def test_records_without_owner_column_are_taken_as_scoped():
    records = [{"id": 1, "name": "A", "category": "Main", "difficulty": "Easy",
                "prep_time": 10, "cook_time": 20}]
    view = load_catalog(1, fetch=lambda uid, diff: records)
    assert [r.id for r in view.recipes] == [1]
    assert view.recipes[0].total_time == 30
    assert view.recipes[0].tags == ""


def test_optional_text_fields_missing_from_some_records():
    records = [_record(1, tags="quick"), _record(2, prep=5, cook=5)]
    view = load_catalog(1, fetch=lambda uid, diff: records)
    assert {r.id: r.tags for r in view.recipes} == {1: "quick", 2: ""}
    assert all(r.created_at is None for r in view.recipes)
