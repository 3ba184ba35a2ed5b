from __future__ import annotations

import logging
import time
from typing import Any

import pandas as pd

from ..errors import CatalogUnavailable, RecipeNotFound
from .config import DEFAULT_STORE_CONFIG, RecipeStoreConfig
from .models import RecipeIn

logger = logging.getLogger(__name__)

RECORD_COLUMNS: list[str] = [
    "id",
    "user_id",
    "name",
    "category",
    "difficulty",
    "prep_time",
    "cook_time",
    "ingredients",
    "instructions",
    "tags",
    "image_path",
    "created_at",
]

_INT_COLUMNS = ("id", "user_id", "prep_time", "cook_time")
_SEARCH_COLUMNS = ("name", "tags", "ingredients")


def _normalize_record(raw: dict[str, Any]) -> dict[str, Any]:
    record = {col: raw.get(col, "") for col in RECORD_COLUMNS}
    for col in _INT_COLUMNS:
        record[col] = int(record[col])
    record["created_at"] = float(record["created_at"] or 0.0)
    for col in ("name", "category", "difficulty", "ingredients", "instructions", "tags", "image_path"):
        record[col] = str(record[col])
    return record


class RecipeStore:
    """
    In-memory recipe table keyed by recipe id, optionally mirrored to CSV.

    Every read and write is scoped to a ``user_id``; a recipe owned by
    another user behaves exactly like a missing one.
    """

    def __init__(self, config: RecipeStoreConfig = DEFAULT_STORE_CONFIG) -> None:
        self.config = config
        self._recipes: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._loaded = config.csv_path is None

    # ── Persistence ──────────────────────────────────────────────────────

    def _load(self) -> None:
        if self._loaded:
            return
        path = self.config.csv_path
        if path is not None and path.exists():
            try:
                df = pd.read_csv(path, dtype=str, keep_default_na=False)
                records = [_normalize_record(r) for r in df.to_dict(orient="records")]
            except (OSError, ValueError, KeyError, pd.errors.ParserError) as exc:
                raise CatalogUnavailable(f"Could not read recipes from {path}") from exc
            self._recipes = {r["id"]: r for r in records}
            self._next_id = max(self._recipes, default=0) + 1
        self._loaded = True

    def _save(self, recipes: dict[int, dict[str, Any]]) -> None:
        """Write ``recipes`` to CSV; the caller commits them to memory only on success."""
        path = self.config.csv_path
        if path is None:
            return
        df = pd.DataFrame(list(recipes.values()), columns=RECORD_COLUMNS)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(path, index=False)
        except OSError as exc:
            logger.warning("Failed to save recipes to %s", path, exc_info=True)
            raise CatalogUnavailable(f"Could not write recipes to {path}") from exc

    # ── Queries ──────────────────────────────────────────────────────────

    def _owned(self, user_id: int, recipe_id: int) -> dict[str, Any]:
        self._load()
        record = self._recipes.get(recipe_id)
        if record is None or record["user_id"] != user_id:
            raise RecipeNotFound(recipe_id)
        return record

    def get_recipe(self, user_id: int, recipe_id: int) -> dict[str, Any]:
        return dict(self._owned(user_id, recipe_id))

    def list_recipes(self, user_id: int, search: str | None = None) -> list[dict[str, Any]]:
        """Return the user's recipes newest first, optionally substring-filtered."""
        self._load()
        records = [r for r in self._recipes.values() if r["user_id"] == user_id]
        if search and search.strip():
            needle = search.strip().lower()
            records = [
                r for r in records
                if any(needle in r[col].lower() for col in _SEARCH_COLUMNS)
            ]
        records.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [dict(r) for r in records]

    def fetch_recipes(self, user_id: int, difficulty: str | None = None) -> list[dict[str, Any]]:
        """Catalog provider: every recipe of ``user_id``, optionally one difficulty only."""
        self._load()
        return [
            dict(r)
            for r in self._recipes.values()
            if r["user_id"] == user_id and (difficulty is None or r["difficulty"] == difficulty)
        ]

    # ── Mutations ────────────────────────────────────────────────────────

    def create_recipe(self, user_id: int, data: RecipeIn) -> dict[str, Any]:
        self._load()
        record = _normalize_record({
            **data.model_dump(mode="json"),
            "id": self._next_id,
            "user_id": user_id,
            "created_at": time.time(),
        })
        self._commit({**self._recipes, record["id"]: record})
        self._next_id += 1
        logger.info("Created recipe %s for user %s", record["id"], user_id)
        return dict(record)

    def update_recipe(self, user_id: int, recipe_id: int, data: RecipeIn) -> dict[str, Any]:
        record = {**self._owned(user_id, recipe_id), **data.model_dump(mode="json")}
        self._commit({**self._recipes, recipe_id: record})
        return dict(record)

    def delete_recipe(self, user_id: int, recipe_id: int) -> None:
        self._owned(user_id, recipe_id)
        self._commit({rid: r for rid, r in self._recipes.items() if rid != recipe_id})

    def _commit(self, recipes: dict[int, dict[str, Any]]) -> None:
        # Memory only changes once the CSV write went through
        self._save(recipes)
        self._recipes = recipes

    def clear(self) -> None:
        self._recipes.clear()
        self._next_id = 1
        self._loaded = True


_store: RecipeStore | None = None


def get_store() -> RecipeStore:
    """Return the process-wide recipe store, creating it on first call."""
    global _store
    if _store is None:
        _store = RecipeStore()
    return _store


def clear_recipes() -> None:
    get_store().clear()
