from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import pandas as pd

from ..errors import CatalogUnavailable
from .models import Difficulty, RecipeOut
from .store import get_store

logger = logging.getLogger(__name__)

ANY_DIFFICULTY = "any"

_TEXT_COLUMNS = ("ingredients", "instructions", "tags", "image_path")

CatalogFetch = Callable[[int, "str | None"], list[dict[str, Any]]]


@dataclass(frozen=True)
class CatalogView:
    """Snapshot of one user's recipes, ready for matching."""

    user_id: int
    recipes: list[RecipeOut]
    warnings: list[str] = field(default_factory=list)


def _difficulty_value(difficulty: Difficulty | str | None) -> str | None:
    if difficulty is None:
        return None
    value = difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)
    if value == "" or value.lower() == ANY_DIFFICULTY:
        return None
    return value


def load_catalog(
    user_id: int,
    difficulty: Difficulty | str | None = None,
    fetch: CatalogFetch | None = None,
) -> CatalogView:
    """
    Build the catalog view for ``user_id``.

    ``total_time`` is derived here from prep and cook time on every call.
    If the store cannot be read, an empty view carrying a warning is
    returned instead of raising.
    """
    fetch = fetch or get_store().fetch_recipes
    wanted = _difficulty_value(difficulty)

    try:
        records = fetch(user_id, wanted)
    except CatalogUnavailable:
        logger.warning("Recipe catalog unavailable for user %s", user_id, exc_info=True)
        return CatalogView(
            user_id=user_id,
            recipes=[],
            warnings=["Your recipes could not be loaded right now, so no matches were searched."],
        )

    if not records:
        return CatalogView(user_id=user_id, recipes=[])

    df = pd.DataFrame.from_records(records)
    for col in _TEXT_COLUMNS:
        df[col] = df[col].fillna("").astype(str) if col in df.columns else ""

    # Never let another user's recipes into the view; records without an
    # owner column are already scoped by the provider
    mask = pd.Series(True, index=df.index)
    if "user_id" in df.columns:
        mask = mask & (df["user_id"] == user_id)
    if wanted is not None:
        mask = mask & (df["difficulty"] == wanted)
    df = df.loc[mask].copy()

    df["total_time"] = df["prep_time"] + df["cook_time"]
    df = df.sort_values("total_time", kind="stable")

    recipes = [
        RecipeOut(
            id=int(row["id"]),
            name=row["name"],
            category=row["category"],
            difficulty=row["difficulty"],
            prep_time=int(row["prep_time"]),
            cook_time=int(row["cook_time"]),
            total_time=int(row["total_time"]),
            ingredients=row["ingredients"],
            instructions=row["instructions"],
            tags=row["tags"],
            image_path=row["image_path"],
            created_at=None if pd.isna(row.get("created_at")) else row.get("created_at"),
        )
        for row in df.to_dict(orient="records")
    ]
    return CatalogView(user_id=user_id, recipes=recipes)


def recipe_out(record: dict[str, Any]) -> RecipeOut:
    """Convert a single store record, deriving ``total_time``."""
    return RecipeOut(
        **{k: v for k, v in record.items() if k != "user_id"},
        total_time=int(record["prep_time"]) + int(record["cook_time"]),
    )
