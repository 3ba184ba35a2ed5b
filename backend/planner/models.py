from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ..recipes.models import Difficulty, RecipeOut
from .config import DEFAULT_PLANNER_CONFIG


class MealPlanRequest(BaseModel):
    target_minutes: float = Field(..., gt=0, description="Available time in minutes")
    tolerance_minutes: float = Field(
        default=DEFAULT_PLANNER_CONFIG.default_tolerance,
        ge=0,
        description="Half-width of the accepted time window",
    )
    shape: str = Field(
        ...,
        description='Combination filter, e.g. "single_Main", "Main+Side" or "Main+Side+Drink"',
    )
    difficulty: Difficulty | Literal["any"] = "any"


class MatchResult(BaseModel):
    recipes: list[RecipeOut]
    total_time: int
    combination_size: Literal[1, 2, 3]
    shape_label: str


class MealPlanResponse(BaseModel):
    results: list[MatchResult]
    total_matches: int = Field(default=0, description="Matches found before the result cap")
    shape_label: str
    target_minutes: float
    tolerance_minutes: float
    window_min: float
    window_max: float
    warnings: list[str] = Field(default_factory=list)
