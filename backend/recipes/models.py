from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    main = "Main"
    side = "Side"
    appetizer = "Appetizer"
    snack = "Snack"
    dessert = "Dessert"
    drink = "Drink"


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class RecipeIn(BaseModel):
    name: str = Field(..., max_length=200)
    category: Category = Category.main
    difficulty: Difficulty = Difficulty.easy
    prep_time: int | None = Field(default=0, description="Minutes; negative or missing is stored as 0")
    cook_time: int | None = Field(default=0, description="Minutes; negative or missing is stored as 0")
    ingredients: str = ""
    instructions: str = ""
    tags: str = ""
    image_path: str = ""

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Recipe name is required")
        return value

    @field_validator("ingredients", "instructions", "tags", "image_path")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("prep_time", "cook_time")
    @classmethod
    def _clamp_minutes(cls, value: int | None) -> int:
        if value is None or value < 0:
            return 0
        return value


class RecipeOut(BaseModel):
    id: int
    name: str
    category: Category
    difficulty: Difficulty
    prep_time: int
    cook_time: int
    total_time: int
    ingredients: str = ""
    instructions: str = ""
    tags: str = ""
    image_path: str = ""
    created_at: float | None = None


class RecipeListResponse(BaseModel):
    recipes: list[RecipeOut]
    total: int
