from __future__ import annotations


class MealPlannerError(Exception):
    pass


class CatalogUnavailable(MealPlannerError):
    """The recipe store could not be read."""


class InvalidShape(MealPlannerError):
    """A combination filter that does not decode to 1, 2 or 3 categories."""

    def __init__(self, shape: str, reason: str = "") -> None:
        self.shape = shape
        self.reason = reason
        message = f"Unrecognised meal combination {shape!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidTarget(MealPlannerError):
    pass


class RegistrationError(MealPlannerError):
    pass


class RecipeNotFound(MealPlannerError):
    def __init__(self, recipe_id: int) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} not found")
