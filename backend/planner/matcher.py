from __future__ import annotations

from collections import defaultdict
from itertools import product
from typing import Iterable, Iterator, Sequence

from ..errors import InvalidTarget
from ..recipes.models import Category, RecipeOut
from .config import DEFAULT_PLANNER_CONFIG
from .models import MatchResult
from .shapes import Shape, parse_shape


def time_window(target_minutes: float, tolerance_minutes: float) -> tuple[float, float]:
    """Return the inclusive ``(low, high)`` window around the target."""
    if target_minutes is None or target_minutes <= 0:
        raise InvalidTarget(f"Target time must be positive, got {target_minutes!r}")
    if tolerance_minutes is None or tolerance_minutes < 0:
        raise InvalidTarget(f"Tolerance must not be negative, got {tolerance_minutes!r}")
    return target_minutes - tolerance_minutes, target_minutes + tolerance_minutes


def _bucket_by_category(recipes: Iterable[RecipeOut]) -> dict[Category, list[RecipeOut]]:
    buckets: dict[Category, list[RecipeOut]] = defaultdict(list)
    for recipe in recipes:
        buckets[recipe.category].append(recipe)
    return buckets


def enumerate_combinations(
    recipes: Sequence[RecipeOut],
    shape: Shape,
    low: float,
    high: float,
) -> Iterator[MatchResult]:
    """
    Yield every combination filling ``shape`` whose summed time is in ``[low, high]``.

    Each role is scanned independently, so when two roles share a category
    both orderings of a pair are produced. The only exclusion is a recipe
    appearing twice in the same combination.
    """
    buckets = _bucket_by_category(recipes)
    candidates = [buckets.get(role, []) for role in shape.roles]

    for combo in product(*candidates):
        ids = {r.id for r in combo}
        if len(ids) != len(combo):
            continue
        total = sum(r.total_time for r in combo)
        if low <= total <= high:
            yield MatchResult(
                recipes=list(combo),
                total_time=total,
                combination_size=shape.size,
                shape_label=shape.label,
            )


def rank_combinations(matches: Iterable[MatchResult], target_minutes: float) -> list[MatchResult]:
    """Closest to the target first; equal distances keep encounter order."""
    return sorted(matches, key=lambda m: abs(m.total_time - target_minutes))


def match_combinations(
    recipes: Sequence[RecipeOut],
    target_minutes: float,
    shape: Shape | str,
    tolerance_minutes: float = DEFAULT_PLANNER_CONFIG.default_tolerance,
) -> list[MatchResult]:
    """
    Every recipe combination matching ``shape``, ranked but not truncated.

    A shape string that does not parse raises ``InvalidShape``; a
    non-positive target or negative tolerance raises ``InvalidTarget``.
    """
    if isinstance(shape, str):
        shape = parse_shape(shape)
    low, high = time_window(target_minutes, tolerance_minutes)

    if not recipes:
        return []

    return rank_combinations(enumerate_combinations(recipes, shape, low, high), target_minutes)


def find_combinations(
    recipes: Sequence[RecipeOut],
    target_minutes: float,
    shape: Shape | str,
    tolerance_minutes: float = DEFAULT_PLANNER_CONFIG.default_tolerance,
    max_results: int = DEFAULT_PLANNER_CONFIG.max_results,
) -> list[MatchResult]:
    """
    Find, rank and truncate the recipe combinations matching ``shape``.

    An empty catalog or a window nothing falls into gives an empty list.
    """
    return match_combinations(recipes, target_minutes, shape, tolerance_minutes)[:max_results]
