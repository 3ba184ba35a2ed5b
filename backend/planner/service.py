from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..recipes.catalog import CatalogFetch, load_catalog
from .config import DEFAULT_PLANNER_CONFIG, PlannerConfig
from .matcher import match_combinations, time_window
from .models import MealPlanRequest, MealPlanResponse
from .shapes import parse_shape

logger = logging.getLogger(__name__)


def find_meal_plans(
    user_id: int,
    request: MealPlanRequest,
    fetch: CatalogFetch | None = None,
    config: PlannerConfig = DEFAULT_PLANNER_CONFIG,
) -> MealPlanResponse:
    start_time = time.time()

    # Reject the filter before touching the store
    shape = parse_shape(request.shape)
    low, high = time_window(request.target_minutes, request.tolerance_minutes)

    catalog = load_catalog(user_id, request.difficulty, fetch=fetch)

    matches = match_combinations(
        catalog.recipes,
        request.target_minutes,
        shape,
        tolerance_minutes=request.tolerance_minutes,
    )
    results = matches[:config.max_results]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("meal_plan_search", {
        "user_id": user_id,
        "shape": shape.code,
        "combination_size": shape.size,
        "target_minutes": request.target_minutes,
        "tolerance_minutes": request.tolerance_minutes,
        "difficulty": getattr(request.difficulty, "value", request.difficulty),
        "catalog_size": len(catalog.recipes),
        "total_matches": len(matches),
        "results_returned": len(results),
        "catalog_available": not catalog.warnings,
        "response_time_ms": elapsed_ms,
    })
    logger.info(
        "Meal plan search for user %s: %s around %s min returned %d result(s)",
        user_id, shape.code, request.target_minutes, len(results),
    )

    return MealPlanResponse(
        results=results,
        total_matches=len(matches),
        shape_label=shape.label,
        target_minutes=request.target_minutes,
        tolerance_minutes=request.tolerance_minutes,
        window_min=low,
        window_max=high,
        warnings=catalog.warnings,
    )
