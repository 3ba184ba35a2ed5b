from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "meal_plan_search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top shapes
    shape_counter: Counter[str] = Counter()
    for s in searches:
        shape_counter[s.get("shape", "unknown")] += 1
    top_shapes = [{"name": n, "count": c} for n, c in shape_counter.most_common(10)]

    # Searches per combination size
    size_counter: Counter[int] = Counter(s.get("combination_size", 0) for s in searches)
    size_usage = {str(k): v for k, v in sorted(size_counter.items())}

    # Difficulty filter usage
    difficulty_counter: Counter[str] = Counter(
        s.get("difficulty", "any") for s in searches if s.get("difficulty", "any") != "any"
    )
    filtered = sum(difficulty_counter.values())

    # Outcome rates
    empty = sum(1 for s in searches if s.get("results_returned", 0) == 0)
    unavailable = sum(1 for s in searches if s.get("catalog_available") is False)
    returned = [s.get("results_returned", 0) for s in searches]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_shapes": top_shapes,
        "combination_size_usage": size_usage,
        "difficulty_filter": {
            "usage_rate": round(filtered / total * 100, 1) if total else 0.0,
            "counts": dict(difficulty_counter),
        },
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "catalog_unavailable": unavailable,
        "avg_results_returned": round(sum(returned) / total, 1) if total else 0.0,
    }
