"""
Meal-time planner.

Responsibilities:
- Decode combination filters (``single_Main``, ``Main+Side``, ...) into shapes.
- Enumerate every combination of a user's recipes that fits the shape and
  lands inside the time window around the target.
- Rank by closeness to the target and cap the result list.
"""
