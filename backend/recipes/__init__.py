"""
Per-user recipe catalog.

Responsibilities:
- Store recipes for each user (create, update, delete, free-text search).
- Optionally persist the store to a CSV file between restarts.
- Build the read-only catalog view consumed by the meal planner, with the
  derived ``total_time`` recomputed on every load.
"""
