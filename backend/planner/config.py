from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class PlannerConfig:
    default_tolerance: int = int(os.getenv("PLANNER_DEFAULT_TOLERANCE", "10"))
    max_results: int = int(os.getenv("PLANNER_MAX_RESULTS", "50"))


DEFAULT_PLANNER_CONFIG = PlannerConfig()
