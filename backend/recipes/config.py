from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _csv_path_from_env() -> Path | None:
    raw = os.getenv("RECIPES_CSV", "").strip()
    return Path(raw) if raw else None


@dataclass(frozen=True)
class RecipeStoreConfig:
    """
    Configuration for the recipe store.

    ``csv_path`` of ``None`` keeps recipes in memory only.
    """

    csv_path: Path | None = _csv_path_from_env()


DEFAULT_STORE_CONFIG = RecipeStoreConfig()
