from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidShape
from ..recipes.models import Category

SINGLE_PREFIX = "single_"
SEPARATOR = "+"

_KINDS = {1: "Single", 2: "Pairing", 3: "Set"}
_CATEGORIES = {c.value: c for c in Category}

# Combinations offered to users, grouped by size
SINGLE_SHAPES: list[str] = [f"{SINGLE_PREFIX}{c.value}" for c in Category]
PAIRING_SHAPES: list[str] = [
    "Main+Side",
    "Main+Appetizer",
    "Main+Drink",
    "Main+Dessert",
    "Snack+Drink",
    "Dessert+Drink",
]
SET_SHAPES: list[str] = [
    "Appetizer+Main+Side",
    "Main+Side+Drink",
    "Main+Side+Dessert",
    "Appetizer+Main+Dessert",
    "Main+Drink+Dessert",
    "Snack+Drink+Dessert",
]


@dataclass(frozen=True)
class Shape:
    """An ordered pattern of one to three category roles."""

    roles: tuple[Category, ...]

    @property
    def size(self) -> int:
        return len(self.roles)

    @property
    def kind(self) -> str:
        return _KINDS[self.size]

    @property
    def code(self) -> str:
        if self.size == 1:
            return f"{SINGLE_PREFIX}{self.roles[0].value}"
        return SEPARATOR.join(c.value for c in self.roles)

    @property
    def label(self) -> str:
        if self.size == 1:
            return f"Single: {self.roles[0].value}"
        return f"{self.kind}: {self.code}"


def _category(raw: str, part: str) -> Category:
    try:
        return _CATEGORIES[part]
    except KeyError:
        raise InvalidShape(raw, f"unknown category {part!r}") from None


def parse_shape(raw: str) -> Shape:
    """
    Decode a combination filter string.

    Accepted forms are ``single_<Category>``, ``<A>+<B>`` and
    ``<A>+<B>+<C>``. Anything else raises :class:`InvalidShape`.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidShape(str(raw), "no combination selected")

    if raw.startswith(SINGLE_PREFIX):
        return Shape(roles=(_category(raw, raw[len(SINGLE_PREFIX):]),))

    parts = raw.split(SEPARATOR)
    if len(parts) not in (2, 3):
        raise InvalidShape(raw, "expected single_<Category> or 2-3 categories joined by '+'")
    return Shape(roles=tuple(_category(raw, p) for p in parts))


def preset_shapes() -> dict[str, list[str]]:
    return {
        "single": list(SINGLE_SHAPES),
        "pairing": list(PAIRING_SHAPES),
        "set": list(SET_SHAPES),
    }
