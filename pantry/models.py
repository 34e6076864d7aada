"""Data models for pantry food items and recipes."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date

from .errors import ValidationError

FOOD_CATEGORIES: tuple[str, ...] = (
    "produce",
    "dairy",
    "meat",
    "pantry",
    "frozen",
    "beverages",
    "other",
)


@dataclass
class NewFoodItem:
    """A food item that has not been stored yet."""

    name: str
    category: str
    quantity: float
    unit: str
    expiration_date: date
    notes: str | None = None

    def __post_init__(self) -> None:
        self.name = self.name.strip() if isinstance(self.name, str) else self.name
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("name", "must be a non-empty string")
        if self.category not in FOOD_CATEGORIES:
            raise ValidationError(
                "category",
                f"{self.category!r} is not one of {', '.join(FOOD_CATEGORIES)}",
            )
        if isinstance(self.quantity, bool) or not isinstance(
            self.quantity, (int, float)
        ):
            raise ValidationError("quantity", "must be a number")
        if self.quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero")
        if not isinstance(self.unit, str) or not self.unit.strip():
            raise ValidationError("unit", "must be a non-empty string")
        if not isinstance(self.expiration_date, date):
            raise ValidationError("expiration_date", "must be a date")


@dataclass
class FoodItem(NewFoodItem):
    """A stored food item with an identity assigned by storage."""

    id: int = 0

    @classmethod
    def from_new(cls, item_id: int, item: NewFoodItem) -> FoodItem:
        values = {f.name: getattr(item, f.name) for f in fields(NewFoodItem)}
        return cls(id=item_id, **values)

    def updated(self, **changes) -> FoodItem:
        """Return a copy with ``changes`` applied and re-validated."""
        unknown = set(changes) - {f.name for f in fields(NewFoodItem)}
        if unknown:
            raise ValidationError(
                sorted(unknown)[0], "is not an updatable food item field"
            )
        return replace(self, **changes)

    def days_until_expiry(self, today: date) -> int:
        return (self.expiration_date - today).days

    def freshness(self, today: date) -> str:
        """Bucket the item as expired, expiring soon (3d), use soon (7d) or fresh."""
        days = self.days_until_expiry(today)
        if days < 0:
            return "expired"
        if days <= 3:
            return "expiring soon"
        if days <= 7:
            return "use soon"
        return "fresh"


@dataclass
class NewRecipe:
    """A recipe that has not been stored yet."""

    name: str
    ingredients: list[str] = field(default_factory=list)
    instructions: str = ""
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("name", "must be a non-empty string")
        self.name = self.name.strip()
        if not self.ingredients:
            raise ValidationError("ingredients", "must list at least one ingredient")
        cleaned = [i.strip() for i in self.ingredients if isinstance(i, str)]
        if len(cleaned) != len(self.ingredients) or not all(cleaned):
            raise ValidationError("ingredients", "must be non-empty strings")
        self.ingredients = cleaned
        if not isinstance(self.instructions, str) or not self.instructions.strip():
            raise ValidationError("instructions", "must be a non-empty string")


@dataclass
class Recipe(NewRecipe):
    """A stored recipe."""

    id: int = 0

    @classmethod
    def from_new(cls, recipe_id: int, recipe: NewRecipe) -> Recipe:
        values = {f.name: getattr(recipe, f.name) for f in fields(NewRecipe)}
        return cls(id=recipe_id, **values)
