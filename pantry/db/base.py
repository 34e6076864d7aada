"""Storage interface shared by the memory and SQLite backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date, timedelta

from ..models import FoodItem, NewFoodItem, NewRecipe, Recipe


def recipe_uses_any(recipe: Recipe, ingredients: Iterable[str]) -> bool:
    """True if any wanted ingredient appears inside one of the recipe's ingredients."""
    wanted = [i.lower() for i in ingredients if i]
    return any(
        want in have.lower() for want in wanted for have in recipe.ingredients
    )


class PantryStorage(ABC):
    """Food item and recipe persistence.

    Instances are created by :func:`pantry.db.create_storage` and passed to
    whatever needs them; there is no process-wide storage object.
    """

    # Food items

    @abstractmethod
    def list_food_items(self) -> list[FoodItem]:
        """Return all food items ordered by expiration date, then id."""

    @abstractmethod
    def get_food_item(self, item_id: int) -> FoodItem | None: ...

    @abstractmethod
    def create_food_item(self, item: NewFoodItem) -> FoodItem: ...

    @abstractmethod
    def update_food_item(self, item_id: int, **changes) -> FoodItem | None:
        """Apply ``changes`` to an item.

        Returns the updated item, or None if no item has ``item_id``.

        Raises:
            ValidationError: If the merged item is invalid.
        """

    @abstractmethod
    def delete_food_item(self, item_id: int) -> bool:
        """Delete an item; return False if it did not exist."""

    def create_food_items(self, items: Iterable[NewFoodItem]) -> list[FoodItem]:
        return [self.create_food_item(item) for item in items]

    def get_expiring(self, days: int = 3, today: date | None = None) -> list[FoodItem]:
        """Return items whose expiration date is on or before ``today + days``."""
        cutoff = (today or date.today()) + timedelta(days=days)
        return [i for i in self.list_food_items() if i.expiration_date <= cutoff]

    # Recipes

    @abstractmethod
    def list_recipes(self) -> list[Recipe]: ...

    @abstractmethod
    def get_recipe(self, recipe_id: int) -> Recipe | None: ...

    @abstractmethod
    def create_recipe(self, recipe: NewRecipe) -> Recipe: ...

    def recipes_by_ingredients(self, ingredients: Iterable[str]) -> list[Recipe]:
        """Return recipes using any of ``ingredients`` (case-insensitive substring)."""
        wanted = list(ingredients)
        return [r for r in self.list_recipes() if recipe_uses_any(r, wanted)]

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> PantryStorage:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
