"""In-memory pantry storage."""

from __future__ import annotations

from ..models import FoodItem, NewFoodItem, NewRecipe, Recipe
from .base import PantryStorage


class MemoryStorage(PantryStorage):
    """Dict-backed storage; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._food_items: dict[int, FoodItem] = {}
        self._recipes: dict[int, Recipe] = {}
        self._next_food_id = 1
        self._next_recipe_id = 1

    def list_food_items(self) -> list[FoodItem]:
        return sorted(
            self._food_items.values(), key=lambda i: (i.expiration_date, i.id)
        )

    def get_food_item(self, item_id: int) -> FoodItem | None:
        return self._food_items.get(item_id)

    def create_food_item(self, item: NewFoodItem) -> FoodItem:
        stored = FoodItem.from_new(self._next_food_id, item)
        self._food_items[stored.id] = stored
        self._next_food_id += 1
        return stored

    def update_food_item(self, item_id: int, **changes) -> FoodItem | None:
        existing = self._food_items.get(item_id)
        if existing is None:
            return None
        updated = existing.updated(**changes)
        self._food_items[item_id] = updated
        return updated

    def delete_food_item(self, item_id: int) -> bool:
        return self._food_items.pop(item_id, None) is not None

    def list_recipes(self) -> list[Recipe]:
        return list(self._recipes.values())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        return self._recipes.get(recipe_id)

    def create_recipe(self, recipe: NewRecipe) -> Recipe:
        stored = Recipe.from_new(self._next_recipe_id, recipe)
        self._recipes[stored.id] = stored
        self._next_recipe_id += 1
        return stored
