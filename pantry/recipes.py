"""Recipe suggestions based on what is currently in the pantry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .db import PantryStorage
from .models import FoodItem, Recipe


@dataclass
class RecipeSuggestion:
    """A recipe with its ingredients split by pantry availability."""

    recipe: Recipe
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    soonest_expiry: date | None = None

    @property
    def coverage(self) -> float:
        total = len(self.matched) + len(self.missing)
        return len(self.matched) / total if total else 0.0

    def display(self) -> str:
        total = len(self.matched) + len(self.missing)
        lines = [f"{self.recipe.name} ({len(self.matched)}/{total} in pantry)"]
        for name in self.matched:
            lines.append(f"  ✓ {name}")
        for name in self.missing:
            lines.append(f"    {name} (to buy)")
        return "\n".join(lines)


def ingredient_matches(recipe_ingredient: str, pantry_name: str) -> bool:
    """Case-insensitive substring match in either direction.

    "Chicken" matches "chicken thighs" and "Chicken thighs" matches "chicken".
    """
    a = recipe_ingredient.strip().lower()
    b = pantry_name.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def annotate_recipe(
    recipe: Recipe, pantry_items: list[FoodItem]
) -> RecipeSuggestion:
    """Split a recipe's ingredients into those on hand and those to buy."""
    suggestion = RecipeSuggestion(recipe=recipe)
    for ingredient in recipe.ingredients:
        on_hand = [i for i in pantry_items if ingredient_matches(ingredient, i.name)]
        if not on_hand:
            suggestion.missing.append(ingredient)
            continue
        suggestion.matched.append(ingredient)
        expiry = min(i.expiration_date for i in on_hand)
        if suggestion.soonest_expiry is None or expiry < suggestion.soonest_expiry:
            suggestion.soonest_expiry = expiry
    return suggestion


def suggest_recipes(
    storage: PantryStorage, today: date | None = None, limit: int | None = None
) -> list[RecipeSuggestion]:
    """Rank stored recipes by how well the pantry covers them.

    Expired items are ignored. Recipes with no ingredient on hand are left
    out. Ordering: most matched ingredients first, then the recipe that uses
    the soonest-expiring item, then recipe id.
    """
    today = today or date.today()
    pantry_items = [
        i for i in storage.list_food_items() if i.expiration_date >= today
    ]
    if not pantry_items:
        return []

    suggestions = [
        s
        for s in (annotate_recipe(r, pantry_items) for r in storage.list_recipes())
        if s.matched
    ]
    suggestions.sort(
        key=lambda s: (-len(s.matched), s.soonest_expiry or date.max, s.recipe.id)
    )
    if limit is not None:
        suggestions = suggestions[:limit]
    return suggestions
