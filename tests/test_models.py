"""Tests for pantry food item and recipe models."""

from datetime import date

import pytest

from pantry.errors import ValidationError
from pantry.models import FOOD_CATEGORIES, FoodItem, NewFoodItem, NewRecipe, Recipe


def _new_item(**overrides):
    values = dict(
        name="Milk",
        category="dairy",
        quantity=1.0,
        unit="ea",
        expiration_date=date(2025, 3, 1),
    )
    values.update(overrides)
    return NewFoodItem(**values)


class TestNewFoodItem:
    def test_valid_item(self):
        item = _new_item(name="  Milk ")
        assert item.name == "Milk"
        assert item.notes is None

    def test_categories(self):
        assert FOOD_CATEGORIES == (
            "produce", "dairy", "meat", "pantry", "frozen", "beverages", "other",
        )

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", "   "),
            ("category", "snacks"),
            ("quantity", 0),
            ("quantity", -2),
            ("quantity", "3"),
            ("quantity", True),
            ("unit", ""),
            ("expiration_date", "2025-03-01"),
        ],
    )
    def test_invalid_fields(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            _new_item(**{field: value})
        assert exc_info.value.field == field

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError, match="category"):
            _new_item(category="candy")


class TestFoodItem:
    def test_from_new(self):
        item = FoodItem.from_new(7, _new_item(notes="top shelf"))
        assert item.id == 7
        assert item.name == "Milk"
        assert item.notes == "top shelf"

    def test_updated_returns_copy(self):
        item = FoodItem.from_new(1, _new_item())
        changed = item.updated(quantity=2.5, notes="opened")
        assert changed.quantity == 2.5
        assert changed.notes == "opened"
        assert changed.id == 1
        assert item.quantity == 1.0

    def test_updated_validates(self):
        item = FoodItem.from_new(1, _new_item())
        with pytest.raises(ValidationError):
            item.updated(quantity=0)

    def test_updated_rejects_unknown_field(self):
        item = FoodItem.from_new(1, _new_item())
        with pytest.raises(ValidationError, match="id"):
            item.updated(id=5)

    def test_days_until_expiry(self):
        item = FoodItem.from_new(1, _new_item(expiration_date=date(2025, 3, 10)))
        assert item.days_until_expiry(date(2025, 3, 7)) == 3
        assert item.days_until_expiry(date(2025, 3, 12)) == -2

    @pytest.mark.parametrize(
        "today,label",
        [
            (date(2025, 3, 11), "expired"),
            (date(2025, 3, 10), "expiring soon"),
            (date(2025, 3, 7), "expiring soon"),
            (date(2025, 3, 6), "use soon"),
            (date(2025, 3, 3), "use soon"),
            (date(2025, 3, 2), "fresh"),
        ],
    )
    def test_freshness(self, today, label):
        item = FoodItem.from_new(1, _new_item(expiration_date=date(2025, 3, 10)))
        assert item.freshness(today) == label


class TestRecipe:
    def test_valid_recipe(self):
        recipe = NewRecipe(
            name=" Pancakes ",
            ingredients=[" flour", "milk ", "eggs"],
            instructions="Mix and fry.",
        )
        assert recipe.name == "Pancakes"
        assert recipe.ingredients == ["flour", "milk", "eggs"]
        assert recipe.image_url is None

    def test_requires_ingredients(self):
        with pytest.raises(ValidationError, match="ingredients"):
            NewRecipe(name="Air", ingredients=[], instructions="Breathe.")

    def test_rejects_blank_ingredient(self):
        with pytest.raises(ValidationError, match="ingredients"):
            NewRecipe(name="Soup", ingredients=["water", " "], instructions="Boil.")

    def test_requires_instructions(self):
        with pytest.raises(ValidationError, match="instructions"):
            NewRecipe(name="Toast", ingredients=["bread"], instructions="")

    def test_from_new(self):
        recipe = Recipe.from_new(
            3, NewRecipe(name="Toast", ingredients=["bread"], instructions="Toast it.")
        )
        assert recipe.id == 3
        assert recipe.ingredients == ["bread"]
