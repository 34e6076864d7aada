"""SQLite-backed pantry storage."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterable
from datetime import date, timedelta
from pathlib import Path

from ..models import FoodItem, NewFoodItem, NewRecipe, Recipe
from .base import PantryStorage
from .schema import ensure_schema


def _row_to_food_item(row: sqlite3.Row) -> FoodItem:
    return FoodItem(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        quantity=row["quantity"],
        unit=row["unit"],
        expiration_date=date.fromisoformat(row["expiration_date"]),
        notes=row["notes"],
    )


def _row_to_recipe(row: sqlite3.Row) -> Recipe:
    return Recipe(
        id=row["id"],
        name=row["name"],
        ingredients=json.loads(row["ingredients_json"]),
        instructions=row["instructions"],
        image_url=row["image_url"],
    )


class SQLiteStorage(PantryStorage):
    """Manages the food_items and recipes tables."""

    def __init__(self, db_path: str | Path = "~/.config/pantry/pantry.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def list_food_items(self) -> list[FoodItem]:
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM food_items ORDER BY expiration_date, id"
        ).fetchall()
        return [_row_to_food_item(r) for r in rows]

    def get_food_item(self, item_id: int) -> FoodItem | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM food_items WHERE id = ?", (item_id,)
        ).fetchone()
        return _row_to_food_item(row) if row else None

    def create_food_item(self, item: NewFoodItem) -> FoodItem:
        return self.create_food_items([item])[0]

    def create_food_items(self, items: Iterable[NewFoodItem]) -> list[FoodItem]:
        """Insert several items in one transaction."""
        conn = self._get_conn()
        stored: list[FoodItem] = []
        with conn:
            for item in items:
                cur = conn.execute(
                    """INSERT INTO food_items
                       (name, category, quantity, unit, expiration_date, notes)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (
                        item.name,
                        item.category,
                        item.quantity,
                        item.unit,
                        item.expiration_date.isoformat(),
                        item.notes,
                    ),
                )
                stored.append(FoodItem.from_new(cur.lastrowid, item))
        return stored

    def update_food_item(self, item_id: int, **changes) -> FoodItem | None:
        existing = self.get_food_item(item_id)
        if existing is None:
            return None
        updated = existing.updated(**changes)

        conn = self._get_conn()
        conn.execute(
            """UPDATE food_items
               SET name = ?, category = ?, quantity = ?, unit = ?,
                   expiration_date = ?, notes = ?,
                   updated_at = datetime('now', 'localtime')
               WHERE id = ?""",
            (
                updated.name,
                updated.category,
                updated.quantity,
                updated.unit,
                updated.expiration_date.isoformat(),
                updated.notes,
                item_id,
            ),
        )
        conn.commit()
        return updated

    def delete_food_item(self, item_id: int) -> bool:
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM food_items WHERE id = ?", (item_id,))
        conn.commit()
        return cur.rowcount > 0

    def get_expiring(self, days: int = 3, today: date | None = None) -> list[FoodItem]:
        conn = self._get_conn()
        cutoff = (today or date.today()) + timedelta(days=days)
        rows = conn.execute(
            """SELECT * FROM food_items
               WHERE expiration_date <= ?
               ORDER BY expiration_date, id""",
            (cutoff.isoformat(),),
        ).fetchall()
        return [_row_to_food_item(r) for r in rows]

    def list_recipes(self) -> list[Recipe]:
        conn = self._get_conn()
        rows = conn.execute("SELECT * FROM recipes ORDER BY id").fetchall()
        return [_row_to_recipe(r) for r in rows]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
        return _row_to_recipe(row) if row else None

    def create_recipe(self, recipe: NewRecipe) -> Recipe:
        conn = self._get_conn()
        cur = conn.execute(
            """INSERT INTO recipes (name, ingredients_json, instructions, image_url)
               VALUES (?, ?, ?, ?)""",
            (
                recipe.name,
                json.dumps(recipe.ingredients, ensure_ascii=False),
                recipe.instructions,
                recipe.image_url,
            ),
        )
        conn.commit()
        return Recipe.from_new(cur.lastrowid, recipe)
