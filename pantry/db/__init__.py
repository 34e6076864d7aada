"""Pantry storage backends and factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import PantryStorage
from .memory import MemoryStorage
from .schema import ensure_schema
from .sqlite import SQLiteStorage

if TYPE_CHECKING:
    from ..config import PantryConfig

__all__ = [
    "PantryStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "create_storage",
    "ensure_schema",
]


def create_storage(config: PantryConfig) -> PantryStorage:
    """Create a storage backend based on configuration."""
    backend_name = config.database.backend

    match backend_name:
        case "memory":
            return MemoryStorage()
        case "sqlite":
            return SQLiteStorage(db_path=config.database.path)
        case _:
            raise ValueError(
                f"Unknown database backend: {backend_name!r} "
                f"(choose from memory / sqlite)"
            )
