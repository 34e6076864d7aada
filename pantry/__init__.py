"""Household pantry tracker with receipt scanning and recipe suggestions."""

from .config import DatabaseConfig, OCRConfig, PantryConfig, ScanConfig, load_config
from .db import MemoryStorage, PantryStorage, SQLiteStorage, create_storage
from .errors import (
    EmptyReceiptError,
    OCRError,
    OCRTimeoutError,
    PantryError,
    ValidationError,
)
from .models import FOOD_CATEGORIES, FoodItem, NewFoodItem, NewRecipe, Recipe
from .ocr import OCREngine, create_engine, open_engine, recognize_text
from .receipt import CandidateItem, ReceiptParser, parse_receipt_text
from .recipes import RecipeSuggestion, suggest_recipes
from .scan import ReceiptScanner, ScanDefaults, ScanResult, add_candidates

__all__ = [
    "CandidateItem",
    "ReceiptParser",
    "parse_receipt_text",
    "OCREngine",
    "create_engine",
    "open_engine",
    "recognize_text",
    "ReceiptScanner",
    "ScanResult",
    "ScanDefaults",
    "add_candidates",
    "PantryStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "create_storage",
    "FoodItem",
    "NewFoodItem",
    "Recipe",
    "NewRecipe",
    "FOOD_CATEGORIES",
    "RecipeSuggestion",
    "suggest_recipes",
    "PantryConfig",
    "OCRConfig",
    "DatabaseConfig",
    "ScanConfig",
    "load_config",
    "PantryError",
    "ValidationError",
    "OCRError",
    "OCRTimeoutError",
    "EmptyReceiptError",
]
