"""CLI entry point for the pantry tracker."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from .config import load_config
from .db import PantryStorage, create_storage
from .errors import PantryError
from .models import FOOD_CATEGORIES, FoodItem, NewFoodItem, NewRecipe
from .ocr import open_engine
from .receipt import CandidateItem, parse_receipt_text
from .recipes import suggest_recipes
from .scan import ReceiptScanner, ScanDefaults, add_candidates

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pantry",
        description="Household food inventory: track expiration dates, "
        "scan receipts, and find recipes for what you have",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # scan
    scan_parser = sub.add_parser("scan", help="Scan a receipt image for items")
    scan_parser.add_argument("image", type=str, help="Receipt image file")
    scan_parser.add_argument(
        "--add", action="store_true", help="Add every found item to the pantry"
    )
    scan_parser.add_argument(
        "--pick", type=str, default=None, metavar="N,N,...",
        help="Add only the listed items (1-based, comma separated)",
    )
    scan_parser.add_argument(
        "--show-text", action="store_true", help="Print the recognized text"
    )
    scan_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # parse
    parse_parser = sub.add_parser(
        "parse", help="Parse already recognized receipt text (file or stdin)"
    )
    parse_parser.add_argument(
        "file", type=str, nargs="?", default="-", help="Text file, '-' for stdin"
    )
    parse_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # items
    items_parser = sub.add_parser("items", help="List pantry items")
    items_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # add
    add_parser = sub.add_parser("add", help="Add a pantry item")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument("--quantity", "-q", type=float, default=1.0)
    add_parser.add_argument("--unit", "-u", type=str, default="piece")
    add_parser.add_argument(
        "--category", choices=FOOD_CATEGORIES, default="other"
    )
    add_parser.add_argument(
        "--expires", type=date.fromisoformat, required=True,
        metavar="YYYY-MM-DD", help="Expiration date",
    )
    add_parser.add_argument("--notes", type=str, default=None)

    # update
    update_parser = sub.add_parser("update", help="Change fields of a pantry item")
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("--name", type=str)
    update_parser.add_argument("--quantity", "-q", type=float)
    update_parser.add_argument("--unit", "-u", type=str)
    update_parser.add_argument("--category", choices=FOOD_CATEGORIES)
    update_parser.add_argument(
        "--expires", type=date.fromisoformat, metavar="YYYY-MM-DD",
        dest="expiration_date",
    )
    update_parser.add_argument("--notes", type=str)

    # remove
    remove_parser = sub.add_parser("remove", help="Remove a pantry item")
    remove_parser.add_argument("id", type=int)

    # expiring
    expiring_parser = sub.add_parser("expiring", help="List items expiring soon")
    expiring_parser.add_argument("--days", type=int, default=7)

    # recipes
    recipes_parser = sub.add_parser("recipes", help="List recipes")
    recipes_parser.add_argument(
        "--ingredient", "-i", action="append", default=None,
        help="Only recipes using this ingredient (repeatable)",
    )
    recipes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # add-recipe
    add_recipe_parser = sub.add_parser("add-recipe", help="Store a recipe")
    add_recipe_parser.add_argument("name", type=str)
    add_recipe_parser.add_argument(
        "--ingredient", "-i", action="append", required=True, dest="ingredients",
        help="Ingredient (repeatable)",
    )
    add_recipe_parser.add_argument("--instructions", type=str, required=True)
    add_recipe_parser.add_argument("--image-url", type=str, default=None)

    # suggest
    suggest_parser = sub.add_parser(
        "suggest", help="Suggest recipes for what is in the pantry"
    )
    suggest_parser.add_argument("--limit", type=int, default=5)
    suggest_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    logger.debug("Using %s storage, %s OCR", config.database.backend, config.ocr.backend)

    try:
        if args.command == "parse":
            _cmd_parse(args)
            return

        with create_storage(config) as storage:
            match args.command:
                case "scan":
                    asyncio.run(_cmd_scan(config, storage, args))
                case "items":
                    _cmd_items(storage, args)
                case "add":
                    _cmd_add(storage, args)
                case "update":
                    _cmd_update(storage, args)
                case "remove":
                    _cmd_remove(storage, args)
                case "expiring":
                    _cmd_expiring(storage, args)
                case "recipes":
                    _cmd_recipes(storage, args)
                case "add-recipe":
                    _cmd_add_recipe(storage, args)
                case "suggest":
                    _cmd_suggest(storage, args)
    except (PantryError, ImportError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _candidate_dict(item: CandidateItem) -> dict:
    return {"name": item.name, "quantity": item.quantity, "unit": item.unit}


def _item_dict(item: FoodItem) -> dict:
    data = asdict(item)
    data["expiration_date"] = item.expiration_date.isoformat()
    return data


def _print_candidates(candidates: list[CandidateItem]) -> None:
    print(f"Found {len(candidates)} potential item(s):")
    for n, item in enumerate(candidates, start=1):
        print(f"  {n:>2}. {item.display()}")


def _print_items(items: list[FoodItem], today: date) -> None:
    for item in items:
        days = item.days_until_expiry(today)
        if days < 0:
            status = f"expired {-days}d ago"
        elif days == 0:
            status = "expires today"
        else:
            status = f"{days}d left"
        print(
            f"  [{item.id:>3}] {item.name:<20} {item.quantity:g} {item.unit:<6} "
            f"{item.category:<9} {item.expiration_date.isoformat()} "
            f"({status}) {item.freshness(today)}"
        )


def _parse_pick(pick: str, count: int) -> list[int]:
    indices: list[int] = []
    for part in pick.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            n = int(part)
        except ValueError:
            raise PantryError(f"Invalid item number: {part!r}") from None
        if not 1 <= n <= count:
            raise PantryError(f"Item number out of range: {n} (1-{count})")
        indices.append(n - 1)
    return indices


async def _cmd_scan(config, storage: PantryStorage, args) -> None:
    image = Path(args.image).read_bytes()

    async with open_engine(config) as engine:
        scanner = ReceiptScanner(engine, timeout=config.ocr.timeout)
        print("Scanning receipt... this may take a few moments.", file=sys.stderr)
        result = await scanner.scan(image)

    if args.show_text:
        print(result.text)

    candidates = result.candidates
    if args.json:
        print(json.dumps([_candidate_dict(c) for c in candidates], indent=2))
    elif not candidates:
        print("No items found. Add items manually with 'pantry add'.")
        return
    else:
        _print_candidates(candidates)

    if args.pick:
        candidates = [candidates[i] for i in _parse_pick(args.pick, len(candidates))]
    elif not args.add:
        return

    stored = add_candidates(
        storage, candidates, defaults=ScanDefaults.from_config(config.scan)
    )
    print(f"Added {len(stored)} item(s) to the pantry.", file=sys.stderr)


def _cmd_parse(args) -> None:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")

    candidates = parse_receipt_text(text)
    if args.json:
        print(json.dumps([_candidate_dict(c) for c in candidates], indent=2))
    elif not candidates:
        print("No items found.")
    else:
        _print_candidates(candidates)


def _cmd_items(storage: PantryStorage, args) -> None:
    items = storage.list_food_items()
    if args.json:
        print(json.dumps([_item_dict(i) for i in items], indent=2))
        return
    if not items:
        print("The pantry is empty.")
        return
    print(f"Pantry items: {len(items)}")
    _print_items(items, date.today())


def _cmd_add(storage: PantryStorage, args) -> None:
    item = storage.create_food_item(
        NewFoodItem(
            name=args.name,
            category=args.category,
            quantity=args.quantity,
            unit=args.unit,
            expiration_date=args.expires,
            notes=args.notes,
        )
    )
    print(f"Added [{item.id}] {item.name}")


def _cmd_update(storage: PantryStorage, args) -> None:
    fields = ("name", "quantity", "unit", "category", "expiration_date", "notes")
    changes = {f: getattr(args, f) for f in fields if getattr(args, f) is not None}
    if not changes:
        print("Nothing to update.", file=sys.stderr)
        sys.exit(1)

    item = storage.update_food_item(args.id, **changes)
    if item is None:
        print(f"Food item not found: {args.id}", file=sys.stderr)
        sys.exit(1)
    print(f"Updated [{item.id}] {item.name}")


def _cmd_remove(storage: PantryStorage, args) -> None:
    if not storage.delete_food_item(args.id):
        print(f"Food item not found: {args.id}", file=sys.stderr)
        sys.exit(1)
    print(f"Removed [{args.id}]")


def _cmd_expiring(storage: PantryStorage, args) -> None:
    today = date.today()
    items = storage.get_expiring(days=args.days, today=today)
    if not items:
        print(f"Nothing expires within {args.days} day(s).")
        return
    print(f"Expiring within {args.days} day(s): {len(items)}")
    _print_items(items, today)


def _cmd_recipes(storage: PantryStorage, args) -> None:
    if args.ingredient:
        recipes = storage.recipes_by_ingredients(args.ingredient)
    else:
        recipes = storage.list_recipes()

    if args.json:
        print(json.dumps([asdict(r) for r in recipes], ensure_ascii=False, indent=2))
        return
    if not recipes:
        print("No recipes found.")
        return
    for r in recipes:
        print(f"  [{r.id:>3}] {r.name}: {', '.join(r.ingredients)}")


def _cmd_add_recipe(storage: PantryStorage, args) -> None:
    recipe = storage.create_recipe(
        NewRecipe(
            name=args.name,
            ingredients=args.ingredients,
            instructions=args.instructions,
            image_url=args.image_url,
        )
    )
    print(f"Added recipe [{recipe.id}] {recipe.name}")


def _cmd_suggest(storage: PantryStorage, args) -> None:
    suggestions = suggest_recipes(storage, limit=args.limit)

    if args.json:
        data = [
            {
                "id": s.recipe.id,
                "name": s.recipe.name,
                "matched": s.matched,
                "missing": s.missing,
                "coverage": round(s.coverage, 2),
            }
            for s in suggestions
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not suggestions:
        print("No recipes match what is in the pantry.")
        return
    for s in suggestions:
        print(s.display())
        print()
