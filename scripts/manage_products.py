"""Create, inspect, update and delete products in the inventory JSON file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from inventory.config import StoreConfig
from inventory.data.records import REQUIRED_FIELDS
from inventory.service import ProductStore, ProductStoreError


def _add_product_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", default="")
    parser.add_argument("--description", default="")
    parser.add_argument("--price", default="", help="Price as entered, e.g. 19.99.")
    parser.add_argument("--thumbnail", default="", help="Image path or URL.")
    parser.add_argument("--code", default="", help="Unique product code.")
    parser.add_argument("--stock", type=int, default=0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Path to the products JSON file (defaults to $PRODUCT_STORE_PATH or productos.json).",
    )
    parser.add_argument("--log-level", default="WARNING")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="Print every product.")
    list_cmd.add_argument("--limit", type=int, default=0)

    get_cmd = commands.add_parser("get", help="Print a single product.")
    get_cmd.add_argument("id", type=int)

    create_cmd = commands.add_parser("create", help="Add a new product.")
    _add_product_fields(create_cmd)

    update_cmd = commands.add_parser("update", help="Replace every field of a product.")
    update_cmd.add_argument("id", type=int)
    _add_product_fields(update_cmd)

    delete_cmd = commands.add_parser("delete", help="Remove a product.")
    delete_cmd.add_argument("id", type=int)
    return parser


def _payload(args: argparse.Namespace) -> Dict[str, object]:
    return {name: getattr(args, name) for name in REQUIRED_FIELDS}


def run(args: argparse.Namespace) -> object:
    store = ProductStore(args.store or StoreConfig.from_env().path)
    if args.command == "list":
        return [asdict(product) for product in store.first(args.limit)]
    if args.command == "get":
        return asdict(store.read_by_id(args.id))
    if args.command == "create":
        return asdict(store.create(_payload(args)))
    if args.command == "update":
        return asdict(store.update(args.id, _payload(args)))
    return asdict(store.delete(args.id))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    try:
        result = run(args)
    except ProductStoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
