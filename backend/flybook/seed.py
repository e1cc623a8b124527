"""
Load JSON documents into a read-only catalog collection.

Usage:
    python -m flybook.seed hotels data/hotels.json
    python -m flybook.seed destinations data/destinations.json --reset

The file holds either a JSON array of objects or a single object. Any "id"
or "_id" keys are dropped; the database assigns identifiers.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Type

from sqlalchemy import delete, func, select

from flybook.config import settings
from flybook.database import database
from flybook.models.catalog import CatalogDocumentMixin, Destination, Hotel, Package

logger = logging.getLogger("flybook.seed")

COLLECTIONS: Dict[str, Type[CatalogDocumentMixin]] = {
    "packages": Package,
    "destinations": Destination,
    "hotels": Hotel,
}


def load_documents(path: Path) -> List[Dict[str, Any]]:
    """Read and normalise the documents in a seed file."""
    with path.open(encoding="utf-8") as fh:
        payload = json.load(fh)

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(doc, dict) for doc in payload):
        raise ValueError(f"{path} must contain a JSON object or an array of objects")

    return [
        {key: value for key, value in doc.items() if key not in ("id", "_id")}
        for doc in payload
    ]


async def seed_collection(
    model: Type[CatalogDocumentMixin],
    documents: List[Dict[str, Any]],
    reset: bool = False,
) -> int:
    """
    Insert documents into the model's table in one transaction.

    Returns the collection size after seeding.
    """
    factory = await database.session_factory()
    async with factory() as session:
        async with session.begin():
            if reset:
                await session.execute(delete(model))
            session.add_all([model(data=doc) for doc in documents])

        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar() or 0


async def _run(args: argparse.Namespace) -> int:
    model = COLLECTIONS[args.collection]
    documents = load_documents(Path(args.file))
    try:
        total = await seed_collection(model, documents, reset=args.reset)
    finally:
        await database.dispose()

    print(f"Inserted {len(documents)} document(s) into {args.collection}")
    print(f"  {args.collection.capitalize()}: {total} total")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load JSON documents into a FlyBook catalog collection")
    parser.add_argument("collection", choices=sorted(COLLECTIONS), help="Target collection")
    parser.add_argument("file", help="Path to a JSON file (object or array of objects)")
    parser.add_argument("--reset", action="store_true", help="Delete existing documents first")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except (OSError, ValueError) as e:
        logger.error("Seeding failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
