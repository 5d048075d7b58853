"""Drop all data owned by a specific user.

Usage:
    python scripts/drop_user_data.py <user_id> [--mongodb-url URL] [--dry-run]
"""
import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings

COLLECTIONS = ["time_log_archives", "time_logs", "projects", "locations"]


async def drop_user_data(mongodb_url: str, user_id: str, dry_run: bool = False):
    """Delete (or count, with dry_run) every document the user created."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[settings.mongodb_db_name]

    for collection_name in COLLECTIONS:
        collection = db[collection_name]
        query = {"created_by": user_id}
        if dry_run:
            count = await collection.count_documents(query)
            print(f"Would delete {count} documents from {collection_name}")
        else:
            result = await collection.delete_many(query)
            print(f"Deleted {result.deleted_count} documents from {collection_name}")

    client.close()
    print("Done!")


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("--mongodb-url", default=settings.mongodb_url)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()

    asyncio.run(drop_user_data(args.mongodb_url, args.user_id, args.dry_run))


if __name__ == "__main__":
    main()
