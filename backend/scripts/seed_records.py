"""
Seed Records Script

This script loads a JSON record file into the Neo4j database.
Each record becomes one node with its labels and properties.

Usage:
    python -m scripts.seed_records
    python -m scripts.seed_records --file data/records.json --clear --confirm
"""

import argparse
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from propgraph.config import settings
from propgraph.exceptions import StoreError
from propgraph.services.graph_store import GraphStore
from propgraph.services.snapshot import SnapshotStore


def seed(store: GraphStore, snapshot: SnapshotStore) -> tuple[int, int]:
    """
    Create one node per snapshot record.

    Records with invalid labels are skipped.

    Returns:
        Tuple of (created, skipped)
    """
    created = 0
    skipped = 0

    for record in snapshot.load():
        try:
            store.create_record(record)
            created += 1
        except ValueError as e:
            print(f"   ⚠️  Skipping record: {e}")
            skipped += 1

    return created, skipped


def main():
    parser = argparse.ArgumentParser(description="Load JSON records into Neo4j")
    parser.add_argument(
        "--file",
        default=settings.snapshot_path,
        help=f"Record file to load (default: {settings.snapshot_path})"
    )
    parser.add_argument("--clear", action="store_true", help="Delete all data before loading")
    parser.add_argument("--confirm", action="store_true", help="Skip confirmation prompt")
    args = parser.parse_args()

    print("=" * 60)
    print("🌱 PROPGRAPH RECORD SEEDER")
    print("=" * 60)
    print(f"\n📡 Connecting to Neo4j at {settings.neo4j_uri}...")

    try:
        store = GraphStore()
    except StoreError as e:
        print(f"❌ {e}")
        sys.exit(1)

    with store:
        if args.clear:
            print(f"\n   Nodes currently in database: {store.get_node_count():,}")
            if not args.confirm:
                answer = input("⚠️  Delete ALL nodes and relationships? Type 'yes' to continue: ")
                if answer.strip().lower() != "yes":
                    print("\n❌ Aborted.")
                    sys.exit(0)
            store.clear_all()
            print("🗑️  Database cleared")

        snapshot = SnapshotStore(args.file)
        try:
            created, skipped = seed(store, snapshot)
        except StoreError as e:
            print(f"❌ {e}")
            sys.exit(1)

        print(f"\n✅ Created {created:,} nodes ({skipped:,} skipped)")
        print(f"   Nodes in database: {store.get_node_count():,}")


if __name__ == "__main__":
    main()
