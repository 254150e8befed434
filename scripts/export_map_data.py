"""
Write every stored route and marker to a JSON export document
({"routes": [...], "markers": [...]}) that import_map_data can read back.

Usage:
    python -m scripts.export_map_data map-data.json
"""
import argparse
import json
import logging
import sys

from store.client import StoreClient, StoreError
from store.migration import build_export

log = logging.getLogger("tripmap.export")


def export_map_data(client: StoreClient) -> dict:
    return build_export(client.list_routes(), client.list_markers())


def main() -> int:
    parser = argparse.ArgumentParser(description="Export stored routes and markers to JSON")
    parser.add_argument("path", help="Where to write the export")
    parser.add_argument("--store-url", help="Store API base URL (defaults to STORE_BASE_URL)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        document = export_map_data(StoreClient(base_url=args.store_url))
    except StoreError as exc:
        log.error("Export failed: %s", exc)
        return 1

    with open(args.path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    print(f"Exported {len(document['routes'])} routes and {len(document['markers'])} markers to '{args.path}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
