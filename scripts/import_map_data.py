"""
Load a browser-storage export into the store.

The export is the JSON document the old map kept in local storage:
{"routes": [...], "markers": [...]}. Old-format routes that still carry the
provider's raw "directions" result are upgraded on the way in. Routes that
already exist in the store (same start and end) are skipped.

Usage:
    python -m scripts.import_map_data export.json
    python -m scripts.import_map_data export.json --store-url http://localhost:8000/api/v1 --dry-run
"""
import argparse
import json
import logging
import sys
from typing import Dict

from routes.policy import default_builder_policy
from routes.validation import find_duplicate
from store.client import StoreClient, StoreError
from store.migration import parse_export

log = logging.getLogger("tripmap.import")


def import_map_data(document: dict, client: StoreClient, dry_run: bool = False) -> Dict[str, int]:
    routes, markers = parse_export(document)
    tolerance = default_builder_policy().duplicate_tolerance_deg
    known = client.list_routes()

    counts = {"routes": 0, "markers": 0, "skipped": 0, "failed": 0}

    for route in routes:
        if find_duplicate(route.start, route.end, known, tolerance):
            log.info("Skipping route %s -> %s, already stored", route.start, route.end)
            counts["skipped"] += 1
            continue
        if dry_run:
            counts["routes"] += 1
            continue
        try:
            known.append(client.create_route(route))
            counts["routes"] += 1
        except StoreError as exc:
            log.error("Route %s -> %s rejected: %s %s", route.start, route.end, exc, exc.payload or "")
            counts["failed"] += 1

    for marker in markers:
        if dry_run:
            counts["markers"] += 1
            continue
        try:
            client.create_marker(marker)
            counts["markers"] += 1
        except StoreError as exc:
            log.error("Marker at %s rejected: %s", marker.position, exc)
            counts["failed"] += 1

    return counts


def main() -> int:
    parser = argparse.ArgumentParser(description="Import a map data export into the store")
    parser.add_argument("path", help="Path to the exported JSON document")
    parser.add_argument("--store-url", help="Store API base URL (defaults to STORE_BASE_URL)")
    parser.add_argument("--dry-run", action="store_true", help="Parse and check for duplicates without writing")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with open(args.path, "r", encoding="utf-8") as f:
        document = json.load(f)

    try:
        counts = import_map_data(document, StoreClient(base_url=args.store_url), dry_run=args.dry_run)
    except StoreError as exc:
        log.error("Store unavailable: %s", exc)
        return 1

    print(f"Routes imported: {counts['routes']} (skipped {counts['skipped']} duplicates)")
    print(f"Markers imported: {counts['markers']}")
    if counts["failed"]:
        print(f"Failed: {counts['failed']}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
