"""Export or restore the places document.

Usage:
    python -m scripts.places_backup export backup.json
    python -m scripts.places_backup import backup.json [--places-file PATH]

`export` writes what the service would load at startup, so entries the
service cannot read are dropped. `import` refuses a source file that does
not decode to at least one place unless `--allow-empty` is given. Stop the
server before importing; it only reads the file at startup.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from settings import settings
from storage.places_store import PlacesFileStore

LOG = logging.getLogger("places_backup")


def export_places(store: PlacesFileStore, dest: str) -> int:
    places = store.load()
    PlacesFileStore(dest).save(places)
    LOG.info("Exported %s places from %s to %s", len(places), store.path, dest)
    return len(places)


def import_places(store: PlacesFileStore, src: str, allow_empty: bool = False) -> int:
    places = PlacesFileStore(src).load()
    if not places and not allow_empty:
        raise ValueError(f"{src} holds no places; pass --allow-empty to clear the store")
    store.save(places)
    LOG.info(
        "Imported %s places into %s (next id %s)",
        len(places),
        store.path,
        store.next_id(places),
    )
    return len(places)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Back up or restore the tourist places JSON file.")
    parser.add_argument("--places-file", default=settings.PLACES_FILE, help="Backing file used by the service.")
    sub = parser.add_subparsers(dest="command", required=True)

    exp = sub.add_parser("export", help="Copy the places document to DEST.")
    exp.add_argument("dest")

    imp = sub.add_parser("import", help="Replace the places document with SRC.")
    imp.add_argument("src")
    imp.add_argument("--allow-empty", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = build_parser().parse_args(argv)
    store = PlacesFileStore(args.places_file)

    if args.command == "export":
        export_places(store, args.dest)
        return 0

    try:
        import_places(store, args.src, allow_empty=args.allow_empty)
    except ValueError as e:
        LOG.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
