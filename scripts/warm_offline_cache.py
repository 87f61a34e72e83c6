"""
CLI helper to precache the site's assets into a persistent offline cache and
purge stale cache generations.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import get_settings
from offline_cache.errors import InstallError
from offline_cache.fetcher import HttpFetcher
from offline_cache.manifest import PRECACHE_URLS
from offline_cache.registration import CacheRegistration
from offline_cache.storage import SqliteCacheStorage
from offline_cache.worker import OfflineCacheWorker

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Warm the offline asset cache")
    parser.add_argument(
        "-o",
        "--origin",
        type=str,
        default=settings.site_origin,
        help="Site origin that relative asset URLs resolve against",
    )
    parser.add_argument(
        "-c",
        "--cache-name",
        type=str,
        default=settings.cache_name,
        help="Cache generation name (bump on deploy)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=settings.cache_db_path,
        help="SQLite file holding the cache storage",
    )
    parser.add_argument(
        "-u",
        "--url",
        action="append",
        default=None,
        help="Asset URL to precache (repeatable); defaults to the site manifest",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    storage = SqliteCacheStorage(args.db)
    fetcher = HttpFetcher(args.origin)
    registration = CacheRegistration(fetcher)
    worker = OfflineCacheWorker(
        args.cache_name, args.url or PRECACHE_URLS, storage, fetcher
    )

    try:
        registration.register(worker)
    except InstallError as exc:
        logger.error("Cache %s was not installed: %s", args.cache_name, exc)
        return 1

    logger.info(
        "Cache storage %s now holds: %s", args.db, ", ".join(storage.keys())
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
