"""
Create and populate a pipeline dictionary database from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from pipeline_db.config import load_database_settings, package_data_path
from pipeline_db.errors import PipelineDatabaseError
from pipeline_db.logging_utils import configure_logging
from pipeline_db.populator import DictionaryPopulator
from pipeline_db.store import DictionaryStore

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create and populate a pipeline database.")
    parser.add_argument(
        "--config",
        dest="config",
        default=str(package_data_path("etc", "pipeline.ini")),
        help="Database .ini file (default: bundled pipeline.ini).",
    )
    parser.add_argument(
        "--dbfile",
        dest="dbfile",
        default=None,
        help="Optional database file overriding the .ini and PIPELINE_DB_FILE.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace an existing database file.",
    )
    parser.add_argument("--log-level", dest="log_level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        settings = load_database_settings(args.config, dbfile=args.dbfile)
        with DictionaryStore(settings).initialize(overwrite=args.overwrite) as store:
            populator = DictionaryPopulator(store)
            summary = store.run_in_transaction(populator.populate, settings.inipath)
    except PipelineDatabaseError as exc:
        logger.error("Failed to initialise pipeline database: %s", exc)
        return 1

    payload = {
        "dbfile": str(settings.dbfile),
        "rows": summary.rows,
        "total": summary.total,
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
