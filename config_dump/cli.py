"""
Command line entry point for config dumps.

    config-dump --config-root ./data/config --db-uri jobs.db \
                --version 0.32.0-alpha --output ./backup.tar.gz

Every option falls back to the CONFIG_DUMP_* environment variables read by
load_config(). The archive path is printed on stdout.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .errors import DumpError
from .export.archive import ARCHIVE_FORMATS
from .export.exporter import ConfigDumpExport
from .utils.temp import remove_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="config-dump",
        description="Export config collections and job database tables to an archive.",
    )
    p.add_argument("--config-root", help="Directory with one subdirectory per config collection")
    p.add_argument("--db-backend", choices=("sqlite", "postgres"), help="Job database backend")
    p.add_argument("--db-uri", help="SQLite file path or Postgres DSN")
    p.add_argument("--db-schema", help="Postgres schema to export")
    p.add_argument("--version", dest="dump_version", help="Version written to the VERSION file")
    p.add_argument("--format", dest="archive_format", choices=ARCHIVE_FORMATS)
    p.add_argument("--temp-root", help="Parent directory for temporary files")
    p.add_argument("--output", "-o", help="Move the finished archive to this path")
    p.add_argument(
        "--keep-workdir",
        action="store_true",
        help="Leave the working directory on disk after archiving",
    )
    p.add_argument("--verbose", "-v", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cfg = load_config()
    overrides = {
        "config_root": args.config_root,
        "db_backend": args.db_backend,
        "db_uri": args.db_uri,
        "db_schema": args.db_schema,
        "version": args.dump_version,
        "archive_format": args.archive_format,
        "temp_root": args.temp_root,
    }
    cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    if args.keep_workdir:
        cfg = replace(cfg, cleanup_workdir=False)

    try:
        exporter = ConfigDumpExport.from_config(cfg)
        archive = exporter.dump()
    except (DumpError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.output:
        dest = Path(args.output)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            archive = Path(shutil.move(str(archive), str(dest)))
        except OSError as e:
            logger.error("Cannot move archive to %s: %s", dest, e)
            remove_file(archive)
            return 1

    if args.keep_workdir:
        logger.info("Working directory kept at %s", exporter.last_workdir)

    print(archive)
    return 0


if __name__ == "__main__":
    sys.exit(main())
