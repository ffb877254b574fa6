from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg2
from dotenv import load_dotenv

from dlc_import.config.loader import ConfigError, ImportConfig, load_config
from dlc_import.db.resource_lookup import PgResourceLookup
from dlc_import.logging.init import log_summary, set_debug, setup_logging
from dlc_import.services.converter import DLCConverter
from dlc_import.services.orchestrator import ProcessingError, process_all, scan_input_files
from dlc_import.services.summary import render_summary_line
from dlc_import.tabular.reader import normalize_rows, read_dlc_file

"""CLI entrypoint.

Flow:
- load .env, then config/import.yml (or --config)
- open the resource lookup store (PostgreSQL); fall back to the in-memory
  store (mock mode) when no connection can be made
- convert every export in source_directory, print the SUMMARY line

Exit codes: 0 all files converted, 1 fatal startup/processing error,
2 one or more files failed.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/import.yml")


def _resolve_dsn(cfg: ImportConfig) -> str:
    """Connection string, in priority order:

    1. DATABASE_URL / PGDSN (after .env has been loaded with override)
    2. individual PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    3. the config file's database section for whatever is still missing
    """
    db_cfg = cfg.database
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "archivesspace")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def _db_connection(cfg: ImportConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Read-only psycopg2 cursor for resource lookups."""
    conn = psycopg2.connect(_resolve_dsn(cfg))
    try:
        # lookups only; autocommit keeps one failed query from poisoning the rest
        conn.autocommit = True
        conn.set_session(readonly=True)
        with conn.cursor() as cur:
            yield cur
    finally:
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="DLC CSV -> ArchivesSpace batch JSON converter")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to import.yml")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dump-output", action="store_true", help="Read back and log each written batch")
    p.add_argument("--inspect-data", action="store_true", help="Print the first normalised rows per file then exit")
    p.add_argument("--list-types", action="store_true", help="List supported import types then exit")
    return p.parse_args(argv)


def _list_types() -> int:
    for t in DLCConverter.import_types():
        print(f"{t['name']}: {t['description']}")
    print(DLCConverter.profile())
    return EXIT_SUCCESS_ALL


def _inspect_data(cfg: ImportConfig) -> int:
    try:
        files = scan_input_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .csv/.xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = normalize_rows(read_dlc_file(f))
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        print(f"  rows={len(rows)}")
        for r in rows[:3]:
            values = {k: v for k, v in vars(r.row).items() if v is not None}
            print(f"    row {r.row_number}: {values}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when nothing was passed (cli_main([]) in tests must not see pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.list_types:
        return _list_types()

    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    logger.info(f"Converting files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    dump = args.dump_output or cfg.dump_output

    # DISABLE_DB_CONNECT=1 skips the lookup store entirely (tests, offline runs)
    mode = "mock"
    try:
        if os.getenv("DISABLE_DB_CONNECT") == "1":
            logger.debug("DB connect disabled via DISABLE_DB_CONNECT=1 -> mock mode")
            result = process_all(cfg, lookup=None, dump_output=dump)
        else:
            try:
                with _db_connection(cfg) as cur:
                    mode = "live"
                    result = process_all(cfg, lookup=PgResourceLookup(cur), dump_output=dump)
            except psycopg2.Error as db_e:
                logger.info(f"DB connection failed -> fallback to mock mode: {db_e}")
                mode = "mock"
                result = process_all(cfg, lookup=None, dump_output=dump)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    logger.info(f"mode={mode} total_records={result.total_records}")

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
