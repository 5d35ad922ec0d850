"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → row_processor → per-row commit and produces
a structured ImportReport.  A row that fails (missing fields, bad
values, database rejection) is recorded and skipped; rows committed
before it stay committed.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import config
from db.engine import get_session
from import_engine.csv_parser import read_rows
from import_engine.row_processor import PROCESSORS, RowError, RowProcessor
from import_engine.report import ImportReport

logger = logging.getLogger(__name__)

KINDS = tuple(PROCESSORS)


@contextmanager
def transient_file(path: str | Path) -> Iterator[Path]:
    """
    Yield *path* and delete it on exit, whatever happened inside.
    A failed delete is logged, never raised.
    """
    path = Path(path)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except OSError as exc:
            logger.warning(f"Error deleting upload {path.name}: {exc}")


def run_import(kind: str, path: str | Path) -> ImportReport:
    """
    Import one uploaded CSV file of the given *kind* and delete it.

    Parameters
    ----------
    kind : one of KINDS
    path : uploaded CSV on disk; removed once the import finishes

    Returns
    -------
    ImportReport with per-row error details

    Raises
    ------
    DecodeError if the file cannot be read as CSV (nothing is imported)
    ValueError  for an unknown kind
    """
    with transient_file(path) as upload:
        if kind not in PROCESSORS:
            raise ValueError(f"unknown import kind {kind!r} "
                             f"(expected one of {', '.join(KINDS)})")
        logger.info(f"Starting {kind} import from {upload.name}")
        rows = read_rows(upload)
        return import_rows(PROCESSORS[kind](), rows)


def import_rows(processor: RowProcessor, rows: list[tuple[int, dict]]) -> ImportReport:
    """
    Run already-decoded (line, row) pairs through *processor*, in order.
    Errors are reported against the file line the row starts on.
    """
    report = ImportReport(total_records=len(rows))
    logger.info(f"Processing {len(rows)} {processor.kind} records")

    session = get_session()
    try:
        for row_idx, row in rows:
            record: dict = {}
            try:
                record = processor.extract(row)
                processor.validate(record)
                processor.upsert(session, record)
                session.commit()
            except RowError as exc:
                session.rollback()
                _row_failed(report, row_idx, record, row, str(exc))
                continue
            except Exception as exc:
                session.rollback()
                _row_failed(report, row_idx, record, row, f"Unexpected: {exc}")
                continue

            report.processed += 1
            if report.processed % config.IMPORT_PROGRESS_EVERY == 0:
                logger.info(f"Processed {report.processed} {processor.kind}...")
    finally:
        session.close()

    logger.info(f"{processor.kind.capitalize()} import completed: "
                f"{report.processed} processed, {report.errors} errors")
    return report


def _row_failed(report: ImportReport, row_idx: int, record: dict, row: dict, reason: str):
    report.add_error(row_idx, record.get("reg_no", ""), reason, row)
    logger.warning(f"Error processing row {row_idx}: {reason}")
