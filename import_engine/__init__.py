"""
import_engine - CSV import pipeline.

Public API:
    run_import(kind, path) → ImportReport
    KINDS                  → accepted sheet kinds ("students", "marks", "results")
"""

from import_engine.importer import run_import, transient_file, KINDS   # noqa: F401
from import_engine.csv_parser import DecodeError                       # noqa: F401
from import_engine.row_processor import RowError                       # noqa: F401
from import_engine.report import ImportReport                          # noqa: F401
