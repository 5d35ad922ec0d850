"""
import_engine.report - Structured result of a CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_records: int = 0
    processed: int = 0
    error_details: list[dict] = field(default_factory=list)   # [{row, reg_no, error, data}]

    @property
    def errors(self) -> int:
        return len(self.error_details)

    def add_error(self, row: int, reg_no: str, error: str, data: dict):
        self.error_details.append({
            "row": row,
            "reg_no": reg_no or "Unknown",
            "error": error,
            "data": dict(data),
        })

    def to_dict(self) -> dict:
        return {
            "total_records": self.total_records,
            "processed": self.processed,
            "errors": self.errors,
            "error_details": self.error_details,
        }
