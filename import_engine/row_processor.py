"""
import_engine.row_processor - Map, validate and store one CSV row.

Single-responsibility: given a dict-row, a processor either upserts the
record it describes or raises RowError.  One processor per sheet kind;
the importer drives extract → validate → upsert for every row.
"""

from __future__ import annotations

import re
from typing import Optional

from sqlalchemy.orm import Session

import config
from import_engine.field_map import (
    STUDENT_FIELDS, ADDRESS_FIELDS, MARK_FIELDS, RESULT_FIELDS,
    MARKS_DELIMITER, ATTEMPTS_OPEN, PENDING_DELIMITER,
)
from services.records_service import RecordsService


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


_INT_RE   = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


# ── Cell helpers ───────────────────────────────────────────────────────

def resolve(row: dict, aliases: tuple[str, ...], default: str = "") -> str:
    """Return the first non-blank cell among *aliases*, trimmed."""
    for header in aliases:
        val = (row.get(header) or "").strip()
        if val:
            return val
    return default


def parse_int(value: Optional[str], default: int = 0) -> int:
    """Leading-integer parse ("3rd" → 3).  Unparseable → *default*."""
    m = _INT_RE.match(value or "")
    return int(m.group(1)) if m else default


def parse_float(value: Optional[str], default: float = 0.0) -> float:
    """Leading-decimal parse ("8.2(1)" → 8.2).  Unparseable → *default*."""
    m = _FLOAT_RE.match(value or "")
    return float(m.group(1)) if m else default


def split_marks(value: str) -> dict[str, float]:
    """
    Split an "IA/Theory/Practical" cell.  Each segment is parsed on its
    own, so "45//20" gives theory 0 rather than failing the row.
    """
    parts = value.split(MARKS_DELIMITER) if value else []
    parts += [""] * (3 - len(parts))
    return {
        "ia": parse_float(parts[0]),
        "theory": parse_float(parts[1]),
        "practical": parse_float(parts[2]),
    }


def split_sgpa(value: str) -> tuple[float, Optional[int]]:
    """Split "8.2(1)" into (8.2, 1).  Attempts is None when absent."""
    head, sep, tail = value.partition(ATTEMPTS_OPEN)
    attempts = parse_int(tail, default=-1) if sep else -1
    return parse_float(head), (attempts if attempts >= 0 else None)


def split_pending(value: str) -> list[str]:
    return [s.strip() for s in value.split(PENDING_DELIMITER) if s.strip()]


# ── Processors ─────────────────────────────────────────────────────────

class RowProcessor:
    """
    Base class.  Subclasses declare the human label of each required
    field and implement extract() and upsert().
    """

    kind = ""
    required: dict[str, str] = {}

    def extract(self, row: dict) -> dict:
        raise NotImplementedError

    def validate(self, record: dict) -> None:
        missing = [label for key, label in self.required.items()
                   if not record.get(key)]
        if missing:
            raise RowError(f"Missing required fields ({', '.join(missing)})")

    def upsert(self, session: Session, record: dict):
        raise NotImplementedError


class StudentRowProcessor(RowProcessor):
    kind = "students"
    required = {
        "reg_no": "Reg No",
        "student_name": "Name",
        "father_name": "Father Name",
        "dob": "DOB",
    }

    def extract(self, row: dict) -> dict:
        record = {key: resolve(row, aliases)
                  for key, aliases in STUDENT_FIELDS.items()}
        record["address"] = {key: resolve(row, aliases)
                             for key, aliases in ADDRESS_FIELDS.items()}
        record["program"] = record["program"] or config.DEFAULT_PROGRAM
        record["institution"] = record["institution"] or config.DEFAULT_INSTITUTION
        return record

    def upsert(self, session: Session, record: dict):
        return RecordsService.upsert_student(session, record)


class MarkRowProcessor(RowProcessor):
    kind = "marks"
    required = {
        "reg_no": "Reg No",
        "semester": "Semester",
        "subject_code": "Subject Code",
    }

    def extract(self, row: dict) -> dict:
        f = MARK_FIELDS
        return {
            "reg_no": resolve(row, f["reg_no"]),
            "semester": max(parse_int(resolve(row, f["semester"])), 0),
            "subject_code": resolve(row, f["subject_code"]),
            "subject_name": resolve(row, f["subject_name"]),
            "marks": split_marks(resolve(row, f["marks"])),
            "result": resolve(row, f["result"]),
            "credits": parse_int(resolve(row, f["credits"])),
            "grade": resolve(row, f["grade"]),
            "exam_year": (parse_int(resolve(row, f["exam_year"]))
                          or config.DEFAULT_EXAM_YEAR),
        }

    def upsert(self, session: Session, record: dict):
        return RecordsService.upsert_mark(session, record)


class ResultRowProcessor(RowProcessor):
    kind = "results"
    required = {
        "reg_no": "Reg No",
        "semester": "Semester",
    }

    def extract(self, row: dict) -> dict:
        f = RESULT_FIELDS

        sgpa_cell = resolve(row, f["sgpa"])
        sgpa, composite_attempts = split_sgpa(resolve(row, f["sgpa_attempts"]))
        if sgpa_cell:
            sgpa = parse_float(sgpa_cell)

        attempts_cell = resolve(row, f["attempts"])
        if attempts_cell:
            attempts = parse_int(attempts_cell, default=1)
        elif composite_attempts is not None:
            attempts = composite_attempts
        else:
            attempts = 1

        return {
            "reg_no": resolve(row, f["reg_no"]),
            "semester": max(parse_int(resolve(row, f["semester"])), 0),
            "total_credits_applied": parse_int(resolve(row, f["total_credits_applied"])),
            "total_credits_earned": parse_int(resolve(row, f["total_credits_earned"])),
            "total_grade_points": parse_float(resolve(row, f["total_grade_points"])),
            "sgpa": sgpa,
            "attempts": attempts,
            "overall_cgpa": resolve(row, f["overall_cgpa"]),
            "final_result": resolve(row, f["final_result"]),
            "pending_subjects": split_pending(resolve(row, f["pending_subjects"])),
        }

    def upsert(self, session: Session, record: dict):
        return RecordsService.upsert_result_summary(session, record)


PROCESSORS: dict[str, type[RowProcessor]] = {
    cls.kind: cls
    for cls in (StudentRowProcessor, MarkRowProcessor, ResultRowProcessor)
}
