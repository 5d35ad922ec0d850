"""
services.records_service - Upserts, lookups and deletes on student records.

All session management is the caller's responsibility (open before,
close/commit after).  The import engine commits once per row; the API
routes commit once per request.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

import config
from db.models import Student, Mark, ResultSummary

logger = logging.getLogger(__name__)


_STUDENT_COLUMNS = ("student_name", "father_name", "dob", "gender", "mobile",
                    "email", "program", "institution")

_RESULT_COLUMNS = ("total_credits_applied", "total_credits_earned",
                   "total_grade_points", "sgpa", "attempts", "overall_cgpa",
                   "final_result", "pending_subjects")


def _upsert(session: Session, model, key: dict, values: dict):
    """
    Insert-or-update one row matched on *key*.

    Applying the same (key, values) twice leaves a single row holding
    *values*; the unique constraint on the key columns backs this up.
    """
    obj = session.scalars(select(model).filter_by(**key)).first()
    if obj is None:
        obj = model(**key)
        session.add(obj)
    for attr, val in values.items():
        setattr(obj, attr, val)
    session.flush()
    return obj


class RecordsService:

    # ── Upsert ─────────────────────────────────────────────────────────

    @staticmethod
    def upsert_student(session: Session, data: dict) -> Student:
        """
        Upsert by reg_no.  *data* uses Student field names, with the
        postal address either nested under "address" or flattened as
        address_<part>.
        """
        values = {c: str(data.get(c) or "").strip() for c in _STUDENT_COLUMNS}
        values["program"] = values["program"] or config.DEFAULT_PROGRAM
        values["institution"] = values["institution"] or config.DEFAULT_INSTITUTION

        address = data.get("address")
        if not isinstance(address, dict):
            address = {}
        for part in Student.ADDRESS_PARTS:
            raw = address.get(part, data.get(f"address_{part}", ""))
            values[f"address_{part}"] = str(raw or "").strip()

        reg_no = str(data.get("reg_no") or "").strip()
        return _upsert(session, Student, {"reg_no": reg_no}, values)

    @staticmethod
    def upsert_mark(session: Session, data: dict) -> Mark:
        """Upsert by (reg_no, semester, subject_code)."""
        marks = data.get("marks") or {}
        values = {
            "subject_name": data.get("subject_name", ""),
            "marks_ia": marks.get("ia", 0),
            "marks_theory": marks.get("theory", 0),
            "marks_practical": marks.get("practical", 0),
            "result": data.get("result", ""),
            "credits": data.get("credits", 0),
            "grade": data.get("grade", ""),
            "exam_year": data.get("exam_year") or config.DEFAULT_EXAM_YEAR,
        }
        key = {
            "reg_no": data.get("reg_no"),
            "semester": data.get("semester"),
            "subject_code": data.get("subject_code"),
        }
        return _upsert(session, Mark, key, values)

    @staticmethod
    def upsert_result_summary(session: Session, data: dict) -> ResultSummary:
        """Upsert by (reg_no, semester)."""
        values = {c: data[c] for c in _RESULT_COLUMNS if c in data}
        key = {"reg_no": data.get("reg_no"), "semester": data.get("semester")}
        return _upsert(session, ResultSummary, key, values)

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get_student(session: Session, reg_no: str) -> Student | None:
        return session.scalars(
            select(Student).where(Student.reg_no == reg_no)
        ).first()

    @staticmethod
    def verify_student(session: Session, reg_no: str, dob: str) -> Student | None:
        """Match a student on registration number and date of birth."""
        return session.scalars(
            select(Student).where(Student.reg_no == reg_no, Student.dob == dob)
        ).first()

    @staticmethod
    def marks_for_semester(session: Session, reg_no: str, semester: int) -> list[Mark]:
        return list(session.scalars(
            select(Mark)
            .where(Mark.reg_no == reg_no, Mark.semester == semester)
            .order_by(Mark.subject_code)
        ))

    @staticmethod
    def result_summaries(session: Session, reg_no: str) -> list[ResultSummary]:
        return list(session.scalars(
            select(ResultSummary)
            .where(ResultSummary.reg_no == reg_no)
            .order_by(ResultSummary.semester)
        ))

    @staticmethod
    def search_students(session: Session, query: str,
                        limit: int = config.SEARCH_LIMIT) -> list[Student]:
        """Case-insensitive substring match on reg_no or student name."""
        pattern = f"%{query}%"
        return list(session.scalars(
            select(Student)
            .where(or_(Student.reg_no.ilike(pattern),
                       Student.student_name.ilike(pattern)))
            .order_by(Student.reg_no)
            .limit(limit)
        ))

    @staticmethod
    def statistics(session: Session) -> dict:
        """Record counts, marks per semester and the newest students."""
        per_semester = session.execute(
            select(Mark.semester, func.count(Mark.id))
            .group_by(Mark.semester)
            .order_by(Mark.semester)
        ).all()
        recent = session.scalars(
            select(Student)
            .order_by(Student.created_at.desc(), Student.id.desc())
            .limit(config.RECENT_STUDENTS_LIMIT)
        )
        return {
            "students": session.scalar(select(func.count(Student.id))),
            "marks": session.scalar(select(func.count(Mark.id))),
            "results": session.scalar(select(func.count(ResultSummary.id))),
            "semesterStats": [{"_id": sem, "count": n} for sem, n in per_semester],
            "recentStudents": [
                {"reg_no": s.reg_no, "student_name": s.student_name,
                 "program": s.program}
                for s in recent
            ],
        }

    # ── Delete ─────────────────────────────────────────────────────────

    @staticmethod
    def delete_student_data(session: Session, reg_no: str) -> dict:
        """
        Remove the student and every mark / result summary sharing the
        registration number.  Returns per-table deleted counts.
        """
        counts = {}
        for label, model in (("students", Student), ("marks", Mark),
                             ("results", ResultSummary)):
            rows = session.scalars(select(model).where(model.reg_no == reg_no)).all()
            for row in rows:
                session.delete(row)
            counts[label] = len(rows)
        session.flush()
        logger.info(f"Deleted data for {reg_no}: Student={counts['students']}, "
                    f"Marks={counts['marks']}, Results={counts['results']}")
        return counts
