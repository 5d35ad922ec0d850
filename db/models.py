"""
db.models - SQLAlchemy ORM declarations.

Tables
------
students          - one row per registration number.  The postal address
                    is stored as flat columns and nested again by to_dict().
marks             - one row per (reg_no, semester, subject_code).
result_summaries  - one row per (reg_no, semester).  Pending subjects are
                    kept as a JSON list in a text column.
users             - portal accounts; only a salted password hash is stored.
feedback          - free-text messages from the public site.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Float, DateTime, Text, Index, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, validates


def _now():
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


class Base(DeclarativeBase):
    pass


class _RegNoMixin:
    """Shared storage-level checks for tables keyed on a registration number."""

    @validates("reg_no")
    def _check_reg_no(self, _key, value):
        value = str(value or "").strip()
        if not value:
            raise ValueError("reg_no must not be empty")
        return value


class _SemesterMixin:
    """Semester numbers start at 1."""

    @validates("semester")
    def _check_semester(self, _key, value):
        if value is None or isinstance(value, bool):
            raise ValueError("semester is required")
        try:
            sem = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"semester must be an integer, got {value!r}") from None
        if sem < 1:
            raise ValueError(f"semester must be positive, got {sem}")
        return sem


class Student(_RegNoMixin, Base):
    __tablename__ = "students"

    id     = Column(Integer, primary_key=True, autoincrement=True)
    reg_no = Column(String(50), unique=True, nullable=False, index=True)

    # ── Identity ───────────────────────────────────────────────────────
    student_name = Column(String(200), nullable=False, index=True)
    father_name  = Column(String(200), nullable=False)
    dob          = Column(String(50), nullable=False)          # as supplied
    gender       = Column(String(20), default="")
    mobile       = Column(String(30), default="")
    email        = Column(String(200), default="")

    # ── Address ────────────────────────────────────────────────────────
    address_village  = Column(String(200), default="")
    address_city     = Column(String(200), default="")
    address_taluk    = Column(String(200), default="")
    address_district = Column(String(200), default="")
    address_pincode  = Column(String(20), default="")

    # ── Enrolment ──────────────────────────────────────────────────────
    program     = Column(String(200), default="")
    institution = Column(String(200), default="")

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    ADDRESS_PARTS = ("village", "city", "taluk", "district", "pincode")

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "reg_no": self.reg_no,
            "student_name": self.student_name or "",
            "father_name": self.father_name or "",
            "dob": self.dob or "",
            "gender": self.gender or "",
            "mobile": self.mobile or "",
            "email": self.email or "",
            "address": {
                part: getattr(self, f"address_{part}") or ""
                for part in self.ADDRESS_PARTS
            },
            "program": self.program or "",
            "institution": self.institution or "",
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class Mark(_RegNoMixin, _SemesterMixin, Base):
    __tablename__ = "marks"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    reg_no       = Column(String(50), nullable=False, index=True)
    semester     = Column(Integer, nullable=False)
    subject_code = Column(String(50), nullable=False)
    subject_name = Column(String(200), default="")

    # Split from the "IA/Tr/Pr" composite column
    marks_ia        = Column(Float, default=0.0)
    marks_theory    = Column(Float, default=0.0)
    marks_practical = Column(Float, default=0.0)

    result    = Column(String(50), default="")
    credits   = Column(Integer, default=0)
    grade     = Column(String(10), default="")
    exam_year = Column(Integer)

    created_at = Column(DateTime, default=_now)

    __table_args__ = (
        UniqueConstraint("reg_no", "semester", "subject_code", name="uq_mark_identity"),
        Index("ix_mark_reg_sem", "reg_no", "semester"),
    )

    @validates("subject_code")
    def _check_subject_code(self, _key, value):
        value = str(value or "").strip()
        if not value:
            raise ValueError("subject_code must not be empty")
        return value

    def to_dict(self) -> dict:
        return {
            "reg_no": self.reg_no,
            "semester": self.semester,
            "subject_code": self.subject_code,
            "subject_name": self.subject_name or "",
            "marks": {
                "ia": self.marks_ia or 0,
                "theory": self.marks_theory or 0,
                "practical": self.marks_practical or 0,
            },
            "result": self.result or "",
            "credits": self.credits or 0,
            "grade": self.grade or "",
            "exam_year": self.exam_year,
            "created_at": _iso(self.created_at),
        }


class ResultSummary(_RegNoMixin, _SemesterMixin, Base):
    __tablename__ = "result_summaries"

    id       = Column(Integer, primary_key=True, autoincrement=True)
    reg_no   = Column(String(50), nullable=False, index=True)
    semester = Column(Integer, nullable=False)

    total_credits_applied = Column(Integer, default=0)
    total_credits_earned  = Column(Integer, default=0)
    total_grade_points    = Column(Float, default=0.0)
    sgpa                  = Column(Float, default=0.0)
    attempts              = Column(Integer, default=1)
    overall_cgpa          = Column(String(20), default="")
    final_result          = Column(String(100), default="")
    pending_json          = Column(Text, default="[]")

    created_at = Column(DateTime, default=_now)

    __table_args__ = (
        UniqueConstraint("reg_no", "semester", name="uq_result_identity"),
    )

    @property
    def pending_subjects(self) -> list[str]:
        if not self.pending_json:
            return []
        try:
            return json.loads(self.pending_json)
        except (json.JSONDecodeError, TypeError):
            return []

    @pending_subjects.setter
    def pending_subjects(self, subjects) -> None:
        self.pending_json = json.dumps(list(subjects or []), ensure_ascii=False)

    def to_dict(self) -> dict:
        return {
            "reg_no": self.reg_no,
            "semester": self.semester,
            "total_credits_applied": self.total_credits_applied or 0,
            "total_credits_earned": self.total_credits_earned or 0,
            "total_grade_points": self.total_grade_points or 0,
            "sgpa": self.sgpa or 0,
            "attempts": self.attempts,
            "overall_cgpa": self.overall_cgpa or "",
            "final_result": self.final_result or "",
            "pending_subjects": self.pending_subjects,
            "created_at": _iso(self.created_at),
        }


class User(Base):
    __tablename__ = "users"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    name          = Column(String(200), default="")
    email         = Column(String(200), unique=True, nullable=False, index=True)
    password_hash = Column(String(300), nullable=False)
    created_at    = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        # Never expose password_hash
        return {
            "id": self.id,
            "name": self.name or "",
            "email": self.email,
            "created_at": _iso(self.created_at),
        }


class Feedback(Base):
    __tablename__ = "feedback"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    name       = Column(String(200), default="")
    email      = Column(String(200), default="")
    message    = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name or "",
            "email": self.email or "",
            "message": self.message,
            "created_at": _iso(self.created_at),
        }
