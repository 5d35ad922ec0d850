"""
api.routes_admin - /api/admin bulk import and maintenance endpoints.

Uploads arrive as multipart field 'file', are written to
config.UPLOAD_DIR and handed to the import engine, which deletes them
when it is done.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from flask import request, jsonify
from werkzeug.utils import secure_filename

import config
from api import api_bp
from db import get_session
from import_engine import run_import, DecodeError
from services.records_service import RecordsService

logger = logging.getLogger(__name__)

_LABELS = {
    "students": "Student data",
    "marks": "Marks data",
    "results": "Results summary data",
}


def _is_csv(upload) -> bool:
    suffix = Path(upload.filename or "").suffix.lower()
    return suffix in config.CSV_EXTENSIONS or upload.mimetype in config.CSV_MIMETYPES


def _save_upload(upload) -> Path:
    """Store the upload under a unique, sanitised name."""
    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    name = secure_filename(upload.filename or "") or "upload.csv"
    dest = config.UPLOAD_DIR / f"{int(time.time() * 1000)}-{name}"
    upload.save(dest)
    return dest


_SEARCH_FIELDS = ("reg_no", "student_name", "father_name", "dob", "program", "institution")


def _search_hit(student: dict) -> dict:
    return {k: student[k] for k in _SEARCH_FIELDS}


def _import_upload(kind: str):
    upload = request.files.get("file")
    if not upload or not upload.filename:
        return jsonify({"error": "No file uploaded"}), 400
    if not _is_csv(upload):
        return jsonify({"error": "Only CSV files are allowed"}), 400

    path = _save_upload(upload)
    try:
        report = run_import(kind, path)
    except DecodeError as exc:
        logger.error(f"CSV processing error: {exc}")
        return jsonify({"error": f"Error processing CSV file: {exc}"}), 500

    return jsonify({
        "message": f"{_LABELS[kind]} import completed",
        "summary": report.to_dict(),
    })


@api_bp.route("/admin/upload-students", methods=["POST"])
def upload_students():
    """POST /api/admin/upload-students  (multipart field 'file')"""
    return _import_upload("students")


@api_bp.route("/admin/upload-marks", methods=["POST"])
def upload_marks():
    """POST /api/admin/upload-marks  (multipart field 'file')"""
    return _import_upload("marks")


@api_bp.route("/admin/upload-results", methods=["POST"])
def upload_results():
    """POST /api/admin/upload-results  (multipart field 'file')"""
    return _import_upload("results")


@api_bp.route("/admin/statistics")
def statistics():
    session = get_session()
    try:
        return jsonify(RecordsService.statistics(session))
    finally:
        session.close()


@api_bp.route("/admin/search-students")
def search_students():
    """GET /api/admin/search-students?query=  (min 2 characters)"""
    query = request.args.get("query", "").strip()
    if len(query) < config.SEARCH_MIN_QUERY:
        return jsonify([])

    session = get_session()
    try:
        students = RecordsService.search_students(session, query)
        return jsonify([_search_hit(s.to_dict()) for s in students])
    finally:
        session.close()


@api_bp.route("/admin/student/<reg_no>", methods=["DELETE"])
def delete_student(reg_no: str):
    """DELETE /api/admin/student/{reg_no}  - removes marks and results too."""
    session = get_session()
    try:
        counts = RecordsService.delete_student_data(session, reg_no)
        session.commit()
        return jsonify({
            "message": f"Student data for {reg_no} deleted successfully",
            "details": counts,
        })
    except Exception as exc:
        session.rollback()
        logger.error(f"Delete error for {reg_no}: {exc}")
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()


@api_bp.route("/admin/manual-student", methods=["POST"])
def manual_student():
    """
    POST /api/admin/manual-student

    JSON body with Student field names; reg_no, student_name,
    father_name and dob are required.  Upserts on reg_no.
    """
    data = request.get_json(silent=True) or {}
    required = ("reg_no", "student_name", "father_name", "dob")
    if not all(str(data.get(k) or "").strip() for k in required):
        return jsonify({"error": "Missing required fields"}), 400
    if "address" in data and not isinstance(data["address"], dict):
        return jsonify({"error": "address must be an object"}), 400

    session = get_session()
    try:
        student = RecordsService.upsert_student(session, data)
        session.commit()
        return jsonify({
            "message": "Student data saved successfully",
            "student": student.to_dict(),
        })
    except Exception as exc:
        session.rollback()
        logger.error(f"Manual student insert error: {exc}")
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()
