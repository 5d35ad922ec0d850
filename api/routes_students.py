"""
api.routes_students - Public lookups for students, marks and result summaries.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.records_service import RecordsService


@api_bp.route("/students/<reg_no>")
def get_student(reg_no: str):
    """GET /api/students/{reg_no}"""
    session = get_session()
    try:
        student = RecordsService.get_student(session, reg_no)
        if not student:
            return jsonify({"error": "Student not found"}), 404
        return jsonify(student.to_dict())
    finally:
        session.close()


@api_bp.route("/students/verify", methods=["POST"])
def verify_student():
    """
    POST /api/students/verify

    JSON body: {regNo, dob}.  dob must match the stored string exactly.
    """
    data = request.get_json(silent=True) or {}
    reg_no = str(data.get("regNo") or "").strip()
    dob = str(data.get("dob") or "").strip()

    session = get_session()
    try:
        student = RecordsService.verify_student(session, reg_no, dob) if reg_no and dob else None
        if not student:
            return jsonify({"error": "Invalid registration number or date of birth"}), 404
        return jsonify({
            "success": True,
            "student": {
                "name": student.student_name,
                "father_name": student.father_name,
                "program": student.program,
            },
        })
    finally:
        session.close()


@api_bp.route("/marks/<reg_no>/semester/<int:semester>")
def get_marks(reg_no: str, semester: int):
    """GET /api/marks/{reg_no}/semester/{n}"""
    session = get_session()
    try:
        marks = RecordsService.marks_for_semester(session, reg_no, semester)
        return jsonify([m.to_dict() for m in marks])
    finally:
        session.close()


@api_bp.route("/results/<reg_no>/summary")
def get_result_summary(reg_no: str):
    """GET /api/results/{reg_no}/summary  - every semester, ascending."""
    session = get_session()
    try:
        results = RecordsService.result_summaries(session, reg_no)
        return jsonify([r.to_dict() for r in results])
    finally:
        session.close()
