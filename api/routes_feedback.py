"""
api.routes_feedback - /api/feedback submit and list.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.feedback_service import FeedbackService


@api_bp.route("/feedback", methods=["POST"])
def submit_feedback():
    """POST /api/feedback  {name?, email?, message}"""
    data = request.get_json(silent=True) or {}
    message = str(data.get("message") or "").strip()
    if not message:
        return jsonify({"error": "message is required"}), 400

    session = get_session()
    try:
        FeedbackService.submit(session, str(data.get("name") or ""),
                               str(data.get("email") or ""), message)
        session.commit()
        return jsonify({"message": "Feedback submitted successfully"})
    except Exception as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()


@api_bp.route("/feedback")
def list_feedback():
    """GET /api/feedback"""
    session = get_session()
    try:
        return jsonify([f.to_dict() for f in FeedbackService.list_all(session)])
    finally:
        session.close()
