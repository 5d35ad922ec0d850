"""
api.routes_users - /api/users registration, login and profile endpoints.
"""

import logging

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.users_service import UsersService, UserExistsError

logger = logging.getLogger(__name__)


@api_bp.route("/users/register", methods=["POST"])
def register_user():
    """POST /api/users/register  {name, email, password}"""
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("name") or "", str):
        return jsonify({"error": "name must be a string"}), 400
    name = str(data.get("name") or "")
    email = str(data.get("email") or "").strip()
    password = str(data.get("password") or "")
    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    session = get_session()
    try:
        UsersService.register(session, name, email, password)
        session.commit()
        return jsonify({"message": "User registered successfully"})
    except UserExistsError:
        session.rollback()
        return jsonify({"error": "User already exists"}), 400
    except Exception as exc:
        session.rollback()
        logger.error(f"Register error for {email}: {exc}")
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()


@api_bp.route("/users/login", methods=["POST"])
def login_user():
    """POST /api/users/login  {email, password}"""
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "").strip()
    password = str(data.get("password") or "")
    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    session = get_session()
    try:
        user = UsersService.authenticate(session, email, password)
        if not user:
            return jsonify({"error": "Invalid credentials"}), 401
        return jsonify({
            "message": "Login successful",
            "user": {"name": user.name, "email": user.email},
        })
    finally:
        session.close()


@api_bp.route("/users")
def list_users():
    """GET /api/users"""
    session = get_session()
    try:
        return jsonify([u.to_dict() for u in UsersService.list_users(session)])
    finally:
        session.close()


@api_bp.route("/users/profile/<email>")
def get_profile(email: str):
    """GET /api/users/profile/{email}"""
    session = get_session()
    try:
        user = UsersService.get_by_email(session, email)
        if not user:
            return jsonify({"error": "User not found"}), 404
        return jsonify(user.to_dict())
    finally:
        session.close()


@api_bp.route("/users/update/<email>", methods=["PUT"])
def update_profile(email: str):
    """PUT /api/users/update/{email}  {name?, password?}"""
    data = request.get_json(silent=True) or {}
    for field in ("name", "password"):
        if data.get(field) is not None and not isinstance(data[field], str):
            return jsonify({"error": f"{field} must be a string"}), 400

    session = get_session()
    try:
        user = UsersService.get_by_email(session, email)
        if not user:
            return jsonify({"error": "User not found"}), 404
        UsersService.update_profile(session, user,
                                    name=data.get("name"),
                                    password=data.get("password"))
        session.commit()
        return jsonify({
            "message": "Profile updated successfully",
            "user": {"name": user.name, "email": user.email},
        })
    except Exception as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()
