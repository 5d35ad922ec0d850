"""
api.errors - JSON error handlers for the API blueprint.

Blueprint handlers only fire for errors raised inside its views, so
the same handlers are also installed app-wide by register_app_handlers()
to cover unmatched URLs and oversized request bodies.
"""

from flask import jsonify
from api import api_bp


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(405)
def api_method_not_allowed(_e):
    return jsonify({"error": "method not allowed"}), 405


@api_bp.errorhandler(413)
def api_too_large(_e):
    return jsonify({"error": "file too large"}), 413


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500


def register_app_handlers(app):
    app.register_error_handler(400, api_bad_request)
    app.register_error_handler(404, api_not_found)
    app.register_error_handler(405, api_method_not_allowed)
    app.register_error_handler(413, api_too_large)
    app.register_error_handler(500, api_server_error)
