"""
api.routes_health - liveness probe.
"""

from datetime import datetime, timezone

from flask import jsonify

from api import api_bp


@api_bp.route("/health")
def health():
    return jsonify({
        "status": "OK",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })
