"""
api - REST API layer.

All route modules register on a single Flask Blueprint
with url_prefix /api.
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api")

# Import route modules so their @api_bp decorators execute
from api import routes_admin      # noqa: F401, E402
from api import routes_students   # noqa: F401, E402
from api import routes_users      # noqa: F401, E402
from api import routes_feedback   # noqa: F401, E402
from api import routes_health     # noqa: F401, E402
from api import errors            # noqa: F401, E402
