"""
services - Business-logic layer sitting between API and DB.
"""

from services.records_service import RecordsService              # noqa: F401
from services.users_service import UsersService, UserExistsError  # noqa: F401
from services.feedback_service import FeedbackService            # noqa: F401
