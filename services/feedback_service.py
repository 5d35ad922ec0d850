"""
services.feedback_service - Store and list public feedback messages.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import Feedback


class FeedbackService:

    @staticmethod
    def submit(session: Session, name: str, email: str, message: str) -> Feedback:
        fb = Feedback(
            name=(name or "").strip(),
            email=(email or "").strip(),
            message=message.strip(),
        )
        session.add(fb)
        session.flush()
        return fb

    @staticmethod
    def list_all(session: Session) -> list[Feedback]:
        return list(session.scalars(select(Feedback).order_by(Feedback.id)))
