"""
services.users_service - Portal account registration, login and profile edits.

Passwords are stored as Werkzeug salted hashes and compared with
check_password_hash; the plaintext never reaches the database.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from db.models import User

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Raised when registering an email that already has an account."""
    pass


class UsersService:

    @staticmethod
    def get_by_email(session: Session, email: str) -> User | None:
        return session.scalars(select(User).where(User.email == email)).first()

    @staticmethod
    def list_users(session: Session) -> list[User]:
        return list(session.scalars(select(User).order_by(User.id)))

    @staticmethod
    def register(session: Session, name: str, email: str, password: str) -> User:
        email = email.strip()
        if UsersService.get_by_email(session, email):
            raise UserExistsError(f"Email already registered: {email}")
        user = User(
            name=str(name or "").strip(),
            email=email,
            password_hash=generate_password_hash(password),
        )
        session.add(user)
        session.flush()
        logger.info(f"Registered user {email}")
        return user

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> User | None:
        """Return the user when the credentials match, else None."""
        user = UsersService.get_by_email(session, email.strip())
        if user is None:
            logger.info(f"Login failed, unknown user: {email}")
            return None
        if not check_password_hash(user.password_hash, password):
            logger.info(f"Login failed, password mismatch for: {email}")
            return None
        return user

    @staticmethod
    def update_profile(session: Session, user: User,
                       name: str | None = None, password: str | None = None) -> User:
        """Change the display name and/or password; None leaves a field as is."""
        if name is not None:
            user.name = str(name).strip()
        if password:
            user.password_hash = generate_password_hash(password)
        session.flush()
        return user
