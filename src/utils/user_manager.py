"""User management utilities.

This module provides registration and login on top of SQLAlchemy, bcrypt
password hashing and JWT issuance.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import Settings
from core.exceptions import ConflictError, UnauthenticatedError, ValidationError
from core.security import create_access_token, hash_password, verify_password
from models.user import UserModel, UserRole

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


class UserManager:
    """Manages user persistence and authentication using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def register(self, username: str, email: str, password: str) -> UserModel:
        """Create a new user with a hashed password.

        Args:
            username: Desired username (unique).
            email: User email (unique).
            password: Plain text password.

        Returns:
            The created UserModel.

        Raises:
            ConflictError: If the email or username is already in use.
        """
        if self._find_existing(username, email):
            raise ConflictError("Email or username is already in use.")

        model = UserModel(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.MEMBER.value,
        )

        # Two concurrent registrations can both pass the check above; the
        # unique constraints catch the loser.
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email or username is already in use.") from e

        logger.info("Created user: id=%s", model.id)
        return model

    def _find_existing(self, username: str, email: str) -> bool:
        existing = (
            self.db.query(UserModel.id)
            .filter(or_(UserModel.email == email, UserModel.username == username))
            .first()
        )
        return existing is not None

    def login(self, email: str, password: str, settings: Settings) -> str:
        """Authenticate a user and issue an access token.

        Args:
            email: User email.
            password: Plain text password.
            settings: Runtime settings used to sign the token.

        Returns:
            Signed JWT access token.

        Raises:
            UnauthenticatedError: For an unknown email or a wrong password.
            ConfigurationError: If no signing secret is configured.
        """
        user = self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for email: %s", email)
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        return create_access_token(user.id, user.username, settings)

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.email == email).first()

    def get_user_by_username(self, username: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.username == username).first()

    def get_user_by_id(self, user_id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.id == user_id).first()

    def list_users(self) -> List[UserModel]:
        return self.db.query(UserModel).order_by(UserModel.id).all()

    def set_role(self, username: str, role: str) -> UserModel:
        """Assign a role to a user. Used by the operator CLI only.

        Raises:
            ValidationError: If the role is unknown.
            LookupError: If the user does not exist.
        """
        try:
            role = UserRole(role.upper()).value
        except ValueError as e:
            raise ValidationError(f"Invalid role: {role}") from e

        user = self.get_user_by_username(username)
        if user is None:
            raise LookupError(f"User '{username}' not found")
        user.role = role
        self.db.commit()
        self.db.refresh(user)
        logger.info("Set role of user id=%s to %s", user.id, role)
        return user
