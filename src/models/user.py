"""User database model.

This module defines the User database model using SQLAlchemy.
"""

import enum

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class UserRole(str, enum.Enum):
    """Roles a user can hold."""

    MEMBER = "MEMBER"
    APPROVER = "APPROVER"


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.MEMBER.value)  # 'MEMBER' or 'APPROVER'
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    purchase_requests = relationship("PurchaseRequestModel", back_populates="user")
