"""Purchase request database model."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class PurchaseRequestStatus(str, enum.Enum):
    """Lifecycle states of a purchase request."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PurchaseRequestModel(Base):
    __tablename__ = "purchase_requests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    status = Column(
        String,
        nullable=False,
        index=True,
        default=PurchaseRequestStatus.DRAFT.value,
    )
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    user = relationship("UserModel", back_populates="purchase_requests")
    history = relationship(
        "ApprovalHistoryModel",
        back_populates="purchase_request",
        order_by="ApprovalHistoryModel.id",
    )
    request_items = relationship("RequestItemModel", back_populates="purchase_request")
