"""Approval history database model.

Rows are append-only: one per approve/reject action.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class ApprovalHistoryModel(Base):
    """Audit entry describing a status change made by an approver."""

    __tablename__ = "approval_history"

    id = Column(Integer, primary_key=True, index=True)
    purchase_request_id = Column(
        Integer,
        ForeignKey("purchase_requests.id"),
        index=True,
        nullable=False,
    )
    change = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    purchase_request = relationship("PurchaseRequestModel", back_populates="history")
