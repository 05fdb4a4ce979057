"""Purchase request management utilities.

This module implements the purchase request workflow: owner-scoped CRUD,
submission, approver decisions with an audit trail, the status summary and
item creation.
"""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import ForbiddenError, NotFoundError
from models.approval_history import ApprovalHistoryModel
from models.base import utcnow
from models.item import ItemModel, RequestItemModel
from models.purchase_request import PurchaseRequestModel, PurchaseRequestStatus
from models.user import UserModel, UserRole

logger = logging.getLogger(__name__)

PURCHASE_REQUEST_NOT_FOUND = "Purchase request not found."

# Audit entry written for each approver decision
DECISION_CHANGES = {
    PurchaseRequestStatus.APPROVED: "Purchase request changed to approved",
    PurchaseRequestStatus.REJECTED: "Purchase request changed to rejected",
}


class PurchaseRequestManager:
    """Manages purchase request operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize PurchaseRequestManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _get_owned(self, purchase_request_id: int, user_id: int) -> PurchaseRequestModel:
        model = (
            self.db.query(PurchaseRequestModel)
            .filter(
                PurchaseRequestModel.id == purchase_request_id,
                PurchaseRequestModel.user_id == user_id,
            )
            .first()
        )
        if not model:
            raise NotFoundError(PURCHASE_REQUEST_NOT_FOUND)
        return model

    def list_mine(self, user_id: int) -> List[PurchaseRequestModel]:
        """List purchase requests owned by a user, newest first."""
        return (
            self.db.query(PurchaseRequestModel)
            .filter(PurchaseRequestModel.user_id == user_id)
            .order_by(
                PurchaseRequestModel.created_at.desc(),
                PurchaseRequestModel.id.desc(),
            )
            .all()
        )

    def get_mine(self, purchase_request_id: int, user_id: int) -> PurchaseRequestModel:
        """Get a purchase request owned by ``user_id``.

        Raises:
            NotFoundError: If the request does not exist or belongs to
                someone else. Both cases look the same to the caller.
        """
        return self._get_owned(purchase_request_id, user_id)

    def create(
        self, name: str, user_id: int, item_id: Optional[int] = None
    ) -> Tuple[PurchaseRequestModel, Optional[RequestItemModel]]:
        """Create a DRAFT purchase request, optionally linked to an item.

        Args:
            name: Purchase request name.
            user_id: Owner user id.
            item_id: Optional id of an existing item to attach.

        Returns:
            The created request and the join row (None without an item).

        Raises:
            NotFoundError: If ``item_id`` does not reference an item.
        """
        if item_id is not None:
            item = self.db.query(ItemModel).filter(ItemModel.id == item_id).first()
            if not item:
                raise NotFoundError("Item not found.")

        model = PurchaseRequestModel(
            name=name,
            user_id=user_id,
            status=PurchaseRequestStatus.DRAFT.value,
        )
        self.db.add(model)
        self.db.flush()

        request_item = None
        if item_id is not None:
            request_item = RequestItemModel(purchase_request_id=model.id, item_id=item_id)
            self.db.add(request_item)

        self.db.commit()
        self.db.refresh(model)
        if request_item is not None:
            self.db.refresh(request_item)
        logger.info("Created purchase request id=%s for user id=%s", model.id, user_id)
        return model, request_item

    def update_mine(
        self,
        purchase_request_id: int,
        user_id: int,
        name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> PurchaseRequestModel:
        """Patch the name and/or status of an owned purchase request.

        Only truthy fields are applied. The status is written as given;
        the submit/approve/reject transitions are not checked here.

        Raises:
            NotFoundError: If no request matches both id and owner.
        """
        model = self._get_owned(purchase_request_id, user_id)
        if name:
            model.name = name
        if status:
            model.status = PurchaseRequestStatus(status).value
        model.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(model)
        return model

    def submit(self, purchase_request_id: int, user_id: int) -> PurchaseRequestModel:
        """Move an owned purchase request to SUBMITTED.

        The current status is not checked.

        Raises:
            NotFoundError: If no request matches both id and owner.
        """
        model = self._get_owned(purchase_request_id, user_id)
        previous = model.status
        # TODO: reject submissions that are not DRAFT once the workflow owner
        # confirms approved requests must not be reopened.
        model.status = PurchaseRequestStatus.SUBMITTED.value
        model.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(model)
        logger.info(
            "Submitted purchase request id=%s (was %s)", purchase_request_id, previous
        )
        return model

    def approve(self, purchase_request_id: int, user_id: int) -> PurchaseRequestModel:
        """Approve any user's purchase request. Requires the APPROVER role."""
        return self._decide(purchase_request_id, user_id, PurchaseRequestStatus.APPROVED)

    def reject(self, purchase_request_id: int, user_id: int) -> PurchaseRequestModel:
        """Reject any user's purchase request. Requires the APPROVER role."""
        return self._decide(purchase_request_id, user_id, PurchaseRequestStatus.REJECTED)

    def _decide(
        self,
        purchase_request_id: int,
        user_id: int,
        decision: PurchaseRequestStatus,
    ) -> PurchaseRequestModel:
        """Apply an approver decision and append its audit entry.

        Raises:
            ForbiddenError: If the caller is missing or not an approver.
            NotFoundError: If the purchase request does not exist.
        """
        role = self.db.query(UserModel.role).filter(UserModel.id == user_id).scalar()
        if role != UserRole.APPROVER.value:
            raise ForbiddenError("Forbidden.")

        model = (
            self.db.query(PurchaseRequestModel)
            .filter(PurchaseRequestModel.id == purchase_request_id)
            .first()
        )
        if not model:
            raise NotFoundError(PURCHASE_REQUEST_NOT_FOUND)

        model.status = decision.value
        model.updated_at = utcnow()
        self.db.commit()

        self.db.add(
            ApprovalHistoryModel(
                purchase_request_id=model.id,
                change=DECISION_CHANGES[decision],
            )
        )
        self.db.commit()
        self.db.refresh(model)
        logger.info(
            "Purchase request id=%s %s by user id=%s",
            model.id,
            decision.value,
            user_id,
        )
        return model

    def list_history(
        self, purchase_request_id: int, user_id: int
    ) -> List[ApprovalHistoryModel]:
        """List audit entries of an owned purchase request, oldest first."""
        self._get_owned(purchase_request_id, user_id)
        return (
            self.db.query(ApprovalHistoryModel)
            .filter(ApprovalHistoryModel.purchase_request_id == purchase_request_id)
            .order_by(ApprovalHistoryModel.id)
            .all()
        )

    def summary(self) -> Dict[str, int]:
        """Count purchase requests per status present in storage."""
        rows = (
            self.db.query(PurchaseRequestModel.status, func.count(PurchaseRequestModel.id))
            .group_by(PurchaseRequestModel.status)
            .all()
        )
        return {status: count for status, count in rows}

    def create_item(self, name: Optional[str], cost: Optional[float]) -> ItemModel:
        model = ItemModel(name=name, cost=cost)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created item id=%s", model.id)
        return model
