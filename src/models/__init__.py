from .base import Base
from .user import UserModel, UserRole
from .purchase_request import PurchaseRequestModel, PurchaseRequestStatus
from .approval_history import ApprovalHistoryModel
from .item import ItemModel, RequestItemModel

__all__ = [
    "Base",
    "UserModel",
    "UserRole",
    "PurchaseRequestModel",
    "PurchaseRequestStatus",
    "ApprovalHistoryModel",
    "ItemModel",
    "RequestItemModel",
]
