"""Purchase request and item schema definitions."""

from typing import Optional

from models.purchase_request import PurchaseRequestStatus
from schemas.user import CamelModel, UtcDatetime


class CreatePurchaseRequestRequest(CamelModel):
    name: Optional[str] = None
    item: Optional[int] = None


class UpdatePurchaseRequestRequest(CamelModel):
    name: Optional[str] = None
    status: Optional[PurchaseRequestStatus] = None


class PurchaseRequestInfo(CamelModel):
    """Projection returned by every purchase request operation."""

    id: int
    name: str
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class RequestItemInfo(CamelModel):
    id: int
    purchase_request_id: int
    item_id: int


class CreatedPurchaseRequest(PurchaseRequestInfo):
    request_item: Optional[RequestItemInfo] = None


class ApprovalHistoryInfo(CamelModel):
    id: int
    purchase_request_id: int
    change: str
    created_at: UtcDatetime


class CreateItemRequest(CamelModel):
    item_name: Optional[str] = None
    item_cost: Optional[float] = None


class ItemInfo(CamelModel):
    name: str
    cost: Optional[float] = None
