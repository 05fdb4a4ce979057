"""Purchase request routes.

Every endpoint requires a bearer token. Ownership and role rules live in
PurchaseRequestManager.
"""

from typing import Dict, List

from fastapi import APIRouter, status

from api.routes.auth import CurrentUserIdDep
from core.dependencies import PurchaseRequestManagerDep
from core.exceptions import ValidationError
from schemas.purchase_request import (
    ApprovalHistoryInfo,
    CreatedPurchaseRequest,
    CreateItemRequest,
    CreatePurchaseRequestRequest,
    ItemInfo,
    PurchaseRequestInfo,
    RequestItemInfo,
    UpdatePurchaseRequestRequest,
)

router = APIRouter(prefix="/requests", tags=["PurchaseRequest"])


@router.get(
    "/reports/summary",
    response_model=Dict[str, int],
    summary="Count purchase requests per status",
)
def summary(
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> Dict[str, int]:
    return manager.summary()


@router.post("/createItem", response_model=ItemInfo, summary="Create an item")
def create_item(
    req: CreateItemRequest,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> ItemInfo:
    item = manager.create_item(req.item_name, req.item_cost)
    return ItemInfo.model_validate(item)


@router.get("", response_model=List[PurchaseRequestInfo], summary="List my purchase requests")
def list_mine(
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> List[PurchaseRequestInfo]:
    """List purchase requests owned by the caller, newest first."""
    models = manager.list_mine(current_user_id)
    return [PurchaseRequestInfo.model_validate(m) for m in models]


@router.post(
    "",
    response_model=CreatedPurchaseRequest,
    status_code=status.HTTP_201_CREATED,
    summary="Create a purchase request",
)
def create(
    req: CreatePurchaseRequestRequest,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> CreatedPurchaseRequest:
    """Create a DRAFT purchase request for the caller.

    Args:
        req: Body with ``name`` and an optional ``item`` id to attach.
        manager: Injected PurchaseRequestManager instance.
        current_user_id: Authenticated caller.

    Returns:
        The created purchase request and its item link, if any.

    Raises:
        ValidationError: If ``name`` is missing (400).
        NotFoundError: If ``item`` does not reference an item (404).
    """
    if not req.name:
        raise ValidationError("Missing name.")

    model, request_item = manager.create(req.name, current_user_id, req.item)
    created = CreatedPurchaseRequest.model_validate(model)
    if request_item is not None:
        created.request_item = RequestItemInfo.model_validate(request_item)
    return created


@router.get(
    "/{purchase_request_id}",
    response_model=PurchaseRequestInfo,
    summary="Get one of my purchase requests",
)
def get_mine(
    purchase_request_id: int,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> PurchaseRequestInfo:
    model = manager.get_mine(purchase_request_id, current_user_id)
    return PurchaseRequestInfo.model_validate(model)


@router.patch(
    "/{purchase_request_id}",
    response_model=PurchaseRequestInfo,
    summary="Update one of my purchase requests",
)
def update_mine(
    purchase_request_id: int,
    req: UpdatePurchaseRequestRequest,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> PurchaseRequestInfo:
    """Apply the supplied name and/or status to an owned purchase request."""
    model = manager.update_mine(
        purchase_request_id,
        current_user_id,
        name=req.name,
        status=req.status.value if req.status else None,
    )
    return PurchaseRequestInfo.model_validate(model)


@router.post(
    "/{purchase_request_id}/submit",
    response_model=PurchaseRequestInfo,
    summary="Submit one of my purchase requests",
)
def submit(
    purchase_request_id: int,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> PurchaseRequestInfo:
    model = manager.submit(purchase_request_id, current_user_id)
    return PurchaseRequestInfo.model_validate(model)


@router.post(
    "/{purchase_request_id}/approve",
    response_model=PurchaseRequestInfo,
    summary="Approve a purchase request",
)
def approve(
    purchase_request_id: int,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> PurchaseRequestInfo:
    """Approve a purchase request. The caller must be an approver."""
    model = manager.approve(purchase_request_id, current_user_id)
    return PurchaseRequestInfo.model_validate(model)


@router.post(
    "/{purchase_request_id}/reject",
    response_model=PurchaseRequestInfo,
    summary="Reject a purchase request",
)
def reject(
    purchase_request_id: int,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> PurchaseRequestInfo:
    """Reject a purchase request. The caller must be an approver."""
    model = manager.reject(purchase_request_id, current_user_id)
    return PurchaseRequestInfo.model_validate(model)


@router.get(
    "/{purchase_request_id}/history",
    response_model=List[ApprovalHistoryInfo],
    summary="List approval history of one of my purchase requests",
)
def list_history(
    purchase_request_id: int,
    manager: PurchaseRequestManagerDep,
    current_user_id: CurrentUserIdDep,
) -> List[ApprovalHistoryInfo]:
    models = manager.list_history(purchase_request_id, current_user_id)
    return [ApprovalHistoryInfo.model_validate(m) for m in models]
