from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    cost = Column(Float, nullable=True)


class RequestItemModel(Base):
    """Join row linking an item to a purchase request."""

    __tablename__ = "request_items"
    __table_args__ = (
        UniqueConstraint(
            "purchase_request_id",
            "item_id",
            name="uq_request_items_request_item",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    purchase_request_id = Column(
        Integer,
        ForeignKey("purchase_requests.id"),
        index=True,
        nullable=False,
    )
    item_id = Column(Integer, ForeignKey("items.id"), index=True, nullable=False)

    purchase_request = relationship("PurchaseRequestModel", back_populates="request_items")
    item = relationship("ItemModel")
