"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from config import Settings, load_settings
from core.database import get_db
from utils import purchase_request_manager
from utils import user_manager


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide Settings, built once on first use.

    Returns:
        Settings instance (singleton).
    """
    return load_settings()


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_purchase_request_manager(
    db: Session = Depends(get_db),
) -> purchase_request_manager.PurchaseRequestManager:
    """Get PurchaseRequestManager instance with request-scoped DB session."""
    return purchase_request_manager.PurchaseRequestManager(db)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
PurchaseRequestManagerDep = Annotated[
    purchase_request_manager.PurchaseRequestManager,
    Depends(get_purchase_request_manager),
]
