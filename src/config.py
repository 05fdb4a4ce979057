"""Configuration module for the Purchase Request API.

This module provides centralized configuration management, including directory
paths, API server settings and the runtime ``Settings`` consumed by the auth
and purchase-request components. All values can be overridden via environment
variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

DEFAULT_DATABASE_URL = f"sqlite:///{DATA_DIR}/purchase_requests.db"

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

# bcrypt work factor for password hashes
BCRYPT_ROUNDS = 12

JWT_ALGORITHM = "HS256"
DEFAULT_JWT_ISSUER = "buyinbuyout-api"
DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 15


class Settings(BaseModel):
    """Runtime settings shared by the auth and purchase-request components.

    Built once at startup by ``load_settings`` and treated as immutable.
    """

    model_config = ConfigDict(frozen=True)

    jwt_secret: Optional[str] = Field(
        default=None,
        repr=False,
        description="HS256 signing key. Required to issue tokens.",
    )
    jwt_issuer: str = Field(default=DEFAULT_JWT_ISSUER)
    jwt_algorithm: str = Field(default=JWT_ALGORITHM)
    access_token_expire_minutes: int = Field(
        default=DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES
    )
    database_url: str = Field(default=DEFAULT_DATABASE_URL)


def load_settings() -> Settings:
    """Build ``Settings`` from the process environment.

    Returns:
        A frozen Settings instance.
    """
    return Settings(
        jwt_secret=os.getenv("JWT_SECRET") or None,
        jwt_issuer=os.getenv("JWT_ISSUER", DEFAULT_JWT_ISSUER),
        access_token_expire_minutes=int(
            os.getenv(
                "ACCESS_TOKEN_EXPIRE_MINUTES",
                str(DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES),
            )
        ),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
    )
