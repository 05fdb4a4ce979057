"""User schema definitions.

Request bodies accept camelCase or snake_case keys; responses use camelCase.
"""

from datetime import datetime
from typing import Annotated, Optional

import pytz
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset of stored timestamps; they are always UTC
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RegisterRequest(CamelModel):
    # Presence is checked by the route so that empty strings are rejected too
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(CamelModel):
    access_token: str = Field(description="Signed JWT valid for a short period.")


class UserPublic(CamelModel):
    """Public projection of a user, never exposing the password hash."""

    id: int
    username: str
    email: str
    created_at: UtcDatetime
