from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserIn(CamelModel):
    """Schema used for incoming create and update requests.

    Every field is optional here so that missing names or emails reach the
    handlers and get their specific 400 messages instead of a generic parse
    error.
    """

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    department: Optional[str] = Field(None, max_length=100)


class UserOut(CamelModel):
    """Schema used for responses, including server-generated fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    department: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class MessageOut(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class HealthStatus(BaseModel):
    status: str = "ok"
