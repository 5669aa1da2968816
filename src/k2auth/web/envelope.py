"""K2 SmartObject response envelope.

K2 SmartObject reads the outcome from ``statusCode`` inside the body rather
than from the HTTP status, so every endpoint answers 200 with this envelope.
"""

from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

SUCCESS = 0
GENERAL_ERROR = 1
INVALID_INPUT = 400
NOT_FOUND = 404


class CamelModel(BaseModel):
    """Base for payloads serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class K2Response(CamelModel, Generic[T]):
    """Standard K2 SmartObject response structure."""

    status_code: int = Field(SUCCESS, description="0 = success, anything else = error")
    message: str = Field("", description="Human-readable outcome")
    data: T | None = Field(None, description="Payload, absent on error")
    total_records: int | None = Field(None, description="Total record count for list payloads")
    metadata: dict[str, Any] | None = None

    @classmethod
    def success(cls, data: T, message: str = "Success", total_records: int | None = None) -> Self:
        return cls(status_code=SUCCESS, message=message, data=data, total_records=total_records)

    @classmethod
    def error(cls, message: str, status_code: int = GENERAL_ERROR) -> Self:
        return cls(status_code=status_code, message=message)
