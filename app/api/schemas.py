"""Schemas shared by every API route."""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, Field

from infrastructure.persistence import as_utc

PHONE_NUMBER_PATTERN = r"^\+[1-9]\d{7,14}$"
MAX_PAGE_LIMIT = 200

PhoneNumber = Annotated[
    str,
    Field(
        pattern=PHONE_NUMBER_PATTERN,
        description="Phone number in E.164 format",
        json_schema_extra={"example": "+18005550199"},
    ),
]

UTCTimestamp = Annotated[datetime, AfterValidator(as_utc)]


class ApiResponse(BaseModel):
    """Response envelope returned by every route."""

    status: str = "success"
    message: str
    data: Optional[Any] = None
