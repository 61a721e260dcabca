from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
from app.utils.utils import trim_value

class AttendingStatus(str, Enum):
    ATTENDING = "ATTENDING"
    NOT_ATTENDING = "NOT_ATTENDING"
    MAYBE = "MAYBE"

class WishModel(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ana",
                "message": "Congratulations! Wishing you a lifetime of happiness.",
                "attending": "ATTENDING"
            }
        }
    )

    name: str = Field(..., min_length=2, max_length=100, description="Name of the person sending the wish")
    message: str = Field(..., min_length=1, max_length=500, description="The wish message")
    attending: AttendingStatus = Field(..., description="Attendance status")

    @field_validator("name", "message", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return trim_value(value)

class WishResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Wish identifier (generated)")
    name: str
    message: str
    attending: AttendingStatus
    timestamp: datetime = Field(..., description="Created timestamp (UTC)")

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite drops tzinfo; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

class WishStats(BaseModel):
    total: int
    attending: int
    notAttending: int
    maybe: int
