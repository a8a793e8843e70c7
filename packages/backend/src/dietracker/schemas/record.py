"""Pydantic schemas for intake records.

Learn: date_record is a calendar day. Clients that send a full timestamp
("2024-04-19T18:30:00Z") get it truncated to the day instead of a 422.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from dietracker.db.models import MAX_INTEGER


class RecordCreate(BaseModel):
    value: int = Field(..., ge=1, le=MAX_INTEGER)
    date_record: date

    @field_validator("date_record", mode="before")
    @classmethod
    def truncate_timestamp(cls, v):
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v


class RecordCreated(BaseModel):
    id: int


class RecordRead(BaseModel):
    id: int
    account_id: int
    value: int
    date_record: date
    date_created: datetime

    model_config = {"from_attributes": True}
