"""Pydantic schemas for login, registration, and accounts."""

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Credentials(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str


class AccountRead(BaseModel):
    id: int
    identity_id: int
    daily_limit: int

    model_config = {"from_attributes": True}
