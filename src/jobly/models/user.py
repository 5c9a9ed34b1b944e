"""Pydantic models for token issuance."""

from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1, max_length=25)
    is_admin: bool = Field(default=False, alias="isAdmin")


class TokenResponse(BaseModel):
    token: str
