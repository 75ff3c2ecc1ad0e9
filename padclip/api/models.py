"""Pydantic request/response models for the HTTP API."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class AddEntryRequest(BaseModel):
    id: str = Field(min_length=1)
    content: str
    # Older clients send the key as "password"
    key: str | None = Field(None, validation_alias=AliasChoices("key", "password"))


class AddEntryResponse(BaseModel):
    id: str
    protected: bool


class RevealRequest(BaseModel):
    key: str = Field(validation_alias=AliasChoices("key", "password"))
