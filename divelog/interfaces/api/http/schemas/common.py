"""Shared response envelopes and the camelCase base model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and renders camelCase keys; snake_case names also accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageRes(BaseModel):
    message: str


class TokenRes(BaseModel):
    token: str


class StatusRes(BaseModel):
    status: str
