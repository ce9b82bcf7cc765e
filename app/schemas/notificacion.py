"""Pydantic v2 schemas for in-app notifications."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificacionResponse(BaseModel):
    id: int
    mensaje: str
    leida: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
