"""Pydantic v2 schemas for the provider registry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProveedorCreate(BaseModel):
    """Payload for ``POST /providers``."""

    rut: str | None = Field(default=None, max_length=12)
    razon_social: str = Field(..., min_length=1, max_length=300)
    nombre_comercial: str | None = Field(default=None, max_length=300)
    contacto: str | None = Field(default=None, max_length=200)
    telefono: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=200)


class ProveedorResponse(BaseModel):
    id: int
    rut: str | None = None
    razon_social: str
    nombre_comercial: str | None = None
    contacto: str | None = None
    telefono: str | None = None
    email: str | None = None
    activo: bool

    model_config = ConfigDict(from_attributes=True)
