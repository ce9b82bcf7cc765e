"""
Domain errors raised by the service layer.

Every error is an ``HTTPException`` so services can raise it directly and
FastAPI turns it into the right status code.  The ``codigo`` attribute is a
stable machine-readable identifier added to the JSON body by the handler
registered in ``app.main``.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class FlotaError(HTTPException):
    """Base class for all recoverable domain errors.

    Attributes:
        codigo: Stable error identifier, e.g. ``"NOT_FOUND"``.
    """

    http_status: int = status.HTTP_400_BAD_REQUEST
    codigo: str = "ERROR"

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=self.http_status, detail=detail)


class MissingFieldError(FlotaError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    codigo = "MISSING_FIELD"

    def __init__(self, campos: list[str]) -> None:
        self.campos = campos
        super().__init__(f"Campos obligatorios faltantes: {', '.join(campos)}.")


class InvalidStateError(FlotaError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    codigo = "INVALID_STATE"


class InvalidPriorityError(FlotaError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    codigo = "INVALID_PRIORITY"


class InvalidAmountError(FlotaError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    codigo = "INVALID_AMOUNT"


class NotFoundError(FlotaError):
    http_status = status.HTTP_404_NOT_FOUND
    codigo = "NOT_FOUND"


class NoChangesError(FlotaError):
    http_status = status.HTTP_400_BAD_REQUEST
    codigo = "NO_CHANGES"


class StorageUnavailableError(FlotaError):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    codigo = "STORAGE_UNAVAILABLE"
