"""
Receipt (boleta) storage for the expense ledger.

Only the relative path ends up on the ``gasto`` row.  The folder mirrors
the expense it belongs to, its plate and the month of its ``fecha``, so the
receipts of one vehicle for one month sit together::

    boletas/AB-1234/2026-03/20260304-3f9c1a2b7d4e.pdf

The uploader's file name is discarded; only a short alphanumeric extension
is kept.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import date
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

_EXTENSION_VALIDA = re.compile(r"^\.[a-z0-9]{1,8}$")
_FUERA_DE_PATENTE = re.compile(r"[^A-Z0-9-]")


def carpeta_boleta(patente: str, fecha: date) -> PurePosixPath:
    """Relative folder for the receipts of *patente* in the month of *fecha*."""
    placa = _FUERA_DE_PATENTE.sub("", patente.strip().upper()) or "SIN-PATENTE"
    return PurePosixPath("boletas", placa, f"{fecha:%Y-%m}")


def guardar_boleta(
    contenido: bytes,
    nombre_original: str | None,
    uploads_dir: Path,
    patente: str,
    fecha: date,
) -> str:
    """Write a receipt below *uploads_dir* and return its relative path.

    Args:
        contenido: Raw bytes of the uploaded file.
        nombre_original: File name sent by the client; only its extension
                         is used.
        uploads_dir: Upload root (``settings.UPLOADS_DIR``).
        patente: Plate of the expense, already validated.
        fecha: Date of the expense.

    Returns:
        Forward-slash path relative to *uploads_dir*, stored in
        ``gasto.boleta_path``.
    """
    extension = Path(nombre_original or "").suffix.lower()
    if not _EXTENSION_VALIDA.match(extension):
        extension = ""

    relativa = carpeta_boleta(patente, fecha) / (
        f"{fecha:%Y%m%d}-{uuid.uuid4().hex[:12]}{extension}"
    )
    destino = uploads_dir.joinpath(*relativa.parts)
    destino.parent.mkdir(parents=True, exist_ok=True)
    destino.write_bytes(contenido)

    logger.info("guardar_boleta: %s (%d bytes)", relativa, len(contenido))
    return relativa.as_posix()
