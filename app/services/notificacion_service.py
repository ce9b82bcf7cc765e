"""
Notificaciones service layer.

Notifications are side effects of state-changing operations (order created,
budget generated, state changes).  ``emitir`` only stages the row in the
caller's session; it is committed together with the operation that produced
it, so a failed operation never leaves a dangling notification behind.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.notificacion import Notificacion
from app.utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def emitir(db: Session, mensaje: str) -> Notificacion:
    """Stage a new unread notification.

    Does NOT commit. The caller commits once its own writes are staged.

    Args:
        db: Active SQLAlchemy session.
        mensaje: Message shown to the user.

    Returns:
        The flushed ``Notificacion`` instance (with ``id`` assigned).
    """
    notificacion = Notificacion(mensaje=mensaje[:500], leida=False)
    db.add(notificacion)
    db.flush()
    logger.debug("emitir: notificacion id=%d '%s'", notificacion.id, mensaje)
    return notificacion


def list_notificaciones(db: Session) -> list[Notificacion]:
    """Return all notifications, newest first."""
    return (
        db.query(Notificacion)
        .order_by(Notificacion.created_at.desc(), Notificacion.id.desc())
        .all()
    )


def marcar_leida(db: Session, notificacion_id: int) -> Notificacion:
    """Mark one notification as read.

    Raises:
        NotFoundError: If the notification does not exist.
    """
    notificacion: Notificacion | None = (
        db.query(Notificacion).filter(Notificacion.id == notificacion_id).first()
    )
    if notificacion is None:
        raise NotFoundError(f"Notificación con ID {notificacion_id} no encontrada.")

    notificacion.leida = True
    commit_or_raise(db, "marcar notificación como leída")
    db.refresh(notificacion)

    logger.info("marcar_leida: id=%d", notificacion_id)
    return notificacion


def marcar_todas(db: Session) -> list[Notificacion]:
    """Mark every unread notification as read and return the full list."""
    actualizadas = (
        db.query(Notificacion)
        .filter(Notificacion.leida.is_(False))
        .update({Notificacion.leida: True}, synchronize_session="fetch")
    )
    commit_or_raise(db, "marcar todas las notificaciones como leídas")

    logger.info("marcar_todas: %d notificaciones actualizadas", actualizadas)
    return list_notificaciones(db)
