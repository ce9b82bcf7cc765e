"""ProgramaMantencion model — scheduled maintenance task per vehicle."""

from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import validates

from app.database import Base
from app.utils.constants import TIPOS_CONTROL_MANTENCION


class ProgramaMantencion(Base):
    """Preventive maintenance task tracked either by date or by odometer.

    Attributes:
        id: Primary key.
        patente: Vehicle plate.
        tarea: Task name, e.g. "Cambio de aceite".
        tipo_control: "fecha" or "km".
        proxima_fecha: Due date (``tipo_control == "fecha"``).
        proximo_km: Odometer reading at which the task is due (``"km"``).
        km_actual: Latest odometer reading of the vehicle (``"km"``).
    """

    __tablename__ = "programa_mantencion"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patente = Column(String(20), nullable=False, index=True)
    tarea = Column(String(200), nullable=False)
    tipo_control = Column(String(10), nullable=False, default="fecha")
    proxima_fecha = Column(Date, nullable=True)
    proximo_km = Column(Integer, nullable=True)
    km_actual = Column(Integer, nullable=True)

    @validates("tipo_control")
    def _validar_tipo_control(self, key, valor):
        if valor not in TIPOS_CONTROL_MANTENCION:
            raise ValueError(
                f"tipo_control debe ser uno de {TIPOS_CONTROL_MANTENCION}, no {valor!r}."
            )
        return valor
