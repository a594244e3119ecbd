"""
Utilidades para manejo de fechas y zonas horarias.

Las columnas de auditoría se guardan como DateTime sin zona horaria,
expresadas en la hora local configurada (settings.timezone).
"""
from datetime import datetime
from zoneinfo import ZoneInfo
from config import settings


def get_local_now() -> datetime:
    """
    Obtiene la fecha y hora actual en la zona horaria local configurada.

    Returns:
        datetime: Fecha y hora actual con zona horaria.
    """
    return datetime.now(ZoneInfo(settings.timezone))


def get_audit_now() -> datetime:
    """Hora local actual sin tzinfo, lista para las columnas de auditoría."""
    return get_local_now().replace(tzinfo=None)
