"""
Excepciones de la aplicación.

Cada excepción lleva el código HTTP con el que la capa de rutas la responde
(ver routes/errors.py). El contexto de persistencia no las usa para envolver
errores del driver: esos llegan tal cual a los repositorios, que los
traducen a DatabaseException.
"""

from typing import Optional, Any


class AppException(Exception):
    """Excepción base para todos los errores de la aplicación."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class BusinessException(AppException):
    """Regla de negocio incumplida (registro desactivado, rol inactivo...)."""

    status_code = 400


class NotFoundException(AppException):
    """El recurso solicitado no existe."""

    status_code = 404

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} no encontrado"
        if identifier:
            message += f": {identifier}"
        super().__init__(message, details)


class UnauthorizedException(AppException):
    """Autenticación requerida o fallida."""

    status_code = 401

    def __init__(self, message: str = "No autenticado", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class ForbiddenException(AppException):
    """El usuario no tiene el rol necesario."""

    status_code = 403

    def __init__(
        self,
        message: str = "No autorizado para realizar esta acción",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ValidationException(AppException):
    """Dato de entrada inválido que pydantic no puede detectar (p. ej. IDs de ruta)."""

    status_code = 422

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details)


class DuplicateException(AppException):
    """Valor único ya registrado (documento, username, nombre de rol)."""

    status_code = 400

    def __init__(
        self,
        resource: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} duplicado (ya existe)"
        if field and value:
            message += f": {field}='{value}'"
        super().__init__(message, details)


class DatabaseException(AppException):
    """Fallo de la base de datos traducido por un repositorio."""

    def __init__(self, message: str = "Error de base de datos", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class ConfigurationException(AppException):
    """Configuración inválida detectada al construir el contexto (registro de mapeos)."""

    def __init__(self, message: str = "Configuración inválida", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)
