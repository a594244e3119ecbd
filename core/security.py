"""
Utilidades de seguridad para validación y permisos.
"""

from typing import Iterable
from core.exceptions import ValidationException, ForbiddenException


def validate_id(value, field_name: str = "id") -> int:
    """
    Valida que un identificador sea un entero positivo.

    Args:
        value: Valor a validar
        field_name: Nombre del campo para mensajes de error

    Returns:
        El identificador como entero

    Raises:
        ValidationException: Si el valor no es un entero mayor que cero
    """
    try:
        id_value = int(value)
    except (ValueError, TypeError):
        raise ValidationException(
            message=f"{field_name} debe ser un número entero",
            field=field_name,
            details={"value": str(value)}
        )
    if id_value <= 0:
        raise ValidationException(
            message="El ID debe ser mayor que cero",
            field=field_name,
            details={"value": str(value)}
        )
    return id_value


def require_role(user_roles: Iterable[str], *allowed_roles: str) -> None:
    """
    Check if the user holds at least one of the allowed roles.

    Args:
        user_roles: Role names assigned to the current user
        allowed_roles: Tuple of allowed roles

    Raises:
        ForbiddenException: If none of the user roles is allowed
    """
    user_roles = list(user_roles)
    if not set(user_roles) & set(allowed_roles):
        raise ForbiddenException(
            message="Permisos insuficientes",
            details={
                "user_roles": user_roles,
                "required_roles": list(allowed_roles)
            }
        )
