""" Utilidades principales y componentes compartidos para la aplicación.

Este paquete contiene:

- Excepciones personalizadas
- Utilidades de seguridad
- Funciones auxiliares de paginación
"""

from .exceptions import (
    AppException,
    BusinessException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
    DuplicateException,
    ForbiddenException,
    DatabaseException,
    ConfigurationException,
)
from .security import (
    validate_id,
    require_role,
)
from .pagination import (
    PaginationParams,
    PaginationMeta,
    pagination_params,
    calculate_pagination_meta,
    create_paginated_response,
    calculate_skip,
)

__all__ = [
    # Excepciones
    "AppException",
    "BusinessException",
    "NotFoundException",
    "UnauthorizedException",
    "ValidationException",
    "DuplicateException",
    "ForbiddenException",
    "DatabaseException",
    "ConfigurationException",
    # seguridad
    "validate_id",
    "require_role",
    # paginacion
    "PaginationParams",
    "PaginationMeta",
    "pagination_params",
    "calculate_pagination_meta",
    "create_paginated_response",
    "calculate_skip",
]
