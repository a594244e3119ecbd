"""
Capa de servicio para la lógica de negocio.
Este paquete contiene clases de servicio que implementan la lógica de negocio
y orquestan las operaciones entre repositorios.
"""

from .base_service import BaseService
from .person_service import PersonService
from .user_service import UserService
from .rol_service import RolService
from .user_rol_service import UserRolService
from .rol_form_permission_service import RolFormPermissionService
from .catalog_service import CatalogService, CatalogDefinition

__all__ = [
    "BaseService",
    "PersonService",
    "UserService",
    "RolService",
    "UserRolService",
    "RolFormPermissionService",
    "CatalogService",
    "CatalogDefinition",
]
