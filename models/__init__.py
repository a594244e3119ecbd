from .persons import Person, PersonCreate, PersonUpdate, TypeIdentification
from .users import User, UserCreate, UserUpdate
from .roles import (
    Rol,
    RolCreate,
    RolUpdate,
    UserRol,
    UserRolAssign,
    RolFormPermission,
    RolFormPermissionAssign,
    FormPermission,
    PermissionRow,
    FormWithPermissions,
    RolWithForms,
)
from .change_log import ChangeLog
from .common import (
    EntityResponse,
    AuditedResponse,
    DeleteResponse,
    HealthCheckResponse,
    create_delete_response,
)

__all__ = [
    # Personas
    "Person",
    "PersonCreate",
    "PersonUpdate",
    "TypeIdentification",
    # Usuarios
    "User",
    "UserCreate",
    "UserUpdate",
    # Roles y permisos
    "Rol",
    "RolCreate",
    "RolUpdate",
    "UserRol",
    "UserRolAssign",
    "RolFormPermission",
    "RolFormPermissionAssign",
    "FormPermission",
    "PermissionRow",
    "FormWithPermissions",
    "RolWithForms",
    # Auditoría
    "ChangeLog",
    # Comunes
    "EntityResponse",
    "AuditedResponse",
    "DeleteResponse",
    "HealthCheckResponse",
    "create_delete_response",
]
