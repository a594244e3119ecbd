"""
Modelos de seguridad: roles, permisos, formularios, módulos y sus asignaciones.
"""
from pydantic import BaseModel, Field
from typing import Optional, List

from models.common import EntityResponse, AuditedResponse


# ==================== Rol ====================

class RolCreate(BaseModel):
    type_rol: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)


class RolUpdate(BaseModel):
    type_rol: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)


class Rol(AuditedResponse):
    type_rol: str
    description: Optional[str] = None


# ==================== Permission / Form / Module ====================

class PermissionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)


class PermissionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)


class Permission(AuditedResponse):
    name: str
    description: Optional[str] = None


class FormCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)
    path: Optional[str] = Field(None, max_length=200)


class FormUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)
    path: Optional[str] = Field(None, max_length=200)


class Form(AuditedResponse):
    name: str
    description: Optional[str] = None
    path: Optional[str] = None


class ModuleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)


class ModuleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)


class Module(AuditedResponse):
    name: str
    description: Optional[str] = None


class FormModuleCreate(BaseModel):
    status_procedure: Optional[str] = Field(None, max_length=50)
    form_id: int = Field(..., gt=0)
    module_id: int = Field(..., gt=0)


class FormModuleUpdate(BaseModel):
    status_procedure: Optional[str] = Field(None, max_length=50)
    form_id: Optional[int] = Field(None, gt=0)
    module_id: Optional[int] = Field(None, gt=0)


class FormModule(EntityResponse):
    status_procedure: Optional[str] = None
    form_id: int
    module_id: int


# ==================== UserRol ====================

class UserRolAssign(BaseModel):
    """Reemplaza los roles de un usuario por la lista indicada."""
    user_id: int = Field(..., gt=0)
    rol_ids: List[int] = Field(..., description="IDs de los roles a asignar")


class UserRol(EntityResponse):
    user_id: int
    rol_id: int


# ==================== RolFormPermission ====================

class FormPermission(BaseModel):
    form_id: int = Field(..., gt=0)
    permission_ids: List[int] = Field(default_factory=list)


class RolFormPermissionAssign(BaseModel):
    rol_id: int = Field(..., gt=0)
    form_permissions: List[FormPermission]


class RolFormPermission(EntityResponse):
    rol_id: int
    form_id: int
    permission_id: int


class PermissionRow(BaseModel):
    """Fila plana rol / formulario / permiso devuelta por la consulta SQL directa."""
    rol: str
    form: str
    permission: str


class FormWithPermissions(BaseModel):
    name: str
    permissions: List[str]


class RolWithForms(BaseModel):
    rol: str
    forms: List[FormWithPermissions]
