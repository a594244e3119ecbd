"""
Rol / form / permission routes.
"""

from typing import List
from fastapi import APIRouter, Depends

from models.roles import FormPermission, RolFormPermissionAssign, RolWithForms
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from models.common import create_delete_response
from core.exceptions import AppException
from services.rol_form_permission_service import RolFormPermissionService
from dependencies import get_rol_form_permission_service
from auth import get_current_user_dep, require_admin
from routes.errors import handle_service_exception, internal_error

router = APIRouter(prefix="/rol-form-permissions", tags=["rol-form-permissions"])


@router.get("/")
async def listar_permisos(
    params: PaginationParams = Depends(pagination_params),
    current_user=Depends(get_current_user_dep),
    service: RolFormPermissionService = Depends(get_rol_form_permission_service),
):
    try:
        items, total = service.get_rol_form_permissions(page=params.page, page_size=params.page_size)
        return create_paginated_response(items, params.page, params.page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("listar permisos", e)


@router.post("/assign", response_model=List[FormPermission])
async def asignar_permisos(
    payload: RolFormPermissionAssign,
    current_user=Depends(require_admin),
    service: RolFormPermissionService = Depends(get_rol_form_permission_service),
):
    """
    Replace the permissions a rol has on each form (ADMIN ONLY).

    Returns the resulting permissions grouped by form.
    """
    try:
        return await service.assign_permissions_async(payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("asignar permisos", e)


@router.get("/rol/{rol_id}", response_model=List[FormPermission])
async def permisos_por_rol(
    rol_id: int,
    current_user=Depends(get_current_user_dep),
    service: RolFormPermissionService = Depends(get_rol_form_permission_service),
):
    try:
        return service.get_form_permissions_by_rol(rol_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener permisos del rol", e)


@router.get("/user/{user_id}", response_model=List[RolWithForms])
async def permisos_por_usuario(
    user_id: int,
    current_user=Depends(get_current_user_dep),
    service: RolFormPermissionService = Depends(get_rol_form_permission_service),
):
    """Permissions of a user grouped by rol and form."""
    try:
        return await service.get_grouped_permissions_by_user(user_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener permisos del usuario", e)


@router.delete("/{rol_form_permission_id}")
async def eliminar_permiso(
    rol_form_permission_id: int,
    current_user=Depends(require_admin),
    service: RolFormPermissionService = Depends(get_rol_form_permission_service),
):
    try:
        service.delete(rol_form_permission_id, logical=False)
        return create_delete_response("Permiso eliminado", rol_form_permission_id, logical_delete=False)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("eliminar permiso", e)
