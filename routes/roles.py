"""
Rol routes (Controllers).
"""

from fastapi import APIRouter, Depends, Query, status

from models.roles import Rol, RolCreate, RolUpdate
from models.common import create_delete_response
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from core.exceptions import AppException
from services.rol_service import RolService
from dependencies import get_rol_service
from auth import get_current_user_dep, require_admin
from routes.errors import handle_service_exception, internal_error

router = APIRouter(prefix="/roles", tags=["roles"])


@router.post("/", response_model=Rol, status_code=status.HTTP_201_CREATED)
async def crear_rol(
    payload: RolCreate,
    current_user=Depends(require_admin),
    service: RolService = Depends(get_rol_service),
):
    """Create a rol (ADMIN ONLY)."""
    try:
        return service.create_rol(payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("crear rol", e)


@router.get("/")
async def listar_roles(
    params: PaginationParams = Depends(pagination_params),
    active_only: bool = Query(False, description="Solo roles activos"),
    current_user=Depends(get_current_user_dep),
    service: RolService = Depends(get_rol_service),
):
    try:
        roles, total = service.get_roles(page=params.page, page_size=params.page_size, active_only=active_only)
        return create_paginated_response(roles, params.page, params.page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("listar roles", e)


@router.get("/{rol_id}", response_model=Rol)
async def obtener_rol(
    rol_id: int,
    current_user=Depends(get_current_user_dep),
    service: RolService = Depends(get_rol_service),
):
    try:
        return service.get_rol(rol_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener rol", e)


@router.put("/{rol_id}", response_model=Rol)
async def actualizar_rol(
    rol_id: int,
    payload: RolUpdate,
    current_user=Depends(require_admin),
    service: RolService = Depends(get_rol_service),
):
    try:
        return service.update_rol(rol_id, payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("actualizar rol", e)


@router.delete("/{rol_id}")
async def eliminar_rol(
    rol_id: int,
    logical: bool = Query(True, description="True: desactivar; False: eliminar físicamente"),
    current_user=Depends(require_admin),
    service: RolService = Depends(get_rol_service),
):
    try:
        service.delete(rol_id, logical=logical)
        return create_delete_response("Rol eliminado", rol_id, logical)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("eliminar rol", e)


@router.patch("/{rol_id}/restore", response_model=Rol)
async def restaurar_rol(
    rol_id: int,
    current_user=Depends(require_admin),
    service: RolService = Depends(get_rol_service),
):
    try:
        return Rol.model_validate(service.restore(rol_id))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("restaurar rol", e)
