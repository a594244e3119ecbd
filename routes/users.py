"""
User routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for user endpoints.
All business logic is delegated to the UserService layer.
"""

from fastapi import APIRouter, Depends, Query, status
import logging

from models.users import User, UserCreate, UserUpdate
from models.common import create_delete_response
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from core.exceptions import AppException
from services.user_service import UserService
from dependencies import get_user_service
from auth import get_current_user_dep, require_admin
from routes.errors import handle_service_exception, internal_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def crear_usuario(
    payload: UserCreate,
    current_user=Depends(get_current_user_dep),
    service: UserService = Depends(get_user_service),
):
    """
    Create a new user. The password is stored as a PBKDF2 salt + hash.
    """
    try:
        return service.create_user(payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("crear usuario", e)


@router.get("/me", response_model=User)
async def obtener_usuario_actual(
    current_user=Depends(get_current_user_dep),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_user(current_user.id)
    except AppException as e:
        raise handle_service_exception(e)


@router.get("/")
async def listar_usuarios(
    params: PaginationParams = Depends(pagination_params),
    active_only: bool = Query(False, description="Solo usuarios activos"),
    current_user=Depends(get_current_user_dep),
    service: UserService = Depends(get_user_service),
):
    """List users with pagination."""
    try:
        users, total = service.get_users(page=params.page, page_size=params.page_size, active_only=active_only)
        return create_paginated_response(users, params.page, params.page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("listar usuarios", e)


@router.get("/{user_id}", response_model=User)
async def obtener_usuario(
    user_id: int,
    current_user=Depends(get_current_user_dep),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_user(user_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener usuario", e)


@router.put("/{user_id}", response_model=User)
async def actualizar_usuario(
    user_id: int,
    payload: UserUpdate,
    current_user=Depends(get_current_user_dep),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.update_user(user_id, payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("actualizar usuario", e)


@router.delete("/{user_id}")
async def eliminar_usuario(
    user_id: int,
    logical: bool = Query(True, description="True: desactivar; False: eliminar físicamente"),
    current_user=Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Deactivate (or delete) a user (ADMIN ONLY)."""
    try:
        service.delete(user_id, logical=logical)
        return create_delete_response("Usuario eliminado", user_id, logical)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("eliminar usuario", e)


@router.patch("/{user_id}/restore", response_model=User)
async def restaurar_usuario(
    user_id: int,
    current_user=Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Reactivate a user (ADMIN ONLY)."""
    try:
        service.restore(user_id)
        return service.get_user(user_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("restaurar usuario", e)
