"""
User / rol assignment routes.
"""

from typing import List
from fastapi import APIRouter, Depends

from models.roles import UserRol, UserRolAssign
from core.exceptions import AppException
from services.user_rol_service import UserRolService
from dependencies import get_user_rol_service
from auth import get_current_user_dep, require_admin
from routes.errors import handle_service_exception, internal_error

router = APIRouter(prefix="/user-roles", tags=["user-roles"])


@router.post("/assign", response_model=List[UserRol])
async def asignar_roles(
    payload: UserRolAssign,
    current_user=Depends(require_admin),
    service: UserRolService = Depends(get_user_rol_service),
):
    """
    Replace the roles of a user (ADMIN ONLY).

    Roles not listed are removed; an empty list leaves the user without roles.
    """
    try:
        return service.assign_roles(payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("asignar roles", e)


@router.get("/user/{user_id}", response_model=List[UserRol])
async def roles_de_usuario(
    user_id: int,
    current_user=Depends(get_current_user_dep),
    service: UserRolService = Depends(get_user_rol_service),
):
    try:
        return service.get_roles_by_user(user_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener roles del usuario", e)
