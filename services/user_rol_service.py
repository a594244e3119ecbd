"""
Service for the user / rol assignment.
"""

from typing import List
import logging

from services.base_service import BaseService
from repositories.user_rol_repository import UserRolRepository
from repositories.user_repository import UserRepository
from repositories.rol_repository import RolRepository
from database.models import UserRolORM
from models.roles import UserRol, UserRolAssign
from core.exceptions import BusinessException
from core.security import validate_id

logger = logging.getLogger(__name__)


class UserRolService(BaseService[UserRolORM, UserRolRepository]):
    """Service for assigning roles to users."""

    def __init__(
        self,
        repository: UserRolRepository,
        user_repository: UserRepository,
        rol_repository: RolRepository,
    ):
        super().__init__(repository)
        self.user_repository = user_repository
        self.rol_repository = rol_repository

    def assign_roles(self, payload: UserRolAssign) -> List[UserRol]:
        """
        Reemplaza los roles del usuario por los indicados.

        Raises:
            NotFoundException: Si el usuario o algún rol no existe
            BusinessException: Si el usuario o algún rol está desactivado
        """
        user = self.user_repository.get_by_id_or_fail(validate_id(payload.user_id, "user_id"))
        self.validate_active(user)

        for rol_id in payload.rol_ids:
            rol = self.rol_repository.get_by_id_or_fail(validate_id(rol_id, "rol_id"))
            if not rol.active:
                raise BusinessException(f"El rol {rol.type_rol} está desactivado")

        assigned = self.repository.assign_roles(user.id, payload.rol_ids)
        logger.info(f"User {user.id} now has roles {[a.rol_id for a in assigned]}")
        return [UserRol.model_validate(a) for a in assigned]

    def get_roles_by_user(self, user_id: int) -> List[UserRol]:
        user = self.user_repository.get_by_id_or_fail(validate_id(user_id, "user_id"))
        return [UserRol.model_validate(a) for a in self.repository.find_by_user(user.id)]
