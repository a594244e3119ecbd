"""
Service for Rol business logic.
"""

from typing import List, Dict, Any
import logging

from services.base_service import BaseService
from repositories.rol_repository import RolRepository
from database.models import RolORM
from models.roles import Rol, RolCreate, RolUpdate
from core.exceptions import DuplicateException

logger = logging.getLogger(__name__)


class RolService(BaseService[RolORM, RolRepository]):
    """Service for managing roles."""

    def create_rol(self, rol_data: RolCreate) -> Rol:
        if self.repository.exists_type_rol(rol_data.type_rol):
            raise DuplicateException(resource="Rol", field="type_rol", value=rol_data.type_rol)

        created = self.repository.create(RolORM(**rol_data.model_dump()))
        logger.info(f"Rol {created.id} ({created.type_rol}) created")
        return Rol.model_validate(created)

    def get_rol(self, rol_id: int) -> Rol:
        return Rol.model_validate(self.get_by_id_or_fail(rol_id))

    def get_roles(
        self,
        page: int = 0,
        page_size: int = 50,
        active_only: bool = False
    ) -> tuple[List[Dict[str, Any]], int]:
        roles, total = self.get_all(page, page_size, active_only=active_only, order_by="type_rol")
        return [Rol.model_validate(r).model_dump() for r in roles], total

    def update_rol(self, rol_id: int, rol_update: RolUpdate) -> Rol:
        rol = self.get_by_id_or_fail(rol_id)
        self.validate_active(rol)

        update_data = rol_update.model_dump(exclude_unset=True)
        if "type_rol" in update_data and self.repository.exists_type_rol(
            update_data["type_rol"], exclude_id=rol.id
        ):
            raise DuplicateException(resource="Rol", field="type_rol", value=update_data["type_rol"])

        updated = self.repository.update(self.apply_changes(rol, update_data))
        logger.info(f"Rol {rol_id} updated")
        return Rol.model_validate(updated)
