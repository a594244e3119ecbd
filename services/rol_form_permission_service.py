"""
Service for the rol / form / permission matrix.
"""

from typing import List, Dict, Any
import logging

from services.base_service import BaseService
from repositories.base_repository import BaseRepository
from repositories.rol_repository import RolRepository
from repositories.user_repository import UserRepository
from repositories.rol_form_permission_repository import RolFormPermissionRepository
from database.models import RolFormPermissionORM
from models.roles import (
    FormPermission,
    FormWithPermissions,
    RolFormPermission,
    RolFormPermissionAssign,
    RolWithForms,
)
from core.exceptions import BusinessException, ValidationException
from core.security import validate_id

logger = logging.getLogger(__name__)


class RolFormPermissionService(BaseService[RolFormPermissionORM, RolFormPermissionRepository]):
    """Service for managing which permissions each rol has on each form."""

    def __init__(
        self,
        repository: RolFormPermissionRepository,
        rol_repository: RolRepository,
        form_repository: BaseRepository,
        permission_repository: BaseRepository,
        user_repository: UserRepository,
    ):
        super().__init__(repository)
        self.rol_repository = rol_repository
        self.form_repository = form_repository
        self.permission_repository = permission_repository
        self.user_repository = user_repository

    def get_rol_form_permissions(
        self,
        page: int = 0,
        page_size: int = 50
    ) -> tuple[List[Dict[str, Any]], int]:
        items, total = self.get_all(page, page_size)
        return [RolFormPermission.model_validate(i).model_dump() for i in items], total

    def _validate_assignment(self, payload: RolFormPermissionAssign) -> int:
        # la asignación reemplaza lo guardado; una lista vacía dejaría al rol sin permisos
        if not payload.form_permissions:
            raise ValidationException("Datos incompletos para la asignación", field="form_permissions")
        rol = self.rol_repository.get_by_id_or_fail(validate_id(payload.rol_id, "rol_id"))
        if not rol.active:
            raise BusinessException(f"El rol {rol.type_rol} está desactivado")
        for fp in payload.form_permissions:
            self.form_repository.get_by_id_or_fail(validate_id(fp.form_id, "form_id"))
            for permission_id in fp.permission_ids:
                self.permission_repository.get_by_id_or_fail(validate_id(permission_id, "permission_id"))
        return rol.id

    def assign_permissions(self, payload: RolFormPermissionAssign) -> List[FormPermission]:
        """
        Reemplaza los permisos por formulario del rol.

        Raises:
            ValidationException: Si no se envía ningún formulario
            NotFoundException: Si el rol, un formulario o un permiso no existe
            BusinessException: Si el rol está desactivado
        """
        rol_id = self._validate_assignment(payload)
        affected = self.repository.assign_permissions(rol_id, payload.form_permissions)
        logger.info(f"Rol {rol_id}: permisos asignados ({affected} cambios)")
        return self.repository.get_form_permissions_by_rol(rol_id)

    async def assign_permissions_async(self, payload: RolFormPermissionAssign) -> List[FormPermission]:
        rol_id = self._validate_assignment(payload)
        affected = await self.repository.assign_permissions_async(rol_id, payload.form_permissions)
        logger.info(f"Rol {rol_id}: permisos asignados ({affected} cambios)")
        return self.repository.get_form_permissions_by_rol(rol_id)

    def get_form_permissions_by_rol(self, rol_id: int) -> List[FormPermission]:
        rol = self.rol_repository.get_by_id_or_fail(validate_id(rol_id, "rol_id"))
        return self.repository.get_form_permissions_by_rol(rol.id)

    async def get_grouped_permissions_by_user(self, user_id: int) -> List[RolWithForms]:
        """
        Permisos del usuario agrupados por rol y formulario.

        Returns:
            [{rol, forms: [{name, permissions}]}], cada formulario una sola vez por rol
        """
        user = self.user_repository.get_by_id_or_fail(validate_id(user_id, "user_id"))
        rows = await self.repository.get_permission_rows_by_user(user.id)

        grouped: Dict[str, Dict[str, List[str]]] = {}
        for row in rows:
            permissions = grouped.setdefault(row.rol, {}).setdefault(row.form, [])
            if row.permission not in permissions:
                permissions.append(row.permission)

        return [
            RolWithForms(
                rol=rol,
                forms=[FormWithPermissions(name=name, permissions=perms) for name, perms in forms.items()],
            )
            for rol, forms in grouped.items()
        ]
