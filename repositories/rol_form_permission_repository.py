"""
Repositorio para la relación rol / formulario / permiso.
"""

from typing import Iterable, List, Tuple
import logging

from repositories.base_repository import BaseRepository
from database.context import ApplicationDbContext
from database.models import RolFormPermissionORM
from models.roles import FormPermission, PermissionRow
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


PERMISSION_ROWS_BY_USER_SQL = """
SELECT r.type_rol AS rol, f.name AS form, p.name AS permission
FROM user_rol ur
JOIN rol r ON r.id = ur.rol_id
JOIN rol_form_permission rfp ON rfp.rol_id = r.id
JOIN form f ON f.id = rfp.form_id
JOIN permission p ON p.id = rfp.permission_id
WHERE ur.user_id = :user_id AND r.active = 1
ORDER BY r.type_rol, f.name, p.name
"""


class RolFormPermissionRepository(BaseRepository[RolFormPermissionORM]):
    """Repositorio para la gestión de permisos por formulario de cada rol."""

    def __init__(self, context: ApplicationDbContext):
        super().__init__(context, RolFormPermissionORM)

    def find_by_rol(self, rol_id: int) -> List[RolFormPermissionORM]:
        try:
            return (
                self.context.set(RolFormPermissionORM)
                .filter(RolFormPermissionORM.rol_id == rol_id)
                .order_by(RolFormPermissionORM.form_id, RolFormPermissionORM.permission_id)
                .all()
            )
        except Exception as e:
            logger.error(f"Error finding permissions of rol {rol_id}: {e}")
            raise DatabaseException("Error al buscar permisos del rol")

    def stage_permissions(self, rol_id: int, form_permissions: Iterable[FormPermission]) -> int:
        """
        Prepara en la sesión el reemplazo de los permisos del rol, sin guardar.

        Returns:
            Cantidad de combinaciones formulario/permiso deseadas
        """
        wanted: List[Tuple[int, int]] = list(dict.fromkeys(
            (fp.form_id, permission_id)
            for fp in form_permissions
            for permission_id in fp.permission_ids
        ))
        current = self.find_by_rol(rol_id)
        current_keys = {(rfp.form_id, rfp.permission_id) for rfp in current}

        self.context.remove_range(
            rfp for rfp in current if (rfp.form_id, rfp.permission_id) not in wanted
        )
        self.context.add_range(
            RolFormPermissionORM(rol_id=rol_id, form_id=form_id, permission_id=permission_id)
            for form_id, permission_id in wanted if (form_id, permission_id) not in current_keys
        )
        return len(wanted)

    def assign_permissions(self, rol_id: int, form_permissions: Iterable[FormPermission]) -> int:
        """
        Reemplaza los permisos del rol en un único guardado.

        Returns:
            Cantidad de filas afectadas por el guardado
        """
        try:
            self.stage_permissions(rol_id, form_permissions)
            return self.context.save_changes()
        except DatabaseException:
            raise
        except Exception as e:
            logger.error(f"Error assigning permissions to rol {rol_id}: {e}")
            raise DatabaseException("Error al asignar permisos al rol")

    async def assign_permissions_async(self, rol_id: int, form_permissions: Iterable[FormPermission]) -> int:
        try:
            self.stage_permissions(rol_id, form_permissions)
            return await self.context.save_changes_async()
        except DatabaseException:
            raise
        except Exception as e:
            logger.error(f"Error assigning permissions to rol {rol_id}: {e}")
            raise DatabaseException("Error al asignar permisos al rol")

    def get_form_permissions_by_rol(self, rol_id: int) -> List[FormPermission]:
        """
        Permisos del rol agrupados por formulario.

        Returns:
            Lista de FormPermission (un elemento por formulario)
        """
        grouped = {}
        for rfp in self.find_by_rol(rol_id):
            grouped.setdefault(rfp.form_id, []).append(rfp.permission_id)
        return [
            FormPermission(form_id=form_id, permission_ids=permission_ids)
            for form_id, permission_ids in grouped.items()
        ]

    async def get_permission_rows_by_user(self, user_id: int) -> List[PermissionRow]:
        """
        Filas planas rol / formulario / permiso del usuario (consulta SQL directa).

        Returns:
            Lista de PermissionRow, vacía si el usuario no tiene permisos
        """
        try:
            return await self.context.query_many_async(
                PermissionRow, PERMISSION_ROWS_BY_USER_SQL, {"user_id": user_id}
            )
        except Exception as e:
            logger.error(f"Error getting permissions of user {user_id}: {e}")
            raise DatabaseException("Error al obtener permisos del usuario")
