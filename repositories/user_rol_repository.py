"""
Repositorio para la asignación de roles a usuarios.
"""

from typing import Iterable, List
import logging

from repositories.base_repository import BaseRepository
from database.context import ApplicationDbContext
from database.models import UserRolORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class UserRolRepository(BaseRepository[UserRolORM]):
    """Repositorio para la gestión de la relación usuario-rol."""

    def __init__(self, context: ApplicationDbContext):
        super().__init__(context, UserRolORM)

    def find_by_user(self, user_id: int) -> List[UserRolORM]:
        """Asignaciones de rol del usuario, ordenadas por rol."""
        try:
            return (
                self.context.set(UserRolORM)
                .filter(UserRolORM.user_id == user_id)
                .order_by(UserRolORM.rol_id)
                .all()
            )
        except Exception as e:
            logger.error(f"Error finding roles of user {user_id}: {e}")
            raise DatabaseException("Error al buscar roles del usuario")

    def assign_roles(self, user_id: int, rol_ids: Iterable[int]) -> List[UserRolORM]:
        """
        Reemplaza los roles del usuario por `rol_ids` en un único guardado.

        Las asignaciones que ya existen se conservan; las que sobran se eliminan.

        Returns:
            Asignaciones vigentes del usuario
        """
        wanted = list(dict.fromkeys(rol_ids))
        try:
            current = self.find_by_user(user_id)
            current_ids = {user_rol.rol_id for user_rol in current}

            self.context.remove_range(u for u in current if u.rol_id not in wanted)
            self.context.add_range(
                UserRolORM(user_id=user_id, rol_id=rol_id)
                for rol_id in wanted if rol_id not in current_ids
            )
            self.context.save_changes()
        except DatabaseException:
            raise
        except Exception as e:
            logger.error(f"Error assigning roles to user {user_id}: {e}")
            raise DatabaseException("Error al asignar roles al usuario")
        return self.find_by_user(user_id)
