"""
Repositorio para la entidad User.
Gestiona todas las operaciones de base de datos relacionadas con los usuarios.
"""

from typing import List, Optional
import logging

from repositories.base_repository import BaseRepository
from database.context import ApplicationDbContext
from database.models import UserORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


USER_ROLE_NAMES_SQL = """
SELECT r.type_rol
FROM user_rol ur
JOIN rol r ON r.id = ur.rol_id
WHERE ur.user_id = :user_id AND r.active = 1
ORDER BY r.type_rol
"""


class UserRepository(BaseRepository[UserORM]):
    """Repositorio para la gestión de entidades de usuario."""

    def __init__(self, context: ApplicationDbContext):
        """
        Inicializa el repositorio de usuarios.

        Args:
            context: Contexto de persistencia
        """
        super().__init__(context, UserORM)

    def find_by_username(self, username: str) -> Optional[UserORM]:
        """
        Busca un usuario por username.

        Args:
            username: para buscar usuario

        Returns:
            UserORM instance or None si no se encuentra
        """
        try:
            return self.context.set(UserORM).filter(
                UserORM.username == username
            ).one_or_none()
        except Exception as e:
            logger.error(f"Error finding user by username {username}: {e}")
            raise DatabaseException("Error al buscar usuario por username")

    def exists_username(
        self,
        username: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        """
        Verifica si un username ya existe.

        Args:
            username: Username a verificar
            exclude_id: ID de usuario opcional para excluir de la verificación (para actualizaciones)

        Returns:
            True si el username existe, False en caso contrario
        """
        try:
            query = self.context.set(UserORM).filter(
                UserORM.username == username
            )

            if exclude_id:
                query = query.filter(UserORM.id != exclude_id)

            return query.first() is not None
        except Exception as e:
            logger.error(f"Error checking if username exists {username}: {e}")
            raise DatabaseException("Error al verificar username")

    def get_role_names(self, user_id: int) -> List[str]:
        """
        Nombres de los roles activos asignados al usuario (consulta SQL directa).

        Returns:
            Lista de nombres de rol, vacía si no tiene roles
        """
        try:
            return self.context.query_many(str, USER_ROLE_NAMES_SQL, {"user_id": user_id})
        except Exception as e:
            logger.error(f"Error getting roles for user {user_id}: {e}")
            raise DatabaseException("Error al obtener los roles del usuario")
