"""
Repositorio para la entidad Rol.
"""

from typing import Optional
import logging

from repositories.base_repository import BaseRepository
from database.context import ApplicationDbContext
from database.models import RolORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class RolRepository(BaseRepository[RolORM]):
    """Repositorio para la gestión de roles."""

    def __init__(self, context: ApplicationDbContext):
        super().__init__(context, RolORM)

    def exists_type_rol(self, type_rol: str, exclude_id: Optional[int] = None) -> bool:
        """Verifica si ya existe un rol con ese nombre."""
        try:
            query = self.context.set(RolORM).filter(RolORM.type_rol == type_rol)
            if exclude_id:
                query = query.filter(RolORM.id != exclude_id)
            return query.first() is not None
        except Exception as e:
            logger.error(f"Error checking rol {type_rol}: {e}")
            raise DatabaseException("Error al verificar rol")
