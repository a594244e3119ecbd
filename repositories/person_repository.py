"""
Repositorio para la entidad Person.
"""

from typing import Optional
import logging

from repositories.base_repository import BaseRepository
from database.context import ApplicationDbContext
from database.models import PersonORM
from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class PersonRepository(BaseRepository[PersonORM]):
    """Repositorio para la gestión de personas."""

    def __init__(self, context: ApplicationDbContext):
        super().__init__(context, PersonORM)

    def find_by_document(self, number_identification: int) -> Optional[PersonORM]:
        """
        Busca una persona por su número de identificación.

        Returns:
            PersonORM o None si no se encuentra
        """
        try:
            return self.context.set(PersonORM).filter(
                PersonORM.number_identification == number_identification
            ).one_or_none()
        except Exception as e:
            logger.error(f"Error finding person by document {number_identification}: {e}")
            raise DatabaseException("Error al buscar persona por documento")

    def exists_document(self, number_identification: int, exclude_id: Optional[int] = None) -> bool:
        """Verifica si el número de identificación ya está registrado."""
        try:
            query = self.context.set(PersonORM).filter(
                PersonORM.number_identification == number_identification
            )
            if exclude_id:
                query = query.filter(PersonORM.id != exclude_id)
            return query.first() is not None
        except Exception as e:
            logger.error(f"Error checking document {number_identification}: {e}")
            raise DatabaseException("Error al verificar documento")
