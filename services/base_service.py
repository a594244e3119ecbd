"""
Operaciones de negocio comunes a todas las entidades (capa Business).

Los servicios validan IDs y reglas de activación; la persistencia la hace el
repositorio sobre el ApplicationDbContext compartido del request.
"""

from typing import TypeVar, Generic, List, Optional
import logging

from core.exceptions import BusinessException
from core.pagination import calculate_skip
from core.security import validate_id

logger = logging.getLogger(__name__)

T = TypeVar('T')  # entidad ORM
R = TypeVar('R')  # repositorio de T


class BaseService(Generic[T, R]):
    """Consulta, borrado lógico o físico y restauración genéricos."""

    def __init__(self, repository: R):
        self.repository = repository

    def get_by_id(self, id: int) -> Optional[T]:
        """
        Busca por ID; None si no existe.

        Raises:
            ValidationException: Si el ID no es mayor que cero
        """
        return self.repository.get_by_id(validate_id(id))

    def get_by_id_or_fail(self, id: int) -> T:
        """
        Igual que get_by_id pero un ID inexistente es un error.

        Raises:
            ValidationException: Si el ID no es mayor que cero
            NotFoundException: If entity is not found
        """
        return self.repository.get_by_id_or_fail(validate_id(id))

    def get_all(
        self,
        page: int = 0,
        page_size: int = 50,
        active_only: bool = False,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> tuple[List[T], int]:
        """
        Página de entidades junto con el total (para PaginationMeta).

        Args:
            page: página 0-indexed
            page_size: registros por página
            active_only: excluir los registros desactivados
            order_by: columna de orden (por defecto el id)
            order_desc: orden descendente
        """
        skip = calculate_skip(page, page_size)

        items = self.repository.get_all(
            skip=skip,
            limit=page_size,
            active_only=active_only,
            order_by=order_by,
            order_desc=order_desc
        )

        total_count = self.repository.count(active_only=active_only)

        return items, total_count

    def exists(self, id: int) -> bool:
        return self.repository.exists(validate_id(id))

    def delete(self, id: int, logical: bool = True) -> None:
        """
        Borra una entidad. Las que no tienen columna `active` siempre se borran
        físicamente.

        Args:
            id: ID de la entidad
            logical: desactivar (delete_date) en lugar de borrar la fila

        Raises:
            NotFoundException: If entity is not found
            BusinessException: Si el registro ya está desactivado
        """
        entity = self.get_by_id_or_fail(id)

        if not logical or not hasattr(entity, 'active'):
            self.repository.delete(entity)
            return

        if not entity.active:
            raise BusinessException("El registro ya está desactivado")
        self.repository.set_active(entity, False)

    def restore(self, id: int) -> T:
        """
        Deshace un borrado lógico.

        Raises:
            NotFoundException: If entity is not found
            BusinessException: If entity is not deactivated
        """
        entity = self.get_by_id_or_fail(id)

        if not hasattr(entity, 'active') or entity.active:
            raise BusinessException("El registro no está desactivado")

        return self.repository.set_active(entity, True)

    def validate_active(self, entity: T) -> None:
        """
        Rechaza operar sobre un registro desactivado.

        Raises:
            BusinessException: If entity is deactivated
        """
        if hasattr(entity, 'active') and not entity.active:
            raise BusinessException("El registro está desactivado y no puede ser utilizado")

    @staticmethod
    def apply_changes(entity: T, changes: dict) -> T:
        """Copia en la entidad los campos enviados en una actualización parcial."""
        for field, value in changes.items():
            setattr(entity, field, value)
        return entity
