"""
Acceso a datos genérico (capa Data) sobre el ApplicationDbContext.

Todas las escrituras pasan por ApplicationDbContext.save_changes, que detecta
y audita los cambios antes de enviarlos a la base de datos.
"""

from typing import TypeVar, Generic, List, Optional, Type
from sqlalchemy import desc, asc
import logging

from core.exceptions import NotFoundException, DatabaseException
from database.context import ApplicationDbContext
from database.db import deactivate, reactivate

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    CRUD de una entidad ORM. Los errores del motor se registran y se
    traducen a DatabaseException con el nombre de la entidad.
    """

    def __init__(self, context: ApplicationDbContext, model_class: Type[T]):
        self.context = context
        self.db = context.session
        self.model_class = model_class

    @property
    def entity_name(self) -> str:
        return self.model_class.__name__.removesuffix("ORM")

    def get_by_id(self, id: int) -> Optional[T]:
        """Busca por clave primaria (identity map primero); None si no existe."""
        try:
            return self.context.find(self.model_class, id)
        except Exception as e:
            logger.error(f"Error getting {self.entity_name} by id {id}: {e}")
            raise DatabaseException(f"Error al obtener {self.entity_name}")

    def get_by_id_or_fail(self, id: int) -> T:
        """
        Raises:
            NotFoundException: '{Entidad} no encontrado: {id}'
        """
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundException(
                resource=self.entity_name,
                identifier=str(id)
            )
        return entity

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        active_only: bool = False,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> List[T]:
        """
        Listado con offset/limit.

        Args:
            skip: registros a saltar
            limit: máximo de registros
            active_only: excluir desactivados (si la entidad tiene `active`)
            order_by: columna de orden; una columna desconocida cae al id
            order_desc: orden descendente
        """
        try:
            query = self.context.set(self.model_class)

            if active_only and hasattr(self.model_class, 'active'):
                query = query.filter(self.model_class.active.is_(True))

            order_field = getattr(self.model_class, order_by or "id", None)
            if order_field is None:
                order_field = self.model_class.id
            query = query.order_by(desc(order_field) if order_desc else asc(order_field))

            return query.offset(skip).limit(limit).all()
        except Exception as e:
            logger.error(f"Error getting all {self.entity_name}: {e}")
            raise DatabaseException(f"Error al listar {self.entity_name}")

    def count(self, active_only: bool = False, **filters) -> int:
        """
        Total de registros; los filtros por columna con valor None se ignoran.
        """
        try:
            query = self.context.set(self.model_class)

            if active_only and hasattr(self.model_class, 'active'):
                query = query.filter(self.model_class.active.is_(True))

            for field, value in filters.items():
                if hasattr(self.model_class, field) and value is not None:
                    query = query.filter(getattr(self.model_class, field) == value)

            return query.count()
        except Exception as e:
            logger.error(f"Error counting {self.entity_name}: {e}")
            raise DatabaseException(f"Error al contar {self.entity_name}")

    def create(self, entity: T) -> T:
        """Inserta la entidad; al volver ya tiene id y fechas de auditoría."""
        try:
            self.context.add(entity)
            self.context.save_changes()
            return entity
        except Exception as e:
            logger.error(f"Error creating {self.entity_name}: {e}")
            raise DatabaseException(f"Error al crear {self.entity_name}")

    def update(self, entity: T) -> T:
        """Guarda los cambios de una entidad ya rastreada (sella update_date)."""
        try:
            self.context.add(entity)
            self.context.save_changes()
            return entity
        except Exception as e:
            logger.error(f"Error updating {self.entity_name}: {e}")
            raise DatabaseException(f"Error al actualizar {self.entity_name}")

    def delete(self, entity: T) -> None:
        """Borrado físico."""
        try:
            self.context.remove(entity)
            self.context.save_changes()
        except Exception as e:
            logger.error(f"Error deleting {self.entity_name}: {e}")
            raise DatabaseException(f"Error al eliminar {self.entity_name}")

    def set_active(self, entity: T, active: bool) -> T:
        """
        Activa o desactiva una entidad (eliminación lógica).

        Args:
            entity: La entidad a modificar
            active: False desactiva y sella delete_date; True la restaura

        Returns:
            La entidad modificada
        """
        try:
            if active:
                reactivate(entity)
            else:
                deactivate(entity)
            self.context.save_changes()
            return entity
        except Exception as e:
            logger.error(f"Error changing active state of {self.entity_name}: {e}")
            raise DatabaseException(f"Error al cambiar el estado de {self.entity_name}")

    def exists(self, id: int) -> bool:
        return self.get_by_id(id) is not None

    def commit(self) -> None:
        """Confirma el trabajo pendiente del contexto."""
        try:
            self.context.accept_all_changes()
        except Exception as e:
            logger.error(f"Error confirmando cambios pendientes: {e}")
            self.context.rollback()
            raise DatabaseException("Error al guardar cambios en la base de datos")

    def rollback(self) -> None:
        self.context.rollback()

    def refresh(self, entity: T) -> T:
        self.context.refresh(entity)
        return entity
