"""
Servicio genérico para las entidades de catálogo.

Cada catálogo se describe con un CatalogDefinition (clase ORM + esquemas
pydantic) y se registra explícitamente en dependencies.CATALOG_REGISTRY.
"""

from dataclasses import dataclass
from typing import Type, List, Dict, Any
import logging

from pydantic import BaseModel

from services.base_service import BaseService
from repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogDefinition:
    """Descripción de un catálogo expuesto como CRUD."""
    prefix: str
    label: str
    model_class: type
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    order_by: str = "id"

    @property
    def tag(self) -> str:
        return self.prefix.strip("/")


class CatalogService(BaseService[Any, BaseRepository]):
    """CRUD de negocio para un catálogo."""

    def __init__(self, repository: BaseRepository, definition: CatalogDefinition):
        super().__init__(repository)
        self.definition = definition

    def _to_response(self, entity) -> BaseModel:
        return self.definition.response_schema.model_validate(entity)

    def create(self, payload: BaseModel) -> BaseModel:
        created = self.repository.create(self.definition.model_class(**payload.model_dump()))
        logger.info(f"{self.definition.label} {created.id} created")
        return self._to_response(created)

    def get(self, id: int) -> BaseModel:
        return self._to_response(self.get_by_id_or_fail(id))

    def list_all(
        self,
        page: int = 0,
        page_size: int = 50,
        active_only: bool = False
    ) -> tuple[List[Dict[str, Any]], int]:
        items, total = self.get_all(page, page_size, active_only=active_only, order_by=self.definition.order_by)
        return [self._to_response(i).model_dump() for i in items], total

    def update(self, id: int, payload: BaseModel) -> BaseModel:
        entity = self.get_by_id_or_fail(id)
        self.validate_active(entity)
        updated = self.repository.update(self.apply_changes(entity, payload.model_dump(exclude_unset=True)))
        logger.info(f"{self.definition.label} {id} updated")
        return self._to_response(updated)
