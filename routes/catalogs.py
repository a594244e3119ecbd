"""
Routers CRUD de los catálogos registrados en dependencies.CATALOG_REGISTRY.

Cada catálogo obtiene: POST /, GET /, GET /{id}, PUT /{id}, DELETE /{id}
y PATCH /{id}/restore (este último solo si la entidad tiene estado activo).
"""

from typing import List
from fastapi import APIRouter, Depends, Query, status

from models.common import create_delete_response
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from core.exceptions import AppException
from services.catalog_service import CatalogService, CatalogDefinition
from dependencies import CATALOG_REGISTRY, catalog_service_provider
from auth import get_current_user_dep
from routes.errors import handle_service_exception, internal_error


def build_catalog_router(definition: CatalogDefinition) -> APIRouter:
    """Construye el router CRUD de un catálogo."""
    router = APIRouter(prefix=definition.prefix, tags=[definition.tag])
    get_service = catalog_service_provider(definition)
    create_schema = definition.create_schema
    update_schema = definition.update_schema
    response_schema = definition.response_schema
    label = definition.label

    @router.post("/", response_model=response_schema, status_code=status.HTTP_201_CREATED)
    async def crear(
        payload: create_schema,
        current_user=Depends(get_current_user_dep),
        service: CatalogService = Depends(get_service),
    ):
        try:
            return service.create(payload)
        except AppException as e:
            raise handle_service_exception(e)
        except Exception as e:
            raise internal_error(f"crear {label}", e)

    @router.get("/")
    async def listar(
        params: PaginationParams = Depends(pagination_params),
        active_only: bool = Query(False, description="Solo registros activos"),
        current_user=Depends(get_current_user_dep),
        service: CatalogService = Depends(get_service),
    ):
        try:
            items, total = service.list_all(page=params.page, page_size=params.page_size, active_only=active_only)
            return create_paginated_response(items, params.page, params.page_size, total)
        except AppException as e:
            raise handle_service_exception(e)
        except Exception as e:
            raise internal_error(f"listar {label}", e)

    @router.get("/{item_id}", response_model=response_schema)
    async def obtener(
        item_id: int,
        current_user=Depends(get_current_user_dep),
        service: CatalogService = Depends(get_service),
    ):
        try:
            return service.get(item_id)
        except AppException as e:
            raise handle_service_exception(e)
        except Exception as e:
            raise internal_error(f"obtener {label}", e)

    @router.put("/{item_id}", response_model=response_schema)
    async def actualizar(
        item_id: int,
        payload: update_schema,
        current_user=Depends(get_current_user_dep),
        service: CatalogService = Depends(get_service),
    ):
        try:
            return service.update(item_id, payload)
        except AppException as e:
            raise handle_service_exception(e)
        except Exception as e:
            raise internal_error(f"actualizar {label}", e)

    @router.delete("/{item_id}")
    async def eliminar(
        item_id: int,
        logical: bool = Query(True, description="True: desactivar; False: eliminar físicamente"),
        current_user=Depends(get_current_user_dep),
        service: CatalogService = Depends(get_service),
    ):
        try:
            service.delete(item_id, logical=logical)
            return create_delete_response(f"{label} eliminado", item_id, logical)
        except AppException as e:
            raise handle_service_exception(e)
        except Exception as e:
            raise internal_error(f"eliminar {label}", e)

    if hasattr(definition.model_class, "active"):

        @router.patch("/{item_id}/restore", response_model=response_schema)
        async def restaurar(
            item_id: int,
            current_user=Depends(get_current_user_dep),
            service: CatalogService = Depends(get_service),
        ):
            try:
                service.restore(item_id)
                return service.get(item_id)
            except AppException as e:
                raise handle_service_exception(e)
            except Exception as e:
                raise internal_error(f"restaurar {label}", e)

    return router


catalog_routers: List[APIRouter] = [build_catalog_router(definition) for definition in CATALOG_REGISTRY]
