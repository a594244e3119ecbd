"""
Utilidades de paginación compartidas por todos los listados.

Los routers reciben `page` / `page_size` a través de la dependencia
`pagination_params` y responden con el sobre de `create_paginated_response`.
"""

from typing import List, Any
from datetime import datetime, timezone

from fastapi import Query
from pydantic import BaseModel, Field

from config import settings


class PaginationParams(BaseModel):
    """Página solicitada (0-indexed) y su tamaño, acotado por la configuración."""
    page: int = Field(0, ge=0, description="Número de página (0-indexed)")
    page_size: int = Field(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Tamaño de página"
    )

    @property
    def skip(self) -> int:
        return calculate_skip(self.page, self.page_size)


class PaginationMeta(BaseModel):
    """Metadata de la página devuelta."""
    page: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_previous: bool


def pagination_params(
    page: int = Query(0, ge=0, description="Número de página (0-indexed)"),
    page_size: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Tamaño de página"
    ),
) -> PaginationParams:
    """Dependencia de FastAPI con los parámetros de paginación de la query string."""
    return PaginationParams(page=page, page_size=page_size)


def calculate_pagination_meta(
    page: int,
    page_size: int,
    total_items: int
) -> PaginationMeta:
    """
    Calcula la metadata de la paginación.

    Args:
        page: Número de página actual (0-indexed)
        page_size: Items por página
        total_items: Total de registros que cumplen el filtro

    Returns:
        PaginationMeta con total de páginas y banderas de navegación
    """
    total_pages = (total_items + page_size - 1) // page_size if page_size > 0 else 0

    return PaginationMeta(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages - 1,
        has_previous=page > 0
    )


def create_paginated_response(
    items: List[Any],
    page: int,
    page_size: int,
    total_items: int
) -> dict:
    """
    Crea el sobre de respuesta de un listado.

    Los elementos que sean modelos pydantic se serializan con model_dump.

    Returns:
        {"success", "data", "pagination", "timestamp"}
    """
    data = [item.model_dump() if isinstance(item, BaseModel) else item for item in items]
    return {
        "success": True,
        "data": data,
        "pagination": calculate_pagination_meta(page, page_size, total_items).model_dump(),
        "timestamp": datetime.now(timezone.utc)
    }


def calculate_skip(page: int, page_size: int) -> int:
    """Offset de la página en la consulta (page * page_size)."""
    return page * page_size
