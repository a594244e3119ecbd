"""
Consulta de la auditoría de cambios escrita por el contexto al guardar (solo lectura).
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from models.change_log import ChangeLog
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from core.exceptions import AppException
from repositories.base_repository import BaseRepository
from dependencies import get_change_log_repository
from auth import require_admin
from routes.errors import handle_service_exception, internal_error

router = APIRouter(prefix="/change-logs", tags=["change-logs"])


@router.get("/")
async def listar_cambios(
    params: PaginationParams = Depends(pagination_params),
    entity_name: Optional[str] = Query(None, description="Filtrar por entidad (p. ej. Person)"),
    current_user=Depends(require_admin),
    repository: BaseRepository = Depends(get_change_log_repository),
):
    """List audit rows, newest first (ADMIN ONLY)."""
    try:
        query = repository.context.set(repository.model_class)
        if entity_name:
            query = query.filter(repository.model_class.entity_name == entity_name)
        total = query.count()
        rows = (
            query.order_by(repository.model_class.id.desc())
            .offset(params.skip)
            .limit(params.page_size)
            .all()
        )
        items = [ChangeLog.model_validate(r).model_dump() for r in rows]
        return create_paginated_response(items, params.page, params.page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("listar cambios", e)
