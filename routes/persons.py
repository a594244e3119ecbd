"""
Person routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for person endpoints.
All business logic is delegated to the PersonService layer.
"""

from fastapi import APIRouter, Depends, Query, status
import logging

from models.persons import Person, PersonCreate, PersonUpdate
from models.common import create_delete_response
from core.pagination import PaginationParams, pagination_params, create_paginated_response
from core.exceptions import AppException
from services.person_service import PersonService
from dependencies import get_person_service
from auth import get_current_user_dep
from routes.errors import handle_service_exception, internal_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/persons", tags=["persons"])


@router.post("/", response_model=Person, status_code=status.HTTP_201_CREATED)
async def crear_persona(
    payload: PersonCreate,
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    """
    Create a new person.

    Args:
        payload: Person creation data
        current_user: Authenticated user
        service: Injected PersonService

    Returns:
        Created person
    """
    try:
        return service.create_person(payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("crear persona", e)


@router.get("/")
async def listar_personas(
    params: PaginationParams = Depends(pagination_params),
    active_only: bool = Query(False, description="Solo personas activas"),
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    """List persons with pagination."""
    try:
        persons, total = service.get_persons(page=params.page, page_size=params.page_size, active_only=active_only)
        return create_paginated_response(persons, params.page, params.page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("listar personas", e)


@router.get("/document/{number_identification}", response_model=Person)
async def obtener_persona_por_documento(
    number_identification: int,
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    """Look up an active person by identification number."""
    try:
        return service.get_person_by_document(number_identification)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("buscar persona por documento", e)


@router.get("/{person_id}", response_model=Person)
async def obtener_persona(
    person_id: int,
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    try:
        return service.get_person(person_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("obtener persona", e)


@router.put("/{person_id}", response_model=Person)
async def actualizar_persona(
    person_id: int,
    payload: PersonUpdate,
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    """Partial update: only the fields present in the body are changed."""
    try:
        return service.update_person(person_id, payload)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("actualizar persona", e)


@router.delete("/{person_id}")
async def eliminar_persona(
    person_id: int,
    logical: bool = Query(True, description="True: desactivar; False: eliminar físicamente"),
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    try:
        service.delete(person_id, logical=logical)
        return create_delete_response("Persona eliminada", person_id, logical)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("eliminar persona", e)


@router.patch("/{person_id}/restore", response_model=Person)
async def restaurar_persona(
    person_id: int,
    current_user=Depends(get_current_user_dep),
    service: PersonService = Depends(get_person_service),
):
    try:
        return Person.model_validate(service.restore(person_id))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise internal_error("restaurar persona", e)
