"""
Modelos comunes de respuesta para la API.

Estos modelos proporcionan respuestas consistentes y estandarizadas
para todos los endpoints de la API
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone


class EntityResponse(BaseModel):
    """Base de las respuestas construidas desde objetos ORM."""
    model_config = ConfigDict(from_attributes=True)

    id: int


class AuditedResponse(EntityResponse):
    """Respuesta de entidades con estado activo y columnas de auditoría."""
    active: bool = True
    create_date: Optional[datetime] = None
    update_date: Optional[datetime] = None
    delete_date: Optional[datetime] = None


class DeleteResponse(BaseModel):
    """Respuesta estándar para operaciones de eliminación."""
    success: bool = Field(True, description="Indica si la eliminación fue exitosa")
    message: str = Field(..., description="Mensaje descriptivo")
    deleted_id: int = Field(..., description="ID del registro eliminado")
    logical_delete: bool = Field(True, description="True si fue desactivación lógica, False si fue eliminación física")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthCheckResponse(BaseModel):
    """Respuesta del health check."""
    status: str = Field(..., description="Estado general (healthy/unhealthy)")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión de la API")
    database: str = Field(..., description="Estado de la base de datos")
    environment: str = Field(..., description="Entorno (production/development)")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def create_delete_response(message: str, deleted_id: int, logical_delete: bool = True) -> dict:
    """Helper para crear respuestas de eliminación."""
    return DeleteResponse(
        message=message,
        deleted_id=deleted_id,
        logical_delete=logical_delete
    ).model_dump()
