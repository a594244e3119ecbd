from pydantic import BaseModel, Field
from typing import Optional, List

from models.common import AuditedResponse


class UserCreate(BaseModel):
    """Modelo para crear usuarios. La contraseña se guarda como salt + hash PBKDF2."""
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=6)
    person_id: Optional[int] = Field(None, gt=0)


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=150)
    password: Optional[str] = Field(None, min_length=6)
    person_id: Optional[int] = Field(None, gt=0)


class User(AuditedResponse):
    username: str
    email: str
    person_id: Optional[int] = None
    role_names: List[str] = Field(default_factory=list, description="Nombres de los roles asignados")
