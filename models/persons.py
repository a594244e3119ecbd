from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

from models.common import AuditedResponse


class TypeIdentification(str, Enum):
    CC = "CC"
    TI = "TI"
    CE = "CE"
    PAS = "PAS"


class PersonCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    second_name: Optional[str] = Field(None, max_length=100)
    first_last_name: str = Field(..., min_length=1, max_length=100)
    second_last_name: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[int] = Field(None, ge=0)
    email: Optional[str] = Field(None, max_length=150)
    type_identification: TypeIdentification
    number_identification: int = Field(..., gt=0)
    signing: Optional[str] = Field(None, max_length=200)


class PersonUpdate(BaseModel):
    """Actualización parcial: solo se aplican los campos enviados."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    second_name: Optional[str] = Field(None, max_length=100)
    first_last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    second_last_name: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[int] = Field(None, ge=0)
    email: Optional[str] = Field(None, max_length=150)
    type_identification: Optional[TypeIdentification] = None
    number_identification: Optional[int] = Field(None, gt=0)
    signing: Optional[str] = Field(None, max_length=200)


class Person(AuditedResponse):
    first_name: str
    second_name: Optional[str] = None
    first_last_name: str
    second_last_name: Optional[str] = None
    phone_number: Optional[int] = None
    email: Optional[str] = None
    type_identification: str
    number_identification: int
    signing: Optional[str] = None
