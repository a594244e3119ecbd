from pydantic import BaseModel, Field
from typing import Optional

from models.common import EntityResponse, AuditedResponse


class RegionalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code_regional: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = Field(None, max_length=200)
    address: Optional[str] = Field(None, max_length=200)


class RegionalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code_regional: Optional[str] = Field(None, min_length=1, max_length=20)
    description: Optional[str] = Field(None, max_length=200)
    address: Optional[str] = Field(None, max_length=200)


class Regional(AuditedResponse):
    name: str
    code_regional: str
    description: Optional[str] = None
    address: Optional[str] = None


class CenterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code_center: str = Field(..., min_length=1, max_length=20)
    address: Optional[str] = Field(None, max_length=200)
    regional_id: int = Field(..., gt=0)


class CenterUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code_center: Optional[str] = Field(None, min_length=1, max_length=20)
    address: Optional[str] = Field(None, max_length=200)
    regional_id: Optional[int] = Field(None, gt=0)


class Center(AuditedResponse):
    name: str
    code_center: str
    address: Optional[str] = None
    regional_id: int


class SedeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code_sede: int = Field(..., gt=0)
    address: Optional[str] = Field(None, max_length=200)
    phone_sede: Optional[str] = Field(None, max_length=20)
    email_contact: Optional[str] = Field(None, max_length=150)
    center_id: int = Field(..., gt=0)


class SedeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code_sede: Optional[int] = Field(None, gt=0)
    address: Optional[str] = Field(None, max_length=200)
    phone_sede: Optional[str] = Field(None, max_length=20)
    email_contact: Optional[str] = Field(None, max_length=150)
    center_id: Optional[int] = Field(None, gt=0)


class Sede(AuditedResponse):
    name: str
    code_sede: int
    address: Optional[str] = None
    phone_sede: Optional[str] = None
    email_contact: Optional[str] = None
    center_id: int


class UserSedeCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    sede_id: int = Field(..., gt=0)


class UserSedeUpdate(BaseModel):
    user_id: Optional[int] = Field(None, gt=0)
    sede_id: Optional[int] = Field(None, gt=0)


class UserSede(EntityResponse):
    user_id: int
    sede_id: int


class EnterpriseCreate(BaseModel):
    name_enterprise: str = Field(..., min_length=1, max_length=150)
    nit_enterprise: str = Field(..., min_length=1, max_length=20)
    phone_enterprise: Optional[str] = Field(None, max_length=20)
    email_enterprise: Optional[str] = Field(None, max_length=150)
    locate: Optional[str] = Field(None, max_length=200)
    name_boss: Optional[str] = Field(None, max_length=150)
    email_boss: Optional[str] = Field(None, max_length=150)
    observation: Optional[str] = None


class EnterpriseUpdate(BaseModel):
    name_enterprise: Optional[str] = Field(None, min_length=1, max_length=150)
    nit_enterprise: Optional[str] = Field(None, min_length=1, max_length=20)
    phone_enterprise: Optional[str] = Field(None, max_length=20)
    email_enterprise: Optional[str] = Field(None, max_length=150)
    locate: Optional[str] = Field(None, max_length=200)
    name_boss: Optional[str] = Field(None, max_length=150)
    email_boss: Optional[str] = Field(None, max_length=150)
    observation: Optional[str] = None


class Enterprise(AuditedResponse):
    name_enterprise: str
    nit_enterprise: str
    phone_enterprise: Optional[str] = None
    email_enterprise: Optional[str] = None
    locate: Optional[str] = None
    name_boss: Optional[str] = None
    email_boss: Optional[str] = None
    observation: Optional[str] = None
