"""
Modelos de formación: programas, procesos, aprendices, instructores y catálogos del seguimiento.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from models.common import EntityResponse, AuditedResponse


class ProgramCreate(BaseModel):
    code_program: Decimal = Field(..., max_digits=18, decimal_places=2)
    name: str = Field(..., min_length=1, max_length=150)
    type_program: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=300)


class ProgramUpdate(BaseModel):
    code_program: Optional[Decimal] = Field(None, max_digits=18, decimal_places=2)
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    type_program: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=300)


class Program(AuditedResponse):
    code_program: Decimal
    name: str
    type_program: Optional[str] = None
    description: Optional[str] = None


class ProcessCreate(BaseModel):
    type_process: str = Field(..., min_length=1, max_length=50)
    start_aprendiz: Optional[datetime] = None
    observation: Optional[str] = None


class ProcessUpdate(BaseModel):
    type_process: Optional[str] = Field(None, min_length=1, max_length=50)
    start_aprendiz: Optional[datetime] = None
    observation: Optional[str] = None


class Process(AuditedResponse):
    type_process: str
    start_aprendiz: Optional[datetime] = None
    observation: Optional[str] = None


class AprendizCreate(BaseModel):
    previous_program: Optional[str] = Field(None, max_length=150)
    user_id: int = Field(..., gt=0)


class AprendizUpdate(BaseModel):
    previous_program: Optional[str] = Field(None, max_length=150)
    user_id: Optional[int] = Field(None, gt=0)


class Aprendiz(AuditedResponse):
    previous_program: Optional[str] = None
    user_id: int


class InstructorCreate(BaseModel):
    user_id: int = Field(..., gt=0)


class InstructorUpdate(BaseModel):
    user_id: Optional[int] = Field(None, gt=0)


class Instructor(AuditedResponse):
    user_id: int


class InstructorProgramCreate(BaseModel):
    instructor_id: int = Field(..., gt=0)
    program_id: int = Field(..., gt=0)


class InstructorProgramUpdate(BaseModel):
    instructor_id: Optional[int] = Field(None, gt=0)
    program_id: Optional[int] = Field(None, gt=0)


class InstructorProgram(EntityResponse):
    instructor_id: int
    program_id: int


class AprendizProgramCreate(BaseModel):
    aprendiz_id: int = Field(..., gt=0)
    program_id: int = Field(..., gt=0)


class AprendizProgramUpdate(BaseModel):
    aprendiz_id: Optional[int] = Field(None, gt=0)
    program_id: Optional[int] = Field(None, gt=0)


class AprendizProgram(EntityResponse):
    aprendiz_id: int
    program_id: int


# ==================== Catálogos nombre/descripción ====================
# Concept, Verification, State y TypeModality comparten forma.

class CatalogCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=300)


class CatalogUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=300)


class CatalogItem(AuditedResponse):
    name: str
    description: Optional[str] = None


class RegisterySofiaCreate(CatalogCreate):
    document: Optional[str] = Field(None, max_length=200)


class RegisterySofiaUpdate(CatalogUpdate):
    document: Optional[str] = Field(None, max_length=200)


class RegisterySofia(CatalogItem):
    document: Optional[str] = None


class AprendizProcessInstructorCreate(BaseModel):
    aprendiz_id: int = Field(..., gt=0)
    instructor_id: int = Field(..., gt=0)
    registery_sofia_id: int = Field(..., gt=0)
    concept_id: int = Field(..., gt=0)
    enterprise_id: int = Field(..., gt=0)
    process_id: int = Field(..., gt=0)
    type_modality_id: int = Field(..., gt=0)
    state_id: int = Field(..., gt=0)
    verification_id: int = Field(..., gt=0)


class AprendizProcessInstructorUpdate(BaseModel):
    aprendiz_id: Optional[int] = Field(None, gt=0)
    instructor_id: Optional[int] = Field(None, gt=0)
    registery_sofia_id: Optional[int] = Field(None, gt=0)
    concept_id: Optional[int] = Field(None, gt=0)
    enterprise_id: Optional[int] = Field(None, gt=0)
    process_id: Optional[int] = Field(None, gt=0)
    type_modality_id: Optional[int] = Field(None, gt=0)
    state_id: Optional[int] = Field(None, gt=0)
    verification_id: Optional[int] = Field(None, gt=0)


class AprendizProcessInstructor(EntityResponse):
    aprendiz_id: int
    instructor_id: int
    registery_sofia_id: int
    concept_id: int
    enterprise_id: int
    process_id: int
    type_modality_id: int
    state_id: int
    verification_id: int
