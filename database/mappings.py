"""
Registro explícito de los mapeos ORM y convenciones del modelo.

Cada clase mapeada debe aparecer exactamente una vez en ENTITY_MAPPINGS.
El contexto valida el registro al construirse; un duplicado, una clase
mapeada sin registrar o un registro que no está mapeado detienen el arranque.
"""

import logging
from typing import Iterable, Tuple, Type

from sqlalchemy import Float, MetaData, Numeric

from core.exceptions import ConfigurationException
from database.models import (
    Base,
    PersonORM,
    UserORM,
    RolORM,
    PermissionORM,
    FormORM,
    ModuleORM,
    FormModuleORM,
    RolFormPermissionORM,
    UserRolORM,
    RegionalORM,
    CenterORM,
    SedeORM,
    UserSedeORM,
    EnterpriseORM,
    ProgramORM,
    ProcessORM,
    AprendizORM,
    InstructorORM,
    InstructorProgramORM,
    AprendizProgramORM,
    ConceptORM,
    VerificationORM,
    StateORM,
    TypeModalityORM,
    RegisterySofiaORM,
    AprendizProcessInstructorORM,
    ChangeLogORM,
)

logger = logging.getLogger(__name__)

DECIMAL_PRECISION = 18
DECIMAL_SCALE = 2

ENTITY_MAPPINGS: Tuple[type, ...] = (
    PersonORM,
    UserORM,
    RolORM,
    PermissionORM,
    FormORM,
    ModuleORM,
    FormModuleORM,
    RolFormPermissionORM,
    UserRolORM,
    RegionalORM,
    CenterORM,
    SedeORM,
    UserSedeORM,
    EnterpriseORM,
    ProgramORM,
    ProcessORM,
    AprendizORM,
    InstructorORM,
    InstructorProgramORM,
    AprendizProgramORM,
    ConceptORM,
    VerificationORM,
    StateORM,
    TypeModalityORM,
    RegisterySofiaORM,
    AprendizProcessInstructorORM,
    ChangeLogORM,
)


def apply_decimal_convention(
    metadata: MetaData,
    precision: int = DECIMAL_PRECISION,
    scale: int = DECIMAL_SCALE,
) -> int:
    """
    Aplica la precisión decimal por defecto a las columnas Numeric sin precisión explícita.

    Las columnas Float quedan fuera y una precisión declarada en el mapeo
    nunca se sobrescribe.

    Args:
        metadata: MetaData con las tablas a revisar
        precision: Dígitos totales
        scale: Dígitos decimales

    Returns:
        Cantidad de columnas ajustadas
    """
    adjusted = 0
    for table in metadata.tables.values():
        for column in table.columns:
            column_type = column.type
            if not isinstance(column_type, Numeric) or isinstance(column_type, Float):
                continue
            if column_type.precision is not None:
                continue
            column_type.precision = precision
            column_type.scale = scale
            adjusted += 1
    return adjusted


def register_mappings(
    mappings: Iterable[Type] = ENTITY_MAPPINGS,
    base=Base,
) -> Tuple[type, ...]:
    """
    Valida el registro de mapeos contra las clases realmente mapeadas en `base`.

    Args:
        mappings: Clases ORM registradas
        base: Base declarativa cuyo registry se compara

    Returns:
        Tupla de mapeos validada

    Raises:
        ConfigurationException: Si hay duplicados, faltantes o clases no mapeadas
    """
    registered = tuple(mappings)
    seen = set()
    duplicates = []
    for mapping in registered:
        if mapping in seen:
            duplicates.append(mapping.__name__)
        seen.add(mapping)

    mapped = {mapper.class_ for mapper in base.registry.mappers}
    missing = sorted(cls.__name__ for cls in mapped - seen)
    unknown = sorted(cls.__name__ for cls in seen - mapped)

    if duplicates or missing or unknown:
        logger.error(
            f"Registro de mapeos inválido: duplicados={duplicates}, "
            f"sin registrar={missing}, no mapeados={unknown}"
        )
        raise ConfigurationException(
            "Registro de mapeos ORM inválido",
            details={"duplicated": duplicates, "missing": missing, "unknown": unknown},
        )

    adjusted = apply_decimal_convention(base.metadata)
    if adjusted:
        logger.debug(f"Convención decimal ({DECIMAL_PRECISION}, {DECIMAL_SCALE}) aplicada a {adjusted} columnas")
    return registered
