from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
    DateTime,
    Numeric,
    Text,
    ForeignKey,
    Boolean,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def get_current_time():
    """Obtiene la hora actual en la zona horaria local configurada (sin tzinfo)."""
    from utils.datetime_utils import get_audit_now
    return get_audit_now()


class AuditMixin:
    """Columnas de auditoría compartidas; las fechas las asigna el contexto al guardar."""
    create_date = Column(DateTime, nullable=False, default=get_current_time)
    update_date = Column(DateTime, nullable=True)
    delete_date = Column(DateTime, nullable=True)


#ORM: Seguridad
class PersonORM(AuditMixin, Base):
    __tablename__ = "person"
    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    second_name = Column(String(100))
    first_last_name = Column(String(100), nullable=False)
    second_last_name = Column(String(100))
    phone_number = Column(BigInteger)
    email = Column(String(150))
    type_identification = Column(String(20), nullable=False)
    number_identification = Column(BigInteger, nullable=False, unique=True)
    signing = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class UserORM(AuditMixin, Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(150), nullable=False)
    password_salt = Column(String(64), nullable=False)
    password_hash = Column(String(128), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    person_id = Column(Integer, ForeignKey("person.id"), nullable=True)

    person = relationship("PersonORM", lazy="select")
    roles = relationship("UserRolORM", back_populates="user", lazy="select")


class RolORM(AuditMixin, Base):
    __tablename__ = "rol"
    id = Column(Integer, primary_key=True, autoincrement=True)
    type_rol = Column(String(50), nullable=False, unique=True)
    description = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class PermissionORM(AuditMixin, Base):
    __tablename__ = "permission"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    description = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class FormORM(AuditMixin, Base):
    __tablename__ = "form"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(200))
    path = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class ModuleORM(AuditMixin, Base):
    __tablename__ = "module"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class FormModuleORM(Base):
    __tablename__ = "form_module"
    id = Column(Integer, primary_key=True, autoincrement=True)
    status_procedure = Column(String(50))
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False)
    module_id = Column(Integer, ForeignKey("module.id"), nullable=False)


class RolFormPermissionORM(Base):
    __tablename__ = "rol_form_permission"
    __table_args__ = (UniqueConstraint("rol_id", "form_id", "permission_id"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    rol_id = Column(Integer, ForeignKey("rol.id"), nullable=False)
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False)
    permission_id = Column(Integer, ForeignKey("permission.id"), nullable=False)

    rol = relationship("RolORM", lazy="select")
    form = relationship("FormORM", lazy="select")
    permission = relationship("PermissionORM", lazy="select")


class UserRolORM(Base):
    __tablename__ = "user_rol"
    __table_args__ = (UniqueConstraint("user_id", "rol_id"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    rol_id = Column(Integer, ForeignKey("rol.id"), nullable=False)

    user = relationship("UserORM", back_populates="roles")
    rol = relationship("RolORM", lazy="joined")


#ORM: Organización
class RegionalORM(AuditMixin, Base):
    __tablename__ = "regional"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    code_regional = Column(String(20), nullable=False)
    description = Column(String(200))
    address = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class CenterORM(AuditMixin, Base):
    __tablename__ = "center"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    code_center = Column(String(20), nullable=False)
    address = Column(String(200))
    regional_id = Column(Integer, ForeignKey("regional.id"), nullable=False)
    active = Column(Boolean, default=True, nullable=False)


class SedeORM(AuditMixin, Base):
    __tablename__ = "sede"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    code_sede = Column(BigInteger, nullable=False)
    address = Column(String(200))
    phone_sede = Column(String(20))
    email_contact = Column(String(150))
    center_id = Column(Integer, ForeignKey("center.id"), nullable=False)
    active = Column(Boolean, default=True, nullable=False)


class UserSedeORM(Base):
    __tablename__ = "user_sede"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    sede_id = Column(Integer, ForeignKey("sede.id"), nullable=False)


class EnterpriseORM(AuditMixin, Base):
    __tablename__ = "enterprise"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name_enterprise = Column(String(150), nullable=False)
    nit_enterprise = Column(String(20), nullable=False)
    phone_enterprise = Column(String(20))
    email_enterprise = Column(String(150))
    locate = Column(String(200))
    name_boss = Column(String(150))
    email_boss = Column(String(150))
    observation = Column(Text)
    active = Column(Boolean, default=True, nullable=False)


#ORM: Formación
class ProgramORM(AuditMixin, Base):
    __tablename__ = "program"
    id = Column(Integer, primary_key=True, autoincrement=True)
    # sin precisión explícita: la convención decimal del contexto la fija en (18, 2)
    code_program = Column(Numeric, nullable=False)
    name = Column(String(150), nullable=False)
    type_program = Column(String(50))
    description = Column(String(300))
    active = Column(Boolean, default=True, nullable=False)


class ProcessORM(AuditMixin, Base):
    __tablename__ = "process"
    id = Column(Integer, primary_key=True, autoincrement=True)
    type_process = Column(String(50), nullable=False)
    start_aprendiz = Column(DateTime, nullable=True)
    observation = Column(Text)
    active = Column(Boolean, default=True, nullable=False)


class AprendizORM(AuditMixin, Base):
    __tablename__ = "aprendiz"
    id = Column(Integer, primary_key=True, autoincrement=True)
    previous_program = Column(String(150))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    active = Column(Boolean, default=True, nullable=False)


class InstructorORM(AuditMixin, Base):
    __tablename__ = "instructor"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    active = Column(Boolean, default=True, nullable=False)


class InstructorProgramORM(Base):
    __tablename__ = "instructor_program"
    id = Column(Integer, primary_key=True, autoincrement=True)
    instructor_id = Column(Integer, ForeignKey("instructor.id"), nullable=False)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=False)


class AprendizProgramORM(Base):
    __tablename__ = "aprendiz_program"
    id = Column(Integer, primary_key=True, autoincrement=True)
    aprendiz_id = Column(Integer, ForeignKey("aprendiz.id"), nullable=False)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=False)


class ConceptORM(AuditMixin, Base):
    __tablename__ = "concept"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    active = Column(Boolean, default=True, nullable=False)


class VerificationORM(AuditMixin, Base):
    __tablename__ = "verification"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    active = Column(Boolean, default=True, nullable=False)


class StateORM(AuditMixin, Base):
    __tablename__ = "state"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    active = Column(Boolean, default=True, nullable=False)


class TypeModalityORM(AuditMixin, Base):
    __tablename__ = "type_modality"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    active = Column(Boolean, default=True, nullable=False)


class RegisterySofiaORM(AuditMixin, Base):
    __tablename__ = "registery_sofia"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    document = Column(String(200))
    active = Column(Boolean, default=True, nullable=False)


class AprendizProcessInstructorORM(Base):
    __tablename__ = "aprendiz_process_instructor"
    id = Column(Integer, primary_key=True, autoincrement=True)
    aprendiz_id = Column(Integer, ForeignKey("aprendiz.id"), nullable=False)
    instructor_id = Column(Integer, ForeignKey("instructor.id"), nullable=False)
    registery_sofia_id = Column(Integer, ForeignKey("registery_sofia.id"), nullable=False)
    concept_id = Column(Integer, ForeignKey("concept.id"), nullable=False)
    enterprise_id = Column(Integer, ForeignKey("enterprise.id"), nullable=False)
    process_id = Column(Integer, ForeignKey("process.id"), nullable=False)
    type_modality_id = Column(Integer, ForeignKey("type_modality.id"), nullable=False)
    state_id = Column(Integer, ForeignKey("state.id"), nullable=False)
    verification_id = Column(Integer, ForeignKey("verification.id"), nullable=False)


#ORM: Auditoría de cambios (la escribe el contexto al guardar)
class ChangeLogORM(Base):
    __tablename__ = "change_log"
    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_name = Column(String(100), nullable=False)
    entity_id = Column(String(50), nullable=True)
    change_type = Column(String(20), nullable=False)
    changed_fields = Column(Text, nullable=True)
    change_date = Column(DateTime, nullable=False, default=get_current_time)


__all__ = [
    "Base",
    "AuditMixin",
    "PersonORM",
    "UserORM",
    "RolORM",
    "PermissionORM",
    "FormORM",
    "ModuleORM",
    "FormModuleORM",
    "RolFormPermissionORM",
    "UserRolORM",
    "RegionalORM",
    "CenterORM",
    "SedeORM",
    "UserSedeORM",
    "EnterpriseORM",
    "ProgramORM",
    "ProcessORM",
    "AprendizORM",
    "InstructorORM",
    "InstructorProgramORM",
    "AprendizProgramORM",
    "ConceptORM",
    "VerificationORM",
    "StateORM",
    "TypeModalityORM",
    "RegisterySofiaORM",
    "AprendizProcessInstructorORM",
    "ChangeLogORM",
]
