"""
Dependency injection for the persistence context, repositories and services.

Every request gets one ApplicationDbContext; all repositories and services
resolved for that request share it, so the ORM path and the raw SQL path
run over the same connection and transaction.
"""

from typing import Callable, Dict, Optional
from sqlalchemy.orm import Session
from fastapi import Depends

from config import settings
from database.db import get_db
from database.context import ApplicationDbContext
from database.models import (
    PermissionORM,
    FormORM,
    ModuleORM,
    FormModuleORM,
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
from models import roles, organization, training
from repositories.base_repository import BaseRepository
from repositories.person_repository import PersonRepository
from repositories.user_repository import UserRepository
from repositories.rol_repository import RolRepository
from repositories.user_rol_repository import UserRolRepository
from repositories.rol_form_permission_repository import RolFormPermissionRepository
from services.person_service import PersonService
from services.user_service import UserService
from services.rol_service import RolService
from services.user_rol_service import UserRolService
from services.rol_form_permission_service import RolFormPermissionService
from services.catalog_service import CatalogService, CatalogDefinition


# ==================== Catalog Registry ====================

CATALOG_REGISTRY = (
    CatalogDefinition("/permissions", "Permiso", PermissionORM,
                      roles.PermissionCreate, roles.PermissionUpdate, roles.Permission, "name"),
    CatalogDefinition("/forms", "Formulario", FormORM,
                      roles.FormCreate, roles.FormUpdate, roles.Form, "name"),
    CatalogDefinition("/modules", "Módulo", ModuleORM,
                      roles.ModuleCreate, roles.ModuleUpdate, roles.Module, "name"),
    CatalogDefinition("/form-modules", "FormModule", FormModuleORM,
                      roles.FormModuleCreate, roles.FormModuleUpdate, roles.FormModule),
    CatalogDefinition("/regionals", "Regional", RegionalORM,
                      organization.RegionalCreate, organization.RegionalUpdate, organization.Regional, "name"),
    CatalogDefinition("/centers", "Centro", CenterORM,
                      organization.CenterCreate, organization.CenterUpdate, organization.Center, "name"),
    CatalogDefinition("/sedes", "Sede", SedeORM,
                      organization.SedeCreate, organization.SedeUpdate, organization.Sede, "name"),
    CatalogDefinition("/user-sedes", "UserSede", UserSedeORM,
                      organization.UserSedeCreate, organization.UserSedeUpdate, organization.UserSede),
    CatalogDefinition("/enterprises", "Empresa", EnterpriseORM,
                      organization.EnterpriseCreate, organization.EnterpriseUpdate, organization.Enterprise,
                      "name_enterprise"),
    CatalogDefinition("/programs", "Programa", ProgramORM,
                      training.ProgramCreate, training.ProgramUpdate, training.Program, "name"),
    CatalogDefinition("/processes", "Proceso", ProcessORM,
                      training.ProcessCreate, training.ProcessUpdate, training.Process),
    CatalogDefinition("/aprendices", "Aprendiz", AprendizORM,
                      training.AprendizCreate, training.AprendizUpdate, training.Aprendiz),
    CatalogDefinition("/instructors", "Instructor", InstructorORM,
                      training.InstructorCreate, training.InstructorUpdate, training.Instructor),
    CatalogDefinition("/instructor-programs", "InstructorProgram", InstructorProgramORM,
                      training.InstructorProgramCreate, training.InstructorProgramUpdate,
                      training.InstructorProgram),
    CatalogDefinition("/aprendiz-programs", "AprendizProgram", AprendizProgramORM,
                      training.AprendizProgramCreate, training.AprendizProgramUpdate, training.AprendizProgram),
    CatalogDefinition("/concepts", "Concepto", ConceptORM,
                      training.CatalogCreate, training.CatalogUpdate, training.CatalogItem, "name"),
    CatalogDefinition("/verifications", "Verificación", VerificationORM,
                      training.CatalogCreate, training.CatalogUpdate, training.CatalogItem, "name"),
    CatalogDefinition("/states", "Estado", StateORM,
                      training.CatalogCreate, training.CatalogUpdate, training.CatalogItem, "name"),
    CatalogDefinition("/type-modalities", "Modalidad", TypeModalityORM,
                      training.CatalogCreate, training.CatalogUpdate, training.CatalogItem, "name"),
    CatalogDefinition("/registery-sofia", "RegisterySofia", RegisterySofiaORM,
                      training.RegisterySofiaCreate, training.RegisterySofiaUpdate, training.RegisterySofia,
                      "name"),
    CatalogDefinition("/aprendiz-process-instructors", "AprendizProcessInstructor", AprendizProcessInstructorORM,
                      training.AprendizProcessInstructorCreate, training.AprendizProcessInstructorUpdate,
                      training.AprendizProcessInstructor),
)

CATALOGS_BY_PREFIX: Dict[str, CatalogDefinition] = {d.prefix: d for d in CATALOG_REGISTRY}


# ==================== Context Dependency ====================

def get_db_context(db: Session = Depends(get_db)) -> ApplicationDbContext:
    """
    Get the request-scoped ApplicationDbContext.

    Args:
        db: Database session (injected by FastAPI)

    Returns:
        ApplicationDbContext over the request session
    """
    return ApplicationDbContext(db, default_timeout=settings.command_timeout)


# ==================== Repository Dependencies ====================

def get_user_repository(context: ApplicationDbContext = Depends(get_db_context)) -> UserRepository:
    return UserRepository(context)


def get_change_log_repository(context: ApplicationDbContext = Depends(get_db_context)) -> BaseRepository:
    return BaseRepository(context, ChangeLogORM)


# ==================== Service Dependencies ====================

def get_person_service(context: ApplicationDbContext = Depends(get_db_context)) -> PersonService:
    """
    Get PersonService instance.

    This is the main dependency to use in route handlers for person operations.

    Example:
        ```python
        @router.get("/persons")
        def get_persons(service: PersonService = Depends(get_person_service)):
            return service.get_persons(...)
        ```
    """
    return PersonService(PersonRepository(context))


def get_user_service(context: ApplicationDbContext = Depends(get_db_context)) -> UserService:
    return UserService(UserRepository(context), PersonRepository(context))


def get_rol_service(context: ApplicationDbContext = Depends(get_db_context)) -> RolService:
    return RolService(RolRepository(context))


def get_user_rol_service(context: ApplicationDbContext = Depends(get_db_context)) -> UserRolService:
    return UserRolService(UserRolRepository(context), UserRepository(context), RolRepository(context))


def get_rol_form_permission_service(
    context: ApplicationDbContext = Depends(get_db_context)
) -> RolFormPermissionService:
    return RolFormPermissionService(
        RolFormPermissionRepository(context),
        RolRepository(context),
        BaseRepository(context, FormORM),
        BaseRepository(context, PermissionORM),
        UserRepository(context),
    )


def catalog_service_provider(definition: CatalogDefinition) -> Callable[..., CatalogService]:
    """
    Build the dependency that injects the CatalogService of one registered catalog.

    Usage in route: service = Depends(catalog_service_provider(definition))
    """

    def _dependency(context: ApplicationDbContext = Depends(get_db_context)) -> CatalogService:
        return CatalogService(BaseRepository(context, definition.model_class), definition)

    return _dependency


# ==================== Context Manager for Services ====================

class ServiceContext:
    """
    Unit of work over one ApplicationDbContext with automatic transaction management.

    Usage:
        ```python
        with ServiceContext() as ctx:
            person = ctx.person_service.create_person(...)
            ctx.user_rol_service.assign_roles(...)
            # Automatically commits on success
        # Automatically rollbacks on exception
        ```
    """

    def __init__(self, session: Optional[Session] = None):
        """
        Initialize the service context.

        Args:
            session: Optional existing session; if omitted a new one is opened and closed on exit
        """
        from database.db import SessionLocal
        self._owns_session = session is None
        self.db: Session = session if session is not None else SessionLocal()
        self.context = ApplicationDbContext(self.db, default_timeout=settings.command_timeout)
        self._transaction = None
        self._services: Dict[str, object] = {}

    def __enter__(self):
        """Enter the context and open the shared transaction."""
        self._transaction = self.context.begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Commit on success, rollback on error, always release the session."""
        try:
            self._transaction.__exit__(exc_type, exc_val, exc_tb)
        finally:
            if self._owns_session:
                self.db.close()

    def _get(self, key: str, factory: Callable[[], object]):
        if key not in self._services:
            self._services[key] = factory()
        return self._services[key]

    @property
    def person_service(self) -> PersonService:
        return self._get("person", lambda: PersonService(PersonRepository(self.context)))

    @property
    def user_service(self) -> UserService:
        return self._get(
            "user", lambda: UserService(UserRepository(self.context), PersonRepository(self.context))
        )

    @property
    def rol_service(self) -> RolService:
        return self._get("rol", lambda: RolService(RolRepository(self.context)))

    @property
    def user_rol_service(self) -> UserRolService:
        return self._get("user_rol", lambda: UserRolService(
            UserRolRepository(self.context), UserRepository(self.context), RolRepository(self.context)
        ))

    @property
    def rol_form_permission_service(self) -> RolFormPermissionService:
        return self._get("rol_form_permission", lambda: RolFormPermissionService(
            RolFormPermissionRepository(self.context),
            RolRepository(self.context),
            BaseRepository(self.context, FormORM),
            BaseRepository(self.context, PermissionORM),
            UserRepository(self.context),
        ))

    def catalog_service(self, prefix: str) -> CatalogService:
        """Get the CatalogService registered under `prefix` (e.g. "/regionals")."""
        definition = CATALOGS_BY_PREFIX[prefix]
        return self._get(prefix, lambda: CatalogService(
            BaseRepository(self.context, definition.model_class), definition
        ))

    def commit(self):
        """Manually commit the transaction."""
        self._transaction.commit()

    def rollback(self):
        """Manually rollback the transaction."""
        self._transaction.rollback()
