"""
Contexto de persistencia de la aplicación.

Une el camino ORM (Session de SQLAlchemy con seguimiento de cambios) y las
consultas SQL parametrizadas escritas a mano: ambos caminos comparten la
misma conexión y la misma transacción de la sesión, y todo guardado pasa por
un único punto donde los cambios pendientes se detectan y se auditan antes
de enviarse a la base de datos.

Uso típico (una instancia por request / unidad de trabajo):

    context = ApplicationDbContext(session)
    with context.begin_transaction():
        context.add(PersonORM(...))
        context.save_changes()
        fila = context.query_first_or_default(dict, "SELECT * FROM person WHERE id = :id", {"id": 1})
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect, text
from sqlalchemy.orm import Query, Session, SessionTransaction

from config import settings
from core.exceptions import DatabaseException
from database.mappings import ENTITY_MAPPINGS, register_mappings
from database.models import ChangeLogORM
from utils.datetime_utils import get_audit_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COMMAND_TIMEOUT = 30

_SCALAR_TYPES = (int, float, str, bool, bytes, Decimal, datetime, date)


class CommandType(str, Enum):
    text = "text"
    stored_procedure = "stored_procedure"


@dataclass(frozen=True)
class CommandDefinition:
    """Comando SQL listo para ejecutarse. No posee recursos: no hay nada que liberar."""
    command_text: str
    parameters: Optional[Mapping[str, Any]] = None
    timeout: int = DEFAULT_COMMAND_TIMEOUT
    command_type: CommandType = CommandType.text
    transaction: Optional[SessionTransaction] = None


@dataclass(frozen=True)
class ChangeSet:
    """Instantánea de los cambios pendientes de la sesión."""
    added: tuple = ()
    modified: tuple = ()
    deleted: tuple = ()

    def __len__(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted)

    def entries(self):
        for entity in self.added:
            yield entity, "added"
        for entity in self.modified:
            yield entity, "modified"
        for entity in self.deleted:
            yield entity, "deleted"


class ContextTransaction:
    """Transacción explícita del contexto.

    Como context manager hace commit al salir normalmente y rollback ante
    cualquier excepción (incluida la cancelación).
    """

    def __init__(self, context: "ApplicationDbContext", session_transaction: SessionTransaction):
        self._context = context
        self.session_transaction = session_transaction
        self._closed = False

    @property
    def is_active(self) -> bool:
        return not self._closed and self.session_transaction.is_active

    def commit(self) -> None:
        try:
            self._context.session.commit()
        finally:
            self._release()

    def rollback(self) -> None:
        try:
            self._context.session.rollback()
        finally:
            self._release()

    def _release(self) -> None:
        self._closed = True
        if self._context._transaction is self:
            self._context._transaction = None

    def __enter__(self) -> "ContextTransaction":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._closed:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


class ApplicationDbContext:
    """
    Frontera única entre la aplicación y la base de datos.

    Expone el camino ORM (add/remove/find/set + save_changes) y el camino SQL
    directo (query_many / query_first_or_default) sobre la misma sesión.
    Una instancia por unidad de trabajo; no es seguro compartirla entre hilos.
    """

    def __init__(
        self,
        session: Session,
        default_timeout: Optional[int] = None,
        mappings: Iterable[type] = ENTITY_MAPPINGS,
        change_log_enabled: Optional[bool] = None,
        sensitive_data_logging: Optional[bool] = None,
    ):
        """
        Inicializa el contexto y aplica la configuración del modelo.

        Args:
            session: Sesión SQLAlchemy de la unidad de trabajo
            default_timeout: Timeout por defecto de los comandos SQL directos (segundos)
            mappings: Registro explícito de clases ORM
            change_log_enabled: Escribir change_log al guardar (por defecto, la configuración)
            sensitive_data_logging: Registrar valores de parámetros (por defecto, la configuración)

        Raises:
            ConfigurationException: Si el registro de mapeos es inválido
        """
        self.session = session
        self.default_timeout = default_timeout
        self.mappings = register_mappings(mappings)
        self.change_log_enabled = (
            settings.change_log_enabled if change_log_enabled is None else change_log_enabled
        )
        self.sensitive_data_logging = (
            settings.sensitive_data_logging if sensitive_data_logging is None else sensitive_data_logging
        )
        self._transaction: Optional[ContextTransaction] = None

    # ==================== Camino ORM ====================

    def set(self, model_class: Type[T]) -> Query:
        return self.session.query(model_class)

    def find(self, model_class: Type[T], id: Any) -> Optional[T]:
        return self.session.get(model_class, id)

    def add(self, entity) -> None:
        self.session.add(entity)

    def add_range(self, entities: Iterable) -> None:
        self.session.add_all(list(entities))

    def remove(self, entity) -> None:
        self.session.delete(entity)

    def remove_range(self, entities: Iterable) -> None:
        for entity in list(entities):
            self.session.delete(entity)

    def refresh(self, entity) -> None:
        self.session.refresh(entity)

    # ==================== Transacciones ====================

    @property
    def current_transaction(self) -> Optional[SessionTransaction]:
        """Transacción en curso de la sesión (explícita o iniciada automáticamente)."""
        return self.session.get_transaction()

    @property
    def has_explicit_transaction(self) -> bool:
        return self._transaction is not None

    def begin_transaction(self) -> ContextTransaction:
        """
        Abre una transacción explícita compartida por el camino ORM y el SQL directo.

        Mientras esté abierta, save_changes solo hace flush; el commit lo decide la transacción.

        Raises:
            DatabaseException: Si ya hay una transacción explícita abierta
        """
        if self._transaction is not None:
            raise DatabaseException("Ya existe una transacción activa en el contexto")
        session_transaction = self.session.get_transaction() or self.session.begin()
        self._transaction = ContextTransaction(self, session_transaction)
        return self._transaction

    def accept_all_changes(self) -> None:
        """Confirma el trabajo que un guardado con accept_all_changes_on_success=False dejó abierto."""
        if self._transaction is not None:
            return
        self.session.commit()

    def rollback(self) -> None:
        if self._transaction is not None:
            self._transaction.rollback()
        else:
            self.session.rollback()

    # ==================== Guardado ====================

    def detect_changes(self) -> ChangeSet:
        """
        Materializa el conjunto de cambios pendientes.

        Returns:
            ChangeSet con entidades agregadas, modificadas (con cambios netos) y eliminadas
        """
        session = self.session
        added = tuple(e for e in session.new if not isinstance(e, ChangeLogORM))
        modified = tuple(
            e for e in session.dirty
            if not isinstance(e, ChangeLogORM) and session.is_modified(e)
        )
        deleted = tuple(e for e in session.deleted if not isinstance(e, ChangeLogORM))
        return ChangeSet(added=added, modified=modified, deleted=deleted)

    def save_changes(self, accept_all_changes_on_success: bool = True) -> int:
        """
        Detecta y audita los cambios pendientes y los envía a la base de datos.

        Args:
            accept_all_changes_on_success: Si True y no hay transacción explícita, hace commit

        Returns:
            Cantidad de entidades afectadas

        Raises:
            SQLAlchemyError: El error del driver, sin envolver
        """
        changes = self.detect_changes()
        audit_entries = self._audit(changes)
        return self._persist(changes, audit_entries, accept_all_changes_on_success)

    async def save_changes_async(self, accept_all_changes_on_success: bool = True) -> int:
        """
        Variante asíncrona de save_changes.

        La detección de cambios termina antes de que empiece la escritura. Si el
        llamador se cancela, la cancelación se propaga cuando el comando en curso
        termina, de modo que la sesión nunca se usa desde dos hilos a la vez.
        """
        changes = self.detect_changes()
        audit_entries = self._audit(changes)
        worker = asyncio.ensure_future(
            asyncio.to_thread(self._persist, changes, audit_entries, accept_all_changes_on_success)
        )
        try:
            return await asyncio.shield(worker)
        except asyncio.CancelledError:
            logger.warning("Guardado asíncrono cancelado; esperando a que termine el comando en curso")
            await asyncio.wait({worker})
            if not worker.cancelled() and worker.exception() is not None:
                logger.error(f"El guardado cancelado falló: {worker.exception()}")
            raise

    def _audit(self, changes: ChangeSet) -> List[tuple]:
        """Sella fechas de auditoría y prepara las entradas de change_log (antes del flush)."""
        now = get_audit_now()
        for entity in changes.added:
            if hasattr(entity, "create_date") and entity.create_date is None:
                entity.create_date = now
        for entity in changes.modified:
            if hasattr(entity, "update_date"):
                entity.update_date = now

        if not self.change_log_enabled:
            return []
        entries = []
        for entity, change_type in changes.entries():
            state = inspect(entity)
            fields = [attr.key for attr in state.mapper.column_attrs if state.attrs[attr.key].history.has_changes()]
            entries.append((entity, change_type, ",".join(fields) or None))
        return entries

    def _persist(self, changes: ChangeSet, audit_entries: List[tuple], accept: bool) -> int:
        try:
            self.session.flush()
            if audit_entries:
                now = get_audit_now()
                for entity, change_type, fields in audit_entries:
                    identity = inspect(entity).identity
                    self.session.add(ChangeLogORM(
                        entity_name=type(entity).__name__.removesuffix("ORM"),
                        entity_id=str(identity[0]) if identity else None,
                        change_type=change_type,
                        changed_fields=fields,
                        change_date=now,
                    ))
                self.session.flush()
            if accept and self._transaction is None:
                self.session.commit()
        except Exception:
            if self._transaction is None:
                self.session.rollback()
            raise
        logger.debug(
            f"Cambios guardados: {len(changes.added)} agregados, "
            f"{len(changes.modified)} modificados, {len(changes.deleted)} eliminados"
        )
        return len(changes)

    # ==================== SQL directo ====================

    def build_command(
        self,
        command_text: str,
        parameters: Any = None,
        timeout: Optional[int] = None,
        command_type: CommandType = CommandType.text,
    ) -> CommandDefinition:
        """
        Construye la definición de un comando ligada a la transacción actual.

        El timeout se resuelve así: explícito, luego el del contexto, luego 30 segundos.

        Raises:
            ValueError: Si el texto del comando está vacío
        """
        if not command_text or not command_text.strip():
            raise ValueError("command_text es obligatorio")
        if timeout is None:
            timeout = self.default_timeout if self.default_timeout is not None else DEFAULT_COMMAND_TIMEOUT
        return CommandDefinition(
            command_text=command_text,
            parameters=_normalize_parameters(parameters),
            timeout=timeout,
            command_type=CommandType(command_type),
            transaction=self.current_transaction,
        )

    def query_many(
        self,
        result_type: Optional[Type[T]],
        command_text: str,
        parameters: Any = None,
        timeout: Optional[int] = None,
        command_type: CommandType = CommandType.text,
    ) -> List[T]:
        """
        Ejecuta una consulta y mapea todas las filas a `result_type`.

        Returns:
            Lista de filas mapeadas (vacía si no hay resultados)
        """
        command = self.build_command(command_text, parameters, timeout, command_type)
        result = self.execute(command)
        return [_map_row(row, result_type) for row in result.all()]

    def query_first_or_default(
        self,
        result_type: Optional[Type[T]],
        command_text: str,
        parameters: Any = None,
        timeout: Optional[int] = None,
        command_type: CommandType = CommandType.text,
        default: Any = None,
    ) -> Optional[T]:
        """
        Ejecuta una consulta y mapea la primera fila a `result_type`.

        Returns:
            La primera fila mapeada, o `default` si no hay filas
        """
        command = self.build_command(command_text, parameters, timeout, command_type)
        row = self.execute(command).first()
        if row is None:
            return default
        return _map_row(row, result_type)

    async def query_many_async(self, result_type, command_text, parameters=None, timeout=None,
                               command_type=CommandType.text):
        return await asyncio.to_thread(
            self.query_many, result_type, command_text, parameters, timeout, command_type
        )

    async def query_first_or_default_async(self, result_type, command_text, parameters=None, timeout=None,
                                           command_type=CommandType.text, default=None):
        return await asyncio.to_thread(
            self.query_first_or_default, result_type, command_text, parameters, timeout, command_type, default
        )

    def execute(self, command: CommandDefinition):
        """Ejecuta un CommandDefinition sobre la conexión y transacción de la sesión."""
        parameters = dict(command.parameters or {})
        statement = self.render_statement(command, parameters)
        if self.sensitive_data_logging:
            logger.debug(
                f"Ejecutando comando ({command.command_type.value}, timeout={command.timeout}s): "
                f"{statement} parámetros={parameters}"
            )
        else:
            logger.debug(f"Ejecutando comando ({command.command_type.value}, timeout={command.timeout}s): {statement}")
        return self.session.execute(
            text(statement),
            parameters,
            execution_options={"command_timeout": command.timeout},
        )

    def render_statement(self, command: CommandDefinition, parameters: Mapping[str, Any]) -> str:
        if command.command_type is CommandType.text:
            return command.command_text
        name = command.command_text.strip()
        if self.session.get_bind().dialect.name == "mssql":
            arguments = ", ".join(f"@{key} = :{key}" for key in parameters)
            return f"EXEC {name} {arguments}".rstrip()
        arguments = ", ".join(f":{key}" for key in parameters)
        return f"CALL {name}({arguments})"


def _normalize_parameters(parameters: Any) -> Optional[dict]:
    """Acepta dict, modelos pydantic u objetos simples como parámetros con nombre."""
    if parameters is None:
        return None
    if isinstance(parameters, Mapping):
        return dict(parameters)
    if isinstance(parameters, BaseModel):
        return parameters.model_dump()
    return dict(vars(parameters))


def _map_row(row, result_type):
    mapping = row._mapping
    if result_type is None or result_type is dict:
        return dict(mapping)
    if result_type in _SCALAR_TYPES:
        value = row[0]
        if value is None or isinstance(value, result_type):
            return value
        return result_type(value)
    if isinstance(result_type, type) and issubclass(result_type, BaseModel):
        return result_type.model_validate(dict(mapping))
    return result_type(**mapping)
