"""engine, sesiones y utilidades de persistencia compartidas por el contexto y los repositorios."""
from typing import Optional, Generator
import hashlib
import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from .models import Base
from .mappings import register_mappings

from config import settings

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
    """argumentos de conexión según el driver configurado."""
    if settings.is_sqlserver:
        return {"timeout": 30}  #timeout de login para pyodbc
    if settings.database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def install_command_timeout(target: Engine) -> None:
    """Aplica la opción de ejecución `command_timeout` a la conexión DBAPI antes de cada comando.

    Solo los drivers que exponen `timeout` en la conexión (pyodbc) la respetan;
    en el resto la opción viaja con el comando y se ignora.
    """

    @event.listens_for(target, "before_cursor_execute")
    def _apply_command_timeout(conn, cursor, statement, parameters, context, executemany):
        if context is None:
            return
        timeout = context.execution_options.get("command_timeout")
        if timeout is None:
            return
        dbapi_connection = conn.connection.dbapi_connection
        if hasattr(dbapi_connection, "timeout"):
            dbapi_connection.timeout = timeout


#un engine por proceso; las sesiones se abren por request (get_db) o por ServiceContext
engine = create_engine(
    settings.database_url,
    echo=settings.debug_mode,
    future=True,
    pool_pre_ping=True,
    pool_recycle=3600,  #SQL Server cierra conexiones ociosas
    hide_parameters=not settings.sensitive_data_logging,
    connect_args=_connect_args(),
)
install_command_timeout(engine)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """sesión por request; el ApplicationDbContext del request se construye sobre ella.

    Un SQLAlchemyError que escape del endpoint deshace la transacción pendiente.
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Rollback de la sesión del request: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """valida el registro de mapeos y crea las tablas que falten (sin migraciones).

    Raises:
        ConfigurationException: registro de mapeos duplicado o incompleto
        SQLAlchemyError: fallo del motor al crear el esquema
    """
    register_mappings()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Esquema verificado: {len(Base.metadata.tables)} tablas")
    except SQLAlchemyError as e:
        logger.error(f"No se pudo crear el esquema: {e}", exc_info=True)
        raise


def get_database_url() -> str:
    """URL del engine apta para logs (sin usuario ni contraseña)."""
    url = engine.url.render_as_string(hide_password=True)
    if '@' in url:
        return f"***@{url.split('@', 1)[1]}"
    return url


def hash_password(password: str) -> tuple[str, str]:
    """PBKDF2-HMAC-SHA256 con salt aleatorio; devuelve (salt_hex, hash_hex) para UserORM."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)
    return salt.hex(), dk.hex()


def verify_password(salt_hex: str, hash_hex: str, password: str) -> bool:
    """compara el password con el salt y hash guardados en el usuario."""
    salt = bytes.fromhex(salt_hex)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)
    return dk.hex() == hash_hex


def deactivate(obj) -> None:
    """
    marca un objeto como inactivo (eliminación lógica)

    Args:
        obj: instancia ORM a desactivar
    """
    from utils.datetime_utils import get_audit_now
    obj.active = False
    if hasattr(obj, "delete_date"):
        obj.delete_date = get_audit_now()


def reactivate(obj) -> None:
    """restaura un objeto previamente desactivado

    Args:
        obj: instancia ORM a reactivar
    """
    obj.active = True
    if hasattr(obj, "delete_date"):
        obj.delete_date = None
