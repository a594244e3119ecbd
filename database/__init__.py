from .db import (
    SessionLocal,
    create_tables,
    engine,
    get_db,
    get_database_url,
    hash_password,
    verify_password,
)
from .models import Base, UserORM
from .context import ApplicationDbContext, CommandDefinition, CommandType, ChangeSet

__all__ = [
    "SessionLocal",
    "create_tables",
    "engine",
    "get_db",
    "get_database_url",
    "hash_password",
    "verify_password",
    "Base",
    "UserORM",
    "ApplicationDbContext",
    "CommandDefinition",
    "CommandType",
    "ChangeSet",
]
