"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import pytest
import os
from typing import Generator, Dict, Any
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Configurar para usar base de datos en memoria para tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from main import app
from database.db import get_db, hash_password
from database.context import ApplicationDbContext
from database.models import Base, UserORM, RolORM, UserRolORM, PersonORM
from auth import create_access_token
from config import settings


# ==================== Database Fixtures ====================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def db_context(db_session: Session) -> ApplicationDbContext:
    """ApplicationDbContext over the test session."""
    return ApplicationDbContext(db_session)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Data Fixtures ====================

@pytest.fixture
def person_data() -> Dict[str, Any]:
    """Sample person data for testing."""
    return {
        "first_name": "Laura",
        "second_name": "Marcela",
        "first_last_name": "Gómez",
        "second_last_name": "Rincón",
        "phone_number": 3001234567,
        "email": "laura.gomez@example.com",
        "type_identification": "CC",
        "number_identification": 1075000001,
    }


@pytest.fixture
def user_data() -> Dict[str, Any]:
    """Sample user data for testing."""
    return {
        "username": "lgomez",
        "email": "lgomez@example.com",
        "password": "password123",
    }


@pytest.fixture
def admin_data() -> Dict[str, Any]:
    return {
        "username": "admin",
        "email": "admin@example.com",
        "password": "password123",
    }


@pytest.fixture
def person_instance(db_session: Session, person_data: Dict[str, Any]) -> PersonORM:
    """Create a person in the database."""
    person = PersonORM(**person_data)
    db_session.add(person)
    db_session.commit()
    db_session.refresh(person)
    return person


# ==================== User Fixtures ====================

def _create_user(db_session: Session, data: Dict[str, Any]) -> UserORM:
    salt_hex, hash_hex = hash_password(data["password"])
    user = UserORM(
        username=data["username"],
        email=data["email"],
        password_salt=salt_hex,
        password_hash=hash_hex,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_rol(db_session: Session) -> RolORM:
    """Create the administrator rol."""
    rol = RolORM(type_rol=settings.admin_role_name, description="Acceso total")
    db_session.add(rol)
    db_session.commit()
    db_session.refresh(rol)
    return rol


@pytest.fixture
def aprendiz_rol(db_session: Session) -> RolORM:
    rol = RolORM(type_rol="Aprendiz", description="Aprendiz en etapa productiva")
    db_session.add(rol)
    db_session.commit()
    db_session.refresh(rol)
    return rol


@pytest.fixture
def regular_user(db_session: Session, user_data: Dict[str, Any]) -> UserORM:
    """Create a user without roles."""
    return _create_user(db_session, user_data)


@pytest.fixture
def admin_user(db_session: Session, admin_data: Dict[str, Any], admin_rol: RolORM) -> UserORM:
    """Create a user holding the administrator rol."""
    user = _create_user(db_session, admin_data)
    db_session.add(UserRolORM(user_id=user.id, rol_id=admin_rol.id))
    db_session.commit()
    return user


# ==================== Auth Token Fixtures ====================

@pytest.fixture
def user_token(regular_user: UserORM) -> str:
    """Generate a valid JWT token for the regular user."""
    return create_access_token(data={"sub": regular_user.id})


@pytest.fixture
def admin_token(admin_user: UserORM) -> str:
    """Generate a valid JWT token for the admin user."""
    return create_access_token(data={"sub": admin_user.id})


@pytest.fixture
def auth_headers_user(user_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def auth_headers_admin(admin_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
