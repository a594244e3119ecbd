from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
import logging

from config import settings, configure_logging

from routes import (
    auth_router,
    persons_router,
    users_router,
    roles_router,
    user_roles_router,
    rol_form_permissions_router,
    change_logs_router,
    catalog_routers,
)
from database.db import SessionLocal, create_tables, get_database_url
from database.context import ApplicationDbContext
from models.common import HealthCheckResponse
from core.exceptions import ConfigurationException

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Crea las tablas al arrancar; un registro de mapeos inválido detiene el arranque."""
    try:
        create_tables()
    except ConfigurationException:
        raise
    except Exception as e:
        logger.warning(f"No se pudieron crear tablas en la base de datos ({get_database_url()}): {e}")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Backend administrativo de centros de formación: personas, usuarios, roles, permisos y formación.",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    debug=settings.debug_mode
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.include_router(auth_router)
app.include_router(persons_router)
app.include_router(users_router)
app.include_router(roles_router)
app.include_router(user_roles_router)
app.include_router(rol_form_permissions_router)
app.include_router(change_logs_router)
for catalog_router in catalog_routers:
    app.include_router(catalog_router)


def _environment() -> str:
    return "production" if settings.is_production else "development"


@app.get("/")
async def root():
    """Información básica de la API."""
    return {
        "message": f"{settings.app_name} - Gestión administrativa",
        "version": settings.app_version,
        "status": "active",
        "environment": _environment(),
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health", response_model=HealthCheckResponse)
def health_check():
    """Health check: ejecuta SELECT 1 por el camino SQL directo del contexto."""
    db = SessionLocal()
    try:
        ApplicationDbContext(db).query_first_or_default(int, "SELECT 1", timeout=5)
        db_status = "connected"
    except Exception as e:
        logger.error(f"Health check: error de conexión a la base de datos: {e}")
        db_status = "disconnected"
    finally:
        db.close()

    return HealthCheckResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service=settings.app_name,
        version=settings.app_version,
        database=db_status,
        environment=_environment(),
    )


if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
