"""
Configuración de la aplicación (pydantic-settings).

Los valores se leen de variables de entorno o de un archivo .env en la raíz.
Los nombres de variable no distinguen mayúsculas (DATABASE_URL, LOG_LEVEL...).
"""
import secrets
import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Configuración tipada de la aplicación."""

    # Base de datos y contexto de persistencia
    database_url: str = Field(
        default="mssql+pyodbc:///?odbc_connect=DRIVER%3D%7BODBC+Driver+17+for+SQL+Server%7D%3BSERVER%3Dlocalhost%5CSQLEXPRESS%3BDATABASE%3DAutogestion%3BTrusted_Connection%3Dyes%3B",
        description="URL SQLAlchemy; por defecto SQL Server local vía pyodbc"
    )
    command_timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="Timeout (segundos) de las consultas SQL directas; sin valor se usan 30"
    )
    sensitive_data_logging: bool = Field(
        default=True,
        description="Incluir los valores de los parámetros en el log de cada comando"
    )
    change_log_enabled: bool = Field(
        default=True,
        description="Escribir una fila de change_log por cada entidad guardada"
    )

    # JWT
    jwt_secret_key: str = Field(default="", description="Clave de firma HS256 (mínimo 32 caracteres)")
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_minutes: int = Field(default=30, ge=1, le=1440, description="Vigencia del token en minutos")
    jwt_issuer: str = Field(default="Autogestion")
    jwt_audience: str = Field(default="AutogestionClient")
    admin_role_name: str = Field(
        default="Administrador",
        description="type_rol que habilita la asignación de roles y permisos"
    )

    # CORS
    cors_allowed_origins: str = Field(
        default="http://localhost,http://localhost:3000,http://127.0.0.1:5500,http://127.0.0.1:61371",
        description="Orígenes permitidos separados por coma"
    )

    # Aplicación
    app_name: str = Field(default="API Autogestión")
    app_version: str = Field(default="1.0.0")
    debug_mode: bool = Field(default=False, description="Activa el echo de SQLAlchemy y el modo debug de FastAPI")

    # Paginación
    default_page_size: int = Field(default=50, ge=1, le=100)
    max_page_size: int = Field(default=500, ge=1, le=500)

    # Logging y zona horaria
    log_level: str = Field(default="INFO")
    timezone: str = Field(default="America/Bogota", description="Zona IANA de las fechas de auditoría")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v: str) -> str:
        """Genera una clave temporal si falta o es demasiado corta."""
        if not v or len(v) < 32:
            logger.warning(
                "JWT_SECRET_KEY no configurado o muy corto. "
                "Se generó una clave temporal para desarrollo. "
                "En producción configure JWT_SECRET_KEY en .env"
            )
            return secrets.token_urlsafe(48)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            logger.warning(f"Nivel de log '{v}' no válido, se usa INFO. Válidos: {VALID_LOG_LEVELS}")
            return "INFO"
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return not self.debug_mode

    @property
    def is_sqlserver(self) -> bool:
        """Indica si la URL apunta a SQL Server (pyodbc)."""
        return self.database_url.startswith("mssql")


settings = Settings()


def configure_logging():
    """Configura el logging de la aplicación una sola vez, al importar main."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # el contexto registra sus propios comandos en DEBUG; el echo del engine solo en modo debug
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug_mode else logging.WARNING
    )

    logger.info(f"Logging configurado en nivel {settings.log_level}")
    logger.info(f"Aplicación: {settings.app_name} v{settings.app_version}")
    logger.info(f"Modo: {'Desarrollo' if settings.debug_mode else 'Producción'}")
