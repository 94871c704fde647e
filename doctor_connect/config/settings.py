from pathlib import Path

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración del cliente Doctor Connect utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    PROJECT_NAME: str = "Doctor Connect"
    VERSION: str = "0.1.0"

    # Doctor API
    API_BASE_URL: str = Field("http://localhost:5001/", description="URL base de la API de doctores")
    API_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout para requests a la API en segundos")

    # Session storage
    SESSION_STORAGE_BACKEND: str = Field(
        "file", description="Backend de almacenamiento de sesión: file, memory o redis"
    )
    SESSION_STORAGE_PATH: Path = Field(
        Path.home() / ".doctor_connect" / "session.json",
        description="Archivo JSON donde se persiste la sesión (backend file)",
    )

    # Redis Settings (backend redis)
    REDIS_HOST: str = Field("localhost", description="Host de Redis")
    REDIS_PORT: int = Field(6379, description="Puerto de Redis")
    REDIS_DB: int = Field(0, description="Base de datos de Redis")
    REDIS_PASSWORD: str | None = Field(None, description="Contraseña de Redis")
    REDIS_PREFIX: str = Field("doctor_connect:session", description="Prefijo de las claves de sesión en Redis")

    # Application Settings
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    DEBUG: bool = Field(False, description="Modo de depuración")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    @field_validator("API_BASE_URL")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Relative endpoint paths are resolved against the base URL."""
        return v if v.endswith("/") else f"{v}/"

    @field_validator("SESSION_STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        backend = v.lower()
        if backend not in {"file", "memory", "redis"}:
            raise ValueError(f"Unsupported session storage backend: {v}")
        return backend

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
