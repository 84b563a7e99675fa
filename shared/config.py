import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

# Carga de variables de entorno (.env) antes de cualquier lectura
load_dotenv()

DEFAULT_USUARIOS_BASE_URL = "http://localhost:8080/api"
DEFAULT_USUARIOS_TIMEOUT = 5.0  # mismo valor por defecto que httpx


class Settings(BaseModel):
    usuarios_base_url: str = DEFAULT_USUARIOS_BASE_URL
    usuarios_timeout: float = DEFAULT_USUARIOS_TIMEOUT
    usuarios_api_prefix: str = "/api"
    pedidos_api_prefix: str = ""
    log_file: str = "logs.json"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            usuarios_base_url=os.getenv("USUARIOS_BASE_URL", DEFAULT_USUARIOS_BASE_URL),
            usuarios_timeout=float(os.getenv("USUARIOS_TIMEOUT", DEFAULT_USUARIOS_TIMEOUT)),
            usuarios_api_prefix=os.getenv("USUARIOS_API_PREFIX", "/api"),
            pedidos_api_prefix=os.getenv("PEDIDOS_API_PREFIX", ""),
            log_file=os.getenv("LOG_FILE", "logs.json"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
