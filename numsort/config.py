"""Configuration utilities.

This module loads application configuration with the following rules:
- Primary source: a YAML file named by `CONFIG_PATH` (default `config/numsort.yaml`).
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
DEFAULT_CONFIG_FILE = CONFIG_DIR / "numsort.yaml"
ENVIRONMENTS = ("local", "dev", "prod")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class HttpServerConfig(BaseModel):
    address: str = Field(default="localhost:8081")
    timeout: float = Field(default=4.0, gt=0)
    idle_timeout: float = Field(default=60.0, gt=0)

    @field_validator("address")
    @classmethod
    def address_must_have_port(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError("http_server.address must be host:port")
        return v

    @property
    def host(self) -> str:
        return self.address.rpartition(":")[0] or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])


class DatabaseConfig(BaseModel):
    dsn: str
    auto_migrate: bool = Field(default=True)

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class AppConfig(BaseModel):
    env: str = Field(default="local")
    http_server: HttpServerConfig = Field(default_factory=HttpServerConfig)
    database: DatabaseConfig

    @field_validator("env")
    @classmethod
    def env_must_be_known(cls, v: str) -> str:
        if v not in ENVIRONMENTS:
            raise ValueError(f"env must be one of {list(ENVIRONMENTS)}")
        return v


def _read_yaml_file(path: Path) -> dict:
    try:
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to read YAML config %s: %s", path, e)
    return {}


def _as_bool(text: object) -> bool:
    return str(text).strip().lower() in {"1", "true", "yes", "on"}


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) YAML file at `path`, `CONFIG_PATH`, or config/numsort.yaml
    4) Safe defaults for development
    """

    config_path = Path(path or _env("CONFIG_PATH") or DEFAULT_CONFIG_FILE)
    if (path or _env("CONFIG_PATH")) and not config_path.exists():
        logger.warning("Config file %s not found; using environment and defaults", config_path)
    base = _read_yaml_file(config_path)

    # Helpers to fetch from base YAML
    def _base(dotted: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in dotted.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    env = (_env("NUMSORT_ENV") or _read_config_file("env") or _base("env", "local")).strip()

    # HTTP server
    address = _env("HTTP_SERVER_ADDRESS") or _read_config_file("http_server.address") or _base("http_server.address", "localhost:8081")
    timeout_text = _env("HTTP_SERVER_TIMEOUT") or _read_config_file("http_server.timeout") or _base("http_server.timeout", "4")
    idle_text = _env("HTTP_SERVER_IDLE_TIMEOUT") or _read_config_file("http_server.idle_timeout") or _base("http_server.idle_timeout", "60")

    # Database
    dsn = _env("DATABASE_URL") or _read_config_file("database.url") or _base("database.dsn") or "sqlite+pysqlite:///./numsort.db"
    auto_migrate_text = _env("AUTO_APPLY_MIGRATIONS") or _read_config_file("database.auto_migrate") or _base("database.auto_migrate", "true")

    try:
        cfg = AppConfig(
            env=env,
            http_server=HttpServerConfig(
                address=str(address).strip(),
                timeout=float(str(timeout_text).strip()),
                idle_timeout=float(str(idle_text).strip()),
            ),
            database=DatabaseConfig(dsn=dsn, auto_migrate=_as_bool(auto_migrate_text)),
        )
        return cfg
    except PydanticValidationError as e:
        # Surface actionable message
        logger.error("Invalid application configuration: %s", e)
        raise
    except ValueError as e:
        # float() on a non-numeric timeout
        logger.error("Invalid numeric configuration value: %s", e)
        raise


__all__ = [
    "AppConfig",
    "HttpServerConfig",
    "DatabaseConfig",
    "load_config",
]
