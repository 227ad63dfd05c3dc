"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Load the structured YAML config file with ${VAR} interpolation for secrets
  - Validate values at startup (production posture for the signing secret)

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: builds TokenCodec / PasswordHasher / repositories from settings
  - server.py: reads the HTTP timeout envelope

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Source priority: init kwargs > env vars > .env > YAML file
  - YAML sections are flattened: jwt.secret -> jwt_secret, server.port -> server_port
  - Singleton via lru_cache
"""

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_CONFIG_FILE = "config/config.yaml"

# ${VAR} o ${VAR:-default}
_ENV_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

# Claves del YAML (ya aplanadas) cuyo nombre no coincide con el campo.
_YAML_KEY_ALIASES = {
    "environment": "app_env",
    "database_pool_min_size": "db_pool_min_size",
    "database_pool_max_size": "db_pool_max_size",
    "database_statement_timeout_ms": "db_statement_timeout_ms",
    "database_slow_query_seconds": "db_slow_query_seconds",
    "logger_level": "log_level",
}

_TEST_ENVS = {"test", "testing", "ci"}


def interpolate_env(value: Any) -> Any:
    """Resolve ${VAR} / ${VAR:-default} placeholders recursively."""
    if isinstance(value, str):
        return _ENV_PLACEHOLDER.sub(
            lambda m: os.getenv(m.group(1), m.group(2) or ""), value
        )
    if isinstance(value, dict):
        return {k: interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate_env(v) for v in value]
    return value


def flatten_sections(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested YAML sections into settings field names."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        name = name.replace("-", "_").lower()
        if isinstance(value, dict):
            flat.update(flatten_sections(value, name))
        else:
            flat[_YAML_KEY_ALIASES.get(name, name)] = value

    # logger.encoding: json | console
    encoding = flat.pop("logger_encoding", None)
    if encoding is not None:
        flat["log_json"] = str(encoding).strip().lower() == "json"
    return flat


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    Settings source backed by the structured YAML config file.

    The path comes from CONFIG_FILE or model_config["yaml_file"].
    A missing file yields no values.
    """

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        configured = os.getenv("CONFIG_FILE") or settings_cls.model_config.get(
            "yaml_file"
        )
        self.yaml_file_path = Path(configured) if configured else None

    def get_field_value(self, field, field_name):
        # R: El archivo se carga completo en __call__.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if self.yaml_file_path is None or not self.yaml_file_path.exists():
            return {}
        with self.yaml_file_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{self.yaml_file_path} must contain a mapping")
        return flatten_sections(interpolate_env(raw))


class Settings(BaseSettings):
    """
    Application settings.

    Attributes:
        app_env: development | production | test
        server_*: bind address and HTTP timeout envelope (seconds)
        database_url: PostgreSQL connection string
        db_pool_*: psycopg_pool sizing
        db_statement_timeout_ms: per-connection statement timeout
        db_slow_query_seconds: queries at or above this are logged as slow
        jwt_secret: HS256 signing secret
        jwt_ttl_hours: token lifetime (default: 24)
        password_hash_*: argon2 cost parameters
        default_page_size / max_page_size: listing pagination bounds
        allowed_origins: Comma-separated CORS origins
        max_body_bytes: Max request body size
        log_level / log_json: logger configuration
        dev_seed_admin*: local bootstrap admin
    """

    # Environment
    app_env: str = "development"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    server_read_timeout_seconds: int = 15
    server_write_timeout_seconds: int = 15
    server_idle_timeout_seconds: int = 60
    server_shutdown_timeout_seconds: int = 30
    server_request_timeout_seconds: int = 60

    # Database
    database_url: str = ""
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000
    db_slow_query_seconds: float = 0.25

    # Auth
    jwt_secret: str = "dev-secret"
    jwt_ttl_hours: int = 24
    password_hash_time_cost: int = 3
    password_hash_memory_cost: int = 65536
    password_hash_parallelism: int = 4

    # Catalog
    default_page_size: int = 10
    max_page_size: int = 100

    # HTTP hardening
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False
    max_body_bytes: int = 1 * 1024 * 1024  # 1MB

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Dev Tools
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "admin1234"
    dev_seed_admin_name: str = "Admin"
    dev_seed_admin_force_reset: bool = False

    @field_validator("jwt_ttl_hours", "default_page_size", "max_page_size")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @model_validator(mode="after")
    def validate_page_bounds(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must be <= max_page_size")
        return self

    @model_validator(mode="after")
    def validate_database_requirements(self):
        if not self.database_url.strip() and not self.is_test_env():
            raise ValueError("DATABASE_URL is required (env var or database.url)")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "secret", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test_env(self) -> bool:
        return self.app_env.strip().lower() in _TEST_ENVS

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file=DEFAULT_CONFIG_FILE,
        extra="ignore",  # Ignore unknown env vars / yaml keys
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required values are missing or invalid
    """
    return Settings()
