"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Protocol

import yaml
from pydantic import BaseModel, Field, ValidationError

DEFAULT_SESSION_DURATION = 3600
MAX_SESSION_DURATION = timedelta(days=365)


@dataclass
class RedisConfig:
    """Redis connection configuration."""
    host: str
    port: int
    db: int
    password: Optional[str] = None


@dataclass
class SessionConfig:
    """Session lifecycle configuration."""
    base_duration: timedelta
    # Carried for a future protocol layer; no lifecycle operation reads it
    token_secret: str = ""
    extend_expired: bool = False

    def __post_init__(self):
        if self.base_duration <= timedelta(0):
            raise ValueError(f"Session duration must be positive, got {self.base_duration}")
        if self.base_duration > MAX_SESSION_DURATION:
            raise ValueError(
                f"Session duration must not exceed {MAX_SESSION_DURATION}, got {self.base_duration}"
            )


@dataclass
class APIConfig:
    """API configuration."""
    host: str
    port: int
    debug: bool = False
    log_level: str = "INFO"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_redis_config(self) -> RedisConfig:
        """Get Redis configuration."""
        ...

    def get_session_config(self) -> SessionConfig:
        """Get session configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_port(value: str) -> int:
    # Kubernetes service links inject REDIS_PORT as tcp://host:port
    if value.startswith("tcp://"):
        value = value.split(":")[-1]
    port = int(value)
    if not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port}")
    return port


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_redis_config(self) -> RedisConfig:
        """Get Redis configuration from environment variables."""
        return RedisConfig(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=_parse_port(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            password=os.getenv("REDIS_PASSWORD") or None,
        )

    def get_session_config(self) -> SessionConfig:
        """Get session configuration from environment variables."""
        return SessionConfig(
            base_duration=timedelta(
                seconds=float(os.getenv("SESSION_DURATION", str(DEFAULT_SESSION_DURATION)))
            ),
            token_secret=os.getenv("TOKEN_SECRET", ""),
            extend_expired=_parse_bool(os.getenv("SESSION_EXTEND_EXPIRED", "false")),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=_parse_port(os.getenv("API_PORT", "8080")),
            debug=_parse_bool(os.getenv("API_DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


class _RedisFileSpec(BaseModel):
    host: str = "localhost"
    port: int = Field(6379, gt=0, lt=65536)
    db: int = Field(0, ge=0)
    password: Optional[str] = None


class _ConfigFileSpec(BaseModel):
    redis: _RedisFileSpec = Field(default_factory=_RedisFileSpec)
    token_secret: str = ""
    server_host: str = "0.0.0.0"
    server_port: int = Field(8080, gt=0, lt=65536)
    session_duration: float = Field(DEFAULT_SESSION_DURATION, gt=0)
    extend_expired: bool = False
    log_level: str = "INFO"
    debug: bool = False


class YamlConfigProvider:
    """
    YAML file configuration provider.

    File layout::

        redis:
          host: localhost
          port: 6379
          db: 0
          password: secret
        token_secret: change-me
        server_port: 8080
        session_duration: 3600
    """

    def __init__(self, path: str):
        self.path = path
        self._spec = self._load(path)

    @staticmethod
    def _load(path: str) -> _ConfigFileSpec:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration file {path}: expected a mapping at top level")
        try:
            return _ConfigFileSpec(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e

    def get_redis_config(self) -> RedisConfig:
        redis_spec = self._spec.redis
        return RedisConfig(
            host=redis_spec.host,
            port=redis_spec.port,
            db=redis_spec.db,
            password=redis_spec.password or None,
        )

    def get_session_config(self) -> SessionConfig:
        return SessionConfig(
            base_duration=timedelta(seconds=self._spec.session_duration),
            token_secret=self._spec.token_secret,
            extend_expired=self._spec.extend_expired,
        )

    def get_api_config(self) -> APIConfig:
        return APIConfig(
            host=self._spec.server_host,
            port=self._spec.server_port,
            debug=self._spec.debug,
            log_level=self._spec.log_level.upper(),
        )


def get_config_provider() -> ConfigProvider:
    """Return the YAML provider when GATEHOUSE_CONFIG is set, else the environment one."""
    config_path = os.getenv("GATEHOUSE_CONFIG")
    if config_path:
        return YamlConfigProvider(config_path)
    return EnvConfigProvider()
