"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_DIR = Path.home() / ".config" / "backend-passthrough"
CONFIG_FILE = CONFIG_DIR / "config.json"

SUPPORTED_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE")


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5173
    debug: bool = False


class BackendSettings(BaseModel):
    origin: str = "http://localhost:3000"
    login_path: str = "/login"
    timeout: float = 300.0

    @field_validator("origin")
    @classmethod
    def _normalize_origin(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("backend origin must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("login_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


class ForwardSettings(BaseModel):
    methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"]
    )
    strip_hop_by_hop: bool = False
    log_responses: bool = True

    @field_validator("methods")
    @classmethod
    def _known_methods(cls, value: list[str]) -> list[str]:
        methods = [m.upper() for m in value]
        if not methods:
            raise ValueError("at least one forwarded method is required")
        unknown = sorted(set(methods) - set(SUPPORTED_METHODS))
        if unknown:
            raise ValueError(f"unsupported methods: {', '.join(unknown)}")
        return methods


class LimitsSettings(BaseModel):
    max_body_size: int = 50 * 1024 * 1024  # 50MB
    max_connections: int = 100
    max_keepalive_connections: int = 20
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    backend: BackendSettings = Field(default_factory=BackendSettings)
    forward: ForwardSettings = Field(default_factory=ForwardSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    config_file = config_file or CONFIG_FILE
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
