"""YAML + env var config loading with pydantic-settings."""

from __future__ import annotations

import os
import signal
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()

_ENV_PREFIX = "CODESHIELD_"
_DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def _load_yaml_defaults(path: Path) -> dict[str, Any]:
    """Load YAML config file, returning empty dict on failure."""
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


class CodeShieldSettings(BaseSettings):
    """Service configuration: model defaults < YAML file < env vars."""

    model_config = SettingsConfigDict(
        env_prefix=_ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: str = str(_DEFAULTS_PATH)
    log_level: str = "info"
    log_json: bool = True

    # AI gateway
    gateway_url: str = "http://localhost:3400"
    gateway_api_key: str = ""
    gateway_timeout: float = 60.0
    gateway_scan_path: str = "/scan"
    gateway_remediation_path: str = "/remediate"
    gateway_best_practices_path: str = "/best-practices"
    gateway_max_connections: int = 20

    # HTTP server
    listen_host: str = "0.0.0.0"
    listen_port: int = 8080

    # Page sessions (in-memory only)
    session_cookie_name: str = "codeshield_session"
    session_idle_timeout: int = 1800  # 30 minutes
    session_max_pages: int = 1000
    session_cookie_secure: bool = False

    # Notifications
    notification_limit: int = Field(default=5, ge=1)
    notification_ttl_seconds: float = 8.0

    # Best-practices markup: "sanitize" (default) or "plain"
    best_practices_render_mode: str = Field(default="sanitize", pattern=r"^(sanitize|plain)$")

    # Security headers
    header_preset: str = "balanced"


_settings: CodeShieldSettings | None = None


def get_settings() -> CodeShieldSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def _yaml_overrides() -> dict[str, Any]:
    """YAML values for keys that are not already set through the environment."""
    path = Path(os.environ.get(f"{_ENV_PREFIX}CONFIG_FILE", str(_DEFAULTS_PATH)))
    values = _load_yaml_defaults(path)
    return {
        key: value
        for key, value in values.items()
        if key in CodeShieldSettings.model_fields
        and f"{_ENV_PREFIX}{key.upper()}" not in os.environ
    }


def load_settings() -> CodeShieldSettings:
    """Load settings from YAML and env vars (env vars override the YAML file)."""
    global _settings
    _settings = CodeShieldSettings(**_yaml_overrides())
    logger.info("config_loaded", gateway_url=_settings.gateway_url, port=_settings.listen_port)
    return _settings


def register_reload_handler() -> None:
    """Register SIGHUP handler for hot-reload of configuration."""
    import threading

    if threading.current_thread() is not threading.main_thread():
        logger.debug("skipping_sighup_handler", reason="not main thread")
        return

    def _reload(signum, frame):
        logger.info("config_reload_triggered")
        load_settings()

    try:
        signal.signal(signal.SIGHUP, _reload)
    except (ValueError, AttributeError):
        logger.debug("skipping_sighup_handler", reason="signal not supported")
