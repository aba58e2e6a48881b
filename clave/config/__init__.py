"""
Configuration management for Clave.

Settings are loaded from the packaged `settings.toml` and can be overridden
per deployment through environment variables:

- CLAVE_DATA_SOURCE_URL: base URL of the catalog worker API
- CLAVE_ASSET_BASE_URL: public base URL of the cover-art bucket
- CLAVE_REQUEST_TIMEOUT: data source request timeout in seconds
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

# Path to the config directory
CONFIG_DIR = Path(__file__).parent

DEFAULT_DATA_SOURCE_URL = "https://d1-worker.americanclaveuser.workers.dev"
DEFAULT_ASSET_BASE_URL = "https://pub-2e173b57501f46d1b35ca8b2b67e30e6.r2.dev"
DEFAULT_REQUEST_TIMEOUT = 10.0

ENV_DATA_SOURCE_URL = "CLAVE_DATA_SOURCE_URL"
ENV_ASSET_BASE_URL = "CLAVE_ASSET_BASE_URL"
ENV_REQUEST_TIMEOUT = "CLAVE_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    """Loaded runtime settings."""

    data_source_url: str = DEFAULT_DATA_SOURCE_URL
    asset_base_url: str = DEFAULT_ASSET_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    web_host: str = "0.0.0.0"
    web_port: int = 9000


def _parse_timeout(value: object, source: str) -> float:
    """Parse a timeout value, falling back to the default on bad input."""
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Invalid request timeout %r from %s, using %.1fs", value, source, DEFAULT_REQUEST_TIMEOUT)
        return DEFAULT_REQUEST_TIMEOUT

    if timeout <= 0:
        logger.warning("Non-positive request timeout %r from %s, using %.1fs", value, source, DEFAULT_REQUEST_TIMEOUT)
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load settings from a TOML file and apply environment overrides.

    Args:
        config_path: Path to settings.toml. If None, uses the packaged default.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        Loaded Settings instance.
    """
    if config_path is None:
        config_path = CONFIG_DIR / "settings.toml"
    if environ is None:
        environ = os.environ

    data: dict[str, object] = {}
    if config_path.exists():
        logger.debug("Loading settings from %s", config_path)
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    else:
        logger.warning("Settings file %s not found, using defaults", config_path)

    source = data.get("source", {})
    assets = data.get("assets", {})
    web = data.get("web", {})
    if not isinstance(source, dict):
        source = {}
    if not isinstance(assets, dict):
        assets = {}
    if not isinstance(web, dict):
        web = {}

    data_source_url = str(source.get("url", DEFAULT_DATA_SOURCE_URL))
    asset_base_url = str(assets.get("base_url", DEFAULT_ASSET_BASE_URL))
    request_timeout = _parse_timeout(source.get("timeout", DEFAULT_REQUEST_TIMEOUT), str(config_path))

    # Environment wins over the file
    if environ.get(ENV_DATA_SOURCE_URL):
        data_source_url = environ[ENV_DATA_SOURCE_URL]
    if environ.get(ENV_ASSET_BASE_URL):
        asset_base_url = environ[ENV_ASSET_BASE_URL]
    if environ.get(ENV_REQUEST_TIMEOUT):
        request_timeout = _parse_timeout(environ[ENV_REQUEST_TIMEOUT], ENV_REQUEST_TIMEOUT)

    return Settings(
        data_source_url=data_source_url.rstrip("/"),
        asset_base_url=asset_base_url.rstrip("/"),
        request_timeout=request_timeout,
        web_host=str(web.get("host", "0.0.0.0")),
        web_port=int(web.get("port", 9000)),  # type: ignore[call-overload]
    )


# Global singleton instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings (lazy loaded singleton).

    Returns:
        The Settings instance.
    """
    global _settings

    if _settings is None:
        _settings = load_settings()

    return _settings


def reload_settings() -> Settings:
    """
    Force reload of settings (e.g. after changing the environment).

    Returns:
        The newly loaded Settings instance.
    """
    global _settings
    _settings = load_settings()
    return _settings
