"""Process-wide settings shared by every form.

Holds the route table, the default error message and the transport.
The host application sets these once with `configure()` (or loads them
from a YAML file) before submitting forms:

    routes:
      users.update: /api/users/{id}
    error_message: Something went wrong. Please try again.
    base_url: https://example.com
    timeout: 10
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from formstate.exceptions import ConfigError
from formstate.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."
CONFIG_ENV_VAR = "FORMSTATE_CONFIG"


class FormSettings(BaseModel):
    """Settings consulted by every form submission."""

    routes: dict[str, str] = Field(default_factory=dict)
    error_message: str = DEFAULT_ERROR_MESSAGE
    base_url: str | None = None
    timeout: float | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


_settings = FormSettings()
_transport: Transport | None = None


def get_config_path() -> Path:
    """Return the settings file path ($FORMSTATE_CONFIG or ~/.config/formstate/config.yaml)."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "formstate" / "config.yaml"


def load_settings(path: Path | str | None = None) -> FormSettings:
    """Load settings from a YAML file.

    Args:
        path: Settings file. Defaults to `get_config_path()`, in which case
            a missing file yields default settings.

    Returns:
        The parsed settings (not installed; pass them to `configure()`).

    Raises:
        ConfigError: If an explicit path is missing, or the file is not
            valid YAML or does not match `FormSettings`.
    """
    explicit = path is not None
    config_path = Path(path) if path is not None else get_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Settings file not found: {config_path}")
        return FormSettings()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file must contain a mapping: {config_path}")

    try:
        return FormSettings(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e


def configure(
    settings: FormSettings | None = None,
    *,
    transport: Transport | None = None,
    **overrides: Any,
) -> FormSettings:
    """Install process-wide settings.

    Args:
        settings: Complete settings replacing the current ones.
        transport: Transport to use for every submission.
        **overrides: Individual `FormSettings` fields to change.

    Returns:
        The settings now in effect.
    """
    global _settings, _transport

    base = settings if settings is not None else _settings
    if overrides:
        base = FormSettings(**{**base.model_dump(), **overrides})
    _settings = base

    if transport is not None:
        _transport = transport
    elif isinstance(_transport, RequestsTransport):
        # Rebuilt from the new settings on next use
        _transport = None

    logger.debug("Configured formstate with %d routes", len(_settings.routes))
    return _settings


def get_settings() -> FormSettings:
    """Return the settings in effect."""
    return _settings


def reset_settings() -> None:
    """Restore default settings and drop the configured transport."""
    global _settings, _transport
    _settings = FormSettings()
    _transport = None


def set_transport(transport: Transport | None) -> None:
    global _transport
    _transport = transport


def get_transport() -> Transport:
    """Return the configured transport, creating a `RequestsTransport` if unset."""
    global _transport
    if _transport is None:
        _transport = RequestsTransport(
            base_url=_settings.base_url,
            timeout=_settings.timeout,
            headers=_settings.headers,
        )
    return _transport
