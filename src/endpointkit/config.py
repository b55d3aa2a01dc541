"""Client configuration from project files and the environment.

The generator itself never reads files or environment variables; it is
handed a :class:`~endpointkit.models.ClientConfig` (or a transport handle).
This module builds that config for applications and for the ``endpointkit``
command line:

* **Project config** -- ``./endpointkit.yaml``, ``./endpointkit.yml`` or
  ``./endpointkit.json`` (the first that exists), a mapping of
  :class:`~endpointkit.models.ClientConfig` fields. Parsed with PyYAML;
  JSON files are valid YAML.
* **Environment** -- ``ENDPOINTKIT_BASE_URL``, ``ENDPOINTKIT_TIMEOUT`` and
  ``ENDPOINTKIT_VERIFY_SSL``.
* **Precedence resolution** -- :func:`resolve_client_config` merges
  explicit values, the environment and the project config into the final
  :class:`~endpointkit.models.ClientConfig`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import pydantic
import yaml

from endpointkit.exceptions import ConfigError
from endpointkit.models import ClientConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAMES = ("endpointkit.yaml", "endpointkit.yml", "endpointkit.json")

ENV_BASE_URL = "ENDPOINTKIT_BASE_URL"
ENV_TIMEOUT = "ENDPOINTKIT_TIMEOUT"
ENV_VERIFY_SSL = "ENDPOINTKIT_VERIFY_SSL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# --- Project-local config ---


def find_project_config(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first project config file found in *directory* (default: cwd)."""
    base = directory or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base / filename
        if candidate.is_file():
            return candidate
    return None


def load_project_config(path: Optional[Union[str, Path]] = None) -> Optional[dict[str, Any]]:
    """Load a project config file.

    Args:
        path: Explicit file to read. When ``None``, the current directory
            is searched for one of :data:`PROJECT_CONFIG_FILENAMES`.

    Returns:
        The parsed mapping, or ``None`` if no file was given and none was
        found. An empty file yields an empty dict.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is
            not valid YAML/JSON, or its top level is not a mapping.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = find_project_config()
        if config_path is None:
            return None

    try:
        loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {config_path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(
            f"Invalid project config at {config_path}: expected a mapping, "
            f"got {type(loaded).__name__}"
        )
    logger.debug("Loaded project config from %s", config_path)
    return loaded


# --- Environment ---


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_env_config() -> dict[str, Any]:
    """Read the ``ENDPOINTKIT_*`` environment variables that are set."""
    values: dict[str, Any] = {}

    base_url = os.environ.get(ENV_BASE_URL)
    if base_url:
        values["base_url"] = base_url

    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            values["timeout"] = float(timeout)
        except ValueError:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {timeout!r}") from None

    verify = os.environ.get(ENV_VERIFY_SSL)
    if verify:
        values["verify_ssl"] = _parse_bool(ENV_VERIFY_SSL, verify)

    return values


# --- Precedence resolution ---


def resolve_client_config(
    cli_base_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    config_path: Optional[Union[str, Path]] = None,
) -> ClientConfig:
    """Resolve the client config with the full precedence chain.

    Precedence (high to low):
        1. Explicit values (``cli_base_url``, ``cli_timeout``)
        2. Environment variables (``ENDPOINTKIT_BASE_URL``,
           ``ENDPOINTKIT_TIMEOUT``, ``ENDPOINTKIT_VERIFY_SSL``)
        3. Project config (``config_path`` or ``./endpointkit.yaml`` ...)
        4. Defaults

    Raises:
        ConfigError: If any layer holds invalid values.
    """
    # 4 + 3. Defaults filled in by the model, project config layered on top
    merged: dict[str, Any] = dict(load_project_config(config_path) or {})

    # 2. Environment variables
    merged.update(load_env_config())

    # 1. Explicit values (highest precedence)
    if cli_base_url is not None:
        merged["base_url"] = cli_base_url
    if cli_timeout is not None:
        merged["timeout"] = cli_timeout

    try:
        return ClientConfig.model_validate(merged)
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
