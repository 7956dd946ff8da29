"""Load Settings from a YAML file, the environment and explicit overrides."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .settings import Settings

logger = structlog.get_logger(__name__)

ENV_PREFIX = "CATALOG_VERIFIER_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {raw!r}", config_key=name)


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}", config_key="config")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {path}", config_key="config", previous_error=e
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", config_key="config")
    return data


def _read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    search_paths = environ.get(f"{ENV_PREFIX}SEARCH_PATHS")
    if search_paths:
        values["search_paths"] = [p for p in search_paths.split(os.pathsep) if p]

    formats = environ.get(f"{ENV_PREFIX}FORMATS")
    if formats:
        values["formats"] = [f.strip() for f in formats.split(",") if f.strip()]

    for field in ("encoding", "output_format"):
        raw = environ.get(f"{ENV_PREFIX}{field.upper()}")
        if raw:
            values[field] = raw

    for field in ("parent_fallback", "root_fallback", "debug"):
        name = f"{ENV_PREFIX}{field.upper()}"
        if environ.get(name):
            values[field] = _parse_bool(name, environ[name])

    return values


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """Build Settings from, in increasing priority: file, environment, overrides.

    Overrides whose value is None are ignored so CLI flags can be passed through
    unconditionally.
    """
    values: Dict[str, Any] = {}
    if config_file:
        values.update(_read_file(Path(config_file)))
    values.update(_read_env(os.environ if environ is None else environ))
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_key="settings", previous_error=e
        ) from e

    logger.debug(
        "Configuration loaded",
        config_file=str(config_file) if config_file else None,
        search_paths=[str(p) for p in settings.search_paths],
        formats=settings.formats,
    )
    return settings
