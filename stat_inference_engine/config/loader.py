"""Layered configuration loading: CLI > ENV > file > defaults."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from stat_inference_engine.exceptions import ConfigValidationError
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="config")

Caster = Callable[[Any], Any]


def parse_bool(value: Any) -> bool:
    return str(value).lower() in {"1", "true", "yes", "on"}


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        content = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc
    return content or {}


def load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            content = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"Invalid JSON in {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        content = _load_yaml(path)
    else:
        raise ConfigValidationError("Config file must be JSON or YAML")
    if not isinstance(content, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping")
    return content


def load_config_with_precedence(
    *,
    config_path: Path | None,
    env_prefix: str,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Mapping[str, Caster] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Merge configuration sources for every key in ``defaults``.

    A ``None`` CLI value means "not supplied" and falls through to the
    environment (``{env_prefix}{KEY}``), then the config file, then the default.
    """

    env = os.environ if environ is None else environ
    casters = casters or {}
    file_values = load_config_file(Path(config_path)) if config_path else {}

    merged: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for key, default in defaults.items():
        env_key = f"{env_prefix}{key.upper()}"
        if cli_values.get(key) is not None:
            value, source = cli_values[key], "cli"
        elif env_key in env:
            value, source = env[env_key], "env"
        elif file_values.get(key) is not None:
            value, source = file_values[key], "file"
        else:
            value, source = default, "default"

        caster = casters.get(key)
        if caster is not None and value is not None:
            try:
                value = caster(value)
            except (TypeError, ValueError) as exc:
                raise ConfigValidationError(f"Invalid value for {key} from {source}: {value!r}") from exc
        merged[key] = value
        sources[key] = source

    unknown = sorted(set(file_values) - set(defaults))
    if unknown:
        log.warning("Ignoring unknown config keys", extra={"keys": unknown})
    log.debug("Configuration resolved", extra={"sources": sources})
    return merged


__all__ = ["load_config_file", "load_config_with_precedence", "parse_bool"]
