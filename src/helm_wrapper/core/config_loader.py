"""Load persisted JSON configuration records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from helm_wrapper.errors import ConfigLoadError
from helm_wrapper.models import ConfigKind
from helm_wrapper.models.config import Config, ReleaseConfig, RepositoryConfig, UnrecognizedConfig

logger = logging.getLogger(__name__)

_STRING_FIELDS = (
    "type",
    "command",
    "release_name",
    "chart",
    "repository",
    "repo_url",
    "repo_name",
    "namespace",
    "version",
    "values_file",
    "timeout",
    "url",
    "ca_file",
    "cert_file",
    "username",
    "password",
)
_BOOL_FIELDS = ("force_update", "insecure_skip_tls_verify", "no_update")


def load_config(path: str | Path) -> Config:
    """Read a configuration record from disk."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"failed to read config file {config_path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(f"failed to parse config JSON {config_path}: {exc}") from exc
    logger.debug("Loaded config record from %s", config_path)
    return config_from_dict(data)


def _check_field_types(data: dict) -> None:
    # null is accepted everywhere and means "unset"
    for key in _STRING_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigLoadError(f"'{key}' must be a string, got {type(value).__name__}")
    for key in _BOOL_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise ConfigLoadError(f"'{key}' must be true or false, got {value!r}")

    flags = data.get("flags")
    if flags is not None and (
        not isinstance(flags, list) or not all(isinstance(f, str) for f in flags)
    ):
        raise ConfigLoadError("'flags' must be a list of strings")


def config_from_dict(data: object) -> Config:
    """Turn a decoded record into the matching config shape."""
    if not isinstance(data, dict):
        raise ConfigLoadError(f"config record must be a JSON object, got {type(data).__name__}")
    _check_field_types(data)

    kind = data.get("type") or ""
    if kind == ConfigKind.REPOSITORY.value:
        return RepositoryConfig.from_dict(data)
    if kind == ConfigKind.RELEASE.value:
        if data.get("repository") and data.get("repo_url"):
            raise ConfigLoadError("'repository' and 'repo_url' are mutually exclusive")
        return ReleaseConfig.from_dict(data)
    return UnrecognizedConfig(kind=kind)
