"""Layered project settings: defaults, environment, then TOML files."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

ENV_PREFIX = "REINHARDT_"
PROFILE_VARIABLE = "REINHARDT_ENV"
DEFAULT_PROFILE = "local"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Typed project settings; unrecognised keys are kept in ``extra``."""

    base_dir: str
    secret_key: str
    profile: str = DEFAULT_PROFILE
    debug: bool = False
    language_code: str = "en-us"
    time_zone: str = "UTC"
    use_i18n: bool = True
    use_tz: bool = True
    append_slash: bool = True
    default_auto_field: str = "BigAutoField"
    extra: dict[str, Any] = field(default_factory=dict)


_BOOL_FIELDS = {"debug", "use_i18n", "use_tz", "append_slash"}
_STR_FIELDS = {
    "base_dir", "secret_key", "language_code", "time_zone", "default_auto_field",
}


def _merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge(target[key], value)
        else:
            target[key] = value


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValueError(f"setting `{name}` must be a boolean, got {value!r}")


def _to_str(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    raise ValueError(f"setting `{name}` must be a string, got {value!r}")


def get_settings(
    base_dir: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings for the profile named by REINHARDT_ENV (default "local")."""
    environ = os.environ if environ is None else environ
    base = Path.cwd() if base_dir is None else Path(base_dir)
    profile = environ.get(PROFILE_VARIABLE, DEFAULT_PROFILE)
    settings_dir = base / "settings"

    merged: dict[str, Any] = {
        "base_dir": str(base),
        "debug": False,
        "language_code": "en-us",
        "time_zone": "UTC",
        "use_i18n": True,
        "use_tz": True,
        "append_slash": True,
        "default_auto_field": "BigAutoField",
    }
    _merge(
        merged,
        {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)
        },
    )
    _merge(merged, _load_toml(settings_dir / "base.toml"))
    _merge(merged, _load_toml(settings_dir / f"{profile}.toml"))

    secret_key = merged.get("secret_key")
    if not secret_key:
        raise ValueError("Failed to convert settings: missing `secret_key`")

    known = {f.name for f in fields(Settings)} - {"extra", "profile"}
    typed: dict[str, Any] = {}
    for name in known:
        if name not in merged:
            continue
        value = merged[name]
        typed[name] = _to_bool(name, value) if name in _BOOL_FIELDS else _to_str(name, value)
    extra = {key: value for key, value in merged.items() if key not in known}
    return Settings(profile=profile, extra=extra, **typed)