"""Utility helpers shared by the docgraph configuration loader."""

from __future__ import annotations

import json
import os
import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

from docgraph._constants import OUTPUT_SUFFIX

from .models import ConfigError


def _read_json_object(path: Path, *, label: str) -> dict[str, typ.Any]:
    """Read ``path`` as JSON and return its top-level object.

    Parameters
    ----------
    path : Path
        Configuration file to read.
    label : str
        Human readable description of the file used in error messages.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid JSON, or does not hold an
        object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f'Impossible to read {label} ("{path}"): {exc}'
        raise ConfigError(msg) from exc
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f'{label} ("{path}") is invalid: {exc}'
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f'{label} ("{path}") is invalid: Should be under an object form.'
        raise ConfigError(msg)
    return loaded


def _require_str(
    payload: typ.Mapping[str, typ.Any], key: str, *, context: str
) -> str:
    """Return ``payload[key]`` when it is a string, raising otherwise."""
    value = payload.get(key)
    if not isinstance(value, str):
        msg = f'{context} is missing its "{key}" property (should be a string).'
        raise ConfigError(msg)
    return value


def _optional_str(
    payload: typ.Mapping[str, typ.Any], key: str, *, context: str
) -> str | None:
    """Return ``payload[key]`` when present, ensuring it is a string."""
    if key not in payload:
        return None
    value = payload[key]
    if not isinstance(value, str):
        msg = f'{context}: the "{key}" property, if defined, should be set as a string.'
        raise ConfigError(msg)
    return value


def _optional_bool(
    payload: typ.Mapping[str, typ.Any], key: str, *, context: str
) -> bool:
    """Return ``payload[key]`` as a bool, defaulting to ``False`` when absent."""
    if key not in payload:
        return False
    value = payload[key]
    if not isinstance(value, bool):
        msg = (
            f'{context}: the "{key}" property should be a boolean or not defined.'
        )
        raise ConfigError(msg)
    return value


def _validate_site_map_root(value: str, *, context: str) -> str:
    """Ensure the sitemap root is an absolute http(s) URL ending with a slash."""
    parsed = urlsplit(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        msg = f'{context}: "siteMapRoot" should be an absolute http(s) URL, got {value!r}.'
        raise ConfigError(msg)
    return value if value.endswith("/") else f"{value}/"


def _normalize(path: Path | str) -> Path:
    """Return an absolute, normalized path without resolving symlinks."""
    return Path(os.path.normpath(os.path.abspath(path)))


def _is_within(path: Path, root: Path) -> bool:
    """Return ``True`` when ``path`` is ``root`` or lives underneath it."""
    relative = os.path.relpath(path, root)
    return relative != ".." and not relative.startswith(f"..{os.sep}")


def _output_path_for(relative: Path, output_root: Path) -> Path:
    """Mirror ``relative`` under ``output_root`` with an HTML suffix."""
    return _normalize(output_root / relative.with_suffix(OUTPUT_SUFFIX))


__all__ = [
    "_is_within",
    "_normalize",
    "_optional_bool",
    "_optional_str",
    "_output_path_for",
    "_read_json_object",
    "_require_str",
    "_validate_site_map_root",
]
