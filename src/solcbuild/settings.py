"""Settings file parser and serializer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from solcbuild.command import DEFAULT_EXECUTABLE, CompileSettings
from solcbuild.errors import ValidationError


def serialize_settings(settings: CompileSettings) -> str:
    payload = {
        "root": settings.root,
        "allow_paths": list(settings.allow_paths),
        "output_dir": settings.output_dir,
        "libraries_file": settings.libraries_file,
        "executable": settings.executable,
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def parse_settings(raw: str) -> CompileSettings:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("Invalid settings JSON.", hint=str(exc)) from exc

    if not isinstance(payload, dict):
        raise ValidationError("Invalid settings payload type.")

    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        raise ValidationError(
            "Unknown settings keys.",
            hint="Allowed keys: " + ", ".join(sorted(_KNOWN_KEYS)),
            context={"keys": ", ".join(unknown)},
        )

    return CompileSettings(
        root=_optional_str(payload, "root") or ".",
        allow_paths=tuple(_optional_str_list(payload, "allow_paths")),
        output_dir=_optional_str(payload, "output_dir"),
        libraries_file=_optional_str(payload, "libraries_file"),
        executable=_optional_str(payload, "executable") or DEFAULT_EXECUTABLE,
    )


def read_settings(path: str | Path) -> CompileSettings:
    settings_path = Path(path)
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValidationError(
            "Settings file does not exist.",
            context={"path": str(settings_path)},
        ) from exc
    return parse_settings(raw)


def write_settings(settings: CompileSettings, path: str | Path) -> Path:
    settings_path = Path(path)
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(serialize_settings(settings), encoding="utf-8")
    return settings_path


_KNOWN_KEYS = frozenset({"root", "allow_paths", "output_dir", "libraries_file", "executable"})


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Invalid settings `{key}` value.")
    return value


def _optional_str_list(payload: dict[str, Any], key: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
        raise ValidationError(f"Invalid settings `{key}` value.")
    return list(value)


__all__ = ["parse_settings", "read_settings", "serialize_settings", "write_settings"]
