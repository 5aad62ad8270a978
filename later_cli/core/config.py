"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

OUTPUT_FORMATS = {"pretty", "json"}


class ConfigError(RuntimeError):
    """Raised when config file parsing or validation fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("LATER_CONFIG_FILE", "~/.config/later/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "defaults": {
            "output_format": "pretty",
        },
        "capture": {
            "min_confidence": 0.5,
            "extract_due_date": True,
            "extract_items": True,
        },
        "export": {
            "default_directory": "./captures",
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def _validate(config: Dict[str, Any], source: Path) -> None:
    for table in ("capture", "defaults", "export"):
        if not isinstance(config.get(table, {}), dict):
            raise ConfigError(f"[{table}] in {source} must be a table")

    capture = config.get("capture", {})
    threshold = capture.get("min_confidence")
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ConfigError(f"capture.min_confidence in {source} must be a number")
    if not 0.0 <= float(threshold) <= 1.0:
        raise ConfigError(
            f"capture.min_confidence in {source} must be between 0 and 1, got {threshold}"
        )

    for key in ("extract_due_date", "extract_items"):
        if not isinstance(capture.get(key), bool):
            raise ConfigError(
                f"capture.{key} in {source} must be true or false, got {capture.get(key)!r}"
            )

    output_format = config.get("defaults", {}).get("output_format")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"defaults.output_format in {source} must be one of "
            f"{', '.join(sorted(OUTPUT_FORMATS))}, got {output_format!r}"
        )

    directory = config.get("export", {}).get("default_directory")
    if not isinstance(directory, str):
        raise ConfigError(f"export.default_directory in {source} must be a string")


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        loaded = _read_config(cfg_path)
        cfg = _deep_merge(cfg, loaded)
        _validate(cfg, cfg_path)

    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_output_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve output directory with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    export = config.get("export")
    if not isinstance(export, dict):
        export = {}
    raw = os.getenv("LATER_OUTPUT_DIR") or export.get("default_directory", "./captures")
    return expand_path(raw)


def capture_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return the [capture] table with defaults filled in."""
    merged = _deep_merge(DEFAULT_CONFIG["capture"], config.get("capture", {}) or {})
    merged["min_confidence"] = float(merged["min_confidence"])
    return merged
