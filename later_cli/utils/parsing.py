"""Loading capture text from arguments, stdin and batch files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

TEXT_SUFFIXES = {".txt", ".md", ".markdown", ""}
STRUCTURED_SUFFIXES = {".json", ".yaml", ".yml"}


class CaptureInputError(ValueError):
    """Raised when capture input cannot be read or has the wrong shape."""


def resolve_text(text: Optional[str], file_path: Optional[Path], stdin_text: str = "") -> str:
    """Pick capture text from an argument, a file, or stdin (``-``)."""
    if text is not None and file_path is not None:
        raise CaptureInputError("Pass either TEXT or --file, not both")
    if file_path is not None:
        try:
            return file_path.read_text()
        except OSError as exc:
            raise CaptureInputError(f"Cannot read {file_path}: {exc}") from exc
    if text == "-":
        return stdin_text
    if text is None:
        raise CaptureInputError("No capture text given (use TEXT, --file, or '-' for stdin)")
    return text


def _texts_from_data(raw_data: Any, source: Path) -> List[str]:
    if raw_data is None:
        return []
    if isinstance(raw_data, str):
        return [raw_data]
    if isinstance(raw_data, dict):
        raw_data = [raw_data]
    if not isinstance(raw_data, list):
        raise CaptureInputError(
            f"{source}: expected a string, a list, or objects with a 'text' key"
        )

    texts: List[str] = []
    for index, entry in enumerate(raw_data):
        if isinstance(entry, str):
            texts.append(entry)
        elif isinstance(entry, dict) and isinstance(entry.get("text"), str):
            texts.append(entry["text"])
        else:
            raise CaptureInputError(f"{source}: entry {index} has no 'text' string")
    return texts


def load_capture_file(file_path: Path) -> List[Tuple[str, str]]:
    """Load ``(label, text)`` capture entries from one batch input file."""
    suffix = file_path.suffix.lower()
    try:
        text = file_path.read_text()
    except OSError as exc:
        raise CaptureInputError(f"Cannot read {file_path}: {exc}") from exc

    if suffix not in STRUCTURED_SUFFIXES:
        return [(file_path.name, text)]

    try:
        if suffix == ".json":
            raw_data = json.loads(text)
        else:
            raw_data = yaml.safe_load(text)
    except json.JSONDecodeError as exc:
        raise CaptureInputError(f"Invalid JSON in {file_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CaptureInputError(f"Invalid YAML in {file_path}: {exc}") from exc

    texts = _texts_from_data(raw_data, file_path)
    if len(texts) == 1:
        return [(file_path.name, texts[0])]
    return [(f"{file_path.name}#{index + 1}", entry) for index, entry in enumerate(texts)]


def load_capture_files(paths: List[Path]) -> List[Tuple[str, str]]:
    """Load every batch input file in order."""
    entries: List[Tuple[str, str]] = []
    for path in paths:
        entries.extend(load_capture_file(path))
    return entries
