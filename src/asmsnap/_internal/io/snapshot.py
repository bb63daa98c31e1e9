"""Load snapshot and options files from disk."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from asmsnap.codes import DumpErrorCode
from asmsnap.kernel.options import DumpOptions
from asmsnap.kernel.snapshot import SnapshotV0, parse_snapshot


class SnapshotLoadError(ValueError):
    """Raised when a snapshot or options file cannot be loaded."""

    def __init__(self, message: str, code: DumpErrorCode = DumpErrorCode.SNAPSHOT_INVALID):
        self.code = code
        super().__init__(message)


def _read_json(path: Path, what: str) -> dict:
    if not path.exists():
        raise SnapshotLoadError(f"{what} not found: {path}", DumpErrorCode.FILE_NOT_FOUND)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotLoadError(f"Cannot read {what} {path}: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotLoadError(f"{what} {path} must contain a JSON object")
    return data


def load_snapshot_from_path(path: Path) -> SnapshotV0:
    """Load and validate a snapshot JSON file."""
    data = _read_json(path, "Snapshot")
    return load_snapshot_from_dict(data, source=str(path))


def load_snapshot_from_dict(data: dict, source: str = "<dict>") -> SnapshotV0:
    try:
        return parse_snapshot(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot {source}: {e}") from e


def load_options_from_path(path: Path) -> DumpOptions:
    """Load DumpOptions from a JSON file."""
    data = _read_json(path, "Options file")
    try:
        return DumpOptions.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid options {path}: {e}", DumpErrorCode.OPTIONS_INVALID) from e
