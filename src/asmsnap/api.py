"""Public API for asmsnap.

High-level functions that take paths or dicts and return complete results.
Callers should use these instead of importing from _internal.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from asmsnap.adapters.snapshot_source import SnapshotSource
from asmsnap.codes import DumpErrorCode
from asmsnap.contracts import DumpComparison, DumpReport
from asmsnap.kernel.compare import compare_dumps
from asmsnap.kernel.dump import dump
from asmsnap.kernel.hash_utils import dump_digest
from asmsnap.kernel.options import DumpOptions
from asmsnap.kernel.render import ITEM
from asmsnap.kernel.source import MetadataSource
from asmsnap._internal.io.snapshot import (
    SnapshotLoadError,
    load_options_from_path,
    load_snapshot_from_dict,
    load_snapshot_from_path,
)

logger = logging.getLogger(__name__)

SnapshotInput = Union[str, os.PathLike, Path, Dict]

TEXT_DUMP_SUFFIXES = {".txt", ".dump"}


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def load_source(snapshot: SnapshotInput) -> SnapshotSource:
    """Build a MetadataSource from a snapshot path or dict."""
    if isinstance(snapshot, dict):
        return SnapshotSource(load_snapshot_from_dict(snapshot))
    return SnapshotSource(load_snapshot_from_path(_normalize_path(snapshot)))


def load_options(path: Union[str, os.PathLike, Path]) -> DumpOptions:
    """Load DumpOptions from a JSON file."""
    return load_options_from_path(_normalize_path(path))


def dump_source(source: MetadataSource, options: Optional[DumpOptions] = None) -> str:
    """Dump any MetadataSource implementation."""
    return dump(source, options)


def dump_snapshot(snapshot: SnapshotInput, options: Optional[DumpOptions] = None) -> str:
    """Load a snapshot and return its canonical dump."""
    return dump(load_source(snapshot), options)


def _count_types(text: str) -> int:
    prefix = f"{ITEM}Type ["
    return sum(1 for line in text.splitlines() if line.startswith(prefix))


def dump_to_file(
    snapshot: SnapshotInput,
    out_path: Union[str, os.PathLike, Path],
    options: Optional[DumpOptions] = None,
) -> DumpReport:
    """Dump a snapshot and write the text to `out_path`.

    Nothing is written if the dump fails.
    """
    text = dump_snapshot(snapshot, options)
    out = _normalize_path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps "\n" line endings on every platform.
    with open(out, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info("Wrote dump to %s", out)
    return DumpReport(
        output_path=str(out),
        sha256=dump_digest(text),
        line_count=text.count("\n"),
        type_count=_count_types(text),
    )


def _dump_text_for(path: Path, options: Optional[DumpOptions]) -> str:
    """Existing dump text for .txt/.dump files, a fresh dump for snapshots."""
    if path.suffix.lower() in TEXT_DUMP_SUFFIXES:
        if not path.exists():
            raise SnapshotLoadError(f"Dump file not found: {path}", DumpErrorCode.FILE_NOT_FOUND)
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    return dump_snapshot(path, options)


def compare(
    reference: Union[str, os.PathLike, Path],
    candidate: Union[str, os.PathLike, Path],
    options: Optional[DumpOptions] = None,
) -> DumpComparison:
    """Compare two dumps given as dump text files or snapshot files."""
    reference_path = _normalize_path(reference)
    candidate_path = _normalize_path(candidate)
    return compare_dumps(
        _dump_text_for(reference_path, options),
        _dump_text_for(candidate_path, options),
        reference_label=str(reference_path),
        candidate_label=str(candidate_path),
    )


def compare_sources(
    reference: MetadataSource,
    candidate: MetadataSource,
    options: Optional[DumpOptions] = None,
) -> DumpComparison:
    """Dump two independent sources with the same options and compare."""
    return compare_dumps(dump(reference, options), dump(candidate, options))
