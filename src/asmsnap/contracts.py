"""Public result models for asmsnap."""

from typing import List, Optional

from pydantic import BaseModel, Field


class DumpComparison(BaseModel):
    """Result of comparing a reference dump against a candidate dump."""
    identical: bool
    reference_label: str
    candidate_label: str
    reference_sha256: str  # "sha256:<hex>" over the exact UTF-8 bytes
    candidate_sha256: str
    first_difference_line: Optional[int] = None  # 1-based; None when identical
    added_lines: int = 0  # lines only in the candidate
    removed_lines: int = 0  # lines only in the reference
    diff: List[str] = Field(default_factory=list)  # unified diff, no trailing newlines


class DumpReport(BaseModel):
    """Summary of a dump written to disk."""
    output_path: str
    sha256: str
    line_count: int
    type_count: int  # types emitted after filtering
