"""Line-level comparison of two canonical dumps.

Dumps are compared as text, not as structures: the point of the canonical
format is that any difference in the underlying metadata surfaces as a
plain line diff.
"""

import difflib
from typing import List, Optional

from asmsnap.contracts import DumpComparison
from .hash_utils import dump_digest

DIFF_CONTEXT_LINES = 3


def first_difference(reference_lines: List[str], candidate_lines: List[str]) -> Optional[int]:
    """1-based number of the first line that differs, or None if equal.

    When one dump is a prefix of the other, the first line past the shorter
    one is reported.
    """
    for index, (ref, cand) in enumerate(zip(reference_lines, candidate_lines)):
        if ref != cand:
            return index + 1
    if len(reference_lines) != len(candidate_lines):
        return min(len(reference_lines), len(candidate_lines)) + 1
    return None


def compare_dumps(
    reference: str,
    candidate: str,
    reference_label: str = "reference",
    candidate_label: str = "candidate",
) -> DumpComparison:
    """Compare two dump texts.

    Args:
        reference: Golden dump text
        candidate: Dump produced by the implementation under test
        reference_label: Name used for the reference in the diff header
        candidate_label: Name used for the candidate in the diff header

    Returns:
        DumpComparison with digests, first differing line and unified diff
    """
    reference_sha = dump_digest(reference)
    candidate_sha = dump_digest(candidate)
    if reference == candidate:
        return DumpComparison(
            identical=True,
            reference_label=reference_label,
            candidate_label=candidate_label,
            reference_sha256=reference_sha,
            candidate_sha256=candidate_sha,
        )

    reference_lines = reference.splitlines(keepends=True)
    candidate_lines = candidate.splitlines(keepends=True)
    diff = [
        line.rstrip("\n")
        for line in difflib.unified_diff(
            reference_lines,
            candidate_lines,
            fromfile=reference_label,
            tofile=candidate_label,
            n=DIFF_CONTEXT_LINES,
        )
    ]
    added = sum(1 for line in diff if line.startswith("+") and not line.startswith("+++"))
    removed = sum(1 for line in diff if line.startswith("-") and not line.startswith("---"))

    return DumpComparison(
        identical=False,
        reference_label=reference_label,
        candidate_label=candidate_label,
        reference_sha256=reference_sha,
        candidate_sha256=candidate_sha,
        first_difference_line=first_difference(reference_lines, candidate_lines),
        added_lines=added,
        removed_lines=removed,
        diff=diff,
    )
