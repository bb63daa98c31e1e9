"""Digests for dump text.

A golden dump is pinned by the SHA-256 of its exact UTF-8 bytes. No
normalization is applied: line endings and trailing whitespace are part of
the format.
"""

import hashlib


def dump_digest(text: str) -> str:
    """SHA-256 of the dump's UTF-8 bytes, prefixed with "sha256:"."""
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
