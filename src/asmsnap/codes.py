"""Error code constants for asmsnap dump failures.

These constants prevent stringly-typed error codes and let callers
branch on the failure class without matching exception messages.
"""

from enum import Enum


class DumpErrorCode(str, Enum):
    """Dump and snapshot error codes."""

    # Fatal for the whole dump (no partial output)
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    ATTRIBUTE_READ_FAILURE = "ATTRIBUTE_READ_FAILURE"

    # Snapshot ingestion
    SNAPSHOT_INVALID = "SNAPSHOT_INVALID"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    OPTIONS_INVALID = "OPTIONS_INVALID"
