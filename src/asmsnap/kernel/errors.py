"""Exception hierarchy for the canonical dump engine.

Every failure while reading from a metadata source aborts the whole dump.
A partial golden file would mask real discrepancies, so the engine never
returns text once one of these has been raised.
"""

from typing import Optional

from asmsnap.codes import DumpErrorCode


class DumpError(Exception):
    """Base class for dump failures."""

    code: DumpErrorCode = DumpErrorCode.SOURCE_UNAVAILABLE

    def __init__(self, message: str, entity: Optional[str] = None):
        self.entity = entity
        if entity:
            message = f"{message} (while reading {entity})"
        super().__init__(message)


class SourceUnavailable(DumpError):
    """The metadata source could not enumerate a required entity set."""

    code = DumpErrorCode.SOURCE_UNAVAILABLE


class AttributeReadFailure(DumpError):
    """An individual entity attribute could not be resolved."""

    code = DumpErrorCode.ATTRIBUTE_READ_FAILURE
