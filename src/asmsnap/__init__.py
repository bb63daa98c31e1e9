"""asmsnap: canonical, diffable dumps of managed assembly metadata."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("asmsnap")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: compare/dump_snapshot live in asmsnap.api; the engine entry point
# is re-exported here for callers that bring their own MetadataSource.
from asmsnap.kernel.dump import dump
from asmsnap.kernel.options import DumpOptions
from asmsnap.kernel.errors import DumpError, SourceUnavailable, AttributeReadFailure
from asmsnap.contracts import DumpComparison, DumpReport
from asmsnap.codes import DumpErrorCode

__all__ = [
    "__version__",
    "dump",
    "DumpOptions",
    "DumpError",
    "SourceUnavailable",
    "AttributeReadFailure",
    "DumpComparison",
    "DumpReport",
    "DumpErrorCode",
]
