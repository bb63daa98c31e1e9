"""Deterministic ordering and nondeterminism filters for the dump engine."""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Sequence, TypeVar

from .errors import AttributeReadFailure

T = TypeVar("T")

# Interop shims some runtimes inject into an assembly's type list. Their
# presence depends on the reader, not on the metadata.
DEFAULT_EXCLUDED_TYPE_NAMES = (
    "System.__ComObject",
    "System.Runtime.InteropServices.WindowsRuntime.DisposableRuntimeClass",
)

# Applied inconsistently across compilers/runtimes (pseudo-attribute).
DEFAULT_EXCLUDED_ATTRIBUTE_TYPES = (
    "System.SerializableAttribute",
)

MAX_TOKEN = 0xFFFFFFFF


@dataclass(frozen=True)
class Keyed(Generic[T]):
    """An entity paired with the keys it is ordered by."""
    token: int
    name: str
    item: T


def check_uint32(value: Any, entity: str, what: str = "metadata token") -> int:
    """Validate an integer read from a source.

    Tokens and flag words must be plain non-negative integers that fit in
    32 bits so they render as exactly eight hex digits.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise AttributeReadFailure(
            f"{what} must be an int, got {type(value).__name__}", entity
        )
    if value < 0 or value > MAX_TOKEN:
        raise AttributeReadFailure(f"{what} out of range: {value}", entity)
    return value


def check_token(value: Any, entity: str) -> int:
    return check_uint32(value, entity, "metadata token")


def token_order(entries: Iterable[Keyed[T]]) -> List[Keyed[T]]:
    """Sort ascending by token.

    Ties are broken by name so that a source returning equal tokens in a
    different order still yields the same output.
    """
    return sorted(entries, key=lambda e: (e.token, e.name))


def name_order(names: Iterable[str]) -> List[str]:
    """Ordinal sort for entities that carry no token (assembly references).

    Duplicates are kept; a duplicated reference is a real difference.
    """
    return sorted(names)


def is_excluded(full_name: str, excluded: Sequence[str]) -> bool:
    """Exact full-name match against an exclusion set."""
    return full_name in excluded
