"""Fixed boolean trait layouts for types and fields.

Each layout is an explicit, ordered table of (flag name, accessor) pairs.
The order is part of the dump format: changing it changes every golden
file, so new traits are only ever appended.

Rendering is permissive. A trait value that is not a plain bool (a raw
flag integer, a reserved bit) is written as its literal truth value and
never raises.
"""

from typing import Any, Callable, List, Sequence, Tuple

TraitAccessor = Callable[[Any], Any]

TRAIT_GROUP_WIDTH = 8


def _trait(name: str) -> Tuple[str, TraitAccessor]:
    return name, lambda entity: entity.trait(name)


TYPE_TRAITS: Tuple[Tuple[str, TraitAccessor], ...] = tuple(_trait(n) for n in (
    "is_abstract",
    "is_ansi_class",
    "is_array",
    "is_auto_class",
    "is_auto_layout",
    "is_by_ref",
    "is_class",
    "is_com_object",
    "is_contextful",
    "is_enum",
    "is_explicit_layout",
    "is_generic_parameter",
    "is_generic_type",
    "is_generic_type_definition",
    "is_import",
    "is_interface",
    "is_layout_sequential",
    "is_marshal_by_ref",
    "is_nested",
    "is_nested_assembly",
    "is_nested_fam_and_assem",
    "is_nested_family",
    "is_nested_fam_or_assem",
    "is_nested_private",
    "is_nested_public",
    "is_not_public",
    "is_pointer",
    "is_primitive",
    "is_public",
    "is_sealed",
    "is_serializable",
    "is_special_name",
    "is_unicode_class",
    "is_value_type",
    "is_visible",
))

FIELD_TRAITS: Tuple[Tuple[str, TraitAccessor], ...] = tuple(_trait(n) for n in (
    "is_assembly",
    "is_family",
    "is_family_and_assembly",
    "is_family_or_assembly",
    "is_init_only",
    "is_literal",
    "is_not_serialized",
    "is_pinvoke_impl",
    "is_private",
    "is_public",
    "is_special_name",
    "is_static",
))

TYPE_TRAIT_NAMES = frozenset(name for name, _ in TYPE_TRAITS)
FIELD_TRAIT_NAMES = frozenset(name for name, _ in FIELD_TRAITS)


def flag_digit(value: Any) -> str:
    """Render a trait value as '1' or '0'."""
    return "1" if value else "0"


def read_trait_digits(entity: Any, layout: Sequence[Tuple[str, TraitAccessor]]) -> str:
    """Read every trait in `layout` from `entity` and return the digit string.

    Accessor failures propagate to the caller, which decides how to classify
    them.
    """
    return "".join(flag_digit(accessor(entity)) for _, accessor in layout)


def group_trait_digits(digits: str, width: int = TRAIT_GROUP_WIDTH) -> str:
    """Split digits into bracketed groups of `width`.

    The trailing partial group is right-padded with spaces so every group
    has the same visual width:

        >>> group_trait_digits("0101010101")
        '[01010101] [01      ]'
    """
    groups: List[str] = []
    for start in range(0, len(digits), width):
        chunk = digits[start:start + width]
        groups.append(f"[{chunk.ljust(width)}]")
    return " ".join(groups)
