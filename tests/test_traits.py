"""Fixed-width trait rendering."""

import re

import pytest

from asmsnap.api import dump_snapshot
from asmsnap.kernel.options import DumpOptions
from asmsnap._internal.io.snapshot import SnapshotLoadError
from asmsnap.kernel.traits import (
    FIELD_TRAITS,
    TYPE_TRAITS,
    flag_digit,
    group_trait_digits,
    read_trait_digits,
)

TYPE_TRAITS_LINE = re.compile(
    r"^     -- IsTraits \[([01]{8})\] \[([01]{8})\] \[([01]{8})\] \[([01]{8})\] \[([01]{3}) {5}\]$"
)


class _Traits:
    """Minimal entity exposing trait(name) from a dict."""

    def __init__(self, values):
        self._values = values

    def trait(self, name):
        return self._values.get(name, False)


def _trait_line(traits):
    snapshot = {
        "assembly": {
            "full_name": "A",
            "types": [{"full_name": "T", "token": 0x02000002, "name": "T", "traits": traits}],
        }
    }
    lines = dump_snapshot(snapshot).splitlines()
    return next(line for line in lines if line.startswith("     -- IsTraits "))


def test_type_trait_layout_order():
    assert [name for name, _ in TYPE_TRAITS] == [
        "is_abstract", "is_ansi_class", "is_array", "is_auto_class", "is_auto_layout",
        "is_by_ref", "is_class", "is_com_object", "is_contextful", "is_enum",
        "is_explicit_layout", "is_generic_parameter", "is_generic_type",
        "is_generic_type_definition", "is_import", "is_interface", "is_layout_sequential",
        "is_marshal_by_ref", "is_nested", "is_nested_assembly", "is_nested_fam_and_assem",
        "is_nested_family", "is_nested_fam_or_assem", "is_nested_private",
        "is_nested_public", "is_not_public", "is_pointer", "is_primitive", "is_public",
        "is_sealed", "is_serializable", "is_special_name", "is_unicode_class",
        "is_value_type", "is_visible",
    ]


def test_field_trait_layout_order():
    assert [name for name, _ in FIELD_TRAITS] == [
        "is_assembly", "is_family", "is_family_and_assembly", "is_family_or_assembly",
        "is_init_only", "is_literal", "is_not_serialized", "is_pinvoke_impl",
        "is_private", "is_public", "is_special_name", "is_static",
    ]


@pytest.mark.parametrize("position", [0, 7, 8, 17, 30, 34])
def test_single_trait_lands_in_its_position(position):
    name = TYPE_TRAITS[position][0]
    match = TYPE_TRAITS_LINE.match(_trait_line({name: True}))
    assert match is not None
    digits = "".join(match.groups())
    assert len(digits) == 35
    assert digits == "0" * position + "1" + "0" * (34 - position)


def test_all_traits_set_is_still_35_flags():
    line = _trait_line({name: True for name, _ in TYPE_TRAITS})
    assert line == "     -- IsTraits [11111111] [11111111] [11111111] [11111111] [111     ]"


def test_group_trait_digits_pads_last_group():
    assert group_trait_digits("0" * 35) == "[00000000] [00000000] [00000000] [00000000] [000     ]"
    assert group_trait_digits("1" * 12) == "[11111111] [1111    ]"
    assert group_trait_digits("10101010") == "[10101010]"


def test_non_bool_trait_values_render_as_truth_digit():
    """Raw flag integers and reserved bits render permissively, never raise."""
    entity = _Traits({"is_abstract": 0x80, "is_ansi_class": 0, "is_array": 1, "is_auto_class": None})
    digits = read_trait_digits(entity, TYPE_TRAITS)
    assert digits.startswith("1010")
    assert len(digits) == 35


def test_flag_digit():
    assert flag_digit(True) == "1"
    assert flag_digit(False) == "0"
    assert flag_digit(4096) == "1"
    assert flag_digit(0) == "0"


def test_snapshot_accepts_raw_flag_values():
    line = _trait_line({"is_abstract": 128, "is_ansi_class": 0, "is_array": True})
    match = TYPE_TRAITS_LINE.match(line)
    assert match is not None
    assert match.group(1) == "10100000"


def test_snapshot_field_traits_accept_raw_flag_values():
    snapshot = {
        "assembly": {
            "full_name": "A",
            "types": [{
                "full_name": "T", "token": 0x02000002, "name": "T",
                "fields": [{"name": "f", "token": 0x04000001, "traits": {"is_assembly": 0x10}}],
            }],
        }
    }
    text = dump_snapshot(snapshot, DumpOptions(include_fields=True))
    assert "         -- IsTraits [10000000] [0000    ]\n" in text


def test_snapshot_rejects_non_flag_trait_values():
    with pytest.raises(SnapshotLoadError):
        _trait_line({"is_abstract": "yes"})
