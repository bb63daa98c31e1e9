"""Line formats for the canonical dump.

Every literal the dump contains lives here: indentation prefixes, block
markers, and the per-entity line shapes. The engine decides WHAT to write
and in which order; this module decides how each line looks.
"""

from typing import List, Optional

NO_BASE_TYPE = "NO BASE TYPE"
NO_DECLARING_TYPE = "NO DECLARING TYPE"

# Indentation prefixes, by nesting depth.
ITEM = " -- "
DETAIL = "     -- "
SUB_DETAIL = "         -- "
MEMBER_BLOCK = "    "
PARAMETER_BLOCK = "        "

ASSEMBLY_REFERENCES = "AssemblyReferences"
TYPES = "Types"
INTERFACES = "Interfaces"
CUSTOM_ATTRIBUTES = "CustomAttributes"
CONSTRUCTORS = "Constructors"
METHODS = "Methods"
FIELDS = "Fields"
PARAMETERS = "Parameters"


def hex_token(token: int) -> str:
    """`$` followed by the token as eight lower-case hex digits."""
    return f"${token:08x}"


def begin_marker(block: str, indent: str = "") -> str:
    return f"{indent}!!Begin{block}"


def end_marker(block: str, indent: str = "") -> str:
    return f"{indent}!!End{block}"


def assembly_line(full_name: str) -> str:
    return f"Assembly [{full_name}]"


def assembly_reference_line(full_name: str) -> str:
    return f"{ITEM}AssemblyName [{full_name}]"


def type_header_lines(
    full_name: str,
    token: int,
    assembly_qualified_name: str,
    base_type_name: Optional[str],
    base_type_aqn: Optional[str],
    trait_groups: str,
    name: str,
    namespace: str,
) -> List[str]:
    """The header of a type block, up to and including its namespace.

    `base_type_name` of None means the type has no base type; both base
    type lines then carry the sentinel.
    """
    if base_type_name is None:
        base_name = NO_BASE_TYPE
        base_aqn = NO_BASE_TYPE
    else:
        base_name = base_type_name
        base_aqn = base_type_aqn or ""
    return [
        f"{ITEM}Type [{full_name}] [{hex_token(token)}]",
        f"{DETAIL}AssemblyQualifiedName [{assembly_qualified_name}]",
        f"{DETAIL}BaseType [{base_name}]",
        f"{SUB_DETAIL}AssemblyQualifiedName [{base_aqn}]",
        f"{DETAIL}IsTraits {trait_groups}",
        f"{DETAIL}Name [{name}]",
        f"{DETAIL}Namespace [{namespace}]",
    ]


def interface_line(full_name: str, token: int) -> str:
    return f"{DETAIL}Interface [{full_name}] [{hex_token(token)}]"


def custom_attribute_line(declaring_type_name: str) -> str:
    return f"{DETAIL}CustomAttribute [{declaring_type_name}]"


def method_line(name: str, token: int) -> str:
    # Constructors share the method line shape.
    return f"{DETAIL}Method [{name}] [{hex_token(token)}]"


def parameter_line(name: str, token: int, type_name: str) -> str:
    return f"{SUB_DETAIL}[{name}] [{hex_token(token)}] [{type_name}]"


def field_lines(
    name: str,
    token: int,
    attributes: int,
    declaring_type_name: Optional[str],
    trait_groups: str,
) -> List[str]:
    declaring = declaring_type_name if declaring_type_name is not None else NO_DECLARING_TYPE
    return [
        f"{DETAIL}Field [{name}] [{hex_token(token)}]",
        f"{SUB_DETAIL}Attributes [{attributes:08x}]",
        f"{SUB_DETAIL}Declaring Type [{declaring}]",
        f"{SUB_DETAIL}IsTraits {trait_groups}",
    ]


class LineWriter:
    """Output buffer for one dump.

    Lines are only joined when the whole traversal has succeeded, so a
    failed dump never yields partial text.
    """

    def __init__(self) -> None:
        self._lines: List[str] = []

    def write(self, line: str) -> None:
        self._lines.append(line)

    def extend(self, lines: List[str]) -> None:
        self._lines.extend(lines)

    def begin(self, block: str, indent: str = "") -> None:
        self._lines.append(begin_marker(block, indent))

    def end(self, block: str, indent: str = "") -> None:
        self._lines.append(end_marker(block, indent))

    def __len__(self) -> int:
        return len(self._lines)

    def text(self) -> str:
        """Newline-terminated text of every written line."""
        return "".join(f"{line}\n" for line in self._lines)
