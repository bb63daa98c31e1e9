"""Metadata source capability contract.

The dump engine never parses metadata itself. It consumes any object that
satisfies these protocols, so a reference reader and a candidate reader can
be swapped behind the same interface and their dumps compared line by line.

Enumeration order is unspecified for every sequence except
`MethodView.parameters()`, which is declaration order and is preserved.

Referenced entities (base types, interfaces, parameter types, attribute
types) are exposed as `TypeRef` values carrying identity only. The engine
never walks into them, so a cyclic type graph needs no guarding.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class TypeRef:
    """Identity of a referenced type."""
    full_name: str
    token: int = 0
    assembly_qualified_name: Optional[str] = None


@runtime_checkable
class ParameterView(Protocol):
    def name(self) -> str: ...

    def metadata_token(self) -> int: ...

    def parameter_type_name(self) -> str: ...


@runtime_checkable
class MethodView(Protocol):
    """A method or constructor."""

    def name(self) -> str: ...

    def metadata_token(self) -> int: ...

    def parameters(self) -> Sequence[ParameterView]: ...


@runtime_checkable
class FieldView(Protocol):
    def name(self) -> str: ...

    def metadata_token(self) -> int: ...

    def attributes(self) -> int: ...

    def declaring_type_name(self) -> Optional[str]: ...

    def trait(self, name: str) -> Any: ...


@runtime_checkable
class CustomAttributeView(Protocol):
    def declaring_type(self) -> TypeRef: ...


@runtime_checkable
class TypeView(Protocol):
    def full_name(self) -> str: ...

    def metadata_token(self) -> int: ...

    def assembly_qualified_name(self) -> Optional[str]: ...

    def name(self) -> str: ...

    def namespace(self) -> str: ...

    def base_type(self) -> Optional[TypeRef]: ...

    def interfaces(self) -> Sequence[TypeRef]: ...

    def custom_attributes(self) -> Sequence[CustomAttributeView]: ...

    def constructors(self) -> Sequence[MethodView]: ...

    def methods(self) -> Sequence[MethodView]: ...

    def fields(self) -> Sequence[FieldView]: ...

    def trait(self, name: str) -> Any: ...


@runtime_checkable
class MetadataSource(Protocol):
    """A loaded assembly."""

    def full_name(self) -> str: ...

    def referenced_assemblies(self) -> Sequence[str]: ...

    def types(self) -> Sequence[TypeView]: ...
