"""Snapshot schema: a JSON description of an assembly's metadata.

A snapshot is what a metadata reader hands over when it is not linked
into the same process. The adapter in `asmsnap.adapters.snapshot_source`
exposes a parsed snapshot through the MetadataSource protocol.

Validation is strict on shape (unknown keys, unknown trait names, tokens
outside 32 bits) and deliberately NOT on content: duplicate tokens or
inconsistent traits are data the dump must reproduce, not reject.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator

from .traits import FIELD_TRAIT_NAMES, TYPE_TRAIT_NAMES

SNAPSHOT_FORMAT = "asmsnap.snapshot"
SNAPSHOT_VERSION = "0.1"

UInt32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

# Raw flag integers are accepted as well as booleans; the dump renders any
# truthy value as 1.
TraitValue = Union[StrictBool, StrictInt]


class TypeRefModel(BaseModel):
    """Identity of a referenced type (base type, interface, attribute type)."""
    full_name: str
    token: UInt32 = 0
    assembly_qualified_name: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class ParameterModel(BaseModel):
    name: str
    token: UInt32
    parameter_type: str  # full name of the declared type

    model_config = ConfigDict(extra="forbid")


class MethodModel(BaseModel):
    """A method or constructor; parameters are in declaration order."""
    name: str
    token: UInt32
    parameters: List[ParameterModel] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class FieldModel(BaseModel):
    name: str
    token: UInt32
    attributes: UInt32 = 0
    declaring_type: Optional[str] = None
    traits: Dict[str, TraitValue] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @field_validator("traits")
    @classmethod
    def validate_traits(cls, v: Dict[str, TraitValue]) -> Dict[str, TraitValue]:
        unknown = sorted(set(v) - FIELD_TRAIT_NAMES)
        if unknown:
            raise ValueError(f"Unknown field traits: {unknown}")
        return v


class TypeModel(BaseModel):
    full_name: str
    token: UInt32
    assembly_qualified_name: Optional[str] = None
    name: str
    namespace: Optional[str] = None
    base_type: Optional[TypeRefModel] = None
    interfaces: List[TypeRefModel] = Field(default_factory=list)
    custom_attributes: List[TypeRefModel] = Field(default_factory=list)
    traits: Dict[str, TraitValue] = Field(default_factory=dict)  # unlisted traits are false
    constructors: List[MethodModel] = Field(default_factory=list)
    methods: List[MethodModel] = Field(default_factory=list)
    fields: List[FieldModel] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("traits")
    @classmethod
    def validate_traits(cls, v: Dict[str, TraitValue]) -> Dict[str, TraitValue]:
        unknown = sorted(set(v) - TYPE_TRAIT_NAMES)
        if unknown:
            raise ValueError(f"Unknown type traits: {unknown}")
        return v


class AssemblyModel(BaseModel):
    full_name: str
    references: List[str] = Field(default_factory=list)
    types: List[TypeModel] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class SnapshotV0(BaseModel):
    """Top-level snapshot document."""
    format: Literal["asmsnap.snapshot"] = SNAPSHOT_FORMAT
    version: str = SNAPSHOT_VERSION
    assembly: AssemblyModel

    model_config = ConfigDict(extra="forbid")


def parse_snapshot(data: dict) -> SnapshotV0:
    """Parse and validate a snapshot dict (raises pydantic.ValidationError)."""
    return SnapshotV0.model_validate(data)
