"""Expose a parsed snapshot through the MetadataSource protocol."""

from __future__ import annotations

from typing import List, Optional, Union

from asmsnap.kernel.snapshot import (
    FieldModel,
    MethodModel,
    ParameterModel,
    SnapshotV0,
    TypeModel,
    TypeRefModel,
)
from asmsnap.kernel.source import TypeRef


def _type_ref(model: TypeRefModel) -> TypeRef:
    return TypeRef(
        full_name=model.full_name,
        token=model.token,
        assembly_qualified_name=model.assembly_qualified_name,
    )


class SnapshotParameter:
    def __init__(self, model: ParameterModel):
        self._model = model

    def name(self) -> str:
        return self._model.name

    def metadata_token(self) -> int:
        return self._model.token

    def parameter_type_name(self) -> str:
        return self._model.parameter_type


class SnapshotMethod:
    def __init__(self, model: MethodModel):
        self._model = model

    def name(self) -> str:
        return self._model.name

    def metadata_token(self) -> int:
        return self._model.token

    def parameters(self) -> List[SnapshotParameter]:
        return [SnapshotParameter(p) for p in self._model.parameters]


class SnapshotField:
    def __init__(self, model: FieldModel):
        self._model = model

    def name(self) -> str:
        return self._model.name

    def metadata_token(self) -> int:
        return self._model.token

    def attributes(self) -> int:
        return self._model.attributes

    def declaring_type_name(self) -> Optional[str]:
        return self._model.declaring_type

    def trait(self, name: str) -> Union[bool, int]:
        return self._model.traits.get(name, False)


class SnapshotCustomAttribute:
    def __init__(self, model: TypeRefModel):
        self._model = model

    def declaring_type(self) -> TypeRef:
        return _type_ref(self._model)


class SnapshotType:
    def __init__(self, model: TypeModel):
        self._model = model

    def full_name(self) -> str:
        return self._model.full_name

    def metadata_token(self) -> int:
        return self._model.token

    def assembly_qualified_name(self) -> Optional[str]:
        return self._model.assembly_qualified_name

    def name(self) -> str:
        return self._model.name

    def namespace(self) -> Optional[str]:
        return self._model.namespace

    def base_type(self) -> Optional[TypeRef]:
        if self._model.base_type is None:
            return None
        return _type_ref(self._model.base_type)

    def interfaces(self) -> List[TypeRef]:
        return [_type_ref(i) for i in self._model.interfaces]

    def custom_attributes(self) -> List[SnapshotCustomAttribute]:
        return [SnapshotCustomAttribute(a) for a in self._model.custom_attributes]

    def constructors(self) -> List[SnapshotMethod]:
        return [SnapshotMethod(m) for m in self._model.constructors]

    def methods(self) -> List[SnapshotMethod]:
        return [SnapshotMethod(m) for m in self._model.methods]

    def fields(self) -> List[SnapshotField]:
        return [SnapshotField(f) for f in self._model.fields]

    def trait(self, name: str) -> Union[bool, int]:
        return self._model.traits.get(name, False)


class SnapshotSource:
    """MetadataSource backed by a SnapshotV0 document.

    Entities are enumerated in document order; the dump engine is
    responsible for canonical ordering.
    """

    def __init__(self, snapshot: SnapshotV0):
        self._snapshot = snapshot

    @property
    def snapshot(self) -> SnapshotV0:
        return self._snapshot

    def full_name(self) -> str:
        return self._snapshot.assembly.full_name

    def referenced_assemblies(self) -> List[str]:
        return list(self._snapshot.assembly.references)

    def types(self) -> List[SnapshotType]:
        return [SnapshotType(t) for t in self._snapshot.assembly.types]
