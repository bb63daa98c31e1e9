"""Canonical dump engine.

Walks a metadata source in a fixed order and renders the nested line
format. Two sources backed by the same binary metadata produce identical
text, whatever order they enumerate entities in.

Rules:
- Every tokenized sequence is sorted ascending by token.
- Parameters keep declaration order.
- Assembly references (no token) are sorted by full name.
- Interop shim types and the serialization marker attribute are skipped.
- Only owned members are walked; referenced types contribute identity only.
- Any read failure aborts the dump with no text returned.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from .errors import AttributeReadFailure, DumpError, SourceUnavailable
from .options import DumpOptions
from .ordering import Keyed, check_token, check_uint32, is_excluded, name_order, token_order
from . import render
from .render import LineWriter
from .source import CustomAttributeView, FieldView, MetadataSource, MethodView, TypeRef, TypeView
from .traits import FIELD_TRAITS, TYPE_TRAITS, group_trait_digits, read_trait_digits

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _read(call: Callable[[], T], entity: str, what: str,
          error: type = AttributeReadFailure) -> T:
    """Call a source accessor, classifying any failure as a DumpError."""
    try:
        return call()
    except DumpError:
        raise
    except Exception as exc:
        raise error(f"cannot read {what}: {type(exc).__name__}: {exc}", entity) from exc


def _enumerate(call: Callable[[], Sequence[T]], entity: str, what: str) -> List[T]:
    # Materialize inside the guard so lazily failing iterators are caught.
    return _read(lambda: list(call()), entity, what, SourceUnavailable)


def _read_str(call: Callable[[], Any], entity: str, what: str,
              error: type = AttributeReadFailure) -> str:
    value = _read(call, entity, what, error)
    if not isinstance(value, str):
        raise AttributeReadFailure(f"{what} must be a string, got {type(value).__name__}", entity)
    return value


def _read_optional_str(call: Callable[[], Any], entity: str, what: str) -> Optional[str]:
    value = _read(call, entity, what)
    if value is not None and not isinstance(value, str):
        raise AttributeReadFailure(f"{what} must be a string, got {type(value).__name__}", entity)
    return value


def _type_ref_key(ref: TypeRef, entity: str, what: str) -> Keyed[TypeRef]:
    full_name = _read_str(lambda: ref.full_name, entity, f"{what} name")
    token = check_token(_read(lambda: ref.token, entity, f"{what} token"), f"{entity} {what} [{full_name}]")
    return Keyed(token=token, name=full_name, item=ref)


def dump(source: MetadataSource, options: Optional[DumpOptions] = None) -> str:
    """Render the canonical dump of `source`.

    Args:
        source: Any object implementing the MetadataSource protocol
        options: Dump options (defaults to the canonical golden format)

    Returns:
        The dump text, one newline-terminated line per entry

    Raises:
        SourceUnavailable: the assembly or an entity set could not be read
        AttributeReadFailure: an entity attribute could not be read
    """
    options = options or DumpOptions()
    writer = LineWriter()

    # An unreadable assembly name means the assembly itself did not load.
    assembly_name = _read_str(source.full_name, "assembly", "assembly name", SourceUnavailable)
    assembly_entity = f"Assembly [{assembly_name}]"
    writer.write(render.assembly_line(assembly_name))

    references = _enumerate(source.referenced_assemblies, assembly_entity, "referenced assemblies")
    for ref in references:
        if not isinstance(ref, str):
            raise AttributeReadFailure(
                f"assembly reference must be a string, got {type(ref).__name__}", assembly_entity
            )
    writer.begin(render.ASSEMBLY_REFERENCES)
    for ref in name_order(references):
        writer.write(render.assembly_reference_line(ref))
    writer.end(render.ASSEMBLY_REFERENCES)

    types = _enumerate(source.types, assembly_entity, "types")
    keyed_types: List[Keyed[TypeView]] = []
    for t in types:
        full_name = _read_str(t.full_name, assembly_entity, "type name")
        entity = f"Type [{full_name}]"
        if is_excluded(full_name, options.excluded_type_names):
            logger.debug("Skipping interop shim type %s", full_name)
            continue
        token = check_token(_read(t.metadata_token, entity, "metadata token"), entity)
        keyed_types.append(Keyed(token=token, name=full_name, item=t))

    writer.begin(render.TYPES)
    for keyed in token_order(keyed_types):
        _write_type(writer, keyed, options)
    writer.end(render.TYPES)

    logger.debug(
        "Dumped %s: %d references, %d types (%d filtered), %d lines",
        assembly_name, len(references), len(keyed_types), len(types) - len(keyed_types), len(writer),
    )
    return writer.text()


def _write_type(writer: LineWriter, keyed: Keyed[TypeView], options: DumpOptions) -> None:
    t = keyed.item
    entity = f"Type [{keyed.name}]"

    # Generic parameters have no assembly-qualified name.
    aqn = _read_optional_str(t.assembly_qualified_name, entity, "assembly-qualified name")
    base = _read(t.base_type, entity, "base type")
    base_name: Optional[str] = None
    base_aqn: Optional[str] = None
    if base is not None:
        base_name = _read_str(lambda: base.full_name, entity, "base type name")
        base_aqn = _read_optional_str(lambda: base.assembly_qualified_name, entity, "base type assembly-qualified name")
    digits = _read(lambda: read_trait_digits(t, TYPE_TRAITS), entity, "type traits")
    name = _read_str(t.name, entity, "simple name")
    namespace = _read_optional_str(t.namespace, entity, "namespace")

    writer.extend(render.type_header_lines(
        full_name=keyed.name,
        token=keyed.token,
        assembly_qualified_name=aqn or "",
        base_type_name=base_name,
        base_type_aqn=base_aqn,
        trait_groups=group_trait_digits(digits),
        name=name,
        namespace=namespace or "",
    ))

    interfaces = [
        _type_ref_key(ref, entity, "interface")
        for ref in _enumerate(t.interfaces, entity, "interfaces")
    ]
    writer.begin(render.INTERFACES, render.MEMBER_BLOCK)
    for iface in token_order(interfaces):
        writer.write(render.interface_line(iface.name, iface.token))
    writer.end(render.INTERFACES, render.MEMBER_BLOCK)

    writer.begin(render.CUSTOM_ATTRIBUTES, render.MEMBER_BLOCK)
    for attr in token_order(_custom_attribute_keys(t, entity, options)):
        writer.write(render.custom_attribute_line(attr.name))
    writer.end(render.CUSTOM_ATTRIBUTES, render.MEMBER_BLOCK)

    writer.begin(render.CONSTRUCTORS, render.MEMBER_BLOCK)
    for ctor in token_order(_method_keys(t.constructors, entity, "constructors")):
        _write_method(writer, ctor, entity)
    writer.end(render.CONSTRUCTORS, render.MEMBER_BLOCK)

    writer.begin(render.METHODS, render.MEMBER_BLOCK)
    for method in token_order(_method_keys(t.methods, entity, "methods")):
        _write_method(writer, method, entity)
    writer.end(render.METHODS, render.MEMBER_BLOCK)

    if options.include_fields:
        writer.begin(render.FIELDS, render.MEMBER_BLOCK)
        for field in token_order(_field_keys(t, entity)):
            _write_field(writer, field)
        writer.end(render.FIELDS, render.MEMBER_BLOCK)


def _custom_attribute_keys(t: TypeView, entity: str, options: DumpOptions) -> List[Keyed[CustomAttributeView]]:
    # Ordered by the token of the attribute's declaring type.
    keys: List[Keyed[CustomAttributeView]] = []
    for attr in _enumerate(t.custom_attributes, entity, "custom attributes"):
        ref = _read(attr.declaring_type, entity, "custom attribute type")
        keyed = _type_ref_key(ref, entity, "custom attribute type")
        if is_excluded(keyed.name, options.excluded_attribute_types):
            continue
        keys.append(Keyed(token=keyed.token, name=keyed.name, item=attr))
    return keys


def _method_keys(call: Callable[[], Sequence[MethodView]], entity: str, what: str) -> List[Keyed[MethodView]]:
    keys: List[Keyed[MethodView]] = []
    for method in _enumerate(call, entity, what):
        name = _read_str(method.name, entity, "method name")
        method_entity = f"{entity} Method [{name}]"
        token = check_token(_read(method.metadata_token, method_entity, "metadata token"), method_entity)
        keys.append(Keyed(token=token, name=name, item=method))
    return keys


def _write_method(writer: LineWriter, keyed: Keyed[MethodView], type_entity: str) -> None:
    method = keyed.item
    entity = f"{type_entity} Method [{keyed.name}] [{render.hex_token(keyed.token)}]"
    writer.write(render.method_line(keyed.name, keyed.token))
    writer.begin(render.PARAMETERS, render.PARAMETER_BLOCK)
    # Declaration order, never sorted.
    for param in _enumerate(method.parameters, entity, "parameters"):
        name = _read_str(param.name, entity, "parameter name")
        param_entity = f"{entity} Parameter [{name}]"
        token = check_token(_read(param.metadata_token, param_entity, "metadata token"), param_entity)
        type_name = _read_str(param.parameter_type_name, param_entity, "parameter type")
        writer.write(render.parameter_line(name, token, type_name))
    writer.end(render.PARAMETERS, render.PARAMETER_BLOCK)


def _field_keys(t: TypeView, entity: str) -> List[Keyed[FieldView]]:
    keys: List[Keyed[FieldView]] = []
    for field in _enumerate(t.fields, entity, "fields"):
        name = _read_str(field.name, entity, "field name")
        field_entity = f"{entity} Field [{name}]"
        token = check_token(_read(field.metadata_token, field_entity, "metadata token"), field_entity)
        keys.append(Keyed(token=token, name=name, item=field))
    return keys


def _write_field(writer: LineWriter, keyed: Keyed[FieldView]) -> None:
    field = keyed.item
    entity = f"Field [{keyed.name}] [{render.hex_token(keyed.token)}]"
    attributes = check_uint32(_read(field.attributes, entity, "attribute flags"), entity, "attribute flags")
    declaring = _read_optional_str(field.declaring_type_name, entity, "declaring type")
    digits = _read(lambda: read_trait_digits(field, FIELD_TRAITS), entity, "field traits")
    writer.extend(render.field_lines(
        name=keyed.name,
        token=keyed.token,
        attributes=attributes,
        declaring_type_name=declaring,
        trait_groups=group_trait_digits(digits),
    ))
