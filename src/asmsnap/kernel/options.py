"""Dump configuration."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .ordering import DEFAULT_EXCLUDED_ATTRIBUTE_TYPES, DEFAULT_EXCLUDED_TYPE_NAMES


class DumpOptions(BaseModel):
    """Options controlling what the dump engine emits.

    The defaults produce the canonical golden format. Changing an
    exclusion set changes the output, so both sides of a comparison must be
    dumped with the same options.
    """
    include_fields: bool = False
    excluded_type_names: Tuple[str, ...] = Field(default=DEFAULT_EXCLUDED_TYPE_NAMES)
    excluded_attribute_types: Tuple[str, ...] = Field(default=DEFAULT_EXCLUDED_ATTRIBUTE_TYPES)

    model_config = ConfigDict(extra="forbid", frozen=True)
