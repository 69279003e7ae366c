"""Entry point: derive bindings for a struct or enum."""

from __future__ import annotations

from typing import Any

from tsbind.derived import DerivedTS
from tsbind.enums import enum_def
from tsbind.structs import struct_def
from tsbind.syntax import DeriveError, EnumItem, StructItem


def derive(item: Any) -> DerivedTS:
    """Derive the bindings of a struct or enum; anything else is rejected."""
    if isinstance(item, StructItem):
        return struct_def(item)
    if isinstance(item, EnumItem):
        return enum_def(item)
    raise DeriveError("unsupported item")