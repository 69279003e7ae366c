"""Options read from ``ts`` and ``serde`` attributes on containers, fields and variants."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from tsbind.inflection import Inflection, parse_inflection
from tsbind.syntax import Attribute, DeriveError, parse_attrs, parse_serde_attrs, split_attr_args

T = TypeVar("T")
_Handler = Callable[[Any, "str | None"], None]
# A key mapped to ``None`` is accepted so that no warning is printed, and has no effect.
_Handlers = dict[str, "_Handler | None"]


def _first(mine: T | None, other: T | None) -> T | None:
    return mine if mine is not None else other


def _assigned(value: str | None) -> str:
    if value is None:
        raise DeriveError("expected `=`")
    return value


def _string(name: str) -> _Handler:
    def handler(target: Any, value: str | None) -> None:
        setattr(target, name, _assigned(value))

    return handler


def _inflection(name: str) -> _Handler:
    def handler(target: Any, value: str | None) -> None:
        setattr(target, name, parse_inflection(_assigned(value)))

    return handler


def _switch(name: str) -> _Handler:
    def handler(target: Any, value: str | None) -> None:
        if value is not None:
            raise DeriveError("expected `,`")
        setattr(target, name, True)

    return handler


def _skip_serializing_if(target: Any, value: str | None) -> None:
    target.optional = _assigned(value) == "Option::is_none"


def _apply(target: T, text: str, handlers: _Handlers) -> T:
    for key, value in split_attr_args(text):
        if key not in handlers:
            raise DeriveError("unexpected attribute")
        handler = handlers[key]
        if handler is not None:
            handler(target, value)
    return target


_ENUM_TS: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "export_to": _string("export_to"),
    "export": _switch("export"),
}
_ENUM_SERDE: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "tag": _string("tag"),
    "content": _string("content"),
    "untagged": _switch("untagged"),
}
_FIELD_TS: _Handlers = {
    "type": _string("type_override"),
    "rename": _string("rename"),
    "inline": _switch("inline"),
    "skip": _switch("skip"),
    "optional": _switch("optional"),
    "flatten": _switch("flatten"),
}
_FIELD_SERDE: _Handlers = {
    "rename": _string("rename"),
    "skip": _switch("skip"),
    "skip_serializing": _switch("skip"),
    "skip_deserializing": _switch("skip"),
    "skip_serializing_if": _skip_serializing_if,
    "flatten": _switch("flatten"),
    "default": None,
}
_STRUCT_TS: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "export": _switch("export"),
    "export_to": _string("export_to"),
}
_STRUCT_SERDE: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "tag": _string("tag"),
    "deny_unknown_fields": None,
    "default": None,
}
_VARIANT_TS: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "inline": _switch("inline"),
    "skip": _switch("skip"),
}
_VARIANT_SERDE: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "skip": _switch("skip"),
    "skip_serializing": _switch("skip"),
    "skip_deserializing": _switch("skip"),
}


class TaggedKind(Enum):
    EXTERNALLY = "externally"
    ADJACENTLY = "adjacently"
    INTERNALLY = "internally"
    UNTAGGED = "untagged"


@dataclass(frozen=True)
class Tagged:
    """How an enum's variants carry their tag."""

    kind: TaggedKind
    tag: str | None = None
    content: str | None = None


@dataclass
class EnumAttr:
    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None
    untagged: bool = False
    content: str | None = None

    def tagged(self) -> Tagged:
        """The enum representation these options select."""
        if self.untagged:
            if self.content is not None:
                raise DeriveError("untagged cannot be used with content")
            if self.tag is not None:
                raise DeriveError("untagged cannot be used with tag")
            return Tagged(TaggedKind.UNTAGGED)
        if self.tag is None:
            if self.content is not None:
                raise DeriveError("content cannot be used without tag")
            return Tagged(TaggedKind.EXTERNALLY)
        if self.content is None:
            return Tagged(TaggedKind.INTERNALLY, tag=self.tag)
        return Tagged(TaggedKind.ADJACENTLY, tag=self.tag, content=self.content)

    @classmethod
    def from_attrs(cls, attrs: Iterable[Attribute]) -> EnumAttr:
        attrs = tuple(attrs)
        result = cls()
        for parsed in parse_attrs(attrs, cls.parse):
            result.merge(parsed)
        for parsed in parse_serde_attrs(attrs, cls.parse_serde):
            result.merge(parsed)
        return result

    def merge(self, other: EnumAttr) -> None:
        """Fill in what is unset here from ``other``."""
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.tag = _first(self.tag, other.tag)
        self.untagged = self.untagged or other.untagged
        self.content = _first(self.content, other.content)
        self.export = self.export or other.export
        self.export_to = _first(self.export_to, other.export_to)

    @classmethod
    def parse(cls, text: str) -> EnumAttr:
        return _apply(cls(), text, _ENUM_TS)

    @classmethod
    def parse_serde(cls, text: str) -> EnumAttr:
        return _apply(cls(), text, _ENUM_SERDE)


@dataclass
class FieldAttr:
    type_override: str | None = None
    rename: str | None = None
    inline: bool = False
    skip: bool = False
    optional: bool = False
    flatten: bool = False

    @classmethod
    def from_attrs(cls, attrs: Iterable[Attribute]) -> FieldAttr:
        attrs = tuple(attrs)
        result = cls()
        for parsed in parse_attrs(attrs, cls.parse):
            result.merge(parsed)
        for parsed in parse_serde_attrs(attrs, cls.parse_serde):
            result.merge(parsed)
        return result

    def merge(self, other: FieldAttr) -> None:
        """Fill in what is unset here from ``other``."""
        self.rename = _first(self.rename, other.rename)
        self.type_override = _first(self.type_override, other.type_override)
        self.inline = self.inline or other.inline
        self.skip = self.skip or other.skip
        self.optional = self.optional or other.optional
        self.flatten = self.flatten or other.flatten

    @classmethod
    def parse(cls, text: str) -> FieldAttr:
        return _apply(cls(), text, _FIELD_TS)

    @classmethod
    def parse_serde(cls, text: str) -> FieldAttr:
        return _apply(cls(), text, _FIELD_SERDE)


@dataclass
class StructAttr:
    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None

    @classmethod
    def from_attrs(cls, attrs: Iterable[Attribute]) -> StructAttr:
        attrs = tuple(attrs)
        result = cls()
        for parsed in parse_attrs(attrs, cls.parse):
            result.merge(parsed)
        for parsed in parse_serde_attrs(attrs, cls.parse_serde):
            result.merge(parsed)
        return result

    @classmethod
    def from_variant(cls, variant_attr: VariantAttr) -> StructAttr:
        """Options for the struct a variant's fields form; only renaming carries over."""
        return cls(rename=variant_attr.rename, rename_all=variant_attr.rename_all)

    def merge(self, other: StructAttr) -> None:
        """Fill in what is unset here from ``other``."""
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.export_to = _first(self.export_to, other.export_to)
        self.export = self.export or other.export
        self.tag = _first(self.tag, other.tag)

    @classmethod
    def parse(cls, text: str) -> StructAttr:
        return _apply(cls(), text, _STRUCT_TS)

    @classmethod
    def parse_serde(cls, text: str) -> StructAttr:
        return _apply(cls(), text, _STRUCT_SERDE)


@dataclass
class VariantAttr:
    rename: str | None = None
    rename_all: Inflection | None = None
    inline: bool = False
    skip: bool = False

    @classmethod
    def from_attrs(cls, attrs: Iterable[Attribute]) -> VariantAttr:
        attrs = tuple(attrs)
        result = cls()
        for parsed in parse_attrs(attrs, cls.parse):
            result.merge(parsed)
        for parsed in parse_serde_attrs(attrs, cls.parse_serde):
            result.merge(parsed)
        return result

    def merge(self, other: VariantAttr) -> None:
        """Fill in what is unset here from ``other``."""
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.inline = self.inline or other.inline
        self.skip = self.skip or other.skip

    @classmethod
    def parse(cls, text: str) -> VariantAttr:
        return _apply(cls(), text, _VARIANT_TS)

    @classmethod
    def parse_serde(cls, text: str) -> VariantAttr:
        return _apply(cls(), text, _VARIANT_SERDE)