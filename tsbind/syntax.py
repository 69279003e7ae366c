"""Description of the items that bindings are derived from, and attribute parsing."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

A = TypeVar("A")


class DeriveError(Exception):
    """Raised when bindings cannot be derived from an item."""


@dataclass(frozen=True)
class Attribute:
    """An attribute such as ``#[ts(rename = "x")]``: its path and its arguments."""

    path: str
    args: str = ""

    @classmethod
    def ts(cls, args: str) -> Attribute:
        return cls("ts", args)

    @classmethod
    def serde(cls, args: str) -> Attribute:
        return cls("serde", args)

    def __str__(self) -> str:
        return f"#[{self.path}({self.args})]"


class GenericParam(Enum):
    """Kind of a generic parameter."""

    TYPE = "type"
    LIFETIME = "lifetime"
    CONST = "const"


@dataclass(frozen=True)
class Param:
    """A generic parameter, with its default type if it has one."""

    name: str
    kind: GenericParam = GenericParam.TYPE
    default: TypeLike | None = None


@dataclass(frozen=True)
class TypeRef:
    """A path type such as ``Vec<T>``; ``ts`` is the binding the type resolves to."""

    name: str
    args: tuple[TypeLike, ...] = ()
    ts: Any = None
    qself: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def leading_colon(self) -> bool:
        return self.name.startswith("::")

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.name.removeprefix("::").split("::"))

    @property
    def last_segment(self) -> str:
        return self.segments[-1]

    def is_ident(self, ident: str) -> bool:
        """True if this type is exactly the bare identifier ``ident``."""
        return (
            not self.qself
            and not self.leading_colon
            and not self.args
            and self.segments == (ident,)
        )


@dataclass(frozen=True)
class ArrayType:
    """A fixed size array ``[elem; length]``."""

    elem: TypeLike
    length: int | str = 0


@dataclass(frozen=True)
class TupleType:
    """A tuple type ``(A, B, ...)``."""

    elems: tuple[TypeLike, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elems", tuple(self.elems))


TypeLike = TypeRef | ArrayType | TupleType


@dataclass(frozen=True)
class Field:
    """A field of a struct or variant; unnamed fields have no ident."""

    ty: TypeLike
    ident: str | None = None
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", tuple(self.attrs))


class FieldsKind(Enum):
    NAMED = "named"
    UNNAMED = "unnamed"
    UNIT = "unit"


@dataclass(frozen=True)
class Fields:
    """The fields of a struct or variant, together with their style."""

    kind: FieldsKind
    fields: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def named(cls, *fields: Field) -> Fields:
        return cls(FieldsKind.NAMED, fields)

    @classmethod
    def unnamed(cls, *fields: Field) -> Fields:
        return cls(FieldsKind.UNNAMED, fields)

    @classmethod
    def unit(cls) -> Fields:
        return cls(FieldsKind.UNIT)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, index: int) -> Field:
        return self.fields[index]


@dataclass(frozen=True)
class Variant:
    """A variant of an enum."""

    ident: str
    fields: Fields = field(default_factory=Fields.unit)
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", tuple(self.attrs))


@dataclass(frozen=True)
class StructItem:
    """A struct definition."""

    ident: str
    fields: Fields = field(default_factory=Fields.unit)
    generics: tuple[Param, ...] = ()
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "generics", tuple(self.generics))
        object.__setattr__(self, "attrs", tuple(self.attrs))


@dataclass(frozen=True)
class EnumItem:
    """An enum definition."""

    ident: str
    variants: tuple[Variant, ...] = ()
    generics: tuple[Param, ...] = ()
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", tuple(self.variants))
        object.__setattr__(self, "generics", tuple(self.generics))
        object.__setattr__(self, "attrs", tuple(self.attrs))


def to_ts_ident(ident: str) -> str:
    """Strip the raw identifier prefix ``r#`` from an identifier."""
    while ident.startswith("r#"):
        ident = ident[2:]
    return ident


def raw_name_to_ts_field(value: str) -> str:
    """Quote a field name unless it is a valid TypeScript identifier."""
    valid = all(c.isalnum() or c in "_$" for c in value) and not value[:1].isnumeric()
    return value if valid else f'"{value}"'


_SPACE = re.compile(r"\s*")
_IDENT = re.compile(r"(?:r#)?[^\W\d]\w*")
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_RAW_STRING = re.compile(r'r(#*)"(.*?)"\1', re.DOTALL)
_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]{1,6}\}|x[0-7][0-9a-fA-F]|\n\s*|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        code = match.group(1)
        if code.startswith("u{"):
            return chr(int(code[2:-1], 16))
        if code.startswith("x") and len(code) == 3:
            return chr(int(code[1:], 16))
        if code.startswith("\n"):
            return ""
        try:
            return _SIMPLE_ESCAPES[code]
        except KeyError:
            raise DeriveError(f"unknown character escape: `{code}`") from None

    return _ESCAPE.sub(replace, body)


class _Cursor:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip_space(self) -> None:
        self.pos = _SPACE.match(self.text, self.pos).end()

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def take(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        match = pattern.match(self.text, self.pos)
        if match:
            self.pos = match.end()
        return match

    def eat(self, token: str) -> bool:
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def string_literal(self) -> str:
        if raw := self.take(_RAW_STRING):
            return raw.group(2)
        if self.text.startswith('"', self.pos):
            if plain := self.take(_STRING):
                return _unescape(plain.group(1))
            raise DeriveError("unterminated string literal")
        raise DeriveError("expected string")


def split_attr_args(text: str) -> list[tuple[str, str | None]]:
    """Split ``key = "value", flag`` into pairs; a key without ``=`` pairs with None."""
    cursor = _Cursor(text)
    pairs: list[tuple[str, str | None]] = []
    while True:
        cursor.skip_space()
        key = cursor.take(_IDENT)
        if key is None:
            raise DeriveError("expected identifier")
        cursor.skip_space()
        value = None
        if cursor.eat("="):
            cursor.skip_space()
            value = cursor.string_literal()
            cursor.skip_space()
        pairs.append((key.group(), value))
        if cursor.at_end():
            return pairs
        if not cursor.eat(","):
            raise DeriveError("expected `,`")


def parse_attrs(attrs: Iterable[Attribute], parser: Callable[[str], A]) -> list[A]:
    """Parse every ``ts`` attribute; the first failure is raised."""
    return [parser(attr.args) for attr in attrs if attr.path == "ts"]


def parse_serde_attrs(attrs: Iterable[Attribute], parser: Callable[[str], A]) -> list[A]:
    """Parse every ``serde`` attribute, warning about and skipping those that fail."""
    parsed: list[A] = []
    for attr in attrs:
        if attr.path != "serde":
            continue
        try:
            parsed.append(parser(attr.args))
        except DeriveError:
            print_warning(
                "failed to parse serde attribute",
                str(attr),
                "this attribute could not be understood. It will be ignored.",
            )
    return parsed


_RESET = "\x1b[0m"
_YELLOW_BOLD = "1;93"
_WHITE_BOLD = "1;97"
_WHITE = "97"
_BLUE_BOLD = "1;94"


def print_warning(title: object, content: object, note: object) -> None:
    """Print a message to stderr styled like a compiler warning."""
    colored = sys.stderr.isatty()

    def paint(style: str, text: str) -> str:
        return f"{_RESET}\x1b[{style}m{text}" if colored else text

    message = "".join(
        [
            paint(_YELLOW_BOLD, "warning"),
            paint(_WHITE_BOLD, f": {title}\n"),
            paint(_BLUE_BOLD, "  | \n  | "),
            paint(_WHITE, f"{content}\n"),
            paint(_BLUE_BOLD, "  | \n  = "),
            paint(_WHITE_BOLD, "note: "),
            paint(_WHITE, f"{note}\n"),
        ]
    )
    if colored:
        message += _RESET
    sys.stderr.write(message)
    sys.stderr.flush()