"""TypeScript representations of types, and the dependencies between them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


class TSError(Exception):
    """Raised when a type cannot be named, inlined, flattened or declared."""


@dataclass(frozen=True)
class Dependency:
    """A type that another type depends upon, needed to generate imports."""

    type_id: Any
    ts_name: str
    exported_to: str


def dependency_of(ty: TS) -> Dependency | None:
    """The dependency on ``ty``, or None if ``ty`` is not exported anywhere."""
    exported_to = ty.export_to
    if exported_to is None:
        return None
    return Dependency(type_id=ty, ts_name=ty.name(), exported_to=exported_to)


def _dependencies_of(types: Iterable[TS]) -> list[Dependency]:
    return [dep for dep in map(dependency_of, types) if dep is not None]


def _expect_args(owner: str, args: list[str], count: int) -> None:
    if len(args) != count:
        raise TSError(f"called {owner}::name_with_type_args with {len(args)} args")


class TS(ABC):
    """A type which can be represented in TypeScript."""

    export_to: str | None = None

    @abstractmethod
    def name(self) -> str:
        """Name of this type in TypeScript."""

    def name_with_type_args(self, args: list[str]) -> str:
        """Name of this type in TypeScript, with type arguments."""
        return f"{self.name()}<{', '.join(args)}>"

    def inline(self) -> str:
        """This type's definition written out in place."""
        raise TSError(f"{self.name()} cannot be inlined")

    def inline_flattened(self) -> str:
        """This type's fields, for flattening into another object type."""
        raise TSError(f"{self.name()} cannot be flattened")

    def decl(self) -> str:
        """Declaration of this type, e.g. ``interface User { ... }``."""
        raise TSError(f"{self.name()} cannot be declared")

    @abstractmethod
    def dependencies(self) -> list[Dependency]:
        """Types this type depends on."""

    @abstractmethod
    def transparent(self) -> bool:
        """True for types such as tuples and lists that only wrap other types."""


_PRIMITIVES: dict[str, str] = {
    **dict.fromkeys(
        [
            "u8", "i8", "NonZeroU8", "NonZeroI8",
            "u16", "i16", "NonZeroU16", "NonZeroI16",
            "u32", "i32", "NonZeroU32", "NonZeroI32",
            "usize", "isize", "NonZeroUsize", "NonZeroIsize",
            "f32", "f64", "OrderedFloat",
        ],
        "number",
    ),
    **dict.fromkeys(
        [
            "u64", "i64", "NonZeroU64", "NonZeroI64",
            "u128", "i128", "NonZeroU128", "NonZeroI128",
        ],
        "bigint",
    ),
    "bool": "boolean",
    **dict.fromkeys(
        [
            "char", "Path", "PathBuf", "String", "str",
            "Ipv4Addr", "Ipv6Addr", "IpAddr", "SocketAddrV4", "SocketAddrV6", "SocketAddr",
            "NaiveDateTime", "NaiveDate", "NaiveTime", "Month", "Weekday", "Duration",
            "BigDecimal", "Uuid", "Url",
        ],
        "string",
    ),
    "()": "null",
}


@dataclass(frozen=True)
class Primitive(TS):
    """A type that maps onto a single TypeScript type such as ``number``."""

    literal: str

    @classmethod
    def of(cls, rust_type: str) -> Primitive:
        """The primitive a well-known source type maps to, e.g. ``u64`` to ``bigint``."""
        try:
            return cls(_PRIMITIVES[rust_type])
        except KeyError:
            raise TSError(f"{rust_type} is not a primitive type") from None

    def name(self) -> str:
        return self.literal

    def name_with_type_args(self, args: list[str]) -> str:
        if args:
            raise TSError("called name_with_type_args on primitive")
        return self.literal

    def inline(self) -> str:
        return self.literal

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Dummy(TS):
    """A type with an empty representation, such as a time zone marker."""

    label: str = ""

    def name(self) -> str:
        return ""

    def inline(self) -> str:
        return ""

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Zoned(TS):
    """A date or date-time in some time zone; always a string, whatever the zone."""

    zone: TS | None = None
    kind: str = "DateTime"

    def name(self) -> str:
        return "string"

    def name_with_type_args(self, args: list[str]) -> str:
        return self.name()

    def inline(self) -> str:
        return "string"

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Nullable(TS):
    """An optional value: ``T | null``."""

    inner: TS

    def name(self) -> str:
        raise TSError("Option has no name of its own")

    def name_with_type_args(self, args: list[str]) -> str:
        _expect_args("Option", args, 1)
        return f"{args[0]} | null"

    def inline(self) -> str:
        return f"{self.inner.inline()} | null"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.inner])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Array(TS):
    """A list, set or fixed size array: ``Array<T>``."""

    inner: TS

    def name(self) -> str:
        return "Array"

    def name_with_type_args(self, args: list[str]) -> str:
        _expect_args("Vec", args, 1)
        return f"Array<{args[0]}>"

    def inline(self) -> str:
        return f"Array<{self.inner.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.inner])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Record(TS):
    """A map: ``Record<K, V>``."""

    key: TS
    value: TS

    def name(self) -> str:
        return "Record"

    def name_with_type_args(self, args: list[str]) -> str:
        _expect_args("HashMap", args, 2)
        return f"Record<{args[0]}, {args[1]}>"

    def inline(self) -> str:
        return f"Record<{self.key.inline()}, {self.value.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.key, self.value])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Range(TS):
    """A range, half-open or inclusive: ``{ start: T, end: T, }``."""

    bound: TS
    inclusive: bool = False

    @property
    def _label(self) -> str:
        return "RangeInclusive" if self.inclusive else "Range"

    def name(self) -> str:
        raise TSError(f"called {self._label}::name - Did you use a type alias?")

    def name_with_type_args(self, args: list[str]) -> str:
        _expect_args(self._label, args, 1)
        return f"{{ start: {args[0]}, end: {args[0]}, }}"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.bound])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Tuple(TS):
    """A tuple: ``[A, B, ...]``."""

    elems: tuple[TS, ...] = ()

    def __init__(self, *elems: TS) -> None:
        object.__setattr__(self, "elems", tuple(elems))

    def name(self) -> str:
        return f"[{', '.join(elem.name() for elem in self.elems)}]"

    def inline(self) -> str:
        return f"[{', '.join(elem.inline() for elem in self.elems)}]"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of(self.elems)

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Wrapper(TS):
    """A smart pointer or cell around a type, represented exactly as that type."""

    inner: TS
    kind: str = "Box"

    def name(self) -> str:
        return self.inner.name()

    def name_with_type_args(self, args: list[str]) -> str:
        if len(args) != 1:
            raise TSError(f"called {self.kind}::name_with_type_args with {len(args)} args")
        return args[0]

    def inline(self) -> str:
        return self.inner.inline()

    def inline_flattened(self) -> str:
        return self.inner.inline_flattened()

    def dependencies(self) -> list[Dependency]:
        return self.inner.dependencies()

    def transparent(self) -> bool:
        return self.inner.transparent()