"""Bindings derived from a struct or enum definition, and their dependencies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from tsbind.syntax import ArrayType, TupleType, TypeRef
from tsbind.types import Array, TS, TSError, Tuple, dependency_of, Dependency

TypeSource = Union[TS, TypeRef, ArrayType, TupleType, Callable[[], "TypeSource"]]


def binding_of(ty: TypeSource) -> TS:
    """Resolve a type description, or a thunk producing one, to its binding."""
    if isinstance(ty, TS):
        return ty
    if isinstance(ty, ArrayType):
        return Array(binding_of(ty.elem))
    if isinstance(ty, TupleType):
        return Tuple(*(binding_of(elem) for elem in ty.elems))
    if isinstance(ty, TypeRef):
        if ty.ts is None:
            raise TSError(f"{ty.name} has no TypeScript binding")
        return binding_of(ty.ts)
    if callable(ty):
        return binding_of(ty())
    raise TSError(f"cannot resolve {ty!r} to a TypeScript binding")


class Dependencies:
    """Dependencies collected while deriving; resolved only when collected."""

    def __init__(self) -> None:
        self._parts: list[Callable[[], list[Dependency]]] = []

    def append_from(self, ty: TypeSource) -> None:
        """Add all dependencies of the given type."""
        self._parts.append(lambda: binding_of(ty).dependencies())

    def push_or_append_from(self, ty: TypeSource) -> None:
        """Add the type itself, or its dependencies if it is transparent."""

        def part() -> list[Dependency]:
            binding = binding_of(ty)
            if binding.transparent():
                return binding.dependencies()
            dep = dependency_of(binding)
            return [] if dep is None else [dep]

        self._parts.append(part)

    def append(self, other: Dependencies) -> None:
        """Add everything another collection holds."""
        self._parts.append(other.collect)

    def collect(self) -> list[Dependency]:
        """Resolve and return all dependencies, in the order they were added."""
        return [dep for part in self._parts for dep in part()]


@dataclass(eq=False)
class DerivedTS(TS):
    """The binding of a user-defined struct or enum."""

    ts_name: str
    inline_fn: Callable[[], str]
    decl_fn: Callable[[], str]
    inline_flattened_fn: Callable[[], str] | None = None
    deps: Dependencies = field(default_factory=Dependencies)
    export: bool = False
    export_target: str | None = None

    def export_path(self) -> str:
        """Where this type is exported; a target ending in ``/`` is a directory."""
        target = self.export_target
        if target is None:
            return f"bindings/{self.ts_name}.ts"
        if target.endswith("/"):
            return f"{target}{self.ts_name}.ts"
        return target

    @property
    def export_to(self) -> str:  # type: ignore[override]
        return self.export_path()

    def name(self) -> str:
        return self.ts_name

    def inline(self) -> str:
        return self.inline_fn()

    def inline_flattened(self) -> str:
        if self.inline_flattened_fn is None:
            return super().inline_flattened()
        return self.inline_flattened_fn()

    def decl(self) -> str:
        return self.decl_fn()

    def dependencies(self) -> list[Dependency]:
        return self.deps.collect()

    def transparent(self) -> bool:
        return False