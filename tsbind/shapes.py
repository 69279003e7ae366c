"""Bindings for generics, field types, and unit, newtype and tuple structs."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from tsbind.attrs import FieldAttr, StructAttr
from tsbind.derived import Dependencies, DerivedTS, binding_of
from tsbind.syntax import (
    ArrayType,
    DeriveError,
    Field,
    Fields,
    GenericParam,
    Param,
    TupleType,
    TypeLike,
    TypeRef,
)

Lazy = Callable[[], str]


def _const(text: str) -> Lazy:
    return lambda: text


def _type_params(generics: Sequence[Param]) -> list[Param]:
    return [p for p in generics if p.kind is GenericParam.TYPE]


def _generic_name(ty: TypeLike, generics: Sequence[Param]) -> str | None:
    if not isinstance(ty, TypeRef):
        return None
    for param in _type_params(generics):
        if ty.is_ident(param.name):
            return param.name
    return None


def _push(deps: Dependencies, ty: TypeLike, generics: Sequence[Param]) -> None:
    if _generic_name(ty, generics) is None:
        deps.push_or_append_from(ty)


def _append(deps: Dependencies, ty: TypeLike, generics: Sequence[Param]) -> None:
    if _generic_name(ty, generics) is None:
        deps.append_from(ty)


def format_generics(deps: Dependencies, generics: Sequence[Param]) -> Lazy:
    """The ``<A, B = x>`` list of type parameters, or an empty string."""
    parts: list[Lazy] = []
    for param in _type_params(generics):
        if param.default is not None:
            default = format_type(param.default, deps, generics)
            parts.append(lambda n=param.name, d=default: f"{n} = {d()}")
        else:
            parts.append(_const(param.name))
    if not parts:
        return _const("")
    return lambda: f"<{', '.join(part() for part in parts)}>"


def format_type(ty: TypeLike, deps: Dependencies, generics: Sequence[Param]) -> Lazy:
    """How a field type is written, recording its dependencies."""
    generic = _generic_name(ty, generics)
    if generic is not None:
        return _const(generic)
    if isinstance(ty, ArrayType):
        _push_array(deps, ty.elem, generics)
        inner = format_type(ty.elem, deps, generics)
        return lambda: f"Array<{inner()}>"
    if isinstance(ty, TupleType):
        fields = Fields.unnamed(*(Field(elem) for elem in ty.elems))
        derived = unnamed_def(StructAttr(), "_", fields, generics)
        deps.append(derived.deps)
        return derived.inline
    deps.push_or_append_from(ty)
    if not ty.args:
        return lambda: binding_of(ty).name()
    args = [format_type(arg, deps, generics) for arg in ty.args]
    return lambda: binding_of(ty).name_with_type_args([arg() for arg in args])


def _push_array(deps: Dependencies, elem: TypeLike, generics: Sequence[Param]) -> None:
    # an array depends on its element as a list would
    if _generic_name(elem, generics) is None:
        deps.append_from(lambda: _list_of(elem))


def _list_of(elem: TypeLike):
    from tsbind.types import Array

    return Array(binding_of(elem))


def unnamed_def(
    attr: StructAttr, name: str, fields: Fields, generics: Sequence[Param]
) -> DerivedTS:
    """Bindings for unnamed fields: empty array, newtype or tuple by field count."""
    if len(fields) == 0:
        return empty_array(attr, name)
    if len(fields) == 1:
        return newtype_def(attr, name, fields, generics)
    return tuple_def(attr, name, fields, generics)


def newtype_def(
    attr: StructAttr, name: str, fields: Fields, generics: Sequence[Param]
) -> DerivedTS:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to newtype structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to newtype structs")
    inner = fields[0]
    fattr = FieldAttr.from_attrs(inner.attrs)
    if fattr.rename is not None:
        raise DeriveError("`rename` is not applicable to newtype fields")
    if fattr.skip:
        raise DeriveError("`skip` is not applicable to newtype fields")
    if fattr.optional:
        raise DeriveError("`optional` is not applicable to newtype fields")
    if fattr.flatten:
        raise DeriveError("`flatten` is not applicable to newtype fields")

    deps = Dependencies()
    if fattr.type_override is None:
        if fattr.inline:
            _append(deps, inner.ty, generics)
        else:
            _push(deps, inner.ty, generics)

    if fattr.type_override is not None:
        inline_def = _const(fattr.type_override)
    elif fattr.inline:
        inline_def = lambda: binding_of(inner.ty).inline()  # noqa: E731
    else:
        inline_def = format_type(inner.ty, deps, generics)

    generic_args = format_generics(deps, generics)
    return DerivedTS(
        ts_name=name,
        inline_fn=inline_def,
        decl_fn=lambda: f"type {name}{generic_args()} = {inline_def()};",
        deps=deps,
        export=attr.export,
        export_target=attr.export_to,
    )


def tuple_def(
    attr: StructAttr, name: str, fields: Fields, generics: Sequence[Param]
) -> DerivedTS:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to tuple structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to tuple structs")

    formatted: list[Lazy] = []
    deps = Dependencies()
    for fld in fields:
        fattr = FieldAttr.from_attrs(fld.attrs)
        if fattr.skip:
            continue
        if fattr.rename is not None:
            raise DeriveError("`rename` is not applicable to tuple structs")
        if fattr.optional:
            raise DeriveError("`optional` is not applicable to tuple fields")
        if fattr.flatten:
            raise DeriveError("`flatten` is not applicable to tuple fields")
        if fattr.type_override is not None:
            formatted.append(_const(fattr.type_override))
        elif fattr.inline:
            formatted.append(lambda t=fld.ty: binding_of(t).inline())
        else:
            formatted.append(format_type(fld.ty, deps, generics))
        if fattr.type_override is None:
            if fattr.inline:
                _append(deps, fld.ty, generics)
            else:
                _push(deps, fld.ty, generics)

    generic_args = format_generics(deps, generics)

    def inline() -> str:
        return f"[{', '.join(part() for part in formatted)}]"

    return DerivedTS(
        ts_name=name,
        inline_fn=inline,
        decl_fn=lambda: f"type {name}{generic_args()} = {inline()};",
        deps=deps,
        export=attr.export,
        export_target=attr.export_to,
    )


def _check_attributes(attr: StructAttr) -> None:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to unit structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to unit structs")


def _constant(attr: StructAttr, name: str, ts: str) -> DerivedTS:
    _check_attributes(attr)
    return DerivedTS(
        ts_name=name,
        inline_fn=_const(ts),
        decl_fn=_const(f"type {name} = {ts};"),
        export=attr.export,
        export_target=attr.export_to,
    )


def empty_object(attr: StructAttr, name: str) -> DerivedTS:
    return _constant(attr, name, "Record<string, never>")


def empty_array(attr: StructAttr, name: str) -> DerivedTS:
    return _constant(attr, name, "never[]")


def null(attr: StructAttr, name: str) -> DerivedTS:
    return _constant(attr, name, "null")