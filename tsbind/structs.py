"""Bindings for structs: dispatch on field style, and structs with named fields."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from tsbind.attrs import FieldAttr, StructAttr
from tsbind.derived import Dependencies, DerivedTS, binding_of
from tsbind.inflection import Inflection
from tsbind.shapes import empty_object, format_generics, format_type, null, unnamed_def
from tsbind.syntax import (
    DeriveError,
    Field,
    Fields,
    FieldsKind,
    Param,
    StructItem,
    TypeLike,
    TypeRef,
    raw_name_to_ts_field,
    to_ts_ident,
)

Lazy = Callable[[], str]


def struct_def(item: StructItem) -> DerivedTS:
    """Bindings for a struct definition."""
    attr = StructAttr.from_attrs(item.attrs)
    return type_def(attr, item.ident, item.fields, item.generics)


def type_def(
    attr: StructAttr, ident: str, fields: Fields, generics: Sequence[Param]
) -> DerivedTS:
    """Bindings for a set of fields, chosen by their style and count."""
    name = attr.rename if attr.rename is not None else to_ts_ident(ident)
    if fields.kind is FieldsKind.NAMED:
        if len(fields) == 0:
            return empty_object(attr, name)
        return named_def(attr, name, fields, generics)
    if fields.kind is FieldsKind.UNNAMED:
        return unnamed_def(attr, name, fields, generics)
    return null(attr, name)


def named_def(
    attr: StructAttr, name: str, fields: Fields, generics: Sequence[Param]
) -> DerivedTS:
    """Bindings for a struct with named fields: an interface."""
    formatted: list[Lazy] = []
    deps = Dependencies()
    if attr.tag is not None:
        tag_field = f'{attr.tag}: "{name}",'
        formatted.append(lambda: tag_field)

    for fld in fields:
        _format_field(formatted, deps, fld, attr.rename_all, generics)

    generic_args = format_generics(deps, generics)

    def flattened() -> str:
        return " ".join(part() for part in formatted)

    def inline() -> str:
        return f"{{ {flattened()} }}"

    return DerivedTS(
        ts_name=name,
        inline_fn=inline,
        decl_fn=lambda: f"interface {name}{generic_args()} {inline()}",
        inline_flattened_fn=flattened,
        deps=deps,
        export=attr.export,
        export_target=attr.export_to,
    )


def _format_field(
    formatted: list[Lazy],
    deps: Dependencies,
    fld: Field,
    rename_all: Inflection | None,
    generics: Sequence[Param],
) -> None:
    fattr = FieldAttr.from_attrs(fld.attrs)
    if fattr.skip:
        return

    if fattr.optional:
        ty = extract_option_argument(fld.ty)
        optional_mark = "?"
    else:
        ty = fld.ty
        optional_mark = ""

    if fattr.flatten:
        if fattr.type_override is not None:
            raise DeriveError("`type` is not compatible with `flatten`")
        if fattr.rename is not None:
            raise DeriveError("`rename` is not compatible with `flatten`")
        if fattr.inline:
            raise DeriveError("`inline` is not compatible with `flatten`")
        formatted.append(lambda: binding_of(ty).inline_flattened())
        deps.append_from(ty)
        return

    if fattr.type_override is not None:
        override = fattr.type_override
        formatted_ty: Lazy = lambda: override  # noqa: E731
    elif fattr.inline:
        deps.append_from(ty)
        formatted_ty = lambda: binding_of(ty).inline()  # noqa: E731
    else:
        formatted_ty = format_type(ty, deps, generics)

    field_name = to_ts_ident(fld.ident or "")
    if fattr.rename is not None:
        field_name = fattr.rename
    elif rename_all is not None:
        field_name = rename_all.apply(field_name)
    valid_name = raw_name_to_ts_field(field_name)

    formatted.append(lambda: f"{valid_name}{optional_mark}: {formatted_ty()},")


def extract_option_argument(ty: TypeLike) -> TypeLike:
    """The ``T`` of an ``Option<T>`` field type."""
    if (
        isinstance(ty, TypeRef)
        and not ty.qself
        and not ty.leading_colon
        and ty.segments == ("Option",)
    ):
        if len(ty.args) == 1:
            return ty.args[0]
        raise DeriveError("`Option` type must have a single generic argument")
    raise DeriveError("`optional` can only be used on an Option<T> type")