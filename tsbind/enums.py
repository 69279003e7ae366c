"""Bindings for enums: unions of their variants."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from tsbind.attrs import EnumAttr, FieldAttr, StructAttr, TaggedKind, VariantAttr
from tsbind.derived import Dependencies, DerivedTS
from tsbind.shapes import format_generics, format_type
from tsbind.structs import type_def
from tsbind.syntax import EnumItem, Field, FieldsKind, Param, Variant

Lazy = Callable[[], str]


def enum_def(item: EnumItem) -> DerivedTS:
    """Bindings for an enum definition."""
    enum_attr = EnumAttr.from_attrs(item.attrs)
    name = enum_attr.rename if enum_attr.rename is not None else item.ident

    if not item.variants:
        return DerivedTS(
            ts_name=name,
            inline_fn=lambda: "never",
            decl_fn=lambda: f"type {name} = never;",
            export=enum_attr.export,
            export_target=enum_attr.export_to,
        )

    formatted: list[Lazy] = []
    deps = Dependencies()
    for variant in item.variants:
        _format_variant(formatted, deps, enum_attr, variant, item.generics)

    generic_args = format_generics(deps, item.generics)

    def inline() -> str:
        return " | ".join(part() for part in formatted)

    return DerivedTS(
        ts_name=name,
        inline_fn=inline,
        decl_fn=lambda: f"type {name}{generic_args()} = {inline()};",
        deps=deps,
        export=enum_attr.export,
        export_target=enum_attr.export_to,
    )


def _single_type(fld: Field, deps: Dependencies, generics: Sequence[Param]) -> Lazy:
    override = FieldAttr.from_attrs(fld.attrs).type_override
    if override is not None:
        return lambda: override
    return format_type(fld.ty, deps, generics)


def _format_variant(
    formatted: list[Lazy],
    deps: Dependencies,
    enum_attr: EnumAttr,
    variant: Variant,
    generics: Sequence[Param],
) -> None:
    variant_attr = VariantAttr.from_attrs(variant.attrs)
    if variant_attr.skip:
        return

    if variant_attr.rename is not None:
        name = variant_attr.rename
    elif enum_attr.rename_all is not None:
        name = enum_attr.rename_all.apply(variant.ident)
    else:
        name = variant.ident

    variant_type = type_def(
        StructAttr.from_variant(variant_attr), "_", variant.fields, generics
    )
    inline_type = variant_type.inline
    kind = variant.fields.kind
    single = kind is FieldsKind.UNNAMED and len(variant.fields) == 1
    tagged = enum_attr.tagged()

    result: Lazy
    if tagged.kind is TaggedKind.UNTAGGED:
        result = inline_type
    elif tagged.kind is TaggedKind.EXTERNALLY:
        if kind is FieldsKind.UNIT:
            result = lambda: f'"{name}"'  # noqa: E731
        else:
            result = lambda: f'{{ "{name}": {inline_type()} }}'  # noqa: E731
    elif tagged.kind is TaggedKind.ADJACENTLY:
        tag, content = tagged.tag, tagged.content
        if single:
            ty = _single_type(variant.fields[0], deps, generics)
            result = lambda: f'{{ "{tag}": "{name}", "{content}": {ty()} }}'  # noqa: E731
        elif kind is FieldsKind.UNIT:
            result = lambda: f'{{ "{tag}": "{name}" }}'  # noqa: E731
        else:
            result = lambda: (  # noqa: E731
                f'{{ "{tag}": "{name}", "{content}": {inline_type()} }}'
            )
    else:
        tag = tagged.tag
        flattened = variant_type.inline_flattened_fn
        if flattened is not None:
            result = lambda: f'{{ "{tag}": "{name}", {flattened()} }}'  # noqa: E731
        elif single:
            ty = _single_type(variant.fields[0], deps, generics)
            result = lambda: f'{{ "{tag}": "{name}" }} & {ty()}'  # noqa: E731
        elif kind is FieldsKind.UNIT:
            result = lambda: f'{{ "{tag}": "{name}" }}'  # noqa: E731
        else:
            result = lambda: f'{{ "{tag}": "{name}" }} & {inline_type()}'  # noqa: E731

    deps.append(variant_type.deps)
    formatted.append(result)