import pytest

from tsbind.derived import binding_of
from tsbind.structs import extract_option_argument, struct_def
from tsbind.syntax import (
    ArrayType,
    Attribute,
    DeriveError,
    Field,
    Fields,
    GenericParam,
    Param,
    StructItem,
    TupleType,
    TypeRef,
)
from tsbind.types import (
    Array,
    Dummy,
    Nullable,
    Primitive,
    Range,
    Record,
    Wrapper,
    Zoned,
    dependency_of,
)


def prim(name):
    return TypeRef(name, ts=Primitive.of(name))


def vec(t, kind="Vec"):
    return TypeRef(kind, (t,), ts=lambda: Array(binding_of(t)))


def option(t):
    return TypeRef("Option", (t,), ts=lambda: Nullable(binding_of(t)))


def wrap(kind, t):
    return TypeRef(kind, (t,), ts=lambda: Wrapper(binding_of(t), kind))


def fld(name, ty, *attrs):
    return Field(ty, name, attrs)


I32 = prim("i32")
STRING = prim("String")
STR = TypeRef("&str", ts=Primitive.of("str"))


def test_simple():
    item = StructItem(
        "Simple",
        Fields.named(
            fld("a", I32),
            fld("b", STRING),
            fld("c", TupleType((I32, STRING, wrap("RefCell", I32)))),
            fld("d", vec(STRING)),
            fld("e", option(STRING)),
            fld("f", prim("char")),
            fld("g", option(prim("char"))),
        ),
    )
    assert struct_def(item).inline() == (
        "{ a: number, b: string, c: [number, string, number], d: Array<string>, "
        "e: string | null, f: string, g: string | null, }"
    )


def test_skip():
    item = StructItem(
        "Skip",
        Fields.named(fld("a", I32), fld("b", I32), fld("c", STRING, Attribute.ts("skip"))),
    )
    assert struct_def(item).inline() == "{ a: number, b: number, }"


def test_field_rename():
    item = StructItem(
        "Rename", Fields.named(fld("a", I32), fld("b", I32, Attribute.ts('rename = "bb"')))
    )
    assert struct_def(item).inline() == "{ a: number, bb: number, }"


def test_flatten():
    a = struct_def(StructItem("A", Fields.named(fld("a", I32), fld("b", I32))))
    b = struct_def(
        StructItem(
            "B",
            Fields.named(fld("a", TypeRef("A", ts=a), Attribute.ts("flatten")), fld("c", I32)),
        )
    )
    c = struct_def(
        StructItem(
            "C", Fields.named(fld("b", TypeRef("B", ts=b), Attribute.ts("inline")), fld("d", I32))
        )
    )
    assert c.inline() == "{ b: { a: number, b: number, c: number, }, d: number, }"


def test_flatten_with_rename_is_rejected():
    a = struct_def(StructItem("A", Fields.named(fld("a", I32))))
    item = StructItem(
        "B", Fields.named(fld("a", TypeRef("A", ts=a), Attribute.ts('flatten, rename = "x"')))
    )
    with pytest.raises(DeriveError, match="rename"):
        struct_def(item)


def test_nested():
    a = struct_def(
        StructItem("A", Fields.named(fld("x1", wrap("Arc", I32)), fld("y1", wrap("Cell", I32))))
    )
    a_ref = TypeRef("A", ts=a)
    b = struct_def(
        StructItem(
            "B", Fields.named(fld("a1", wrap("Box", a_ref)), fld("a2", a_ref, Attribute.ts("inline")))
        )
    )
    b_ref = TypeRef("B", ts=b)
    c = struct_def(
        StructItem(
            "C", Fields.named(fld("b1", wrap("Rc", b_ref)), fld("b2", b_ref, Attribute.ts("inline")))
        )
    )
    assert c.inline() == "{ b1: B, b2: { a1: A, a2: { x1: number, y1: number, }, }, }"


def test_list():
    item = StructItem("List", Fields.named(fld("data", option(vec(prim("u32"))))))
    assert struct_def(item).decl() == "interface List { data: Array<number> | null, }"


def test_optional_field():
    item = StructItem(
        "Optional",
        Fields.named(
            fld("a", option(I32), Attribute.ts("optional")),
            fld("b", option(STRING), Attribute.serde('skip_serializing_if = "Option::is_none"')),
        ),
    )
    assert struct_def(item).inline() == "{ a?: number, b?: string, }"


def test_optional_requires_option():
    item = StructItem("X", Fields.named(fld("a", I32, Attribute.ts("optional"))))
    with pytest.raises(DeriveError, match="Option"):
        struct_def(item)


def test_extract_option_argument():
    assert extract_option_argument(option(I32)) is I32
    with pytest.raises(DeriveError):
        extract_option_argument(TypeRef("std::option::Option", (I32,)))


def test_rename_all():
    item = StructItem(
        "Rename",
        Fields.named(fld("a", I32), fld("b", I32)),
        attrs=[Attribute.ts('rename_all = "UPPERCASE"')],
    )
    assert struct_def(item).inline() == "{ A: number, B: number, }"


def test_serde_rename_special_char():
    item = StructItem(
        "RenameSerdeSpecialChar", Fields.named(fld("b", I32, Attribute.serde('rename = "a/b"')))
    )
    assert struct_def(item).inline() == '{ "a/b": number, }'


def test_struct_tag():
    item = StructItem(
        "TaggedType",
        Fields.named(fld("a", I32), fld("b", I32)),
        attrs=[Attribute.serde('tag = "type"')],
    )
    assert struct_def(item).inline() == '{ type: "TaggedType", a: number, b: number, }'


def test_raw_idents():
    item = StructItem(
        "r#enum",
        Fields.named(*(fld(f"r#{n}", I32) for n in ["type", "use", "struct", "let", "enum"])),
    )
    assert struct_def(item).decl() == (
        "interface enum { type: number, use: number, struct: number, let: number, enum: number, }"
    )


def test_lifetimes():
    item = StructItem(
        "S", Fields.named(fld("s", STR)), generics=[Param("'a", GenericParam.LIFETIME)]
    )
    assert struct_def(item).decl() == "interface S { s: string, }"


def test_unsized():
    s = prim("str")
    item = StructItem(
        "S",
        Fields.named(
            fld("b", wrap("Box", s)),
            fld("c", wrap("Cow", s)),
            fld("r", wrap("Rc", s)),
            fld("a", wrap("Arc", s)),
        ),
    )
    assert struct_def(item).decl() == "interface S { b: string, c: string, r: string, a: string, }"


def test_generic_fields_newtype():
    item = StructItem("Newtype", Fields.unnamed(Field(vec(wrap("Cow", I32)))))
    assert struct_def(item).inline() == "Array<number>"
    nested = StructItem("Newtype", Fields.unnamed(Field(vec(vec(I32)))))
    assert struct_def(nested).inline() == "Array<Array<number>>"


def test_generic_fields_named():
    vs = vec(STRING)
    item = StructItem(
        "Struct",
        Fields.named(
            fld("a", wrap("Box", vs)),
            fld("b", TupleType((vs, vs))),
            fld("c", ArrayType(vs, 3)),
        ),
    )
    assert struct_def(item).inline() == (
        "{ a: Array<string>, b: [Array<string>, Array<string>], c: Array<Array<string>>, }"
    )


def test_generic_fields_tuple_nested():
    vv = vec(vec(I32))
    item = StructItem("Tuple", Fields.unnamed(Field(vv), Field(TupleType((vv, vv))), Field(ArrayType(vv, 3))))
    assert struct_def(item).inline() == (
        "[Array<Array<number>>, [Array<Array<number>>, Array<Array<number>>], "
        "Array<Array<Array<number>>>]"
    )


def test_type_override():
    unsupported = TypeRef("Unsupported2")
    item = StructItem(
        "Override",
        Fields.named(
            fld("a", I32),
            fld("b", I32, Attribute.ts('type = "0 | 1 | 2"')),
            fld("x", TypeRef("Instant"), Attribute.ts('type = "string"')),
            fld("y", TypeRef("Unsupported", (unsupported,)), Attribute.ts('type = "string"')),
            fld("z", TypeRef("Option", (unsupported,)), Attribute.ts('type = "string | null"')),
        ),
    )
    assert struct_def(item).inline() == (
        "{ a: number, b: 0 | 1 | 2, x: string, y: string, z: string | null, }"
    )


def test_type_override_newtype():
    new1 = StructItem("New1", Fields.unnamed(Field(TypeRef("U"), attrs=[Attribute.ts('type = "string"')])))
    new2 = StructItem(
        "New2", Fields.unnamed(Field(TypeRef("U"), attrs=[Attribute.ts('type = "string | null"')]))
    )
    assert struct_def(new1).inline() == "string"
    assert struct_def(new2).inline() == "string | null"


def test_ranges():
    inner = struct_def(StructItem("Inner", Fields.unnamed(Field(I32))))
    inner_ref = TypeRef("Inner", ts=inner)

    def rng(t, inclusive=False):
        kind = "RangeInclusive" if inclusive else "Range"
        return TypeRef(kind, (t,), ts=lambda: Range(binding_of(t), inclusive))

    item = StructItem(
        "RangeTest",
        Fields.named(
            fld("a", rng(prim("u32"))),
            fld("b", rng(STR)),
            fld("c", rng(rng(I32))),
            fld("d", rng(prim("u32"), inclusive=True)),
            fld("e", rng(inner_ref)),
        ),
    )
    derived = struct_def(item)
    assert derived.decl() == (
        "interface RangeTest { a: { start: number, end: number, }, b: { start: string, end: string, }, "
        "c: { start: { start: number, end: number, }, end: { start: number, end: number, }, }, "
        "d: { start: number, end: number, }, e: { start: Inner, end: Inner, }, }"
    )
    assert derived.dependencies() == [dependency_of(inner), dependency_of(inner)]


def test_chrono():
    def zoned(kind, zone):
        z = TypeRef(zone, ts=Dummy(zone))
        return TypeRef(kind, (z,), ts=Zoned(Dummy(zone), kind))

    item = StructItem(
        "Chrono",
        Fields.named(
            fld("date", TupleType((prim("NaiveDate"), zoned("Date", "Utc"), zoned("Date", "Local"), zoned("Date", "FixedOffset")))),
            fld("time", prim("NaiveTime")),
            fld("date_time", TupleType((prim("NaiveDateTime"), zoned("DateTime", "Utc"), zoned("DateTime", "Local"), zoned("DateTime", "FixedOffset")))),
            fld("duration", prim("Duration")),
            fld("month", prim("Month")),
            fld("weekday", prim("Weekday")),
        ),
    )
    assert struct_def(item).decl() == (
        "interface Chrono { date: [string, string, string, string], time: string, "
        "date_time: [string, string, string, string], duration: string, month: string, weekday: string, }"
    )


def test_indexmap():
    index_map = TypeRef(
        "IndexMap", (STRING, STRING), ts=lambda: Record(binding_of(STRING), binding_of(STRING))
    )
    item = StructItem(
        "Indexes", Fields.named(fld("map", index_map), fld("set", vec(STRING, "IndexSet")))
    )
    assert struct_def(item).decl() == (
        "interface Indexes { map: Record<string, string>, set: Array<string>, }"
    )