import pytest

from tsbind.attrs import EnumAttr, FieldAttr, StructAttr, Tagged, TaggedKind, VariantAttr
from tsbind.inflection import Inflection
from tsbind.syntax import Attribute, DeriveError


def test_enum_externally_tagged_by_default():
    assert EnumAttr.from_attrs([]).tagged() == Tagged(TaggedKind.EXTERNALLY)


def test_enum_internally_tagged():
    attr = EnumAttr.from_attrs([Attribute.serde('tag = "kind"')])
    assert attr.tagged() == Tagged(TaggedKind.INTERNALLY, tag="kind")


def test_enum_adjacently_tagged():
    attr = EnumAttr.from_attrs([Attribute.serde('tag = "kind", content = "data"')])
    assert attr.tagged() == Tagged(TaggedKind.ADJACENTLY, tag="kind", content="data")


def test_enum_untagged():
    attr = EnumAttr.from_attrs([Attribute.serde("untagged")])
    assert attr.tagged() == Tagged(TaggedKind.UNTAGGED)


@pytest.mark.parametrize(
    "attr, message",
    [
        (EnumAttr(untagged=True, tag="t"), "untagged cannot be used with tag"),
        (EnumAttr(untagged=True, content="c"), "untagged cannot be used with content"),
        (EnumAttr(untagged=True, tag="t", content="c"), "untagged cannot be used with content"),
        (EnumAttr(content="c"), "content cannot be used without tag"),
    ],
)
def test_enum_tagging_conflicts(attr, message):
    with pytest.raises(DeriveError, match=message):
        attr.tagged()


def test_enum_ts_options():
    attrs = [Attribute.ts('rename_all = "lowercase"'), Attribute.ts('rename = "SimpleEnum"')]
    attr = EnumAttr.from_attrs(attrs)
    assert attr.rename == "SimpleEnum"
    assert attr.rename_all is Inflection.LOWER
    assert not attr.export


def test_enum_ts_wins_over_serde():
    attrs = [Attribute.serde('rename = "FromSerde"'), Attribute.ts('rename = "FromTs"')]
    assert EnumAttr.from_attrs(attrs).rename == "FromTs"


def test_enum_first_ts_attribute_wins():
    attrs = [Attribute.ts('export_to = "first/"'), Attribute.ts('export, export_to = "second/"')]
    attr = EnumAttr.from_attrs(attrs)
    assert attr.export_to == "first/"
    assert attr.export


def test_enum_ts_rejects_serde_only_key():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        EnumAttr.from_attrs([Attribute.ts('tag = "kind"')])


def test_enum_ts_bad_inflection():
    with pytest.raises(DeriveError, match="invalid inflection"):
        EnumAttr.from_attrs([Attribute.ts('rename_all = "nope"')])


def test_enum_serde_unknown_is_ignored(capsys):
    attr = EnumAttr.from_attrs([Attribute.serde("deny_unknown_fields")])
    assert attr == EnumAttr()
    assert "failed to parse serde attribute" in capsys.readouterr().err


def test_enum_serde_rename_all():
    attr = EnumAttr.from_attrs([Attribute.serde('rename_all = "SCREAMING_SNAKE_CASE"')])
    assert attr.rename_all is Inflection.SCREAMING_SNAKE


def test_field_ts_options():
    attr = FieldAttr.from_attrs([Attribute.ts('type = "0 | 1 | 2", inline, optional')])
    assert attr == FieldAttr(type_override="0 | 1 | 2", inline=True, optional=True)


@pytest.mark.parametrize("key", ["skip", "skip_serializing", "skip_deserializing"])
def test_field_serde_skips(key):
    assert FieldAttr.from_attrs([Attribute.serde(key)]).skip


def test_field_serde_skip_serializing_if():
    attr = FieldAttr.from_attrs(
        [Attribute.serde('default, skip_serializing_if = "Option::is_none"')]
    )
    assert attr.optional


def test_field_serde_skip_serializing_if_other_predicate():
    attr = FieldAttr.from_attrs([Attribute.serde('skip_serializing_if = "Vec::is_empty"')])
    assert not attr.optional


def test_field_serde_default_with_path(capsys):
    attr = FieldAttr.from_attrs([Attribute.serde('default = "make", rename = "a/b"')])
    assert attr.rename == "a/b"
    assert capsys.readouterr().err == ""


def test_field_flag_with_value_fails():
    with pytest.raises(DeriveError):
        FieldAttr.from_attrs([Attribute.ts('inline = "yes"')])


def test_field_missing_value_fails():
    with pytest.raises(DeriveError):
        FieldAttr.from_attrs([Attribute.ts("rename")])


def test_field_flags_merge_with_or():
    attr = FieldAttr.from_attrs([Attribute.ts("flatten"), Attribute.serde("skip")])
    assert attr.flatten and attr.skip


def test_struct_serde_tag():
    attr = StructAttr.from_attrs([Attribute.serde('tag = "type"')])
    assert attr.tag == "type"


def test_struct_ts_tag_rejected():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        StructAttr.from_attrs([Attribute.ts('tag = "type"')])


def test_struct_serde_accepts_housekeeping(capsys):
    attr = StructAttr.from_attrs([Attribute.serde("deny_unknown_fields, default")])
    assert attr == StructAttr()
    assert capsys.readouterr().err == ""


def test_struct_from_variant_keeps_only_renaming():
    variant = VariantAttr(rename="CamelMessage", rename_all=Inflection.CAMEL, inline=True, skip=True)
    assert StructAttr.from_variant(variant) == StructAttr(
        rename="CamelMessage", rename_all=Inflection.CAMEL
    )


def test_struct_ts_options():
    attr = StructAttr.from_attrs([Attribute.ts('export, export_to = "bindings/UserRole.ts"')])
    assert attr.export
    assert attr.export_to == "bindings/UserRole.ts"


def test_variant_serde_rename_all():
    attr = VariantAttr.from_attrs([Attribute.serde('rename_all = "camelCase"')])
    assert attr.rename_all is Inflection.CAMEL


def test_variant_ts_options():
    attr = VariantAttr.from_attrs([Attribute.ts('rename = "administrator", inline')])
    assert attr == VariantAttr(rename="administrator", inline=True)


def test_variant_serde_inline_ignored(capsys):
    attr = VariantAttr.from_attrs([Attribute.serde("inline")])
    assert not attr.inline
    assert "failed to parse serde attribute" in capsys.readouterr().err


def test_variant_ts_error_propagates():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        VariantAttr.from_attrs([Attribute.ts("flatten")])