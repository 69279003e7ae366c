# tsbind

tsbind turns descriptions of data types into TypeScript declarations. You can
describe structs with named or positional fields, and enums with unit, tuple
or struct variants. The output is `interface` declarations for structs, union
`type` aliases for enums, and the `import type` lines that a generated file
needs when it refers to types exported to other files.

It needs Python 3.11 or later and has no third-party dependencies.

## What it produces

- A struct with named fields becomes `interface Name { a: number, b: string, }`.
- A newtype struct becomes an alias (`type NewType = string;`). A tuple struct
  becomes a tuple alias (`type Pair = [string, number];`).
- A unit struct becomes `null`. A struct with empty braces becomes
  `Record<string, never>`. A struct with empty parentheses becomes `never[]`.
- An enum becomes a union of its variants. The supported representations are:
  - externally tagged (the default): `"A" | { "B": number }`
  - internally tagged: `tag`
  - adjacently tagged: `tag` and `content`
  - untagged: `untagged`

  An enum with no variants is `never`.
- Generic type parameters are kept (`interface Generic<T> { value: T, }`),
  including defaults (`interface A<T = string> { t: T, }`). Lifetime and
  const parameters are dropped.

## Built-in mappings

The type classes are in `tsbind.types`:

- `Primitive` maps a type onto one TypeScript type. `Primitive.of(name)` looks
  up well-known type names:
  - `u8` to `u32`, `usize`, `isize`, `f32` and `f64` give `number`
  - 64-bit and 128-bit integers give `bigint`
  - `bool` gives `boolean`
  - `String`, `str`, `char`, paths, IP and socket addresses, dates and times,
    `Uuid`, `Url` and `BigDecimal` give `string`
  - `()` gives `null`

  An unknown name raises `TSError`.
- `Nullable(inner)`: `T | null`
- `Array(inner)`: `Array<T>`, used for lists, sets and fixed-size arrays
- `Record(key, value)`: `Record<K, V>`
- `Range(bound, inclusive=False)`: `{ start: T, end: T, }`
- `Tuple(*elems)`: `[A, B, ...]`
- `Wrapper(inner, kind)`: a box, pointer or cell, represented exactly as its
  inner type
- `Zoned(zone, kind)`: a date or date-time with a time zone, always `string`
- `Dummy(label)`: a type with an empty representation, such as a time-zone
  marker

All of these, and every derived type, follow the abstract base `TS`. It has
these methods:

- `name()`
- `name_with_type_args(args)`
- `inline()`
- `inline_flattened()`
- `decl()`
- `dependencies()`
- `transparent()`

A method that does not apply to a type raises `TSError`. For example, a tuple
has no declaration.

## Describing types

The building blocks are in `tsbind.syntax`:

- `StructItem` and `EnumItem`
- `Variant`
- `Fields`, built with `Fields.named(...)`, `Fields.unnamed(...)` or
  `Fields.unit()`
- `Field`
- `Param`, for generic parameters, with a `GenericParam` kind and an optional
  default
- Type references:
  - `TypeRef`
  - `ArrayType`
  - `TupleType`

A `TypeRef` carries its binding in `ts`. The binding can be:

- a `TS` instance, such as a `Primitive` or another derived type
- another type description
- a zero-argument callable that returns one of these, which is useful for
  recursive types

A `TypeRef` whose name is a generic parameter of the item is written as that
parameter.

Attributes are `Attribute` values in the `ts` or `serde` namespace, for
example `Attribute.ts('rename = "bb"')` or
`Attribute.serde('tag = "kind"')`. How parsing failures are handled depends on
the namespace:

- A `ts` attribute that cannot be parsed raises `DeriveError`.
- A `serde` attribute that cannot be parsed prints a warning to stderr and is
  ignored.

The attributes each item accepts:

| Item | `ts` attributes | `serde` attributes |
| --- | --- | --- |
| Structs | `export`, `export_to`, `rename`, `rename_all` | `rename`, `rename_all`, `tag`, `default`, `deny_unknown_fields` |
| Enums | `export`, `export_to`, `rename`, `rename_all` | `rename`, `rename_all`, `tag`, `content`, `untagged` |
| Fields | `type`, `rename`, `inline`, `skip`, `optional`, `flatten` | `rename`, `skip`, `skip_serializing`, `skip_deserializing`, `skip_serializing_if = "Option::is_none"`, `flatten`, `default` |
| Variants | `rename`, `rename_all`, `inline`, `skip` | `rename`, `rename_all`, `skip`, `skip_serializing`, `skip_deserializing` |

The classes in `tsbind.attrs` read these attributes: `StructAttr`, `EnumAttr`,
`VariantAttr` and `FieldAttr`. `EnumAttr.tagged()` returns the selected
representation as a `Tagged` value.

`rename_all` accepts `lowercase`, `UPPERCASE`, `camelCase`, `snake_case`,
`PascalCase`, `SCREAMING_SNAKE_CASE` and `kebab-case`. These are matched
ignoring case, `_` and `-`. See `Inflection` and `parse_inflection` in
`tsbind.inflection`.

Invalid combinations raise `DeriveError`. Examples:

- `untagged` with `tag`
- `flatten` with `rename`
- `optional` on a field that is not an `Option<T>`

Field names that are not valid TypeScript identifiers are quoted.

## Generating declarations

`tsbind.derive.derive(item)` takes a `StructItem` or `EnumItem` and returns a
`DerivedTS`:

```python
from tsbind.derive import derive
from tsbind.syntax import Attribute, Field, Fields, StructItem, TypeRef
from tsbind.types import Primitive

user = derive(StructItem(
    "User",
    Fields.named(
        Field(TypeRef("i32", ts=Primitive.of("i32")), "user_id"),
        Field(TypeRef("String", ts=Primitive.of("String")), "first_name"),
    ),
    attrs=[Attribute.ts('export_to = "out/"')],
))
user.decl()         # 'interface User { user_id: number, first_name: string, }'
user.export_path()  # 'out/User.ts'
```

The export path depends on `export_to`:

- Without `export_to`, it is `bindings/<Name>.ts`.
- An `export_to` value ending in `/` names a directory.

`dependencies()` returns the `Dependency` records of the referenced types that
have an export path. These records are used to build import lines.

## Writing files

`tsbind.export` writes declarations to disk.

- `export_type_to_string(ty)` returns the full file contents:
  1. a header note
  2. `import type` lines for the dependencies, de-duplicated by name, sorted,
     and leaving out the type itself
  3. a blank line
  4. `export ` followed by the declaration
- `export_type_to(ty, path)` writes that text to `path` and creates parent
  directories as needed.
- `export_type(ty, base_dir=None)` writes to the type's export path under
  `base_dir` and returns the path it wrote. If no `base_dir` is given, it uses
  the `TSBIND_MANIFEST_DIR` environment variable.

`import_path` and `diff_paths` compute the relative module paths used in
imports.

These errors can be raised, all of them `ExportError`:

- `CannotBeExported`: the type has no export path.
- `ManifestDirNotSet`: no base directory was given and `TSBIND_MANIFEST_DIR`
  is not set.
- A plain `ExportError`: a file could not be written.

## Configuration

`tsbind.config.Config` holds two settings:

- `ambient_declarations`, default `False`
- `out_dir`, default `"typescript"`

The settings are loaded as follows:

- `Config.try_load_from_dir(directory)` reads `ts.toml` from a directory.
  - It returns `None` if the directory has no such file.
  - If the file exists, it must set both settings, with the right types;
    otherwise `ValueError` is raised.
- `Config.load()` reads from the directory named by `TSBIND_MANIFEST_DIR`. If
  there is no file, it falls back to the defaults.
- `Config.get()` loads once and then returns the same instance.

## What it does not do

- It does not read source code. Types must be described in Python with the
  classes in `tsbind.syntax`.
- There is no command-line tool.
- Generated text is not reformatted or pretty-printed.
- Nothing else in the package uses the `ts.toml` settings. Export paths come
  only from each type's `export_to`.