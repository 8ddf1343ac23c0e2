# gosqlcgen

Building blocks for generating Go database access code from a SQL catalog
and its queries. Given a description of schemas, tables, enums and annotated
queries, it works out Go types, struct and argument names, and the parameter,
scan and column lists that generated code needs.

## What it covers

- **Catalog model** (`gosqlcgen.catalog`): the dataclasses `Identifier`,
  `Column`, `Parameter`, `Query`, `Enum`, `CompositeType`, `Table`,
  `Schema`, `Catalog`, `Settings` and `GenerateRequest`, plus
  `parse_identifier_string` (splits `catalog.schema.name`, raising
  `ValueError` for more than three parts) and `data_type`.
- **Drivers** (`gosqlcgen.drivers`): the `SQLDriver` enumeration with
  `is_pgx()`, `is_go_sql_driver_mysql()` and `package()`, and the functions
  `validate_package`, `validate_driver` and `parse_driver`.
- **Options** (`gosqlcgen.options`): `Options`, `TracingOptions` and
  `GlobalOptions`. `parse(req)` reads the JSON plugin and global options of a
  request, takes the package name from the last element of `out` when
  `package` is not given, fills in defaults (a query parameter limit of 1,
  the initialism `id`), parses every override, and puts global overrides
  before the plugin's own and merges global renames. `validate_opts` rejects
  option combinations that cannot be used together and a negative query
  parameter limit.
- **Type overrides** (`gosqlcgen.override`, `gosqlcgen.go_type`,
  `gosqlcgen.shim`): `Override` with `parse`, `matches` and
  `matches_column`; `override_from_dict`; glob-like column patterns through
  `compile_pattern` and `Pattern.match`; `GoType` with `parse` and
  `to_json`, `go_type_from_value`, `go_type_from_json`,
  `generate_package_id` and `parse_struct_tag`; the flattened views
  `ShimOverride` and `ShimGoType`.
- **SQLite type mapping** (`gosqlcgen.sqlite_type`): `sqlite_type` turns a
  column into a Go type such as `int64`, `sql.NullString`, `*time.Time` or
  `json.RawMessage`.
- **Naming** (`gosqlcgen.structs`, `gosqlcgen.naming`,
  `gosqlcgen.reserved`): `struct_name`, `arg_name`, `column_name`,
  `param_name`, `put_out_columns`, `escape` and `is_reserved`.
- **Query model** (`gosqlcgen.query`, `gosqlcgen.result`): `Field`,
  `Struct`, `Argument`, `QueryValue` and `GoQuery`, which give argument
  pairs, call parameters, scan targets and column lists; embedding of model
  structs through `new_go_embed` and `GoEmbed`; and
  `check_incompatible_field_types`, which raises `ValueError` when two fields
  share a name but not a type.

## Installation

```
pip install .
```

## Example

```python
from gosqlcgen.catalog import Catalog, Column, GenerateRequest, Identifier
from gosqlcgen.options import Options
from gosqlcgen.reserved import escape
from gosqlcgen.sqlite_type import sqlite_type
from gosqlcgen.structs import struct_name

req = GenerateRequest(catalog=Catalog(default_schema="main"))

col = Column(name="bio", type=Identifier(name="text"), not_null=False)
print(sqlite_type(req, Options(), col))                              # sql.NullString
print(sqlite_type(req, Options(emit_pointers_for_null_types=True), col))  # *string

print(struct_name("user_id", Options(initialisms_map={"id"})))       # UserID
print(escape("select"))                                              # select_
```

## Errors

Configuration problems such as an unknown SQL package or driver, a malformed
override, column pattern or struct tag, or options that cannot be combined
raise `ConfigError` (a subclass of `ValueError`) with a message that names
the problem.

## What it does not do

- It does not write Go source files and has no command to run: it provides
  the types, names and query shapes that a generator's templates would use.
- It maps SQLite column types only; there is no mapping of PostgreSQL
  column types to Go types.
- It does not build model structs, enums or query descriptions from a whole
  request in one step; the pieces above are called individually.

## Running the tests

```
pip install ".[test]"
pytest
```