"""Description of a database catalog and its queries, as handed to the generator."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Identifier:
    """A possibly qualified name: catalog.schema.name."""

    catalog: str = ""
    schema: str = ""
    name: str = ""


@dataclass
class Column:
    """A table column, a query result column or a query parameter's column."""

    name: str = ""
    not_null: bool = False
    is_array: bool = False
    comment: str = ""
    length: int = 0
    is_named_param: bool = False
    is_func_call: bool = False
    scope: str = ""
    table: Identifier | None = None
    table_alias: str = ""
    type: Identifier | None = None
    is_sqlc_slice: bool = False
    embed_table: Identifier | None = None
    original_name: str = ""
    unsigned: bool = False
    array_dims: int = 0


@dataclass
class Parameter:
    """A numbered query parameter."""

    number: int = 0
    column: Column = field(default_factory=Column)


@dataclass
class Query:
    """A named SQL query with its command, parameters and result columns."""

    text: str = ""
    name: str = ""
    cmd: str = ""
    columns: list[Column] = field(default_factory=list)
    params: list[Parameter] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    filename: str = ""
    insert_into_table: Identifier | None = None


@dataclass
class Enum:
    """A database enum type."""

    name: str = ""
    vals: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class CompositeType:
    """A database composite type."""

    name: str = ""
    comment: str = ""


@dataclass
class Table:
    """A table and its columns."""

    rel: Identifier = field(default_factory=Identifier)
    columns: list[Column] = field(default_factory=list)
    comment: str = ""


@dataclass
class Schema:
    """A schema holding tables, enums and composite types."""

    name: str = ""
    comment: str = ""
    tables: list[Table] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    composite_types: list[CompositeType] = field(default_factory=list)


@dataclass
class Catalog:
    """All schemas known to the generator."""

    comment: str = ""
    default_schema: str = ""
    name: str = ""
    schemas: list[Schema] = field(default_factory=list)


@dataclass
class Settings:
    """Generator settings; the engine is the database dialect."""

    engine: str = ""


@dataclass
class GenerateRequest:
    """Everything the generator needs for one run."""

    settings: Settings | None = None
    catalog: Catalog | None = None
    queries: list[Query] = field(default_factory=list)
    sqlc_version: str = ""
    plugin_options: bytes = b""
    global_options: bytes = b""


def parse_identifier_string(name: str) -> Identifier:
    """Split a dotted name into an identifier of one to three parts."""
    parts = name.split(".")
    if len(parts) == 1:
        return Identifier(name=parts[0])
    if len(parts) == 2:
        return Identifier(schema=parts[0], name=parts[1])
    if len(parts) == 3:
        return Identifier(catalog=parts[0], schema=parts[1], name=parts[2])
    raise ValueError(f"invalid name: {name}")


def data_type(identifier: Identifier | None) -> str:
    """Return the type name of an identifier, prefixed by its schema if set."""
    if identifier is None:
        return ""
    if identifier.schema:
        return f"{identifier.schema}.{identifier.name}"
    return identifier.name