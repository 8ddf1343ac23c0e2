"""Type overrides: rules that replace the generated Go type of a column."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Any

from gosqlcgen.catalog import Column, GenerateRequest, Identifier, data_type
from gosqlcgen.drivers import ConfigError
from gosqlcgen.go_type import GoType, go_type_from_value, parse_struct_tag
from gosqlcgen.shim import ShimOverride, shim_override

_REGEX_SPECIALS = frozenset(".()+|^$[]{}")


@dataclass(frozen=True)
class Pattern:
    """A compiled glob-like pattern where '*' matches any run and '?' one character."""

    source: str
    regex: re.Pattern[str]

    def match(self, text: str) -> bool:
        """Return True if the whole text matches the pattern."""
        return self.regex.fullmatch(text) is not None


def compile_pattern(expr: str) -> Pattern:
    """Compile a pattern; a backslash escapes '*', '?' or itself."""
    parts: list[str] = []
    escaped = False
    for ch in expr:
        if escaped:
            escaped = False
            if ch not in "*?\\":
                raise ConfigError(f"Invalid escaped character '{ch}'")
            parts.append("\\" + ch)
        elif ch == "\\":
            escaped = True
        elif ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        elif ch in _REGEX_SPECIALS:
            parts.append("\\" + ch)
        else:
            parts.append(re.escape(ch) if not (ch.isalnum() or ch == "_") else ch)
    if escaped:
        raise ConfigError("Unterminated escape at end of pattern")
    try:
        regex = re.compile("".join(parts))
    except re.error as exc:
        raise ConfigError(str(exc)) from exc
    return Pattern(source=expr, regex=regex)


@dataclass
class Override:
    """A rule mapping a database type or a column to a chosen Go type."""

    go_type: GoType = field(default_factory=GoType)
    go_struct_tag: str = ""
    db_type: str = ""
    deprecated_postgres_type: str = ""
    engine: str = ""
    nullable: bool = False
    unsigned: bool = False
    deprecated_null: bool = False
    column: str = ""

    column_name: Pattern | None = None
    table_catalog: Pattern | None = None
    table_schema: Pattern | None = None
    table_rel: Pattern | None = None
    go_import_path: str = ""
    go_package: str = ""
    go_type_name: str = ""
    go_basic_type: bool = False
    go_struct_tags: dict[str, str] = field(default_factory=dict)
    shim: ShimOverride | None = None

    def matches(self, identifier: Identifier | None, default_schema: str) -> bool:
        """Return True if the override applies to the given table."""
        if identifier is None:
            return False
        schema = identifier.schema or default_schema
        if self.table_catalog is not None and not self.table_catalog.match(identifier.catalog):
            return False
        if self.table_schema is None and schema:
            return False
        if self.table_schema is not None and not self.table_schema.match(schema):
            return False
        if self.table_rel is None and identifier.name:
            return False
        if self.table_rel is not None and not self.table_rel.match(identifier.name):
            return False
        return True

    def matches_column(self, col: Column) -> bool:
        """Return True if the override's database type applies to the column."""
        column_type = data_type(col.type)
        not_null = col.not_null or col.is_array
        return (
            bool(self.db_type)
            and self.db_type == column_type
            and self.nullable != not_null
            and self.unsigned == col.unsigned
        )

    def parse(self, req: GenerateRequest | None) -> None:
        """Validate the override and fill in its resolved fields."""
        if self.deprecated_postgres_type:
            print(
                'WARNING: "postgres_type" is deprecated. '
                'Instead, use "db_type" to specify a type override.',
                file=sys.stderr,
            )
            if self.db_type:
                raise ConfigError(
                    'Type override configurations cannot have "db_type" and '
                    '"postres_type" together. Use "db_type" alone'
                )
            self.db_type = self.deprecated_postgres_type

        if self.deprecated_null:
            print(
                'WARNING: "null" is deprecated. Instead, use the "nullable" field.',
                file=sys.stderr,
            )
            self.nullable = True

        schema = "public"
        if req is not None and req.catalog is not None:
            schema = req.catalog.default_schema

        if self.column and self.db_type:
            raise ConfigError(
                f"Override specifying both `column` ({_quote(self.column)}) and "
                f"`db_type` ({_quote(self.db_type)}) is not valid."
            )
        if not self.column and not self.db_type:
            raise ConfigError("Override must specify one of either `column` or `db_type`")

        if self.column:
            self._parse_column(schema)

        parsed = self.go_type.parse()
        self.go_import_path = parsed.import_path
        self.go_package = parsed.package
        self.go_type_name = parsed.type_name
        self.go_basic_type = parsed.basic_type

        self.go_struct_tags = parse_struct_tag(self.go_struct_tag)
        self.shim = shim_override(req, self)

    def _parse_column(self, default_schema: str) -> None:
        parts = self.column.split(".")
        if len(parts) == 2:
            table, column = parts
            self.column_name = compile_pattern(column)
            self.table_rel = compile_pattern(table)
            self.table_schema = compile_pattern(default_schema)
        elif len(parts) == 3:
            schema, table, column = parts
            self.column_name = compile_pattern(column)
            self.table_rel = compile_pattern(table)
            self.table_schema = compile_pattern(schema)
        elif len(parts) == 4:
            catalog, schema, table, column = parts
            self.column_name = compile_pattern(column)
            self.table_rel = compile_pattern(table)
            self.table_schema = compile_pattern(schema)
            self.table_catalog = compile_pattern(catalog)
        else:
            raise ConfigError(
                f"Override `column` specifier {_quote(self.column)} is not the proper "
                "format, expected '[catalog.][schema.]tablename.colname'"
            )


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


_FIELDS: tuple[tuple[str, str, type], ...] = (
    ("go_struct_tag", "go_struct_tag", str),
    ("db_type", "db_type", str),
    ("postgres_type", "deprecated_postgres_type", str),
    ("engine", "engine", str),
    ("nullable", "nullable", bool),
    ("unsigned", "unsigned", bool),
    ("null", "deprecated_null", bool),
    ("column", "column", str),
)


def override_from_dict(data: Any) -> Override:
    """Build an unparsed Override from a decoded configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError(f"override must be an object, got {type(data).__name__}")
    override = Override()
    if data.get("go_type") is not None:
        override.go_type = go_type_from_value(data["go_type"])
    for key, attr, kind in _FIELDS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, kind):
            raise ConfigError(f"override field {key!r} must be of type {kind.__name__}")
        setattr(override, attr, value)
    return override