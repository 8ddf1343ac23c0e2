"""Query values and queries as seen by the code templates."""

from __future__ import annotations

from dataclasses import dataclass, field

from gosqlcgen.catalog import Column, Identifier
from gosqlcgen.drivers import SQLDriver
from gosqlcgen.reserved import escape
from gosqlcgen.structs import Field, Struct

CMD_ONE = ":one"
CMD_MANY = ":many"
CMD_BATCH_MANY = ":batchmany"
CMD_BATCH_ONE = ":batchone"

_SCANNED_CMDS = frozenset({CMD_ONE, CMD_MANY, CMD_BATCH_MANY, CMD_BATCH_ONE})

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _go_quote(text: str) -> str:
    """Quote a string as a Go double-quoted literal."""
    parts = []
    for ch in text:
        if ch in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"\\x{ord(ch):02x}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _is_pgx(driver: SQLDriver | None) -> bool:
    return driver is not None and driver.is_pgx()


def _needs_array_wrap(type_name: str, driver: SQLDriver | None) -> bool:
    return type_name.startswith("[]") and type_name != "[]byte" and not _is_pgx(driver)


def _join_args(items: list[str]) -> str:
    if len(items) <= 3:
        return ",".join(items)
    return "\n" + ",\n".join([*items, ""])


@dataclass
class Argument:
    """A method argument: a name and a Go type."""

    name: str = ""
    type: str = ""


@dataclass
class QueryValue:
    """A query's argument or result: a single value or a struct of fields."""

    emit: bool = False
    emit_pointer: bool = False
    name: str = ""
    db_name: str = ""
    struct: Struct | None = None
    typ: str = ""
    sql_driver: SQLDriver | None = None
    column: Column | None = None

    def emit_struct(self) -> bool:
        return self.emit

    def is_struct(self) -> bool:
        return self.struct is not None

    def is_pointer(self) -> bool:
        return self.emit_pointer and self.struct is not None

    def is_empty(self) -> bool:
        return not self.typ and not self.name and self.struct is None

    def pair(self) -> str:
        """Return the arguments as 'name type' items joined by commas."""
        return ",".join(f"{arg.name} {arg.type}" for arg in self.pairs())

    def pairs(self) -> list[Argument]:
        """Return the method arguments this value expands to."""
        if self.is_empty():
            return []
        if not self.emit_struct() and self.struct is not None:
            return [
                Argument(name=escape(_lower_first(f.name)), type=f.type)
                for f in self.struct.fields
            ]
        return [Argument(name=escape(self.name), type=self.define_type())]

    def slice_pair(self) -> str:
        if self.is_empty():
            return ""
        return f"{self.name} []{self.define_type()}"

    def type(self) -> str:
        """Return the Go type; raises ValueError if the value has none."""
        if self.typ:
            return self.typ
        if self.struct is not None:
            return self.struct.name
        raise ValueError(f"no type for QueryValue: {self.name}")

    def define_type(self) -> str:
        type_name = self.type()
        return "*" + type_name if self.is_pointer() else type_name

    def return_name(self) -> str:
        if self.is_pointer():
            return "&" + escape(self.name)
        return escape(self.name)

    def unique_fields(self) -> list[Field]:
        """Return the struct's fields, dropping later fields with a repeated name."""
        seen: set[str] = set()
        fields = []
        for f in self.struct.fields if self.struct is not None else []:
            if f.name in seen:
                continue
            seen.add(f.name)
            fields.append(f)
        return fields

    def params(self) -> str:
        """Return the expressions passed to the database call."""
        if self.is_empty():
            return ""
        out: list[str] = []
        if self.struct is None:
            is_slice = self.column is not None and self.column.is_sqlc_slice
            if not is_slice and _needs_array_wrap(self.typ, self.sql_driver):
                out.append(f"pq.Array({escape(self.name)})")
            else:
                out.append(escape(self.name))
        else:
            for f in self.struct.fields:
                var = escape(self.variable_for_field(f))
                if not f.has_sqlc_slice() and _needs_array_wrap(f.type, self.sql_driver):
                    out.append(f"pq.Array({var})")
                else:
                    out.append(var)
        return _join_args(out)

    def column_names(self) -> list[str]:
        if self.struct is None:
            return [self.db_name]
        return [f.db_name for f in self.struct.fields]

    def column_names_as_go_slice(self) -> str:
        if self.struct is None:
            return f"[]string{{{_go_quote(self.db_name)}}}"
        names = [
            _go_quote(f.column.original_name)
            if f.column is not None and f.column.original_name
            else _go_quote(f.db_name)
            for f in self.struct.fields
        ]
        return "[]string{" + ", ".join(names) + "}"

    def has_sqlc_slices(self) -> bool:
        """Return True if the call arguments must be built as well as the SQL."""
        if self.struct is None:
            return self.column is not None and self.column.is_sqlc_slice
        return any(f.has_sqlc_slice() for f in self.struct.fields)

    def scan(self) -> str:
        """Return the destinations passed to Scan."""
        out: list[str] = []

        def dest(path: str, type_name: str) -> str:
            if _needs_array_wrap(type_name, self.sql_driver):
                return f"pq.Array(&{path})"
            return "&" + path

        if self.struct is None:
            out.append(dest(self.name, self.typ))
        else:
            for f in self.struct.fields:
                if f.embed_fields:
                    out.extend(
                        dest(f"{self.name}.{f.name}.{embed.name}", embed.type)
                        for embed in f.embed_fields
                    )
                    continue
                out.append(dest(f"{self.name}.{f.name}", f.type))
        return _join_args(out)

    def copy_from_mysql_fields(self) -> list[Field]:
        """Return the fields for a MySQL bulk copy, ignoring the emit flag."""
        if self.struct is not None:
            return self.struct.fields
        return [Field(name=self.name, db_name=self.db_name, type=self.typ)]

    def variable_for_field(self, field: Field) -> str:
        if not self.is_struct():
            return self.name
        if not self.emit_struct():
            return _lower_first(field.name)
        return f"{self.name}.{field.name}"


@dataclass
class GoQuery:
    """A query as a method and constant of the generated code."""

    cmd: str = ""
    comments: list[str] = field(default_factory=list)
    method_name: str = ""
    field_name: str = ""
    constant_name: str = ""
    sql: str = ""
    source_name: str = ""
    ret: QueryValue = field(default_factory=QueryValue)
    arg: QueryValue = field(default_factory=QueryValue)
    table: Identifier | None = None
    has_dyn_filter: bool = False
    dyn_filter_args: str = ""
    dyn_query_var: str = ""

    def is_select(self) -> bool:
        upper = self.sql.strip().upper()
        return upper.startswith("SELECT") or upper.startswith("WITH")

    def has_ret_type(self) -> bool:
        return self.cmd in _SCANNED_CMDS and not self.ret.is_empty()

    def _table_parts(self) -> list[str]:
        table = self.table or Identifier()
        return [p for p in (table.catalog, table.schema, table.name) if p]

    def table_identifier_as_go_slice(self) -> str:
        return "[]string{" + ", ".join(_go_quote(p) for p in self._table_parts()) + "}"

    def table_identifier_for_mysql(self) -> str:
        return ".".join(f"`{p}`" for p in self._table_parts())