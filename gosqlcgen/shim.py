"""Flattened views of a parsed type override."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gosqlcgen.catalog import GenerateRequest, Identifier


@dataclass
class ShimGoType:
    """The resolved Go type of an override."""

    import_path: str = ""
    package: str = ""
    type_name: str = ""
    basic_type: bool = False
    struct_tags: dict[str, str] = field(default_factory=dict)


@dataclass
class ShimOverride:
    """A type override with its column specifier split into table and column."""

    db_type: str = ""
    nullable: bool = False
    column: str = ""
    table: Identifier = field(default_factory=Identifier)
    column_name: str = ""
    unsigned: bool = False
    go_type: ShimGoType = field(default_factory=ShimGoType)


def _default_schema(req: GenerateRequest | None) -> str:
    if req is not None and req.catalog is not None:
        return req.catalog.default_schema
    return "public"


def shim_override(req: GenerateRequest | None, override: Any) -> ShimOverride:
    """Build the flattened view of an already parsed override."""
    column = ""
    table = Identifier()
    if override.column:
        parts = override.column.split(".")
        if len(parts) == 2:
            table = Identifier(schema=_default_schema(req), name=parts[0])
            column = parts[1]
        elif len(parts) == 3:
            table = Identifier(schema=parts[0], name=parts[1])
            column = parts[2]
        elif len(parts) == 4:
            table = Identifier(catalog=parts[0], schema=parts[1], name=parts[2])
            column = parts[3]
    return ShimOverride(
        db_type=override.db_type,
        nullable=override.nullable,
        unsigned=override.unsigned,
        column=override.column,
        column_name=column,
        table=table,
        go_type=shim_go_type(override),
    )


def shim_go_type(override: Any) -> ShimGoType:
    """Collect the resolved Go type fields of an override."""
    tags = override.go_struct_tags
    return ShimGoType(
        import_path=override.go_import_path,
        package=override.go_package,
        type_name=override.go_type_name,
        basic_type=override.go_basic_type,
        struct_tags=tags if tags is not None else {},
    )