"""Embedded model structs and checks on the fields of generated structs."""

from __future__ import annotations

from dataclasses import dataclass, field

from gosqlcgen.catalog import Identifier
from gosqlcgen.structs import Field, Struct


@dataclass
class GoEmbed:
    """A model struct embedded in a query's result row."""

    model_type: str = ""
    model_name: str = ""
    fields: list[Field] = field(default_factory=list)


def new_go_embed(
    embed: Identifier | None, structs: list[Struct], default_schema: str
) -> GoEmbed | None:
    """Find the model struct for an embedded table, or None if there is none."""
    if embed is None:
        return None

    embed_schema = embed.schema or default_schema
    for struct in structs:
        table = struct.table or Identifier()
        if (
            embed.catalog != table.catalog
            or embed.name != table.name
            or embed_schema != table.schema
        ):
            continue
        return GoEmbed(
            model_type=struct.name,
            model_name=struct.name,
            fields=list(struct.fields),
        )
    return None


def check_incompatible_field_types(fields: list[Field]) -> None:
    """Raise ValueError if two fields share a name but not a type."""
    field_types: dict[str, str] = {}
    for f in fields:
        known = field_types.setdefault(f.name, f.type)
        if known != f.type:
            raise ValueError(
                f"named param {f.name} has incompatible types: {f.type}, {known}"
            )