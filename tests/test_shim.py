from dataclasses import dataclass, field

from gosqlcgen.catalog import Catalog, GenerateRequest, Identifier
from gosqlcgen.shim import shim_go_type, shim_override


@dataclass
class _ParsedOverride:
    column: str = ""
    db_type: str = ""
    nullable: bool = False
    unsigned: bool = False
    go_import_path: str = ""
    go_package: str = ""
    go_type_name: str = ""
    go_basic_type: bool = False
    go_struct_tags: dict = field(default_factory=dict)


def _req(schema):
    return GenerateRequest(catalog=Catalog(default_schema=schema))


def test_two_part_column_uses_default_schema():
    shim = shim_override(_req("main"), _ParsedOverride(column="users.id"))
    assert shim.table == Identifier(schema="main", name="users")
    assert shim.column_name == "id"
    assert shim.column == "users.id"


def test_three_part_column():
    shim = shim_override(_req("main"), _ParsedOverride(column="app.users.email"))
    assert shim.table == Identifier(schema="app", name="users")
    assert shim.column_name == "email"


def test_four_part_column():
    shim = shim_override(_req("main"), _ParsedOverride(column="db.app.users.email"))
    assert shim.table == Identifier(catalog="db", schema="app", name="users")
    assert shim.column_name == "email"


def test_db_type_override_has_empty_table():
    shim = shim_override(None, _ParsedOverride(db_type="uuid", nullable=True, unsigned=True))
    assert shim.table == Identifier()
    assert shim.column_name == ""
    assert shim.db_type == "uuid"
    assert shim.nullable is True
    assert shim.unsigned is True


def test_malformed_column_leaves_table_empty():
    shim = shim_override(_req("main"), _ParsedOverride(column="a.b.c.d.e"))
    assert shim.table == Identifier()
    assert shim.column_name == ""


def test_go_type_fields_copied():
    tags = {"validate": "required"}
    o = _ParsedOverride(
        db_type="uuid",
        go_import_path="github.com/segmentio/ksuid",
        go_package="ksuid",
        go_type_name="ksuid.KSUID",
        go_basic_type=False,
        go_struct_tags=tags,
    )
    got = shim_go_type(o)
    assert got.import_path == "github.com/segmentio/ksuid"
    assert got.package == "ksuid"
    assert got.type_name == "ksuid.KSUID"
    assert got.basic_type is False
    assert got.struct_tags == tags


def test_override_embeds_go_type():
    o = _ParsedOverride(db_type="citext", go_type_name="string", go_basic_type=True)
    assert shim_override(None, o).go_type == shim_go_type(o)
    assert shim_override(None, o).go_type.basic_type is True