import pytest

from gosqlcgen.catalog import Identifier, data_type, parse_identifier_string


@pytest.mark.parametrize(
    "text, catalog, schema, name",
    [
        ("users", "", "", "users"),
        ("public.users", "", "public", "users"),
        ("mydb.public.users", "mydb", "public", "users"),
    ],
)
def test_parse_identifier_string(text, catalog, schema, name):
    got = parse_identifier_string(text)
    assert got.catalog == catalog
    assert got.schema == schema
    assert got.name == name


def test_parse_identifier_string_too_many_parts():
    with pytest.raises(ValueError):
        parse_identifier_string("a.b.c.d")


def test_data_type_with_schema():
    assert data_type(Identifier(schema="pg_catalog", name="int4")) == "pg_catalog.int4"


def test_data_type_without_schema():
    assert data_type(Identifier(name="text")) == "text"


def test_data_type_ignores_catalog():
    assert data_type(Identifier(catalog="db", name="uuid")) == "uuid"


def test_data_type_missing_identifier():
    assert data_type(None) == ""


def test_parse_then_data_type_round_trip():
    assert data_type(parse_identifier_string("myschema.role")) == "myschema.role"