import json

import pytest

from gosqlcgen.drivers import ConfigError
from gosqlcgen.go_type import (
    GoType,
    generate_package_id,
    go_type_from_json,
    go_type_from_value,
    parse_struct_tag,
)


def test_basic_go_type_from_spec():
    o = GoType(spec="string").parse()
    assert o.basic_type is True
    assert o.type_name == "string"


def test_qualified_type_from_spec():
    o = GoType(spec="github.com/segmentio/ksuid.KSUID").parse()
    assert o.import_path == "github.com/segmentio/ksuid"
    assert o.type_name == "ksuid.KSUID"
    assert o.basic_type is False


def test_spec_with_versioned_import():
    o = GoType(spec="github.com/jackc/pgx/v5/pgtype.Text").parse()
    assert o.import_path == "github.com/jackc/pgx/v5/pgtype"
    assert o.type_name == "pgtype.Text"


def test_spec_pointer_type():
    o = GoType(spec="*github.com/segmentio/ksuid.KSUID").parse()
    assert o.type_name == "*ksuid.KSUID"
    assert o.import_path == "github.com/segmentio/ksuid"


def test_spec_time_time():
    o = GoType(spec="time.Time").parse()
    assert o.import_path == "time"
    assert o.type_name == "time.Time"
    assert o.basic_type is False


def test_spec_strips_go_prefix():
    o = GoType(spec="github.com/example/go-thing.Value").parse()
    assert o.type_name == "thing.Value"
    assert o.import_path == "github.com/example/go-thing"


def test_spec_invalid_basic_type():
    with pytest.raises(ConfigError):
        GoType(spec="NotAGoBasicType").parse()


@pytest.mark.parametrize("spec", ["Pointer", "untyped rune"])
def test_spec_not_basic_message(spec):
    with pytest.raises(ConfigError) as info:
        GoType(spec=spec).parse()
    assert str(info.value) == (
        f'Package override `go_type` specifier "{spec}" is not a Go basic type e.g. \'string\''
    )


def test_spec_slash_no_dot_returns_error():
    with pytest.raises(ConfigError):
        GoType(spec="gopkg/notype").parse()


def test_struct_fields_path_and_name():
    o = GoType(path="time", name="Time").parse()
    assert o.type_name == "time.Time"
    assert o.import_path == "time"


def test_struct_fields_pointer():
    assert GoType(path="time", name="Time", pointer=True).parse().type_name == "*time.Time"


def test_struct_fields_slice():
    assert GoType(path="time", name="Time", slice=True).parse().type_name == "[]time.Time"


def test_struct_fields_package_without_path_errors():
    with pytest.raises(ConfigError):
        GoType(package="mypkg", name="MyType").parse()


def test_struct_fields_explicit_package_alias():
    o = GoType(path="github.com/foo/bar", package="baz", name="MyType").parse()
    assert o.package == "baz"
    assert o.type_name == "baz.MyType"


def test_struct_fields_basic_type_no_path():
    o = GoType(name="string").parse()
    assert o.basic_type is True
    assert o.type_name == "string"


def test_to_json_spec():
    assert GoType(spec="string").to_json() == '"string"'


def test_to_json_struct_is_object():
    out = json.loads(GoType(path="time", name="Time").to_json())
    assert out["import"] == "time"
    assert out["type"] == "Time"


def test_to_json_round_trip():
    gt = GoType(path="time", name="Time", pointer=True)
    assert go_type_from_json(gt.to_json()) == gt


def test_from_json_string():
    assert go_type_from_json('"string"').spec == "string"


def test_from_json_object():
    gt = go_type_from_json('{"import":"time","type":"Time"}')
    assert gt.path == "time"
    assert gt.name == "Time"


def test_from_json_invalid():
    with pytest.raises(ConfigError):
        go_type_from_json("{invalid}")


def test_from_value_string():
    assert go_type_from_value("time.Time").spec == "time.Time"


def test_from_value_empty_mapping():
    assert go_type_from_value({}) == GoType()


def test_from_value_wrong_field_type():
    with pytest.raises(ConfigError):
        go_type_from_value({"pointer": "yes"})


@pytest.mark.parametrize(
    "path, pkg, alias",
    [
        ("github.com/segmentio/ksuid", "ksuid", False),
        ("github.com/jackc/pgx/v5", "pgx", True),
        ("github.com/jackc/pgx/v4", "pgx", True),
        ("time", "time", False),
        ("github.com/go-sql-driver/mysql", "mysql", False),
    ],
)
def test_generate_package_id(path, pkg, alias):
    assert generate_package_id(path) == (pkg, alias)


def test_struct_tag_empty():
    assert parse_struct_tag("") == {}


def test_struct_tag_single():
    assert parse_struct_tag('validate:"required"') == {"validate": "required"}


def test_struct_tag_multiple():
    m = parse_struct_tag('validate:"required" form:"name"')
    assert m == {"validate": "required", "form": "name"}


def test_struct_tag_with_options():
    assert parse_struct_tag('a:"b" x:"y,z"') == {"a": "b", "x": "y,z"}


def test_struct_tag_invalid():
    with pytest.raises(ConfigError):
        parse_struct_tag("notvalid")


def test_struct_tag_unterminated_value():
    with pytest.raises(ConfigError):
        parse_struct_tag('a:"b')