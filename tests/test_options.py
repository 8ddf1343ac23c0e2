import json

import pytest

from gosqlcgen.catalog import GenerateRequest
from gosqlcgen.drivers import ConfigError
from gosqlcgen.options import Options, parse, validate_opts


def make_req(plugin_opts):
    return GenerateRequest(plugin_options=json.dumps(plugin_opts).encode())


def test_default_values():
    opts = parse(make_req({"package": "db"}))
    assert opts.package == "db"
    assert opts.query_parameter_limit == 1
    assert opts.initialisms == ["id"]
    assert "id" in opts.initialisms_map


def test_empty_options():
    opts = parse(GenerateRequest())
    assert opts.package == ""
    assert opts.query_parameter_limit is None


def test_package_from_out():
    assert parse(make_req({"out": "./internal/db"})).package == "db"


def test_missing_package():
    with pytest.raises(ConfigError, match="missing package name"):
        parse(make_req({"emit_interface": True}))


def test_invalid_json():
    with pytest.raises(ConfigError, match="unmarshalling plugin options"):
        parse(GenerateRequest(plugin_options=b"{bad json"))


def test_wrong_field_type():
    with pytest.raises(ConfigError, match="unmarshalling plugin options"):
        parse(make_req({"package": "db", "emit_interface": "yes"}))


def test_invalid_sql_package():
    with pytest.raises(ConfigError, match="unknown SQL package"):
        parse(make_req({"package": "db", "sql_package": "unknown/pkg"}))


def test_invalid_sql_driver():
    with pytest.raises(ConfigError, match="unknown SQL driver"):
        parse(make_req({"package": "db", "sql_driver": "unknown/driver"}))


def test_valid_sql_package_and_driver():
    opts = parse(
        make_req({"package": "db", "sql_package": "pgx/v5", "sql_driver": "github.com/jackc/pgx/v5"})
    )
    assert opts.sql_package == "pgx/v5"
    assert opts.sql_driver == "github.com/jackc/pgx/v5"


def test_global_overrides():
    req = make_req({"package": "db"})
    req.global_options = json.dumps({"overrides": [{"db_type": "uuid", "go_type": "string"}]}).encode()
    opts = parse(req)
    assert len(opts.overrides) == 1
    assert opts.overrides[0].go_type_name == "string"


def test_global_overrides_come_first_and_rename_merges():
    req = make_req(
        {
            "package": "db",
            "overrides": [{"db_type": "text", "go_type": "string"}],
            "rename": {"a": "A"},
        }
    )
    req.global_options = json.dumps(
        {"overrides": [{"db_type": "uuid", "go_type": "string"}], "rename": {"b": "B"}}
    ).encode()
    opts = parse(req)
    assert [o.db_type for o in opts.overrides] == ["uuid", "text"]
    assert opts.rename == {"a": "A", "b": "B"}


def test_custom_initialisms_and_limit():
    opts = parse(make_req({"package": "db", "initialisms": ["url", "api"], "query_parameter_limit": 4}))
    assert opts.initialisms_map == {"url", "api"}
    assert opts.query_parameter_limit == 4


def test_tracing_options():
    opts = parse(
        make_req({"package": "db", "emit_tracing": {"import": "x/otel", "package": "otel", "code": ["c"]}})
    )
    assert opts.emit_tracing.import_path == "x/otel"
    assert opts.emit_tracing.code == ["c"]


def test_invalid_override_is_reported():
    with pytest.raises(ConfigError, match="one of either"):
        parse(make_req({"package": "db", "overrides": [{"go_type": "string"}]}))


@pytest.mark.parametrize(
    "opts",
    [
        Options(emit_methods_with_db_argument=True, emit_prepared_queries=True, query_parameter_limit=1),
        Options(emit_per_file_queries=True, emit_prepared_queries=True, query_parameter_limit=1),
        Options(emit_dynamic_filter=True, emit_prepared_queries=True, query_parameter_limit=1),
    ],
)
def test_validate_mutually_exclusive(opts):
    with pytest.raises(ConfigError, match="mutually exclusive"):
        validate_opts(opts)


def test_validate_dynamic_filter_message():
    with pytest.raises(ConfigError, match="emit_dynamic_filter"):
        validate_opts(Options(emit_dynamic_filter=True, emit_prepared_queries=True, query_parameter_limit=1))


def test_validate_negative_limit():
    with pytest.raises(ConfigError, match="must not be negative"):
        validate_opts(Options(query_parameter_limit=-1))


def test_validate_valid():
    assert validate_opts(Options(query_parameter_limit=1)) is None