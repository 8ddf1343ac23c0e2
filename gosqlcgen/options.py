"""Generator options read from the plugin and global configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from gosqlcgen.catalog import GenerateRequest
from gosqlcgen.drivers import ConfigError, validate_driver, validate_package
from gosqlcgen.override import Override, override_from_dict

_BOOL_KEYS = (
    "emit_interface",
    "emit_json_tags",
    "json_tags_id_uppercase",
    "emit_db_tags",
    "emit_prepared_queries",
    "emit_exact_table_names",
    "emit_empty_slices",
    "emit_exported_queries",
    "emit_result_struct_pointers",
    "emit_params_struct_pointers",
    "emit_methods_with_db_argument",
    "emit_pointers_for_null_types",
    "emit_enum_valid_method",
    "emit_all_enum_values",
    "emit_sql_as_comment",
    "omit_sqlc_version",
    "omit_unused_structs",
    "emit_per_file_queries",
    "emit_err_nil_if_no_rows",
    "emit_dynamic_filter",
    "wrap_errors",
)

_STR_KEYS = (
    "json_tags_case_style",
    "package",
    "out",
    "sql_package",
    "sql_driver",
    "output_batch_file_name",
    "output_db_file_name",
    "output_models_file_name",
    "output_querier_file_name",
    "output_copyfrom_file_name",
    "output_files_suffix",
    "build_tags",
    "go_generate_mock",
)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass
class TracingOptions:
    """Tracing code to put into each generated method."""

    import_path: str = ""
    package: str = ""
    code: list[str] = field(default_factory=list)


@dataclass
class Options:
    """Options controlling the generated code."""

    emit_interface: bool = False
    emit_json_tags: bool = False
    json_tags_id_uppercase: bool = False
    emit_db_tags: bool = False
    emit_prepared_queries: bool = False
    emit_exact_table_names: bool = False
    emit_empty_slices: bool = False
    emit_exported_queries: bool = False
    emit_result_struct_pointers: bool = False
    emit_params_struct_pointers: bool = False
    emit_methods_with_db_argument: bool = False
    emit_pointers_for_null_types: bool = False
    emit_enum_valid_method: bool = False
    emit_all_enum_values: bool = False
    emit_sql_as_comment: bool = False
    json_tags_case_style: str = ""
    package: str = ""
    out: str = ""
    overrides: list[Override] = field(default_factory=list)
    rename: dict[str, str] = field(default_factory=dict)
    sql_package: str = ""
    sql_driver: str = ""
    output_batch_file_name: str = ""
    output_db_file_name: str = ""
    output_models_file_name: str = ""
    output_querier_file_name: str = ""
    output_copyfrom_file_name: str = ""
    output_files_suffix: str = ""
    inflection_exclude_table_names: list[str] = field(default_factory=list)
    query_parameter_limit: int | None = None
    omit_sqlc_version: bool = False
    omit_unused_structs: bool = False
    build_tags: str = ""
    initialisms: list[str] | None = None
    emit_per_file_queries: bool = False
    emit_err_nil_if_no_rows: bool = False
    emit_tracing: TracingOptions | None = None
    go_generate_mock: str = ""
    emit_dynamic_filter: bool = False
    wrap_errors: bool = False
    # None follows emit_pointers_for_null_types; a value overrides it for enums only.
    emit_pointers_for_null_enum_types: bool | None = None
    initialisms_map: set[str] = field(default_factory=set)


@dataclass
class GlobalOptions:
    """Options shared by every generator run."""

    overrides: list[Override] = field(default_factory=list)
    rename: dict[str, str] = field(default_factory=dict)


def _check(value: Any, kind: type, key: str) -> Any:
    if kind is bool:
        ok = isinstance(value, bool)
    elif kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise ConfigError(f"field {key!r} must be of type {kind.__name__}")
    return value


def _str_list(value: Any, key: str) -> list[str]:
    for item in _check(value, list, key):
        _check(item, str, key)
    return list(value)


def _str_map(value: Any, key: str) -> dict[str, str]:
    for name, item in _check(value, dict, key).items():
        _check(item, str, key)
    return dict(value)


def _overrides(value: Any) -> list[Override]:
    return [override_from_dict(item) for item in _check(value, list, "overrides")]


def _load_object(data: bytes) -> dict[str, Any]:
    decoded = json.loads(data)
    if not isinstance(decoded, dict):
        raise ConfigError(f"expected an object, got {type(decoded).__name__}")
    return decoded


def _decode_options(data: bytes) -> Options:
    raw = _load_object(data)
    options = Options()
    for key in _BOOL_KEYS:
        if raw.get(key) is not None:
            setattr(options, key, _check(raw[key], bool, key))
    for key in _STR_KEYS:
        if raw.get(key) is not None:
            setattr(options, key, _check(raw[key], str, key))
    if raw.get("overrides") is not None:
        options.overrides = _overrides(raw["overrides"])
    if raw.get("rename") is not None:
        options.rename = _str_map(raw["rename"], "rename")
    if raw.get("inflection_exclude_table_names") is not None:
        options.inflection_exclude_table_names = _str_list(
            raw["inflection_exclude_table_names"], "inflection_exclude_table_names"
        )
    if raw.get("query_parameter_limit") is not None:
        limit = _check(raw["query_parameter_limit"], int, "query_parameter_limit")
        if not _INT32_MIN <= limit <= _INT32_MAX:
            raise ConfigError("field 'query_parameter_limit' is out of range")
        options.query_parameter_limit = limit
    if raw.get("initialisms") is not None:
        options.initialisms = _str_list(raw["initialisms"], "initialisms")
    if raw.get("emit_pointers_for_null_enum_types") is not None:
        options.emit_pointers_for_null_enum_types = _check(
            raw["emit_pointers_for_null_enum_types"], bool, "emit_pointers_for_null_enum_types"
        )
    if raw.get("emit_tracing") is not None:
        tracing = _check(raw["emit_tracing"], dict, "emit_tracing")
        options.emit_tracing = TracingOptions(
            import_path=_check(tracing.get("import") or "", str, "import"),
            package=_check(tracing.get("package") or "", str, "package"),
            code=_str_list(tracing.get("code") or [], "code"),
        )
    return options


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _parse_opts(req: GenerateRequest) -> Options:
    if not req.plugin_options:
        return Options()
    try:
        options = _decode_options(req.plugin_options)
    except ValueError as exc:
        raise ConfigError(f"unmarshalling plugin options: {exc}") from exc

    if not options.package:
        if not options.out:
            raise ConfigError("invalid options: missing package name")
        options.package = _base_name(options.out)

    for override in options.overrides:
        override.parse(req)

    if options.sql_package:
        try:
            validate_package(options.sql_package)
        except ConfigError as exc:
            raise ConfigError(f"invalid options: {exc}") from exc

    if options.sql_driver:
        try:
            validate_driver(options.sql_driver)
        except ConfigError as exc:
            raise ConfigError(f"invalid options: {exc}") from exc

    if options.query_parameter_limit is None:
        options.query_parameter_limit = 1
    if options.initialisms is None:
        options.initialisms = ["id"]
    options.initialisms_map = set(options.initialisms)
    return options


def _parse_global_opts(req: GenerateRequest) -> GlobalOptions:
    if not req.global_options:
        return GlobalOptions()
    try:
        raw = _load_object(req.global_options)
        options = GlobalOptions()
        if raw.get("overrides") is not None:
            options.overrides = _overrides(raw["overrides"])
        if raw.get("rename") is not None:
            options.rename = _str_map(raw["rename"], "rename")
    except ValueError as exc:
        raise ConfigError(f"unmarshalling global options: {exc}") from exc
    for override in options.overrides:
        override.parse(req)
    return options


def parse(req: GenerateRequest) -> Options:
    """Read plugin and global options from a request and merge them."""
    options = _parse_opts(req)
    global_options = _parse_global_opts(req)
    if global_options.overrides:
        options.overrides = global_options.overrides + options.overrides
    if global_options.rename:
        options.rename.update(global_options.rename)
    return options


def validate_opts(options: Options) -> None:
    """Raise ConfigError for combinations of options that cannot work together."""
    if options.emit_methods_with_db_argument and options.emit_prepared_queries:
        raise ConfigError(
            "invalid options: emit_methods_with_db_argument and emit_prepared_queries "
            "options are mutually exclusive"
        )
    if options.emit_per_file_queries and options.emit_prepared_queries:
        raise ConfigError(
            "invalid options: emit_per_file_queries and emit_prepared_queries "
            "options are mutually exclusive"
        )
    if options.emit_dynamic_filter and options.emit_prepared_queries:
        raise ConfigError(
            "invalid options: emit_dynamic_filter and emit_prepared_queries "
            "options are mutually exclusive"
        )
    if options.query_parameter_limit is not None and options.query_parameter_limit < 0:
        raise ConfigError("invalid options: query parameter limit must not be negative")