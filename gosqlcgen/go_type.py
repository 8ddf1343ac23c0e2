"""Go type specifiers used in type overrides, and Go struct tags."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from gosqlcgen.drivers import ConfigError

_BASIC_TYPES = frozenset(
    {
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "float32",
        "float64",
        "complex64",
        "complex128",
        "string",
    }
)

_VALID_IDENTIFIER = re.compile(r"^[a-zA-Z0-9_]+$")
_VERSION_NUMBER = re.compile(r"^v[0-9]+$")
_INVALID_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class ParsedGoType:
    """A Go type resolved into an import path and a qualified type name."""

    import_path: str = ""
    package: str = ""
    type_name: str = ""
    basic_type: bool = False
    struct_tag: str = ""


@dataclass
class GoType:
    """A Go type, given either as one specifier string or as separate parts."""

    path: str = ""
    package: str = ""
    name: str = ""
    pointer: bool = False
    slice: bool = False
    spec: str = ""
    built_in: bool = False

    def to_json(self) -> str:
        """Encode as the specifier string if set, otherwise as an object."""
        if self.spec:
            return json.dumps(self.spec)
        return json.dumps(
            {
                "import": self.path,
                "package": self.package,
                "type": self.name,
                "pointer": self.pointer,
                "slice": self.slice,
            },
            separators=(",", ":"),
        )

    def parse(self) -> ParsedGoType:
        """Validate the type and resolve it; raises ConfigError if invalid."""
        if not self.spec:
            return self._parse_parts()
        return self._parse_spec()

    def _parse_parts(self) -> ParsedGoType:
        if not self.path and self.package:
            raise ConfigError(
                "Package override `go_type`: package name requires an import path"
            )
        out = ParsedGoType()
        if not self.package and self.path:
            pkg, needs_alias = generate_package_id(self.path)
            if needs_alias:
                out.package = pkg
        else:
            pkg = self.package
            out.package = self.package

        out.import_path = self.path
        out.type_name = self.name
        out.basic_type = not self.path and not self.package
        if pkg:
            out.type_name = f"{pkg}.{out.type_name}"
        if self.pointer:
            out.type_name = "*" + out.type_name
        if self.slice:
            out.type_name = "[]" + out.type_name
        return out

    def _parse_spec(self) -> ParsedGoType:
        text = self.spec
        out = ParsedGoType()
        last_dot = text.rfind(".")
        last_slash = text.rfind("/")
        type_name = text
        if last_dot == -1 and last_slash == -1:
            if type_name not in _BASIC_TYPES:
                raise ConfigError(
                    f"Package override `go_type` specifier {_quote(text)} "
                    "is not a Go basic type e.g. 'string'"
                )
            out.basic_type = True
        else:
            if last_dot == -1:
                raise ConfigError(
                    f"Package override `go_type` specifier {_quote(text)} is not the "
                    "proper format, expected 'package.type', e.g. "
                    "'github.com/segmentio/ksuid.KSUID'"
                )
            type_name = text[last_slash + 1 :]
            # A package name starting with "go-" or ending in "-go" is not a
            # valid identifier; dropping the affix usually gives the real one.
            type_name = type_name.removeprefix("go-").removesuffix("-go")
            out.import_path = text[:last_dot]
        out.type_name = type_name
        if text.startswith("*"):
            out.import_path = out.import_path[1:]
            out.type_name = "*" + out.type_name
        return out


def go_type_from_value(value: Any) -> GoType:
    """Build a GoType from a decoded JSON or YAML value (string or mapping)."""
    if value is None:
        return GoType()
    if isinstance(value, str):
        return GoType(spec=value)
    if not isinstance(value, dict):
        raise ConfigError(f"go_type must be a string or an object, got {type(value).__name__}")
    kwargs: dict[str, Any] = {}
    for key, attr, kind in (
        ("import", "path", str),
        ("package", "package", str),
        ("type", "name", str),
        ("pointer", "pointer", bool),
        ("slice", "slice", bool),
    ):
        if key not in value or value[key] is None:
            continue
        item = value[key]
        if not isinstance(item, kind):
            raise ConfigError(f"go_type field {key!r} must be of type {kind.__name__}")
        kwargs[attr] = item
    return GoType(**kwargs)


def go_type_from_json(data: str | bytes) -> GoType:
    """Decode a GoType from JSON text; raises ConfigError on bad input."""
    try:
        value = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid go_type JSON: {exc}") from exc
    return go_type_from_value(value)


def generate_package_id(import_path: str) -> tuple[str, bool]:
    """Return the package name for an import path and whether it needs an alias."""
    parts = import_path.split("/")
    name = parts[-1]
    if _VERSION_NUMBER.match(name) and len(parts) >= 2:
        return _INVALID_IDENTIFIER.sub("_", parts[-2].lower()), True
    if _VALID_IDENTIFIER.match(name):
        return name, False
    return _INVALID_IDENTIFIER.sub("_", name.lower()), True


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_ESCAPES = {"x": 2, "u": 4, "U": 8}


def _unquote(quoted: str) -> str:
    body = quoted[1:-1]
    if "\n" in body:
        raise ConfigError("bad syntax for struct tag value")
    out: list[str] = []
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if ch != "\\":
            out.append(ch)
            pos += 1
            continue
        if pos + 1 >= len(body):
            raise ConfigError("bad syntax for struct tag value")
        code = body[pos + 1]
        if code in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[code])
            pos += 2
        elif code in _HEX_ESCAPES:
            width = _HEX_ESCAPES[code]
            digits = body[pos + 2 : pos + 2 + width]
            if len(digits) != width or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise ConfigError("bad syntax for struct tag value")
            out.append(chr(int(digits, 16)))
            pos += 2 + width
        elif code in "01234567":
            digits = body[pos + 1 : pos + 4]
            if len(digits) != 3 or not all(c in "01234567" for c in digits):
                raise ConfigError("bad syntax for struct tag value")
            value = int(digits, 8)
            if value > 255:
                raise ConfigError("bad syntax for struct tag value")
            out.append(chr(value))
            pos += 4
        else:
            raise ConfigError("bad syntax for struct tag value")
    return "".join(out)


def parse_struct_tag(tag: str) -> dict[str, str]:
    """Parse a raw Go struct tag such as `a:"b" x:"y,z"` into a key/value map."""
    result: dict[str, str] = {}
    rest = tag
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break
        i = 0
        while i < len(rest) and rest[i] > " " and rest[i] not in ':"\x7f':
            i += 1
        if i == 0:
            raise ConfigError("tag key is not set")
        if i + 1 >= len(rest) or rest[i] != ":":
            raise ConfigError("bad syntax for struct tag pair")
        if rest[i + 1] != '"':
            raise ConfigError("bad syntax for struct tag value")
        key = rest[:i]
        rest = rest[i + 1 :]
        i = 1
        while i < len(rest) and rest[i] != '"':
            if rest[i] == "\\":
                i += 1
            i += 1
        if i >= len(rest):
            raise ConfigError("bad syntax for struct tag value")
        value = _unquote(rest[: i + 1])
        rest = rest[i + 1 :]
        name, *options = value.split(",")
        joined = ",".join(options)
        result[key] = f"{name},{joined}" if joined else name
    return result