"""Names that cannot be used as identifiers in generated code."""

from __future__ import annotations

_RESERVED = frozenset(
    {
        "break",
        "default",
        "func",
        "interface",
        "select",
        "case",
        "defer",
        "go",
        "map",
        "struct",
        "chan",
        "else",
        "goto",
        "package",
        "switch",
        "const",
        "fallthrough",
        "if",
        "range",
        "type",
        "continue",
        "for",
        "import",
        "return",
        "var",
        "q",
    }
)


def is_reserved(name: str) -> bool:
    """Return True if the name is a Go keyword or otherwise taken."""
    return name in _RESERVED


def escape(name: str) -> str:
    """Append an underscore to a reserved name; return others unchanged."""
    return name + "_" if is_reserved(name) else name