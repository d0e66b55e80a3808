"""
C# identifier rules shared by the surface builder and the synthesizers.
"""

import re
from typing import FrozenSet

from .errors import InvalidIdentifierError

# Letters or underscore first, then letters, digits or underscores (Unicode aware)
IDENTIFIER_RE = re.compile(r"^[^\W\d]\w*$")

CSHARP_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
        "char", "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "virtual", "void", "volatile", "while",
    }
)


def is_identifier(name: str) -> bool:
    return bool(name) and IDENTIFIER_RE.match(name) is not None


def validate_identifier(name: str, context: str) -> str:
    """Return ``name`` unchanged or raise InvalidIdentifierError."""
    if not is_identifier(name):
        raise InvalidIdentifierError(name, context)
    return name


def escape_identifier(name: str) -> str:
    """Prefix reserved words with ``@`` so they can be used as names."""
    if name in CSHARP_KEYWORDS:
        return f"@{name}"
    return name


def validate_namespace(namespace: str, context: str) -> str:
    for part in namespace.split("."):
        if not is_identifier(part):
            raise InvalidIdentifierError(namespace, context)
    return namespace
