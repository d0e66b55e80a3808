"""
Type-name rendering and name derivation.

TypeNameRenderer turns a TypeRef into a C# type expression:

    System.Void                                       -> void
    System.Collections.Generic.Dictionary`2[String, Int32] -> Dictionary<string, int>

The wrapper and interface names and the wrapped-instance field name are all
derived here so that every synthesizer derives them the same way.
"""

from typing import Dict, Optional

from ..errors import InvalidIdentifierError
from ..identifiers import validate_identifier
from ..surface.models import TypeRef, array_suffix
from .context import DEFAULT_KEYWORDS, RenderContext


class TypeNameRenderer:
    """Renders TypeRef objects as source-level type names."""

    def __init__(self, keywords: Optional[Dict[str, str]] = None):
        self._keywords = dict(DEFAULT_KEYWORDS if keywords is None else keywords)

    @classmethod
    def for_context(cls, context: RenderContext) -> "TypeNameRenderer":
        return cls(context.keywords)

    def render(self, type_ref: TypeRef) -> str:
        suffix = "".join(array_suffix(rank) for rank in type_ref.array_ranks)
        return self._render_element(type_ref) + suffix

    def _render_element(self, type_ref: TypeRef) -> str:
        keyword = self._keywords.get(type_ref.full_name)
        if keyword is not None and not type_ref.arguments:
            return keyword

        name = type_ref.simple_name
        if not type_ref.arguments:
            return name

        arguments = ", ".join(self.render(argument) for argument in type_ref.arguments)
        return f"{name}<{arguments}>"


def field_name_for(type_ref: TypeRef) -> str:
    """``HttpClient`` -> ``_httpClient``."""
    name = type_ref.simple_name
    field_name = f"_{name[0].lower()}{name[1:]}"
    return validate_identifier(field_name, f"field for {type_ref}")


def interface_name_for(type_ref: TypeRef, context: RenderContext) -> str:
    name = f"{context.interface_prefix}{type_ref.simple_name}{context.class_suffix}"
    validate_identifier(name, f"interface for {type_ref}")
    if name == class_name_for(type_ref, context):
        raise InvalidIdentifierError(name, f"interface for {type_ref} has the same name as its class")
    return name


def class_name_for(type_ref: TypeRef, context: RenderContext) -> str:
    name = f"{type_ref.simple_name}{context.class_suffix}"
    return validate_identifier(name, f"class for {type_ref}")


def generic_parameter_list(names) -> str:
    if not names:
        return ""
    return f"<{', '.join(names)}>"
