"""
Synthesis module for QuickWrap

Renders a surface model into C# source:
- Type-name rendering with keyword substitution
- Interface declaration (I<Name>Service)
- Delegating implementation (<Name>Service)
"""

from .context import DEFAULT_KEYWORDS, RenderContext, SourceWriter
from .implementation import ImplementationSynthesizer
from .interface import InterfaceSynthesizer
from .type_names import TypeNameRenderer, class_name_for, field_name_for, interface_name_for

__all__ = [
    "DEFAULT_KEYWORDS",
    "RenderContext",
    "SourceWriter",
    "ImplementationSynthesizer",
    "InterfaceSynthesizer",
    "TypeNameRenderer",
    "class_name_for",
    "field_name_for",
    "interface_name_for",
]
