"""
Shared rendering for the interface and implementation synthesizers.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence
from xml.sax.saxutils import escape as xml_escape

from ..documentation import Member, XmlDocumentationProvider
from ..identifiers import escape_identifier
from ..surface.models import MethodDescriptor, ParameterDescriptor, PropertyDescriptor, SurfaceModel
from .context import RenderContext, SourceWriter
from .type_names import TypeNameRenderer, generic_parameter_list


class BaseSynthesizer:
    """Signature and layout helpers common to both synthesizers."""

    def __init__(
        self,
        context: RenderContext,
        documentation: Optional[XmlDocumentationProvider] = None,
    ):
        self.context = context
        self.types = TypeNameRenderer.for_context(context)
        self.documentation = documentation

    def synthesize(self, model: SurfaceModel) -> str:
        raise NotImplementedError

    @contextmanager
    def compilation_unit(self, model: SurfaceModel) -> Iterator[SourceWriter]:
        """Write ``using`` directives and open the output namespace block."""
        writer = self.context.writer()
        for namespace in sorted(model.namespaces):
            writer.line(f"using {namespace};")
        if model.namespaces:
            writer.line()
        with writer.block(f"namespace {self.context.output_namespace}"):
            yield writer

    def parameter_list(self, parameters: Sequence[ParameterDescriptor]) -> str:
        return ", ".join(
            f"{self.types.render(p.type)} {escape_identifier(p.name)}" for p in parameters
        )

    @staticmethod
    def argument_list(parameters: Sequence[ParameterDescriptor]) -> str:
        return ", ".join(escape_identifier(p.name) for p in parameters)

    def method_signature(self, method: MethodDescriptor) -> str:
        """``Task<T> GetAsync<T>(string key)``."""
        return (
            f"{self.types.render(method.return_type)} {escape_identifier(method.name)}"
            f"{generic_parameter_list(method.generic_parameters)}"
            f"({self.parameter_list(method.parameters)})"
        )

    @staticmethod
    def accessor_list(prop: PropertyDescriptor) -> str:
        accessors = []
        if prop.readable:
            accessors.append("get;")
        if prop.writable:
            accessors.append("set;")
        return "{ " + " ".join(accessors) + " }"

    def summary(self, member: Member) -> Optional[str]:
        if self.documentation is None:
            return None
        return self.documentation.summary(member)

    def write_summary(self, writer: SourceWriter, member: Member) -> None:
        text = self.summary(member)
        if text:
            writer.line("/// <summary>")
            writer.line(f"/// {xml_escape(text)}")
            writer.line("/// </summary>")
