"""
Implementation generation.

ImplementationSynthesizer renders ``<Name>Service``, the class that implements
the generated interface by forwarding to the wrapped type:

- instance members go through a private field holding a wrapped instance
- static members call the wrapped type directly
- wrapped events are re-raised on the wrapper by handlers registered in the
  constructor

The field and constructor exist only when something needs the instance
(SurfaceModel.needs_instance); a purely static surface gets neither.
"""

import logging
from typing import Optional

from ..documentation import Member
from ..identifiers import escape_identifier
from ..surface.models import (
    MethodDescriptor,
    PropertyDescriptor,
    SurfaceModel,
)
from .base import BaseSynthesizer
from .context import SourceWriter
from .type_names import class_name_for, field_name_for, generic_parameter_list, interface_name_for

logger = logging.getLogger(__name__)


class ImplementationSynthesizer(BaseSynthesizer):
    """Renders the delegating class for a surface model."""

    def synthesize(self, model: SurfaceModel) -> str:
        class_name = class_name_for(model.declaring_type, self.context)
        interface_name = interface_name_for(model.declaring_type, self.context)
        type_name = self.types.render(model.declaring_type)
        field_name = field_name_for(model.declaring_type) if model.needs_instance else None

        with self.compilation_unit(model) as writer:
            with writer.block(f"public class {class_name} : {interface_name}"):
                if field_name:
                    writer.line(f"private readonly {type_name} {field_name};")
                    writer.blank()
                    self._write_constructor(writer, model, class_name, type_name, field_name)

                for prop in model.properties:
                    writer.blank()
                    self._write_property(writer, prop, self._target(prop, type_name, field_name))

                for method in model.methods:
                    writer.blank()
                    self._write_method(writer, method, self._target(method, type_name, field_name))

                for event in model.events:
                    writer.blank()
                    self._write_inheritdoc(writer, event)
                    writer.line(
                        f"public event {self.types.render(event.handler_type)} "
                        f"{escape_identifier(event.name)};"
                    )

        logger.debug(
            f"Synthesized class {class_name} ({'instance' if field_name else 'static'} forwarding)"
        )
        return writer.render()

    @staticmethod
    def _target(
        member: Member,
        type_name: str,
        field_name: Optional[str],
    ) -> str:
        """Receiver of a forwarded call: the type for static members, else the field."""
        if member.is_static:
            return type_name
        return field_name

    def _write_constructor(
        self,
        writer: SourceWriter,
        model: SurfaceModel,
        class_name: str,
        type_name: str,
        field_name: str,
    ) -> None:
        with writer.block(f"public {class_name}()"):
            writer.line(f"{field_name} = new {type_name}();")
            for event in model.events:
                target = self._target(event, type_name, field_name)
                name = escape_identifier(event.name)
                arguments = self.argument_list(event.handler_parameters)
                # Re-raise on the wrapper; no-op while the wrapper has no subscribers
                writer.line(f"{target}.{name} += ({arguments}) => {name}?.Invoke({arguments});")

    def _write_property(self, writer: SourceWriter, prop: PropertyDescriptor, target: str) -> None:
        name = escape_identifier(prop.name)
        self._write_inheritdoc(writer, prop)
        with writer.block(f"public {self.types.render(prop.value_type)} {name}"):
            if prop.readable:
                writer.line(f"get {{ return {target}.{name}; }}")
            if prop.writable:
                writer.line(f"set {{ {target}.{name} = value; }}")

    def _write_method(self, writer: SourceWriter, method: MethodDescriptor, target: str) -> None:
        invocation = (
            f"{target}.{escape_identifier(method.name)}"
            f"{generic_parameter_list(method.generic_parameters)}"
            f"({self.argument_list(method.parameters)})"
        )
        self._write_inheritdoc(writer, method)
        with writer.block(f"public {self.method_signature(method)}"):
            if method.returns_value:
                writer.line(f"return {invocation};")
            else:
                writer.line(f"{invocation};")

    def _write_inheritdoc(self, writer: SourceWriter, member: Member) -> None:
        if self.summary(member):
            writer.line("/// <inheritdoc />")
