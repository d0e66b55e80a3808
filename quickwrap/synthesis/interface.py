"""Interface generation: one signature per surfaced member, no bodies."""

import logging

from ..identifiers import escape_identifier
from ..surface.models import SurfaceModel
from .base import BaseSynthesizer
from .type_names import interface_name_for

logger = logging.getLogger(__name__)


class InterfaceSynthesizer(BaseSynthesizer):
    """Renders ``I<Name>Service`` for a surface model.

    Members are emitted properties first, then methods, then events, each in
    declaration order.
    """

    def synthesize(self, model: SurfaceModel) -> str:
        name = interface_name_for(model.declaring_type, self.context)

        with self.compilation_unit(model) as writer:
            with writer.block(f"public interface {name}"):
                for prop in model.properties:
                    writer.blank()
                    self.write_summary(writer, prop)
                    writer.line(
                        f"{self.types.render(prop.value_type)} {escape_identifier(prop.name)} "
                        f"{self.accessor_list(prop)}"
                    )

                for method in model.methods:
                    writer.blank()
                    self.write_summary(writer, method)
                    writer.line(f"{self.method_signature(method)};")

                for event in model.events:
                    writer.blank()
                    self.write_summary(writer, event)
                    writer.line(
                        f"event {self.types.render(event.handler_type)} {escape_identifier(event.name)};"
                    )

        logger.debug(f"Synthesized interface {name}")
        return writer.render()
