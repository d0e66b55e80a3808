"""
Main API interface for QuickWrap

Provides a unified facade over the generation pipeline:

    type catalog -> MemberExtractor -> SurfaceModelBuilder -> SurfaceModel
                 -> {InterfaceSynthesizer, ImplementationSynthesizer} -> two sources

Each call is an independent, synchronous run. Nothing is cached or shared
between calls; a fresh RenderContext is created every time.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Union

from .config import QuickWrapConfig
from .documentation import XmlDocumentationProvider
from .errors import QuickWrapError, SurfaceWarning
from .identifiers import validate_namespace
from .surface import SurfaceModel, SurfaceModelBuilder, TypeCatalog, load_catalog
from .synthesis import (
    ImplementationSynthesizer,
    InterfaceSynthesizer,
    RenderContext,
    class_name_for,
    interface_name_for,
)

logger = logging.getLogger(__name__)

CatalogSource = Union[str, TypeCatalog]


@dataclass
class GenerationResult:
    """The two generated sources for one wrapped type."""

    type_name: str
    output_namespace: str
    interface_name: str
    interface_source: str
    class_name: str
    class_source: str
    namespaces: FrozenSet[str] = field(default_factory=frozenset)
    warnings: List[SurfaceWarning] = field(default_factory=list)

    @property
    def interface_file_name(self) -> str:
        return f"{self.interface_name}.cs"

    @property
    def class_file_name(self) -> str:
        return f"{self.class_name}.cs"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type_name": self.type_name,
            "output_namespace": self.output_namespace,
            "interface_name": self.interface_name,
            "class_name": self.class_name,
            "namespaces": sorted(self.namespaces),
            "warnings": [w.to_dict() for w in self.warnings],
        }


def default_output_namespace(model: SurfaceModel) -> str:
    namespace = model.declaring_type.namespace
    return f"{namespace}.Services" if namespace else "Services"


class QuickWrap:
    """
    Main API class for QuickWrap.

    Example:
        >>> quickwrap = QuickWrap()
        >>> result = quickwrap.generate("surface.yaml", "System.Net.Http.HttpClient",
        ...                             output_namespace="Acme.IocServices.System.Net.Http")
        >>> result.interface_name
        'IHttpClientService'
    """

    def __init__(self, config: Optional[QuickWrapConfig] = None):
        self.config = config or QuickWrapConfig.default()
        self.builder = SurfaceModelBuilder()

    def inspect(self, catalog: CatalogSource, type_name: str) -> SurfaceModel:
        """Build and return the surface model without rendering anything."""
        return self.builder.build(self._catalog(catalog), type_name).model

    def generate(
        self,
        catalog: CatalogSource,
        type_name: str,
        output_namespace: Optional[str] = None,
        documentation: Optional[Union[str, XmlDocumentationProvider]] = None,
    ) -> GenerationResult:
        """
        Generate the interface and implementation for one type.

        Args:
            catalog: TypeCatalog or path to a YAML/JSON catalog file
            type_name: Full name of the type to wrap
            output_namespace: Namespace of the generated code; falls back to
                the configured namespace, then to ``<type namespace>.Services``
            documentation: XmlDocumentationProvider or path to an XML
                documentation file (optional, best-effort)

        Returns:
            GenerationResult with both sources and any warnings

        Raises:
            QuickWrapError: the type cannot be resolved or a name is invalid
        """
        build = self.builder.build(self._catalog(catalog), type_name)
        model = build.model
        if model.is_empty:
            logger.warning(f"{type_name} has no public declared members; generating empty wrapper")

        namespace = output_namespace or self.config.output.namespace or default_output_namespace(model)
        validate_namespace(namespace, "output namespace")

        if isinstance(documentation, str):
            documentation = XmlDocumentationProvider.load(documentation)

        context = RenderContext.create(
            namespace,
            keyword_overrides=self.config.keyword_overrides,
            indent_size=self.config.rendering.indent_size,
            newline=self.config.rendering.newline,
            interface_prefix=self.config.naming.interface_prefix,
            class_suffix=self.config.naming.class_suffix,
        )

        result = GenerationResult(
            type_name=type_name,
            output_namespace=namespace,
            interface_name=interface_name_for(model.declaring_type, context),
            interface_source=InterfaceSynthesizer(context, documentation).synthesize(model),
            class_name=class_name_for(model.declaring_type, context),
            class_source=ImplementationSynthesizer(context, documentation).synthesize(model),
            namespaces=model.namespaces,
            warnings=list(build.warnings),
        )
        logger.info(
            f"Generated {result.interface_name} and {result.class_name} "
            f"with {len(result.warnings)} warnings"
        )
        return result

    def write(
        self,
        result: GenerationResult,
        directory: Optional[str] = None,
        overwrite: Optional[bool] = None,
    ) -> List[str]:
        """Write both sources to ``directory`` and return the written paths."""
        directory = directory or self.config.output.directory
        overwrite = self.config.output.overwrite if overwrite is None else overwrite
        os.makedirs(directory, exist_ok=True)

        outputs = {
            os.path.join(directory, result.interface_file_name): result.interface_source,
            os.path.join(directory, result.class_file_name): result.class_source,
        }
        existing = [path for path in outputs if os.path.exists(path)]
        if existing and not overwrite:
            raise QuickWrapError(f"Refusing to overwrite existing files: {', '.join(existing)}")

        for path, source in outputs.items():
            with open(path, "w", encoding="utf-8") as f:
                f.write(source)
            logger.info(f"Wrote {path}")
        return list(outputs)

    @staticmethod
    def _catalog(catalog: CatalogSource) -> TypeCatalog:
        if isinstance(catalog, TypeCatalog):
            return catalog
        return load_catalog(catalog)
