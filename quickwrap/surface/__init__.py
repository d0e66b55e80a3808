"""
Surface module for QuickWrap

Turns a statically declared type catalog into the abstract surface model:
- Catalog loading (YAML/JSON)
- Member extraction
- Type reference resolution
- Surface model building and namespace collection
"""

from .builder import SurfaceBuildResult, SurfaceModelBuilder
from .catalog import TypeCatalog, load_catalog
from .extractor import ExtractedMembers, MemberExtractor
from .models import (
    VOID,
    EventDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    SurfaceModel,
    TypeRef,
)
from .namespaces import collect_namespaces
from .resolver import TypeResolver

__all__ = [
    "SurfaceBuildResult",
    "SurfaceModelBuilder",
    "TypeCatalog",
    "load_catalog",
    "ExtractedMembers",
    "MemberExtractor",
    "VOID",
    "EventDescriptor",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "SurfaceModel",
    "TypeRef",
    "collect_namespaces",
    "TypeResolver",
]
