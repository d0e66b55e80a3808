"""
QuickWrap - Service wrapper generator for .NET types

Reads the public surface of a type from a statically declared type catalog and
generates an interface (I<Name>Service) plus a delegating implementation
(<Name>Service), so callers can depend on an abstraction instead of a concrete
external type.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main API
    "QuickWrap",
    "GenerationResult",
    "QuickWrapConfig",
    # Core components (for advanced usage)
    "TypeCatalog",
    "load_catalog",
    "SurfaceModelBuilder",
    "InterfaceSynthesizer",
    "ImplementationSynthesizer",
]


def __getattr__(name):
    """Lazy loading of main API classes to keep ``import quickwrap`` light."""
    if name in {"QuickWrap", "GenerationResult"}:
        from .api import QuickWrap, GenerationResult

        return {"QuickWrap": QuickWrap, "GenerationResult": GenerationResult}[name]

    if name == "QuickWrapConfig":
        from .config import QuickWrapConfig

        return QuickWrapConfig

    if name in {"TypeCatalog", "load_catalog", "SurfaceModelBuilder"}:
        from .surface import TypeCatalog, load_catalog, SurfaceModelBuilder

        return {
            "TypeCatalog": TypeCatalog,
            "load_catalog": load_catalog,
            "SurfaceModelBuilder": SurfaceModelBuilder,
        }[name]

    if name in {"InterfaceSynthesizer", "ImplementationSynthesizer"}:
        from .synthesis import InterfaceSynthesizer, ImplementationSynthesizer

        return {
            "InterfaceSynthesizer": InterfaceSynthesizer,
            "ImplementationSynthesizer": ImplementationSynthesizer,
        }[name]

    raise AttributeError(f"module 'quickwrap' has no attribute '{name}'")
