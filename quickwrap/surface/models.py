"""
Core data models for the wrapped surface.

The models here are the abstract, generic-aware description of a type's public
surface. They are built once per generation run by SurfaceModelBuilder and are
immutable afterwards; both synthesizers only read them.

Architecture principles:
1. TypeRef replaces runtime type handles everywhere in the model
2. Descriptors are frozen dataclasses holding tuples, never lists
3. Nothing in this module knows how the surface was obtained
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple

ARITY_MARKER = "`"
VOID_FULL_NAME = "System.Void"


@dataclass(frozen=True)
class TypeRef:
    """Reference to a type, possibly generic.

    ``name`` is the runtime name and may still carry an arity marker
    (``Dictionary`2``); renderers use ``simple_name``.
    """

    name: str
    namespace: Optional[str] = None
    arguments: Tuple["TypeRef", ...] = ()
    is_generic_parameter: bool = False
    array_ranks: Tuple[int, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError("TypeRef requires a non-empty name")
        if self.arguments and not self.simple_name:
            raise ValueError(f"Generic TypeRef '{self.name}' has no simple name")

    @property
    def simple_name(self) -> str:
        return self.name.split(ARITY_MARKER, 1)[0]

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_void(self) -> bool:
        return self.full_name == VOID_FULL_NAME and not self.array_ranks

    def walk(self) -> Iterator["TypeRef"]:
        """Yield this reference and every generic argument, depth first."""
        yield self
        for argument in self.arguments:
            yield from argument.walk()

    def __str__(self) -> str:
        text = self.full_name
        if self.arguments:
            inner = ", ".join(str(argument) for argument in self.arguments)
            text = f"{text}[{inner}]"
        return text + "".join(array_suffix(rank) for rank in self.array_ranks)


def array_suffix(rank: int) -> str:
    return "[" + "," * (rank - 1) + "]"


VOID = TypeRef("Void", "System")


@dataclass(frozen=True)
class ParameterDescriptor:
    """A positional parameter."""

    name: str
    type: TypeRef


@dataclass(frozen=True)
class MethodDescriptor:
    """A public method declared on the wrapped type."""

    name: str
    declaring_type: TypeRef
    is_static: bool
    return_type: TypeRef = VOID
    parameters: Tuple[ParameterDescriptor, ...] = ()
    generic_parameters: Tuple[str, ...] = ()

    @property
    def returns_value(self) -> bool:
        return not self.return_type.is_void

    def referenced_types(self) -> Iterator[TypeRef]:
        yield self.return_type
        for parameter in self.parameters:
            yield parameter.type


@dataclass(frozen=True)
class PropertyDescriptor:
    """A public property; at least one accessor is always present."""

    name: str
    declaring_type: TypeRef
    value_type: TypeRef
    readable: bool
    writable: bool
    is_static: bool = False

    def __post_init__(self):
        if not (self.readable or self.writable):
            raise ValueError(f"Property '{self.name}' is neither readable nor writable")

    def referenced_types(self) -> Iterator[TypeRef]:
        yield self.value_type


@dataclass(frozen=True)
class EventDescriptor:
    """A public event.

    ``handler_parameters`` is the invocation signature of the handler
    delegate, used to build the forwarding handler.
    """

    name: str
    declaring_type: TypeRef
    handler_type: TypeRef
    handler_parameters: Tuple[ParameterDescriptor, ...] = ()
    is_static: bool = False

    def referenced_types(self) -> Iterator[TypeRef]:
        yield self.handler_type


@dataclass(frozen=True)
class SurfaceModel:
    """The complete, normalized surface of one wrapped type."""

    declaring_type: TypeRef
    methods: Tuple[MethodDescriptor, ...] = ()
    properties: Tuple[PropertyDescriptor, ...] = ()
    events: Tuple[EventDescriptor, ...] = ()
    namespaces: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def needs_instance(self) -> bool:
        """Whether the wrapper must hold an instance of the wrapped type."""
        if self.events:
            return True
        if any(not method.is_static for method in self.methods):
            return True
        return any(not prop.is_static for prop in self.properties)

    @property
    def is_empty(self) -> bool:
        return not (self.methods or self.properties or self.events)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": str(self.declaring_type),
            "namespaces": sorted(self.namespaces),
            "properties": [
                {
                    "name": prop.name,
                    "type": str(prop.value_type),
                    "readable": prop.readable,
                    "writable": prop.writable,
                    "static": prop.is_static,
                }
                for prop in self.properties
            ],
            "methods": [
                {
                    "name": method.name,
                    "static": method.is_static,
                    "return_type": str(method.return_type),
                    "parameters": [
                        {"name": p.name, "type": str(p.type)} for p in method.parameters
                    ],
                    "generic_parameters": list(method.generic_parameters),
                }
                for method in self.methods
            ],
            "events": [
                {
                    "name": event.name,
                    "type": str(event.handler_type),
                    "static": event.is_static,
                    "handler_parameters": [
                        {"name": p.name, "type": str(p.type)} for p in event.handler_parameters
                    ],
                }
                for event in self.events
            ],
        }
