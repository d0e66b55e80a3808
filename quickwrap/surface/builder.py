"""
Surface model construction.

SurfaceModelBuilder turns the raw members of one catalog type into the
immutable SurfaceModel consumed by the synthesizers:

- resolves every type reference into a TypeRef, recursively for generics
- binds type-level generic parameters of a closed generic target
- derives event handler signatures from the delegate's invocation list
- validates member and parameter names
- records unsupported member shapes as SurfaceWarning items

Example:
    >>> builder = SurfaceModelBuilder()
    >>> result = builder.build(catalog, "System.Net.Http.HttpClient")
    >>> [m.name for m in result.model.methods][:2]
    ['CancelPendingRequests', 'DeleteAsync']
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..errors import SurfaceWarning, UnresolvableTypeError
from ..identifiers import validate_identifier
from .catalog import RawEvent, RawMethod, RawParameter, RawProperty, RawType, TypeCatalog
from .extractor import MemberExtractor
from .models import (
    EventDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    SurfaceModel,
    TypeRef,
)
from .namespaces import collect_namespaces
from .resolver import TypeResolver

logger = logging.getLogger(__name__)

# Invocation signatures of framework delegates that catalogs rarely declare.
# Maps definition full name -> (generic parameter names, ((name, type), ...))
BUILTIN_DELEGATES: Dict[str, Tuple[Tuple[str, ...], Tuple[Tuple[str, str], ...]]] = {
    "System.EventHandler": ((), (("sender", "System.Object"), ("e", "System.EventArgs"))),
    "System.EventHandler`1": (
        ("TEventArgs",),
        (("sender", "System.Object"), ("e", "TEventArgs")),
    ),
    "System.Action": ((), ()),
    "System.Action`1": (("T",), (("obj", "T"),)),
    "System.Action`2": (("T1", "T2"), (("arg1", "T1"), ("arg2", "T2"))),
}


@dataclass
class SurfaceBuildResult:
    """A built model plus the warnings raised while building it."""

    model: SurfaceModel
    warnings: List[SurfaceWarning] = field(default_factory=list)


class SurfaceModelBuilder:
    """Builds SurfaceModel instances from a type catalog."""

    def __init__(self, extractor: Optional[MemberExtractor] = None):
        self.extractor = extractor or MemberExtractor()

    def build(self, catalog: TypeCatalog, type_reference: str) -> SurfaceBuildResult:
        """
        Build the surface model of ``type_reference``.

        Args:
            catalog: Catalog holding the target and any delegate types it uses
            type_reference: Full name of the target, closed if generic
                (``Acme.Cache`1[System.String]``)

        Returns:
            SurfaceBuildResult with the model and itemized warnings

        Raises:
            UnresolvableTypeError: target or a referenced type cannot be resolved
            InvalidIdentifierError: a member or parameter name is not legal
        """
        declaring_type = TypeResolver().resolve(type_reference)
        raw_type = catalog.resolve(declaring_type.full_name)
        if len(raw_type.generic_parameters) != len(declaring_type.arguments):
            raise UnresolvableTypeError(
                type_reference,
                f"expects {len(raw_type.generic_parameters)} type arguments, "
                f"got {len(declaring_type.arguments)}",
            )

        resolver = TypeResolver(dict(zip(raw_type.generic_parameters, declaring_type.arguments)))
        warnings: List[SurfaceWarning] = []
        members = self.extractor.extract(raw_type)

        properties = tuple(self._build_property(p, declaring_type, resolver) for p in members.properties)
        methods = tuple(
            self._build_method(m, declaring_type, resolver, warnings) for m in members.methods
        )
        events = tuple(
            self._build_event(e, declaring_type, resolver, catalog) for e in members.events
        )

        namespaces = collect_namespaces(declaring_type, methods, properties, events)
        model = SurfaceModel(
            declaring_type=declaring_type,
            methods=methods,
            properties=properties,
            events=events,
            namespaces=frozenset(namespaces),
        )

        if model.needs_instance and not raw_type.has_public_parameterless_constructor:
            warnings.append(
                SurfaceWarning(
                    raw_type.full_name,
                    "no public parameterless constructor; generated wrapper assumes one",
                )
            )

        for warning in warnings:
            logger.warning(f"Unsupported member shape: {warning}")
        logger.info(
            f"Built surface of {declaring_type}: {len(properties)} properties, "
            f"{len(methods)} methods, {len(events)} events"
        )
        return SurfaceBuildResult(model=model, warnings=warnings)

    def _build_method(
        self,
        raw: RawMethod,
        declaring_type: TypeRef,
        resolver: TypeResolver,
        warnings: List[SurfaceWarning],
    ) -> MethodDescriptor:
        member = f"{declaring_type}.{raw.name}"
        validate_identifier(raw.name, f"method {member}")

        generic_names = []
        for generic in raw.generic_parameters:
            generic_names.append(validate_identifier(generic.name, f"type parameter of {member}"))
            if generic.constraints:
                warnings.append(
                    SurfaceWarning(
                        member,
                        f"constraints on '{generic.name}' dropped: {', '.join(generic.constraints)}",
                    )
                )

        scope = resolver.with_generic_parameters(generic_names)
        return MethodDescriptor(
            name=raw.name,
            declaring_type=declaring_type,
            is_static=raw.is_static,
            return_type=scope.resolve(raw.return_type),
            parameters=self._build_parameters(raw.parameters, scope, member, warnings),
            generic_parameters=tuple(generic_names),
        )

    def _build_parameters(
        self,
        raw_parameters: List[RawParameter],
        resolver: TypeResolver,
        member: str,
        warnings: Optional[List[SurfaceWarning]] = None,
    ) -> Tuple[ParameterDescriptor, ...]:
        parameters = []
        for raw in raw_parameters:
            validate_identifier(raw.name, f"parameter of {member}")
            if raw.has_default and warnings is not None:
                warnings.append(
                    SurfaceWarning(member, f"default value of parameter '{raw.name}' not preserved")
                )
            parameters.append(ParameterDescriptor(name=raw.name, type=resolver.resolve(raw.type)))
        return tuple(parameters)

    def _build_property(
        self, raw: RawProperty, declaring_type: TypeRef, resolver: TypeResolver
    ) -> PropertyDescriptor:
        validate_identifier(raw.name, f"property {declaring_type}.{raw.name}")
        return PropertyDescriptor(
            name=raw.name,
            declaring_type=declaring_type,
            value_type=resolver.resolve(raw.type),
            readable=raw.has_public_getter,
            writable=raw.has_public_setter,
            is_static=raw.is_static,
        )

    def _build_event(
        self,
        raw: RawEvent,
        declaring_type: TypeRef,
        resolver: TypeResolver,
        catalog: TypeCatalog,
    ) -> EventDescriptor:
        member = f"{declaring_type}.{raw.name}"
        validate_identifier(raw.name, f"event {member}")
        handler_type = resolver.resolve(raw.type)
        return EventDescriptor(
            name=raw.name,
            declaring_type=declaring_type,
            handler_type=handler_type,
            handler_parameters=self._delegate_parameters(handler_type, catalog, member),
            is_static=raw.is_static,
        )

    def _delegate_parameters(
        self, handler_type: TypeRef, catalog: TypeCatalog, member: str
    ) -> Tuple[ParameterDescriptor, ...]:
        """Resolve the invocation parameters of an event's delegate type."""
        if handler_type.is_generic_parameter:
            raise UnresolvableTypeError(handler_type.name, f"event {member} has a generic handler type")

        raw_delegate: Optional[RawType] = catalog.find(handler_type.full_name)
        if raw_delegate is not None:
            if raw_delegate.kind != "delegate" or raw_delegate.invoke is None:
                raise UnresolvableTypeError(
                    handler_type.full_name, f"handler type of {member} is not a delegate"
                )
            generic_names = raw_delegate.generic_parameters
            raw_parameters = raw_delegate.invoke.parameters
        elif handler_type.full_name in BUILTIN_DELEGATES:
            generic_names, signature = BUILTIN_DELEGATES[handler_type.full_name]
            raw_parameters = [RawParameter(name=name, type=type_) for name, type_ in signature]
        else:
            raise UnresolvableTypeError(
                handler_type.full_name, f"invocation signature for event {member} is unknown"
            )

        bindings = dict(zip(generic_names, handler_type.arguments))
        return self._build_parameters(raw_parameters, TypeResolver(bindings), member)
