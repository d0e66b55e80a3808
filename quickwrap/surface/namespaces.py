"""
Namespace collection for generated ``using`` directives.
"""

from typing import Iterable, Set

from .models import EventDescriptor, MethodDescriptor, PropertyDescriptor, TypeRef


def add_namespaces_used(result: Set[str], type_ref: TypeRef) -> None:
    """Add the namespace of ``type_ref`` and of its generic arguments, recursively."""
    for referenced in type_ref.walk():
        if referenced.namespace and not referenced.is_generic_parameter:
            result.add(referenced.namespace)


def collect_namespaces(
    declaring_type: TypeRef,
    methods: Iterable[MethodDescriptor],
    properties: Iterable[PropertyDescriptor],
    events: Iterable[EventDescriptor],
) -> Set[str]:
    """
    Collect every namespace the generated sources need to import.

    Redundant namespaces (a parent next to its child) are kept; the set may
    over-include but never misses a referenced type.
    """
    result: Set[str] = set()
    add_namespaces_used(result, declaring_type)

    for method in methods:
        for type_ref in method.referenced_types():
            add_namespaces_used(result, type_ref)

    for prop in properties:
        for type_ref in prop.referenced_types():
            add_namespaces_used(result, type_ref)

    for event in events:
        for type_ref in event.referenced_types():
            add_namespaces_used(result, type_ref)

    return result
