"""
Member extraction.

Selects the members of a raw type that make up its wrappable surface: public,
declared directly on the type, and not compiler-special.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Set

from .catalog import RawEvent, RawMethod, RawProperty, RawType

logger = logging.getLogger(__name__)

ACCESSOR_PREFIXES = ("get_", "set_")
EVENT_ACCESSOR_PREFIXES = ("add_", "remove_", "raise_")
OPERATOR_PREFIX = "op_"


@dataclass
class ExtractedMembers:
    """Raw members that passed extraction, in declaration order."""

    methods: List[RawMethod] = field(default_factory=list)
    properties: List[RawProperty] = field(default_factory=list)
    events: List[RawEvent] = field(default_factory=list)


class MemberExtractor:
    """Filters a raw type down to its public, declared-only surface."""

    def extract(self, raw_type: RawType) -> ExtractedMembers:
        owner = raw_type.full_name
        result = ExtractedMembers()

        for prop in raw_type.properties:
            if self._keep_property(prop, owner):
                result.properties.append(prop)

        for event in raw_type.events:
            if self._keep_member(event.name, event.declaring_type, owner, event.is_special_name) and (
                event.visibility == "public"
            ):
                result.events.append(event)

        # Accessor names are derived from every declared property/event, public or not
        accessor_names = self._accessor_names(raw_type)
        for method in raw_type.methods:
            if method.visibility != "public":
                continue
            if not self._keep_member(method.name, method.declaring_type, owner, method.is_special_name):
                continue
            if method.name in accessor_names or method.name.startswith(OPERATOR_PREFIX):
                logger.debug(f"Skipping special method {owner}.{method.name}")
                continue
            result.methods.append(method)

        logger.debug(
            f"Extracted {len(result.methods)} methods, {len(result.properties)} properties, "
            f"{len(result.events)} events from {owner}"
        )
        return result

    def _keep_member(self, name: str, declaring_type: str, owner: str, is_special_name: bool) -> bool:
        if declaring_type != owner:
            return False
        if is_special_name:
            logger.debug(f"Skipping special member {owner}.{name}")
            return False
        if "." in name:
            logger.debug(f"Skipping explicit interface member {owner}.{name}")
            return False
        return True

    def _keep_property(self, prop: RawProperty, owner: str) -> bool:
        if not (prop.has_public_getter or prop.has_public_setter):
            return False
        if not self._keep_member(prop.name, prop.declaring_type, owner, prop.is_special_name):
            return False
        if prop.index_parameters:
            logger.debug(f"Skipping indexer {owner}.{prop.name}")
            return False
        return True

    @staticmethod
    def _accessor_names(raw_type: RawType) -> Set[str]:
        names: Set[str] = set()
        for prop in raw_type.properties:
            names.update(f"{prefix}{prop.name}" for prefix in ACCESSOR_PREFIXES)
        for event in raw_type.events:
            names.update(f"{prefix}{event.name}" for prefix in EVENT_ACCESSOR_PREFIXES)
        return names
