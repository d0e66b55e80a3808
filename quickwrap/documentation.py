"""
XML documentation lookup.

Reads the side-car XML documentation file that ships next to a .NET assembly
and returns member summaries keyed by documentation id:

    P:System.Net.Http.HttpClient.Timeout
    M:System.Net.Http.HttpClient.GetAsync(System.String)
    M:Acme.Cache.Get``1(System.String)
    E:Acme.Worker.Completed

Documentation is best-effort. A missing or unreadable file yields an empty
provider and a logged warning; synthesis never depends on it.
"""

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import Dict, Optional, Sequence, Union

from .surface.models import (
    ARITY_MARKER,
    EventDescriptor,
    MethodDescriptor,
    PropertyDescriptor,
    TypeRef,
)

logger = logging.getLogger(__name__)

Member = Union[MethodDescriptor, PropertyDescriptor, EventDescriptor]

_WHITESPACE_RE = re.compile(r"\s+")


def _id_type_name(type_ref: TypeRef, method_generics: Sequence[str]) -> str:
    """Render a parameter type the way documentation ids spell it."""
    if type_ref.is_generic_parameter:
        if type_ref.name in method_generics:
            name = f"``{list(method_generics).index(type_ref.name)}"
        else:
            name = type_ref.name
    elif type_ref.arguments:
        inner = ",".join(_id_type_name(a, method_generics) for a in type_ref.arguments)
        prefix = f"{type_ref.namespace}." if type_ref.namespace else ""
        name = f"{prefix}{type_ref.simple_name}{{{inner}}}"
    else:
        name = type_ref.full_name

    for rank in type_ref.array_ranks:
        name += "[]" if rank == 1 else "[" + ",".join(["0:"] * rank) + "]"
    return name


def documentation_id(member: Member) -> str:
    """Compute the documentation id of a surfaced member."""
    # Ids name the generic definition (Cache`1), never its closed arguments
    owner = member.declaring_type.full_name
    if isinstance(member, PropertyDescriptor):
        return f"P:{owner}.{member.name}"
    if isinstance(member, EventDescriptor):
        return f"E:{owner}.{member.name}"

    name = member.name
    if member.generic_parameters:
        name += f"{ARITY_MARKER * 2}{len(member.generic_parameters)}"
    doc_id = f"M:{owner}.{name}"
    if member.parameters:
        types = ",".join(
            _id_type_name(p.type, member.generic_parameters) for p in member.parameters
        )
        doc_id += f"({types})"
    return doc_id


class XmlDocumentationProvider:
    """Summaries read from a .NET XML documentation file."""

    def __init__(self, summaries: Optional[Dict[str, str]] = None):
        self._summaries: Dict[str, str] = dict(summaries or {})

    def __len__(self) -> int:
        return len(self._summaries)

    @classmethod
    def load(cls, path: Optional[str]) -> "XmlDocumentationProvider":
        """Load summaries from ``path``; degrade to an empty provider on failure."""
        if not path:
            return cls()
        if not os.path.exists(path):
            logger.warning(f"Documentation file not found, continuing without it: {path}")
            return cls()
        try:
            root = ET.parse(path).getroot()
        except (ET.ParseError, OSError) as e:
            logger.warning(f"Unreadable documentation file {path}: {e}")
            return cls()

        summaries: Dict[str, str] = {}
        for member in root.iter("member"):
            doc_id = member.get("name")
            summary = member.find("summary")
            if not doc_id or summary is None:
                continue
            text = _WHITESPACE_RE.sub(" ", "".join(summary.itertext())).strip()
            if text:
                summaries[doc_id] = text

        logger.debug(f"Loaded {len(summaries)} documentation summaries from {path}")
        return cls(summaries)

    def summary(self, member: Member) -> Optional[str]:
        return self._summaries.get(documentation_id(member))
