"""
Error types for QuickWrap.

Fatal problems are raised as exceptions derived from QuickWrapError.
Unsupported member shapes are not fatal: they are collected as SurfaceWarning
records and handed back to the caller next to the generated sources.
"""

from dataclasses import dataclass
from typing import Any, Dict


class QuickWrapError(Exception):
    """Base class for all QuickWrap errors."""

    pass


class CatalogError(QuickWrapError):
    """Raised when a type catalog document is malformed."""

    pass


class UnresolvableTypeError(QuickWrapError):
    """Raised when a target or referenced type cannot be resolved."""

    def __init__(self, type_name: str, reason: str = ""):
        self.type_name = type_name
        self.reason = reason
        message = f"Cannot resolve type '{type_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidIdentifierError(QuickWrapError):
    """Raised when a computed or declared name is not a legal C# identifier."""

    def __init__(self, identifier: str, context: str):
        self.identifier = identifier
        self.context = context
        super().__init__(f"'{identifier}' is not a valid identifier ({context})")


@dataclass(frozen=True)
class SurfaceWarning:
    """A member the generated wrapper cannot represent faithfully."""

    member: str
    reason: str

    def __str__(self) -> str:
        return f"{self.member}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {"member": self.member, "reason": self.reason}
