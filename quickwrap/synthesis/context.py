"""
Rendering context and source writer.

A RenderContext is created fresh for every generation run and passed
explicitly to the synthesizers; there is no process-wide renderer state.
SourceWriter is the small line-oriented builder both synthesizers emit into.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

# Runtime full name -> C# keyword spelling
DEFAULT_KEYWORDS: Dict[str, str] = {
    "System.Void": "void",
    "System.Object": "object",
    "System.String": "string",
    "System.Boolean": "bool",
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.Char": "char",
    "System.Int16": "short",
    "System.UInt16": "ushort",
    "System.Int32": "int",
    "System.UInt32": "uint",
    "System.Int64": "long",
    "System.UInt64": "ulong",
    "System.Single": "float",
    "System.Double": "double",
    "System.Decimal": "decimal",
}


@dataclass(frozen=True)
class RenderContext:
    """Everything the synthesizers need to render one type."""

    output_namespace: str
    interface_prefix: str = "I"
    class_suffix: str = "Service"
    indent: str = "    "
    newline: str = "\n"
    keywords: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_KEYWORDS))

    @classmethod
    def create(
        cls,
        output_namespace: str,
        keyword_overrides: Optional[Dict[str, str]] = None,
        indent_size: int = 4,
        **kwargs,
    ) -> "RenderContext":
        keywords = dict(DEFAULT_KEYWORDS)
        keywords.update(keyword_overrides or {})
        return cls(
            output_namespace=output_namespace,
            indent=" " * indent_size,
            keywords=keywords,
            **kwargs,
        )

    def writer(self) -> "SourceWriter":
        return SourceWriter(self.indent, self.newline)


class SourceWriter:
    """Accumulates indented source lines."""

    def __init__(self, indent: str = "    ", newline: str = "\n"):
        self._indent = indent
        self._newline = newline
        self._level = 0
        self._lines: List[str] = []

    def line(self, text: str = "") -> None:
        if text:
            self._lines.append(f"{self._indent * self._level}{text}")
        else:
            self._lines.append("")

    def blank(self) -> None:
        """Add a blank line unless the previous line is blank or opens a block."""
        if self._lines and self._lines[-1] and not self._lines[-1].endswith("{"):
            self._lines.append("")

    @contextmanager
    def block(self, header: Optional[str] = None) -> Iterator["SourceWriter"]:
        if header:
            self.line(header)
        self.line("{")
        self._level += 1
        try:
            yield self
        finally:
            self._level -= 1
        self.line("}")

    def render(self) -> str:
        return self._newline.join(self._lines) + self._newline
