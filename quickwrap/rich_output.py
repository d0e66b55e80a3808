"""
Rich terminal output utilities for the QuickWrap CLI.

Provides tables, trees and highlighted source for the terminal. With rich
output disabled the same calls print plain, uncoloured text.
"""

from typing import Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .surface.models import SurfaceModel


class RichOutputManager:
    """Manages rich terminal output with a plain-text mode."""

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """Initialize the output manager."""
        self.use_rich = use_rich
        if console is not None:
            self.console = console
        elif use_rich:
            self.console = Console()
        else:
            self.console = Console(color_system=None, highlight=False, emoji=False)

    def print_section(self, title: str) -> None:
        """Print a section separator."""
        if self.use_rich:
            self.console.rule(f"[bold]{title}[/bold]", style="blue")
        else:
            self.console.print(f"\n--- {title} ---", markup=False)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self._print_marked("green", "✓", message)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self._print_marked("yellow", "⚠", message)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self._print_marked("red", "✗", message)

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self._print_marked("blue", "ℹ", message)

    def _print_marked(self, color: str, marker: str, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[{color}]{marker}[/{color}] ", end="")
            self.console.print(message, markup=False)
        else:
            self.console.print(f"{marker} {message}", markup=False)

    def create_table(self, title: str, *columns: str) -> Table:
        """Create a table with the given columns."""
        table = Table(title=title, show_header=True, header_style="bold blue" if self.use_rich else None)
        for column in columns:
            table.add_column(column)
        return table

    def print_table(self, table: Table) -> None:
        self.console.print(table)

    def print_code(self, code: str, language: str = "csharp", title: Optional[str] = None) -> None:
        """Print code with syntax highlighting."""
        if title:
            self.print_section(title)

        if self.use_rich:
            self.console.print(Syntax(code, language, theme="monokai", line_numbers=True))
        else:
            self.console.print(code, markup=False, end="")

    def print_surface(self, model: SurfaceModel) -> None:
        """Print a surface model as a member tree."""
        tree = Tree(Text(str(model.declaring_type)))

        if model.properties:
            branch = tree.add("Properties")
            for prop in model.properties:
                access = "/".join(a for a, on in (("get", prop.readable), ("set", prop.writable)) if on)
                static = "static " if prop.is_static else ""
                branch.add(Text(f"{static}{prop.name}: {prop.value_type} [{access}]"))

        if model.methods:
            branch = tree.add("Methods")
            for method in model.methods:
                generics = f"<{', '.join(method.generic_parameters)}>" if method.generic_parameters else ""
                params = ", ".join(f"{p.name}: {p.type}" for p in method.parameters)
                static = "static " if method.is_static else ""
                branch.add(Text(f"{static}{method.name}{generics}({params}) -> {method.return_type}"))

        if model.events:
            branch = tree.add("Events")
            for event in model.events:
                branch.add(Text(f"{event.name}: {event.handler_type}"))

        self.console.print(tree)
