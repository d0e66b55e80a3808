"""
Type reference resolution.

Turns reflection-style type reference strings into TypeRef objects, recursing
into generic arguments. Generic parameters in scope (type-level bindings or
method-level type parameters) are substituted or marked as such.

Grammar::

    reference := path [ "[" reference ("," reference)* "]" ] array*
    path      := [namespace "."] name ["`" arity]
    array     := "[" ","* "]"
"""

import re
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import UnresolvableTypeError
from ..identifiers import validate_identifier, validate_namespace
from .models import ARITY_MARKER, TypeRef

_TOKEN_RE = re.compile(r"\s*(\[|\]|,|[^\[\],]+)")
_PUNCTUATION = frozenset({"[", "]", ","})


def _tokenize(reference: str) -> List[str]:
    tokens = []
    position = 0
    while position < len(reference):
        match = _TOKEN_RE.match(reference, position)
        if match is None:
            break
        token = match.group(1).strip()
        if token:
            tokens.append(token)
        position = match.end()
    return tokens


class TypeResolver:
    """Resolves type reference strings within a generic scope."""

    def __init__(self, bindings: Optional[Dict[str, TypeRef]] = None):
        self._bindings: Dict[str, TypeRef] = dict(bindings or {})

    def with_generic_parameters(self, names: Iterable[str]) -> "TypeResolver":
        """Return a resolver where ``names`` are open method type parameters."""
        bindings = dict(self._bindings)
        for name in names:
            bindings[name] = TypeRef(name=name, is_generic_parameter=True)
        return TypeResolver(bindings)

    def resolve(self, reference: str) -> TypeRef:
        tokens = _tokenize(reference)
        if not tokens:
            raise UnresolvableTypeError(reference, "empty type reference")
        type_ref, index = self._parse(tokens, 0, reference)
        if index != len(tokens):
            raise UnresolvableTypeError(reference, f"unexpected '{tokens[index]}'")
        return type_ref

    def _parse(self, tokens: List[str], index: int, reference: str) -> Tuple[TypeRef, int]:
        if index >= len(tokens) or tokens[index] in _PUNCTUATION:
            raise UnresolvableTypeError(reference, "expected a type name")
        path = tokens[index]
        index += 1

        arguments: List[TypeRef] = []
        if index + 1 < len(tokens) and tokens[index] == "[" and tokens[index + 1] not in _PUNCTUATION:
            index += 1
            while True:
                argument, index = self._parse(tokens, index, reference)
                arguments.append(argument)
                if index >= len(tokens):
                    raise UnresolvableTypeError(reference, "unterminated generic argument list")
                token = tokens[index]
                index += 1
                if token == "]":
                    break
                if token != ",":
                    raise UnresolvableTypeError(reference, f"unexpected '{token}'")

        ranks: List[int] = []
        while index < len(tokens) and tokens[index] == "[":
            rank = 1
            index += 1
            while index < len(tokens) and tokens[index] == ",":
                rank += 1
                index += 1
            if index >= len(tokens) or tokens[index] != "]":
                raise UnresolvableTypeError(reference, "malformed array suffix")
            index += 1
            ranks.append(rank)

        return self._make(path, arguments, tuple(ranks), reference), index

    def _make(
        self, path: str, arguments: List[TypeRef], ranks: Tuple[int, ...], reference: str
    ) -> TypeRef:
        namespace, _, name = path.rpartition(".")
        if not namespace and not arguments and name in self._bindings:
            bound = self._bindings[name]
            return replace(bound, array_ranks=bound.array_ranks + ranks) if ranks else bound

        simple_name = name
        if ARITY_MARKER in name:
            simple_name, _, arity = name.partition(ARITY_MARKER)
            if not arity.isdigit():
                raise UnresolvableTypeError(reference, f"malformed arity marker in '{name}'")
            if not arguments:
                raise UnresolvableTypeError(reference, f"open generic type '{path}' needs type arguments")
            if int(arity) != len(arguments):
                raise UnresolvableTypeError(
                    reference, f"'{path}' expects {arity} type arguments, got {len(arguments)}"
                )

        validate_identifier(simple_name, f"type name in '{reference}'")
        if namespace:
            validate_namespace(namespace, f"namespace in '{reference}'")
        return TypeRef(
            name=name,
            namespace=namespace or None,
            arguments=tuple(arguments),
            array_ranks=ranks,
        )
