"""
Tests for type reference resolution.
"""

import pytest

from quickwrap.errors import InvalidIdentifierError, UnresolvableTypeError
from quickwrap.surface.models import TypeRef
from quickwrap.surface.resolver import TypeResolver


@pytest.fixture
def resolver():
    return TypeResolver()


class TestTypeResolver:
    """Tests for TypeResolver.resolve."""

    def test_simple_type(self, resolver):
        """Test namespace and name splitting."""
        assert resolver.resolve("System.Net.Http.HttpClient") == TypeRef("HttpClient", "System.Net.Http")

    def test_global_namespace(self, resolver):
        """Test a type without a namespace."""
        assert resolver.resolve("Widget") == TypeRef("Widget")

    def test_generic_arguments_recursive(self, resolver):
        """Test nested generic arguments keep order."""
        type_ref = resolver.resolve(
            "System.Collections.Generic.Dictionary`2[System.String, "
            "System.Collections.Generic.List`1[System.Int32]]"
        )
        assert type_ref.name == "Dictionary`2"
        assert type_ref.namespace == "System.Collections.Generic"
        assert [a.name for a in type_ref.arguments] == ["String", "List`1"]
        assert type_ref.arguments[1].arguments == (TypeRef("Int32", "System"),)

    def test_arrays(self, resolver):
        """Test array suffixes, including inside generic arguments."""
        assert resolver.resolve("System.Byte[]").array_ranks == (1,)
        assert resolver.resolve("System.Int32[,]").array_ranks == (2,)
        task = resolver.resolve("System.Threading.Tasks.Task`1[System.Byte[]]")
        assert task.arguments[0] == TypeRef("Byte", "System", array_ranks=(1,))
        assert task.array_ranks == ()

    def test_method_generic_parameters(self, resolver):
        """Test that method type parameters are marked as such."""
        scoped = resolver.with_generic_parameters(["T"])
        type_ref = scoped.resolve("System.Collections.Generic.List`1[T]")
        assert type_ref.arguments[0] == TypeRef("T", is_generic_parameter=True)

    def test_generic_parameter_array(self, resolver):
        """Test that T[] keeps the parameter binding and adds the rank."""
        scoped = resolver.with_generic_parameters(["T"])
        assert scoped.resolve("T[]") == TypeRef("T", is_generic_parameter=True, array_ranks=(1,))

    def test_type_level_bindings(self):
        """Test that bound type parameters are substituted."""
        string = TypeRef("String", "System")
        resolver = TypeResolver({"TValue": string})
        assert resolver.resolve("TValue") == string

    def test_resolution_is_deterministic(self, resolver):
        """Test that resolving twice gives equal references."""
        reference = "System.Tuple`2[System.String, System.Int32]"
        assert resolver.resolve(reference) == resolver.resolve(reference)

    @pytest.mark.parametrize(
        "reference",
        [
            "",
            "System.Tuple`2[System.String]",
            "System.Collections.Generic.List`1",
            "System.Collections.Generic.List`x[System.String]",
            "System.Collections.Generic.List`1[System.String",
            "System.String]",
            "System.Int32[",
        ],
    )
    def test_unresolvable_references(self, resolver, reference):
        """Test that malformed references fail fast."""
        with pytest.raises(UnresolvableTypeError):
            resolver.resolve(reference)

    def test_invalid_identifier(self, resolver):
        """Test that names that are not identifiers are rejected."""
        with pytest.raises(InvalidIdentifierError):
            resolver.resolve("Acme.<>c__DisplayClass")
