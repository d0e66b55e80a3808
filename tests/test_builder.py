"""
Tests for surface model construction.
"""

from pathlib import Path

import pytest

from quickwrap.errors import InvalidIdentifierError, UnresolvableTypeError
from quickwrap.surface.builder import SurfaceModelBuilder
from quickwrap.surface.catalog import TypeCatalog, load_catalog
from quickwrap.surface.models import TypeRef

FIXTURES = Path(__file__).parent / "fixtures"

STRING = TypeRef("String", "System")


@pytest.fixture(scope="module")
def http_catalog():
    return load_catalog(str(FIXTURES / "http_client.yaml"))


@pytest.fixture(scope="module")
def acme_catalog():
    return load_catalog(str(FIXTURES / "acme.yaml"))


@pytest.fixture
def builder():
    return SurfaceModelBuilder()


class TestHttpClientSurface:
    """Building the HttpClient fixture."""

    def test_property_accessors(self, builder, http_catalog):
        """Test readability and writability flags."""
        model = builder.build(http_catalog, "System.Net.Http.HttpClient").model
        props = {p.name: p for p in model.properties}

        assert props["Timeout"].readable and props["Timeout"].writable
        assert props["DefaultRequestHeaders"].readable
        assert not props["DefaultRequestHeaders"].writable
        assert props["DefaultProxy"].is_static

    def test_generic_return_type(self, builder, http_catalog):
        """Test that generic return types resolve recursively."""
        model = builder.build(http_catalog, "System.Net.Http.HttpClient").model
        get_async = [m for m in model.methods if m.name == "GetAsync"][0]

        assert get_async.return_type == TypeRef(
            "Task`1",
            "System.Threading.Tasks",
            (TypeRef("HttpResponseMessage", "System.Net.Http"),),
        )
        assert get_async.parameters[0].type == STRING
        assert get_async.returns_value

    def test_void_method(self, builder, http_catalog):
        """Test that methods without a return type are void."""
        model = builder.build(http_catalog, "System.Net.Http.HttpClient").model
        cancel = [m for m in model.methods if m.name == "CancelPendingRequests"][0]
        assert not cancel.returns_value

    def test_default_value_warning(self, builder, http_catalog):
        """Test that dropped default values are reported, not fatal."""
        result = builder.build(http_catalog, "System.Net.Http.HttpClient")
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.member == "System.Net.Http.HttpClient.SendAsync"
        assert "cancellationToken" in warning.reason

    def test_namespaces(self, builder, http_catalog):
        """Test that every referenced namespace is collected."""
        model = builder.build(http_catalog, "System.Net.Http.HttpClient").model
        assert model.namespaces == {
            "System",
            "System.Net",
            "System.Net.Http",
            "System.Net.Http.Headers",
            "System.Threading",
            "System.Threading.Tasks",
        }

    def test_needs_instance(self, builder, http_catalog):
        """Test that instance members require a wrapped instance."""
        assert builder.build(http_catalog, "System.Net.Http.HttpClient").model.needs_instance


class TestAcmeSurfaces:
    """Building the small Acme fixtures."""

    def test_static_only_type(self, builder, acme_catalog):
        """Test that a static surface needs no instance and raises no warnings."""
        result = builder.build(acme_catalog, "Acme.Text.Parser")
        assert not result.model.needs_instance
        assert result.warnings == []
        assert result.model.methods[0].is_static

    def test_event_handler_from_catalog_delegate(self, builder, acme_catalog):
        """Test that delegate invocation parameters are attached to events."""
        model = builder.build(acme_catalog, "Acme.Jobs.Worker").model
        event = model.events[0]

        assert event.handler_type == TypeRef("Handler", "Acme.Jobs")
        assert [p.name for p in event.handler_parameters] == ["result"]
        assert event.handler_parameters[0].type == TypeRef("Result", "Acme.Jobs")
        assert model.needs_instance

    def test_missing_parameterless_constructor_warning(self, builder, acme_catalog):
        """Test that an instance wrapper over a type without a default constructor is flagged."""
        result = builder.build(acme_catalog, "Acme.Net.Session")
        assert [w.member for w in result.warnings] == ["Acme.Net.Session"]
        assert "parameterless constructor" in result.warnings[0].reason

    def test_closed_generic_target(self, builder, acme_catalog):
        """Test that type-level parameters are bound to the closed arguments."""
        result = builder.build(acme_catalog, "Acme.Caching.Cache`1[System.String]")
        model = result.model
        methods = {m.name: m for m in model.methods}

        assert model.declaring_type == TypeRef("Cache`1", "Acme.Caching", (STRING,))
        assert methods["Get"].return_type == STRING

        convert = methods["Convert"]
        assert convert.generic_parameters == ("TResult",)
        assert convert.return_type.arguments[0] == TypeRef("TResult", is_generic_parameter=True)
        assert convert.parameters[0].type.arguments == (STRING, STRING)

    def test_constraint_warning(self, builder, acme_catalog):
        """Test that generic constraints are reported as dropped."""
        result = builder.build(acme_catalog, "Acme.Caching.Cache`1[System.String]")
        reasons = [w.reason for w in result.warnings]
        assert any("constraints on 'TResult'" in reason for reason in reasons)

    def test_open_generic_target_rejected(self, builder, acme_catalog):
        """Test that a generic target needs its type arguments."""
        with pytest.raises(UnresolvableTypeError):
            builder.build(acme_catalog, "Acme.Caching.Cache`1")

    def test_unknown_target(self, builder, acme_catalog):
        """Test that an unknown target fails fast."""
        with pytest.raises(UnresolvableTypeError):
            builder.build(acme_catalog, "Acme.Missing")


class TestEventDelegates:
    """Resolution of event handler signatures."""

    def _catalog(self, event_type, extra_types=()):
        return TypeCatalog.from_dict(
            {
                "types": [
                    {
                        "name": "Button",
                        "namespace": "Acme.Ui",
                        "events": [{"name": "Clicked", "type": event_type}],
                    },
                    *extra_types,
                ]
            }
        )

    def test_builtin_event_handler(self, builder):
        """Test System.EventHandler without a catalog entry."""
        model = builder.build(self._catalog("System.EventHandler"), "Acme.Ui.Button").model
        assert [p.name for p in model.events[0].handler_parameters] == ["sender", "e"]

    def test_builtin_generic_event_handler(self, builder):
        """Test that EventHandler`1 binds its argument type."""
        catalog = self._catalog("System.EventHandler`1[Acme.Ui.ClickArgs]")
        event = builder.build(catalog, "Acme.Ui.Button").model.events[0]
        assert event.handler_parameters[1].type == TypeRef("ClickArgs", "Acme.Ui")

    def test_unknown_delegate(self, builder):
        """Test that an undeclared handler type is unresolvable."""
        with pytest.raises(UnresolvableTypeError):
            builder.build(self._catalog("Acme.Ui.ClickHandler"), "Acme.Ui.Button")

    def test_handler_type_not_a_delegate(self, builder):
        """Test that a catalog type used as handler must be a delegate."""
        catalog = self._catalog("Acme.Ui.Widget", [{"name": "Widget", "namespace": "Acme.Ui"}])
        with pytest.raises(UnresolvableTypeError):
            builder.build(catalog, "Acme.Ui.Button")


class TestIdentifierValidation:
    """Names that are not legal identifiers."""

    def test_invalid_parameter_name(self, builder):
        """Test that an illegal parameter name aborts the build with context."""
        catalog = TypeCatalog.from_dict(
            {
                "types": [
                    {
                        "name": "Clock",
                        "namespace": "Acme",
                        "methods": [
                            {"name": "Tick", "parameters": [{"name": "1st", "type": "System.Int32"}]}
                        ],
                    }
                ]
            }
        )
        with pytest.raises(InvalidIdentifierError) as exc_info:
            builder.build(catalog, "Acme.Clock")
        assert "Acme.Clock.Tick" in str(exc_info.value)
