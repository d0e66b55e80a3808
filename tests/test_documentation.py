"""
Tests for XML documentation lookup.
"""

import logging

import pytest

from quickwrap.documentation import XmlDocumentationProvider, documentation_id
from quickwrap.surface.models import (
    EventDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeRef,
)

HTTP_CLIENT = TypeRef("HttpClient", "System.Net.Http")
STRING = TypeRef("String", "System")

DOC_XML = """<?xml version="1.0"?>
<doc>
    <assembly><name>System.Net.Http</name></assembly>
    <members>
        <member name="P:System.Net.Http.HttpClient.Timeout">
            <summary>
                Gets or sets the timespan to wait
                before the request times out.
            </summary>
        </member>
        <member name="M:System.Net.Http.HttpClient.GetAsync(System.String)">
            <summary>Send a GET request to the <see cref="T:System.Uri"/> specified.</summary>
        </member>
        <member name="M:System.Net.Http.HttpClient.CancelPendingRequests">
            <remarks>No summary here.</remarks>
        </member>
    </members>
</doc>
"""


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "System.Net.Http.xml"
    path.write_text(DOC_XML, encoding="utf-8")
    return str(path)


class TestDocumentationId:
    """Tests for documentation_id."""

    def test_property_and_event(self):
        """Test property and event prefixes."""
        prop = PropertyDescriptor("Timeout", HTTP_CLIENT, TypeRef("TimeSpan", "System"), True, True)
        event = EventDescriptor("Completed", TypeRef("Worker", "Acme.Jobs"), TypeRef("Handler", "Acme.Jobs"))
        assert documentation_id(prop) == "P:System.Net.Http.HttpClient.Timeout"
        assert documentation_id(event) == "E:Acme.Jobs.Worker.Completed"

    def test_method_without_parameters(self):
        """Test that parameterless methods carry no parentheses."""
        method = MethodDescriptor("CancelPendingRequests", HTTP_CLIENT, False)
        assert documentation_id(method) == "M:System.Net.Http.HttpClient.CancelPendingRequests"

    def test_generic_parameter_types(self):
        """Test braces for generic arguments and positional method type parameters."""
        method = MethodDescriptor(
            name="Fill",
            declaring_type=TypeRef("Cache`1", "Acme", (STRING,)),
            is_static=False,
            parameters=(
                ParameterDescriptor(
                    "items",
                    TypeRef("List`1", "System.Collections.Generic", (TypeRef("T", is_generic_parameter=True),)),
                ),
                ParameterDescriptor("grid", TypeRef("Int32", "System", array_ranks=(2,))),
                ParameterDescriptor("data", TypeRef("Byte", "System", array_ranks=(1,))),
            ),
            generic_parameters=("T",),
        )
        assert documentation_id(method) == (
            "M:Acme.Cache`1.Fill``1(System.Collections.Generic.List{``0},System.Int32[0:,0:],System.Byte[])"
        )


class TestXmlDocumentationProvider:
    """Tests for XmlDocumentationProvider."""

    def test_load_summaries(self, doc_file):
        """Test that summaries are read and whitespace-normalized."""
        provider = XmlDocumentationProvider.load(doc_file)
        prop = PropertyDescriptor("Timeout", HTTP_CLIENT, TypeRef("TimeSpan", "System"), True, True)

        assert len(provider) == 2
        assert provider.summary(prop) == (
            "Gets or sets the timespan to wait before the request times out."
        )

    def test_nested_elements_flattened(self, doc_file):
        """Test that inline elements contribute their text."""
        provider = XmlDocumentationProvider.load(doc_file)
        method = MethodDescriptor(
            "GetAsync", HTTP_CLIENT, False, parameters=(ParameterDescriptor("requestUri", STRING),)
        )
        assert provider.summary(method) == "Send a GET request to the specified."

    def test_member_without_summary(self, doc_file):
        """Test that members without a summary return None."""
        provider = XmlDocumentationProvider.load(doc_file)
        assert provider.summary(MethodDescriptor("CancelPendingRequests", HTTP_CLIENT, False)) is None

    def test_missing_file_is_not_fatal(self, tmp_path, caplog):
        """Test that a missing file yields an empty provider and a warning."""
        with caplog.at_level(logging.WARNING, logger="quickwrap.documentation"):
            provider = XmlDocumentationProvider.load(str(tmp_path / "missing.xml"))
        assert len(provider) == 0
        assert "not found" in caplog.text

    def test_malformed_file_is_not_fatal(self, tmp_path):
        """Test that unparsable XML degrades to an empty provider."""
        path = tmp_path / "broken.xml"
        path.write_text("<doc><members>", encoding="utf-8")
        assert len(XmlDocumentationProvider.load(str(path))) == 0

    def test_unreadable_file_is_not_fatal(self, tmp_path, caplog):
        """Test that a path that cannot be opened degrades to an empty provider."""
        path = tmp_path / "Acme.xml"
        path.mkdir()
        with caplog.at_level(logging.WARNING, logger="quickwrap.documentation"):
            provider = XmlDocumentationProvider.load(str(path))
        assert len(provider) == 0
        assert "Unreadable documentation file" in caplog.text

    def test_no_path(self):
        """Test that no path means no documentation."""
        assert len(XmlDocumentationProvider.load(None)) == 0
