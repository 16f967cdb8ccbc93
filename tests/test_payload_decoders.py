"""Tests for the meta model, pipeline document and application definition decoders."""

import pytest

from bizresolve.kernel.application_definition import (
    ApplicationDefinitionError,
    SchemaContentError,
    parse_application_definition,
    parse_context_properties,
)
from bizresolve.kernel.metamodel import MetaModelParseError, find_module, parse_meta_model
from bizresolve.kernel.pipeline_document import PipelineDocumentError, parse_pipeline_document

META_MODEL_XML = """<?xml version="1.0" encoding="utf-16"?>
<om:MetaModel MajorVersion="1" MinorVersion="3" xmlns:om="http://schemas.microsoft.com/BizTalk/2003/DesignerData">
    <om:Element Type="Module" OID="m1">
        <om:Property Name="ReportToAnalyst" Value="True" />
        <om:Property Name="Name" Value="OrderProcessing" />
        <om:Element Type="CorrelationType" OID="c1">
            <om:Property Name="Name" Value="OrderIdCorrelation" />
        </om:Element>
        <om:Element Type="ServiceDeclaration" OID="s1">
            <om:Property Name="Name" Value="ProcessOrder" />
            <om:Element Type="MessageDeclaration" OID="md1">
                <om:Property Name="Name" Value="OrderMessage" />
            </om:Element>
        </om:Element>
    </om:Element>
</om:MetaModel>
"""

PIPELINE_DOCUMENT_XML = """<?xml version="1.0" encoding="utf-16"?>
<Document xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" PolicyFilePath="BTSReceivePolicy.xml" MajorVersion="1" MinorVersion="0">
  <Description>Receives orders</Description>
  <Stages>
    <Stage CategoryId="9d0e4103-4cce-4536-83fa-4a5040674ad6">
      <Components>
        <Component>
          <Name>Microsoft.BizTalk.Component.XmlDasmComp</Name>
          <ComponentName>XML disassembler</ComponentName>
          <Description>Streaming XML disassembler</Description>
        </Component>
      </Components>
    </Stage>
    <Stage CategoryId="9d0e410d-4cce-4536-83fa-4a5040674ad6">
      <Components>
        <Component>
          <Name>Microsoft.BizTalk.Component.PartyRes</Name>
          <ComponentName>Party resolution</ComponentName>
        </Component>
      </Components>
    </Stage>
  </Stages>
</Document>
"""


def test_meta_model_tree_shape():
    """Test that the designer data decodes into a tagged-variant tree."""
    meta_model = parse_meta_model(META_MODEL_XML)

    assert len(meta_model.elements) == 1
    module = meta_model.elements[0]
    assert module.kind == "Module"
    assert module.oid == "m1"
    assert module.name == "OrderProcessing"
    assert module.get_property("ReportToAnalyst") == "True"
    assert [e.kind for e in module.elements] == ["CorrelationType", "ServiceDeclaration"]
    assert [e.name for e in module.children_of_kind("CorrelationType")] == ["OrderIdCorrelation"]


def test_meta_model_walk_and_find():
    """Test depth-first walking and lookup by kind."""
    meta_model = parse_meta_model(META_MODEL_XML)

    assert [e.kind for e in meta_model.walk()] == [
        "Module", "CorrelationType", "ServiceDeclaration", "MessageDeclaration",
    ]
    assert [e.name for e in meta_model.find_elements("MessageDeclaration")] == ["OrderMessage"]
    assert find_module(meta_model).name == "OrderProcessing"


def test_meta_model_without_module():
    """Test that find_module returns None when there is no module."""
    meta_model = parse_meta_model("<MetaModel/>")

    assert meta_model.elements == []
    assert find_module(meta_model) is None
    assert find_module(None) is None


@pytest.mark.parametrize("text", [None, "", "not xml", "<Other/>", "<MetaModel><Element/></MetaModel>"])
def test_meta_model_decode_failures(text):
    """Test that empty, malformed or untyped content fails to decode."""
    with pytest.raises(MetaModelParseError):
        parse_meta_model(text)


def test_pipeline_document_components():
    """Test decoding stages and components of a pipeline document."""
    document = parse_pipeline_document(PIPELINE_DOCUMENT_XML)

    assert document.description == "Receives orders"
    assert len(document.stages) == 2
    components = document.components()
    assert [c.component_name for c in components] == ["XML disassembler", "Party resolution"]
    assert components[0].name == "Microsoft.BizTalk.Component.XmlDasmComp"
    assert components[0].description == "Streaming XML disassembler"
    assert components[1].description == ""


@pytest.mark.parametrize("text", [None, " ", "<Document>"])
def test_pipeline_document_decode_failures(text):
    """Test that empty or malformed documents fail to decode."""
    with pytest.raises(PipelineDocumentError):
        parse_pipeline_document(text)


def test_application_definition_properties():
    """Test reading the property list of an application definition."""
    text = (
        '<ApplicationDefinition xmlns="http://Microsoft.BizTalk.ApplicationDeployment/ApplicationDefinition.xsd">'
        '<Properties>'
        '<Property Name="DisplayName" Value="Order Processing" />'
        '<Property Name="ApplicationDescription" Value="Handles orders" />'
        '</Properties>'
        '</ApplicationDefinition>'
    )

    properties = parse_application_definition(text)

    assert properties == {"DisplayName": "Order Processing", "ApplicationDescription": "Handles orders"}


def test_application_definition_failures():
    """Test that empty or malformed definitions fail to decode."""
    with pytest.raises(ApplicationDefinitionError):
        parse_application_definition(None)
    with pytest.raises(ApplicationDefinitionError):
        parse_application_definition("<ApplicationDefinition>")


def test_context_properties_from_schema():
    """Test reading top-level element declarations from a property schema."""
    text = (
        '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" targetNamespace="https://orders.props">'
        '<xs:element name="OrderId" type="xs:string" />'
        '<xs:element name="Priority" type="xs:int" />'
        '</xs:schema>'
    )

    assert parse_context_properties(text) == [("OrderId", "xs:string"), ("Priority", "xs:int")]


def test_context_properties_require_schema_root():
    """Test that a non-schema root is rejected."""
    with pytest.raises(SchemaContentError):
        parse_context_properties("<NotASchema/>")
