"""Tests for the end-to-end parse_model entry point."""

from bizresolve import parse_model
from bizresolve.codes import ErrorCode
from bizresolve.config import RunOptions
from bizresolve.contracts import ParseResult
from bizresolve.entities import (
    Application,
    ApplicationDefinitionFile,
    BindingFile,
    MessageDefinition,
    Orchestration,
    Pipeline,
    PipelineDirection,
    Schema,
    Transform,
)
from bizresolve.kernel import constants as c
from bizresolve.kernel.context import ParseContext
from bizresolve.kernel.tree import ResourceDefinition

APPLICATION_DEFINITION_XML = (
    '<ApplicationDefinition xmlns="http://Microsoft.BizTalk.ApplicationDeployment/ApplicationDefinition.xsd">'
    '<Properties><Property Name="DisplayName" Value="Orders" /></Properties>'
    '</ApplicationDefinition>'
)

ORCHESTRATION_XML = """<om:MetaModel xmlns:om="http://schemas.microsoft.com/BizTalk/2003/DesignerData">
  <om:Element Type="Module">
    <om:Property Name="Name" Value="Orders.Orchestrations" />
    <om:Element Type="CorrelationType">
      <om:Property Name="Name" Value="OrderIdCorrelation" />
    </om:Element>
    <om:Element Type="ServiceDeclaration">
      <om:Property Name="Name" Value="ProcessOrder" />
      <om:Element Type="PortDeclaration">
        <om:Property Name="Name" Value="ReceivePort" />
      </om:Element>
    </om:Element>
  </om:Element>
</om:MetaModel>
"""

PIPELINE_XML = (
    "<Document><Stages><Stage CategoryId='c'><Components>"
    "<Component><Name>Microsoft.BizTalk.Component.XmlDasmComp</Name>"
    "<ComponentName>XML disassembler</ComponentName></Component>"
    "</Components></Stage></Stages></Document>"
)

BINDINGS_XML = (
    '<BindingInfo><ReceivePortCollection>'
    '<ReceivePort Name="In" IsTwoWay="false"><ReceiveLocations>'
    '<ReceiveLocation Name="InFile"><Address>C:\\in\\*.xml</Address>'
    '<ReceiveLocationTransportType Name="FILE" /></ReceiveLocation>'
    '</ReceiveLocations></ReceivePort>'
    '</ReceivePortCollection></BindingInfo>'
)


def _full_model(make_model):
    definitions = [
        ResourceDefinition(key="app:Def", name="Def", kind=c.DEFINITION_APPLICATION_DEFINITION,
                           content=APPLICATION_DEFINITION_XML),
        ResourceDefinition(key="asm:Order", name="Order", kind=c.DEFINITION_SCHEMA),
        ResourceDefinition(key="asm:Map", name="Map", kind=c.DEFINITION_MAP),
        ResourceDefinition(key="asm:Orch", name="Orch", kind=c.DEFINITION_ORCHESTRATION,
                           content=ORCHESTRATION_XML),
        ResourceDefinition(key="asm:Pipe", name="Pipe", kind=c.DEFINITION_RECEIVE_PIPELINE,
                           content=PIPELINE_XML),
        ResourceDefinition(key="app:Bindings", name="Bindings", kind=c.DEFINITION_BINDINGS,
                           content=BINDINGS_XML),
    ]
    application = Application(
        application_definition=ApplicationDefinitionFile(resource_definition_key="app:Def"),
        bindings=BindingFile(resource_definition_key="app:Bindings"),
        schemas=[Schema(name="Order", resource_definition_key="asm:Order",
                        message_definitions=[MessageDefinition(root_element_name="Order")])],
        transforms=[Transform(name="Map", resource_definition_key="asm:Map")],
        orchestrations=[Orchestration(name="Orch", resource_definition_key="asm:Orch")],
        pipelines=[Pipeline(name="Pipe", direction=PipelineDirection.RECEIVE, resource_definition_key="asm:Pipe")],
    )
    return make_model(definitions, [application]), application


def test_parse_model_full_run(make_model):
    """Test that a complete model resolves with no errors."""
    model, application = _full_model(make_model)

    result = parse_model(model)

    assert isinstance(result, ParseResult)
    assert result.ok is True
    assert result.errors == []
    assert application.name == "Orders"
    kinds = [r.kind for r in model.tree.walk_resources()]
    for kind in (
        c.RESOURCE_APPLICATION,
        c.RESOURCE_DOCUMENT_SCHEMA,
        c.RESOURCE_MESSAGE_TYPE,
        c.RESOURCE_MAP,
        c.RESOURCE_META_MODEL,
        c.RESOURCE_MODULE,
        c.RESOURCE_CORRELATION_TYPE,
        c.RESOURCE_SERVICE_DECLARATION,
        c.RESOURCE_PORT_DECLARATION,
        c.RESOURCE_RECEIVE_PIPELINE,
        c.RESOURCE_PIPELINE_COMPONENT,
        c.RESOURCE_RECEIVE_PORT,
        c.RESOURCE_RECEIVE_LOCATION,
    ):
        assert kind in kinds
    assert result.resource_count == len(kinds)


def test_parse_model_relates_artifacts_to_application(make_model):
    """Test that artifact resources are cross-linked to the application resource."""
    model, application = _full_model(make_model)

    parse_model(model)

    app_resource = model.tree.find_resource(application.application_definition.resource_key, c.RESOURCE_APPLICATION)
    related = {model.tree.get(r.ref_id).kind for r in app_resource.relationships}
    assert related == {
        c.RESOURCE_DOCUMENT_SCHEMA,
        c.RESOURCE_MAP,
        c.RESOURCE_META_MODEL,
        c.RESOURCE_RECEIVE_PIPELINE,
        c.RESOURCE_RECEIVE_PORT,
    }


def test_parse_model_reports_only_this_run(make_model):
    """Test that the result holds the records appended by this run only."""
    model, application = _full_model(make_model)
    application.transforms[0].resource_definition_key = "asm:Missing"
    context = ParseContext()
    context.add_error(ErrorCode.SCHEMA_CONTENT_EMPTY, key="earlier", name="x", application="y")

    result = parse_model(model, context=context)

    assert result.ok is False
    assert len(result.errors) == 1
    assert "asm:Missing" in result.errors[0].message
    assert len(context.errors) == 2


def test_parse_model_without_source(make_model):
    """Test that an empty model is a successful run that creates nothing."""
    model = make_model()

    result = parse_model(model)

    assert result.ok is True
    assert result.resource_count == 0


def test_parse_model_with_disabled_parsers(make_model):
    """Test that options reach the runner."""
    model, _ = _full_model(make_model)

    result = parse_model(model, options=RunOptions(disabled_parsers=["pipeline_component"]))

    assert "pipeline_component" not in result.parsers_run
    assert model.tree.find_resources_by_kind(c.RESOURCE_PIPELINE_COMPONENT) == []
