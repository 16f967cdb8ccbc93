"""Tests for the pipeline and pipeline component parsers."""

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, Pipeline, PipelineDirection
from bizresolve.kernel.constants import (
    DEFINITION_RECEIVE_PIPELINE,
    DEFINITION_SEND_PIPELINE,
    RESOURCE_PIPELINE_COMPONENT,
    RESOURCE_RECEIVE_PIPELINE,
    RESOURCE_SEND_PIPELINE,
)
from bizresolve.kernel.tree import ResourceDefinition
from bizresolve.parsers import PipelineComponentParser, PipelineParser

RECEIVE_PIPELINE_XML = """<?xml version="1.0" encoding="utf-16"?>
<Document xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Description>Receives orders</Description>
  <Stages>
    <Stage CategoryId="9d0e4103-4cce-4536-83fa-4a5040674ad6">
      <Components>
        <Component>
          <Name>Microsoft.BizTalk.Component.XmlDasmComp</Name>
          <ComponentName>XML disassembler</ComponentName>
          <Description>Streaming XML disassembler</Description>
        </Component>
        <Component>
          <Name>Microsoft.BizTalk.Component.PartyRes</Name>
          <ComponentName>Party resolution</ComponentName>
        </Component>
      </Components>
    </Stage>
  </Stages>
</Document>
"""


def _pipeline_model(make_model, direction=PipelineDirection.RECEIVE, content=RECEIVE_PIPELINE_XML):
    kind = DEFINITION_SEND_PIPELINE if direction == PipelineDirection.SEND else DEFINITION_RECEIVE_PIPELINE
    definition = ResourceDefinition(key="asm:OrderPipeline", name="OrderPipeline", kind=kind, content=content)
    pipeline = Pipeline(
        name="OrderPipeline",
        full_name="Orders.Pipelines.OrderPipeline",
        direction=direction,
        resource_definition_key="asm:OrderPipeline",
    )
    model = make_model([definition], [Application(name="Orders", pipelines=[pipeline])])
    return model, definition, pipeline


def test_receive_pipeline_resource(make_model, context, diagnostics):
    """Test that a receive pipeline gets its resource and decoded document."""
    model, definition, pipeline = _pipeline_model(make_model)

    PipelineParser(model, context, diagnostics).parse()

    assert context.errors == []
    resource = definition.resources[0]
    assert resource.key == "asm:OrderPipeline:pipelineresource"
    assert resource.kind == RESOURCE_RECEIVE_PIPELINE
    assert resource.description == "Receives orders"
    assert pipeline.resource_key == resource.key
    assert pipeline.document is not None
    assert model.tree.source_of(resource) is pipeline
    assert pipeline.resource_ref == resource.ref_id


def test_send_pipeline_uses_send_kinds(make_model, context, diagnostics):
    """Test that send pipelines resolve against send pipeline definitions."""
    model, definition, _ = _pipeline_model(make_model, direction=PipelineDirection.SEND)

    PipelineParser(model, context, diagnostics).parse()

    assert context.errors == []
    assert definition.resources[0].kind == RESOURCE_SEND_PIPELINE


def test_pipeline_direction_mismatch(make_model, context, diagnostics):
    """Test that the definition kind must match the pipeline direction."""
    model, _, pipeline = _pipeline_model(make_model)
    pipeline.direction = PipelineDirection.SEND

    PipelineParser(model, context, diagnostics).parse()

    assert len(context.errors) == 1
    assert "asm:OrderPipeline" in context.errors[0].message
    assert DEFINITION_SEND_PIPELINE in context.errors[0].message
    assert model.tree.resource_count() == 0


def test_pipeline_malformed_document(make_model, context, diagnostics):
    """Test that an undecodable document is one error and no resource."""
    model, definition, pipeline = _pipeline_model(make_model, content="<Document>")

    PipelineParser(model, context, diagnostics).parse()

    assert len(context.errors) == 1
    assert context.errors[0].code == ErrorCode.PIPELINE_DOCUMENT_PARSE_ERROR.value
    assert "OrderPipeline" in context.errors[0].message
    assert definition.resources == []
    assert pipeline.document is None


def test_pipeline_components(make_model, context, diagnostics):
    """Test that each stage component becomes a resource beneath the pipeline."""
    model, definition, pipeline = _pipeline_model(make_model)
    PipelineParser(model, context, diagnostics).parse()

    PipelineComponentParser(model, context, diagnostics).parse()

    assert context.errors == []
    pipeline_resource = definition.resources[0]
    components = pipeline_resource.resources
    assert [r.key for r in components] == [
        "asm:OrderPipeline:pipelineresource:XML disassembler",
        "asm:OrderPipeline:pipelineresource:Party resolution",
    ]
    assert all(r.kind == RESOURCE_PIPELINE_COMPONENT for r in components)
    assert components[0].description == "Streaming XML disassembler"
    assert components[0].properties["ComponentType"] == "Microsoft.BizTalk.Component.XmlDasmComp"
    for resource, component in zip(components, pipeline.document.components()):
        assert model.tree.source_of(resource) is component
        assert component.resource_ref == resource.ref_id


def test_pipeline_components_missing_pipeline_resource(make_model, context, diagnostics):
    """Test that a decoded pipeline whose resource is missing is one error."""
    model, _, pipeline = _pipeline_model(make_model)
    PipelineParser(model, context, diagnostics).parse()
    pipeline.resource_key = "asm:Elsewhere:pipelineresource"

    PipelineComponentParser(model, context, diagnostics).parse()

    assert len(context.errors) == 1
    assert "asm:Elsewhere:pipelineresource" in context.errors[0].message
    assert RESOURCE_RECEIVE_PIPELINE in context.errors[0].message
    assert model.tree.find_resources_by_kind(RESOURCE_PIPELINE_COMPONENT) == []


def test_pipeline_components_skip_undecoded_pipelines(make_model, context, diagnostics):
    """Test that pipelines without a decoded document are not reported twice."""
    model, _, _ = _pipeline_model(make_model)

    PipelineComponentParser(model, context, diagnostics).parse()

    assert context.errors == []
    assert model.tree.resource_count() == 0
