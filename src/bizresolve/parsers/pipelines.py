"""Pipeline parsers: pipeline resources and their stage components."""

from typing import List, Tuple

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, ParsedApplication, Pipeline, PipelineDirection
from bizresolve.kernel import constants as c
from bizresolve.kernel.pipeline_document import PipelineDocumentError, parse_pipeline_document
from bizresolve.kernel.tree import Resource

from .base import ArtifactParser


def pipeline_kinds(direction: PipelineDirection) -> Tuple[str, str]:
    """(definition kind, resource kind) for a pipeline direction."""
    if direction == PipelineDirection.SEND:
        return c.DEFINITION_SEND_PIPELINE, c.RESOURCE_SEND_PIPELINE
    return c.DEFINITION_RECEIVE_PIPELINE, c.RESOURCE_RECEIVE_PIPELINE


class PipelineParser(ArtifactParser):
    """Decodes each pipeline document and creates the pipeline resource."""

    name = "pipeline"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            for pipeline in application.pipelines:
                self._parse_pipeline(application, pipeline)

    def _parse_pipeline(self, application: Application, pipeline: Pipeline):
        definition_kind, resource_kind = pipeline_kinds(pipeline.direction)
        definition = self.tree.find_resource_definition(pipeline.resource_definition_key, definition_kind)
        if definition is None:
            self.record_missing_definition(pipeline.resource_definition_key, definition_kind)
            return

        try:
            document = parse_pipeline_document(definition.content)
        except PipelineDocumentError as e:
            self.record_error(
                ErrorCode.PIPELINE_DOCUMENT_PARSE_ERROR,
                key=definition.key,
                kind=definition_kind,
                name=pipeline.name,
                application=application.name,
                reason=str(e),
            )
            return
        pipeline.document = document

        resource = Resource(
            key=c.child_key(definition.key, c.SUFFIX_PIPELINE),
            name=pipeline.name,
            kind=resource_kind,
            description=pipeline.description or document.description,
        )
        if self.attach(definition, resource, pipeline) is None:
            return
        pipeline.resource_key = resource.key
        self.relate_to_application(application, resource)


class PipelineComponentParser(ArtifactParser):
    """Creates one resource per component placed in a pipeline's stages."""

    name = "pipeline component"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            for pipeline in parsed.application.pipelines:
                if pipeline.document is None:
                    self.logger.debug("Pipeline %s has no decoded document, skipping components", pipeline.name)
                    continue
                self._parse_components(pipeline)

    def _parse_components(self, pipeline: Pipeline):
        _, resource_kind = pipeline_kinds(pipeline.direction)
        pipeline_resource = self.tree.find_resource(pipeline.resource_key, resource_kind)
        if pipeline_resource is None:
            self.record_missing_resource(pipeline.resource_key, resource_kind)
            return

        for component in pipeline.document.components():
            resource = Resource(
                key=c.child_key(pipeline_resource.key, component.key_name),
                name=component.component_name or component.name,
                kind=c.RESOURCE_PIPELINE_COMPONENT,
                description=component.description,
            )
            resource.properties["ComponentType"] = component.name
            self.attach(pipeline_resource, resource, component)
