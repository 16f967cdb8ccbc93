"""Artifact parsers, one per artifact kind."""

from .application import ApplicationParser
from .base import ArtifactParser, MissingCollaboratorError
from .bindings import BindingFileParser, BindingInfoParser, DistributionListParser, SendPortParser
from .orchestration import (
    CorrelationTypeParser,
    ModuleElementParser,
    MultipartMessageTypeParser,
    OrchestrationParser,
    PortTypeParser,
    ServiceDeclarationParser,
    ServiceLinkTypeParser,
)
from .pipeline_data import (
    PipelineDataParser,
    ReceivePortParser,
    ReceivePortPipelineDataParser,
    SendPortPipelineDataParser,
)
from .pipelines import PipelineComponentParser, PipelineParser
from .schemas import DocumentSchemaParser, PropertySchemaParser
from .transform import TransformParser

__all__ = [
    "ApplicationParser",
    "ArtifactParser",
    "BindingFileParser",
    "BindingInfoParser",
    "CorrelationTypeParser",
    "DistributionListParser",
    "DocumentSchemaParser",
    "MissingCollaboratorError",
    "ModuleElementParser",
    "MultipartMessageTypeParser",
    "OrchestrationParser",
    "PipelineComponentParser",
    "PipelineDataParser",
    "PipelineParser",
    "PortTypeParser",
    "PropertySchemaParser",
    "ReceivePortParser",
    "ReceivePortPipelineDataParser",
    "SendPortParser",
    "SendPortPipelineDataParser",
    "ServiceDeclarationParser",
    "ServiceLinkTypeParser",
    "TransformParser",
]
