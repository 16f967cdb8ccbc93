"""Parsed source model: applications and the artifacts they declare.

These objects are produced by an upstream reader and handed to the
parsers together with the resource tree. Parsers fill in the
`resource_ref` links and the decoded payload fields.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bizresolve.kernel.binding_info import (  # noqa: F401
    BindingInfo,
    DistributionList,
    ReceiveLocation,
    ReceivePort,
    SendPort,
    ServiceBinding,
)
from bizresolve.kernel.constants import UNKNOWN_APPLICATION_NAME
from bizresolve.kernel.metamodel import MetaModel
from bizresolve.kernel.pipeline_document import PipelineDocument
from bizresolve.kernel.source import SourceObject
from bizresolve.kernel.tree import ResourceTree


class SchemaType(str, Enum):
    UNKNOWN = "unknown"
    DOCUMENT = "document"
    PROPERTY = "property"


class PipelineDirection(str, Enum):
    UNKNOWN = "unknown"
    RECEIVE = "receive"
    SEND = "send"


class ApplicationDefinitionFile(SourceObject):
    """Pointer to an application's definition artifact."""
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None
    resource_key: Optional[str] = None  # set once the application resource exists


class BindingFile(SourceObject):
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None
    binding_info: Optional[BindingInfo] = None


class MessageDefinition(SourceObject):
    """A root element declared by a document schema."""
    root_element_name: str
    xml_namespace: str = ""
    resource_key: Optional[str] = None

    @property
    def message_type(self) -> str:
        return f"{self.xml_namespace}#{self.root_element_name}"


class ContextProperty(SourceObject):
    """A property declared by a property schema."""
    property_name: str
    property_type: str = ""
    namespace: str = ""
    resource_key: Optional[str] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.namespace}.{self.property_name}"


class Schema(SourceObject):
    name: str
    full_name: str = ""
    module_name: str = ""
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None
    resource_key: Optional[str] = None
    schema_type: SchemaType = SchemaType.DOCUMENT
    xml_namespace: str = ""
    dotnet_type_name: str = ""
    is_envelope: bool = False
    body_xpath: Optional[str] = None
    message_definitions: List[MessageDefinition] = Field(default_factory=list)
    context_properties: List[ContextProperty] = Field(default_factory=list)


class Transform(SourceObject):
    name: str
    full_name: str = ""
    module_name: str = ""
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None


class Orchestration(SourceObject):
    name: str
    full_name: str = ""
    module_name: str = ""
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None
    meta_model: Optional[MetaModel] = None  # decoded by the orchestration parser


class Pipeline(SourceObject):
    name: str
    full_name: str = ""
    module_name: str = ""
    description: str = ""
    direction: PipelineDirection = PipelineDirection.UNKNOWN
    resource_container_key: Optional[str] = None
    resource_definition_key: Optional[str] = None
    resource_key: Optional[str] = None  # set by the pipeline parser
    document: Optional[PipelineDocument] = None  # decoded by the pipeline parser


class Application(BaseModel):
    name: str = UNKNOWN_APPLICATION_NAME
    description: Optional[str] = None
    application_definition: Optional[ApplicationDefinitionFile] = None
    bindings: Optional[BindingFile] = None
    schemas: List[Schema] = Field(default_factory=list)
    transforms: List[Transform] = Field(default_factory=list)
    orchestrations: List[Orchestration] = Field(default_factory=list)
    pipelines: List[Pipeline] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Blank names fall back to the placeholder."""
        return v if v and v.strip() else UNKNOWN_APPLICATION_NAME


class ParsedApplication(BaseModel):
    resource_container_key: Optional[str] = None
    application: Application = Field(default_factory=Application)


class ParsedApplicationGroup(BaseModel):
    applications: Optional[List[ParsedApplication]] = None


class MigrationModel(BaseModel):
    """Everything a parser pass reads and mutates."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tree: ResourceTree = Field(default_factory=ResourceTree)
    source: Optional[ParsedApplicationGroup] = None
