"""Kind tags and well-known names used across the resource tree."""

PREFIX = "microsoft.biztalk."

# Containers
CONTAINER_MSI = PREFIX + "resourcecontainer.msi"
CONTAINER_CAB = PREFIX + "resourcecontainer.cab"
CONTAINER_ASSEMBLY = PREFIX + "resourcecontainer.assembly"

# Definitions
DEFINITION_SCHEMA = PREFIX + "resourcedefinition.schema"
DEFINITION_MAP = PREFIX + "resourcedefinition.map"
DEFINITION_RECEIVE_PIPELINE = PREFIX + "resourcedefinition.receivepipeline"
DEFINITION_SEND_PIPELINE = PREFIX + "resourcedefinition.sendpipeline"
DEFINITION_ORCHESTRATION = PREFIX + "resourcedefinition.orchestration"
DEFINITION_APPLICATION_DEFINITION = PREFIX + "resourcedefinition.applicationdefinition"
DEFINITION_BINDINGS = PREFIX + "resourcedefinition.bindings"

# Resources
RESOURCE_APPLICATION = PREFIX + "resource.application"
RESOURCE_DOCUMENT_SCHEMA = PREFIX + "resource.documentschema"
RESOURCE_MESSAGE_TYPE = PREFIX + "resource.messagetype"
RESOURCE_PROPERTY_SCHEMA = PREFIX + "resource.propertyschema"
RESOURCE_CONTEXT_PROPERTY = PREFIX + "resource.contextproperty"
RESOURCE_MAP = PREFIX + "resource.map"
RESOURCE_META_MODEL = PREFIX + "resource.metamodel"
RESOURCE_MODULE = PREFIX + "resource.module"
RESOURCE_CORRELATION_TYPE = PREFIX + "resource.correlationtype"
RESOURCE_PORT_TYPE = PREFIX + "resource.porttype"
RESOURCE_MULTIPART_MESSAGE_TYPE = PREFIX + "resource.multipartmessagetype"
RESOURCE_SERVICE_LINK_TYPE = PREFIX + "resource.servicelinktype"
RESOURCE_SERVICE_DECLARATION = PREFIX + "resource.servicedeclaration"
RESOURCE_MESSAGE_DECLARATION = PREFIX + "resource.messagedeclaration"
RESOURCE_CORRELATION_DECLARATION = PREFIX + "resource.correlationdeclaration"
RESOURCE_PORT_DECLARATION = PREFIX + "resource.portdeclaration"
RESOURCE_RECEIVE_PIPELINE = PREFIX + "resource.receivepipeline"
RESOURCE_SEND_PIPELINE = PREFIX + "resource.sendpipeline"
RESOURCE_PIPELINE_COMPONENT = PREFIX + "resource.pipelinecomponent"
RESOURCE_SERVICE_BINDING = PREFIX + "resource.servicebinding"
RESOURCE_RECEIVE_PORT = PREFIX + "resource.receiveport"
RESOURCE_RECEIVE_LOCATION = PREFIX + "resource.receivelocation"
RESOURCE_SEND_PORT = PREFIX + "resource.sendport"
RESOURCE_DISTRIBUTION_LIST = PREFIX + "resource.distributionlist"
RESOURCE_FILTER_EXPRESSION = PREFIX + "resource.filterexpression"

# Orchestration meta model element kinds
META_MODEL_ROOT = "MetaModel"
ELEMENT_MODULE = "Module"
ELEMENT_CORRELATION_TYPE = "CorrelationType"
ELEMENT_PORT_TYPE = "PortType"
ELEMENT_MULTIPART_MESSAGE_TYPE = "MultipartMessageType"
ELEMENT_SERVICE_LINK_TYPE = "ServiceLinkType"
ELEMENT_SERVICE_DECLARATION = "ServiceDeclaration"
ELEMENT_MESSAGE_DECLARATION = "MessageDeclaration"
ELEMENT_CORRELATION_DECLARATION = "CorrelationDeclaration"
ELEMENT_PORT_DECLARATION = "PortDeclaration"
PROPERTY_NAME = "Name"

# Key suffixes
SUFFIX_MAP = "map"
SUFFIX_META_MODEL = "MetaModel"
SUFFIX_PIPELINE = "pipelineresource"
SUFFIX_FILTER = "filter"
KEY_SEPARATOR = ":"

UNKNOWN_APPLICATION_NAME = "(Unknown)"
DUPLICATE_APPLICATION_SUFFIX = " (Duplicate)"

# Port resource properties
PROPERTY_PORT_DIRECTION = "portDirection"
PORT_ONE_WAY = "one-way"
PORT_TWO_WAY = "two-way"
PROPERTY_SEND_PORT_TYPE = "sendPortType"
SEND_PORT_STATIC = "static"
SEND_PORT_DYNAMIC = "dynamic"
PROPERTY_PRIMARY_TRANSPORT_TYPE = "primaryTransportType"
PROPERTY_PRIMARY_ADDRESS = "primaryAddress"
PROPERTY_SECONDARY_TRANSPORT_TYPE = "secondaryTransportType"
PROPERTY_SECONDARY_ADDRESS = "secondaryAddress"
PROPERTY_TRANSPORT_TYPE = "transportType"
PROPERTY_ADDRESS = "address"


def child_key(parent_key: str, suffix: str) -> str:
    """Build a resource key beneath a parent key."""
    return f"{parent_key}{KEY_SEPARATOR}{suffix}"
