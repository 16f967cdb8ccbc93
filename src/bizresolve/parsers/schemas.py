"""Schema parsers: document schemas with their message types, and
property schemas with their context properties."""

from typing import List

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, ContextProperty, ParsedApplication, Schema, SchemaType
from bizresolve.kernel.application_definition import SchemaContentError, parse_context_properties
from bizresolve.kernel.constants import (
    DEFINITION_SCHEMA,
    RESOURCE_CONTEXT_PROPERTY,
    RESOURCE_DOCUMENT_SCHEMA,
    RESOURCE_MESSAGE_TYPE,
    RESOURCE_PROPERTY_SCHEMA,
    child_key,
)
from bizresolve.kernel.tree import Resource

from .base import ArtifactParser


class DocumentSchemaParser(ArtifactParser):
    """Creates a document schema resource and one message type per root element."""

    name = "document schema"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            for schema in application.schemas:
                if schema.schema_type == SchemaType.DOCUMENT:
                    self._parse_schema(application, schema)

    def _parse_schema(self, application: Application, schema: Schema):
        definition = self.tree.find_resource_definition(schema.resource_definition_key, DEFINITION_SCHEMA)
        if definition is None:
            self.record_missing_definition(schema.resource_definition_key, DEFINITION_SCHEMA)
            return

        resource = Resource(
            key=schema.resource_key or child_key(definition.key, schema.name),
            name=schema.name,
            kind=RESOURCE_DOCUMENT_SCHEMA,
            description=schema.xml_namespace,
        )
        resource.properties["XmlNamespace"] = schema.xml_namespace
        resource.properties["DotnetTypeName"] = schema.dotnet_type_name
        resource.properties["NumberOfRootNodes"] = str(len(schema.message_definitions))
        resource.properties["IsEnvelope"] = str(schema.is_envelope)
        if schema.is_envelope:
            resource.properties["BodyXPath"] = schema.body_xpath or ""

        if self.attach(definition, resource, schema) is None:
            return
        schema.resource_key = resource.key

        for message_definition in schema.message_definitions:
            message_type = Resource(
                key=message_definition.resource_key
                or child_key(resource.key, message_definition.root_element_name),
                name=message_definition.root_element_name,
                kind=RESOURCE_MESSAGE_TYPE,
                description=message_definition.message_type,
            )
            if self.attach(resource, message_type, message_definition) is not None:
                message_definition.resource_key = message_type.key

        self.relate_to_application(application, resource)


class PropertySchemaParser(ArtifactParser):
    """Creates a property schema resource and one resource per context property."""

    name = "property schema"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            for schema in application.schemas:
                if schema.schema_type == SchemaType.PROPERTY:
                    self._parse_schema(application, schema)

    def _parse_schema(self, application: Application, schema: Schema):
        definition = self.tree.find_resource_definition(schema.resource_definition_key, DEFINITION_SCHEMA)
        if definition is None:
            self.record_missing_definition(schema.resource_definition_key, DEFINITION_SCHEMA)
            return

        if not definition.content or not definition.content.strip():
            self.record_error(
                ErrorCode.SCHEMA_CONTENT_EMPTY,
                key=definition.key,
                kind=DEFINITION_SCHEMA,
                name=schema.name,
                application=application.name,
            )
            return

        try:
            declarations = parse_context_properties(definition.content)
        except SchemaContentError as e:
            self.record_error(
                ErrorCode.SCHEMA_PARSE_ERROR,
                key=definition.key,
                kind=DEFINITION_SCHEMA,
                name=schema.name,
                application=application.name,
                reason=str(e),
            )
            return

        resource = Resource(
            key=schema.resource_key or child_key(definition.key, schema.name),
            name=schema.name,
            kind=RESOURCE_PROPERTY_SCHEMA,
            description=schema.xml_namespace,
        )
        resource.properties["DotnetTypeName"] = schema.dotnet_type_name
        resource.properties["ModuleName"] = schema.module_name

        if self.attach(definition, resource, schema) is None:
            return
        schema.resource_key = resource.key

        schema.context_properties = []
        for property_name, property_type in declarations:
            if not property_name:
                continue
            context_property = ContextProperty(
                property_name=property_name,
                property_type=property_type,
                namespace=schema.xml_namespace,
                resource_key=child_key(resource.key, property_name),
            )
            schema.context_properties.append(context_property)
            self.attach(
                resource,
                Resource(
                    key=context_property.resource_key,
                    name=property_name,
                    kind=RESOURCE_CONTEXT_PROPERTY,
                    description=context_property.fully_qualified_name,
                ),
                context_property,
            )

        self.relate_to_application(application, resource)
