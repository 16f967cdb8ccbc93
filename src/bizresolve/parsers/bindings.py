"""Binding file parsers.

The binding file parser decodes each application's binding file and
creates a resource per bound orchestration service. Parsers that walk
the decoded binding info derive from `BindingInfoParser`, which resolves
the binding definition the port, location and distribution list
resources are created under.
"""

from abc import abstractmethod
from typing import Dict, List, Optional, Union

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, BindingInfo, ParsedApplication
from bizresolve.kernel import constants as c
from bizresolve.kernel.binding_info import (
    BindingInfoParseError,
    DistributionList,
    ReceivePort,
    SendPort,
    parse_binding_info,
)
from bizresolve.kernel.filter_expression import FilterParseError, parse_filter
from bizresolve.kernel.tree import Resource, ResourceDefinition

from .base import ArtifactParser

BoundObject = Union[ReceivePort, SendPort, DistributionList]


class BindingFileParser(ArtifactParser):
    """Decodes the binding file of each application."""

    name = "binding file"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            bindings = application.bindings
            if bindings is None:
                self.warn(ErrorCode.BINDING_INFO_NOT_FOUND, application=application.name)
                continue

            definition = self.tree.find_resource_definition(bindings.resource_definition_key, c.DEFINITION_BINDINGS)
            if definition is None:
                self.record_missing_definition(bindings.resource_definition_key, c.DEFINITION_BINDINGS)
                continue

            try:
                binding_info = parse_binding_info(definition.content)
            except BindingInfoParseError as e:
                self.record_error(
                    ErrorCode.BINDING_INFO_PARSE_ERROR,
                    key=definition.key,
                    kind=c.DEFINITION_BINDINGS,
                    application=application.name,
                    reason=str(e),
                )
                continue
            bindings.binding_info = binding_info

            for service in binding_info.service_bindings():
                resource = Resource(
                    key=c.child_key(definition.key, service.name),
                    name=service.name,
                    kind=c.RESOURCE_SERVICE_BINDING,
                    description=service.description,
                )
                if self.attach(definition, resource, service) is not None:
                    service.resource_key = resource.key


class BindingInfoParser(ArtifactParser):
    """Base for parsers that walk an application's decoded binding info."""

    owner_kind = "port"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            bindings = application.bindings
            if bindings is None or bindings.binding_info is None:
                if not application.name or not application.name.strip():
                    application.name = c.UNKNOWN_APPLICATION_NAME
                self.warn(ErrorCode.BINDING_INFO_NOT_FOUND, application=application.name)
                continue
            self.parse_binding_info(application, bindings.binding_info)

    @abstractmethod
    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        """Resolve every bound object of this parser's kind."""
        ...

    def find_bindings_definition(self, application: Application) -> Optional[ResourceDefinition]:
        """The application's binding definition, recording an error if absent."""
        key = application.bindings.resource_definition_key
        definition = self.tree.find_resource_definition(key, c.DEFINITION_BINDINGS)
        if definition is None:
            self.record_missing_definition(key, c.DEFINITION_BINDINGS)
        return definition

    def create_bound_resource(
        self,
        application: Application,
        definition: ResourceDefinition,
        bound: BoundObject,
        kind: str,
        properties: Dict[str, str],
    ) -> Optional[Resource]:
        """Attach `bound` beneath the binding definition, keyed by its name."""
        resource = Resource(
            key=c.child_key(definition.key, bound.name),
            name=bound.name,
            kind=kind,
            description=bound.description,
            properties=properties,
        )
        if self.attach(definition, resource, bound) is None:
            return None
        bound.resource_key = resource.key
        self.relate_to_application(application, resource)
        return resource

    def create_filter_resource(
        self,
        application: Application,
        owner_resource: Resource,
        owner: Union[SendPort, DistributionList],
    ) -> Optional[Resource]:
        """Decode the owner's subscription filter and attach a resource for it."""
        if not owner.filter:
            return None

        try:
            expression = parse_filter(owner.filter)
        except FilterParseError as e:
            self.record_error(
                ErrorCode.FILTER_PARSE_ERROR,
                key=owner_resource.key,
                owner_kind=self.owner_kind,
                owner=owner.name,
                application=application.name,
                reason=str(e),
            )
            return None
        owner.filter_expression = expression

        resource = Resource(
            key=c.child_key(owner.name, c.SUFFIX_FILTER),
            name=f"{owner_resource.name} filter expression",
            kind=c.RESOURCE_FILTER_EXPRESSION,
        )
        if self.attach(owner_resource, resource, expression) is None:
            return None
        expression.resource_key = resource.key
        return resource


def port_direction(is_two_way: bool) -> str:
    return c.PORT_TWO_WAY if is_two_way else c.PORT_ONE_WAY


class SendPortParser(BindingInfoParser):
    """Creates send port resources and their filter expressions."""

    name = "send port"
    owner_kind = "send port"

    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        if not binding_info.send_ports:
            return
        definition = self.find_bindings_definition(application)
        if definition is None:
            return

        for port in binding_info.send_ports:
            resource = self.create_bound_resource(
                application, definition, port, c.RESOURCE_SEND_PORT, self._properties(port)
            )
            if resource is not None:
                self.create_filter_resource(application, resource, port)

    def _properties(self, port: SendPort) -> Dict[str, str]:
        properties = {}
        if port.is_static:
            properties[c.PROPERTY_SEND_PORT_TYPE] = c.SEND_PORT_STATIC
            primary = port.primary_transport
            if primary is not None:
                properties[c.PROPERTY_PRIMARY_TRANSPORT_TYPE] = primary.transport_type
                properties[c.PROPERTY_PRIMARY_ADDRESS] = primary.address
            secondary = port.secondary_transport
            if secondary is not None and secondary.address:
                properties[c.PROPERTY_SECONDARY_TRANSPORT_TYPE] = secondary.transport_type
                properties[c.PROPERTY_SECONDARY_ADDRESS] = secondary.address
        else:
            properties[c.PROPERTY_SEND_PORT_TYPE] = c.SEND_PORT_DYNAMIC
        properties[c.PROPERTY_PORT_DIRECTION] = port_direction(port.is_two_way)
        return properties


class DistributionListParser(BindingInfoParser):
    """Creates send port group resources and their filter expressions."""

    name = "distribution list"
    owner_kind = "distribution list"

    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        if not binding_info.distribution_lists:
            return
        definition = self.find_bindings_definition(application)
        if definition is None:
            return

        for distribution_list in binding_info.distribution_lists:
            resource = self.create_bound_resource(
                application, definition, distribution_list, c.RESOURCE_DISTRIBUTION_LIST, {}
            )
            if resource is not None:
                self.create_filter_resource(application, resource, distribution_list)
