"""Pipeline data parsers.

Port bindings carry per-port pipeline configuration as an embedded XML
string. These parsers decode it onto the owning port or receive
location. A payload that
cannot be decoded leaves the configuration unset and records one error
naming the side and the port.
"""

from typing import Optional

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, BindingInfo, PipelineDirection
from bizresolve.kernel import constants as c
from bizresolve.kernel.pipeline_config import (
    PipelineConfiguration,
    PipelineConfigurationError,
    parse_pipeline_configuration,
)

from bizresolve.kernel.tree import Resource

from .bindings import BindingInfoParser, port_direction


class PipelineDataParser(BindingInfoParser):
    """Base for parsers that decode pipeline payloads held in the bindings."""

    def parse_pipeline_data(
        self,
        application: Application,
        owner_name: str,
        data: Optional[str],
        side: PipelineDirection,
    ) -> Optional[PipelineConfiguration]:
        """Decode one embedded payload, recording an error if it is malformed.

        Returns:
            The configuration, or None when there is nothing to configure
            or the payload could not be decoded.
        """
        try:
            return parse_pipeline_configuration(data)
        except PipelineConfigurationError as e:
            self.record_error(
                ErrorCode.PIPELINE_DATA_PARSE_ERROR,
                key=owner_name,
                side=side.value,
                owner_kind=self.owner_kind,
                owner=owner_name,
                application=application.name,
                reason=str(e),
            )
            return None


class ReceivePortPipelineDataParser(PipelineDataParser):
    """Decodes the send pipeline configuration of request/response receive ports."""

    name = "receive port pipeline data"
    owner_kind = "receive port"

    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        for port in binding_info.receive_ports:
            port.send_pipeline_configuration = self.parse_pipeline_data(
                application, port.name, port.send_pipeline_data, PipelineDirection.SEND
            )


class SendPortPipelineDataParser(PipelineDataParser):
    """Decodes both pipeline configurations of send ports."""

    name = "send port pipeline data"
    owner_kind = "send port"

    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        for port in binding_info.send_ports:
            port.send_pipeline_configuration = self.parse_pipeline_data(
                application, port.name, port.send_pipeline_data, PipelineDirection.SEND
            )
            port.receive_pipeline_configuration = self.parse_pipeline_data(
                application, port.name, port.receive_pipeline_data, PipelineDirection.RECEIVE
            )


class ReceivePortParser(PipelineDataParser):
    """Creates receive port and receive location resources.

    Both pipeline payloads of each receive location are decoded before its
    resource is created; a malformed payload does not stop the location
    from resolving.
    """

    name = "receive port"
    owner_kind = "receive location"

    def parse_binding_info(self, application: Application, binding_info: BindingInfo) -> None:
        if not binding_info.receive_ports:
            return
        definition = self.find_bindings_definition(application)
        if definition is None:
            return

        for port in binding_info.receive_ports:
            port_resource = self.create_bound_resource(
                application,
                definition,
                port,
                c.RESOURCE_RECEIVE_PORT,
                {c.PROPERTY_PORT_DIRECTION: port_direction(port.is_two_way)},
            )
            if port_resource is None:
                continue

            for location in port.receive_locations:
                location.send_pipeline_configuration = self.parse_pipeline_data(
                    application, location.name, location.send_pipeline_data, PipelineDirection.SEND
                )
                location.receive_pipeline_configuration = self.parse_pipeline_data(
                    application, location.name, location.receive_pipeline_data, PipelineDirection.RECEIVE
                )

                location_resource = Resource(
                    key=c.child_key(port.name, location.name),
                    name=location.name,
                    kind=c.RESOURCE_RECEIVE_LOCATION,
                    description=location.description,
                    properties={
                        c.PROPERTY_TRANSPORT_TYPE: location.transport_type,
                        c.PROPERTY_ADDRESS: location.address,
                    },
                )
                if self.attach(port_resource, location_resource, location) is not None:
                    location.resource_key = location_resource.key
