"""Application binding file: service bindings, ports and distribution lists.

Only the parts the parsers resolve are decoded. Pipeline data and filters
are kept as the embedded strings they arrive as; the parsers decode them
onto the owning object.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional

from pydantic import BaseModel, Field

from .filter_expression import FilterExpression
from .pipeline_config import PipelineConfiguration
from .source import SourceObject
from .xml_utils import ArtifactDecodeError, child_text, children_named, first_child, local_name, parse_xml


class BindingInfoParseError(ArtifactDecodeError):
    """Raised when a binding file cannot be decoded."""
    pass


class ServiceBinding(SourceObject):
    """An orchestration bound by the binding file."""
    name: str
    description: str = ""
    resource_key: Optional[str] = None


class ModuleRef(BaseModel):
    name: str = ""
    services: List[ServiceBinding] = Field(default_factory=list)


class TransportInfo(BaseModel):
    address: str = ""
    transport_type: str = ""


class ReceiveLocation(SourceObject):
    name: str
    description: str = ""
    address: str = ""
    transport_type: str = ""
    send_pipeline_data: Optional[str] = None
    receive_pipeline_data: Optional[str] = None
    send_pipeline_configuration: Optional[PipelineConfiguration] = None
    receive_pipeline_configuration: Optional[PipelineConfiguration] = None
    resource_key: Optional[str] = None


class ReceivePort(SourceObject):
    name: str
    description: str = ""
    is_two_way: bool = False
    send_pipeline_data: Optional[str] = None  # used for request/response ports
    send_pipeline_configuration: Optional[PipelineConfiguration] = None
    receive_locations: List[ReceiveLocation] = Field(default_factory=list)
    resource_key: Optional[str] = None


class SendPort(SourceObject):
    name: str
    description: str = ""
    is_static: bool = True
    is_two_way: bool = False
    primary_transport: Optional[TransportInfo] = None
    secondary_transport: Optional[TransportInfo] = None
    filter: Optional[str] = None
    filter_expression: Optional[FilterExpression] = None
    send_pipeline_data: Optional[str] = None
    receive_pipeline_data: Optional[str] = None  # used for solicit/response ports
    send_pipeline_configuration: Optional[PipelineConfiguration] = None
    receive_pipeline_configuration: Optional[PipelineConfiguration] = None
    resource_key: Optional[str] = None


class DistributionList(SourceObject):
    """A send port group."""
    name: str
    description: str = ""
    filter: Optional[str] = None
    filter_expression: Optional[FilterExpression] = None
    resource_key: Optional[str] = None


class BindingInfo(BaseModel):
    modules: List[ModuleRef] = Field(default_factory=list)
    receive_ports: List[ReceivePort] = Field(default_factory=list)
    send_ports: List[SendPort] = Field(default_factory=list)
    distribution_lists: List[DistributionList] = Field(default_factory=list)

    def service_bindings(self) -> List[ServiceBinding]:
        return [service for module in self.modules for service in module.services]


def _flag(element: ET.Element, name: str, default: bool) -> bool:
    value = element.get(name)
    if value is None:
        return default
    return value.strip().lower() == "true"


def _optional_text(element: ET.Element, name: str) -> Optional[str]:
    """Text of a child element, or None when the child is absent or empty."""
    child = first_child(element, name)
    if child is None or child.text is None or not child.text.strip():
        return None
    return child.text


def _description(element: ET.Element) -> str:
    return child_text(element, "Description") or element.get("Description", "")


def _items(root: ET.Element, collection: str, item: str) -> List[ET.Element]:
    parent = first_child(root, collection)
    return children_named(parent, item) if parent is not None else []


def _required_name(element: ET.Element) -> str:
    name = element.get("Name")
    if not name:
        raise BindingInfoParseError(f"{local_name(element.tag)} has no Name attribute")
    return name


def _transport(element: ET.Element, name: str) -> Optional[TransportInfo]:
    transport = first_child(element, name)
    if transport is None:
        return None
    transport_type = first_child(transport, "TransportType")
    return TransportInfo(
        address=child_text(transport, "Address"),
        transport_type=transport_type.get("Name", "") if transport_type is not None else "",
    )


def _receive_location(element: ET.Element) -> ReceiveLocation:
    transport_type = first_child(element, "ReceiveLocationTransportType")
    return ReceiveLocation(
        name=_required_name(element),
        description=_description(element),
        address=child_text(element, "Address"),
        transport_type=transport_type.get("Name", "") if transport_type is not None else "",
        send_pipeline_data=_optional_text(element, "SendPipelineData"),
        receive_pipeline_data=_optional_text(element, "ReceivePipelineData"),
    )


def parse_binding_info(text: Optional[str]) -> BindingInfo:
    """Decode a binding file.

    Raises:
        BindingInfoParseError: content is empty or malformed, or a bound
            item has no name.
    """
    if text is None or not text.strip():
        raise BindingInfoParseError("binding file is empty")

    root = parse_xml(text, BindingInfoParseError)
    if local_name(root.tag) != "BindingInfo":
        raise BindingInfoParseError(f"expected a BindingInfo element, found '{local_name(root.tag)}'")

    info = BindingInfo()
    for module in _items(root, "ModuleRefCollection", "ModuleRef"):
        services = first_child(module, "Services")
        info.modules.append(ModuleRef(
            name=module.get("Name", ""),
            services=[
                ServiceBinding(name=_required_name(service), description=_description(service))
                for service in (children_named(services, "Service") if services is not None else [])
            ],
        ))

    for port in _items(root, "SendPortCollection", "SendPort"):
        info.send_ports.append(SendPort(
            name=_required_name(port),
            description=_description(port),
            is_static=_flag(port, "IsStatic", True),
            is_two_way=_flag(port, "IsTwoWay", False),
            primary_transport=_transport(port, "PrimaryTransport"),
            secondary_transport=_transport(port, "SecondaryTransport"),
            filter=_optional_text(port, "Filter"),
            send_pipeline_data=_optional_text(port, "SendPipelineData"),
            receive_pipeline_data=_optional_text(port, "ReceivePipelineData"),
        ))

    for group in _items(root, "DistributionListCollection", "DistributionList"):
        info.distribution_lists.append(DistributionList(
            name=_required_name(group),
            description=_description(group),
            filter=_optional_text(group, "Filter"),
        ))

    for port in _items(root, "ReceivePortCollection", "ReceivePort"):
        info.receive_ports.append(ReceivePort(
            name=_required_name(port),
            description=_description(port),
            is_two_way=_flag(port, "IsTwoWay", False),
            send_pipeline_data=_optional_text(port, "SendPipelineData"),
            receive_locations=[_receive_location(e) for e in _items(port, "ReceiveLocations", "ReceiveLocation")],
        ))
    return info
