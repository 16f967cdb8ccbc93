"""Orchestration parsers.

The orchestration parser decodes each orchestration's designer meta model
and creates the meta model and module resources. The remaining parsers
walk the module element and create resources for the named elements
nested in it.
"""

from abc import abstractmethod
from typing import List, Optional, Tuple

from bizresolve.codes import ErrorCode
from bizresolve.entities import Application, Orchestration, ParsedApplication
from bizresolve.kernel import constants as c
from bizresolve.kernel.metamodel import Element, MetaModelParseError, find_module, parse_meta_model
from bizresolve.kernel.tree import Resource

from .base import ArtifactParser


class OrchestrationParser(ArtifactParser):
    """Creates the meta model and module resources of each orchestration."""

    name = "orchestration"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            for orchestration in application.orchestrations:
                self._parse_orchestration(application, orchestration)

    def _parse_orchestration(self, application: Application, orchestration: Orchestration):
        definition = self.tree.find_resource_definition(
            orchestration.resource_definition_key, c.DEFINITION_ORCHESTRATION
        )
        if definition is None:
            self.record_missing_definition(orchestration.resource_definition_key, c.DEFINITION_ORCHESTRATION)
            return

        try:
            meta_model = parse_meta_model(definition.content)
        except MetaModelParseError as e:
            self.record_error(
                ErrorCode.METAMODEL_PARSE_ERROR,
                key=definition.key,
                kind=c.DEFINITION_ORCHESTRATION,
                name=orchestration.name,
                application=application.name,
                reason=str(e),
            )
            return
        orchestration.meta_model = meta_model

        meta_model_resource = Resource(
            key=c.child_key(definition.key, c.SUFFIX_META_MODEL),
            name=orchestration.name,
            kind=c.RESOURCE_META_MODEL,
            description=orchestration.full_name,
        )
        if self.attach(definition, meta_model_resource, meta_model) is None:
            return
        self.relate_to_application(application, meta_model_resource)

        module = find_module(meta_model)
        if module is None:
            self.record_error(
                ErrorCode.MODULE_NOT_FOUND,
                key=definition.key,
                kind=c.RESOURCE_MODULE,
                name=orchestration.full_name or orchestration.name,
            )
            return

        module_name = module.name or orchestration.module_name
        self.attach(
            meta_model_resource,
            Resource(
                key=c.child_key(meta_model_resource.key, module_name),
                name=module_name,
                kind=c.RESOURCE_MODULE,
            ),
            module,
        )


class ModuleElementParser(ArtifactParser):
    """Base for parsers that resolve elements nested in an orchestration module.

    The module resource is looked up beneath the meta model resource keyed
    from the orchestration's declared definition key.
    """

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            for orchestration in parsed.application.orchestrations:
                found = self.resolve_module(orchestration)
                if found is not None:
                    self.parse_module(orchestration, *found)

    def resolve_module(self, orchestration: Orchestration) -> Optional[Tuple[Resource, Element]]:
        """Find the module resource and element, recording one error if absent."""
        module_resource = None
        meta_model_resource = None
        if orchestration.resource_definition_key:
            meta_model_resource = self.tree.find_resource(
                c.child_key(orchestration.resource_definition_key, c.SUFFIX_META_MODEL),
                c.RESOURCE_META_MODEL,
            )
        if meta_model_resource is not None:
            module_resource = next(
                (r for r in meta_model_resource.resources if r.kind == c.RESOURCE_MODULE), None
            )

        if module_resource is None:
            self.record_missing_resource(orchestration.resource_definition_key, c.RESOURCE_MODULE)
            return None

        module = self.tree.source_of(module_resource)
        if not isinstance(module, Element):
            module = find_module(orchestration.meta_model)
        if module is None:
            self.logger.debug("Module resource %s has no meta model element", module_resource.key)
            return None
        return module_resource, module

    @abstractmethod
    def parse_module(self, orchestration: Orchestration, module_resource: Resource, module: Element):
        """Create resources for the elements of a resolved module."""
        ...

    def create_element_resource(self, parent: Resource, element: Element, kind: str) -> Optional[Resource]:
        """Attach a resource for a named meta model element beneath `parent`."""
        element_name = element.name or element.kind
        resource = Resource(key=c.child_key(parent.key, element_name), name=element_name, kind=kind)
        return self.attach(parent, resource, element)


class NamedModuleElementParser(ModuleElementParser):
    """Creates one resource per module child of `element_kind`."""

    element_kind = ""
    resource_kind = ""

    def parse_module(self, orchestration: Orchestration, module_resource: Resource, module: Element):
        for element in module.children_of_kind(self.element_kind):
            self.create_element_resource(module_resource, element, self.resource_kind)


class CorrelationTypeParser(NamedModuleElementParser):
    name = "orchestration correlation type"
    element_kind = c.ELEMENT_CORRELATION_TYPE
    resource_kind = c.RESOURCE_CORRELATION_TYPE


class PortTypeParser(NamedModuleElementParser):
    name = "orchestration port type"
    element_kind = c.ELEMENT_PORT_TYPE
    resource_kind = c.RESOURCE_PORT_TYPE


class MultipartMessageTypeParser(NamedModuleElementParser):
    name = "orchestration multipart message type"
    element_kind = c.ELEMENT_MULTIPART_MESSAGE_TYPE
    resource_kind = c.RESOURCE_MULTIPART_MESSAGE_TYPE


class ServiceLinkTypeParser(NamedModuleElementParser):
    name = "orchestration service link type"
    element_kind = c.ELEMENT_SERVICE_LINK_TYPE
    resource_kind = c.RESOURCE_SERVICE_LINK_TYPE


# Declarations nested in a service declaration, and their resource kinds
SERVICE_DECLARATION_CHILDREN = [
    (c.ELEMENT_MESSAGE_DECLARATION, c.RESOURCE_MESSAGE_DECLARATION),
    (c.ELEMENT_CORRELATION_DECLARATION, c.RESOURCE_CORRELATION_DECLARATION),
    (c.ELEMENT_PORT_DECLARATION, c.RESOURCE_PORT_DECLARATION),
]


class ServiceDeclarationParser(ModuleElementParser):
    """Creates the service declaration resource and its nested declarations."""

    name = "orchestration service declaration"

    def parse_module(self, orchestration: Orchestration, module_resource: Resource, module: Element):
        declarations = module.children_of_kind(c.ELEMENT_SERVICE_DECLARATION)
        if not declarations:
            self.record_error(
                ErrorCode.SERVICE_DECLARATION_NOT_FOUND,
                key=orchestration.resource_definition_key,
                kind=c.RESOURCE_SERVICE_DECLARATION,
                name=orchestration.full_name or orchestration.name,
            )
            return

        declaration = declarations[0]
        service_resource = self.create_element_resource(
            module_resource, declaration, c.RESOURCE_SERVICE_DECLARATION
        )
        if service_resource is None:
            return

        for element_kind, resource_kind in SERVICE_DECLARATION_CHILDREN:
            for element in declaration.children_of_kind(element_kind):
                self.create_element_resource(service_resource, element, resource_kind)
