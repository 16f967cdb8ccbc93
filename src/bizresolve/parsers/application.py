"""Application parser: names each application from its definition artifact."""

from typing import List, Set

from bizresolve.codes import ErrorCode
from bizresolve.entities import ParsedApplication
from bizresolve.kernel.application_definition import (
    ApplicationDefinitionError,
    parse_application_definition,
)
from bizresolve.kernel.constants import (
    DEFINITION_APPLICATION_DEFINITION,
    DUPLICATE_APPLICATION_SUFFIX,
    RESOURCE_APPLICATION,
    child_key,
)
from bizresolve.kernel.tree import Resource

from .base import ArtifactParser


class ApplicationParser(ArtifactParser):
    """Creates one application resource beneath each application definition."""

    name = "application"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        seen: Set[str] = set()

        for parsed in applications:
            application = parsed.application
            definition_file = application.application_definition
            if definition_file is None:
                self.warn(ErrorCode.APPLICATION_DEFINITION_NOT_FOUND, application=application.name)
                continue

            definition = self.tree.find_resource_definition(
                definition_file.resource_definition_key, DEFINITION_APPLICATION_DEFINITION
            )
            if definition is None:
                self.record_missing_definition(
                    definition_file.resource_definition_key, DEFINITION_APPLICATION_DEFINITION
                )
                continue

            try:
                properties = parse_application_definition(definition.content)
            except ApplicationDefinitionError as e:
                self.record_error(
                    ErrorCode.APPLICATION_DEFINITION_PARSE_ERROR,
                    key=definition.key,
                    kind=DEFINITION_APPLICATION_DEFINITION,
                    reason=str(e),
                )
                continue

            display_name = properties.get("DisplayName", "").strip()
            if not display_name:
                self.record_error(
                    ErrorCode.APPLICATION_NAME_NOT_FOUND,
                    key=definition.key,
                    kind=DEFINITION_APPLICATION_DEFINITION,
                )
                continue

            if display_name in seen:
                renamed = display_name + DUPLICATE_APPLICATION_SUFFIX
                self.record_error(
                    ErrorCode.DUPLICATE_APPLICATION,
                    key=definition.key,
                    kind=RESOURCE_APPLICATION,
                    name=display_name,
                    new_name=renamed,
                )
                display_name = renamed
            seen.add(display_name)

            application.name = display_name
            application.description = properties.get("ApplicationDescription") or None

            resource = Resource(
                key=child_key(definition.key, display_name),
                name=display_name,
                kind=RESOURCE_APPLICATION,
                description=application.description or "",
            )
            if self.attach(definition, resource, definition_file) is not None:
                definition_file.resource_key = resource.key
