"""Transform (map) parser."""

from typing import List

from bizresolve.entities import ParsedApplication
from bizresolve.kernel.constants import DEFINITION_MAP, RESOURCE_MAP, SUFFIX_MAP, child_key
from bizresolve.kernel.tree import Resource

from .base import ArtifactParser


class TransformParser(ArtifactParser):
    """Creates one map resource beneath each transform's definition."""

    name = "transform"

    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        for parsed in applications:
            application = parsed.application
            for transform in application.transforms:
                definition = self.tree.find_resource_definition(transform.resource_definition_key, DEFINITION_MAP)
                if definition is None:
                    self.record_missing_definition(transform.resource_definition_key, DEFINITION_MAP)
                    continue

                resource = Resource(
                    key=child_key(definition.key, SUFFIX_MAP),
                    name=transform.name,
                    kind=RESOURCE_MAP,
                    description=transform.full_name,
                )
                if self.attach(definition, resource, transform) is not None:
                    self.relate_to_application(application, resource)
