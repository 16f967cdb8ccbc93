"""Shared contract for artifact parsers.

A parser is constructed with the model, the run context and a
diagnostics logger, and performs one pass over the parsed applications
when `parse()` is called. Data problems are appended to
`context.errors`; `parse()` never raises for them.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from bizresolve.codes import ErrorCode, format_message
from bizresolve.config import RunOptions
from bizresolve.contracts import ErrorRecord
from bizresolve.entities import Application, MigrationModel, ParsedApplication
from bizresolve.kernel.constants import RESOURCE_APPLICATION
from bizresolve.kernel.context import ParseContext
from bizresolve.kernel.source import SourceObject
from bizresolve.kernel.tree import DuplicateResourceKeyError, Resource, ResourceDefinition, ResourceTree


class MissingCollaboratorError(ValueError):
    """Raised when a parser is constructed without a required collaborator."""
    def __init__(self, param: str):
        self.param = param
        super().__init__(f"{param} is required")


class ArtifactParser(ABC):
    """Base class for one resolution pass over the parsed applications."""

    name = "artifact"

    def __init__(
        self,
        model: MigrationModel,
        context: ParseContext,
        diagnostics: logging.Logger,
        options: Optional[RunOptions] = None,
    ):
        if model is None:
            raise MissingCollaboratorError("model")
        if context is None:
            raise MissingCollaboratorError("context")
        if diagnostics is None:
            raise MissingCollaboratorError("diagnostics")
        self.model = model
        self.context = context
        self.logger = diagnostics
        self.options = options or RunOptions()

    @property
    def tree(self) -> ResourceTree:
        return self.model.tree

    def parse(self) -> None:
        """Run the pass. Returns once every application has been visited."""
        group = self.model.source
        if group is None or group.applications is None:
            self.logger.debug("Skipping %s parser, the model has no parsed applications", self.name)
            return

        self.logger.debug("Running %s parser", self.name)
        self.parse_applications(group.applications)
        self.logger.debug("Completed %s parser", self.name)

    @abstractmethod
    def parse_applications(self, applications: List[ParsedApplication]) -> None:
        """Resolve every object of this parser's kind."""
        ...

    # Error channel

    def record_error(self, code: ErrorCode, key: Optional[str] = None, kind: Optional[str] = None, **fields) -> ErrorRecord:
        """Append an error to the context and mirror it to the logger."""
        record = self.context.add_error(code, key=key, kind=kind, **fields)
        self.logger.error(record.message)
        return record

    def record_missing_definition(self, key: Optional[str], kind: str) -> ErrorRecord:
        return self.record_error(ErrorCode.UNABLE_TO_FIND_RESOURCE_DEFINITION, key=key, kind=kind)

    def record_missing_resource(self, key: Optional[str], kind: str) -> ErrorRecord:
        return self.record_error(ErrorCode.UNABLE_TO_FIND_RESOURCE, key=key, kind=kind)

    def warn(self, code: ErrorCode, **fields) -> str:
        """Log a soft-missing-context warning; nothing is recorded."""
        message = format_message(code, **fields)
        self.logger.warning(message)
        return message

    # Tree helpers

    def attach(
        self,
        parent: Union[ResourceDefinition, Resource],
        resource: Resource,
        source: Optional[SourceObject] = None,
    ) -> Optional[Resource]:
        """Attach `resource` beneath `parent` and link it to `source`.

        Returns None (and records an error) if the key is already taken.
        """
        try:
            self.tree.attach(parent.ref_id, resource)
        except DuplicateResourceKeyError as e:
            self.record_error(ErrorCode.DUPLICATE_RESOURCE_KEY, key=e.key, kind=e.kind)
            return None

        if source is not None:
            self.tree.link(resource, source)
        if self.options.trace_resources:
            self.logger.debug("Created resource %s of type %s", resource.key, resource.kind)
        return resource

    def find_application_resource(self, application: Application) -> Optional[Resource]:
        """The application's resource, if the application declares one.

        A declared key that cannot be found is recorded as an error.
        """
        definition_file = application.application_definition
        if definition_file is None or definition_file.resource_key is None:
            return None

        resource = self.tree.find_resource(definition_file.resource_key, RESOURCE_APPLICATION)
        if resource is None:
            self.record_missing_resource(definition_file.resource_key, RESOURCE_APPLICATION)
        return resource

    def relate_to_application(self, application: Application, resource: Resource):
        """Cross-link an artifact resource with its application resource."""
        application_resource = self.find_application_resource(application)
        if application_resource is not None:
            self.tree.relate(application_resource, resource)
