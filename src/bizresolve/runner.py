"""Run plan: the ordered set of parser passes for one model snapshot.

Each pass declares the passes whose resources it reads. The plan is
ordered so that definition-level passes run before the passes that walk
their structure, which run before the passes that resolve elements
nested within that structure.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Type

from bizresolve.config import RunOptions
from bizresolve.entities import MigrationModel
from bizresolve.kernel.context import ParseContext
from bizresolve.parsers import (
    ApplicationParser,
    ArtifactParser,
    BindingFileParser,
    CorrelationTypeParser,
    DistributionListParser,
    DocumentSchemaParser,
    MultipartMessageTypeParser,
    OrchestrationParser,
    PipelineComponentParser,
    PipelineParser,
    PortTypeParser,
    PropertySchemaParser,
    ReceivePortParser,
    ReceivePortPipelineDataParser,
    SendPortParser,
    SendPortPipelineDataParser,
    ServiceDeclarationParser,
    ServiceLinkTypeParser,
    TransformParser,
)

logger = logging.getLogger(__name__)


class RunPlanError(Exception):
    """Base exception for run plan declaration errors."""
    pass


class DuplicateParserError(RunPlanError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parser declared more than once: {name}")


class MissingParserDependencyError(RunPlanError):
    """Raised when a parser depends on a parser that is not in the plan."""
    def __init__(self, missing: set[str]):
        self.missing = missing
        missing_str = ", ".join(sorted(missing))
        super().__init__(f"Parser dependencies referenced but not declared: {missing_str}")


class ParserCycleError(RunPlanError):
    """Raised when parser dependencies form a cycle."""
    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        cycle_ids = cycle[:-1] if len(cycle) > 1 and cycle[0] == cycle[-1] else cycle
        cycle_str = " -> ".join(cycle_ids) + f" -> {cycle_ids[0]}"
        super().__init__(f"Cycle detected in parser dependencies:\n  Cycle: {cycle_str}")


@dataclass
class ParserSpec:
    """One pass of the run plan."""
    name: str
    parser_class: Type[ArtifactParser]
    depends_on: List[str] = field(default_factory=list)  # names of passes that must run first


DEFAULT_PLAN: List[ParserSpec] = [
    ParserSpec("application", ApplicationParser),
    ParserSpec("document_schema", DocumentSchemaParser, ["application"]),
    ParserSpec("property_schema", PropertySchemaParser, ["application"]),
    ParserSpec("transform", TransformParser, ["application"]),
    ParserSpec("orchestration", OrchestrationParser, ["application"]),
    ParserSpec("correlation_type", CorrelationTypeParser, ["orchestration"]),
    ParserSpec("port_type", PortTypeParser, ["orchestration"]),
    ParserSpec("multipart_message_type", MultipartMessageTypeParser, ["orchestration"]),
    ParserSpec("service_link_type", ServiceLinkTypeParser, ["orchestration"]),
    ParserSpec("service_declaration", ServiceDeclarationParser, ["orchestration"]),
    ParserSpec("pipeline", PipelineParser, ["application"]),
    ParserSpec("pipeline_component", PipelineComponentParser, ["pipeline"]),
    ParserSpec("binding_file", BindingFileParser, ["application"]),
    ParserSpec("receive_port", ReceivePortParser, ["binding_file"]),
    ParserSpec("send_port", SendPortParser, ["binding_file"]),
    ParserSpec("distribution_list", DistributionListParser, ["binding_file"]),
    ParserSpec("receive_port_pipeline_data", ReceivePortPipelineDataParser, ["binding_file"]),
    ParserSpec("send_port_pipeline_data", SendPortPipelineDataParser, ["binding_file"]),
]


def build_run_plan(specs: Sequence[ParserSpec]) -> List[ParserSpec]:
    """Order parser passes so that every pass follows its dependencies.

    Declaration order is kept wherever dependencies allow it.

    Raises:
        DuplicateParserError: a name is declared twice.
        MissingParserDependencyError: a dependency is not declared.
        ParserCycleError: the dependencies form a cycle.
    """
    by_name: Dict[str, ParserSpec] = {}
    for spec in specs:
        if spec.name in by_name:
            raise DuplicateParserError(spec.name)
        by_name[spec.name] = spec

    missing = {dep for spec in specs for dep in spec.depends_on} - set(by_name)
    if missing:
        raise MissingParserDependencyError(missing)

    WHITE = 0  # Unvisited
    GRAY = 1   # On the current DFS path
    BLACK = 2  # Ordered
    color = {name: WHITE for name in by_name}
    path: List[str] = []
    ordered: List[ParserSpec] = []

    def visit(name: str):
        color[name] = GRAY
        path.append(name)
        for dep in by_name[name].depends_on:
            if color[dep] == GRAY:
                raise ParserCycleError(path[path.index(dep):] + [dep])
            if color[dep] == WHITE:
                visit(dep)
        path.pop()
        color[name] = BLACK
        ordered.append(by_name[name])

    for spec in specs:
        if color[spec.name] == WHITE:
            visit(spec.name)
    return ordered


def run_parsers(
    model: MigrationModel,
    context: ParseContext,
    diagnostics: logging.Logger,
    options: Optional[RunOptions] = None,
    plan: Optional[Sequence[ParserSpec]] = None,
) -> List[str]:
    """Run every enabled pass of the plan once, in dependency order.

    Returns:
        Names of the passes that ran, in execution order.
    """
    options = options or RunOptions()
    ordered = build_run_plan(plan if plan is not None else DEFAULT_PLAN)

    unknown = set(options.disabled_parsers) - {spec.name for spec in ordered}
    if unknown:
        raise ValueError(f"Unknown parsers in disabled_parsers: {', '.join(sorted(unknown))}")

    ran = []
    for spec in ordered:
        if spec.name in options.disabled_parsers:
            logger.debug("Parser %s is disabled", spec.name)
            continue
        spec.parser_class(model, context, diagnostics, options).parse()
        ran.append(spec.name)
    return ran
