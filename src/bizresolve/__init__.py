"""bizresolve: resolves parsed integration artifacts into a keyed resource tree."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("bizresolve")
except PackageNotFoundError:
    __version__ = "dev"

from bizresolve.api import parse_model
from bizresolve.codes import ErrorCode
from bizresolve.config import RunOptions
from bizresolve.contracts import ErrorRecord, ErrorSeverity, ParseResult
from bizresolve.entities import MigrationModel
from bizresolve.kernel.context import ParseContext
from bizresolve.kernel.tree import Resource, ResourceContainer, ResourceDefinition, ResourceTree

__all__ = [
    "parse_model",
    "ErrorCode",
    "ErrorRecord",
    "ErrorSeverity",
    "MigrationModel",
    "ParseContext",
    "ParseResult",
    "Resource",
    "ResourceContainer",
    "ResourceDefinition",
    "ResourceTree",
    "RunOptions",
    "__version__",
]
