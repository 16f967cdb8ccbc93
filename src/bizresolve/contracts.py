"""Public result models for bizresolve package."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorSeverity(str, Enum):
    """Severity of a recorded error."""
    ERROR = "error"
    WARNING = "warning"


class ErrorRecord(BaseModel):
    """A single structured error appended to the error channel."""
    code: str  # ErrorCode value, e.g. "UNABLE_TO_FIND_RESOURCE_DEFINITION"
    message: str  # always embeds the failing key/identifier
    severity: ErrorSeverity = ErrorSeverity.ERROR
    key: Optional[str] = None  # failing key, when the error is a resolution error
    kind: Optional[str] = None  # expected kind tag

    def __str__(self) -> str:
        return f"{self.severity.value.capitalize()}: {self.message}"


class ParseResult(BaseModel):
    """Result of a complete parse run."""
    ok: bool  # True if no error-severity records were appended
    errors: List[ErrorRecord]  # in append order
    resource_count: int  # resources in the tree after the run
    parsers_run: List[str] = Field(default_factory=list)  # in execution order
