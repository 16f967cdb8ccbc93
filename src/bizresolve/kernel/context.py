"""Run-scoped parse context holding the error channel."""

from dataclasses import dataclass, field
from typing import List, Optional

from bizresolve.codes import ErrorCode, format_message
from bizresolve.contracts import ErrorRecord, ErrorSeverity


@dataclass
class ParseContext:
    """Mutable state shared by every parser pass of one run.

    `errors` is append-only: parsers add records, nobody removes them.
    """
    errors: List[ErrorRecord] = field(default_factory=list)

    def add_error(
        self,
        code: ErrorCode,
        key: Optional[str] = None,
        kind: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **fields,
    ) -> ErrorRecord:
        """Render and append a record for `code`.

        `key` and `kind` are passed to the message template as well as
        stored on the record.
        """
        message = format_message(code, key=key, kind=kind, **fields)
        record = ErrorRecord(
            code=code.value,
            message=message,
            severity=severity,
            key=key,
            kind=kind,
        )
        self.errors.append(record)
        return record

    def has_errors(self) -> bool:
        """True if any error-severity record has been appended."""
        return any(e.severity == ErrorSeverity.ERROR for e in self.errors)

    def errors_since(self, mark: int) -> List[ErrorRecord]:
        """Records appended after position `mark`."""
        return self.errors[mark:]
