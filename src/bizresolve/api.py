"""Public API for bizresolve.

High-level entry point that runs the default plan over a model and
returns a structured result.
"""

import logging
from typing import Optional

from bizresolve.config import RunOptions
from bizresolve.contracts import ErrorSeverity, ParseResult
from bizresolve.entities import MigrationModel
from bizresolve.kernel.context import ParseContext
from bizresolve.runner import run_parsers


def parse_model(
    model: MigrationModel,
    context: Optional[ParseContext] = None,
    diagnostics: Optional[logging.Logger] = None,
    options: Optional[RunOptions] = None,
) -> ParseResult:
    """Resolve every parsed application into the model's resource tree.

    Args:
        model: Tree plus parsed source data; mutated in place.
        context: Error channel to append to (a fresh one if omitted).
        diagnostics: Logger receiving parser diagnostics (defaults to the
            `bizresolve` logger).
        options: Run options.

    Returns:
        ParseResult with the records appended by this run. `ok` is False
        if any of them is an error.
    """
    context = context if context is not None else ParseContext()
    diagnostics = diagnostics if diagnostics is not None else logging.getLogger("bizresolve")

    mark = len(context.errors)
    ran = run_parsers(model, context, diagnostics, options)
    errors = context.errors_since(mark)

    return ParseResult(
        ok=not any(e.severity == ErrorSeverity.ERROR for e in errors),
        errors=errors,
        resource_count=model.tree.resource_count(),
        parsers_run=ran,
    )
