"""Error code constants for bizresolve parsers.

These constants prevent stringly-typed error codes and keep every
message template next to the code that produces it.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error and warning codes recorded during a parse run."""

    # Resolution errors
    UNABLE_TO_FIND_RESOURCE_DEFINITION = "UNABLE_TO_FIND_RESOURCE_DEFINITION"
    UNABLE_TO_FIND_RESOURCE = "UNABLE_TO_FIND_RESOURCE"
    MODULE_NOT_FOUND = "MODULE_NOT_FOUND"
    SERVICE_DECLARATION_NOT_FOUND = "SERVICE_DECLARATION_NOT_FOUND"
    DUPLICATE_RESOURCE_KEY = "DUPLICATE_RESOURCE_KEY"

    # Application errors
    APPLICATION_NAME_NOT_FOUND = "APPLICATION_NAME_NOT_FOUND"
    DUPLICATE_APPLICATION = "DUPLICATE_APPLICATION"

    # Decode errors
    APPLICATION_DEFINITION_PARSE_ERROR = "APPLICATION_DEFINITION_PARSE_ERROR"
    SCHEMA_CONTENT_EMPTY = "SCHEMA_CONTENT_EMPTY"
    SCHEMA_PARSE_ERROR = "SCHEMA_PARSE_ERROR"
    METAMODEL_PARSE_ERROR = "METAMODEL_PARSE_ERROR"
    PIPELINE_DOCUMENT_PARSE_ERROR = "PIPELINE_DOCUMENT_PARSE_ERROR"
    PIPELINE_DATA_PARSE_ERROR = "PIPELINE_DATA_PARSE_ERROR"
    BINDING_INFO_PARSE_ERROR = "BINDING_INFO_PARSE_ERROR"
    FILTER_PARSE_ERROR = "FILTER_PARSE_ERROR"

    # Warnings (logged, not recorded)
    APPLICATION_DEFINITION_NOT_FOUND = "APPLICATION_DEFINITION_NOT_FOUND"
    BINDING_INFO_NOT_FOUND = "BINDING_INFO_NOT_FOUND"


MESSAGES = {
    ErrorCode.UNABLE_TO_FIND_RESOURCE_DEFINITION:
        "Unable to find the resource definition of type '{kind}' with key '{key}'.",
    ErrorCode.UNABLE_TO_FIND_RESOURCE:
        "Unable to find the resource of type '{kind}' with key '{key}'.",
    ErrorCode.MODULE_NOT_FOUND:
        "Unable to find the module in the meta model of orchestration '{name}' with key '{key}'.",
    ErrorCode.SERVICE_DECLARATION_NOT_FOUND:
        "Unable to find the service declaration in the meta model of orchestration '{name}' with key '{key}'.",
    ErrorCode.DUPLICATE_RESOURCE_KEY:
        "A resource of type '{kind}' with key '{key}' already exists in the resource tree.",
    ErrorCode.APPLICATION_NAME_NOT_FOUND:
        "Unable to find the application name in the application definition with key '{key}'.",
    ErrorCode.DUPLICATE_APPLICATION:
        "An application named '{name}' has already been parsed, renaming to '{new_name}'.",
    ErrorCode.APPLICATION_DEFINITION_PARSE_ERROR:
        "Error parsing the application definition with key '{key}': {reason}",
    ErrorCode.SCHEMA_CONTENT_EMPTY:
        "The content of schema '{name}' with key '{key}' in application '{application}' is empty.",
    ErrorCode.SCHEMA_PARSE_ERROR:
        "Error parsing the content of schema '{name}' with key '{key}' in application '{application}': {reason}",
    ErrorCode.METAMODEL_PARSE_ERROR:
        "Error parsing the meta model of orchestration '{name}' with key '{key}' in application '{application}': {reason}",
    ErrorCode.PIPELINE_DOCUMENT_PARSE_ERROR:
        "Error parsing the document of pipeline '{name}' with key '{key}' in application '{application}': {reason}",
    ErrorCode.PIPELINE_DATA_PARSE_ERROR:
        "Error parsing the {side} pipeline data of {owner_kind} '{owner}' in application '{application}': {reason}",
    ErrorCode.BINDING_INFO_PARSE_ERROR:
        "Error reading the binding info with key '{key}' of application '{application}': {reason}",
    ErrorCode.FILTER_PARSE_ERROR:
        "Error parsing the filter of {owner_kind} '{owner}' in application '{application}': {reason}",
    ErrorCode.APPLICATION_DEFINITION_NOT_FOUND:
        "Unable to find the application definition for application '{application}'.",
    ErrorCode.BINDING_INFO_NOT_FOUND:
        "Unable to find the binding info resource for application '{application}'.",
}


def format_message(code: ErrorCode, **fields) -> str:
    """Render the message template for a code."""
    return MESSAGES[code].format(**fields)
