"""Application definition and property schema payload decoders."""

from typing import Dict, List, Optional, Tuple

from .xml_utils import ArtifactDecodeError, children_named, first_child, local_name, parse_xml


class ApplicationDefinitionError(ArtifactDecodeError):
    """Raised when an application definition cannot be decoded."""
    pass


class SchemaContentError(ArtifactDecodeError):
    """Raised when schema content cannot be decoded."""
    pass


def parse_application_definition(text: Optional[str]) -> Dict[str, str]:
    """Read the `Properties/Property` list of an application definition.

    Returns:
        Property name -> value (e.g. "DisplayName", "ApplicationDescription").
    """
    if text is None or not text.strip():
        raise ApplicationDefinitionError("application definition is empty")

    root = parse_xml(text, ApplicationDefinitionError)
    properties = first_child(root, "Properties")
    if properties is None:
        return {}
    return {p.get("Name", ""): p.get("Value", "") for p in children_named(properties, "Property")}


def parse_context_properties(text: str) -> List[Tuple[str, str]]:
    """Top-level element declarations of a property schema.

    Returns:
        (name, type) pairs in document order.
    """
    root = parse_xml(text, SchemaContentError)
    if local_name(root.tag) != "schema":
        raise SchemaContentError(f"expected a schema root element, found '{local_name(root.tag)}'")
    return [(e.get("name", ""), e.get("type", "")) for e in children_named(root, "element")]
