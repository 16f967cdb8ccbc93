"""Small helpers over xml.etree for namespace-agnostic payload decoding."""

import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Type

_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class ArtifactDecodeError(ValueError):
    """Base exception for payloads that cannot be decoded."""
    pass


def local_name(tag: str) -> str:
    """Strip a `{namespace}` prefix from an element tag."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def parse_xml(text: str, error_type: Type[ArtifactDecodeError] = ArtifactDecodeError) -> ET.Element:
    """Parse text into an element, raising `error_type` on malformed markup.

    The XML declaration is dropped: payloads arrive already decoded, and a
    declared multi-byte encoding would be rejected for str input.
    """
    try:
        return ET.fromstring(_DECLARATION.sub("", text.lstrip("\ufeff"), count=1).strip())
    except (ET.ParseError, ValueError) as e:
        raise error_type(f"malformed XML: {e}") from e


def children_named(element: ET.Element, name: str) -> List[ET.Element]:
    """Direct children whose local name is `name`, in document order."""
    return [child for child in element if local_name(child.tag) == name]


def first_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def child_text(element: ET.Element, name: str, default: str = "") -> str:
    """Text of the first child named `name` (stripped), or `default`."""
    child = first_child(element, name)
    if child is None or child.text is None:
        return default
    return child.text.strip()
