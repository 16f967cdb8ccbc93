"""Ordered property bag codec.

Wire shape:

    <Properties>
      <Name vt="8">value</Name>
      ...
    </Properties>

Each child's tag is the property name, its `vt` attribute the value type
and its text the value. Position in the document is the order; names
need not be unique.
"""

import re
import xml.etree.ElementTree as ET
from typing import Iterable, List, Union

from pydantic import BaseModel, ConfigDict

from .xml_utils import ArtifactDecodeError, local_name, parse_xml

WRAPPER_ELEMENT = "Properties"
VALUE_TYPE_ATTRIBUTE = "vt"

# XML 1.0 NCName: a property name is an element tag and takes no prefix
_NAME_START = (
    "A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff"
    "\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd"
    "\U00010000-\U000effff"
)
_NAME_CHAR = _NAME_START + "\\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"
_NAME = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")
_INVALID_TEXT = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


class PropertyBagDecodeError(ArtifactDecodeError):
    """Raised when a property bag payload cannot be decoded."""
    pass


class PropertyBagEncodeError(ValueError):
    """Raised when a property cannot be written to the wire shape."""
    pass


class Property(BaseModel):
    """One (name, value, value_type) triple."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""
    value_type: str  # variant type code, e.g. "8" (string), "11" (bool)


PropertyBag = List[Property]


def decode_property_bag(source: Union[str, ET.Element]) -> PropertyBag:
    """Decode a wrapper element (or its text) into a property bag.

    Returns:
        One Property per child element, in document order. An empty
        wrapper yields an empty list.

    Raises:
        PropertyBagDecodeError: markup is malformed or a child has no
            value type attribute.
    """
    root = parse_xml(source, PropertyBagDecodeError) if isinstance(source, str) else source

    properties = []
    for child in root:
        name = local_name(child.tag)
        value_type = child.get(VALUE_TYPE_ATTRIBUTE)
        if value_type is None:
            raise PropertyBagDecodeError(
                f"property '{name}' has no '{VALUE_TYPE_ATTRIBUTE}' attribute"
            )
        properties.append(Property(name=name, value=child.text or "", value_type=value_type))
    return properties


def encode_property_bag(properties: Iterable[Property]) -> str:
    """Encode a property bag into its wrapper element text.

    Raises:
        PropertyBagEncodeError: a name is not a valid element name, or a
            value or value type holds characters XML cannot carry.
    """
    root = ET.Element(WRAPPER_ELEMENT)
    for prop in properties:
        if not _NAME.fullmatch(prop.name):
            raise PropertyBagEncodeError(f"property name '{prop.name}' is not a valid XML element name")
        if _INVALID_TEXT.search(prop.value) or _INVALID_TEXT.search(prop.value_type):
            raise PropertyBagEncodeError(f"property '{prop.name}' holds characters not allowed in XML")
        child = ET.SubElement(root, prop.name, {VALUE_TYPE_ATTRIBUTE: prop.value_type})
        child.text = prop.value
    return ET.tostring(root, encoding="unicode")
