"""Orchestration designer meta model as a tagged-variant tree.

The designer data is a `MetaModel` root holding nested `Element` nodes;
each element has a `Type` attribute (its kind), ordered
`Property Name=".." Value=".."` children and ordered child elements.
Namespaces are ignored.
"""

from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from .constants import ELEMENT_MODULE, META_MODEL_ROOT, PROPERTY_NAME
from .source import SourceObject
from .xml_utils import ArtifactDecodeError, children_named, local_name, parse_xml


class MetaModelParseError(ArtifactDecodeError):
    """Raised when orchestration designer data cannot be decoded."""
    pass


class ElementProperty(BaseModel):
    name: str
    value: str = ""


class Element(SourceObject):
    """One meta model node."""
    kind: str  # "Module" | "CorrelationType" | "ServiceDeclaration" | ...
    oid: Optional[str] = None
    properties: List[ElementProperty] = Field(default_factory=list)
    elements: List["Element"] = Field(default_factory=list)

    def get_property(self, name: str) -> Optional[str]:
        """Value of the first property called `name`, or None."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    @property
    def name(self) -> Optional[str]:
        return self.get_property(PROPERTY_NAME)

    def children_of_kind(self, kind: str) -> List["Element"]:
        """Direct child elements of a kind, in document order."""
        return [e for e in self.elements if e.kind == kind]

    def walk(self) -> Iterator["Element"]:
        """This element and all descendants, depth first."""
        yield self
        for child in self.elements:
            yield from child.walk()


class MetaModel(SourceObject):
    """Decoded orchestration designer data."""
    elements: List[Element] = Field(default_factory=list)

    def walk(self) -> Iterator[Element]:
        for element in self.elements:
            yield from element.walk()

    def find_elements(self, kind: str) -> List[Element]:
        """All elements of a kind anywhere in the model."""
        return [e for e in self.walk() if e.kind == kind]


def find_module(meta_model: Optional[MetaModel]) -> Optional[Element]:
    """The first module element of a meta model, or None."""
    if meta_model is None:
        return None
    modules = meta_model.find_elements(ELEMENT_MODULE)
    return modules[0] if modules else None


def parse_meta_model(text: Optional[str]) -> MetaModel:
    """Decode orchestration designer XML.

    Raises:
        MetaModelParseError: content is empty or malformed, has no
            MetaModel element, or an element has no Type.
    """
    if text is None or not text.strip():
        raise MetaModelParseError("meta model content is empty")

    root = parse_xml(text, MetaModelParseError)
    meta_root = next((n for n in root.iter() if local_name(n.tag) == META_MODEL_ROOT), None)
    if meta_root is None:
        raise MetaModelParseError(f"no {META_MODEL_ROOT} element found")

    return MetaModel(elements=[_decode_element(n) for n in children_named(meta_root, "Element")])


def _decode_element(node) -> Element:
    kind = node.get("Type")
    if not kind:
        raise MetaModelParseError("element has no Type attribute")
    properties = [
        ElementProperty(name=p.get("Name", ""), value=p.get("Value", ""))
        for p in children_named(node, "Property")
    ]
    children = [_decode_element(c) for c in children_named(node, "Element")]
    return Element(kind=kind, oid=node.get("OID"), properties=properties, elements=children)
