"""Subscription filters carried by send ports and distribution lists.

    <Filter>
      <Group>
        <Statement Property="BTS.ReceivePortName" Operator="0" Value="ReceiveOrders" />
      </Group>
    </Filter>

Statements in a group are AND-ed; groups are OR-ed.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .source import SourceObject
from .xml_utils import ArtifactDecodeError, children_named, local_name, parse_xml


class FilterParseError(ArtifactDecodeError):
    """Raised when a filter payload cannot be decoded."""
    pass


class FilterStatement(BaseModel):
    property: str
    operator: str = ""
    value: Optional[str] = None  # absent for exists checks


class FilterGroup(BaseModel):
    statements: List[FilterStatement] = Field(default_factory=list)


class FilterExpression(SourceObject):
    groups: List[FilterGroup] = Field(default_factory=list)
    resource_key: Optional[str] = None


def parse_filter(text: Optional[str]) -> FilterExpression:
    """Decode a subscription filter.

    Raises:
        FilterParseError: content is empty, malformed, or a statement
            names no property.
    """
    if text is None or not text.strip():
        raise FilterParseError("filter is empty")

    root = parse_xml(text, FilterParseError)
    if local_name(root.tag) != "Filter":
        raise FilterParseError(f"expected a Filter element, found '{local_name(root.tag)}'")

    expression = FilterExpression()
    for group in children_named(root, "Group"):
        decoded = FilterGroup()
        for statement in children_named(group, "Statement"):
            name = statement.get("Property")
            if not name:
                raise FilterParseError("filter statement has no Property attribute")
            decoded.statements.append(FilterStatement(
                property=name,
                operator=statement.get("Operator", ""),
                value=statement.get("Value"),
            ))
        expression.groups.append(decoded)
    return expression
