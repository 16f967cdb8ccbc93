"""Base model for source objects that resources link back to."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


def new_object_id() -> str:
    return uuid.uuid4().hex


class SourceObject(BaseModel):
    """A parsed domain object addressable from the resource tree.

    `resource_ref` holds the ref_id of the linked resource once a parser
    has resolved the object; it stays None when resolution fails.
    """
    object_id: str = Field(default_factory=new_object_id)
    resource_ref: Optional[str] = None
