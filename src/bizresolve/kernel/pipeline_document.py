"""Pipeline designer document (stages and their components)."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .source import SourceObject
from .xml_utils import ArtifactDecodeError, child_text, children_named, first_child, parse_xml


class PipelineDocumentError(ArtifactDecodeError):
    """Raised when a pipeline document cannot be decoded."""
    pass


class PipelineComponent(SourceObject):
    """A component placed in a pipeline stage."""
    name: str  # implementing type name
    component_name: str  # display name
    description: str = ""

    @property
    def key_name(self) -> str:
        return self.component_name or self.name


class PipelineStage(BaseModel):
    category_id: str = ""
    components: List[PipelineComponent] = Field(default_factory=list)


class PipelineDocument(BaseModel):
    description: str = ""
    stages: List[PipelineStage] = Field(default_factory=list)

    def components(self) -> List[PipelineComponent]:
        """Every component across all stages, in stage order."""
        return [c for stage in self.stages for c in stage.components]


def parse_pipeline_document(text: Optional[str]) -> PipelineDocument:
    """Decode a pipeline designer document.

    Raises:
        PipelineDocumentError: content is empty or malformed.
    """
    if text is None or not text.strip():
        raise PipelineDocumentError("pipeline document is empty")

    root = parse_xml(text, PipelineDocumentError)
    document = PipelineDocument(description=child_text(root, "Description"))

    stages = first_child(root, "Stages")
    for stage in children_named(stages, "Stage") if stages is not None else []:
        decoded = PipelineStage(category_id=stage.get("CategoryId", ""))
        components = first_child(stage, "Components")
        for component in children_named(components, "Component") if components is not None else []:
            decoded.components.append(PipelineComponent(
                name=child_text(component, "Name"),
                component_name=child_text(component, "ComponentName"),
                description=child_text(component, "Description"),
            ))
        document.stages.append(decoded)
    return document
