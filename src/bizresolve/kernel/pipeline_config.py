"""Pipeline configuration embedded as a string inside binding data.

    <Root>
      <Stages>
        <Stage CategoryId="...">
          <Components>
            <Component Name="...">
              <Properties>...</Properties>
            </Component>
          </Components>
        </Stage>
      </Stages>
    </Root>
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .property_bag import Property, PropertyBagDecodeError, decode_property_bag
from .xml_utils import ArtifactDecodeError, children_named, first_child, parse_xml


class PipelineConfigurationError(ArtifactDecodeError):
    """Raised when a pipeline configuration payload is not well-formed."""
    pass


class ComponentConfiguration(BaseModel):
    """Per-component property overrides."""
    name: str
    properties: List[Property] = Field(default_factory=list)


class StageConfiguration(BaseModel):
    category_id: str = ""
    components: List[ComponentConfiguration] = Field(default_factory=list)


class PipelineConfiguration(BaseModel):
    stages: List[StageConfiguration] = Field(default_factory=list)


def parse_pipeline_configuration(payload: Optional[str]) -> Optional[PipelineConfiguration]:
    """Decode an embedded pipeline configuration payload.

    Returns:
        None if the payload is absent or blank (nothing to configure),
        otherwise the decoded configuration.

    Raises:
        PipelineConfigurationError: the payload is present but malformed.
    """
    if payload is None or not payload.strip():
        return None

    root = parse_xml(payload, PipelineConfigurationError)
    configuration = PipelineConfiguration()

    stages = first_child(root, "Stages")
    if stages is None:
        return configuration

    for stage in children_named(stages, "Stage"):
        stage_config = StageConfiguration(category_id=stage.get("CategoryId", ""))
        components = first_child(stage, "Components")
        for component in children_named(components, "Component") if components is not None else []:
            name = component.get("Name", "")
            bag = first_child(component, "Properties")
            try:
                properties = decode_property_bag(bag) if bag is not None else []
            except PropertyBagDecodeError as e:
                raise PipelineConfigurationError(f"component '{name}': {e}") from e
            stage_config.components.append(ComponentConfiguration(name=name, properties=properties))
        configuration.stages.append(stage_config)

    return configuration
