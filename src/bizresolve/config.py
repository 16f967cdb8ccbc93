"""Run configuration for a parse run."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RunOptions(BaseModel):
    """Options controlling which parser passes run and how they trace."""
    model_config = ConfigDict(extra="forbid")

    disabled_parsers: List[str] = Field(default_factory=list)  # parser names to skip
    trace_resources: bool = False  # log every created resource at debug level
