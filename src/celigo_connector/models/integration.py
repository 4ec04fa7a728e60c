"""Integration model: a named set of flow groupings."""

from typing import List

from pydantic import ConfigDict, Field

from .shared import CeligoModel


class FlowGrouping(CeligoModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Flow grouping name")


class Integration(CeligoModel):
    """Integrations reject unknown keys at both levels."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Integration name")
    flow_groupings: List[FlowGrouping] = Field(..., description="Flow groupings, in display order")
