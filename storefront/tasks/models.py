"""
Pydantic models for the customization flow state.

The flow state is a tagged union discriminated by ``phase``:
- StepActive(step_index): a step is on screen while advancing forward
- Review: terminal summary screen
- EditingStep(step_index): one committed step re-opened from Review
- Closed: the flow is over (abandoned or materialized into the cart)

Keeping these as separate models (instead of review/editing booleans)
makes combinations such as "editing while advancing" unrepresentable.
"""

from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from ..schemas.catalog import MenuItem, MenuItemOption


MEAT_STEP = "Meat"
VARIATION_STEP = "Variation"
ADDON_STEP = "Addon"
REVIEW_STEP = "Review"


class FlowPhase(str, Enum):
    """Phase tag of the flow state machine."""
    STEP_ACTIVE = "step_active"
    REVIEW = "review"
    EDITING_STEP = "editing_step"
    CLOSED = "closed"


class StepActive(BaseModel):
    phase: Literal[FlowPhase.STEP_ACTIVE] = FlowPhase.STEP_ACTIVE
    step_index: int = 0


class Review(BaseModel):
    phase: Literal[FlowPhase.REVIEW] = FlowPhase.REVIEW


class EditingStep(BaseModel):
    phase: Literal[FlowPhase.EDITING_STEP] = FlowPhase.EDITING_STEP
    step_index: int


class Closed(BaseModel):
    phase: Literal[FlowPhase.CLOSED] = FlowPhase.CLOSED


FlowState = Annotated[
    Union[StepActive, Review, EditingStep, Closed],
    Field(discriminator="phase"),
]


class HistoryEntry(BaseModel):
    """Committed selections for one step of the flow."""
    step: int
    token: str
    selections: List[MenuItemOption] = Field(default_factory=list)


class FlowResult(BaseModel):
    """What a finished flow hands to the cart."""
    item: MenuItem
    selections: List[MenuItemOption] = Field(default_factory=list)
    is_combo: bool = False
