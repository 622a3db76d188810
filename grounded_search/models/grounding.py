"""
Grounding domain model.

Dependencies: pydantic
System role: Citation span data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Grounding(BaseModel):
    """
    Assertion that a text range is supported by one or more sources.

    Attributes:
        start_index: Inclusive start offset into the final text
        end_index: Exclusive end offset into the final text
        source_ordinals: Registry ordinals, in arrival order (may repeat)
    """

    model_config = ConfigDict(frozen=True)

    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    source_ordinals: tuple[int, ...] = Field(default=())
