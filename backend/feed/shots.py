import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


def new_shot_id() -> str:
    return f"shot-{uuid.uuid4().hex}"


class Shot(BaseModel):
    """One card as held by the feed. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    content: str
    question: str
    options: list[str]
    correct_answer: StrictInt = Field(alias="correctAnswer", ge=0, le=3)
    image_url: str = Field(alias="imageUrl")
    topic: Optional[str] = None

    @field_validator("options")
    @classmethod
    def exactly_four_options(cls, v: list[str]) -> list[str]:
        if len(v) != 4:
            raise ValueError(f"expected exactly 4 options, got {len(v)}")
        return v

    @classmethod
    def from_payload(cls, data: dict) -> "Shot":
        """Build a Shot from a /api/generate-content body, minting a fresh id."""
        return cls.model_validate({**data, "id": new_shot_id()})
