from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


# ── Model reply ───────────────────────────────────────────────────────────────

class QuizDraft(BaseModel):
    """Shape the language model is asked to return. Extra keys are ignored."""

    content: StrictStr
    question: StrictStr
    options: list[StrictStr]
    correct_answer: StrictInt = Field(alias="correctAnswer", ge=0, le=3)

    @field_validator("content", "question")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("options")
    @classmethod
    def exactly_four_options(cls, v: list[str]) -> list[str]:
        if len(v) != 4:
            raise ValueError(f"expected exactly 4 options, got {len(v)}")
        return v


# ── Response models ───────────────────────────────────────────────────────────

class GeneratedContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str
    question: str
    options: list[str]
    correct_answer: int = Field(alias="correctAnswer")
    image_url: str = Field(alias="imageUrl")
    topic: str


class HealthResponse(BaseModel):
    status: str
