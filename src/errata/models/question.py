# src/errata/models/question.py
"""Structured question data model."""

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from errata.errors import SchemaValidationError

Language = Literal["zh", "en"]
Difficulty = Literal["easy", "medium", "hard", "harder"]

LANGUAGES: tuple[str, ...] = get_args(Language)
DIFFICULTIES: tuple[str, ...] = get_args(Difficulty)

MAX_KNOWLEDGE_POINTS = 5

# Closed subject vocabulary requested by the analyze prompt:
# math, physics, chemistry, biology, English, language arts, history,
# geography, politics, other.
SUBJECTS = ("数学", "物理", "化学", "生物", "英语", "语文", "历史", "地理", "政治", "其他")


class StructuredQuestion(BaseModel):
    """A transcribed and analyzed exam question.

    Text fields may contain Markdown and LaTeX. They may be empty strings
    (e.g. for an unreadable image) but are never None.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    question_text: str = Field(alias="questionText")
    answer_text: str = Field(alias="answerText")
    analysis: str
    subject: str = ""
    knowledge_points: list[str] = Field(default_factory=list, alias="knowledgePoints")

    @field_validator("knowledge_points")
    @classmethod
    def _cap_knowledge_points(cls, value: list[str]) -> list[str]:
        return value[:MAX_KNOWLEDGE_POINTS]

    @property
    def has_known_subject(self) -> bool:
        """True if ``subject`` is one of SUBJECTS."""
        return self.subject in SUBJECTS

    def to_wire(self) -> dict[str, Any]:
        """Dump with the camelCase keys the model emits."""
        return self.model_dump(by_alias=True)


def validate_question(candidate: Any) -> StructuredQuestion:
    """Validate a parsed JSON value against the StructuredQuestion schema.

    Raises:
        SchemaValidationError: If ``candidate`` is not an object or does not
            match the schema.
    """
    if not isinstance(candidate, dict):
        raise SchemaValidationError(
            f"Expected a JSON object, got {type(candidate).__name__}"
        )
    try:
        return StructuredQuestion.model_validate(candidate)
    except ValidationError as e:
        raise SchemaValidationError(str(e)) from e
