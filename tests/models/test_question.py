# tests/models/test_question.py
"""Tests for the StructuredQuestion model."""

import pytest
from pydantic import ValidationError

from errata.errors import SchemaValidationError
from errata.models import (
    DIFFICULTIES,
    LANGUAGES,
    MAX_KNOWLEDGE_POINTS,
    SUBJECTS,
    StructuredQuestion,
    validate_question,
)


class TestStructuredQuestion:
    def test_from_wire_keys(self, question_payload):
        question = StructuredQuestion.model_validate(question_payload)
        assert question.question_text == question_payload["questionText"]
        assert question.answer_text == question_payload["answerText"]
        assert question.analysis == question_payload["analysis"]
        assert question.subject == "数学"
        assert question.knowledge_points == ["一元二次方程"]

    def test_from_field_names(self):
        question = StructuredQuestion(
            question_text="Q", answer_text="A", analysis="An", knowledge_points=["x"]
        )
        assert question.question_text == "Q"
        assert question.knowledge_points == ["x"]

    def test_subject_and_knowledge_points_default(self):
        question = validate_question({"questionText": "Q", "answerText": "A", "analysis": ""})
        assert question.subject == ""
        assert question.knowledge_points == []

    def test_empty_strings_allowed(self):
        question = validate_question(
            {"questionText": "", "answerText": "", "analysis": "", "knowledgePoints": []}
        )
        assert question.question_text == ""

    def test_knowledge_points_truncated(self):
        points = [f"kp{i}" for i in range(8)]
        question = validate_question(
            {"questionText": "Q", "answerText": "A", "analysis": "", "knowledgePoints": points}
        )
        assert len(question.knowledge_points) == MAX_KNOWLEDGE_POINTS
        assert question.knowledge_points == points[:MAX_KNOWLEDGE_POINTS]

    def test_unknown_keys_ignored(self, question_payload):
        question_payload["confidence"] = 0.9
        question = validate_question(question_payload)
        assert not hasattr(question, "confidence")

    def test_frozen(self, question_payload):
        question = validate_question(question_payload)
        with pytest.raises(ValidationError):
            question.subject = "物理"

    def test_to_wire_uses_camel_case(self, question_payload):
        wire = validate_question(question_payload).to_wire()
        assert wire == question_payload

    def test_has_known_subject(self, question_payload):
        assert validate_question(question_payload).has_known_subject
        question_payload["subject"] = "Astrology"
        assert not validate_question(question_payload).has_known_subject

    def test_vocabularies(self):
        assert LANGUAGES == ("zh", "en")
        assert DIFFICULTIES == ("easy", "medium", "hard", "harder")
        assert "其他" in SUBJECTS


class TestValidateQuestion:
    def test_missing_required_field(self):
        with pytest.raises(SchemaValidationError):
            validate_question({"questionText": "Q", "answerText": "A"})

    def test_wrong_type(self):
        with pytest.raises(SchemaValidationError):
            validate_question(
                {"questionText": "Q", "answerText": "A", "analysis": "", "knowledgePoints": "x"}
            )

    def test_null_text_rejected(self):
        with pytest.raises(SchemaValidationError):
            validate_question({"questionText": None, "answerText": "A", "analysis": ""})

    @pytest.mark.parametrize("candidate", [[], "text", 3, None])
    def test_non_object_rejected(self, candidate):
        with pytest.raises(SchemaValidationError, match="Expected a JSON object"):
            validate_question(candidate)
