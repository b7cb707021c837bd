"""
Tests for survey submission parsing.
"""

from typing import Any

import pytest

from meeting_feedback.shared.exceptions import ValidationError
from meeting_feedback.surveys.schemas import (
    MISSING_RATINGS_MESSAGE,
    NON_NUMERIC_RATING_MESSAGE,
    RATING_RANGE_MESSAGE,
    parse_submission,
)


class TestParseSubmission:
    def test_valid_submission(self, valid_answers: dict[str, Any]) -> None:
        answers = parse_submission(valid_answers)

        assert answers.ratings == {
            "punctuality": 5,
            "listening_understanding": 4,
            "knowledge_expertise": 3,
            "clarity_answers": 2,
            "overall_value": 1,
        }
        assert answers.most_valuable == "Clear roadmap"
        assert answers.raw == valid_answers

    def test_numeric_strings_from_forms(self, valid_answers: dict[str, Any]) -> None:
        form = {key: str(value) for key, value in valid_answers.items()}
        form["punctuality"] = " 4 "
        answers = parse_submission(form)
        assert answers.punctuality == 4
        assert answers.overall_value == 1

    def test_blank_free_text_is_none(self, valid_answers: dict[str, Any]) -> None:
        valid_answers.update(most_valuable="   ", improvements=None)
        answers = parse_submission(valid_answers)
        assert answers.most_valuable is None
        assert answers.improvements is None

    @pytest.mark.parametrize("blank", [None, "", "  "])
    def test_missing_rating(self, valid_answers: dict[str, Any], blank: Any) -> None:
        valid_answers["clarity_answers"] = blank
        with pytest.raises(ValidationError) as exc_info:
            parse_submission(valid_answers)
        assert exc_info.value.message == MISSING_RATINGS_MESSAGE
        assert exc_info.value.details == {"fields": ["clarity_answers"]}

    def test_absent_rating(self, valid_answers: dict[str, Any]) -> None:
        del valid_answers["overall_value"]
        with pytest.raises(ValidationError, match=MISSING_RATINGS_MESSAGE):
            parse_submission(valid_answers)

    @pytest.mark.parametrize("value", ["abc", "4.5", 4.5, True, "²", [3]])
    def test_non_numeric_rating(self, valid_answers: dict[str, Any], value: Any) -> None:
        valid_answers["punctuality"] = value
        with pytest.raises(ValidationError) as exc_info:
            parse_submission(valid_answers)
        assert exc_info.value.message == NON_NUMERIC_RATING_MESSAGE

    @pytest.mark.parametrize("value", [0, 6, -1, "6"])
    def test_out_of_range_rating(self, valid_answers: dict[str, Any], value: Any) -> None:
        valid_answers["overall_value"] = value
        with pytest.raises(ValidationError) as exc_info:
            parse_submission(valid_answers)
        assert exc_info.value.message == RATING_RANGE_MESSAGE
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("value", [1, 5, 3.0, "1", "5"])
    def test_boundary_values_accepted(self, valid_answers: dict[str, Any], value: Any) -> None:
        valid_answers["knowledge_expertise"] = value
        assert 1 <= parse_submission(valid_answers).knowledge_expertise <= 5

    @pytest.mark.parametrize("value", ["9" * 5000, "-" + "9" * 5000, "1000"])
    def test_overlong_rating_is_out_of_range(self, valid_answers: dict[str, Any], value: str) -> None:
        valid_answers["punctuality"] = value
        with pytest.raises(ValidationError) as exc_info:
            parse_submission(valid_answers)
        assert exc_info.value.message == RATING_RANGE_MESSAGE
        assert exc_info.value.details == {"fields": ["punctuality"]}

    def test_leading_zeros_are_ignored(self, valid_answers: dict[str, Any]) -> None:
        valid_answers["punctuality"] = "0" * 50 + "4"
        assert parse_submission(valid_answers).punctuality == 4
