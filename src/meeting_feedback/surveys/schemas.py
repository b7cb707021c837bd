"""
Survey submission parsing.

Submissions come straight from a browser form (JSON or form-encoded), so
ratings arrive as untrusted raw values and are checked here by hand.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from meeting_feedback.shared.exceptions import ValidationError
from meeting_feedback.surveys.models import RATING_FIELDS, RATING_MAX, RATING_MIN

MISSING_RATINGS_MESSAGE = "All rating questions are required"
NON_NUMERIC_RATING_MESSAGE = "Ratings must be whole numbers"
RATING_RANGE_MESSAGE = f"All ratings must be between {RATING_MIN} and {RATING_MAX}"

TEXT_FIELDS: tuple[str, ...] = ("most_valuable", "improvements")

_MAX_RATING_DIGITS = 3


@dataclass(frozen=True)
class SurveyAnswers:
    """A validated survey submission."""

    punctuality: int
    listening_understanding: int
    knowledge_expertise: int
    clarity_answers: int
    overall_value: int
    most_valuable: str | None = None
    improvements: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def ratings(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in RATING_FIELDS}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_int(value: Any) -> int | None:
    """Whole number from an int, an integral float or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        sign = text[:1] if text[:1] in "+-" else ""
        digits = text[len(sign):]
        if digits.isdecimal():
            # Past a few digits the value is off the scale whatever it is.
            if len(digits.lstrip("0")) > _MAX_RATING_DIGITS:
                return RATING_MIN - 1 if sign == "-" else RATING_MAX + 1
            return int(text)
    return None


def _clean_text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value).strip()


def parse_submission(raw: Mapping[str, Any]) -> SurveyAnswers:
    """Validate a raw submission.

    Raises:
        ValidationError: A rating is missing, not a whole number, or outside
            the 1..5 scale.
    """
    missing = [name for name in RATING_FIELDS if _is_blank(raw.get(name))]
    if missing:
        raise ValidationError(MISSING_RATINGS_MESSAGE, details={"fields": missing})

    ratings: dict[str, int] = {}
    invalid: list[str] = []
    for name in RATING_FIELDS:
        value = _to_int(raw.get(name))
        if value is None:
            invalid.append(name)
        else:
            ratings[name] = value
    if invalid:
        raise ValidationError(NON_NUMERIC_RATING_MESSAGE, details={"fields": invalid})

    out_of_range = [name for name, value in ratings.items() if not RATING_MIN <= value <= RATING_MAX]
    if out_of_range:
        raise ValidationError(RATING_RANGE_MESSAGE, details={"fields": out_of_range})

    return SurveyAnswers(
        **ratings,
        most_valuable=_clean_text(raw.get("most_valuable")),
        improvements=_clean_text(raw.get("improvements")),
        raw=dict(raw),
    )
