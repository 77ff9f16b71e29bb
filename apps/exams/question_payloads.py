"""Typed payload variants for the three question kinds.

A question stores exactly one payload, and the payload shape is decided by the
question type. ``parse_payload`` is the single entry point used by
``Question.clean`` so a choice question can never carry test cases and a code
question can never carry options.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Union

CHOICE = "choice"
ANSWER = "answer"
CODE = "code"

OPTION_COUNT = 4
TEST_CASE_TYPES = ("number", "text", "list", "object")


class PayloadError(ValueError):
    """Raised when a payload does not match its question type."""


@dataclass(frozen=True, slots=True)
class ChoicePayload:
    options: tuple[str, str, str, str]
    correct_option: int

    kind = CHOICE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChoicePayload":
        _reject_unknown_keys(data, {"options", "correct_option"})
        options = data.get("options")
        if not isinstance(options, (list, tuple)) or len(options) != OPTION_COUNT:
            raise PayloadError(f"Choice questions need exactly {OPTION_COUNT} options.")
        cleaned = tuple(str(option).strip() for option in options)
        if not all(cleaned):
            raise PayloadError("Choice options must not be empty.")

        correct = data.get("correct_option")
        if isinstance(correct, bool) or not isinstance(correct, int):
            raise PayloadError("correct_option must be an integer between 1 and 4.")
        if not 1 <= correct <= OPTION_COUNT:
            raise PayloadError("correct_option must be an integer between 1 and 4.")
        return cls(options=cleaned, correct_option=correct)

    def to_dict(self) -> dict:
        return {"options": list(self.options), "correct_option": self.correct_option}

    def public_dict(self) -> dict:
        return {"options": list(self.options)}


@dataclass(frozen=True, slots=True)
class AnswerPayload:
    expected_answer: str

    kind = ANSWER

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnswerPayload":
        _reject_unknown_keys(data, {"expected_answer"})
        expected = str(data.get("expected_answer") or "").strip()
        if not expected:
            raise PayloadError("Answer questions need an expected_answer.")
        return cls(expected_answer=expected)

    def to_dict(self) -> dict:
        return {"expected_answer": self.expected_answer}

    def public_dict(self) -> dict:
        return {}


@dataclass(frozen=True, slots=True)
class CodeTestCase:
    input: str
    type: str
    output: str

    @classmethod
    def from_dict(cls, data: Any, *, position: int) -> "CodeTestCase":
        if not isinstance(data, Mapping):
            raise PayloadError(f"Test case {position} must be an object.")
        _reject_unknown_keys(data, {"input", "type", "output"})
        case_type = data.get("type")
        if case_type not in TEST_CASE_TYPES:
            raise PayloadError(
                f"Test case {position} type must be one of: {', '.join(TEST_CASE_TYPES)}."
            )
        return cls(
            input=str(data.get("input", "")),
            type=case_type,
            output=str(data.get("output", "")),
        )


@dataclass(frozen=True, slots=True)
class CodePayload:
    expected_code: str
    test_cases: tuple[CodeTestCase, ...]

    kind = CODE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CodePayload":
        _reject_unknown_keys(data, {"expected_code", "test_cases"})
        expected_code = str(data.get("expected_code") or "")
        if not expected_code.strip():
            raise PayloadError("Code questions need a reference solution in expected_code.")
        raw_cases = data.get("test_cases") or []
        if not isinstance(raw_cases, (list, tuple)):
            raise PayloadError("test_cases must be a list.")
        cases = tuple(
            CodeTestCase.from_dict(item, position=index)
            for index, item in enumerate(raw_cases, start=1)
        )
        return cls(expected_code=expected_code, test_cases=cases)

    def to_dict(self) -> dict:
        return {
            "expected_code": self.expected_code,
            "test_cases": [asdict(case) for case in self.test_cases],
        }

    def public_dict(self) -> dict:
        return {}


QuestionPayload = Union[ChoicePayload, AnswerPayload, CodePayload]

_VARIANTS = {
    CHOICE: ChoicePayload,
    ANSWER: AnswerPayload,
    CODE: CodePayload,
}


def parse_payload(question_type: str, data: Any) -> QuestionPayload:
    """Validate ``data`` against the variant for ``question_type``."""

    try:
        variant = _VARIANTS[question_type]
    except KeyError as exc:
        raise PayloadError(f"Unknown question type '{question_type}'.") from exc
    if not isinstance(data, Mapping):
        raise PayloadError("Payload must be a JSON object.")
    return variant.from_dict(data)


def _reject_unknown_keys(data: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise PayloadError(f"Unexpected payload field(s): {', '.join(unknown)}.")


__all__ = [
    "ANSWER",
    "AnswerPayload",
    "CHOICE",
    "CODE",
    "ChoicePayload",
    "CodePayload",
    "CodeTestCase",
    "PayloadError",
    "QuestionPayload",
    "parse_payload",
]
