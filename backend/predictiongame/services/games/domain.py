import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from .errors import MalformedPayloadError
from .scoring import is_correct, score_answers

# Column widths of the game table
MAX_GAME_ID_LENGTH = 64
MAX_USER_ID_LENGTH = 128


def _pick(payload: Dict[str, Any], *keys: str) -> Any:
    """Return the first key present in payload; accepts snake_case and capitalised field names."""
    for key in keys:
        if key in payload:
            return payload[key]
    raise MalformedPayloadError(f"Missing field {keys[0]!r}")


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or value is None:
        raise MalformedPayloadError(f"Field {name!r} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedPayloadError(f"Field {name!r} must be a number") from None
    if not math.isfinite(number):
        raise MalformedPayloadError(f"Field {name!r} must be finite")
    return number


def _mapping(value: Any, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"Field {name!r} must be an object")
    return value


def _identifier(value: Any, name: str, max_length: int) -> str:
    value = str(value).strip()
    if not value:
        raise MalformedPayloadError(f"Field {name!r} must not be empty")
    if len(value) > max_length:
        raise MalformedPayloadError(f"Field {name!r} is longer than {max_length} characters")
    return value


@dataclass(frozen=True)
class Question:
    """A quiz item whose true value lies in [bound_low, bound_high]."""

    id: str
    text: str
    bound_low: float
    bound_high: float

    def __post_init__(self):
        if not (math.isfinite(self.bound_low) and math.isfinite(self.bound_high)):
            raise ValueError(f"Question {self.id!r} has a non-finite bound")
        if self.bound_low > self.bound_high:
            raise ValueError(
                f"Question {self.id!r}: bound_low {self.bound_low} > bound_high {self.bound_high}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'text': self.text,
            'bound_low': self.bound_low,
            'bound_high': self.bound_high,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Question":
        payload = _mapping(payload, 'question')
        try:
            return cls(
                id=str(_pick(payload, 'id', 'ID')),
                text=str(_pick(payload, 'text', 'Text')),
                bound_low=_number(_pick(payload, 'bound_low', 'BoundLow'), 'bound_low'),
                bound_high=_number(_pick(payload, 'bound_high', 'BoundHigh'), 'bound_high'),
            )
        except MalformedPayloadError:
            raise
        except ValueError as exc:
            raise MalformedPayloadError(str(exc)) from exc


@dataclass(frozen=True)
class Answer:
    """A submitted range for one question; owns a snapshot of that question."""

    question: Question
    lower_bound: float
    upper_bound: float

    @property
    def correct(self) -> bool:
        return is_correct(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'question': self.question.to_dict(),
            'lower': self.lower_bound,
            'upper': self.upper_bound,
            'correct': self.correct,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Answer":
        payload = _mapping(payload, 'answer')
        # 'correct' is derived, so any client-sent value is ignored
        return cls(
            question=Question.from_dict(_pick(payload, 'question', 'Question')),
            lower_bound=_number(_pick(payload, 'lower', 'LowerBound'), 'lower'),
            upper_bound=_number(_pick(payload, 'upper', 'UpperBound'), 'upper'),
        )


@dataclass(frozen=True)
class GameRecord:
    id: str
    user_id: str
    answers: Tuple[Answer, ...] = ()
    created_at: Optional[datetime] = field(default=None, compare=False)

    def to_dict(self, include_answers: bool = True) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'score': score_answers(self.answers).to_dict(),
        }
        if include_answers:
            data['answers'] = [a.to_dict() for a in self.answers]
        return data


@dataclass(frozen=True)
class GameSubmission:
    """The payload a client posts when a round is finished."""

    id: str
    user_id: str
    answers: Tuple[Answer, ...]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "GameSubmission":
        payload = _mapping(payload, 'game')
        answers = _pick(payload, 'answers', 'Answers')
        if not isinstance(answers, list):
            raise MalformedPayloadError("Field 'answers' must be a list")
        return cls(
            id=_identifier(_pick(payload, 'id', 'ID'), 'id', MAX_GAME_ID_LENGTH),
            user_id=_identifier(_pick(payload, 'user_id', 'UserID'), 'user_id', MAX_USER_ID_LENGTH),
            answers=tuple(Answer.from_dict(a) for a in answers),
        )


def answers_to_json(answers: Sequence[Answer]):
    """Serialise answers for storage; the derived 'correct' flag is not stored."""
    return [
        {'question': a.question.to_dict(), 'lower': a.lower_bound, 'upper': a.upper_bound}
        for a in answers
    ]


def answers_from_json(data) -> Tuple[Answer, ...]:
    return tuple(Answer.from_dict(a) for a in data or [])
