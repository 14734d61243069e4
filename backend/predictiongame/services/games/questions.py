import abc
import random
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from predictiongame.models import QuestionModel
from .domain import Question
from .errors import StorageError


class QuestionSource(abc.ABC):
    """Supplies the questions for a round.

    select_random(n) returns n distinct questions. When the corpus holds fewer
    than n questions the whole corpus is returned, shuffled. Calls are
    independent: nothing stops a question from showing up in consecutive
    rounds.
    """

    @abc.abstractmethod
    def select_random(self, n: int) -> List[Question]:
        raise NotImplementedError


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"Cannot select a negative number of questions: {n}")


class InMemoryQuestionSource(QuestionSource):
    def __init__(self, questions: Iterable[Question], rng: Optional[random.Random] = None):
        self._questions = {}
        for q in questions:
            # Last definition of an id wins so a result never repeats an id
            self._questions[q.id] = q
        self._rng = rng or random.Random()

    def __len__(self):
        return len(self._questions)

    def select_random(self, n: int) -> List[Question]:
        _check_count(n)
        pool = list(self._questions.values())
        return self._rng.sample(pool, min(n, len(pool)))


class SqlQuestionSource(QuestionSource):
    """Draws questions from the `question` table; needs an app context."""

    def select_random(self, n: int) -> List[Question]:
        _check_count(n)
        if n == 0:
            return []
        try:
            rows = QuestionModel.query.order_by(func.random()).limit(n).all()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not load questions: {exc}") from exc
        return [row.to_domain() for row in rows]
