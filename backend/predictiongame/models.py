from datetime import datetime, timezone
import json

from predictiongame import db
from predictiongame.services.games.domain import (
    MAX_GAME_ID_LENGTH,
    MAX_USER_ID_LENGTH,
    GameRecord,
    Question,
    answers_from_json,
    answers_to_json,
)


def _utcnow():
    return datetime.now(timezone.utc)


def _as_utc(value):
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class QuestionModel(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.String(64), primary_key=True)
    text = db.Column(db.Text, nullable=False)
    bound_low = db.Column(db.Float, nullable=False)
    bound_high = db.Column(db.Float, nullable=False)

    __table_args__ = (
        db.CheckConstraint('bound_low <= bound_high', name='ck_question_bounds'),
    )

    @classmethod
    def from_domain(cls, question: Question) -> 'QuestionModel':
        return cls(
            id=question.id,
            text=question.text,
            bound_low=question.bound_low,
            bound_high=question.bound_high,
        )

    def to_domain(self) -> Question:
        return Question(
            id=self.id,
            text=self.text,
            bound_low=self.bound_low,
            bound_high=self.bound_high,
        )


class GameModel(db.Model):
    __tablename__ = 'game'
    # Surrogate key; also gives the save order used for history
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.String(MAX_GAME_ID_LENGTH), unique=True, nullable=False, index=True)
    user_id = db.Column(db.String(MAX_USER_ID_LENGTH), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    answers = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded answers incl. question snapshots

    def set_answers(self, answers):
        self.answers = json.dumps(answers_to_json(answers))

    def to_domain(self) -> GameRecord:
        return GameRecord(
            id=self.game_id,
            user_id=self.user_id,
            answers=answers_from_json(json.loads(self.answers) if self.answers else []),
            created_at=_as_utc(self.created_at),
        )
