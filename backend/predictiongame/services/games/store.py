"""Storage for finished games.

Every store keeps the same rules:

- save() rejects an id that was saved before with DuplicateGameError
- get() raises GameNotFoundError for an unknown id
- list() returns a user's games oldest first, in save order
- last() returns None when the user has not played yet
- backend failures surface as StorageError
"""

import abc
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from predictiongame import db
from predictiongame.models import GameModel
from .domain import Answer, GameRecord
from .errors import DuplicateGameError, GameNotFoundError, StorageError


class GameStore(abc.ABC):
    @abc.abstractmethod
    def save(self, user_id: str, game_id: str, answers: Sequence[Answer]) -> GameRecord:
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, game_id: str) -> GameRecord:
        raise NotImplementedError

    @abc.abstractmethod
    def list(self, user_id: str) -> List[GameRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def last(self, user_id: str) -> Optional[GameRecord]:
        raise NotImplementedError


class InMemoryGameStore(GameStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._games: Dict[str, GameRecord] = {}
        self._by_user: Dict[str, List[str]] = {}

    def save(self, user_id, game_id, answers):
        record = GameRecord(
            id=game_id,
            user_id=user_id,
            answers=tuple(answers),
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            if game_id in self._games:
                raise DuplicateGameError(game_id)
            self._games[game_id] = record
            self._by_user.setdefault(user_id, []).append(game_id)
        return record

    def get(self, game_id):
        with self._lock:
            record = self._games.get(game_id)
        if record is None:
            raise GameNotFoundError(game_id)
        return record

    def list(self, user_id):
        with self._lock:
            return [self._games[gid] for gid in self._by_user.get(user_id, [])]

    def last(self, user_id):
        with self._lock:
            ids = self._by_user.get(user_id)
            return self._games[ids[-1]] if ids else None


class SqlGameStore(GameStore):
    """Keeps games in the `game` table; must be used inside an app context."""

    def save(self, user_id, game_id, answers):
        row = GameModel(game_id=game_id, user_id=user_id)
        row.set_answers(answers)
        try:
            db.session.add(row)
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            if self._exists(game_id):
                raise DuplicateGameError(game_id) from exc
            raise StorageError(f"Could not save game {game_id}: {exc}") from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageError(f"Could not save game {game_id}: {exc}") from exc
        try:
            # Reads back the committed row, which expired on commit
            return row.to_domain()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not reload game {game_id}: {exc}") from exc

    def _exists(self, game_id):
        try:
            return GameModel.query.filter_by(game_id=game_id).first() is not None
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not check game {game_id}: {exc}") from exc

    def get(self, game_id):
        try:
            row = GameModel.query.filter_by(game_id=game_id).first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not load game {game_id}: {exc}") from exc
        if row is None:
            raise GameNotFoundError(game_id)
        return row.to_domain()

    def list(self, user_id):
        try:
            rows = GameModel.query.filter_by(user_id=user_id).order_by(GameModel.id.asc()).all()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not list games for {user_id}: {exc}") from exc
        return [row.to_domain() for row in rows]

    def last(self, user_id):
        try:
            row = GameModel.query.filter_by(user_id=user_id).order_by(GameModel.id.desc()).first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not load last game for {user_id}: {exc}") from exc
        return row.to_domain() if row else None
