"""Exceptions raised by the game services.

Routes translate these into HTTP responses; the services themselves never log
or swallow them.
"""


class PredictionGameError(Exception):
    """Base class for all game service errors."""


class GameNotFoundError(PredictionGameError):
    def __init__(self, game_id: str):
        super().__init__(f"Game {game_id!r} not found")
        self.game_id = game_id


class DuplicateGameError(PredictionGameError):
    def __init__(self, game_id: str):
        super().__init__(f"Game {game_id!r} has already been saved")
        self.game_id = game_id


class StorageError(PredictionGameError):
    """The backing store failed; the original exception is chained as __cause__."""


class MalformedPayloadError(PredictionGameError, ValueError):
    """A submitted payload is missing fields or carries non-numeric bounds."""
