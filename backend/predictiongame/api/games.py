from flask import Blueprint, jsonify, request, current_app
from urllib.parse import unquote_plus
import json
import uuid
from predictiongame.services.games import NUM_QUESTIONS
from predictiongame.services.games.domain import GameSubmission
from predictiongame.services.games.errors import (
    DuplicateGameError,
    GameNotFoundError,
    MalformedPayloadError,
    StorageError,
)
from predictiongame.services.games.scoring import score_answers


games = Blueprint('games', __name__)


def _question_source():
    return current_app.extensions['question_source']


def _game_store():
    return current_app.extensions['game_store']


def _read_submission() -> dict:
    """Accept a JSON body of any content type, or the JSON document URL-encoded in a `data` field."""
    data = request.get_json(silent=True)
    if data is not None:
        return data
    raw = request.form.get('data')
    if raw is None:
        raw = request.get_data(as_text=True) or ''
        if raw.startswith('data='):
            raw = unquote_plus(raw[len('data='):])
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise MalformedPayloadError(f'Error parsing answers: {exc}') from exc


@games.errorhandler(StorageError)
def handle_storage_error(exc):
    current_app.logger.error(f"[storage] {exc} (cause: {exc.__cause__!r})")
    return jsonify({'error': str(exc)}), 500


@games.route('/questions/random', methods=['GET'])
def random_questions():
    n = int(current_app.config.get('NUM_QUESTIONS', NUM_QUESTIONS))
    selected = _question_source().select_random(n)
    if len(selected) < n:
        current_app.logger.warning(f"[questions] asked for {n}, corpus only had {len(selected)}")
    return jsonify([q.to_dict() for q in selected])


@games.route('/games/new', methods=['POST'])
def new_game():
    # Ids are minted here, at the edge; the game services never generate them
    return jsonify({'id': str(uuid.uuid4())}), 201


@games.route('/games', methods=['POST'])
def submit_game():
    try:
        submission = GameSubmission.from_dict(_read_submission())
    except MalformedPayloadError as exc:
        current_app.logger.info(f"[game-submit] rejected payload: {exc}")
        return jsonify({'error': str(exc)}), 400

    if len(submission.answers) != current_app.config.get('NUM_QUESTIONS', NUM_QUESTIONS):
        current_app.logger.info(
            f"[game-submit] game={submission.id} has {len(submission.answers)} answers"
        )

    try:
        record = _game_store().save(submission.user_id, submission.id, submission.answers)
    except DuplicateGameError as exc:
        return jsonify({'error': str(exc)}), 409

    current_app.logger.info(
        f"[game-save] game={record.id} user={record.user_id} answers={len(record.answers)}"
    )
    return jsonify(record.to_dict()), 201


@games.route('/games/<string:game_id>', methods=['GET'])
def get_game(game_id):
    store = _game_store()
    try:
        record = store.get(game_id)
    except GameNotFoundError as exc:
        return jsonify({'error': f'Game can not be loaded: {exc}'}), 404

    history = store.list(record.user_id)
    payload = record.to_dict()
    payload['history'] = [g.to_dict(include_answers=False) for g in history]
    # Running totals over the whole history, for the calibration chart
    payload['history_score'] = score_answers(
        a for g in history for a in g.answers
    ).to_dict()
    return jsonify(payload)


@games.route('/users/<string:user_id>/games', methods=['GET'])
def list_games(user_id):
    history = _game_store().list(user_id)
    return jsonify([g.to_dict(include_answers=False) for g in history])


@games.route('/users/<string:user_id>/last', methods=['GET'])
def last_game(user_id):
    record = _game_store().last(user_id)
    if record is None:
        return jsonify({'game': None})
    return jsonify({'game': record.to_dict()})
