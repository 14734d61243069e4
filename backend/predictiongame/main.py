from flask import Blueprint, jsonify, current_app
from predictiongame.services.games import EXPECTED_CONFIDENCE

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({
        'message': 'Welcome to the prediction game!',
        'num_questions': current_app.config.get('NUM_QUESTIONS'),
        'expected_confidence': EXPECTED_CONFIDENCE,
    })
