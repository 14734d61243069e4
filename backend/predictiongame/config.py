import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///predictiongame.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Questions per round
    NUM_QUESTIONS = int(os.environ.get('NUM_QUESTIONS', '12'))
    # Comma separated list of front-end origins allowed to call the API
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173',
        ).split(',') if o.strip()
    ]
    # Default input for `flask seed-questions`
    QUESTIONS_FILE = os.environ.get('QUESTIONS_FILE') or 'questions.json'
