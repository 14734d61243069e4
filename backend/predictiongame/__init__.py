from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import json
import click
from predictiongame.config import Config

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_class=Config, questions=None, games=None):
    """Build the Flask app.

    `questions` and `games` replace the SQL-backed question source and game
    store, e.g. with in-memory ones in tests.
    """
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    from predictiongame.services.games.questions import SqlQuestionSource
    from predictiongame.services.games.store import SqlGameStore
    flask_app.extensions['question_source'] = questions if questions is not None else SqlQuestionSource()
    flask_app.extensions['game_store'] = games if games is not None else SqlGameStore()

    # Import and register blueprints here
    from predictiongame.main import main
    flask_app.register_blueprint(main)

    from predictiongame.api.games import games as games_bp
    flask_app.register_blueprint(games_bp, url_prefix='/api')

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import predictiongame.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('seed-questions')
    @click.argument('path', required=False, type=click.Path(exists=True, dir_okay=False))
    def seed_questions_command(path):
        """Loads questions from a JSON list into the question table."""
        from predictiongame.models import QuestionModel
        from predictiongame.services.games.domain import Question

        path = path or flask_app.config['QUESTIONS_FILE']
        try:
            with open(path, encoding='utf-8') as fh:
                raw = json.load(fh)
        except OSError as exc:
            raise click.ClickException(f'Could not read {path}: {exc}')
        except ValueError as exc:
            raise click.ClickException(f'{path} is not valid JSON: {exc}')
        if not isinstance(raw, list):
            raise click.ClickException(f'{path} must contain a JSON list of questions')

        try:
            loaded = [Question.from_dict(item) for item in raw]
        except ValueError as exc:
            raise click.ClickException(f'Invalid question in {path}: {exc}')

        with flask_app.app_context():
            db.create_all()
            for q in loaded:
                db.session.merge(QuestionModel.from_domain(q))
            db.session.commit()
        flask_app.logger.info(f"[seed] loaded {len(loaded)} questions from {path}")
        click.echo(f'Loaded {len(loaded)} questions.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_questions_command)

    return flask_app
