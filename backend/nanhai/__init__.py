from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The engine and the connection gate are owned by this app instance
    from nanhai.services.game import GameEngine
    from nanhai.services.gate import ConnectionGate
    from nanhai.socketio_events import GATE_KEY, register_socketio_handlers
    engine = GameEngine(flask_app, socketio)
    flask_app.extensions[GATE_KEY] = ConnectionGate(int(flask_app.config.get('MAX_CONNECTIONS', 4)))

    # Import and register blueprints here
    from nanhai.main import main
    flask_app.register_blueprint(main)

    from nanhai.api.game import game
    flask_app.register_blueprint(game)

    register_socketio_handlers(flask_app.config.get('SOCKETIO_NAMESPACE', '/ws'))

    @click.command('init-db')
    def init_db_command():
        """Creates tables and the game document if they are missing."""
        with flask_app.app_context():
            import nanhai.models  # noqa: F401
            db.create_all()
            document = engine.ensure_document()
            print(f"Database ready: {len(document['players'])} players, {len(document['fragments'])} fragments.")

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with a fresh pool."""
        with flask_app.app_context():
            import nanhai.models  # noqa: F401
            db.drop_all()
            db.create_all()
            document = engine.ensure_document()
            print(f"Database has been reset with {len(document['fragments'])} fragments!")

    @click.command('reset-pool')
    def reset_pool_command():
        """Starts a new generation now and zeroes every score."""
        with flask_app.app_context():
            outcome = engine.reset_pool()
            print(f"Fragment pool regenerated; {len(outcome['leaderboard'])} players reset to 0.")

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(reset_pool_command)

    return flask_app
