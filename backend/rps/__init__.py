from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or '*'
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One tournament session per process
    from rps.services.games import create_session
    flask_app.extensions['rps_session'] = create_session(flask_app)

    # Import and register blueprints here
    from rps.main import main
    flask_app.register_blueprint(main)

    from rps.api.tournament import tournament
    flask_app.register_blueprint(tournament, url_prefix='/api/tournament')

    # Register Socket.IO event handlers
    from rps.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    flask_app.logger.info(
        f"[startup] picking={flask_app.config.get('PICKING_DURATION_SEC')}s "
        f"review={flask_app.config.get('REVIEW_DURATION_SEC')}s min_players={flask_app.config.get('MIN_PLAYERS')}"
    )
    return flask_app
