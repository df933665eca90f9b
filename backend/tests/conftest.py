import os
import sys
import random
import pytest

# Ensure the backend root (containing the `rps` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from rps import create_app, socketio
from rps.services.games import FakeClock, Session


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    PICKING_DURATION_SEC = 10
    REVIEW_DURATION_SEC = 5
    MIN_PLAYERS = 2
    MAX_FPS = 1000
    CORS_ALLOWED_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'
    RPS_CLOCK = None


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def session(clock):
    return Session(clock=clock, rng=random.Random(1234))


@pytest.fixture()
def flask_app(clock):
    class ClockedConfig(TestConfig):
        RPS_CLOCK = clock

    application = create_app(ClockedConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def app_session(flask_app):
    return flask_app.extensions['rps_session']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws',
        auth={'name': 'Alice'},
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
