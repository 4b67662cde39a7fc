import os
import sys
import pytest

# Ensure the backend root (containing the `nanhai` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from nanhai import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/ws'
    MAX_CONNECTIONS = 4
    COMPLETION_BONUS = 5
    DIVE_MAX_RETRIES = 5
    DIVE_RANDOM_SEED = 1234
    DOCUMENT_KEY = 'nanhai-test'
    ARTIFACT_CATALOG = None


SINGLE_ARTIFACT = [{
    'key': 'silver_ingot',
    'name': 'Stamped Silver Ingot',
    'points': 2,
    'image': 'images/artifacts/SilverIngot.png',
    'blurbs': ['north-west', 'north-east', 'south-west', 'south-east'],
}]


@pytest.fixture()
def app_overrides():
    return {}


@pytest.fixture()
def flask_app(app_overrides):
    config_class = type('OverriddenTestConfig', (TestConfig,), dict(app_overrides))
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import nanhai.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def engine(flask_app):
    return flask_app.extensions['nanhai']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
