import os
import sys
import pytest

# Ensure the backend root (containing the `wordduel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from wordduel import create_app, socketio
from wordduel.dictionary import WordDictionary
from wordduel.services.game import RoomRegistry, SessionController, Transport


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    FEEDBACK_MODE = 'single_pass'
    SOCKETIO_NAMESPACE = '/'


class RecordingTransport(Transport):
    """Keeps every delivered message per connection, resolving room broadcasts."""

    def __init__(self):
        self.groups = {}
        self.sent = []

    def emit(self, event, payload, to, skip_sid=None):
        targets = set(self.groups[to]) if to in self.groups else {to}
        targets.discard(skip_sid)
        for sid in sorted(targets):
            self.sent.append((sid, event, payload))

    def join(self, sid, room_id):
        self.groups.setdefault(room_id, set()).add(sid)

    def leave(self, sid, room_id):
        self.groups.get(room_id, set()).discard(sid)

    def received(self, sid, event=None):
        return [payload for to, name, payload in self.sent if to == sid and (event is None or name == event)]

    def events(self, sid):
        return [name for to, name, _ in self.sent if to == sid]

    def clear(self):
        self.sent = []


class FirstChoice:
    """Stand-in random source: always picks the first option."""

    def choice(self, seq):
        return seq[0]


class ScriptedCodes:
    """Random source for room codes that yields the given codes in order."""

    def __init__(self, *codes):
        self.codes = list(codes)

    def choices(self, population, k):
        return list(self.codes.pop(0))


WORDS = [
    'apple', 'angle', 'crane', 'slate', 'house', 'mouse', 'train', 'brain',
    'pride', 'ghost', 'plumb', 'eerie', 'llama', 'sheep', 'geese', 'puppy',
]


@pytest.fixture()
def dictionary():
    return WordDictionary(WORDS)


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def registry():
    return RoomRegistry(rng=ScriptedCodes('ABC123', 'XYZ789', 'QWE456'))


@pytest.fixture()
def controller(registry, dictionary, transport):
    return SessionController(
        registry=registry,
        dictionary=dictionary,
        transport=transport,
        rng=FirstChoice(),
    )


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()
