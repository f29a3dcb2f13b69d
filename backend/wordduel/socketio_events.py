from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from wordduel import socketio
from wordduel.services.game.session import SessionController, Transport


class SocketIOTransport(Transport):
    """Delivers controller messages through Flask-SocketIO rooms."""

    def __init__(self, sio, namespace: str = '/'):
        self.socketio = sio
        self.namespace = namespace

    def emit(self, event, payload, to, skip_sid=None):
        self.socketio.emit(event, payload, to=to, skip_sid=skip_sid, namespace=self.namespace)

    def join(self, sid, room_id):
        join_room(room_id, sid=sid, namespace=self.namespace)

    def leave(self, sid, room_id):
        leave_room(room_id, sid=sid, namespace=self.namespace)


def _controller() -> SessionController:
    return current_app.extensions['wordduel']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _field(data, key):
    """Accept either a bare value or ``{key: value}``."""
    if isinstance(data, dict):
        return data.get(key)
    return data


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('connected', {'sid': _get_sid()})


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _controller().disconnect(sid)


def handle_create_room(data=None):
    _controller().create_room(_get_sid())


def handle_join_room(data=None):
    room_id = _field(data, 'roomId')
    if not isinstance(room_id, str) or not room_id.strip():
        emit('error', 'roomId is required')
        return
    _controller().join_room(_get_sid(), room_id)


def handle_set_word(data=None):
    word = _field(data, 'word')
    if not isinstance(word, str):
        emit('error', 'word is required')
        return
    _controller().set_word(_get_sid(), word)


def handle_make_guess(data=None):
    guess = _field(data, 'guess')
    if not isinstance(guess, str):
        emit('error', 'guess is required')
        return
    _controller().make_guess(_get_sid(), guess)


def handle_leave_room(data=None):
    _controller().leave_room(_get_sid())


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('setWord', handle_set_word, namespace=namespace)
    socketio.on_event('makeGuess', handle_make_guess, namespace=namespace)
    socketio.on_event('leaveRoom', handle_leave_room, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
