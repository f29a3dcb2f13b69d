"""Rejections raised by the game services.

Each error carries the message shown to the connection that triggered it.
"""


class GameError(Exception):
    #: Whether the initiating connection is told about the failure.
    notify = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidWord(GameError):
    def __init__(self, word: str, message: str = None):
        super().__init__(message or f"'{word.upper()}' is not a valid word.")
        self.word = word


class RoomNotFound(GameError):
    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} does not exist.")
        self.room_id = room_id


class RoomFull(GameError):
    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} is full.")
        self.room_id = room_id


class NoActiveRoom(GameError):
    notify = False

    def __init__(self, sid: str):
        super().__init__(f"Connection {sid} is not in a room.")
        self.sid = sid


class NoSecretSet(GameError):
    notify = False

    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} has no round in progress.")
        self.room_id = room_id


class NotYourTurn(GameError):
    def __init__(self):
        super().__init__('It is not your turn to guess.')
