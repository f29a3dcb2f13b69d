import logging
import random
import string
import threading
from typing import Dict, List, Optional, Tuple

from wordduel.errors import RoomFull, RoomNotFound
from wordduel.models import Player, Room

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


class RoomRegistry:
    """In-memory room map plus a connection -> room reverse index.

    ``_lock`` only guards the two dicts and is held briefly. Anything that
    changes a room's players happens under that room's own lock, and the
    registry lock is never held while waiting for a room lock.
    """

    def __init__(self, code_length: int = 6, rng: random.Random = None):
        self.code_length = code_length
        self._rng = rng or random.Random()
        self._rooms: Dict[str, Room] = {}
        self._room_by_sid: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def player_count(self) -> int:
        with self._lock:
            return len(self._room_by_sid)

    def get(self, room_id: str) -> Optional[Room]:
        if not room_id:
            return None
        with self._lock:
            return self._rooms.get(room_id.upper())

    def find_by_connection(self, sid: str) -> Optional[Room]:
        with self._lock:
            room_id = self._room_by_sid.get(sid)
            return self._rooms.get(room_id) if room_id else None

    def create_room(self, sid: str) -> Room:
        """Register a room whose only player is ``sid``."""
        with self._lock:
            code = self._fresh_code()
            room = Room(id=code, players=[Player(id=sid, name='Player 1')])
            self._rooms[code] = room
            self._room_by_sid[sid] = code
        logger.info(f"[room-create] room={code} sid={sid}")
        return room

    def join_room(self, room_id: str, sid: str) -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound((room_id or '').upper())
        self.add_player(room, sid)
        return room

    def add_player(self, room: Room, sid: str) -> Player:
        """Seat ``sid`` in ``room``; raises RoomNotFound if it closed meanwhile."""
        with room.lock:
            if room.closed:
                raise RoomNotFound(room.id)
            if room.is_full:
                raise RoomFull(room.id)
            player = Player(id=sid, name=room.free_seat())
            room.players.append(player)
            with self._lock:
                self._room_by_sid[sid] = room.id
        logger.info(f"[room-join] room={room.id} sid={sid} seat={player.name!r}")
        return player

    def remove_connection(self, sid: str) -> Optional[Tuple[Room, List[Player]]]:
        room = self.find_by_connection(sid)
        if room is None:
            return None
        return self.remove_player(room, sid)

    def remove_player(self, room: Room, sid: str) -> Optional[Tuple[Room, List[Player]]]:
        """Remove ``sid`` from ``room``, deleting the room once it is empty.

        Returns the room and its remaining players, or None when ``sid`` was
        no longer seated there.
        """
        with room.lock:
            player = room.player(sid)
            if room.closed or player is None:
                return None
            room.players.remove(player)
            with self._lock:
                if self._room_by_sid.get(sid) == room.id:
                    del self._room_by_sid[sid]
                if not room.players:
                    room.closed = True
                    if self._rooms.get(room.id) is room:
                        del self._rooms[room.id]
            remaining = list(room.players)
        logger.info(f"[room-leave] room={room.id} sid={sid} remaining={len(remaining)}")
        if room.closed:
            logger.info(f"[room-close] room={room.id}")
        return room, remaining

    def _fresh_code(self) -> str:
        # caller holds self._lock
        while True:
            code = ''.join(self._rng.choices(ROOM_CODE_ALPHABET, k=self.code_length))
            if code not in self._rooms:
                return code
