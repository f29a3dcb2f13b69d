import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from wordduel.dictionary import WordDictionary
from wordduel.errors import GameError, InvalidWord, NoActiveRoom, NoSecretSet, NotYourTurn, RoomNotFound
from wordduel.models import GuessRecord, Room
from .feedback import evaluate
from .registry import RoomRegistry

logger = logging.getLogger(__name__)

PLAYER_LEFT_MESSAGE = 'The other player has left the game.'
# Upper bound on guesses per round; configuration may lower it, never raise it
MAX_GUESSES = 6


class Transport(ABC):
    """What the controller needs from the messaging layer.

    ``to`` is either a connection id (private message) or a room id
    (broadcast to every connection that joined that room).
    """

    @abstractmethod
    def emit(self, event: str, payload: Any, to: str, skip_sid: Optional[str] = None) -> None:
        """Deliver ``payload`` to a connection or to every member of a room."""

    @abstractmethod
    def join(self, sid: str, room_id: str) -> None:
        """Add ``sid`` to the broadcast group of ``room_id``."""

    @abstractmethod
    def leave(self, sid: str, room_id: str) -> None:
        """Remove ``sid`` from the broadcast group of ``room_id``."""


class SessionController:
    """Drives rooms through their rounds in response to player actions.

    Every mutation of a room, and the broadcasts describing it, happen while
    holding that room's lock so both players see the same order of events.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        dictionary: WordDictionary,
        transport: Transport,
        evaluator: Callable[[str, str], List[str]] = evaluate,
        max_guesses: int = MAX_GUESSES,
        rng: random.Random = None,
    ):
        self.registry = registry
        self.dictionary = dictionary
        self.transport = transport
        self.evaluator = evaluator
        self.max_guesses = min(max_guesses, MAX_GUESSES)
        self._rng = rng or random.Random()

    # ---- inbound actions ----

    def create_room(self, sid: str) -> Room:
        self._remove(sid, leave_group=True)
        room = self.registry.create_room(sid)
        with room.lock:
            self.transport.join(sid, room.id)
            self.transport.emit('roomCreated', room.id, to=sid)
        return room

    def join_room(self, sid: str, room_id: str) -> Optional[Room]:
        room_id = (room_id or '').strip().upper()
        try:
            room = self.registry.get(room_id)
            if room is None:
                raise RoomNotFound(room_id)
            previous = self.registry.find_by_connection(sid)
            with room.lock:
                if room.has_player(sid):
                    raise GameError(f"You are already in room {room.id}.")
                # raises before anything changes, so a failed join keeps the previous seat
                self.registry.add_player(room, sid)
                self.transport.join(sid, room.id)
                first = self._rng.choice(room.players)
                room.turn = first.id
                self.transport.emit('gameStart', room.to_dict(), to=room.id)
                self.transport.emit('setInitialTurn', {'firstPlayerId': first.id}, to=room.id)
            logger.info(f"[game-start] room={room.id} first_setter={first.id}")
            # one room per connection; the two room locks are never held together
            if previous is not None and previous is not room:
                self._remove_from(previous, sid, leave_group=True)
            return room
        except GameError as exc:
            self._reject(sid, exc)
            return None

    def set_word(self, sid: str, word: str) -> None:
        try:
            secret = self._validate_word(word)
            room = self._room_for(sid)
            with room.lock:
                if not room.has_player(sid):
                    raise NoActiveRoom(sid)
                guesser = room.opponent_of(sid)
                if guesser is None:
                    raise NoActiveRoom(sid)
                room.start_round(secret, guesser.id)
                self.transport.emit('newRound', {'turn': guesser.id}, to=room.id)
            logger.info(f"[round-start] room={room.id} setter={sid} guesser={guesser.id}")
        except GameError as exc:
            self._reject(sid, exc)

    def make_guess(self, sid: str, guess: str) -> None:
        try:
            guess = self._validate_word(guess, message=f"'{str(guess).upper()}' is not in the word list.")
        except InvalidWord as exc:
            logger.info(f"[guess-reject] sid={sid} guess={exc.word!r}")
            self.transport.emit('invalidGuess', exc.message, to=sid)
            return
        try:
            room = self._room_for(sid)
            with room.lock:
                if not room.has_player(sid):
                    raise NoActiveRoom(sid)
                if room.secret_word is None or room.round_over:
                    raise NoSecretSet(room.id)
                if room.turn != sid:
                    raise NotYourTurn()
                self._score_guess(room, sid, guess)
        except GameError as exc:
            self._reject(sid, exc)

    def leave_room(self, sid: str) -> None:
        room = self._remove(sid, leave_group=True)
        if room is not None:
            self.transport.emit('roomLeft', {'roomId': room.id}, to=sid)

    def disconnect(self, sid: str) -> None:
        self._remove(sid, leave_group=False)

    # ---- helpers ----

    def _score_guess(self, room: Room, sid: str, guess: str) -> None:
        # caller holds room.lock
        secret = room.secret_word
        feedback = self.evaluator(guess, secret)
        room.guesses.append(GuessRecord(guess=guess.upper(), feedback=tuple(feedback)))
        is_winner = guess == secret
        is_round_over = is_winner or len(room.guesses) >= self.max_guesses
        self.transport.emit('guessResult', {'guesses': [g.to_dict() for g in room.guesses]}, to=room.id)
        if is_round_over:
            room.round_over = True
            # the guesser sets the next word
            room.turn = sid
            self.transport.emit('roundOver', {
                'isWinner': is_winner,
                'secretWord': secret.upper(),
                'nextTurn': sid,
            }, to=room.id)
            logger.info(f"[round-over] room={room.id} winner={is_winner} guesses={len(room.guesses)}")

    def _remove(self, sid: str, leave_group: bool) -> Optional[Room]:
        room = self.registry.find_by_connection(sid)
        if room is None:
            return None
        return self._remove_from(room, sid, leave_group)

    def _remove_from(self, room: Room, sid: str, leave_group: bool) -> Optional[Room]:
        with room.lock:
            result = self.registry.remove_player(room, sid)
            if result is None:
                logger.debug(f"[stale] sid={sid} already gone from room={room.id}")
                return None
            _, remaining = result
            if leave_group:
                self.transport.leave(sid, room.id)
            if remaining:
                room.reset()
                self.transport.emit('playerLeft', PLAYER_LEFT_MESSAGE, to=room.id, skip_sid=sid)
        return room

    def _room_for(self, sid: str) -> Room:
        room = self.registry.find_by_connection(sid)
        if room is None:
            raise NoActiveRoom(sid)
        return room

    def _validate_word(self, word: Any, message: str = None) -> str:
        if not isinstance(word, str):
            raise InvalidWord(str(word), message)
        lowered = word.strip().lower()
        if not self.dictionary.contains(lowered):
            raise InvalidWord(word, message)
        return lowered

    def _reject(self, sid: str, exc: GameError) -> None:
        if not exc.notify:
            logger.debug(f"[ignored] sid={sid} {type(exc).__name__}: {exc.message}")
            return
        logger.info(f"[reject] sid={sid} {type(exc).__name__}: {exc.message}")
        self.transport.emit('error', exc.message, to=sid)
