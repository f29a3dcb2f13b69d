import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

SEAT_NAMES = ('Player 1', 'Player 2')
MAX_PLAYERS = len(SEAT_NAMES)

# Room states
WAITING_FOR_OPPONENT = 'waiting_for_opponent'
AWAITING_WORD = 'awaiting_word'
GUESSING = 'guessing'
ROUND_OVER = 'round_over'
CLOSED = 'closed'


@dataclass
class Player:
    id: str
    name: str

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


@dataclass(frozen=True)
class GuessRecord:
    guess: str
    feedback: Tuple[str, ...]

    def to_dict(self):
        return {'guess': self.guess, 'feedback': list(self.feedback)}


@dataclass
class Room:
    id: str
    players: List[Player] = field(default_factory=list)
    secret_word: Optional[str] = None
    guesses: List[GuessRecord] = field(default_factory=list)
    turn: Optional[str] = None
    round_over: bool = False
    closed: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def state(self) -> str:
        if self.closed:
            return CLOSED
        if len(self.players) < MAX_PLAYERS:
            return WAITING_FOR_OPPONENT
        if self.secret_word is None:
            return AWAITING_WORD
        if self.round_over:
            return ROUND_OVER
        return GUESSING

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def player(self, sid: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == sid), None)

    def opponent_of(self, sid: str) -> Optional[Player]:
        return next((p for p in self.players if p.id != sid), None)

    def has_player(self, sid: str) -> bool:
        return self.player(sid) is not None

    def free_seat(self) -> Optional[str]:
        taken = {p.name for p in self.players}
        return next((name for name in SEAT_NAMES if name not in taken), None)

    def start_round(self, secret_word: str, guesser_id: str) -> None:
        self.secret_word = secret_word
        self.guesses = []
        self.round_over = False
        self.turn = guesser_id

    def reset(self) -> None:
        """Drop any round in progress; used when a seat empties."""
        self.secret_word = None
        self.guesses = []
        self.round_over = False
        self.turn = None

    def to_dict(self):
        # The secret word never leaves the server until the round is over
        return {
            'id': self.id,
            'players': [p.to_dict() for p in self.players],
            'guesses': [g.to_dict() for g in self.guesses],
            'turn': self.turn,
            'state': self.state,
        }
