"""Game domain services: feedback, room registry and the session controller.

Pure game mechanics live here so the Socket.IO handlers only translate
between wire messages and controller calls.
"""

from .feedback import evaluate, evaluate_strict, get_evaluator
from .registry import RoomRegistry
from .session import SessionController, Transport

__all__ = [
    'evaluate',
    'evaluate_strict',
    'get_evaluator',
    'RoomRegistry',
    'SessionController',
    'Transport',
]
