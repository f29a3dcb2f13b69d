from collections import Counter
from typing import Callable, Dict, List

GREEN = 'green'
YELLOW = 'yellow'
GRAY = 'gray'


def evaluate(guess: str, secret: str) -> List[str]:
    """Per-letter feedback for ``guess`` against ``secret``.

    Each position is judged on its own: green on an exact match, yellow when
    the letter occurs anywhere in the secret, gray otherwise. Repeated letters
    are not capped to their count in the secret, so ``eerie`` against
    ``crane`` marks both leading e's yellow.
    """
    if len(guess) != len(secret):
        raise ValueError(f"guess and secret lengths differ: {len(guess)} != {len(secret)}")
    feedback = []
    for g, s in zip(guess, secret):
        if g == s:
            feedback.append(GREEN)
        elif g in secret:
            feedback.append(YELLOW)
        else:
            feedback.append(GRAY)
    return feedback


def evaluate_strict(guess: str, secret: str) -> List[str]:
    """Duplicate-aware feedback: yellows never exceed the letter's unmatched count."""
    if len(guess) != len(secret):
        raise ValueError(f"guess and secret lengths differ: {len(guess)} != {len(secret)}")
    feedback = [GRAY] * len(guess)
    remaining = Counter()
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            feedback[i] = GREEN
        else:
            remaining[s] += 1
    for i, g in enumerate(guess):
        if feedback[i] == GREEN:
            continue
        if remaining[g] > 0:
            feedback[i] = YELLOW
            remaining[g] -= 1
    return feedback


EVALUATORS: Dict[str, Callable[[str, str], List[str]]] = {
    'single_pass': evaluate,
    'strict': evaluate_strict,
}


def get_evaluator(mode: str) -> Callable[[str, str], List[str]]:
    try:
        return EVALUATORS[mode]
    except KeyError:
        raise ValueError(f"Unknown FEEDBACK_MODE {mode!r}; expected one of {sorted(EVALUATORS)}") from None
