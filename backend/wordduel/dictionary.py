import json
import os
from typing import Iterable, Set


class WordDictionary:
    """Read-only set of accepted words of a single length."""

    def __init__(self, words: Iterable[str], length: int = 5):
        self.length = length
        self._words: Set[str] = {
            w.strip().lower() for w in words
            if w and len(w.strip()) == length and w.strip().isalpha()
        }

    @classmethod
    def from_file(cls, path: str, length: int = 5) -> 'WordDictionary':
        """Load a JSON array of words, or a text file with one word per line."""
        with open(path, 'r', encoding='utf-8') as fh:
            if os.path.splitext(path)[1].lower() == '.json':
                words = json.load(fh)
                if not isinstance(words, list):
                    raise ValueError(f"{path}: expected a JSON array of words")
            else:
                words = fh.read().splitlines()
        return cls(words, length=length)

    def contains(self, word: str) -> bool:
        if not word:
            return False
        return word.lower() in self._words

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)
