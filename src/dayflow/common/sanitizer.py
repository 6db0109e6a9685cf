from __future__ import annotations

import re
from typing import Iterable, Optional

from ..core.constants import DEFAULT_REMARK_DENYLIST, REMARK_MASK


class RemarkSanitizer:
    """Masks denylisted terms in free text.

    Matching is case-insensitive. With ``word_boundary`` off (the default) a
    term is masked wherever it appears, including inside longer words, so
    ``"fucking"`` becomes ``"***ing"``. With it on, only whole words match.
    """

    def __init__(self, words: Iterable[str] = DEFAULT_REMARK_DENYLIST, *, word_boundary: bool = False):
        self._words = tuple(w for w in (str(w).strip() for w in words) if w)
        self._word_boundary = bool(word_boundary)
        self._pattern = self._compile()

    def _compile(self) -> Optional[re.Pattern[str]]:
        if not self._words:
            return None
        # Longest first so "f*ck" wins over a shorter overlapping term.
        alternatives = "|".join(re.escape(w) for w in sorted(self._words, key=len, reverse=True))
        if self._word_boundary:
            alternatives = rf"(?<!\w)(?:{alternatives})(?!\w)"
        return re.compile(alternatives, re.IGNORECASE)

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def __call__(self, text: Optional[str]) -> str:
        if not text:
            return ""
        if self._pattern is None:
            return str(text)
        return self._pattern.sub(REMARK_MASK, str(text))


_default = RemarkSanitizer()


def sanitize_remarks(text: Optional[str]) -> str:
    """Sanitize with the default denylist and substring matching."""
    return _default(text)
