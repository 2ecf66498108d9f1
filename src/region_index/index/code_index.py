# src/region_index/index/code_index.py

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, List, Optional, Tuple


class CodeIndex:
    """
    Sorted (code, position) pairs searchable by binary search.

    Entries are ordered by code first and arena position second, so for
    duplicate codes the leftmost hit is always the one with the lowest
    position. Codes compare as Python strings, which for digit codes is the
    same as byte-wise ordering.
    """

    __slots__ = ("_codes", "_positions")

    def __init__(self, codes: List[str], positions: List[int]):
        self._codes = codes
        self._positions = positions

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[str, int]]) -> "CodeIndex":
        ordered = sorted(entries)
        return cls([code for code, _ in ordered], [pos for _, pos in ordered])

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.lookup(code) is not None

    def lookup(self, code: str) -> Optional[int]:
        """Return the position stored for ``code`` (lowest on duplicates), or None."""
        i = bisect_left(self._codes, code)
        if i < len(self._codes) and self._codes[i] == code:
            return self._positions[i]
        return None

    def duplicate_codes(self) -> List[str]:
        """Return every code stored more than once, in sorted order."""
        dups: List[str] = []
        for i in range(1, len(self._codes)):
            code = self._codes[i]
            if code == self._codes[i - 1] and (not dups or dups[-1] != code):
                dups.append(code)
        return dups
