import logging
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from asciiart.config import DEFAULT_CHARSET
from asciiart.errors import DegenerateNormalizationError, EmptyWorkingSetError
from asciiart.glyph_atlas import FontRasterizer, Rasterizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharacterEntry:
    char: str
    raw_brightness: float
    normalized_brightness: float


def normalize(raw: float, lo: float, hi: float) -> float:
    if hi == lo:
        raise DegenerateNormalizationError(f"Cannot normalize against an empty range [{lo}, {hi}]")
    return (raw - lo) / (hi - lo)


class CharBrightnessIndex:
    """Working character set indexed by brightness relative to the rest of the set.

    Each character has a raw brightness, the fraction of lit cells in its
    rendered bitmap. Normalized brightness rescales those values so that the
    dimmest character in the set sits at 0 and the brightest at 1. Since any
    add or remove can move the extremes, the normalized map is rebuilt from
    the raw map on every change.

    When all characters share one raw value (in particular a one-character
    set) every character is given normalized brightness 0.0.
    """

    def __init__(self, charset: Iterable[str] = DEFAULT_CHARSET, rasterizer: Rasterizer | None = None):
        self.rasterizer = rasterizer if rasterizer is not None else FontRasterizer()
        self._raw_cache: dict[str, float] = {}
        self._members: dict[str, float] = {}
        self._raw: dict[float, set[str]] = {}
        self._normalized: dict[float, set[str]] = {}
        self._keys: list[float] = []
        self.add_chars(charset)

    def raw_brightness(self, char: str) -> float:
        if char not in self._raw_cache:
            bitmap = np.asarray(self.rasterizer.render(char), dtype=bool)
            self._raw_cache[char] = float(bitmap.sum()) / bitmap.size
        return self._raw_cache[char]

    def add_char(self, char: str) -> None:
        self.add_chars(char)

    def remove_char(self, char: str) -> None:
        self.remove_chars(char)

    def add_chars(self, chars: Iterable[str]) -> None:
        chars = list(chars)
        for char in chars:
            if len(char) != 1:
                raise ValueError(f"Expected a single character, got {char!r}")
        for char in chars:
            raw = self.raw_brightness(char)
            self._members[char] = raw
            self._raw.setdefault(raw, set()).add(char)
        self._rebuild()

    def remove_chars(self, chars: Iterable[str]) -> None:
        for char in chars:
            raw = self._members.pop(char, None)
            if raw is None:
                continue
            bucket = self._raw[raw]
            bucket.discard(char)
            if not bucket:
                del self._raw[raw]
        self._rebuild()

    def _rebuild(self) -> None:
        normalized: dict[float, set[str]] = {}
        if self._raw:
            lo, hi = min(self._raw), max(self._raw)
            for raw in sorted(self._raw):
                key = normalize(raw, lo, hi) if hi != lo else 0.0
                normalized.setdefault(key, set()).update(self._raw[raw])
        self._normalized, self._keys = normalized, sorted(normalized)
        logger.debug("Rebuilt brightness index: %d chars in %d buckets", len(self._members), len(self._keys))

    def nearest(self, target: float) -> str:
        """Character whose normalized brightness is closest to `target`.

        Ties between the buckets above and below are broken towards the
        smaller character; within a bucket the smallest character wins.
        """
        if not self._keys:
            raise EmptyWorkingSetError("The working character set is empty")

        i = bisect_left(self._keys, target)
        j = bisect_right(self._keys, target) - 1
        ceiling = self._keys[i] if i < len(self._keys) else None
        floor = self._keys[j] if j >= 0 else None

        if ceiling is None:
            return min(self._normalized[floor])
        if floor is None:
            return min(self._normalized[ceiling])

        up = abs(ceiling - target)
        down = abs(target - floor)
        if up < down:
            return min(self._normalized[ceiling])
        if down < up:
            return min(self._normalized[floor])
        return min(min(self._normalized[floor]), min(self._normalized[ceiling]))

    @property
    def chars(self) -> list[str]:
        return sorted(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, char: object) -> bool:
        return char in self._members

    def entries(self) -> Iterator[CharacterEntry]:
        """Yield every character in brightness order."""
        for key in self._keys:
            for char in sorted(self._normalized[key]):
                yield CharacterEntry(char, self._members[char], key)

    def raw_map(self) -> dict[float, frozenset[str]]:
        return {raw: frozenset(self._raw[raw]) for raw in sorted(self._raw)}

    def normalized_map(self) -> dict[float, frozenset[str]]:
        return {key: frozenset(self._normalized[key]) for key in self._keys}
