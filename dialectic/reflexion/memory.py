"""Bounded reflection memory, most recent first."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

DEFAULT_MAX_DEPTH = 3


class ReflectionMemory:
    """Capacity-bounded queue of reflection texts.

    New reflections go to the front; once the capacity is exceeded the
    oldest entry (at the back) is evicted.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1 (got {max_depth})")
        self._entries: deque[str] = deque(maxlen=max_depth)

    @property
    def max_depth(self) -> int:
        return self._entries.maxlen  # type: ignore[return-value]

    def push(self, reflection: str) -> None:
        # appendleft on a full deque drops the rightmost (oldest) entry
        self._entries.appendleft(reflection)

    def replace(self, items: Iterable[object]) -> None:
        """Replace all entries with the string items of ``items``, in order.

        Non-string items are dropped. Only the first max_depth strings
        are kept.
        """
        strings = [item for item in items if isinstance(item, str)]
        self._entries.clear()
        self._entries.extend(strings[: self.max_depth])

    def snapshot(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
