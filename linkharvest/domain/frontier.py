from collections import deque
from typing import Deque, NamedTuple, Optional


class FrontierEntry(NamedTuple):
    url: str
    depth: int = 0


class Frontier:
    """FIFO queue of URLs waiting to be fetched.

    The same URL may be queued more than once; duplicates are dropped by the
    visited check when they are dequeued, not here.
    """

    def __init__(self, seed: Optional[str] = None):
        self._entries: Deque[FrontierEntry] = deque()
        if seed is not None:
            self.push(seed, 0)

    def push(self, url: str, depth: int = 0) -> None:
        self._entries.append(FrontierEntry(url, depth))

    def pop(self) -> FrontierEntry:
        """Remove and return the oldest entry. Raises IndexError when empty."""
        return self._entries.popleft()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
