from typing import List, Tuple


class GenerationLog:
    """Append-only, ordered list of human readable progress entries.

    One instance is threaded through a single generation call; entries are
    informational and never drive control flow.
    """

    def __init__(self):
        self._entries: List[str] = []

    def append(self, message: str) -> None:
        self._entries.append(message)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
