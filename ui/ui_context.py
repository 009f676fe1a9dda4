from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ui_errors import ContextIndexError


@dataclass(frozen=True)
class ContextItem:
    path: str
    name: str
    content: str
    size: int


class ContextStore:
    """
    Ordered, path-deduplicated collection of loaded documents.

    Insertion order is both the display order in the sidebar and the order the
    documents appear in the prompt. `count` and `total_size()` are always
    derived from the current items.
    """

    def __init__(self, items: Iterable[ContextItem] | None = None):
        self._items: list[ContextItem] = []
        for item in items or ():
            self.add(item)

    @property
    def items(self) -> tuple[ContextItem, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ContextItem]:
        return iter(tuple(self._items))

    def __contains__(self, path: object) -> bool:
        return any(existing.path == path for existing in self._items)

    def add(self, item: ContextItem) -> bool:
        if item.path in self:
            return False
        self._items.append(item)
        return True

    def extend(self, items: Iterable[ContextItem]) -> int:
        added = 0
        for item in items:
            if self.add(item):
                added += 1
        return added

    def remove(self, index: int) -> ContextItem:
        if not isinstance(index, int) or isinstance(index, bool) or not (0 <= index < len(self._items)):
            raise ContextIndexError(index, len(self._items))
        return self._items.pop(index)

    def clear(self) -> None:
        self._items = []

    def total_size(self) -> int:
        return sum(item.size for item in self._items)
