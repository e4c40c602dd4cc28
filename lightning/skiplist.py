"""Indexed skip lists ordered by a decimal score, ties kept in arrival order."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

DEFAULT_MAX_LEVEL = 36
DEFAULT_P = 0.25  # chance of promoting a node one more index level


@runtime_checkable
class NodeValue(Protocol):
    """What a skip-list node stores."""

    id: str
    amount: Decimal
    user_id: int


class _Level:
    __slots__ = ("forward", "span")

    def __init__(self) -> None:
        self.forward: Optional[SkipListNode] = None
        self.span = 0


class SkipListNode:
    """A node holding a score, a value and its forward links."""

    __slots__ = ("score", "value", "backward", "_levels")

    def __init__(self, height: int, score: Any, value: Any) -> None:
        self.score = score
        self.value = value
        self.backward: Optional[SkipListNode] = None
        self._levels = [_Level() for _ in range(height)]

    @property
    def height(self) -> int:
        """Number of index levels this node takes part in."""
        return len(self._levels)

    def next(self, i: int) -> Optional[SkipListNode]:
        """Return the following node on level i."""
        return self._levels[i].forward

    def span(self, i: int) -> int:
        """Return the distance to the following node on level i."""
        return self._levels[i].span

    def prev(self) -> Optional[SkipListNode]:
        """Return the preceding node on the bottom level."""
        return self.backward

    def __repr__(self) -> str:
        return f"SkipListNode(score={self.score!r}, value={self.value!r})"


class SkipList:
    """Skip list in ascending score order."""

    def __init__(
        self, max_level: int = DEFAULT_MAX_LEVEL, *, rng: Optional[random.Random] = None
    ) -> None:
        if max_level <= 0:
            raise ValueError("SkipList max_level must be at least 1")
        self._max_level = max_level
        self._rng = rng if rng is not None else random.Random()
        self._head = SkipListNode(max_level, None, None)
        self._tail: Optional[SkipListNode] = None
        self._size = 0
        self._level = 1

    @property
    def level(self) -> int:
        """Current highest level in use."""
        return self._level

    @property
    def max_level(self) -> int:
        return self._max_level

    @staticmethod
    def _precedes(a: Any, b: Any) -> bool:
        return a < b

    def _random_level(self) -> int:
        level = 1
        while level < self._max_level and self._rng.randrange(100) < int(100 * DEFAULT_P):
            level += 1
        return level

    def insert(self, score: Any, value: Any) -> SkipListNode:
        """Insert value at score, after any nodes with an equal score."""
        update = [self._head] * self._max_level
        rank = [0] * self._max_level
        p = self._head
        for i in reversed(range(self._level)):
            rank[i] = 0 if i == self._level - 1 else rank[i + 1]
            while (nxt := p.next(i)) is not None and not self._precedes(score, nxt.score):
                rank[i] += p.span(i)
                p = nxt
            update[i] = p

        level = self._random_level()
        if level > self._level:
            for i in range(self._level, level):
                rank[i] = 0
                update[i] = self._head
                self._head._levels[i].span = self._size
            self._level = level

        node = SkipListNode(level, score, value)
        for i in range(level):
            before = update[i]._levels[i]
            own = node._levels[i]
            own.forward = before.forward
            before.forward = node
            own.span = before.span - (rank[0] - rank[i])
            before.span = rank[0] - rank[i] + 1

        for i in range(level, self._level):
            update[i]._levels[i].span += 1

        node.backward = None if update[0] is self._head else update[0]
        following = node.next(0)
        if following is not None:
            following.backward = node
        else:
            self._tail = node
        self._size += 1
        return node

    def _locate(self, score: Any, key: str):
        """Return the node with this score and id and its predecessor on every level."""
        update = [self._head] * self._max_level
        p = self._head
        for i in reversed(range(self._level)):
            while (nxt := p.next(i)) is not None and self._precedes(nxt.score, score):
                p = nxt
            update[i] = p

        passed: set[int] = set()
        candidate = p.next(0)
        while candidate is not None and not self._precedes(score, candidate.score):
            if candidate.value.id == key:
                break
            passed.add(id(candidate))
            candidate = candidate.next(0)
        else:
            return None, update

        for i in range(self._level):
            q = update[i]
            while (nxt := q.next(i)) is not None and id(nxt) in passed:
                q = nxt
            update[i] = q
        return candidate, update

    def find(self, score: Any, id: str) -> Optional[SkipListNode]:
        """Return the node with this score and value id, or None."""
        node, _ = self._locate(score, id)
        return node

    def update(self, score: Any, id: str, value: Any) -> SkipListNode:
        """Replace the value stored at score and id; raise KeyError if absent."""
        node = self.find(score, id)
        if node is None:
            raise KeyError(id)
        node.value = value
        return node

    def delete(self, score: Any, id: str) -> bool:
        """Remove the node with this score and id; return whether it existed."""
        node, update = self._locate(score, id)
        if node is None:
            return False

        for i in range(self._level):
            link = update[i]._levels[i]
            if link.forward is node:
                link.span += node.span(i) - 1
                link.forward = node.next(i)
            else:
                link.span -= 1

        following = node.next(0)
        if following is None:
            self._tail = node.backward
        else:
            following.backward = node.backward

        while self._level > 1 and self._head.next(self._level - 1) is None:
            self._level -= 1
        self._size -= 1
        return True

    def first(self) -> Optional[SkipListNode]:
        """Return the first node, or None when empty."""
        return self._head.next(0) if self._size else None

    def last(self) -> Optional[SkipListNode]:
        """Return the last node, or None when empty."""
        return self._tail if self._size else None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[SkipListNode]:
        node = self._head.next(0)
        while node is not None:
            yield node
            node = node.next(0)


class SkipListDesc(SkipList):
    """Skip list in descending score order."""

    @staticmethod
    def _precedes(a: Any, b: Any) -> bool:
        return a > b