from __future__ import annotations

import typing as t

from .models import CacheEntry


class RecencyNode:
    __slots__ = ("entry", "prev", "next", "_owner")

    def __init__(self, entry: CacheEntry, owner: "RecencyList") -> None:
        self.entry = entry
        self.prev: t.Optional[RecencyNode] = None
        self.next: t.Optional[RecencyNode] = None
        self._owner: t.Optional[RecencyList] = owner

    def __repr__(self) -> str:
        return f"RecencyNode({self.entry.key!r})"


class RecencyList:
    """Doubly linked list ordered from most (head) to least (tail) recently used.

    Nodes are handed out on insert so callers can relink or drop them in O(1)
    without scanning.
    """

    def __init__(self) -> None:
        self._head: t.Optional[RecencyNode] = None
        self._tail: t.Optional[RecencyNode] = None
        self._size = 0

    @property
    def head(self) -> t.Optional[RecencyNode]:
        return self._head

    @property
    def tail(self) -> t.Optional[RecencyNode]:
        return self._tail

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> t.Iterator[CacheEntry]:
        node = self._head
        while node is not None:
            yield node.entry
            node = node.next

    def __reversed__(self) -> t.Iterator[CacheEntry]:
        node = self._tail
        while node is not None:
            yield node.entry
            node = node.prev

    def push_front(self, entry: CacheEntry) -> RecencyNode:
        node = RecencyNode(entry, self)
        self._link_front(node)
        self._size += 1
        return node

    def push_back(self, entry: CacheEntry) -> RecencyNode:
        node = RecencyNode(entry, self)
        self._link_back(node)
        self._size += 1
        return node

    def remove(self, node: RecencyNode) -> CacheEntry:
        self._check_owner(node)
        self._unlink(node)
        node._owner = None
        self._size -= 1
        return node.entry

    def move_to_front(self, node: RecencyNode) -> None:
        self._check_owner(node)
        if node is self._head:
            return
        self._unlink(node)
        self._link_front(node)

    def move_to_back(self, node: RecencyNode) -> None:
        self._check_owner(node)
        if node is self._tail:
            return
        self._unlink(node)
        self._link_back(node)

    def _check_owner(self, node: RecencyNode) -> None:
        if node._owner is not self:
            raise ValueError(f"{node!r} does not belong to this list")

    def _link_front(self, node: RecencyNode) -> None:
        node.prev = None
        node.next = self._head
        if self._head is not None:
            self._head.prev = node
        self._head = node
        if self._tail is None:
            self._tail = node

    def _link_back(self, node: RecencyNode) -> None:
        node.next = None
        node.prev = self._tail
        if self._tail is not None:
            self._tail.next = node
        self._tail = node
        if self._head is None:
            self._head = node

    def _unlink(self, node: RecencyNode) -> None:
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev
        node.prev = None
        node.next = None
