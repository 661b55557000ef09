import operator
from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from loguru import logger


T = TypeVar("T")


class ItemNotFoundError(IndexError):
    """Raised when a lookup finds no matching item or the list is empty."""

    def __init__(self, message: str = "Index out of range!"):
        super().__init__(message)


class PriorityList(Generic[T]):
    """Items kept fully sorted by ascending integer priority.

    Backed by two parallel lists of ``capacity`` slots; only the first
    ``size`` slots are live. Insertion moves the new entry left one slot at
    a time, so equal priorities keep insertion order.
    """

    DEFAULT_CAPACITY = 8

    def __init__(self, initial_capacity: int = DEFAULT_CAPACITY,
                 eq: Optional[Callable[[T, T], bool]] = None):
        if initial_capacity < 1:
            initial_capacity = 1
        self._capacity = initial_capacity
        self._eq = eq if eq is not None else operator.eq
        self._size = 0
        self.items: List[Optional[T]] = [None] * initial_capacity
        self.priorities: List[int] = [0] * initial_capacity

    @property
    def capacity(self):
        return self._capacity

    def _swap(self, i: int, j: int):
        self.items[i], self.items[j] = self.items[j], self.items[i]
        self.priorities[i], self.priorities[j] = self.priorities[j], self.priorities[i]

    def _sift_left(self, i: int):
        while i > 0:
            left = i - 1
            if self.priorities[left] <= self.priorities[i]:
                break
            self._swap(i, left)
            i = left

    def _resize(self):
        new_capacity = self._capacity * 2
        items: List[Optional[T]] = [None] * new_capacity
        priorities = [0] * new_capacity
        items[:self._size] = self.items[:self._size]
        priorities[:self._size] = self.priorities[:self._size]
        self.items = items
        self.priorities = priorities
        logger.debug("Priority list grown from {} to {} slots", self._capacity, new_capacity)
        self._capacity = new_capacity

    def _index_of(self, item: T) -> int:
        for i in range(self._size):
            if self._eq(self.items[i], item):
                return i
        return -1

    def _require_index(self, item: T) -> int:
        index = self._index_of(item)
        if index < 0:
            raise ItemNotFoundError(f"Item {item!r} not found in priority list")
        return index

    def _require_not_empty(self):
        if self._size == 0:
            raise ItemNotFoundError("Priority list is empty")

    def add(self, item: T, priority: int):
        if self._size == self._capacity:
            self._resize()
        self.items[self._size] = item
        self.priorities[self._size] = priority
        self._size += 1
        self._sift_left(self._size - 1)

    def _remove_at(self, index: int):
        last = self._size - 1
        for i in range(index, last):
            self.items[i] = self.items[i + 1]
            self.priorities[i] = self.priorities[i + 1]
        self.items[last] = None
        self.priorities[last] = 0
        self._size = last

    def remove(self, item: T):
        self._remove_at(self._require_index(item))

    def contains(self, item: T) -> bool:
        return self._index_of(item) >= 0

    def peek_min(self) -> T:
        self._require_not_empty()
        return self.items[0]

    def peek_max(self) -> T:
        self._require_not_empty()
        return self.items[self._size - 1]

    def extract_min(self) -> T:
        """Remove and return the lowest-priority item.

        The item is removed by value, so when several stored items compare
        equal the first one in scan order is the one that goes.
        """
        item = self.peek_min()
        self.remove(item)
        return item

    def extract_max(self) -> T:
        item = self.peek_max()
        self.remove(item)
        return item

    def change_priority(self, item: T, priority: int):
        index = self._require_index(item)
        stored = self.items[index]
        self._remove_at(index)
        self.add(stored, priority)

    def get_priority(self, item: T) -> int:
        return self.priorities[self._require_index(item)]

    def clear(self):
        self.items = [None] * self._capacity
        self.priorities = [0] * self._capacity
        logger.debug("Priority list cleared ({} entries dropped)", self._size)
        self._size = 0

    def size(self):
        return self._size

    def is_empty(self):
        return self._size == 0

    def entries(self) -> List[Tuple[T, int]]:
        return list(zip(self.items[:self._size], self.priorities[:self._size]))

    def __len__(self):
        return self._size

    def __contains__(self, item: Any):
        return self.contains(item)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items[:self._size])

    def __str__(self):
        parts = [f"{{{item} , {priority}}}" for item, priority in self.entries()]
        return "[" + ", ".join(parts) + "]"

    def __repr__(self):
        return f"PriorityList({self})"
