from typing import Generic, Iterator, List, Sequence, TypeVar, overload

T = TypeVar("T")


class CapacityError(RuntimeError):
    """More items were pushed than the list can hold."""


class BoundedList(Sequence[T], Generic[T]):
    """Short sequence that refuses to grow past a fixed capacity.

    Used for intersection results, where the item count is bounded by the
    degree of the curve.
    """

    __slots__ = ("_items", "_capacity")

    def __init__(self, capacity: int, items: Sequence[T] = ()):
        self._capacity = capacity
        self._items: List[T] = []
        for item in items:
            self.push(item)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, item: T) -> None:
        if len(self._items) >= self._capacity:
            raise CapacityError(f"BoundedList is full (capacity {self._capacity})")
        self._items.append(item)

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    @overload
    def __getitem__(self, index: int) -> T: ...
    @overload
    def __getitem__(self, index: slice) -> List[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundedList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"BoundedList(capacity={self._capacity}, items={self._items!r})"
