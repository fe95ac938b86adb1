# entity_pool.py

from typing import Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class EntityPool(Generic[T]):
    """
    An ordered collection of transient entities with an optional hard capacity.

    Data Contract:
    - Inputs:
        - capacity (int | None): Maximum number of live entities. None means unbounded.
        - name (str): Label used in log messages.
    - Invariants:
        - len(pool) <= capacity at all times when a capacity is set.
        - Iteration follows insertion order, and removal keeps the relative
          order of the survivors.
    """
    def __init__(self, capacity: Optional[int] = None, name: str = "pool"):
        if capacity is not None and capacity < 0:
            raise ValueError(f"Pool capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.name = name
        self._entities: List[T] = []

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> T:
        return self._entities[index]

    def has_room(self) -> bool:
        return self.capacity is None or len(self._entities) < self.capacity

    def append(self, entity: T) -> bool:
        """Adds `entity` unless the pool is full. Returns whether it was added."""
        if not self.has_room():
            return False
        self._entities.append(entity)
        return True

    def update(self, step: Callable[[T], bool]) -> int:
        """
        Runs `step` on every entity in order and drops those for which it
        returns False, in a single in-place pass.

        Returns the number of entities removed.
        """
        entities = self._entities
        write = 0
        for entity in entities:
            if step(entity):
                entities[write] = entity
                write += 1
        removed = len(entities) - write
        del entities[write:]
        return removed

    def clear(self):
        self._entities.clear()

    def as_list(self) -> List[T]:
        """A shallow copy, safe to hold while the pool keeps changing."""
        return list(self._entities)
