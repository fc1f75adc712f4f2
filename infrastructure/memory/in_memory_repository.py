from __future__ import annotations

from typing import Dict, List, Optional, TypeVar

from domain.repositories import Repository

T = TypeVar("T")


class InMemoryRepository(Repository[T]):
    """
    Process-local implementation of `Repository`.

    Entities are kept in a dict keyed by their `id` attribute, which also
    preserves insertion order for `get_all`. Creating an entity whose id
    is already stored raises `ValueError`, like a primary-key violation.
    """

    def __init__(self) -> None:
        self._entities: Dict[int, T] = {}

    def create(self, entity: T) -> None:
        if entity.id in self._entities:
            raise ValueError(f"Entity with id {entity.id} already exists.")
        self._entities[entity.id] = entity

    def get_all(self) -> List[T]:
        return list(self._entities.values())

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self._entities.get(entity_id)

    def delete(self, entity_id: int) -> None:
        self._entities.pop(entity_id, None)
