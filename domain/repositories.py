from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    """
    Abstraction over persistence for one entity kind.

    Implementations are responsible for:
    - Mapping between their storage representation and the domain model.
    - Hiding any SQL / driver details from the application layer.

    Entities are keyed by their integer `id`.
    """

    def create(self, entity: T) -> None:
        """Persist a new entity. No duplicate-id check is implied."""

        ...

    def get_all(self) -> List[T]:
        """Return all stored entities, in insertion order."""

        ...

    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Return the entity with the given ID, or None if not found."""

        ...

    def delete(self, entity_id: int) -> None:
        """Remove the entity with the given ID; unknown IDs are ignored."""

        ...
