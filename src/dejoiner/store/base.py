"""Resource store protocol."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from dejoiner.search.models import IndexEntry


class ResourceStore(ABC):
    """Abstract base class for resource stores.

    A store hands out resources as plain row dicts; the search layer
    validates them into SearchCandidate objects.
    """

    @abstractmethod
    def upsert(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert or replace a resource.

        Args:
            row: Resource fields. An id is generated when missing.

        Returns:
            The stored row.
        """
        pass

    def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Upsert many resources.

        Returns:
            The number of rows stored.
        """
        count = 0
        for row in rows:
            self.upsert(row)
            count += 1
        return count

    @abstractmethod
    def get(self, resource_id: str) -> dict[str, Any] | None:
        """Get a resource by id, or None."""
        pass

    @abstractmethod
    def recent(self, limit: int) -> list[dict[str, Any]]:
        """Get the most recently edited resources, newest first."""
        pass

    @abstractmethod
    def set_content_index(self, resource_id: str, entries: list[IndexEntry]) -> None:
        """Replace a resource's content index.

        Raises:
            ResourceNotFoundError: If no resource has this id.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Get the number of stored resources."""
        pass

    @abstractmethod
    def get_settings(self) -> dict[str, str]:
        """Get all integration settings as key/value pairs."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Store one integration setting."""
        pass

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> "ResourceStore":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
