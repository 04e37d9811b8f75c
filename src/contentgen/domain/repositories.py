from abc import ABC, abstractmethod
from typing import List, Optional, Protocol


class CatalogRepository(ABC):
    """Identity-keyed store of materialized content records."""

    @abstractmethod
    def exists(self, identity: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def write(self, identity: str, kind: str, payload: dict) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, identity: str) -> Optional[dict]:
        raise NotImplementedError

    @abstractmethod
    def list_kind(self, kind: str) -> List[str]:
        raise NotImplementedError

    def write_if_absent(self, identity: str, kind: str, payload: dict) -> bool:
        """Write unless the identity is present. Returns True when a record was written.

        Catalogs shared between writers override this so the check and the write are one step.
        """
        if self.exists(identity):
            return False
        self.write(identity, kind, payload)
        return True


class ItemQuery(Protocol):
    """Anything that can answer whether an item is held; ``ActorProfile`` satisfies it."""

    def has(self, item_id: str) -> bool:
        ...
