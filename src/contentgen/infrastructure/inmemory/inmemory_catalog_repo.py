from __future__ import annotations

import copy
import threading
from typing import Dict, List, Optional

from contentgen.domain.errors import PersistenceError
from contentgen.domain.repositories import CatalogRepository


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self) -> None:
        self._records: Dict[str, tuple[str, dict]] = {}
        self._lock = threading.Lock()

    def exists(self, identity: str) -> bool:
        return str(identity) in self._records

    def write(self, identity: str, kind: str, payload: dict) -> None:
        if not self.write_if_absent(identity, kind, payload):
            raise PersistenceError(identity, "record already exists")

    def get(self, identity: str) -> Optional[dict]:
        row = self._records.get(str(identity))
        if row is None:
            return None
        return copy.deepcopy(row[1])

    def list_kind(self, kind: str) -> List[str]:
        wanted = str(kind)
        return sorted(identity for identity, (row_kind, _payload) in self._records.items() if row_kind == wanted)

    def write_if_absent(self, identity: str, kind: str, payload: dict) -> bool:
        key = str(identity)
        with self._lock:
            if key in self._records:
                return False
            self._records[key] = (str(kind), copy.deepcopy(payload))
            return True

    def __len__(self) -> int:
        return len(self._records)
