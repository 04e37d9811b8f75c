from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contentgen.domain.errors import PersistenceError
from contentgen.domain.repositories import CatalogRepository
from contentgen.application.serialization import dumps_payload, loads_payload
from . import connection


logger = logging.getLogger(__name__)

_INSERT_SQL = "INSERT INTO content_record (identity, kind, record_json) VALUES (:identity, :kind, :record_json)"
_INSERT_IF_ABSENT_SQL = {
    "mysql": "INSERT IGNORE INTO content_record (identity, kind, record_json) VALUES (:identity, :kind, :record_json)",
    "sqlite": _INSERT_SQL + " ON CONFLICT(identity) DO NOTHING",
    "postgresql": _INSERT_SQL + " ON CONFLICT (identity) DO NOTHING",
}


class SqlCatalogRepository(CatalogRepository):
    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory

    def _sessions(self) -> Callable[[], Session]:
        return self._session_factory or connection.SessionLocal

    def exists(self, identity: str) -> bool:
        try:
            with self._sessions()() as session:
                row = session.execute(
                    text("SELECT identity FROM content_record WHERE identity = :identity"),
                    {"identity": str(identity)},
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(identity, f"lookup failed: {exc}") from exc
        return row is not None

    def get(self, identity: str) -> Optional[dict]:
        try:
            with self._sessions()() as session:
                row = session.execute(
                    text("SELECT record_json FROM content_record WHERE identity = :identity"),
                    {"identity": str(identity)},
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(identity, f"read failed: {exc}") from exc
        if row is None:
            return None
        return loads_payload(row.record_json)

    def list_kind(self, kind: str) -> List[str]:
        try:
            with self._sessions()() as session:
                rows = session.execute(
                    text("SELECT identity FROM content_record WHERE kind = :kind ORDER BY identity"),
                    {"kind": str(kind)},
                ).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"{kind}/*", f"listing failed: {exc}") from exc
        return [str(row.identity) for row in rows]

    def write(self, identity: str, kind: str, payload: dict) -> None:
        params = {"identity": str(identity), "kind": str(kind), "record_json": dumps_payload(payload)}
        try:
            with self._sessions()() as session:
                session.execute(text(_INSERT_SQL), params)
                session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(identity, f"write failed: {exc}") from exc

    def write_if_absent(self, identity: str, kind: str, payload: dict) -> bool:
        params = {"identity": str(identity), "kind": str(kind), "record_json": dumps_payload(payload)}
        try:
            with self._sessions()() as session:
                dialect = session.get_bind().dialect.name
                statement = _INSERT_IF_ABSENT_SQL.get(dialect)
                if statement is None:
                    raise PersistenceError(identity, f"no insert-if-absent statement for dialect {dialect}")
                result = session.execute(text(statement), params)
                session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(identity, f"write failed: {exc}") from exc
        written = int(result.rowcount or 0) > 0
        if not written:
            logger.debug("Catalog already holds identity", extra={"identity": identity, "kind": kind})
        return written
