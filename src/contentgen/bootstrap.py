from __future__ import annotations

import logging
import os
import socket
from dataclasses import dataclass
from urllib.parse import urlparse

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from contentgen.application.services.content_builder import BuildReport, ContentBuilder
from contentgen.application.services.event_bus import EventBus
from contentgen.domain.events import RecordMaterialized
from contentgen.domain.repositories import CatalogRepository
from contentgen.infrastructure.content import (
    DIALOGUES,
    DUNGEON_EVENTS,
    EQUIPMENT,
    WORLD_EVENTS,
    race_definitions,
    variant_definitions,
)
from contentgen.infrastructure.inmemory.inmemory_catalog_repo import InMemoryCatalogRepository


logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ContentSettings:
    database_url: str = ""
    seed: int = 1
    log_level: str = "INFO"
    normalize_weights: bool = True
    strict: bool = False

    @classmethod
    def from_env(cls) -> "ContentSettings":
        return cls(
            database_url=os.getenv("CONTENTGEN_DATABASE_URL", "").strip(),
            seed=int(os.getenv("CONTENTGEN_SEED", "1")),
            log_level=os.getenv("CONTENTGEN_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            normalize_weights=_env_flag("CONTENTGEN_NORMALIZE_WEIGHTS", "1"),
            strict=_env_flag("CONTENTGEN_STRICT", "0"),
        )


def _looks_like_local_mysql_unreachable(database_url: str) -> bool:
    if not database_url:
        return False

    parsed = urlparse(database_url)
    if not parsed.scheme.startswith("mysql"):
        return False

    host = (parsed.hostname or "").strip().lower()
    if host not in {"localhost", "127.0.0.1", "::1"}:
        return False

    port = parsed.port or 3306
    timeout = float(os.getenv("CONTENTGEN_DB_CONNECT_TIMEOUT_S", "0.35"))

    try:
        with socket.create_connection((host, port), timeout=timeout):
            return False
    except OSError:
        return True


def _build_sql_catalog(database_url: str) -> CatalogRepository:
    from contentgen.infrastructure.db.sql.catalog_repo import SqlCatalogRepository
    from contentgen.infrastructure.db.sql.migrate import ensure_schema

    engine = create_engine(database_url, echo=False, future=True)
    ensure_schema(engine)
    return SqlCatalogRepository(sessionmaker(bind=engine, autoflush=False, autocommit=False))


def create_catalog(settings: ContentSettings) -> CatalogRepository:
    if not settings.database_url:
        return InMemoryCatalogRepository()
    if _looks_like_local_mysql_unreachable(settings.database_url):
        if settings.strict:
            raise RuntimeError("MySQL appears unreachable")
        logger.warning("MySQL appears unreachable, falling back to in-memory catalog")
        return InMemoryCatalogRepository()
    try:
        return _build_sql_catalog(settings.database_url)
    except SQLAlchemyError as exc:
        if settings.strict:
            raise
        logger.warning("SQL catalog unavailable, falling back to in-memory catalog: %s", exc)
        return InMemoryCatalogRepository()


def _log_materialized(event: RecordMaterialized) -> None:
    logger.debug("Materialized %s", event.identity, extra={"identity": event.identity, "kind": event.kind})


def create_content_builder(settings: ContentSettings | None = None, catalog: CatalogRepository | None = None) -> ContentBuilder:
    resolved = settings or ContentSettings.from_env()
    event_bus = EventBus()
    event_bus.subscribe(RecordMaterialized, _log_materialized, priority=90)
    return ContentBuilder(
        catalog or create_catalog(resolved),
        normalize_weights=resolved.normalize_weights,
        bus=event_bus,
    )


def run_generation(builder: ContentBuilder) -> BuildReport:
    return builder.run(
        races=race_definitions(),
        variants=variant_definitions(),
        events=DUNGEON_EVENTS,
        world_events=WORLD_EVENTS,
        dialogues=DIALOGUES,
        equipment=EQUIPMENT,
    )
