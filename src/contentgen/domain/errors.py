from __future__ import annotations


class ContentError(Exception):
    """Base class for content generation failures."""


class DefinitionError(ContentError):
    """Malformed authoring data, reported against the record that carries it."""

    def __init__(self, record_id: str, message: str, *, problems: list[str] | None = None) -> None:
        self.record_id = str(record_id or "")
        self.message = str(message or "")
        self.problems = list(problems or [])
        super().__init__(f"{self.record_id}: {self.message}" if self.record_id else self.message)


class PersistenceError(ContentError):
    def __init__(self, identity: str, message: str) -> None:
        self.identity = str(identity or "")
        self.message = str(message or "")
        super().__init__(f"{self.identity}: {self.message}")


class DialogueTraversalError(ValueError):
    pass


class ResolutionAmbiguityWarning(UserWarning):
    """Outcome weights that do not sum to 1.0."""
