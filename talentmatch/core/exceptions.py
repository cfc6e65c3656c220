"""Errors raised by the match-scoring pipeline."""

from typing import Optional


class MatchingError(Exception):
    """Base class for match-scoring failures."""


class EmbeddingUnavailable(MatchingError):
    """Raised when the embedding model fails or returns no vector.

    The pipeline never retries or substitutes a default score; callers
    decide whether to retry.
    """

    def __init__(self, message: str, model_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.model_name = model_name


class DimensionMismatch(MatchingError, ValueError):
    """Raised when two embedding vectors cannot be compared."""

    def __init__(self, left: tuple[int, ...], right: tuple[int, ...]) -> None:
        super().__init__(f"Embedding dimensions differ: {left} vs {right}")
        self.left = left
        self.right = right


class NotFound(MatchingError, LookupError):
    """Raised when a candidate or job record does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id
