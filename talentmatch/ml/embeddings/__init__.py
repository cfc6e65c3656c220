"""
Text embeddings and vector similarity.

Components:
- EmbeddingProvider: Interface over an external text-embedding model
- SentenceTransformerEmbedder / OpenAIEmbedder: Concrete backends
- similarity: Cosine similarity and 0-100 semantic scores
"""

from .embedding_model import (
    EmbeddingProvider,
    OpenAIEmbedder,
    SentenceTransformerEmbedder,
    create_embedding_provider,
    get_embedding_provider,
    truncate_text,
)

from .similarity import (
    cosine_similarity,
    semantic_confidence,
    semantic_score,
    to_percentage,
)

__all__ = [
    # Providers
    "EmbeddingProvider",
    "OpenAIEmbedder",
    "SentenceTransformerEmbedder",
    "create_embedding_provider",
    "get_embedding_provider",
    "truncate_text",
    # Similarity
    "cosine_similarity",
    "semantic_confidence",
    "semantic_score",
    "to_percentage",
]
