"""
Embedding providers for generating text embeddings.

Two backends share one interface: a local sentence-transformers model and
the hosted OpenAI embeddings API. Providers never cache; storing vectors
is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from talentmatch.core.exceptions import EmbeddingUnavailable
from talentmatch.utils.config import MLSettings, get_settings
from talentmatch.utils.logger import get_logger

logger = get_logger(__name__)


def truncate_text(text: str, max_chars: int) -> str:
    """
    Truncate text to fit within the model's input window.

    Cuts at the last word boundary when one falls in the final 20% of the
    allowed length, otherwise cuts hard at max_chars.
    """
    if len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    last_space = truncated.rfind(" ")
    if last_space > max_chars * 0.8:
        return truncated[:last_space]
    return truncated


class EmbeddingProvider(ABC):
    """Abstract base class for text embedding backends."""

    def __init__(self, settings: Optional[MLSettings] = None):
        self.settings = settings or get_settings().ml

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Identifier of the model producing the vectors."""
        pass

    @abstractmethod
    def _embed(self, text: str) -> list[float] | np.ndarray:
        """Call the backend for a single, already truncated text."""
        pass

    def embed(self, text: str) -> np.ndarray:
        """
        Generate an embedding for a text.

        Args:
            text: Text content to embed.

        Returns:
            1-D float array.

        Raises:
            EmbeddingUnavailable: If the text is blank, the backend call
                fails, or the backend returns no vector.
        """
        if not text or not text.strip():
            raise EmbeddingUnavailable("Cannot embed empty text", self.model_name)

        content = truncate_text(text, self.settings.max_input_chars)
        logger.debug(f"Generating embedding with {self.model_name} (chars={len(content)})")

        try:
            raw = self._embed(content)
        except EmbeddingUnavailable:
            raise
        except Exception as e:
            logger.error(f"Embedding call to {self.model_name} failed: {type(e).__name__}")
            raise EmbeddingUnavailable(
                f"Embedding model {self.model_name} failed: {type(e).__name__}",
                self.model_name,
            ) from e

        vector = np.asarray(raw if raw is not None else [], dtype=np.float64).ravel()
        if vector.size == 0:
            logger.error(f"Embedding model {self.model_name} returned no vector")
            raise EmbeddingUnavailable(
                f"Embedding model {self.model_name} returned no vector",
                self.model_name,
            )
        return vector

    def embed_many(self, texts: list[str]) -> list[np.ndarray]:
        """Embed several texts; the first failure propagates."""
        return [self.embed(text) for text in texts]


class SentenceTransformerEmbedder(EmbeddingProvider):
    """
    Local sentence-transformers embedding model.

    The model is loaded lazily on first use and placed on the configured
    device.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        device: Optional[str] = None,
        settings: Optional[MLSettings] = None,
    ):
        """
        Initialize the embedding model.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to config setting.
            device: Device to run model on ('cpu', 'cuda', 'mps').
                   Defaults to config setting.
            settings: Optional ML settings override.
        """
        super().__init__(settings)
        self._model_name = model_name or self.settings.embedding_model
        self.device = device or self.settings.device
        self.batch_size = self.settings.batch_size

        self._model = None

    @property
    def model_name(self) -> str:
        return self._model_name

    def _load_model(self) -> None:
        """Lazy load the embedding model."""
        if self._model is not None:
            return

        try:
            from sentence_transformers import SentenceTransformer
        except ImportError:
            logger.error(
                "sentence-transformers not installed. "
                "Install with: pip install sentence-transformers"
            )
            raise

        logger.info(f"Loading embedding model: {self._model_name}")
        self._model = SentenceTransformer(self._model_name, device=self.device)
        logger.info(f"Embedding model loaded on device: {self.device}")

    @property
    def model(self):
        """Get the underlying sentence-transformer model."""
        self._load_model()
        return self._model

    def _embed(self, text: str) -> np.ndarray:
        embeddings = self.model.encode(
            [text],
            batch_size=self.batch_size,
            show_progress_bar=False,
            normalize_embeddings=True,
            convert_to_numpy=True,
        )
        return embeddings[0] if len(embeddings) else np.array([])


class OpenAIEmbedder(EmbeddingProvider):
    """Hosted embedding model reached through the OpenAI SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        settings: Optional[MLSettings] = None,
        client=None,
    ):
        super().__init__(settings)
        self._api_key = api_key or self.settings.openai_api_key
        self._model_name = model_name or self.settings.openai_embedding_model
        self._client = client

        if self._client is None and not self._api_key:
            raise EmbeddingUnavailable(
                "OpenAI API key must not be empty. Set ML_OPENAI_API_KEY.",
                self._model_name,
            )

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def client(self):
        """Get the OpenAI client (lazy initialization)."""
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self._api_key,
                timeout=self.settings.request_timeout,
            )
        return self._client

    def _embed(self, text: str) -> list[float]:
        response = self.client.embeddings.create(model=self._model_name, input=text)
        if not response.data:
            return []
        return response.data[0].embedding


def create_embedding_provider(settings: Optional[MLSettings] = None) -> EmbeddingProvider:
    """Build the provider selected by ``ml.provider``."""
    settings = settings or get_settings().ml
    if settings.provider == "openai":
        return OpenAIEmbedder(settings=settings)
    return SentenceTransformerEmbedder(settings=settings)


# Singleton instance
_embedding_provider: Optional[EmbeddingProvider] = None


def get_embedding_provider() -> EmbeddingProvider:
    """Get the configured embedding provider singleton instance."""
    global _embedding_provider
    if _embedding_provider is None:
        _embedding_provider = create_embedding_provider()
    return _embedding_provider
