"""
Candidate repository for TalentMatch.

Provides read access to candidate profiles and maintenance of their
cached resume embeddings.
"""

import re
from datetime import datetime
from typing import Iterator, Optional

from bson import ObjectId

from talentmatch.data.database import CANDIDATES_COLLECTION
from talentmatch.data.models.candidate import CandidateProfile
from talentmatch.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[CandidateProfile]):
    """Repository for candidate profile documents."""

    @property
    def collection_name(self) -> str:
        return CANDIDATES_COLLECTION

    @property
    def model_class(self) -> type[CandidateProfile]:
        return CandidateProfile

    @property
    def entity_name(self) -> str:
        return "candidate"

    def iter_profiles(self, batch_size: int = 100) -> Iterator[CandidateProfile]:
        """Iterate over every stored profile in creation order."""
        cursor = self._get_sync_collection().find({}).sort("created_at", 1).batch_size(batch_size)
        for document in cursor:
            yield self._to_model(document)

    def find_by_skill(self, skill: str, limit: int = 100) -> list[CandidateProfile]:
        """Find candidates listing a skill (case-insensitive exact name)."""
        return self.find(
            {"skills": {"$regex": f"^{re.escape(skill.strip())}$", "$options": "i"}},
            limit=limit,
        )

    def save_embedding(
        self,
        candidate_id: str | ObjectId,
        embedding: list[float],
        model_name: Optional[str] = None,
    ) -> bool:
        """Cache a resume embedding on the profile."""
        updated = self.update(
            candidate_id,
            {
                "resume_embedding": [float(v) for v in embedding],
                "embedding_model": model_name,
                "embedding_updated_at": datetime.utcnow(),
            },
        )
        logger.debug(f"Cached resume embedding for candidate {candidate_id} (dim={len(embedding)})")
        return updated

    def clear_embedding(self, candidate_id: str | ObjectId) -> bool:
        """Drop the cached embedding after the profile text changes."""
        return self.update(
            candidate_id,
            {"resume_embedding": None, "embedding_model": None, "embedding_updated_at": None},
        )


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
