"""
Data schemas for categorization results and write-back records.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CategorizationResult(BaseModel):
    """
    Outcome of categorizing one hadith.

    The only artifact produced per document; written back by the pipeline,
    never read back by the engine.
    """
    model_config = ConfigDict(frozen=True)

    category_id: str = Field(..., description="Top-level category id (or the catch-all)")
    subcategory: Optional[str] = Field(None, description="Cluster id within the taxonomy")
    confidence: int = Field(..., ge=0, le=100, description="Keyword density score")
    keywords: List[str] = Field(default_factory=list, description="Matched evidence keywords")


class CategorizationOutcome(BaseModel):
    """
    Result plus the keyword layer's own cluster pick.

    Lets the pipeline tell when the cosine fallback changed the cluster.
    """
    model_config = ConfigDict(frozen=True)

    result: CategorizationResult
    keyword_cluster_id: Optional[str] = None

    @property
    def semantic_fallback_used(self) -> bool:
        """True when the written cluster did not come from the keyword layer."""
        subcategory = self.result.subcategory
        return subcategory is not None and subcategory != self.keyword_cluster_id


class HadithCategoryUpdate(BaseModel):
    """Annotation record written back to the hadiths table (update by id)."""

    id: int
    category_id: str
    subcategory: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, hadith_id: int, result: CategorizationResult) -> "HadithCategoryUpdate":
        """Build the write-back record for a hadith."""
        return cls(
            id=hadith_id,
            category_id=result.category_id,
            subcategory=result.subcategory,
            keywords=list(result.keywords),
        )
