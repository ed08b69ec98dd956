"""
Taxonomy schema.

The taxonomy is a static asset: an ordered list of top-level categories,
each with weighted keyword groups (subcategories) and an ordered list of
fine-grained clusters seeded with example sentences. Validation happens
once at load time; the engine treats a validated Taxonomy as read-only.
"""

from typing import Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Cluster(BaseModel):
    """Fine-grained topical cluster within a category."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    keywords: List[str] = Field(..., min_length=1)
    examples: List[str] = Field(..., min_length=1)

    @field_validator("keywords", "examples")
    @classmethod
    def no_blank_entries(cls, v: List[str]) -> List[str]:
        if any(not item or not item.strip() for item in v):
            raise ValueError("entries must be non-empty strings")
        return v


class CategoryDefinition(BaseModel):
    """Top-level category: keyword groups plus its clusters."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    keywords: Dict[str, List[str]] = Field(..., min_length=1)
    clusters: List[Cluster] = Field(default_factory=list)

    @field_validator("keywords")
    @classmethod
    def keyword_groups_not_empty(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        for subcategory, keywords in v.items():
            if not keywords:
                raise ValueError(f"keyword group '{subcategory}' is empty")
            if any(not kw or not kw.strip() for kw in keywords):
                raise ValueError(f"keyword group '{subcategory}' has a blank keyword")
        return v


class Taxonomy(BaseModel):
    """Validated taxonomy asset."""
    model_config = ConfigDict(frozen=True)

    version: int = 1
    fallback_category: str = "general"
    primary_subcategory: str = "primary"
    primary_weight: float = 2.0
    default_weight: float = 1.0
    category_priority: Optional[List[str]] = None
    categories: List[CategoryDefinition] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_ids(self) -> "Taxonomy":
        category_ids = [c.id for c in self.categories]
        duplicates = sorted({cid for cid in category_ids if category_ids.count(cid) > 1})
        if duplicates:
            raise ValueError(f"duplicate category ids: {duplicates}")

        missing = [c.id for c in self.categories if self.primary_subcategory not in c.keywords]
        if missing:
            raise ValueError(
                f"categories without a '{self.primary_subcategory}' keyword group: {missing}"
            )

        if self.fallback_category in category_ids:
            raise ValueError(
                f"fallback category '{self.fallback_category}' must not be a declared category"
            )

        cluster_ids = [cl.id for c in self.categories for cl in c.clusters]
        duplicates = sorted({cid for cid in cluster_ids if cluster_ids.count(cid) > 1})
        if duplicates:
            raise ValueError(f"duplicate cluster ids: {duplicates}")

        if self.category_priority is not None:
            if sorted(self.category_priority) != sorted(category_ids):
                raise ValueError("category_priority must list every category id exactly once")
        return self

    @property
    def category_ids(self) -> List[str]:
        """Category ids in declaration order."""
        return [c.id for c in self.categories]

    @property
    def category_order(self) -> List[str]:
        """Tie-break order for category scores (explicit priority or declaration order)."""
        return list(self.category_priority) if self.category_priority else self.category_ids

    def weight_for(self, subcategory: str) -> float:
        """Scoring weight of a keyword group."""
        if subcategory == self.primary_subcategory:
            return self.primary_weight
        return self.default_weight

    def clusters_for(self, category_id: str) -> List[Cluster]:
        """Clusters of a category in declared order; empty for unknown ids."""
        for category in self.categories:
            if category.id == category_id:
                return list(category.clusters)
        return []

    def iter_clusters(self) -> Iterator[Tuple[str, Cluster]]:
        """Every (category id, cluster) pair across the taxonomy, in declared order."""
        for category in self.categories:
            for cluster in category.clusters:
                yield category.id, cluster
