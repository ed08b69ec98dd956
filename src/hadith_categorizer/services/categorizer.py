"""
Per-document categorization.

Flow for one hadith text:
1. Score every category by weighted keyword hits, pick the best
   (ties by priority order, catch-all when nothing matched)
2. Pick a cluster: keyword clusters first, cosine fallback per policy
3. Collect the winning category's matched keywords as evidence
4. Confidence = winning score per word, as a percentage capped at 100
"""

import math
from typing import Optional

from hadith_categorizer.config import settings
from hadith_categorizer.schemas import CategorizationOutcome, CategorizationResult
from hadith_categorizer.services.cluster_matcher import (
    ClusterMatcher,
    ClusterSelectionPolicy,
    KeywordClusterPicker,
)
from hadith_categorizer.services.fingerprints import ClusterFingerprintIndex
from hadith_categorizer.services.keyword_index import CategoryScorer
from hadith_categorizer.services.text import word_count
from hadith_categorizer.taxonomy.schema import Taxonomy


class CategorizationConfig:
    """Tunables for a categorization run."""

    def __init__(
        self,
        batch_size: int = 100,
        confidence_floor: int = 10,
        semantic_fallback: bool = True,
        min_similarity: float = 0.15,
        max_keywords: int = 10,
        text_fields: Optional[list] = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self.confidence_floor = confidence_floor
        self.semantic_fallback = semantic_fallback
        self.min_similarity = min_similarity
        self.max_keywords = max_keywords
        self.text_fields = list(text_fields) if text_fields else ["hadith_english", "text_en", "hadith_text"]

    @classmethod
    def from_settings(cls, **overrides) -> "CategorizationConfig":
        """Config from environment settings, with explicit overrides."""
        values = dict(
            batch_size=settings.CATEGORIZE_BATCH_SIZE,
            confidence_floor=settings.CONFIDENCE_FLOOR,
            semantic_fallback=settings.SEMANTIC_FALLBACK_ENABLED,
            min_similarity=settings.SEMANTIC_MIN_SIMILARITY,
            max_keywords=settings.MAX_EVIDENCE_KEYWORDS,
            text_fields=settings.TEXT_FIELDS,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def compute_confidence(score: float, words: int) -> int:
    """
    Keyword density as an integer percentage in [0, 100].

    Rounds half up; zero words gives 0.
    """
    if words <= 0 or score <= 0:
        return 0
    return min(int(math.floor(score / words * 100 + 0.5)), 100)


class HadithCategorizer:
    """
    Deterministic, explainable hadith categorizer.

    Usage:
        categorizer = HadithCategorizer(load_taxonomy())
        result = categorizer.categorize("Actions are judged by intentions ...")
        print(result.category_id, result.subcategory, result.confidence)
    """

    def __init__(
        self,
        taxonomy: Taxonomy,
        config: Optional[CategorizationConfig] = None,
        fingerprint_index: Optional[ClusterFingerprintIndex] = None,
    ):
        self.taxonomy = taxonomy
        self.config = config or CategorizationConfig()
        self.scorer = CategoryScorer(taxonomy)
        self.fingerprint_index = fingerprint_index or ClusterFingerprintIndex(taxonomy)
        self.keyword_picker = KeywordClusterPicker(taxonomy)
        self.policy = ClusterSelectionPolicy(
            ClusterMatcher(self.fingerprint_index),
            semantic_fallback=self.config.semantic_fallback,
            min_similarity=self.config.min_similarity,
        )

    def evaluate(self, text: str) -> CategorizationOutcome:
        """Categorize a text and keep the keyword layer's own cluster pick."""
        scores = self.scorer.score(text)
        category_id, highest = self.scorer.best_category(scores)

        keyword_cluster_id = self.keyword_picker.best_keyword_cluster(text, 1)
        cluster_id = self.policy.pick_cluster(text, category_id, keyword_cluster_id)

        keywords = self.scorer.matched_keywords(text, category_id, limit=self.config.max_keywords)

        result = CategorizationResult(
            category_id=category_id,
            subcategory=cluster_id,
            confidence=compute_confidence(highest, word_count(text)),
            keywords=keywords,
        )
        return CategorizationOutcome(result=result, keyword_cluster_id=keyword_cluster_id)

    def categorize(self, text: str) -> CategorizationResult:
        """Categorize one hadith text."""
        return self.evaluate(text).result
