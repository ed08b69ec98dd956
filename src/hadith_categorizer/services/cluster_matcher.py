"""
Cluster selection: keyword picking first, cosine similarity as fallback.

A keyword hit on a cluster is trusted outright. Only when no cluster keyword
appears in the text is the text compared against the TF-IDF fingerprints of
the winning category, and even then the best match must clear a minimum
similarity.
"""

from typing import List, NamedTuple, Optional, Tuple

from hadith_categorizer.services.fingerprints import ClusterFingerprintIndex, cosine, tfidf
from hadith_categorizer.services.text import tokenize
from hadith_categorizer.taxonomy.schema import Taxonomy


class ClusterMatch(NamedTuple):
    """Best cosine match within a category."""
    cluster_id: str
    similarity: float


class ClusterMatcher:
    """Cosine similarity of a text against a category's cluster fingerprints."""

    def __init__(self, fingerprint_index: ClusterFingerprintIndex):
        self.fingerprint_index = fingerprint_index

    def best_cluster(self, text: str, category_id: str) -> Optional[ClusterMatch]:
        """
        Most similar cluster of a category.

        The query vector is TF only. Ties keep the cluster declared first.

        Returns:
            ClusterMatch, or None when the category has no clusters
        """
        query = tfidf(tokenize(text))
        best: Optional[ClusterMatch] = None
        for fingerprint in self.fingerprint_index.fingerprints_for(category_id):
            similarity = cosine(query, fingerprint.vector)
            if best is None or similarity > best.similarity:
                best = ClusterMatch(cluster_id=fingerprint.cluster_id, similarity=similarity)
        return best


class KeywordClusterPicker:
    """
    Picks clusters by their own keyword lists.

    Category-agnostic: every cluster in the taxonomy is a candidate. A
    keyword counts when it occurs anywhere in the lower-cased text
    (substring match).
    """

    def __init__(self, taxonomy: Taxonomy):
        self._clusters: List[Tuple[str, List[str]]] = [
            (cluster.id, [kw.lower() for kw in cluster.keywords])
            for _, cluster in taxonomy.iter_clusters()
        ]

    def candidates(self, text: str, max_results: int = 1) -> List[str]:
        """
        Cluster ids ranked by number of distinct keyword hits.

        Clusters with no hit are left out; ties keep declaration order.
        """
        lower_text = text.lower()
        scored = []
        for position, (cluster_id, keywords) in enumerate(self._clusters):
            hits = sum(1 for kw in keywords if kw in lower_text)
            if hits:
                scored.append((-hits, position, cluster_id))
        scored.sort()
        return [cluster_id for _, _, cluster_id in scored[:max_results]]

    def best_keyword_cluster(self, text: str, max_results: int = 1) -> Optional[str]:
        """Top keyword cluster, or None when no cluster keyword appears."""
        ranked = self.candidates(text, max_results)
        return ranked[0] if ranked else None


class ClusterSelectionPolicy:
    """
    Two-tier cluster choice.

    - fallback disabled: the keyword pick is returned as is
    - keyword pick present: it wins, no cosine computed
    - otherwise: best cosine match if similarity >= min_similarity
    """

    def __init__(self, matcher: ClusterMatcher, semantic_fallback: bool = True, min_similarity: float = 0.15):
        self.matcher = matcher
        self.semantic_fallback = semantic_fallback
        self.min_similarity = min_similarity

    def pick_cluster(self, text: str, category_id: str, keyword_cluster_id: Optional[str]) -> Optional[str]:
        if not self.semantic_fallback:
            return keyword_cluster_id
        if keyword_cluster_id:
            return keyword_cluster_id
        match = self.matcher.best_cluster(text, category_id)
        if match is not None and match.similarity >= self.min_similarity:
            return match.cluster_id
        return None
