"""
TF-IDF cluster fingerprints.

Each cluster is represented by the sum of the TF-IDF vectors of its example
sentences. Document frequency counts clusters (not examples) within one
category; the IDF numerator is the category's total example count.

Fingerprints are built the first time a category is asked for and kept for
the life of the index.
"""

import math
import threading
from typing import Callable, Dict, List, NamedTuple, Optional

from hadith_categorizer.services.text import tokenize
from hadith_categorizer.taxonomy.schema import Cluster, Taxonomy


TermVector = Dict[str, float]


class Fingerprint(NamedTuple):
    """Aggregated term vector of one cluster."""
    cluster_id: str
    vector: TermVector


def tfidf(
    bag: Dict[str, int],
    doc_freq: Optional[Dict[str, int]] = None,
    total_docs: int = 1,
) -> TermVector:
    """
    Weight a bag of words.

    Term frequency is normalized by the bag's largest count. With no
    document-frequency table the result is TF only (used for queries,
    which are not part of the corpus statistics).

    Args:
        bag: token -> count
        doc_freq: token -> number of clusters containing it
        total_docs: Example count of the category
    """
    if not bag:
        return {}
    max_tf = max(1, max(bag.values()))
    vector: TermVector = {}
    for term, tf in bag.items():
        weight = tf / max_tf
        if doc_freq is not None:
            weight *= math.log(total_docs / max(1, doc_freq.get(term, 0)))
        vector[term] = weight
    return vector


def cosine(a: TermVector, b: TermVector) -> float:
    """
    Cosine similarity of two sparse vectors.

    Returns 0.0 when either vector is empty or all-zero.
    """
    dot = sum(weight * b.get(term, 0.0) for term, weight in a.items())
    norm_a = math.sqrt(sum(w * w for w in a.values()))
    norm_b = math.sqrt(sum(w * w for w in b.values()))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    # Clamp float noise so identical vectors report exactly 1.0 at most
    return max(0.0, min(1.0, dot / (norm_a * norm_b)))


def build_fingerprints(clusters: List[Cluster]) -> List[Fingerprint]:
    """
    Fingerprints for the clusters of one category, in declared order.
    """
    total_docs = sum(len(c.examples) for c in clusters)
    bags = [[tokenize(example) for example in c.examples] for c in clusters]

    # pass 1: document frequency over clusters
    doc_freq: Dict[str, int] = {}
    for cluster_bags in bags:
        terms = set()
        for bag in cluster_bags:
            terms.update(bag)
        for term in terms:
            doc_freq[term] = doc_freq.get(term, 0) + 1

    # pass 2: summed TF-IDF per cluster
    fingerprints = []
    for cluster, cluster_bags in zip(clusters, bags):
        merged: TermVector = {}
        for bag in cluster_bags:
            for term, weight in tfidf(bag, doc_freq, total_docs).items():
                merged[term] = merged.get(term, 0.0) + weight
        fingerprints.append(Fingerprint(cluster_id=cluster.id, vector=merged))
    return fingerprints


class FingerprintCache:
    """
    Build-once cache of fingerprints keyed by category id.

    Reads after the first build take no lock; the build itself is guarded so
    concurrent callers never build the same category twice.
    """

    def __init__(self):
        self._entries: Dict[str, List[Fingerprint]] = {}
        self._lock = threading.Lock()
        self.builds = 0

    def get_or_build(self, category_id: str, builder: Callable[[str], List[Fingerprint]]) -> List[Fingerprint]:
        entry = self._entries.get(category_id)
        if entry is not None:
            return entry
        with self._lock:
            entry = self._entries.get(category_id)
            if entry is None:
                entry = builder(category_id)
                self._entries[category_id] = entry
                self.builds += 1
            return entry

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ClusterFingerprintIndex:
    """Lazily built per-category fingerprints for a taxonomy."""

    def __init__(self, taxonomy: Taxonomy, cache: Optional[FingerprintCache] = None):
        self.taxonomy = taxonomy
        self.cache = cache if cache is not None else FingerprintCache()

    def fingerprints_for(self, category_id: str) -> List[Fingerprint]:
        """Fingerprints of a category; built on first call, cached afterwards."""
        return self.cache.get_or_build(category_id, self._build)

    def warm(self) -> None:
        """Build every category up front (for concurrent use)."""
        for category_id in self.taxonomy.category_ids:
            self.fingerprints_for(category_id)

    def _build(self, category_id: str) -> List[Fingerprint]:
        return build_fingerprints(self.taxonomy.clusters_for(category_id))
