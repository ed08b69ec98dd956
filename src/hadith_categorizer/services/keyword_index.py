"""
Keyword index and category scoring.

The taxonomy's nested keyword groups are flattened once into a single table
keyed by lower-cased keyword. Scoring counts whole-word occurrences of every
indexed keyword and adds occurrences x weight to the keyword's category.

NO LEARNING - the weights come straight from the taxonomy (primary group
2.0, every other group 1.0).
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

import regex

from hadith_categorizer.services.text import keyword_pattern
from hadith_categorizer.taxonomy.schema import Taxonomy


class KeywordEntry(NamedTuple):
    """One indexed keyword."""
    keyword: str
    category: str
    subcategory: str
    weight: float
    pattern: "regex.Pattern"


def build_keyword_index(taxonomy: Taxonomy) -> Dict[str, KeywordEntry]:
    """
    Flatten the taxonomy into keyword -> KeywordEntry.

    Categories, then keyword groups, are walked in declared order. Keys are
    lower-cased; when the same keyword appears again (in any category or
    group) the first occurrence is kept and the duplicate dropped.

    Args:
        taxonomy: Validated taxonomy

    Returns:
        Insertion-ordered mapping of lower-cased keyword to its entry
    """
    index: Dict[str, KeywordEntry] = {}
    for category in taxonomy.categories:
        for subcategory, keywords in category.keywords.items():
            weight = taxonomy.weight_for(subcategory)
            for kw in keywords:
                key = kw.lower()
                if key in index:
                    continue
                index[key] = KeywordEntry(
                    keyword=key,
                    category=category.id,
                    subcategory=subcategory,
                    weight=weight,
                    pattern=keyword_pattern(key),
                )
    return index


class CategoryScorer:
    """
    Scores text against every top-level category.

    Usage:
        scorer = CategoryScorer(taxonomy)
        scores = scorer.score("Whoever prays the dawn prayer ...")
        category_id, score = scorer.best_category(scores)
    """

    def __init__(self, taxonomy: Taxonomy, index: Optional[Dict[str, KeywordEntry]] = None):
        self.taxonomy = taxonomy
        self.index = index if index is not None else build_keyword_index(taxonomy)
        self.category_order = taxonomy.category_order
        self.fallback_category = taxonomy.fallback_category

    def score(self, text: str) -> Dict[str, float]:
        """
        Weighted keyword score per category.

        Every declared category is present in the result, 0 when nothing
        matched.
        """
        lower_text = text.lower()
        scores = {category_id: 0.0 for category_id in self.taxonomy.category_ids}
        for entry in self.index.values():
            occurrences = len(entry.pattern.findall(lower_text))
            if occurrences:
                scores[entry.category] += occurrences * entry.weight
        return scores

    def best_category(self, scores: Dict[str, float]) -> Tuple[str, float]:
        """
        Pick the winning category.

        Walks categories in priority order and keeps the first strictly
        higher score, so ties go to the category declared first. When every
        score is 0 the fallback (catch-all) category wins with score 0.
        """
        best_category = self.fallback_category
        highest = 0.0
        for category_id in self.category_order:
            category_score = scores.get(category_id, 0.0)
            if category_score > highest:
                highest = category_score
                best_category = category_id
        return best_category, highest

    def matched_keywords(self, text: str, category_id: str, limit: Optional[int] = None) -> List[str]:
        """
        Keywords of a category that occur in the text, in taxonomy order.

        Args:
            text: Raw text
            category_id: Category whose keywords are reported
            limit: Maximum number of keywords returned (None for all)
        """
        lower_text = text.lower()
        matched = []
        for keyword, entry in self.index.items():
            if limit is not None and len(matched) >= limit:
                break
            if entry.category == category_id and entry.pattern.search(lower_text):
                matched.append(keyword)
        return matched
