"""
Hadith categorizer.

Assigns each hadith to a top-level topical category and, where the evidence
allows, to a finer-grained cluster within it:

1. Keyword scoring picks the category (primary keywords weigh double)
2. Cluster keywords pick a cluster when any of them appear in the text
3. TF-IDF cosine similarity against cluster examples is the fallback
"""

__version__ = "0.1.0"
