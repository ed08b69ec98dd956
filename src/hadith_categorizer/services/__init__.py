"""
Categorization engine for hadith texts.

Components, in dependency order:
- keyword_index: flattened keyword table and category scoring
- fingerprints: per-category TF-IDF cluster fingerprints (lazily cached)
- cluster_matcher: cosine matching, keyword cluster picking, selection policy
- categorizer: per-document categorization
- pipeline: paged batch run against the datastore
"""
