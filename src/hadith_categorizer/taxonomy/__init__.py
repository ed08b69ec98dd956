"""Static taxonomy: categories, weighted keyword groups and clusters."""

from hadith_categorizer.taxonomy.schema import Cluster, CategoryDefinition, Taxonomy
from hadith_categorizer.taxonomy.loader import load_taxonomy, parse_taxonomy

__all__ = [
    "Cluster",
    "CategoryDefinition",
    "Taxonomy",
    "load_taxonomy",
    "parse_taxonomy",
]
