"""
Tests for taxonomy loading and validation.

Covers the bundled taxonomy asset and every load-time rejection:
- malformed YAML and non-mapping documents
- duplicate category and cluster ids
- fallback category collisions and bad priority lists
- blank keywords and missing files
"""

import pytest

from hadith_categorizer.errors import CategorizationError, TaxonomyError
from hadith_categorizer.taxonomy import load_taxonomy, parse_taxonomy


VALID = """
categories:
  - id: worship
    keywords:
      primary: [prayer]
    clusters:
      - id: salah
        title: Salah
        keywords: [prayer]
        examples: ["Establish the prayer"]
"""


class TestBundledTaxonomy:
    """Test the taxonomy shipped with the package."""

    def test_loads(self):
        taxonomy = load_taxonomy()
        assert len(taxonomy.categories) == 12
        assert taxonomy.fallback_category == "general"

    def test_cluster_counts(self):
        """Every category carries between 4 and 10 clusters."""
        for category in load_taxonomy().categories:
            assert 4 <= len(category.clusters) <= 10, category.id

    def test_every_category_has_primary_group(self):
        for category in load_taxonomy().categories:
            assert "primary" in category.keywords, category.id

    def test_cluster_ids_unique(self):
        ids = [cluster.id for _, cluster in load_taxonomy().iter_clusters()]
        assert len(ids) == len(set(ids))

    def test_keywords_and_examples_are_strings(self):
        """YAML scalars such as false or no must stay strings."""
        taxonomy = load_taxonomy()
        for category in taxonomy.categories:
            for keywords in category.keywords.values():
                assert all(isinstance(kw, str) for kw in keywords), category.id
        for _, cluster in taxonomy.iter_clusters():
            assert all(isinstance(kw, str) for kw in cluster.keywords), cluster.id
            assert all(isinstance(ex, str) for ex in cluster.examples), cluster.id

    def test_truthfulness_cluster_keeps_false_keyword(self):
        clusters = dict((cluster.id, cluster) for _, cluster in load_taxonomy().iter_clusters())
        assert "false" in clusters["truthfulness"].keywords


class TestParseTaxonomy:
    """Test validation of taxonomy documents."""

    def test_valid_document(self):
        taxonomy = parse_taxonomy(VALID)
        assert taxonomy.category_ids == ["worship"]
        assert taxonomy.weight_for("primary") == 2.0
        assert taxonomy.weight_for("secondary") == 1.0
        assert [c.id for c in taxonomy.clusters_for("worship")] == ["salah"]

    def test_unknown_category_has_no_clusters(self):
        assert parse_taxonomy(VALID).clusters_for("general") == []

    def test_invalid_yaml(self):
        with pytest.raises(TaxonomyError):
            parse_taxonomy("categories: [unclosed")

    def test_not_a_mapping(self):
        with pytest.raises(TaxonomyError):
            parse_taxonomy("- just\n- a list\n")

    def test_no_categories(self):
        with pytest.raises(TaxonomyError):
            parse_taxonomy("categories: []\n")

    def test_duplicate_category_ids(self):
        doc = """
categories:
  - id: worship
    keywords: {primary: [prayer]}
  - id: worship
    keywords: {primary: [fasting]}
"""
        with pytest.raises(TaxonomyError, match="duplicate category ids"):
            parse_taxonomy(doc)

    def test_duplicate_cluster_ids_across_categories(self):
        doc = """
categories:
  - id: worship
    keywords: {primary: [prayer]}
    clusters:
      - {id: shared, title: A, keywords: [prayer], examples: ["pray"]}
  - id: family
    keywords: {primary: [marriage]}
    clusters:
      - {id: shared, title: B, keywords: [marriage], examples: ["marry"]}
"""
        with pytest.raises(TaxonomyError, match="duplicate cluster ids"):
            parse_taxonomy(doc)

    def test_fallback_must_not_be_declared(self):
        doc = """
categories:
  - id: general
    keywords: {primary: [anything]}
"""
        with pytest.raises(TaxonomyError, match="fallback"):
            parse_taxonomy(doc)

    def test_priority_must_list_every_category(self):
        doc = """
category_priority: [worship]
categories:
  - id: worship
    keywords: {primary: [prayer]}
  - id: family
    keywords: {primary: [marriage]}
"""
        with pytest.raises(TaxonomyError):
            parse_taxonomy(doc)

    def test_priority_reorders_categories(self):
        doc = """
category_priority: [family, worship]
categories:
  - id: worship
    keywords: {primary: [prayer]}
  - id: family
    keywords: {primary: [marriage]}
"""
        assert parse_taxonomy(doc).category_order == ["family", "worship"]

    def test_blank_keyword(self):
        doc = """
categories:
  - id: worship
    keywords: {primary: [prayer, "  "]}
"""
        with pytest.raises(TaxonomyError):
            parse_taxonomy(doc)

    def test_empty_keyword_group(self):
        doc = """
categories:
  - id: worship
    keywords: {primary: []}
"""
        with pytest.raises(TaxonomyError):
            parse_taxonomy(doc)

    def test_cluster_needs_examples(self):
        doc = """
categories:
  - id: worship
    keywords: {primary: [prayer]}
    clusters:
      - {id: salah, title: Salah, keywords: [prayer], examples: []}
"""
        with pytest.raises(TaxonomyError):
            parse_taxonomy(doc)


class TestLoadTaxonomy:
    """Test loading from the filesystem."""

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "taxonomy.yaml"
        path.write_text(VALID, encoding="utf-8")
        assert load_taxonomy(path).category_ids == ["worship"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(TaxonomyError, match="Cannot read taxonomy"):
            load_taxonomy(tmp_path / "missing.yaml")

    def test_errors_share_base_class(self, tmp_path):
        with pytest.raises(CategorizationError):
            load_taxonomy(tmp_path / "missing.yaml")


class TestKeywordGroupRules:
    """Test keyword group requirements."""

    def test_category_needs_primary_group(self):
        """Every category must declare the weighted primary group."""
        doc = """
categories:
  - id: worship
    keywords: {secondary: [prayer]}
"""
        with pytest.raises(TaxonomyError, match="primary"):
            parse_taxonomy(doc)

    def test_primary_group_name_is_configurable(self):
        doc = """
primary_subcategory: core
categories:
  - id: worship
    keywords: {core: [prayer], extra: [charity]}
"""
        taxonomy = parse_taxonomy(doc)
        assert taxonomy.weight_for("core") == 2.0
        assert taxonomy.weight_for("extra") == 1.0

    def test_bare_boolean_keyword_rejected(self):
        """An unquoted false is a YAML boolean, not a keyword."""
        doc = """
categories:
  - id: akhlaq
    keywords: {primary: [truth]}
    clusters:
      - {id: truthfulness, title: Truth, keywords: [truth, false], examples: ["Speak the truth"]}
"""
        with pytest.raises(TaxonomyError):
            parse_taxonomy(doc)

    def test_quoted_boolean_keyword_accepted(self):
        doc = """
categories:
  - id: akhlaq
    keywords: {primary: [truth]}
    clusters:
      - {id: truthfulness, title: Truth, keywords: [truth, "false"], examples: ["Speak the truth"]}
"""
        cluster = parse_taxonomy(doc).clusters_for("akhlaq")[0]
        assert cluster.keywords == ["truth", "false"]
