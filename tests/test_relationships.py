# ==============================================
# Tests for RelationshipInferencer
# ==============================================

import pytest

from patternbridge.data import DataPatternClassifier, RelationshipInferencer
from patternbridge.data.profiler import FieldProfiler


@pytest.fixture
def inferencer():
    return RelationshipInferencer()


def profiles_for(records):
    return FieldProfiler().profile(records)


class TestRelationships:
    """Name-based relationship candidates."""

    def test_foreign_key_by_stem(self, inferencer):
        profiles = profiles_for([{"breed_id": "1", "breed_name": "Boxer", "age": "3"}])
        relationships = inferencer.infer_relationships(profiles)
        assert "breed_id -> breed_name (foreign_key)" in relationships
        assert not any("age (foreign_key)" in r for r in relationships)

    def test_bare_id_links_nothing(self, inferencer):
        """A plain "id" column has an empty stem."""
        profiles = profiles_for([{"id": "1", "name": "x"}])
        assert inferencer.infer_relationships(profiles) == []

    def test_hierarchy(self, inferencer, catalog_records):
        relationships = inferencer.infer_relationships(profiles_for(catalog_records))
        assert "category -> sub_category (hierarchy)" in relationships
        assert "sub_category -> sub_category (hierarchy)" not in relationships

    def test_dependency_from_status(self, inferencer, catalog_records):
        relationships = inferencer.infer_relationships(profiles_for(catalog_records))
        dependencies = [r for r in relationships if r.endswith("(dependency)")]
        assert dependencies == [
            "status -> product_id (dependency)",
            "status -> name (dependency)",
            "status -> category (dependency)",
            "status -> sub_category (dependency)",
            "status -> price (dependency)",
            "status -> created_at (dependency)",
        ]


class TestBusinessRules:
    """Value-based business rule candidates."""

    def test_required_and_unique(self, inferencer, catalog_records):
        rules = inferencer.infer_business_rules(profiles_for(catalog_records))
        assert "product_id is required (non-null)" in rules
        assert "sub_category is required (non-null)" not in rules
        assert "product_id must be unique" in rules
        assert "category must be unique" not in rules

    def test_two_missing_values_are_not_unique(self, inferencer):
        profiles = profiles_for([{"code": "a"}, {"code": ""}, {"code": ""}])
        assert "code must be unique" not in inferencer.infer_business_rules(profiles)

    def test_percentage_range(self, inferencer):
        profiles = profiles_for([{"score": v} for v in ["10", "55", "99"]])
        assert "score must be between 0 and 100" in inferencer.infer_business_rules(profiles)

    def test_non_negative(self, inferencer, catalog_records):
        rules = inferencer.infer_business_rules(profiles_for(catalog_records))
        assert "price must be non-negative" in rules
        assert "price must be between 0 and 100" not in rules

    def test_negative_values_have_no_range_rule(self, inferencer):
        profiles = profiles_for([{"delta": v} for v in ["-1", "5", "7"]])
        rules = inferencer.infer_business_rules(profiles)
        assert "delta must be non-negative" not in rules
        assert "delta must be between 0 and 100" not in rules


class TestAttachment:
    """Descriptors pick up the candidate strings that mention them."""

    def test_descriptor_context(self, catalog_records):
        patterns = DataPatternClassifier().classify(catalog_records)
        price = patterns.numerical[0]
        assert "price must be non-negative" in price.business_rules
        assert "status -> price (dependency)" in price.relationships
        assert all("price" in r for r in price.relationships)

    def test_substring_match(self, inferencer):
        rels, _ = inferencer.attach("category", ["status -> sub_category (dependency)"], [])
        assert rels == ("status -> sub_category (dependency)",)
