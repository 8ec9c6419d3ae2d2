# ==============================================
# Tests for DataPatternClassifier
# ==============================================
#
# Field categories are non-exclusive: the same column may show up in
# several lists. The catalog fixture is built so that each rule has
# at least one field that hits it and one that misses it.
# ==============================================

import pytest

from patternbridge.data import DataPatternClassifier, DataThresholds, FieldCategory


@pytest.fixture
def classifier():
    return DataPatternClassifier()


def names(descriptors):
    return [d.name for d in descriptors]


def by_name(descriptors, name):
    return next(d for d in descriptors if d.name == name)


# ==============================================
# Category Rules
# ==============================================

class TestCategorical:
    """distinct > 1, < 80% of samples, < 50, at least 3 samples."""

    def test_breed_is_categorical(self, classifier, breed_records):
        patterns = classifier.classify(breed_records)
        breed = by_name(patterns.categorical, "breed")
        assert breed.values == ("Labrador", "Poodle", "Boxer")
        assert breed.unique_count == 3
        assert breed.total_count == 4

    def test_catalog_categoricals(self, classifier, catalog_records):
        patterns = classifier.classify(catalog_records)
        assert names(patterns.categorical) == ["category", "status"]

    def test_single_value_is_not_categorical(self, classifier):
        patterns = classifier.classify([{"kind": "dog"}] * 5)
        assert patterns.categorical == []

    def test_distinct_cap(self):
        """A configured distinct cap excludes wide enumerations."""
        records = [{"code": str(i % 5)} for i in range(20)]
        narrow = DataPatternClassifier(DataThresholds(categorical_max_distinct=5))
        assert narrow.classify(records).categorical == []
        assert names(DataPatternClassifier().classify(records).categorical) == ["code"]


class TestNumerical:
    """At least 3 parseable samples and a numeric share of 0.8."""

    def test_price_stats(self, classifier, catalog_records):
        price = by_name(classifier.classify(catalog_records).numerical, "price")
        assert price.minimum == 12.5
        assert price.maximum == 120.0
        assert price.mean == pytest.approx(380.49 / 6)

    def test_only_price_is_numerical(self, classifier, catalog_records):
        assert names(classifier.classify(catalog_records).numerical) == ["price"]

    def test_mostly_text_is_not_numerical(self, classifier):
        records = [{"v": v} for v in ["1", "2", "3", "x", "y"]]
        assert classifier.classify(records).numerical == []


class TestIdentifier:
    """Uniqueness ratio above 0.9."""

    def test_catalog_identifiers(self, classifier, catalog_records):
        identifiers = names(classifier.classify(catalog_records).identifiers)
        assert "product_id" in identifiers
        assert "name" in identifiers
        assert "category" not in identifiers

    def test_uniqueness_recorded(self, classifier, catalog_records):
        product_id = by_name(classifier.classify(catalog_records).identifiers, "product_id")
        assert product_id.uniqueness == 1.0


class TestSearchable:
    """Mean length between 2 and 200, at least 3 samples."""

    def test_name_is_searchable(self, classifier, catalog_records):
        name = by_name(classifier.classify(catalog_records).searchable, "name")
        assert name.sample_values == ("Trail Shoe", "Rain Jacket", "Wool Sock", "Fleece", "Cap")
        assert name.avg_length == pytest.approx(47 / 6)

    def test_short_codes_are_not_searchable(self, classifier):
        records = [{"flag": v} for v in ["a", "b", "a", "c"]]
        assert classifier.classify(records).searchable == []


class TestTemporal:
    """Any sample matching a known date pattern."""

    def test_created_at(self, classifier, catalog_records):
        patterns = classifier.classify(catalog_records)
        created = by_name(patterns.temporal, "created_at")
        assert created.date_format == "YYYY-MM-DD"
        assert created.sample_values == ("2024-01-05", "2024-01-12", "2024-02-01")
        assert names(patterns.temporal) == ["created_at"]

    def test_format_from_first_sample(self, classifier):
        records = [{"when": "01/15/2024"}, {"when": "2024-02-01"}]
        assert classifier.classify(records).temporal[0].date_format == "MM/DD/YYYY"


class TestSortable:
    """Every field with at least 3 samples, typed by primitive."""

    def test_sort_types(self, classifier, catalog_records):
        sortable = classifier.classify(catalog_records).sortable
        assert by_name(sortable, "price").sort_type == "number"
        assert by_name(sortable, "created_at").sort_type == "date"
        assert by_name(sortable, "name").sort_type == "string"
        assert len(sortable) == 7

    def test_number_at_exactly_80_percent(self, classifier):
        records = [{"size": v} for v in ["1", "2", "3", "4", "large"]]
        (size,) = classifier.classify(records).sortable
        assert size.sort_type == "number"

    def test_string_below_80_percent(self, classifier):
        records = [{"size": v} for v in ["1", "2", "3", "small", "large"]]
        (size,) = classifier.classify(records).sortable
        assert size.sort_type == "string"


# ==============================================
# Cross-cutting Behaviour
# ==============================================

class TestClassification:
    """Tests for the classification pass as a whole."""

    def test_two_sample_field(self, classifier):
        """A field with exactly 2 samples gets no categorical/searchable/sortable tag."""
        records = [
            {"nickname": "Rex", "breed": "Boxer"},
            {"nickname": "Bo", "breed": "Poodle"},
            {"breed": "Boxer"},
            {"breed": "Poodle"},
        ]
        categories = classifier.classify(records).categories_for("nickname")
        assert FieldCategory.CATEGORICAL not in categories
        assert FieldCategory.SEARCHABLE not in categories
        assert FieldCategory.SORTABLE not in categories

    def test_fields_carry_several_tags(self, classifier, catalog_records):
        categories = classifier.classify(catalog_records).categories_for("category")
        assert categories == {
            FieldCategory.CATEGORICAL, FieldCategory.SEARCHABLE, FieldCategory.SORTABLE,
        }

    def test_deterministic(self, classifier, catalog_records):
        assert classifier.classify(catalog_records) == classifier.classify(catalog_records)

    @pytest.mark.parametrize("records", [None, [], [None, "x"], [{}]])
    def test_empty_input(self, classifier, records):
        """Empty or unusable input gives six empty lists, never an exception."""
        patterns = classifier.classify(records)
        assert patterns.is_empty
        assert all(v == [] for v in patterns.to_dict().values())

    def test_field_summary(self, classifier, breed_records):
        summary = classifier.classify(breed_records).field_summary()
        assert summary == {"breed": ["categorical", "searchable", "sortable"]}

    def test_to_dict_category_keys(self, classifier, catalog_records):
        data = classifier.classify(catalog_records).to_dict()
        price = next(d for d in data["numerical"] if d["name"] == "price")
        assert price["min"] == 12.5 and price["max"] == 120.0
        created = data["temporal"][0]
        assert created["format"] == "YYYY-MM-DD"
