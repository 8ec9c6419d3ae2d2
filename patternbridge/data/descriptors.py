# ==============================================
# Descriptors (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of data classification,
#   plus the thresholds that control how fields are tagged.
#
# ENUMS:
# ------
# - FieldCategory(Enum): CATEGORICAL, NUMERICAL, IDENTIFIER,
#                        SEARCHABLE, TEMPORAL, SORTABLE
#
# CLASSES:
# --------
# - FieldDescriptor (frozen dataclass)
#     Semantic profile of one column under one category. The
#     category-specific attributes that do not apply stay None/empty.
#
# - DataPatterns (dataclass)
#     Tagged collections: one descriptor list per category. A field
#     can sit in several lists at once (e.g. categorical AND sortable).
#
# - DataThresholds (dataclass)
#     Configurable thresholds used by the DataPatternClassifier.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple


class FieldCategory(Enum):
    """
    Non-exclusive category tags for a tabular field.
    """
    CATEGORICAL = "categorical"
    NUMERICAL = "numerical"
    IDENTIFIER = "identifier"
    SEARCHABLE = "searchable"
    TEMPORAL = "temporal"
    SORTABLE = "sortable"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Classified profile of one tabular field under one category.
    """

    # --- Core identity ---
    name: str
    category: FieldCategory
    sample_count: int  # Non-empty samples observed for this field

    # --- Categorical ---
    values: Tuple[str, ...] = ()  # Distinct values, first-seen order
    unique_count: int = 0
    total_count: int = 0

    # --- Numerical ---
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    mean: Optional[float] = None

    # --- Identifier ---
    uniqueness: Optional[float] = None

    # --- Searchable / temporal / sortable ---
    sample_values: Tuple[str, ...] = ()
    avg_length: Optional[float] = None
    date_format: Optional[str] = None
    sort_type: Optional[str] = None  # "number", "date" or "string"

    # --- Inferred context ---
    relationships: Tuple[str, ...] = ()
    business_rules: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the descriptor, keeping only attributes that apply.

        Returns:
            A JSON-serializable dictionary representation
        """
        data: Dict[str, Any] = {
            "name": self.name,
            "category": self.category.value,
            "sample_count": self.sample_count,
        }

        if self.category == FieldCategory.CATEGORICAL:
            data.update(values=list(self.values), unique_count=self.unique_count,
                        total_count=self.total_count)
        elif self.category == FieldCategory.NUMERICAL:
            data.update(min=self.minimum, max=self.maximum, mean=self.mean)
        elif self.category == FieldCategory.IDENTIFIER:
            data.update(uniqueness=self.uniqueness)
        elif self.category == FieldCategory.SEARCHABLE:
            data.update(sample_values=list(self.sample_values), avg_length=self.avg_length)
        elif self.category == FieldCategory.TEMPORAL:
            data.update(format=self.date_format, sample_values=list(self.sample_values))
        elif self.category == FieldCategory.SORTABLE:
            data.update(type=self.sort_type, sample_values=list(self.sample_values))

        data["relationships"] = list(self.relationships)
        data["business_rules"] = list(self.business_rules)
        return data


@dataclass
class DataPatterns:
    """
    All field descriptors from one classification pass, tagged by category.
    """
    categorical: List[FieldDescriptor] = field(default_factory=list)
    numerical: List[FieldDescriptor] = field(default_factory=list)
    identifiers: List[FieldDescriptor] = field(default_factory=list)
    searchable: List[FieldDescriptor] = field(default_factory=list)
    temporal: List[FieldDescriptor] = field(default_factory=list)
    sortable: List[FieldDescriptor] = field(default_factory=list)

    def by_category(self, category: FieldCategory) -> List[FieldDescriptor]:
        return {
            FieldCategory.CATEGORICAL: self.categorical,
            FieldCategory.NUMERICAL: self.numerical,
            FieldCategory.IDENTIFIER: self.identifiers,
            FieldCategory.SEARCHABLE: self.searchable,
            FieldCategory.TEMPORAL: self.temporal,
            FieldCategory.SORTABLE: self.sortable,
        }[category]

    def all_descriptors(self) -> List[FieldDescriptor]:
        descriptors: List[FieldDescriptor] = []
        for category in FieldCategory:
            descriptors.extend(self.by_category(category))
        return descriptors

    def categories_for(self, field_name: str) -> Set[FieldCategory]:
        """
        Return every category tag carried by a field.

        Args:
            field_name: The column name

        Returns:
            Set of FieldCategory values (empty if the field was not tagged)
        """
        return {d.category for d in self.all_descriptors() if d.name == field_name}

    def field_names(self) -> List[str]:
        names: List[str] = []
        for descriptor in self.all_descriptors():
            if descriptor.name not in names:
                names.append(descriptor.name)
        return names

    def field_summary(self) -> Dict[str, List[str]]:
        """Field name → category tags, used by auxiliary rankers."""
        summary: Dict[str, List[str]] = {}
        for descriptor in self.all_descriptors():
            summary.setdefault(descriptor.name, []).append(descriptor.category.value)
        return summary

    @property
    def is_empty(self) -> bool:
        return not self.all_descriptors()

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "categorical": [d.to_dict() for d in self.categorical],
            "numerical": [d.to_dict() for d in self.numerical],
            "identifiers": [d.to_dict() for d in self.identifiers],
            "searchable": [d.to_dict() for d in self.searchable],
            "temporal": [d.to_dict() for d in self.temporal],
            "sortable": [d.to_dict() for d in self.sortable],
        }


@dataclass
class DataThresholds:
    """
    Configurable thresholds that control data classification.
    """

    min_samples: int = 3
    """
    Minimum non-empty samples before a field can be categorical, numerical,
    searchable or sortable. Fields below this never reach the matcher.
    """

    # --- Categorical ---
    categorical_max_distinct_ratio: float = 0.8
    """Distinct values must stay below this fraction of the samples."""

    categorical_max_distinct: int = 50
    """Distinct values must stay below this absolute count."""

    # --- Numerical / sortable ---
    numeric_min_share: float = 0.8
    """
    Share of samples that must parse as numbers for a numerical field
    (also used for numeric range business rules).
    """

    sortable_numeric_share: float = 0.8
    """A sortable field is typed "number" when its numeric share exceeds this."""

    # --- Identifier ---
    identifier_min_uniqueness: float = 0.9
    """Distinct / samples must exceed this for an identifier."""

    # --- Searchable ---
    searchable_min_avg_length: float = 2.0
    searchable_max_avg_length: float = 200.0
    searchable_sample_size: int = 5

    # --- Temporal / sortable ---
    temporal_sample_size: int = 3
    sortable_sample_size: int = 3
