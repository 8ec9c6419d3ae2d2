# ==============================================
# Connections (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes for the OUTPUT of the ConnectionMatcher, plus the
#   weights that control confidence scoring.
#
# ENUMS:
# ------
# - ConnectionType(Enum): CATEGORICAL_FILTER, SEARCHABLE_SEARCH,
#                         NUMERICAL_FILTER, SORTABLE_SORT
#
# CLASSES:
# --------
# - Connection (frozen dataclass)
#     One scored pairing of a data field with a UI element selector.
# - Connections (dataclass)
#     One list per connection type.
# - MatchingWeights (dataclass)
#     Every weight and threshold used to score a pair.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class ConnectionType(Enum):
    """
    The four ways a data field can be exercised through a UI element.
    """
    CATEGORICAL_FILTER = "categorical_filter"
    SEARCHABLE_SEARCH = "searchable_search"
    NUMERICAL_FILTER = "numerical_filter"
    SORTABLE_SORT = "sortable_sort"


@dataclass(frozen=True)
class Connection:
    """
    A scored candidate pairing between a data field and a UI element.
    """
    data_field: str
    ui_element: str  # The element's selector
    connection_type: ConnectionType
    confidence: float  # 0.0 to 1.0
    test_values: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data_field": self.data_field,
            "ui_element": self.ui_element,
            "connection_type": self.connection_type.value,
            "confidence": self.confidence,
            "test_values": list(self.test_values),
        }


@dataclass
class Connections:
    """
    All connections from one matching run, grouped by type.
    """
    categorical_filters: List[Connection] = field(default_factory=list)
    searchable_search: List[Connection] = field(default_factory=list)
    numerical_filters: List[Connection] = field(default_factory=list)
    sortable_sort: List[Connection] = field(default_factory=list)

    def by_type(self, connection_type: ConnectionType) -> List[Connection]:
        return {
            ConnectionType.CATEGORICAL_FILTER: self.categorical_filters,
            ConnectionType.SEARCHABLE_SEARCH: self.searchable_search,
            ConnectionType.NUMERICAL_FILTER: self.numerical_filters,
            ConnectionType.SORTABLE_SORT: self.sortable_sort,
        }[connection_type]

    def all(self) -> List[Connection]:
        """Every connection, grouped in ConnectionType order."""
        connections: List[Connection] = []
        for connection_type in ConnectionType:
            connections.extend(self.by_type(connection_type))
        return connections

    def __len__(self) -> int:
        return len(self.all())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "categorical_filters": [c.to_dict() for c in self.categorical_filters],
            "searchable_search": [c.to_dict() for c in self.searchable_search],
            "numerical_filters": [c.to_dict() for c in self.numerical_filters],
            "sortable_sort": [c.to_dict() for c in self.sortable_sort],
        }


@dataclass
class MatchingWeights:
    """
    Confidence weights and thresholds for the ConnectionMatcher.
    """

    min_confidence: float = 0.2
    """Pairs must score strictly above this to be kept."""

    min_samples: int = 3
    """A field needs this many non-empty samples to be paired at all."""

    test_value_count: int = 3
    """How many field values a categorical/search connection carries."""

    # --- categorical_filter ---
    categorical_base: float = 0.4
    categorical_dropdown_bonus: float = 0.3
    categorical_checkbox_bonus: float = 0.2
    categorical_name_in_selector_bonus: float = 0.3
    categorical_distinct_bonus: float = 0.1
    categorical_distinct_range: Tuple[int, int] = (2, 20)

    # --- searchable_search ---
    search_base: float = 0.5
    search_type_bonus: float = 0.3
    search_name_bonus: float = 0.2
    search_length_bonus: float = 0.1
    search_length_range: Tuple[float, float] = (3, 50)

    # --- numerical_filter / sortable_sort ---
    numerical_confidence: float = 0.7
    numerical_control_types: Tuple[str, ...] = ("slider", "dropdown")
    sortable_confidence: float = 0.8
    sort_directions: Tuple[str, ...] = ("asc", "desc")
