# ==============================================
# ConnectionMatcher
# ==============================================
#
# PURPOSE:
#   Pair FieldDescriptors with UIElementDescriptors per connection-type
#   rule and score every pair. Stateless: descriptors in, Connections out.
#
# RULES:
# ------
#   categorical_filter : categorical fields × filters
#       base 0.4, +0.3 dropdown, +0.2 checkbox,
#       +0.3 field name in selector, +0.1 distinct count in [2, 20]
#       capped at 1.0; test values = first 3 distinct values
#
#   searchable_search  : searchable fields × search elements
#       base 0.5, +0.3 type "search", +0.2 name in selector/placeholder,
#       +0.1 mean length in [3, 50]; capped at 1.0
#       test values = first 3 samples
#
#   numerical_filter   : numerical fields × slider/dropdown filters
#       fixed 0.7; test values = [min, max]
#
#   sortable_sort      : sortable fields × sortable elements
#       fixed 0.8; test values = ["asc", "desc"]
#
#   Every pair is validated first (>= 3 samples, valid selector); only
#   pairs scoring above min_confidence are kept. No ranking happens here.
#
# ==============================================

import logging
from typing import Optional, Tuple

from ..data.descriptors import DataPatterns, FieldDescriptor
from ..data.value_detector import ValueDetector
from ..ui.descriptors import UIElementDescriptor, UIPatterns
from .connection import Connection, Connections, ConnectionType, MatchingWeights

logger = logging.getLogger(__name__)


class ConnectionMatcher:
    """
    Scores candidate pairings between data fields and UI elements.
    """

    def __init__(self, weights: MatchingWeights = None):
        self.weights = weights or MatchingWeights()

    def match(self, data: Optional[DataPatterns], ui: Optional[UIPatterns]) -> Connections:
        """
        Produce every connection that passes validation and the threshold.

        Args:
            data: Classified data fields (may be None or empty)
            ui: Classified UI elements (may be None, empty or unusable)

        Returns:
            Connections with one list per type, in field order then element order.
        """
        connections = Connections()
        if data is None or ui is None or data.is_empty or ui.is_empty:
            return connections

        for field_descriptor in data.categorical:
            for element in ui.filters:
                self._consider(connections, ConnectionType.CATEGORICAL_FILTER,
                               field_descriptor, element)

        for field_descriptor in data.searchable:
            for element in ui.search:
                self._consider(connections, ConnectionType.SEARCHABLE_SEARCH,
                               field_descriptor, element)

        for field_descriptor in data.numerical:
            for element in ui.filters:
                if element.control_type not in self.weights.numerical_control_types:
                    continue
                self._consider(connections, ConnectionType.NUMERICAL_FILTER,
                               field_descriptor, element)

        for field_descriptor in data.sortable:
            for element in ui.sortable:
                self._consider(connections, ConnectionType.SORTABLE_SORT,
                               field_descriptor, element)

        logger.debug("Matched %d connections", len(connections))
        return connections

    def _consider(
        self,
        connections: Connections,
        connection_type: ConnectionType,
        field_descriptor: FieldDescriptor,
        element: UIElementDescriptor
    ) -> None:
        if field_descriptor.sample_count < self.weights.min_samples:
            logger.debug("Skipping %s for %s: only %d samples", connection_type.value,
                         field_descriptor.name, field_descriptor.sample_count)
            return
        if not element.is_valid:
            logger.debug("Skipping %s for %s: invalid selector %r", connection_type.value,
                         field_descriptor.name, element.selector)
            return

        confidence, test_values = self.score(connection_type, field_descriptor, element)
        if not test_values:
            logger.debug("Skipping %s for %s: no test values", connection_type.value,
                         field_descriptor.name)
            return
        if confidence <= self.weights.min_confidence:
            return

        connections.by_type(connection_type).append(Connection(
            data_field=field_descriptor.name,
            ui_element=element.selector,
            connection_type=connection_type,
            confidence=confidence,
            test_values=test_values,
        ))

    # ======================================
    # Scoring
    # ======================================
    def score(
        self,
        connection_type: ConnectionType,
        field_descriptor: FieldDescriptor,
        element: UIElementDescriptor
    ) -> Tuple[float, Tuple[str, ...]]:
        """
        Score one pair without validating it.

        Returns:
            (confidence, test_values)
        """
        if connection_type == ConnectionType.CATEGORICAL_FILTER:
            return self._score_categorical(field_descriptor, element)
        if connection_type == ConnectionType.SEARCHABLE_SEARCH:
            return self._score_search(field_descriptor, element)
        if connection_type == ConnectionType.NUMERICAL_FILTER:
            return self._score_numerical(field_descriptor)
        return self.weights.sortable_confidence, tuple(self.weights.sort_directions)

    def _score_categorical(self, field_descriptor, element):
        w = self.weights
        confidence = w.categorical_base

        if element.control_type == "dropdown":
            confidence += w.categorical_dropdown_bonus
        elif element.control_type == "checkbox":
            confidence += w.categorical_checkbox_bonus

        if field_descriptor.name.lower() in element.selector.lower():
            confidence += w.categorical_name_in_selector_bonus

        low, high = w.categorical_distinct_range
        if low <= field_descriptor.unique_count <= high:
            confidence += w.categorical_distinct_bonus

        test_values = tuple(field_descriptor.values[:w.test_value_count])
        return round(min(confidence, 1.0), 6), test_values

    def _score_search(self, field_descriptor, element):
        w = self.weights
        confidence = w.search_base

        if element.control_type == "search":
            confidence += w.search_type_bonus

        search_text = f"{element.selector} {element.placeholder or ''}".lower()
        if field_descriptor.name.lower() in search_text:
            confidence += w.search_name_bonus

        low, high = w.search_length_range
        if field_descriptor.avg_length is not None and low <= field_descriptor.avg_length <= high:
            confidence += w.search_length_bonus

        test_values = tuple(field_descriptor.sample_values[:w.test_value_count])
        return round(min(confidence, 1.0), 6), test_values

    def _score_numerical(self, field_descriptor):
        if field_descriptor.minimum is None or field_descriptor.maximum is None:
            return self.weights.numerical_confidence, ()

        test_values = (
            ValueDetector.format_number(field_descriptor.minimum),
            ValueDetector.format_number(field_descriptor.maximum),
        )
        return self.weights.numerical_confidence, test_values
