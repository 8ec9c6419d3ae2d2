# ==============================================
# TestSynthesizer
# ==============================================
#
# PURPOSE:
#   Turn accepted connections into TestCase records. When there is no
#   tabular data at all, build cases from the UI descriptors alone
#   (degraded mode).
#
# CLASS: TestSynthesizer
# ----------------------
#   Constructor:
#   ------------
#   - __init__(options: SynthesisOptions = None,
#              ranker: AuxiliaryRanker = None)
#
#   Methods:
#   --------
#   - synthesize(connections, ui_patterns=None, field_summary=None)
#         -> list[TestCase]
#       One case per connection. Selectors = the connection's selector
#       plus the detected tables (result verification targets).
#       Duplicates are collapsed, the per-field limit applied, then the
#       optional ranker reorders the cases.
#
#   - synthesize_from_ui(ui_patterns) -> list[TestCase]
#       Degraded mode. One case per interactive element / data
#       component that has a valid selector AND readable text.
#
#   RULES:
#   ------
#   - Steps and expected results quote concrete test values only.
#   - A connection without a valid selector or without test values
#     (two for a numerical range) produces no case.
#   - Priority "high" when a filter/search case scores above
#     high_priority_confidence, else "medium".
#   - Ids are deterministic: <type>_<field>_<n>.
#   - A missing or failing ranker leaves the default order.
#
# ==============================================

import logging
import re
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from ..collaborators.ranking import AuxiliaryRanker
from ..matching.connection import Connection, Connections, ConnectionType
from ..ui.descriptors import UIElementDescriptor, UIPatterns, UIRole, is_valid_selector
from .test_case import (
    DATA_INTEGRITY,
    FILTER_TEST,
    HIGH,
    LOW,
    MEDIUM,
    NUMERICAL_FILTER_TEST,
    SEARCH_AND_FILTER,
    SEARCH_TEST,
    SORT_TEST,
    USER_INTERACTION,
    SynthesisOptions,
    TestCase,
)

logger = logging.getLogger(__name__)

_SLUG = re.compile(r"[^a-z0-9]+")


def _slug(text: str) -> str:
    return _SLUG.sub("_", text.lower()).strip("_") or "element"


def _case_id(test_type: str, key: str, n: int) -> str:
    """filter_test + breed + 1 → "filter_breed_1"."""
    prefix = test_type[:-len("_test")] if test_type.endswith("_test") else test_type
    return f"{prefix}_{key}_{n}"


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


def _is_synthesizable(connection: Connection) -> bool:
    if not is_valid_selector(connection.ui_element):
        return False
    values = [v for v in connection.test_values if str(v).strip()]
    if len(values) != len(connection.test_values) or not values:
        return False
    if connection.connection_type == ConnectionType.NUMERICAL_FILTER:
        return len(values) >= 2
    return True


class TestSynthesizer:
    """
    Builds concrete TestCases from connections or UI descriptors.
    """

    __test__ = False  # Not a pytest test class

    def __init__(self, options: SynthesisOptions = None, ranker: Optional[AuxiliaryRanker] = None):
        self.options = options or SynthesisOptions()
        self.ranker = ranker

    # ======================================
    # Connection mode
    # ======================================
    def synthesize(
        self,
        connections: Optional[Connections],
        ui_patterns: Optional[UIPatterns] = None,
        field_summary: Optional[Dict[str, List[str]]] = None
    ) -> List[TestCase]:
        """
        Build one TestCase per accepted connection.

        Args:
            connections: Output of the ConnectionMatcher
            ui_patterns: Detected UI elements; their tables become result
                         verification targets and they are handed to the ranker
            field_summary: Field name → category tags, for the ranker

        Returns:
            List of TestCases (empty when there are no connections)
        """
        if connections is None or connections.is_empty:
            return []

        verification_targets = [t.selector for t in ui_patterns.tables if t.is_valid] \
            if ui_patterns is not None else []

        counters: Counter = Counter()
        seen = set()
        cases: List[TestCase] = []

        for connection in connections.all():
            key = (connection.connection_type, connection.data_field, connection.ui_element)
            if key in seen:
                logger.debug("Collapsing duplicate %s case for %s on %s",
                             connection.connection_type.value, connection.data_field,
                             connection.ui_element)
                continue
            if not _is_synthesizable(connection):
                logger.info("Skipping %s connection for %s: unusable selector or test values",
                            connection.connection_type.value, connection.data_field)
                continue
            seen.add(key)

            cases.append(self._case_for_connection(connection, verification_targets, counters))

        cases = self._limit_per_field(cases)

        if field_summary is None:
            field_summary = defaultdict(list)
            for connection in connections.all():
                field_summary[connection.data_field].append(connection.connection_type.value)
            field_summary = dict(field_summary)

        elements = ui_patterns.all_elements() if ui_patterns is not None else []
        return self._apply_ranking(cases, elements, field_summary)

    def _case_for_connection(
        self,
        connection: Connection,
        verification_targets: List[str],
        counters: Counter
    ) -> TestCase:
        builders = {
            ConnectionType.CATEGORICAL_FILTER: self._filter_case,
            ConnectionType.SEARCHABLE_SEARCH: self._search_case,
            ConnectionType.NUMERICAL_FILTER: self._numerical_case,
            ConnectionType.SORTABLE_SORT: self._sort_case,
        }
        test_type, body = builders[connection.connection_type](connection)

        counters[(test_type, connection.data_field)] += 1
        n = counters[(test_type, connection.data_field)]

        return TestCase(
            id=_case_id(test_type, connection.data_field, n),
            selectors=_unique([connection.ui_element] + verification_targets),
            data_field=connection.data_field,
            test_values=connection.test_values,
            confidence=connection.confidence,
            test_type=test_type,
            **body,
        )

    def _priority(self, connection: Connection) -> str:
        if connection.confidence > self.options.high_priority_confidence:
            return HIGH
        return MEDIUM

    def _filter_case(self, connection: Connection):
        field = connection.data_field
        values = connection.test_values
        steps = [f"Open the {field} filter ({connection.ui_element})"]
        expected = []
        for value in values:
            steps.append(f"Select {field} value: {value}")
            steps.append(f"Verify every displayed record has {field} = {value}")
            expected.append(f"Only records with {field} = {value} are displayed")
        expected.append("The result count reflects the applied filter")

        return FILTER_TEST, dict(
            name=f"{field} Filter Test",
            description=f"Filter by {field} using the values {', '.join(values)}",
            category=SEARCH_AND_FILTER,
            priority=self._priority(connection),
            steps=tuple(steps),
            expected_results=tuple(expected),
        )

    def _search_case(self, connection: Connection):
        field = connection.data_field
        values = connection.test_values
        steps = [f"Focus the {field} search input ({connection.ui_element})"]
        expected = []
        for value in values:
            steps.append(f"Enter search query: {value}")
            steps.append("Submit the search")
            expected.append(f"Displayed results contain {value}")
        expected.append("Clearing the query restores the unfiltered results")

        return SEARCH_TEST, dict(
            name=f"{field} Search Test",
            description=f"Search by {field} using the values {', '.join(values)}",
            category=SEARCH_AND_FILTER,
            priority=self._priority(connection),
            steps=tuple(steps),
            expected_results=tuple(expected),
        )

    def _numerical_case(self, connection: Connection):
        field = connection.data_field
        low, high = connection.test_values[0], connection.test_values[-1]

        return NUMERICAL_FILTER_TEST, dict(
            name=f"{field} Numerical Filter Test",
            description=f"Filter {field} across its observed range {low} to {high}",
            category=SEARCH_AND_FILTER,
            priority=MEDIUM,
            steps=(
                f"Interact with the {field} filter ({connection.ui_element})",
                f"Set the filter to the minimum value: {low}",
                "Verify filtered results are displayed",
                f"Set the filter to the maximum value: {high}",
                "Verify filtered results are displayed",
            ),
            expected_results=(
                f"Setting {field} to {low} filters the displayed results",
                f"Setting {field} to {high} filters the displayed results",
            ),
        )

    def _sort_case(self, connection: Connection):
        field = connection.data_field
        steps = []
        expected = []
        for direction in connection.test_values:
            steps.append(f"Click the {field} header ({connection.ui_element}) to sort {direction}")
            steps.append(f"Verify rows are ordered by {field} {direction}")
            expected.append(f"Rows are ordered by {field} {direction}")

        return SORT_TEST, dict(
            name=f"{field} Sort Test",
            description=f"Sort by {field} in directions {', '.join(connection.test_values)}",
            category=DATA_INTEGRITY,
            priority=MEDIUM,
            steps=tuple(steps),
            expected_results=tuple(expected),
        )

    def _limit_per_field(self, cases: List[TestCase]) -> List[TestCase]:
        limit = self.options.max_cases_per_field
        if not limit or limit < 1:
            return cases

        by_field: Dict[str, List[TestCase]] = defaultdict(list)
        for case in cases:
            by_field[case.data_field].append(case)

        kept = set()
        for field_cases in by_field.values():
            # sorted() is stable: equal confidence keeps input order
            best = sorted(field_cases, key=lambda c: -(c.confidence or 0.0))[:limit]
            kept.update(c.id for c in best)

        dropped = len(cases) - len(kept)
        if dropped:
            logger.info("Dropped %d cases over the per-field limit of %d", dropped, limit)
        return [c for c in cases if c.id in kept]

    # ======================================
    # Degraded mode (UI only)
    # ======================================
    def synthesize_from_ui(self, ui_patterns: Optional[UIPatterns]) -> List[TestCase]:
        """
        Build cases from UI descriptors alone, when no tabular data exists.

        Args:
            ui_patterns: Detected UI elements

        Returns:
            One case per element carrying a valid selector and readable
            text. Test values come from the element itself or stay empty.
        """
        if ui_patterns is None or ui_patterns.is_empty:
            return []

        counters: Counter = Counter()
        cases: List[TestCase] = []
        for element in ui_patterns.interactive_elements() + ui_patterns.data_components():
            if not element.is_valid:
                logger.info("Skipping %s element: invalid selector %r",
                            element.role.value, element.selector)
                continue

            text = element.display_text
            if not text:
                logger.info("Skipping %s element %s: no readable label or text",
                            element.role.value, element.selector)
                continue

            cases.append(self._case_for_element(element, text, counters))

        return self._apply_ranking(cases, ui_patterns.all_elements(), {})

    def _case_for_element(self, element: UIElementDescriptor, text: str, counters: Counter) -> TestCase:
        role = element.role
        test_type = f"ui_{role.value}_test"
        slug = _slug(text)
        counters[(test_type, slug)] += 1

        selectors = [element.selector]
        test_values: Tuple[str, ...] = ()
        category = USER_INTERACTION
        priority = LOW

        if role == UIRole.FILTER:
            test_values = element.options[:3]
            steps = [f"Open the {text} filter ({element.control_type})"]
            steps += [f"Select option: {option}" for option in test_values]
            steps.append("Verify the displayed results update")
            expected = ["The filter accepts each option", "Displayed results change with the selection"]
            category, priority = SEARCH_AND_FILTER, MEDIUM
        elif role == UIRole.SEARCH:
            steps = [f"Focus the {text} search input", "Submit a query", "Verify results are displayed"]
            expected = ["The search input accepts text", "Results or an empty-state message are shown"]
            category, priority = SEARCH_AND_FILTER, MEDIUM
        elif role == UIRole.TABLE:
            test_values = element.columns
            steps = [f"Locate the {text} table" if element.label else "Locate the data table",
                     f"Verify the columns are displayed: {', '.join(element.columns)}"]
            if element.row_count:
                steps.append(f"Verify {element.row_count} rows are reported")
            expected = [f"Column {column} is visible" for column in element.columns]
            category, priority = DATA_INTEGRITY, MEDIUM
        elif role == UIRole.SORTABLE:
            steps = [f"Click the {text} header", "Click the header again",
                     "Verify the row order changes between clicks"]
            expected = [f"Rows can be reordered by {text}"]
            category = DATA_INTEGRITY
        elif role == UIRole.PAGINATION:
            steps = [f"Use the {text} control ({element.control_type})",
                     "Verify a different set of rows is displayed"]
            expected = ["Navigation between result pages works"]
            category = DATA_INTEGRITY
        elif role == UIRole.FORM:
            selectors += list(element.inputs)
            if element.submit_button:
                selectors.append(element.submit_button)
            steps = [f"Fill in the {len(element.inputs)} inputs of the {text} form", "Submit the form"]
            expected = ["The form submits without errors"]
        else:
            steps = [f"Click the {text} button", "Verify the page responds"]
            expected = [f"The {text} button is clickable"]

        return TestCase(
            id=_case_id(test_type, slug, counters[(test_type, slug)]),
            name=f"{text} {role.value.capitalize()} Test",
            description=f"Exercise the {text} {role.value} detected in the interface",
            test_type=test_type,
            category=category,
            priority=priority,
            steps=tuple(steps),
            selectors=_unique(selectors),
            data_field=None,
            test_values=tuple(test_values),
            expected_results=tuple(expected),
            confidence=None,
        )

    # ======================================
    # Ranking
    # ======================================
    def _apply_ranking(
        self,
        cases: List[TestCase],
        elements: List[UIElementDescriptor],
        field_summary: Dict[str, List[str]]
    ) -> List[TestCase]:
        if self.ranker is None or not cases:
            return cases

        try:
            order = list(self.ranker.rank(elements, field_summary) or [])
        except Exception:
            logger.warning("Auxiliary ranker failed; keeping default case order", exc_info=True)
            return cases

        positions = {}
        for position, selector in enumerate(order):
            positions.setdefault(selector, position)

        # Stable: unranked cases keep their relative order after the ranked ones
        return sorted(cases, key=lambda c: positions.get(c.primary_selector, len(positions)))
