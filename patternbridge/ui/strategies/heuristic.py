# ==============================================
# HeuristicTextStrategy
# ==============================================
#
# PURPOSE:
#   Last-resort detection layer for custom markup. Looks for short
#   role-indicating phrases and attaches them to the nearest control,
#   and for div-based grids whose header cells use a known column
#   vocabulary.
#
# PHRASES:
# --------
#   filter : "Filter By", "Select", "Choose", "Options", "Categories"
#   search : "Search", "Find", "Query", "Look for"
#
#   A phrase counts only in short text (a label, not a paragraph) and
#   only when a control sits in the same container or one level up.
#   Filters attach to a <select> or a checkbox / radio / range input;
#   text boxes and buttons never become filters.
#
# GRIDS:
# ------
#   A non-table element whose children are header cells, at least two
#   of them from COLUMN_VOCABULARY, is the header row of a grid. Its
#   parent is the grid; the other children of the parent are rows.
#
# ==============================================

import logging
import re
from typing import List, Optional

from bs4 import NavigableString, Tag

from ..descriptors import UIElementDescriptor, UIRole
from ..snapshot import build_selector, context_text, extract_row_count, visible_text
from .base import DetectionStrategy

logger = logging.getLogger(__name__)

FILTER_PHRASES = ("Filter By", "Select", "Choose", "Options", "Categories")
SEARCH_PHRASES = ("Search", "Find", "Query", "Look for")
COLUMN_VOCABULARY = (
    "Case ID", "Study Code", "Patient ID", "Name", "Date", "Status", "Type", "Category",
)

CHOICE_INPUT_TYPES = {"checkbox": "checkbox", "radio": "radio", "range": "slider"}

MAX_PHRASE_TEXT_LENGTH = 60
MIN_VOCABULARY_HITS = 2
IGNORED_PARENTS = ("script", "style", "option", "button", "title", "noscript")


def _phrase_pattern(phrases) -> re.Pattern:
    return re.compile(r"\b(?:" + "|".join(re.escape(p) for p in phrases) + r")\b", re.IGNORECASE)


class HeuristicTextStrategy(DetectionStrategy):
    """
    Detects controls from nearby role-indicating text and div-based grids.
    """

    name = "heuristic"

    FILTER_PATTERN = _phrase_pattern(FILTER_PHRASES)
    SEARCH_PATTERN = _phrase_pattern(SEARCH_PHRASES)

    def detect(self, root: Tag) -> List[UIElementDescriptor]:
        descriptors: List[UIElementDescriptor] = []
        descriptors.extend(self._detect_labelled_controls(root))
        descriptors.extend(self._detect_grids(root))
        return descriptors

    # ======================================
    # Phrase → control
    # ======================================
    def _detect_labelled_controls(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for text_node in root.find_all(string=True):
            if not isinstance(text_node, NavigableString) or text_node.parent is None:
                continue
            if text_node.parent.name in IGNORED_PARENTS:
                continue

            text = " ".join(str(text_node).split())
            if not text or len(text) > MAX_PHRASE_TEXT_LENGTH:
                continue

            if self.SEARCH_PATTERN.search(text):
                descriptor = self._search_for(text_node.parent, text)
            elif self.FILTER_PATTERN.search(text):
                descriptor = self._filter_for(text_node.parent, text)
            else:
                continue

            if descriptor is not None:
                found.append(descriptor)
        return found

    def _nearest_control(self, anchor: Tag, names) -> Optional[Tag]:
        container = anchor
        for _ in range(2):
            if container is None:
                break
            control = container.find(names)
            if control is not None and (control.get("type") or "").lower() != "hidden":
                return control
            container = container.parent
        return None

    def _filter_for(self, anchor: Tag, text: str) -> Optional[UIElementDescriptor]:
        control = self._nearest_control(anchor, ["select", "input"])
        if control is None:
            return None

        if control.name == "select":
            control_type = "dropdown"
        else:
            control_type = CHOICE_INPUT_TYPES.get((control.get("type") or "").lower())
            if control_type is None:
                logger.debug("Ignoring non-choice input near \"%s\"", text)
                return None

        return UIElementDescriptor(
            selector=build_selector(control),
            role=UIRole.FILTER,
            control_type=control_type,
            label=text.rstrip(":"),
            source=self.name,
        )

    def _search_for(self, anchor: Tag, text: str) -> Optional[UIElementDescriptor]:
        control = self._nearest_control(anchor, ["input", "textarea"])
        if control is None:
            return None

        input_type = (control.get("type") or "text").lower()
        if input_type not in ("text", "search") and control.name == "input":
            return None

        return UIElementDescriptor(
            selector=build_selector(control),
            role=UIRole.SEARCH,
            control_type="search" if input_type == "search" else "text",
            label=text.rstrip(":"),
            placeholder=(control.get("placeholder") or "").strip() or None,
            source=self.name,
        )

    # ======================================
    # Div-based grids
    # ======================================
    def _detect_grids(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        seen_grids = set()
        vocabulary = {v.lower() for v in COLUMN_VOCABULARY}

        for header_row in root.find_all(True):
            if header_row.name in ("table", "thead", "tbody", "tr") or header_row.find_parent("table"):
                continue

            cells = header_row.find_all(True, recursive=False)
            if len(cells) < MIN_VOCABULARY_HITS:
                continue

            columns = [visible_text(c) for c in cells]
            hits = sum(1 for c in columns if c.lower() in vocabulary)
            if hits < MIN_VOCABULARY_HITS:
                continue

            grid = header_row.parent
            if not isinstance(grid, Tag) or id(grid) in seen_grids:
                continue
            seen_grids.add(id(grid))

            selector = build_selector(grid)
            if not selector:
                logger.debug("Skipping div grid with columns %s: no stable selector", columns)
                continue

            found.append(UIElementDescriptor(
                selector=selector,
                role=UIRole.TABLE,
                control_type="table",
                label=grid.get("aria-label"),
                columns=tuple(c for c in columns if c),
                row_count=self._grid_row_count(grid, header_row),
                source=self.name,
            ))
        return found

    def _grid_row_count(self, grid: Tag, header_row: Tag) -> int:
        count = extract_row_count(context_text(grid))
        if count is not None:
            return count
        return sum(
            1 for row in grid.find_all(True, recursive=False)
            if row is not header_row and row.find(True) is not None
        )
