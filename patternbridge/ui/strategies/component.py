# ==============================================
# ComponentFrameworkStrategy
# ==============================================
#
# PURPOSE:
#   Second detection layer. Rendered widget libraries (Material UI,
#   Ant Design) rarely use native controls; their role is signalled by
#   root class names and ARIA roles instead.
#
# RULES (first match wins per element):
# -------------------------------------
#   Material UI  : MuiSelect / MuiAutocomplete  → filter dropdown
#                  MuiCheckbox / MuiRadio        → filter checkbox / radio
#                  MuiSlider                     → filter slider
#                  MuiTextField (search hint)    → search
#                  MuiTable / MuiDataGrid        → table
#                  MuiTableSortLabel             → sortable header
#                  MuiPagination / MuiTablePagination → pagination
#                  MuiButton / MuiIconButton     → button / icon
#   Ant Design   : ant-select, ant-checkbox-wrapper, ant-radio-wrapper,
#                  ant-slider, ant-input-search, ant-table,
#                  ant-table-column-has-sorters, ant-pagination, ant-btn
#   ARIA roles   : combobox/listbox, checkbox, radio, slider, searchbox,
#                  grid/table, columnheader[aria-sort], navigation
#                  (pagination), button
#
# SELECTORS:
# ----------
#   aria-label / data-testid / id (on the element, then on its inner
#   control) always win. The library root class is used only when it
#   is unique in the snapshot. Generated classes are never used.
#
# ==============================================

import logging
import re
from typing import List, NamedTuple, Optional, Tuple

from bs4 import Tag

from ..descriptors import UIElementDescriptor, UIRole
from ..snapshot import (
    accessible_label,
    build_selector,
    context_text,
    extract_row_count,
    is_generated_class,
    option_values,
    quote_value,
    visible_text,
)
from .base import DetectionStrategy

logger = logging.getLogger(__name__)


class ComponentRule(NamedTuple):
    classes: Tuple[str, ...]  # Library root classes (exact match)
    aria_roles: Tuple[str, ...]
    role: UIRole
    control_type: str


RULES = [
    # --- Filters ---
    ComponentRule(("MuiSelect-root", "MuiSelect-select", "MuiAutocomplete-root", "ant-select"),
                  ("combobox", "listbox"), UIRole.FILTER, "dropdown"),
    ComponentRule(("MuiCheckbox-root", "ant-checkbox-wrapper"),
                  ("checkbox",), UIRole.FILTER, "checkbox"),
    ComponentRule(("MuiRadio-root", "ant-radio-wrapper"),
                  ("radio", "radiogroup"), UIRole.FILTER, "radio"),
    ComponentRule(("MuiSlider-root", "ant-slider"),
                  ("slider",), UIRole.FILTER, "slider"),
    # --- Search ---
    ComponentRule(("ant-input-search",), ("searchbox",), UIRole.SEARCH, "search"),
    ComponentRule(("MuiTextField-root",), (), UIRole.SEARCH, "text"),
    # --- Tables ---
    ComponentRule(("MuiTable-root", "MuiDataGrid-root", "ant-table"),
                  ("grid", "table"), UIRole.TABLE, "table"),
    ComponentRule(("MuiTableSortLabel-root", "ant-table-column-has-sorters"),
                  (), UIRole.SORTABLE, "header"),
    # --- Pagination ---
    ComponentRule(("MuiPagination-root", "MuiTablePagination-root", "ant-pagination"),
                  (), UIRole.PAGINATION, "pagination"),
    # --- Buttons ---
    ComponentRule(("MuiIconButton-root",), (), UIRole.BUTTON, "icon"),
    ComponentRule(("MuiButton-root", "ant-btn"), ("button",), UIRole.BUTTON, "button"),
]

SEARCH_HINT = re.compile(r"search|find|query", re.IGNORECASE)
INNER_CONTROLS = ["input", "select", "textarea", "button"]


class ComponentFrameworkStrategy(DetectionStrategy):
    """
    Detects widget-library components by class convention and ARIA role.
    """

    name = "component"

    def detect(self, root: Tag) -> List[UIElementDescriptor]:
        found: List[UIElementDescriptor] = []

        for tag in root.find_all(True):
            rule = self._match_rule(tag)
            if rule is None:
                continue

            descriptor = self._describe(tag, rule, root)
            if descriptor is not None:
                found.append(descriptor)
        return found

    # ======================================
    # Rule matching
    # ======================================
    def _match_rule(self, tag: Tag) -> Optional[ComponentRule]:
        classes = set(tag.get("class", []))
        aria_role = (tag.get("role") or "").strip().lower()

        for rule in RULES:
            if classes.intersection(rule.classes):
                return rule

        # Pure ARIA only applies to elements that are not native controls;
        # those belong to the native layer
        if tag.name in ("select", "input", "table", "button", "th"):
            return None

        if aria_role == "columnheader":
            if tag.get("aria-sort") is not None:
                return ComponentRule((), (), UIRole.SORTABLE, "header")
            return None
        if aria_role == "navigation" and "pagination" in (tag.get("aria-label") or "").lower():
            return ComponentRule((), (), UIRole.PAGINATION, "pagination")

        for rule in RULES:
            if aria_role and aria_role in rule.aria_roles:
                return rule
        return None

    # ======================================
    # Descriptor building
    # ======================================
    def _describe(self, tag: Tag, rule: ComponentRule, root: Tag) -> Optional[UIElementDescriptor]:
        inner = tag.find(INNER_CONTROLS)
        label = self._label(tag, inner, root)
        placeholder = None
        if inner is not None:
            placeholder = (inner.get("placeholder") or "").strip() or None

        control_type = rule.control_type
        if rule.role == UIRole.SEARCH:
            hints = " ".join(filter(None, [label, placeholder]))
            if control_type == "text" and not SEARCH_HINT.search(hints):
                # A plain text field is not a search box
                return None
            if inner is not None and (inner.get("type") or "").lower() == "search":
                control_type = "search"

        selector = self._selector(tag, inner, rule, root)

        columns: Tuple[str, ...] = ()
        row_count = 0
        options: Tuple[str, ...] = ()
        sortable_fields: Tuple[str, ...] = ()

        if rule.role == UIRole.TABLE:
            columns = self._columns(tag)
            if not columns:
                logger.debug("Skipping component table without header cells: %s", selector)
                return None
            row_count = self._row_count(tag)
        elif rule.role == UIRole.FILTER:
            options = option_values(tag.find_all(attrs={"role": "option"}))
        elif rule.role == UIRole.SORTABLE:
            text = visible_text(tag)
            if not text:
                return None
            label = label or text
            sortable_fields = (text,)

        return UIElementDescriptor(
            selector=selector,
            role=rule.role,
            control_type=control_type,
            label=label,
            placeholder=placeholder,
            options=options,
            columns=columns,
            row_count=row_count,
            sortable_fields=sortable_fields,
            source=self.name,
        )

    def _label(self, tag: Tag, inner: Optional[Tag], root: Tag) -> Optional[str]:
        label = accessible_label(tag, root)
        if label:
            return label
        if inner is not None:
            label = accessible_label(inner, root)
            if label:
                return label

        # Material UI renders the field label as a sibling <label> inside the root
        label_tag = tag.find("label")
        if label_tag is not None and visible_text(label_tag):
            return visible_text(label_tag)

        if tag.name == "button" or (tag.get("role") or "").lower() == "button" \
                or "MuiButton-root" in tag.get("class", []) or "ant-btn" in tag.get("class", []):
            return visible_text(tag) or None
        return None

    def _selector(self, tag: Tag, inner: Optional[Tag], rule: ComponentRule, root: Tag) -> str:
        selector = build_selector(tag, allow_class=False, allow_text=False)
        if selector:
            return selector

        if inner is not None:
            selector = build_selector(inner, allow_class=False, allow_text=False)
            if selector:
                return selector

        if rule.role == UIRole.BUTTON:
            selector = build_selector(tag, allow_class=False)
            if selector:
                return selector

        # Library root class, only when it identifies exactly one element
        for cls in tag.get("class", []):
            if cls in rule.classes and not is_generated_class(cls):
                if len(root.find_all(class_=cls)) == 1:
                    return f".{cls}"
                break

        text = visible_text(tag)
        if rule.role == UIRole.SORTABLE and text:
            return f'[role="columnheader"]:has-text("{quote_value(text)}")' \
                if (tag.get("role") or "") == "columnheader" else f'th:has-text("{quote_value(text)}")'
        return ""

    def _columns(self, tag: Tag) -> Tuple[str, ...]:
        headers = tag.find_all(attrs={"role": "columnheader"}) or tag.find_all("th")
        return tuple(text for text in (visible_text(h) for h in headers) if text)

    def _row_count(self, tag: Tag) -> int:
        count = extract_row_count(context_text(tag))
        if count is not None:
            return count

        # Pagination footers often live inside the table component
        for footer in tag.find_all(class_=re.compile(r"pagination|footer", re.IGNORECASE)):
            count = extract_row_count(visible_text(footer))
            if count is not None:
                return count

        rows = tag.find_all(attrs={"role": "row"}) or tag.find_all("tr")
        return sum(1 for row in rows if row.find(attrs={"role": "columnheader"}) is None
                   and row.find("th") is None)
