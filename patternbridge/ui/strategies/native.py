# ==============================================
# NativeMarkupStrategy
# ==============================================
#
# PURPOSE:
#   Highest-priority detection layer. Recognises standard HTML
#   controls structurally, without looking at widget-library classes.
#
# DETECTS:
# --------
#   filters    : <select>                      → dropdown
#                <input type=checkbox|radio>   → checkbox / radio
#                  (grouped by name, one descriptor per group)
#                <input type=range>            → slider
#   search     : <input type=search>           → search
#                text inputs whose placeholder / name / aria-label
#                mention "search"              → text
#   tables     : <table> with <th> header cells
#   sortable   : <th> carrying a sort-indicating class
#   forms      : <form> with its inputs and submit control
#   buttons    : <button>, <input type=button|submit>
#   pagination : .pagination containers, load-more controls
#
# ==============================================

import logging
import re
from collections import OrderedDict
from typing import List, Optional

from bs4 import Tag

from ..descriptors import UIElementDescriptor, UIRole
from ..snapshot import (
    accessible_label,
    build_selector,
    context_text,
    extract_row_count,
    option_values,
    quote_value,
    visible_text,
)
from .base import DetectionStrategy

logger = logging.getLogger(__name__)

SEARCH_HINTS = ("search",)
TEXT_INPUT_TYPES = ("", "text", "search")
BUTTON_INPUT_TYPES = ("button", "submit")
NON_FORM_INPUT_TYPES = ("hidden", "submit", "button", "reset", "image")
SORT_TOKENS = ("sort", "sortable", "sorting", "sorted")
NEGATED_SORT_TOKENS = ("no", "not", "non", "disabled", "off", "none")


def is_sort_class(name: str) -> bool:
    """sortable, sorting, sort-asc, th-sort ... but not unsortable, no-sort or sort-disabled."""
    tokens = re.split(r"[-_]", name.lower())
    if any(t in NEGATED_SORT_TOKENS for t in tokens):
        return False
    return any(t in SORT_TOKENS for t in tokens)


def _input_type(tag: Tag) -> str:
    return (tag.get("type") or "").strip().lower()


def _indexed(tag_name: str, index: int, total: int) -> str:
    """Positional fallback for elements nothing else identifies."""
    if total == 1:
        return tag_name
    return f"{tag_name} >> nth={index}"


class NativeMarkupStrategy(DetectionStrategy):
    """
    Detects standard interactive and display tags.
    """

    name = "native"

    def detect(self, root: Tag) -> List[UIElementDescriptor]:
        descriptors: List[UIElementDescriptor] = []
        descriptors.extend(self._detect_dropdowns(root))
        descriptors.extend(self._detect_choice_groups(root))
        descriptors.extend(self._detect_sliders(root))
        descriptors.extend(self._detect_search(root))
        descriptors.extend(self._detect_tables(root))
        descriptors.extend(self._detect_sortable_headers(root))
        descriptors.extend(self._detect_forms(root))
        descriptors.extend(self._detect_buttons(root))
        descriptors.extend(self._detect_pagination(root))
        return descriptors

    # ======================================
    # Filters
    # ======================================
    def _detect_dropdowns(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for select in root.find_all("select"):
            options = option_values(select.find_all("option"))
            found.append(UIElementDescriptor(
                selector=build_selector(select),
                role=UIRole.FILTER,
                control_type="dropdown",
                label=accessible_label(select, root) or select.get("name"),
                options=options,
                source=self.name,
            ))
        return found

    def _detect_choice_groups(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        groups = OrderedDict()  # (type, name) → inputs

        for tag in root.find_all("input"):
            input_type = _input_type(tag)
            if input_type not in ("checkbox", "radio"):
                continue

            name = (tag.get("name") or "").strip()
            if not name:
                # Unnamed inputs stand alone
                found.append(UIElementDescriptor(
                    selector=build_selector(tag),
                    role=UIRole.FILTER,
                    control_type=input_type,
                    label=accessible_label(tag, root),
                    source=self.name,
                ))
                continue
            groups.setdefault((input_type, name), []).append(tag)

        for (input_type, name), inputs in groups.items():
            options = tuple(
                label for label in
                (accessible_label(i, root) or (i.get("value") or "").strip() for i in inputs)
                if label
            )
            fieldset = inputs[0].find_parent("fieldset")
            legend = fieldset.find("legend") if fieldset is not None else None
            group_label = visible_text(legend) if legend is not None else name

            found.append(UIElementDescriptor(
                selector=f'input[name="{quote_value(name)}"]',
                role=UIRole.FILTER,
                control_type=input_type,
                label=group_label or name,
                options=options,
                source=self.name,
            ))
        return found

    def _detect_sliders(self, root: Tag) -> List[UIElementDescriptor]:
        return [
            UIElementDescriptor(
                selector=build_selector(tag),
                role=UIRole.FILTER,
                control_type="slider",
                label=accessible_label(tag, root) or tag.get("name"),
                source=self.name,
            )
            for tag in root.find_all("input")
            if _input_type(tag) == "range"
        ]

    # ======================================
    # Search
    # ======================================
    def _detect_search(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for tag in root.find_all("input"):
            input_type = _input_type(tag)
            if input_type not in TEXT_INPUT_TYPES:
                continue

            placeholder = (tag.get("placeholder") or "").strip() or None
            hints = " ".join(
                filter(None, [placeholder, tag.get("name"), tag.get("aria-label")])
            ).lower()
            if input_type != "search" and not any(h in hints for h in SEARCH_HINTS):
                continue

            found.append(UIElementDescriptor(
                selector=build_selector(tag),
                role=UIRole.SEARCH,
                control_type="search" if input_type == "search" else "text",
                label=accessible_label(tag, root),
                placeholder=placeholder,
                source=self.name,
            ))
        return found

    # ======================================
    # Tables
    # ======================================
    def _detect_tables(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        tables = root.find_all("table")
        for index, table in enumerate(tables):
            columns = tuple(
                text for text in (visible_text(th) for th in table.find_all("th")) if text
            )
            if not columns:
                logger.debug("Skipping table %d: no header cells", index)
                continue

            caption = table.find("caption")
            label = table.get("aria-label") or (visible_text(caption) if caption else None)

            found.append(UIElementDescriptor(
                selector=build_selector(table) or _indexed("table", index, len(tables)),
                role=UIRole.TABLE,
                control_type="table",
                label=label,
                columns=columns,
                row_count=self._row_count(table),
                source=self.name,
            ))
        return found

    def _row_count(self, table: Tag) -> int:
        caption = table.find("caption")
        texts = [visible_text(caption) if caption else "", context_text(table)]
        for text in texts:
            count = extract_row_count(text)
            if count is not None:
                return count

        body = table.find("tbody") or table
        return sum(1 for row in body.find_all("tr") if row.find("td") is not None)

    def _detect_sortable_headers(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for th in root.find_all("th"):
            classes = [c.lower() for c in th.get("class", [])]
            if not any(is_sort_class(c) for c in classes):
                continue

            text = visible_text(th)
            if not text:
                continue
            found.append(UIElementDescriptor(
                selector=build_selector(th, allow_class=False) or f'th:has-text("{quote_value(text)}")',
                role=UIRole.SORTABLE,
                control_type="header",
                label=text,
                sortable_fields=(text,),
                source=self.name,
            ))
        return found

    # ======================================
    # Forms and buttons
    # ======================================
    def _detect_forms(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        forms = root.find_all("form")
        for index, form in enumerate(forms):
            inputs = []
            for control in form.find_all(["input", "select", "textarea"]):
                if control.name == "input" and _input_type(control) in NON_FORM_INPUT_TYPES:
                    continue
                selector = build_selector(control)
                if selector and selector not in inputs:
                    inputs.append(selector)

            found.append(UIElementDescriptor(
                selector=build_selector(form) or _indexed("form", index, len(forms)),
                role=UIRole.FORM,
                control_type="form",
                label=form.get("aria-label") or form.get("name"),
                inputs=tuple(inputs),
                submit_button=self._submit_selector(form),
                source=self.name,
            ))
        return found

    def _submit_selector(self, form: Tag) -> Optional[str]:
        for control in form.find_all(["button", "input"]):
            control_type = _input_type(control)
            # A <button> without a type submits its form
            if control_type == "submit" or (control.name == "button" and not control_type):
                return build_selector(control) or None
        return None

    def _detect_buttons(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for tag in root.find_all(["button", "input"]):
            control_type = _input_type(tag)
            if tag.name == "input":
                if control_type not in BUTTON_INPUT_TYPES:
                    continue
                text = (tag.get("value") or "").strip()
                selector = build_selector(tag)
                if not selector and text:
                    selector = f'input[type="{control_type}"][value="{quote_value(text)}"]'
            else:
                text = visible_text(tag)
                selector = build_selector(tag)

            found.append(UIElementDescriptor(
                selector=selector,
                role=UIRole.BUTTON,
                control_type="submit" if control_type == "submit" else "button",
                label=text or tag.get("aria-label"),
                source=self.name,
            ))
        return found

    # ======================================
    # Pagination
    # ======================================
    def _detect_pagination(self, root: Tag) -> List[UIElementDescriptor]:
        found = []
        for tag in root.find_all(True):
            classes = " ".join(tag.get("class", [])).lower()
            aria_label = (tag.get("aria-label") or "").lower()

            if "pagination" in classes.split() or (tag.name == "nav" and "pagination" in aria_label):
                found.append(UIElementDescriptor(
                    selector=build_selector(tag),
                    role=UIRole.PAGINATION,
                    control_type="pagination",
                    label=tag.get("aria-label") or "pagination",
                    source=self.name,
                ))
                continue

            if tag.name in ("button", "a") and (
                "load-more" in classes or "load more" in visible_text(tag).lower()
            ):
                found.append(UIElementDescriptor(
                    selector=build_selector(tag),
                    role=UIRole.PAGINATION,
                    control_type="load_more",
                    label=visible_text(tag) or "load more",
                    source=self.name,
                ))
        return found
