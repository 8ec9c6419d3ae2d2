# ==============================================
# UI Descriptors (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of UI classification.
#
# ENUMS:
# ------
# - UIRole(Enum): FILTER, SEARCH, TABLE, SORTABLE, PAGINATION,
#                 BUTTON, FORM
#
# CLASSES:
# --------
# - UIElementDescriptor (frozen dataclass)
#     One classified interactive or display element. Role-specific
#     attributes that do not apply stay None/empty.
#
#     control_type by role:
#       filter     → dropdown | checkbox | radio | slider
#       search     → search | text
#       table      → table
#       sortable   → header
#       pagination → pagination | load_more
#       button     → button | submit | link | icon
#       form       → form
#
# - UIPatterns (dataclass)
#     Seven descriptor lists + a usable flag.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

INVALID_SELECTORS = {"", "undefined"}


class UIRole(Enum):
    """
    Role a UI element plays for functional testing.
    """
    FILTER = "filter"
    SEARCH = "search"
    TABLE = "table"
    SORTABLE = "sortable"
    PAGINATION = "pagination"
    BUTTON = "button"
    FORM = "form"


def is_valid_selector(selector: Optional[str]) -> bool:
    """True for a non-empty locator that is not the literal "undefined"."""
    if selector is None:
        return False
    return selector.strip() not in INVALID_SELECTORS


@dataclass(frozen=True)
class UIElementDescriptor:
    """
    Classified profile of one element in a rendered interface.
    """

    selector: str
    role: UIRole
    control_type: str

    # --- Human-readable identity ---
    label: Optional[str] = None  # Accessible name or visible text
    placeholder: Optional[str] = None

    # --- Role-specific ---
    options: Tuple[str, ...] = ()  # filter option labels
    columns: Tuple[str, ...] = ()  # table header names
    row_count: int = 0  # table rows (best effort)
    sortable_fields: Tuple[str, ...] = ()  # sortable header text
    inputs: Tuple[str, ...] = ()  # form input selectors
    submit_button: Optional[str] = None  # form submit selector

    source: str = ""  # Name of the detection layer that produced it

    @property
    def is_valid(self) -> bool:
        return is_valid_selector(self.selector)

    @property
    def display_text(self) -> Optional[str]:
        """
        Best human-readable text for the element, or None.

        Tables without a label fall back to their column names.
        """
        for text in (self.label, self.placeholder):
            if text and text.strip():
                return text.strip()
        if self.columns:
            return ", ".join(self.columns)
        if self.sortable_fields:
            return ", ".join(self.sortable_fields)
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "selector": self.selector,
            "role": self.role.value,
            "type": self.control_type,
        }
        optional = {
            "label": self.label,
            "placeholder": self.placeholder,
            "options": list(self.options),
            "columns": list(self.columns),
            "row_count": self.row_count if self.role == UIRole.TABLE else None,
            "sortable_fields": list(self.sortable_fields),
            "inputs": list(self.inputs),
            "submit_button": self.submit_button,
        }
        # Only keep what applies to this element
        data.update({k: v for k, v in optional.items() if v not in (None, [])})
        data["source"] = self.source
        return data


@dataclass
class UIPatterns:
    """
    All UI descriptors from one classification pass, grouped by role.
    """
    filters: List[UIElementDescriptor] = field(default_factory=list)
    search: List[UIElementDescriptor] = field(default_factory=list)
    tables: List[UIElementDescriptor] = field(default_factory=list)
    sortable: List[UIElementDescriptor] = field(default_factory=list)
    pagination: List[UIElementDescriptor] = field(default_factory=list)
    buttons: List[UIElementDescriptor] = field(default_factory=list)
    forms: List[UIElementDescriptor] = field(default_factory=list)
    usable: bool = True  # False when the snapshot yielded no element at all

    def by_role(self, role: UIRole) -> List[UIElementDescriptor]:
        return {
            UIRole.FILTER: self.filters,
            UIRole.SEARCH: self.search,
            UIRole.TABLE: self.tables,
            UIRole.SORTABLE: self.sortable,
            UIRole.PAGINATION: self.pagination,
            UIRole.BUTTON: self.buttons,
            UIRole.FORM: self.forms,
        }[role]

    def add(self, descriptor: UIElementDescriptor) -> None:
        self.by_role(descriptor.role).append(descriptor)

    def all_elements(self) -> List[UIElementDescriptor]:
        elements: List[UIElementDescriptor] = []
        for role in UIRole:
            elements.extend(self.by_role(role))
        return elements

    def interactive_elements(self) -> List[UIElementDescriptor]:
        """Elements a user acts on: filters, search, sort headers, pagination, buttons, forms."""
        return (
            self.filters + self.search + self.sortable
            + self.pagination + self.buttons + self.forms
        )

    def data_components(self) -> List[UIElementDescriptor]:
        """Elements that display data (tables)."""
        return list(self.tables)

    def selectors(self) -> List[str]:
        return [e.selector for e in self.all_elements()]

    @property
    def is_empty(self) -> bool:
        return not self.all_elements()

    @classmethod
    def unusable(cls) -> "UIPatterns":
        return cls(usable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": [e.to_dict() for e in self.filters],
            "search": [e.to_dict() for e in self.search],
            "tables": [e.to_dict() for e in self.tables],
            "sortable": [e.to_dict() for e in self.sortable],
            "pagination": [e.to_dict() for e in self.pagination],
            "buttons": [e.to_dict() for e in self.buttons],
            "forms": [e.to_dict() for e in self.forms],
            "usable": self.usable,
        }
