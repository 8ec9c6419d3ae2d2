# ==============================================
# Snapshot Helpers
# ==============================================
#
# PURPOSE:
#   Turn a markup snapshot into a queryable BeautifulSoup tree and
#   provide the element-level helpers every detection strategy shares:
#   selector building, accessible labels and row-count extraction.
#
# FUNCTIONS:
# ----------
# - parse_snapshot(snapshot) -> Tag | None
#     str / bytes are parsed with "html.parser"; a BeautifulSoup tree
#     is used as-is and a single element handle is re-parsed so the
#     element itself is searchable. None when the snapshot holds no
#     element at all.
#
# - build_selector(tag) -> str
#     Priority: #id → [data-testid] → [aria-label] → tag[name]
#               → button:has-text("...") → stable class
#     Returns "" when nothing stable identifies the element.
#
# - is_generated_class(name) -> bool
#     css-1x2y3z, jss12, sc-AbCdE, makeStyles-root-7 ...
#
# - option_values(tags) -> tuple[str, ...]
#     Visible option texts, minus placeholder and disabled entries.
# - accessible_label(tag, root) -> str | None
# - normalize_label(text) -> str
# - extract_row_count(text) -> int | None
#     "N of M" → N, "N rows|results|records|items" → N, "Total: N" → N
# - context_text(tag) -> str
#     Text of the neighbouring siblings (tag and its parent).
#
# ==============================================

import re
from typing import Any, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

_CSS_IDENTIFIER = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")

GENERATED_CLASS_PATTERNS = [
    re.compile(r"^css-[a-z0-9]+(-.*)?$", re.IGNORECASE),  # emotion
    re.compile(r"^jss\d+$"),  # JSS
    re.compile(r"^sc-[A-Za-z0-9]+$"),  # styled-components
    re.compile(r"^[A-Za-z]+-[A-Za-z]+-\d+$"),  # makeStyles-root-7
    re.compile(r"\d{2,}$"),  # anything ending in a counter
]

ROW_COUNT_PATTERNS = [
    re.compile(r"(\d[\d,]*)\s+of\s+(\d[\d,]*)", re.IGNORECASE),
    re.compile(r"(\d[\d,]*)\s+(?:rows|results|records|items)\b", re.IGNORECASE),
    re.compile(r"total\s*:?\s*(\d[\d,]*)", re.IGNORECASE),
]

BUTTON_TEXT_MAX_LENGTH = 60


# ======================================
# Parsing
# ======================================
def parse_snapshot(snapshot: Any) -> Optional[Tag]:
    """
    Normalize a snapshot into a BeautifulSoup tree.

    Args:
        snapshot: Markup text, raw bytes, or an already parsed Tag

    Returns:
        The root Tag, or None when the snapshot is empty or contains
        no element at all.
    """
    if snapshot is None:
        return None

    if isinstance(snapshot, BeautifulSoup):
        root = snapshot
    elif isinstance(snapshot, Tag):
        # find_all only searches descendants
        root = BeautifulSoup(str(snapshot), "html.parser")
    elif isinstance(snapshot, (str, bytes)):
        if isinstance(snapshot, bytes):
            snapshot = snapshot.decode("utf-8", errors="replace")
        if not snapshot.strip():
            return None
        root = BeautifulSoup(snapshot, "html.parser")
    else:
        raise TypeError(f"Unsupported snapshot type: {type(snapshot).__name__}")

    if root.find(True) is None and root.name in ("[document]", None):
        return None
    return root


# ======================================
# Selectors
# ======================================
def quote_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def is_generated_class(name: str) -> bool:
    return any(pattern.search(name) for pattern in GENERATED_CLASS_PATTERNS)


def stable_classes(tag: Tag) -> List[str]:
    """Class names usable in a selector: valid CSS identifiers that are not generated."""
    return [
        cls for cls in tag.get("class", [])
        if _CSS_IDENTIFIER.match(cls) and not is_generated_class(cls)
    ]


def build_selector(tag: Tag, allow_class: bool = True, allow_text: bool = True) -> str:
    """
    Build the most stable locator available for an element.

    Args:
        tag: The element
        allow_class: Whether a stable class may be used as a last resort
        allow_text: Whether a button may be located by its visible text

    Returns:
        A CSS / Playwright selector, or "" when nothing identifies the element.
    """
    element_id = (tag.get("id") or "").strip()
    if element_id:
        if _CSS_IDENTIFIER.match(element_id):
            return f"#{element_id}"
        return f'[id="{quote_value(element_id)}"]'

    test_id = (tag.get("data-testid") or "").strip()
    if test_id:
        return f'[data-testid="{quote_value(test_id)}"]'

    aria_label = (tag.get("aria-label") or "").strip()
    if aria_label:
        return f'[aria-label="{quote_value(aria_label)}"]'

    name = (tag.get("name") or "").strip()
    if name:
        return f'{tag.name}[name="{quote_value(name)}"]'

    if allow_text and is_button_like(tag):
        text = visible_text(tag)
        if text and len(text) <= BUTTON_TEXT_MAX_LENGTH:
            return f'button:has-text("{quote_value(text)}")' if tag.name == "button" \
                else f'{tag.name}:has-text("{quote_value(text)}")'

    if allow_class:
        classes = stable_classes(tag)
        if classes:
            return f".{classes[0]}"

    return ""


def is_button_like(tag: Tag) -> bool:
    return tag.name == "button" or (tag.get("role") or "").lower() == "button"


# ======================================
# Text and labels
# ======================================
def visible_text(tag: Tag) -> str:
    return " ".join(tag.get_text(" ", strip=True).split())


def is_placeholder_option(tag: Tag) -> bool:
    """An option with an explicit empty value, or one the user cannot pick."""
    value = tag.get("value", tag.get("data-value"))
    if value is not None and not value.strip():
        return True
    return tag.has_attr("disabled") or (tag.get("aria-disabled") or "").lower() == "true"


def option_values(tags: Iterable[Tag]) -> Tuple[str, ...]:
    return tuple(
        text for text in (visible_text(t) for t in tags if not is_placeholder_option(t)) if text
    )


def normalize_label(text: Optional[str]) -> str:
    """
    Lowercase, collapse whitespace, drop trailing colons.

    Examples:
        "  Breed:  " → "breed"
        "Filter   By Breed" → "filter by breed"
    """
    if not text:
        return ""
    return " ".join(text.split()).rstrip(":").strip().lower()


def accessible_label(tag: Tag, root: Optional[Tag] = None) -> Optional[str]:
    """
    Resolve the accessible name of an element.

    Order: aria-label, aria-labelledby target, <label for=id>, wrapping
    <label>, title. Returns None when the element has no accessible name.
    """
    aria_label = (tag.get("aria-label") or "").strip()
    if aria_label:
        return aria_label

    if root is not None:
        labelled_by = (tag.get("aria-labelledby") or "").strip()
        if labelled_by:
            target = root.find(id=labelled_by.split()[0])
            if target is not None and visible_text(target):
                return visible_text(target)

        element_id = (tag.get("id") or "").strip()
        if element_id:
            label = root.find("label", attrs={"for": element_id})
            if label is not None and visible_text(label):
                return visible_text(label)

    wrapping = tag.find_parent("label")
    if wrapping is not None:
        text = visible_text(wrapping)
        if text:
            return text

    title = (tag.get("title") or "").strip()
    return title or None


# ======================================
# Row counts
# ======================================
def extract_row_count(text: str) -> Optional[int]:
    """
    Find a row count in free text.

    Examples:
        "Showing 10 of 250" → 10
        "42 results"        → 42
        "Total: 7"          → 7
    """
    if not text:
        return None
    for pattern in ROW_COUNT_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1).replace(",", ""))
    return None


def context_text(tag: Tag, siblings: int = 2) -> str:
    """Collect text from the element's and its parent's nearby sibling elements."""
    chunks: List[str] = []
    node = tag
    for _ in range(2):
        if node is None:
            break
        for sibling in list(node.find_previous_siblings(True, limit=siblings)) + \
                list(node.find_next_siblings(True, limit=siblings)):
            if isinstance(sibling, Tag) and sibling.name not in ("table", "script", "style"):
                chunks.append(visible_text(sibling))
        node = node.parent if isinstance(node.parent, Tag) else None
    return " ".join(c for c in chunks if c)
