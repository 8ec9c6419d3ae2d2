import math
import re
from typing import Any, List, Optional


class ValueDetector:
    """
    Stateless helpers that look at single cell values from a tabular export.

    Every value coming out of a delimited file is text, so detection works
    on the stripped string form: numbers are anything ``float()`` accepts
    (finite only), dates are checked against a small fixed pattern set.
    """

    # Ordered: the first matching pattern names the format.
    DATE_PATTERNS = [
        ("YYYY-MM-DD", re.compile(r"^\d{4}-\d{2}-\d{2}$")),
        ("MM/DD/YYYY", re.compile(r"^\d{2}/\d{2}/\d{4}$")),
        ("ISO", re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")),
    ]

    UNKNOWN_FORMAT = "unknown"

    @classmethod
    def to_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and math.isnan(value):
            # pandas hands back NaN for blank cells unless told otherwise
            return ""
        return str(value).strip()

    @classmethod
    def parse_number(cls, value: Any) -> Optional[float]:
        """
        Parse a value as a finite float.

        Args:
            value: Raw cell value (usually a string)

        Returns:
            The float value, or None if the value is not numeric.
        """
        if isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            number = float(value)
        else:
            text = cls.to_text(value)
            if not text:
                return None
            try:
                number = float(text)
            except ValueError:
                return None

        if math.isnan(number) or math.isinf(number):
            return None
        return number

    @classmethod
    def is_date(cls, value: Any) -> bool:
        text = cls.to_text(value)
        return any(pattern.match(text) for _, pattern in cls.DATE_PATTERNS)

    @classmethod
    def detect_date_format(cls, value: Any) -> str:
        """
        Name the date format of a single value.

        Returns:
            "YYYY-MM-DD", "MM/DD/YYYY", "ISO" or "unknown".
        """
        text = cls.to_text(value)
        for name, pattern in cls.DATE_PATTERNS:
            if pattern.match(text):
                return name
        return cls.UNKNOWN_FORMAT

    @classmethod
    def numeric_share(cls, values: List[str]) -> float:
        """Fraction of values that parse as numbers (0.0 for no values)."""
        if not values:
            return 0.0
        parsed = sum(1 for v in values if cls.parse_number(v) is not None)
        return parsed / len(values)

    @classmethod
    def format_number(cls, number: float) -> str:
        """
        Render a number the way it would be typed into a UI control.

        Examples:
            3.0   → "3"
            12.25 → "12.25"
        """
        if float(number).is_integer():
            return str(int(number))
        return repr(float(number))
