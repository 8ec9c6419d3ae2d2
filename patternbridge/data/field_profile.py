# ==============================================
# FieldProfile
# ==============================================
#
# PURPOSE:
#   Data class that holds everything observed about one column of
#   the tabular export. This is the "evidence" that the
#   DataPatternClassifier uses to tag the field.
#
# CLASS: FieldProfile (dataclass)
# -------------------------------
#   Attributes:
#   -----------
#   - name: str                  → Column name (dot notation for nested keys)
#   - record_count: int          → How many records were observed in total
#   - presence_count: int        → How many records carried a non-empty value
#   - samples: list[str]         → Non-empty values, input order
#   - distinct_values: list[str] → Distinct non-empty values, first-seen order
#   - raw_values: list[str]      → One entry per record ("" when missing)
#   - numbers: list[float]       → Samples that parse as numbers
#
#   Computed Properties:
#   --------------------
#   - sample_count -> int
#   - distinct_count -> int
#   - unique_ratio -> float      (distinct / samples)
#   - avg_length -> float        (mean sample length)
#   - numeric_share -> float     (parseable / samples)
#   - is_required -> bool        (every record has a value)
#   - is_all_distinct -> bool    (every record's value is distinct)
#
#   Methods:
#   --------
#   - update(value) -> None      Observe one record's value
#   - mark_missing() -> None     Observe a record without this field
#   - to_dict() -> dict
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set

from .value_detector import ValueDetector


@dataclass
class FieldProfile:
    """
    Observed statistics for a single tabular field across a record set.
    """

    # --- Core identity ---
    name: str

    # --- Counters ---
    record_count: int = 0  # Records observed (with or without this field)
    presence_count: int = 0  # Records with a non-empty value

    # --- Values ---
    samples: List[str] = field(default_factory=list)
    distinct_values: List[str] = field(default_factory=list)
    raw_values: List[str] = field(default_factory=list)
    numbers: List[float] = field(default_factory=list)

    _seen: Set[str] = field(default_factory=set, repr=False)

    # ======================================
    # Update logic
    # ======================================
    def update(self, value: Any) -> None:
        """
        Observe the value one record holds for this field.

        Args:
            value: Raw cell value; None and blank strings count as empty
        """
        self.record_count += 1

        text = ValueDetector.to_text(value)
        self.raw_values.append(text)
        if not text:
            return

        self.presence_count += 1
        self.samples.append(text)

        if text not in self._seen:
            self._seen.add(text)
            self.distinct_values.append(text)

        number = ValueDetector.parse_number(text)
        if number is not None:
            self.numbers.append(number)

    def mark_missing(self) -> None:
        """Observe a record that does not carry this field at all."""
        self.update(None)

    # ======================================
    # Computed properties
    # ======================================
    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def distinct_count(self) -> int:
        return len(self.distinct_values)

    @property
    def unique_ratio(self) -> float:
        """
        Distinct non-empty values over non-empty samples.

        Returns:
            A value between 0.0 and 1.0; 0.0 when there are no samples.
        """
        if not self.samples:
            return 0.0
        return self.distinct_count / self.sample_count

    @property
    def avg_length(self) -> float:
        if not self.samples:
            return 0.0
        return sum(len(s) for s in self.samples) / self.sample_count

    @property
    def numeric_share(self) -> float:
        if not self.samples:
            return 0.0
        return len(self.numbers) / self.sample_count

    @property
    def is_required(self) -> bool:
        return self.record_count > 0 and self.presence_count == self.record_count

    @property
    def is_all_distinct(self) -> bool:
        # Missing values count as "" so two records without a value collide
        return self.record_count > 0 and len(set(self.raw_values)) == self.record_count

    # ======================================
    # Serialization
    # ======================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "record_count": self.record_count,
            "presence_count": self.presence_count,
            "distinct_count": self.distinct_count,
            "unique_ratio": self.unique_ratio,
            "avg_length": self.avg_length,
            "numeric_share": self.numeric_share,
            "sample_values": list(self.samples[:5]),
        }
