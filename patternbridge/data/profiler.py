# ==============================================
# FieldProfiler
# ==============================================
#
# PURPOSE:
#   Walk a list of parsed records and build one FieldProfile per
#   column. This is the "observation engine" of the data topic.
#
# CLASS: FieldProfiler
# --------------------
#   Stateless between calls: every profile() call starts from scratch,
#   so classifying the same records twice gives the same profiles.
#
#   Methods:
#   --------
#   - profile(records: list[dict]) -> dict[str, FieldProfile]
#       Profiles in first-seen column order. Records that are not
#       mappings are skipped. Every profile sees every accepted record,
#       so a record missing a column counts as an empty value.
#
#   Internal helpers:
#   -----------------
#   - _flatten_record(record, prefix="") -> dict
#       Nested dicts become dot-notation keys; keys starting with "_"
#       are internal and skipped.
#   - _flatten_key(prefix, key) -> str
#
# ==============================================

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List

from .field_profile import FieldProfile

logger = logging.getLogger(__name__)


class FieldProfiler:
    """
    Builds FieldProfiles from parsed tabular records.
    """

    def profile(self, records: Iterable[Any]) -> Dict[str, FieldProfile]:
        """
        Profile every column found in the records.

        Args:
            records: Parsed records (string-keyed mappings)

        Returns:
            Dictionary of column name → FieldProfile, in first-seen order.
            Empty when there is nothing usable.
        """
        flattened_records = self._accept_records(records)
        if not flattened_records:
            return {}

        # Column order = first appearance across the record set
        columns: List[str] = []
        seen = set()
        for flattened in flattened_records:
            for key in flattened:
                if key not in seen:
                    seen.add(key)
                    columns.append(key)

        profiles = {name: FieldProfile(name=name) for name in columns}
        for flattened in flattened_records:
            for name, profile in profiles.items():
                if name in flattened:
                    profile.update(flattened[name])
                else:
                    profile.mark_missing()

        return profiles

    def _accept_records(self, records: Iterable[Any]) -> List[Dict[str, Any]]:
        if records is None:
            return []

        try:
            items = list(records)
        except TypeError:
            logger.warning("Tabular input is not iterable (%s); nothing to profile",
                           type(records).__name__)
            return []

        accepted = []
        for index, record in enumerate(items):
            if not isinstance(record, Mapping):
                logger.debug("Skipping record %d: not a mapping (%s)", index, type(record).__name__)
                continue
            flattened = self._flatten_record(record)
            if flattened:
                accepted.append(flattened)
        return accepted

    def _flatten_record(self, record: Mapping, prefix: str = "") -> Dict[str, Any]:
        """
        Flatten nested mappings into dot-notation keys.

        Examples:
            {"breed": "Boxer"} → {"breed": "Boxer"}
            {"owner": {"city": "Oslo"}} → {"owner.city": "Oslo"}
        """
        flattened = {}

        for key, value in record.items():
            key = str(key).strip()
            if not key or key.startswith("_"):
                continue

            canonical_key = self._flatten_key(prefix, key)
            if isinstance(value, Mapping):
                flattened.update(self._flatten_record(value, canonical_key))
            else:
                flattened[canonical_key] = value

        return flattened

    def _flatten_key(self, prefix: str, key: str) -> str:
        if not prefix:
            return key
        return f"{prefix}.{key}"
