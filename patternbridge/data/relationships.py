# ==============================================
# RelationshipInferencer
# ==============================================
#
# PURPOSE:
#   Infer cross-field relationships and business rules from column
#   names and observed values. Runs ONCE per classification pass over
#   all profiles, producing two global candidate-string lists. Each
#   FieldDescriptor then picks up the strings that mention its name.
#
# RELATIONSHIP KINDS:
# -------------------
#   foreign_key : "<a> -> <b> (foreign_key)"
#       a = field whose lowercase name contains "_id" or ends with "id"
#       b = every other field whose lowercase name contains a's stem
#           (a with its trailing "_id"/"id" removed)
#
#   hierarchy   : "<a> -> <b> (hierarchy)"
#       a = field named like category / type / class
#       b = field named like sub* (never a itself)
#
#   dependency  : "<a> -> <b> (dependency)"
#       a = field named like status / state / phase
#       b = every field that is not status-like
#
# BUSINESS RULES:
# ---------------
#   "<f> is required (non-null)"      every record has a value
#   "<f> must be unique"              every record value is distinct
#   "<f> must be between 0 and 100"   numeric, min >= 0 and max <= 100
#   "<f> must be non-negative"        numeric, min >= 0
#
# ==============================================

import re
from typing import Dict, List, Tuple

from .descriptors import DataThresholds
from .field_profile import FieldProfile

_ID_SUFFIX = re.compile(r"(_id|id)$", re.IGNORECASE)


class RelationshipInferencer:
    """
    Computes relationship and business-rule strings for a set of profiles.
    """

    HIERARCHY_PARENT_TOKENS = ("category", "type", "class")
    HIERARCHY_CHILD_TOKEN = "sub"
    DEPENDENCY_TOKENS = ("status", "state", "phase")

    def __init__(self, thresholds: DataThresholds = None):
        self.thresholds = thresholds or DataThresholds()

    # ======================================
    # Relationships
    # ======================================
    def infer_relationships(self, profiles: Dict[str, FieldProfile]) -> List[str]:
        fields = list(profiles)
        return (
            self._foreign_keys(fields)
            + self._hierarchies(fields)
            + self._dependencies(fields)
        )

    def _foreign_keys(self, fields: List[str]) -> List[str]:
        relationships = []
        for id_field in fields:
            lowered = id_field.lower()
            if "_id" not in lowered and not lowered.endswith("id"):
                continue

            stem = _ID_SUFFIX.sub("", lowered)
            if not stem:
                # A bare "id" column would link to everything
                continue

            for other in fields:
                if other != id_field and stem in other.lower():
                    relationships.append(f"{id_field} -> {other} (foreign_key)")
        return relationships

    def _hierarchies(self, fields: List[str]) -> List[str]:
        parents = [f for f in fields if self._contains_any(f, self.HIERARCHY_PARENT_TOKENS)]
        children = [f for f in fields if self.HIERARCHY_CHILD_TOKEN in f.lower()]

        return [
            f"{parent} -> {child} (hierarchy)"
            for parent in parents
            for child in children
            if parent != child
        ]

    def _dependencies(self, fields: List[str]) -> List[str]:
        status_fields = [f for f in fields if self._contains_any(f, self.DEPENDENCY_TOKENS)]
        dependents = [f for f in fields if not self._contains_any(f, self.DEPENDENCY_TOKENS)]

        return [
            f"{status} -> {dependent} (dependency)"
            for status in status_fields
            for dependent in dependents
        ]

    # ======================================
    # Business rules
    # ======================================
    def infer_business_rules(self, profiles: Dict[str, FieldProfile]) -> List[str]:
        required, unique, ranges = [], [], []

        for name, profile in profiles.items():
            if profile.is_required:
                required.append(f"{name} is required (non-null)")
            if profile.is_all_distinct:
                unique.append(f"{name} must be unique")

            if profile.numbers and profile.numeric_share >= self.thresholds.numeric_min_share:
                low, high = min(profile.numbers), max(profile.numbers)
                if low >= 0 and high <= 100:
                    ranges.append(f"{name} must be between 0 and 100")
                elif low >= 0:
                    ranges.append(f"{name} must be non-negative")

        return required + unique + ranges

    # ======================================
    # Attachment
    # ======================================
    def attach(
        self,
        field_name: str,
        relationships: List[str],
        business_rules: List[str]
    ) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """
        Select the candidate strings that belong to one field.

        Matching is by substring on the field name, so "breed" also picks up
        strings that mention "breed_group".

        Returns:
            (relationships, business_rules) as tuples, in candidate order
        """
        return (
            tuple(r for r in relationships if field_name in r),
            tuple(r for r in business_rules if field_name in r),
        )

    @staticmethod
    def _contains_any(name: str, tokens: Tuple[str, ...]) -> bool:
        lowered = name.lower()
        return any(token in lowered for token in tokens)
