# ==============================================
# DataPatternClassifier
# ==============================================
#
# PURPOSE:
#   Takes parsed tabular records, profiles every column with the
#   FieldProfiler and applies heuristic rules to tag each field with
#   zero or more FieldCategory values. This is the data-side "brain".
#
# CLASS: DataPatternClassifier
# ----------------------------
#   Stateless: records in, DataPatterns out. The same records always
#   give the same DataPatterns.
#
#   Constructor:
#   ------------
#   - __init__(thresholds: DataThresholds = None)
#
#   Methods:
#   --------
#   - classify(records: list[dict]) -> DataPatterns
#       Profile, run the six detectors independently, attach
#       relationships/business rules.
#
#   Detectors (each returns a descriptor or None):
#   ----------------------------------------------
#   RULE 1: CATEGORICAL
#     distinct > 1 AND distinct < 0.8 x samples AND distinct < 50
#     AND samples >= 3
#
#   RULE 2: NUMERICAL
#     >= 3 parseable samples AND numeric share >= 0.8
#
#   RULE 3: IDENTIFIER
#     distinct / samples > 0.9 (at least one sample)
#
#   RULE 4: SEARCHABLE
#     2 < mean length < 200 AND samples >= 3
#
#   RULE 5: TEMPORAL
#     any sample matches a known date pattern
#
#   RULE 6: SORTABLE
#     samples >= 3; typed number / date / string
#
# ==============================================

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .descriptors import DataPatterns, DataThresholds, FieldCategory, FieldDescriptor
from .field_profile import FieldProfile
from .profiler import FieldProfiler
from .relationships import RelationshipInferencer
from .value_detector import ValueDetector

logger = logging.getLogger(__name__)


class DataPatternClassifier:
    """
    Classifies parsed tabular records into tagged FieldDescriptor lists.

    Every detector runs independently on every field, so one column can
    legitimately be categorical AND sortable at the same time.
    """

    def __init__(self, thresholds: DataThresholds = None):
        """
        Initialize the classifier with configurable thresholds.

        Args:
            thresholds: Optional DataThresholds. Defaults are used otherwise
                        (3 samples minimum, 0.8 distinct ratio, 50 distinct max, ...)
        """
        self.thresholds = thresholds or DataThresholds()
        self.profiler = FieldProfiler()
        self.inferencer = RelationshipInferencer(self.thresholds)

    def classify(self, records: Iterable[Dict[str, Any]]) -> DataPatterns:
        """
        Classify every field found in the records.

        Args:
            records: Parsed records (string-keyed mappings), already
                     flattened across source tables

        Returns:
            DataPatterns. All six lists are empty for empty or unusable input.
        """
        profiles = self.profiler.profile(records)
        patterns = DataPatterns()
        if not profiles:
            logger.info("No usable tabular records; data patterns are empty")
            return patterns

        relationships = self.inferencer.infer_relationships(profiles)
        business_rules = self.inferencer.infer_business_rules(profiles)

        detectors = [
            self._detect_categorical,
            self._detect_numerical,
            self._detect_identifier,
            self._detect_searchable,
            self._detect_temporal,
            self._detect_sortable,
        ]

        for name, profile in profiles.items():
            context = self.inferencer.attach(name, relationships, business_rules)
            for detector in detectors:
                descriptor = detector(profile, context)
                if descriptor is not None:
                    patterns.by_category(descriptor.category).append(descriptor)

        logger.debug(
            "Classified %d fields: %d categorical, %d numerical, %d identifiers, "
            "%d searchable, %d temporal, %d sortable",
            len(profiles), len(patterns.categorical), len(patterns.numerical),
            len(patterns.identifiers), len(patterns.searchable),
            len(patterns.temporal), len(patterns.sortable),
        )
        return patterns

    # ======================================
    # Detectors
    # ======================================
    def _detect_categorical(
        self,
        profile: FieldProfile,
        context: Tuple[Tuple[str, ...], Tuple[str, ...]]
    ) -> Optional[FieldDescriptor]:
        t = self.thresholds
        distinct = profile.distinct_count
        samples = profile.sample_count

        if samples < t.min_samples:
            return None
        if not (1 < distinct < t.categorical_max_distinct_ratio * samples):
            return None
        if distinct >= t.categorical_max_distinct:
            return None

        return self._describe(
            profile, FieldCategory.CATEGORICAL, context,
            values=tuple(profile.distinct_values),
            unique_count=distinct,
            total_count=samples,
        )

    def _detect_numerical(self, profile, context) -> Optional[FieldDescriptor]:
        numbers = profile.numbers
        if len(numbers) < self.thresholds.min_samples:
            return None
        if profile.numeric_share < self.thresholds.numeric_min_share:
            return None

        return self._describe(
            profile, FieldCategory.NUMERICAL, context,
            minimum=min(numbers),
            maximum=max(numbers),
            mean=sum(numbers) / len(numbers),
        )

    def _detect_identifier(self, profile, context) -> Optional[FieldDescriptor]:
        if profile.sample_count == 0:
            return None
        if profile.unique_ratio <= self.thresholds.identifier_min_uniqueness:
            return None

        return self._describe(
            profile, FieldCategory.IDENTIFIER, context,
            uniqueness=profile.unique_ratio,
        )

    def _detect_searchable(self, profile, context) -> Optional[FieldDescriptor]:
        t = self.thresholds
        if profile.sample_count < t.min_samples:
            return None

        avg_length = profile.avg_length
        if not (t.searchable_min_avg_length < avg_length < t.searchable_max_avg_length):
            return None

        return self._describe(
            profile, FieldCategory.SEARCHABLE, context,
            sample_values=tuple(profile.samples[:t.searchable_sample_size]),
            avg_length=avg_length,
        )

    def _detect_temporal(self, profile, context) -> Optional[FieldDescriptor]:
        samples = profile.samples
        if not any(ValueDetector.is_date(s) for s in samples):
            return None

        return self._describe(
            profile, FieldCategory.TEMPORAL, context,
            # Format comes from the first sample, which may itself not be a date
            date_format=ValueDetector.detect_date_format(samples[0]),
            sample_values=tuple(samples[:self.thresholds.temporal_sample_size]),
        )

    def _detect_sortable(self, profile, context) -> Optional[FieldDescriptor]:
        t = self.thresholds
        samples = profile.samples
        if len(samples) < t.min_samples:
            return None

        if profile.numeric_share >= t.sortable_numeric_share:
            sort_type = "number"
        elif any(ValueDetector.is_date(s) for s in samples):
            sort_type = "date"
        else:
            sort_type = "string"

        return self._describe(
            profile, FieldCategory.SORTABLE, context,
            sort_type=sort_type,
            sample_values=tuple(samples[:t.sortable_sample_size]),
        )

    # ======================================
    # Helpers
    # ======================================
    def _describe(
        self,
        profile: FieldProfile,
        category: FieldCategory,
        context: Tuple[Tuple[str, ...], Tuple[str, ...]],
        **stats: Any
    ) -> FieldDescriptor:
        relationships, business_rules = context
        return FieldDescriptor(
            name=profile.name,
            category=category,
            sample_count=profile.sample_count,
            relationships=relationships,
            business_rules=business_rules,
            **stats,
        )

    def profile_summary(self, records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Per-column observation summary, used by the CLI's classify-data command."""
        return [p.to_dict() for p in self.profiler.profile(records).values()]
