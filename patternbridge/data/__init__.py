# ==============================================
# TOPIC 1: DATA CLASSIFICATION
# ==============================================
#
# This package observes the columns of a tabular export and tags
# each one with the categories that make it testable through a UI.
#
# Two-step process:
#   Step 1 (Profiling):      Observe records → build a profile per column
#   Step 2 (Classification): Apply heuristics on profiles → tag fields
#
# Modules:
# --------
# - value_detector.py  → Number / date detection for single cell values
# - field_profile.py   → Data class holding observations for one column
# - profiler.py        → Walk records, build one FieldProfile per column
# - relationships.py   → Relationship and business-rule inference
# - classifier.py      → Apply heuristics on profiles, output DataPatterns
# - descriptors.py     → FieldCategory, FieldDescriptor, DataPatterns, thresholds
#
# ==============================================

from .classifier import DataPatternClassifier
from .descriptors import DataPatterns, DataThresholds, FieldCategory, FieldDescriptor
from .relationships import RelationshipInferencer
from .value_detector import ValueDetector

__all__ = [
    "DataPatternClassifier",
    "DataPatterns",
    "DataThresholds",
    "FieldCategory",
    "FieldDescriptor",
    "RelationshipInferencer",
    "ValueDetector",
]
