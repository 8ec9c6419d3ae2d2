# ==============================================
# TOPIC 2: UI CLASSIFICATION
# ==============================================
#
# This package reads a markup/DOM snapshot of a rendered interface
# and classifies its interactive and display elements.
#
# Modules:
# --------
# - snapshot.py     → Parse snapshots; selector, label and row-count helpers
# - strategies/     → Ordered detection layers (native, component, heuristic)
# - classifier.py   → Run the layers, merge into UIPatterns
# - descriptors.py  → UIRole, UIElementDescriptor, UIPatterns
#
# ==============================================

from .classifier import UIPatternClassifier
from .descriptors import UIElementDescriptor, UIPatterns, UIRole, is_valid_selector
from .strategies import (
    ComponentFrameworkStrategy,
    DetectionStrategy,
    HeuristicTextStrategy,
    NativeMarkupStrategy,
)

__all__ = [
    "UIPatternClassifier",
    "UIElementDescriptor",
    "UIPatterns",
    "UIRole",
    "is_valid_selector",
    "DetectionStrategy",
    "NativeMarkupStrategy",
    "ComponentFrameworkStrategy",
    "HeuristicTextStrategy",
]
