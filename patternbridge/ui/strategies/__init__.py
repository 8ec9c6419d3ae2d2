# ==============================================
# Detection Strategies
# ==============================================
#
# One module per detection layer, in priority order:
#
# - native.py     → NativeMarkupStrategy (standard HTML controls)
# - component.py  → ComponentFrameworkStrategy (MUI / Ant / ARIA roles)
# - heuristic.py  → HeuristicTextStrategy (phrases, div grids)
#
# All implement DetectionStrategy.detect(root) from base.py.
#
# ==============================================

from .base import DetectionStrategy
from .component import ComponentFrameworkStrategy
from .heuristic import HeuristicTextStrategy
from .native import NativeMarkupStrategy


def default_strategies():
    """The built-in layers, highest priority first."""
    return [NativeMarkupStrategy(), ComponentFrameworkStrategy(), HeuristicTextStrategy()]


__all__ = [
    "DetectionStrategy",
    "NativeMarkupStrategy",
    "ComponentFrameworkStrategy",
    "HeuristicTextStrategy",
    "default_strategies",
]
