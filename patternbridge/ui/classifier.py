# ==============================================
# UIPatternClassifier
# ==============================================
#
# PURPOSE:
#   Classify a markup/DOM snapshot into UIPatterns by running an
#   ordered list of DetectionStrategy layers and merging their output.
#
# CLASS: UIPatternClassifier
# --------------------------
#   Constructor:
#   ------------
#   - __init__(strategies: list[DetectionStrategy] = None)
#       Defaults to native → component → heuristic.
#
#   Methods:
#   --------
#   - classify(snapshot) -> UIPatterns
#       1. Parse the snapshot (text, bytes or BeautifulSoup Tag)
#       2. Run every strategy; a failing strategy contributes nothing
#       3. Merge in priority order (see _merge)
#
#   MERGE RULES:
#   ------------
#   - Invalid selectors ("" / "undefined") are dropped.
#   - Canonical key: (role, normalized label); fallback (role, selector).
#   - A descriptor is dropped if its label key OR its selector key was
#     already taken by a higher-priority descriptor.
#
# ==============================================

import logging
from typing import Any, Iterable, List, Optional, Set, Tuple

from .descriptors import UIElementDescriptor, UIPatterns
from .snapshot import normalize_label, parse_snapshot
from .strategies import DetectionStrategy, default_strategies

logger = logging.getLogger(__name__)


class UIPatternClassifier:
    """
    Runs detection layers over a snapshot and merges them into UIPatterns.
    """

    def __init__(self, strategies: Optional[Iterable[DetectionStrategy]] = None):
        self.strategies: List[DetectionStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )

    def classify(self, snapshot: Any) -> UIPatterns:
        """
        Classify every UI element found in the snapshot.

        Args:
            snapshot: Markup text, raw bytes, or a BeautifulSoup tree/Tag

        Returns:
            UIPatterns. usable is False when nothing could be detected.
        """
        try:
            root = parse_snapshot(snapshot)
        except Exception:
            logger.warning("Markup snapshot could not be parsed", exc_info=True)
            return UIPatterns.unusable()

        if root is None:
            logger.info("Markup snapshot is empty; UI patterns are unusable")
            return UIPatterns.unusable()

        layers: List[List[UIElementDescriptor]] = []
        for strategy in self.strategies:
            try:
                layers.append(list(strategy.detect(root)))
            except Exception:
                logger.warning("Detection layer %s failed; continuing without it",
                               strategy.name, exc_info=True)
                layers.append([])

        patterns = self._merge(layers)
        if patterns.is_empty:
            logger.info("No UI elements detected in snapshot")
            patterns.usable = False
        return patterns

    def _merge(self, layers: List[List[UIElementDescriptor]]) -> UIPatterns:
        patterns = UIPatterns()
        taken_labels: Set[Tuple[Any, str]] = set()
        taken_selectors: Set[Tuple[Any, str]] = set()

        for layer in layers:
            for descriptor in layer:
                if not descriptor.is_valid:
                    logger.debug("Dropping %s element from %s layer: invalid selector %r",
                                 descriptor.role.value, descriptor.source, descriptor.selector)
                    continue

                selector_key = (descriptor.role, descriptor.selector.strip())
                label = normalize_label(descriptor.label)
                label_key = (descriptor.role, label) if label else None

                if selector_key in taken_selectors or (label_key and label_key in taken_labels):
                    logger.debug("Merged duplicate %s element %s from %s layer",
                                 descriptor.role.value, descriptor.selector, descriptor.source)
                    continue

                taken_selectors.add(selector_key)
                if label_key:
                    taken_labels.add(label_key)
                patterns.add(descriptor)

        return patterns
