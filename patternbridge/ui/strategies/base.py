"""
Common contract for UI detection strategies.

A strategy looks at a parsed snapshot and returns the descriptors it can
recognise. Strategies are independent of each other; the
UIPatternClassifier runs them in priority order and merges the results.
"""
from abc import ABC, abstractmethod
from typing import List

from bs4 import Tag

from ..descriptors import UIElementDescriptor


class DetectionStrategy(ABC):
    """
    Abstract base class for one detection layer.
    """

    name = "base"

    @abstractmethod
    def detect(self, root: Tag) -> List[UIElementDescriptor]:
        """
        Detect UI elements in a parsed snapshot.

        Args:
            root (Tag): The parsed snapshot (document or subtree).

        Returns:
            List[UIElementDescriptor]: Descriptors in document order. May
            contain invalid selectors; the classifier filters them.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
