"""
Optional auxiliary ranking of UI elements.

A ranker (typically backed by an LLM elsewhere) receives the detected UI
elements and a summary of the data fields, and returns selectors in the
order they should be tested. The synthesizer only uses the order to
reorder cases; it never depends on a ranker being present or working.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..context import LearningContext
from ..ui.descriptors import UIElementDescriptor
from .budget import RunBudget, recorded_call


class AuxiliaryRanker(ABC):
    """
    Abstract base class for selector rankers.
    """

    @abstractmethod
    def rank(
        self,
        elements: Sequence[UIElementDescriptor],
        field_summary: Dict[str, List[str]]
    ) -> List[str]:
        """
        Order UI element selectors by testing priority.

        Args:
            elements (Sequence[UIElementDescriptor]): Detected UI elements.
            field_summary (Dict[str, List[str]]): Field name → category tags.

        Returns:
            List[str]: Selectors, highest priority first. Selectors the
            ranker leaves out keep their default relative order after the
            ranked ones.
        """
        pass


class StaticRanker(AuxiliaryRanker):
    """
    Ranker with a fixed, caller-supplied selector order.
    """

    def __init__(self, order: Sequence[str]):
        self.order = list(order)

    def rank(self, elements, field_summary) -> List[str]:
        return list(self.order)


class BudgetedRanker(AuxiliaryRanker):
    """
    Wraps another ranker so each call runs under the learning run's budget
    and is logged in the caller's context.
    """

    def __init__(
        self,
        ranker: AuxiliaryRanker,
        budget: RunBudget,
        timeout: Optional[float] = None,
        context: Optional[LearningContext] = None
    ):
        self.ranker = ranker
        self.budget = budget
        self.timeout = timeout
        self.context = context

    def rank(self, elements, field_summary) -> List[str]:
        return recorded_call(
            self.budget, self.context, "ranker",
            lambda: self.ranker.rank(elements, field_summary),
            timeout=self.timeout,
        )
