# ==============================================
# LearningPipeline — Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties all 4 topics together into a
#   single learning run. Callers interact with this class only;
#   everything else is internal.
#
# HOW IT CONNECTS THE 4 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                    LearningPipeline                      │
#   │                                                          │
#   │   TabularDataSource          MarkupSnapshotSource        │
#   │   (under RunBudget)          (under RunBudget)           │
#   │         │ records                  │ snapshot            │
#   │         ▼                          ▼                     │
#   │  ┌──────────────────┐    ┌─────────────────────┐         │
#   │  │ TOPIC 1: DATA    │    │ TOPIC 2: UI         │         │
#   │  │ DataPattern-     │    │ UIPatternClassifier │         │
#   │  │ Classifier       │    │ (3 strategies)      │         │
#   │  └────────┬─────────┘    └──────────┬──────────┘         │
#   │           │  run concurrently (2 worker threads)         │
#   │           └──────────────┬──────────┘                    │
#   │                          ▼                               │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: MATCHING                            │        │
#   │  │  ConnectionMatcher → Connections             │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 4: SYNTHESIS                           │        │
#   │  │  TestSynthesizer (+ optional ranker)         │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │            LearningResult                                │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: LearningPipeline
# -----------------------
#   Constructor:
#   ------------
#   - __init__(config: AppConfig | None = None,
#              ranker: AuxiliaryRanker | None = None,
#              strategies: list[DetectionStrategy] | None = None)
#
#   Public Methods:
#   ---------------
#   - classify_data(records) -> DataPatterns
#   - classify_ui(snapshot) -> UIPatterns
#   - match(data, ui) -> Connections
#   - synthesize(connections, ui_patterns=None) -> list[TestCase]
#   - run(records, snapshot, context=None) -> LearningResult
#       Inputs already in hand; only the ranker is external.
#   - learn(data_source, markup_source, context=None) -> LearningResult
#       Fetch both inputs under the run budget, then run().
#
# STATUS:
# -------
#   complete  : data and UI usable → connection-based cases
#   ui_only   : no data            → cases from UI elements alone
#   data_only : UI unusable        → data profiled, no connections
#   empty     : neither usable     → explicit empty result
#
# ==============================================

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .collaborators.budget import RunBudget, recorded_call
from .collaborators.ranking import AuxiliaryRanker, BudgetedRanker
from .collaborators.sources import MarkupSnapshotSource, TabularDataSource
from .config import AppConfig, get_config
from .context import LearningContext
from .data.classifier import DataPatternClassifier
from .data.descriptors import DataPatterns
from .exceptions import BudgetExceededError
from .matching.connection import Connections
from .matching.matcher import ConnectionMatcher
from .synthesis.synthesizer import TestSynthesizer
from .synthesis.test_case import TestCase
from .ui.classifier import UIPatternClassifier
from .ui.descriptors import UIPatterns

logger = logging.getLogger(__name__)

COMPLETE = "complete"
UI_ONLY = "ui_only"
DATA_ONLY = "data_only"
EMPTY = "empty"


@dataclass
class LearningResult:
    """
    Everything one learning run produced.
    """
    status: str
    data_patterns: DataPatterns
    ui_patterns: UIPatterns
    connections: Connections
    test_cases: List[TestCase] = field(default_factory=list)
    context: LearningContext = field(default_factory=LearningContext)

    @property
    def is_empty(self) -> bool:
        return self.status == EMPTY

    def summary(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "fields": len(self.data_patterns.field_names()),
            "ui_elements": len(self.ui_patterns.all_elements()),
            "connections": len(self.connections),
            "test_cases": len(self.test_cases),
            "failed_calls": len(self.context.failed_calls()),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "summary": self.summary(),
            "data_patterns": self.data_patterns.to_dict(),
            "ui_patterns": self.ui_patterns.to_dict(),
            "connections": self.connections.to_dict(),
            "test_cases": [c.to_dict() for c in self.test_cases],
            "context": self.context.to_dict(),
        }


class LearningPipeline:
    """
    Main orchestrator that integrates all 4 topics:
    1. Data classification
    2. UI classification
    3. Matching
    4. Test synthesis
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        ranker: Optional[AuxiliaryRanker] = None,
        strategies: Optional[List[Any]] = None
    ):
        """
        Initialize the complete pipeline with all components.

        Args:
            config: Application configuration. If None, loads from environment.
            ranker: Optional auxiliary ranker for case ordering
            strategies: Optional UI detection layers (defaults to the built-in three)
        """
        self._config = config or get_config()
        self._ranker = ranker

        # TOPIC 1: Data classification
        self._data_classifier = DataPatternClassifier(self._config.data)

        # TOPIC 2: UI classification
        self._ui_classifier = UIPatternClassifier(strategies)

        # TOPIC 3: Matching
        self._matcher = ConnectionMatcher(self._config.matching)

        # TOPIC 4: Synthesis
        self._synthesizer = TestSynthesizer(self._config.synthesis, ranker)

    # ======================================
    # Single steps
    # ======================================
    def classify_data(self, records: Optional[Iterable[Dict[str, Any]]]) -> DataPatterns:
        return self._data_classifier.classify(records or [])

    def classify_ui(self, snapshot: Any) -> UIPatterns:
        return self._ui_classifier.classify(snapshot)

    def match(self, data: DataPatterns, ui: UIPatterns) -> Connections:
        return self._matcher.match(data, ui)

    def synthesize(self, connections: Connections, ui_patterns: Optional[UIPatterns] = None) -> List[TestCase]:
        return self._synthesizer.synthesize(connections, ui_patterns)

    # ======================================
    # Full runs
    # ======================================
    def run(
        self,
        records: Optional[Iterable[Dict[str, Any]]],
        snapshot: Any,
        context: Optional[LearningContext] = None,
        budget: Optional[RunBudget] = None
    ) -> LearningResult:
        """
        Run classification, matching and synthesis over inputs already in hand.

        Args:
            records: Parsed tabular records (None or empty when there is no data)
            snapshot: Markup text or a parsed tree (None when there is no UI)
            context: Caller-owned context; a new one is created if omitted
            budget: Run budget for the ranker; a fresh one from config if omitted

        Returns:
            LearningResult. Never raises for unusable inputs; status says
            what could be produced.
        """
        context = context if context is not None else LearningContext()
        budget = budget or RunBudget(self._config.runtime.run_budget_seconds)
        records = list(records) if records is not None else []

        # TOPIC 1 + 2: independent, so classify both inputs concurrently
        with ThreadPoolExecutor(max_workers=2) as pool:
            data_future = pool.submit(self.classify_data, records)
            ui_future = pool.submit(self.classify_ui, snapshot)
            data_patterns = data_future.result()
            ui_patterns = ui_future.result()

        data_usable = not data_patterns.is_empty
        ui_usable = ui_patterns.usable and not ui_patterns.is_empty

        synthesizer = self._run_synthesizer(budget, context)
        connections = Connections()
        test_cases: List[TestCase] = []

        if data_usable and ui_usable:
            status = COMPLETE
            # TOPIC 3 + 4
            connections = self.match(data_patterns, ui_patterns)
            test_cases = synthesizer.synthesize(
                connections, ui_patterns, data_patterns.field_summary()
            )
        elif ui_usable:
            status = UI_ONLY
            context.warn("No tabular data; test cases derived from UI elements only")
            test_cases = synthesizer.synthesize_from_ui(ui_patterns)
        elif data_usable:
            status = DATA_ONLY
            context.warn("UI snapshot unusable; no connections can be formed")
        else:
            status = EMPTY
            context.warn("Neither tabular data nor UI snapshot is usable")

        logger.info("Learning run finished: %s, %d connections, %d test cases",
                    status, len(connections), len(test_cases))

        return LearningResult(
            status=status,
            data_patterns=data_patterns,
            ui_patterns=ui_patterns,
            connections=connections,
            test_cases=test_cases,
            context=context,
        )

    def learn(
        self,
        data_source: Optional[TabularDataSource],
        markup_source: Optional[MarkupSnapshotSource],
        context: Optional[LearningContext] = None
    ) -> LearningResult:
        """
        Fetch both inputs through their collaborators, then run().

        A source that fails or times out counts as absent input.
        """
        context = context if context is not None else LearningContext()
        budget = RunBudget(self._config.runtime.run_budget_seconds)
        fetch_timeout = self._config.runtime.fetch_timeout_seconds

        records = None
        if data_source is not None:
            records = self._fetch("records", data_source.records, budget, context, fetch_timeout)

        snapshot = None
        if markup_source is not None:
            snapshot = self._fetch("markup", markup_source.snapshot, budget, context, fetch_timeout)

        return self.run(records, snapshot, context, budget)

    # ======================================
    # Internal
    # ======================================
    def _fetch(self, name, fn, budget: RunBudget, context: LearningContext, timeout: float):
        try:
            return recorded_call(budget, context, name, fn, timeout=timeout)
        except BudgetExceededError as e:
            logger.warning("%s source timed out: %s", name, e)
            context.warn(f"{name} source timed out: {e}")
        except Exception as e:
            logger.warning("%s source failed: %s", name, e, exc_info=True)
            context.warn(f"{name} source failed: {e}")
        return None

    def _run_synthesizer(self, budget: RunBudget, context: LearningContext) -> TestSynthesizer:
        if self._ranker is None:
            return self._synthesizer
        ranker = BudgetedRanker(
            self._ranker, budget,
            timeout=self._config.runtime.ranker_timeout_seconds,
            context=context,
        )
        return TestSynthesizer(self._config.synthesis, ranker)
