# ==============================================
# COLLABORATORS
# ==============================================
#
# Adapters around everything outside the pure core: where records and
# markup come from, optional ranking, and the time budget those
# external calls run under.
#
# Modules:
# --------
# - sources.py  → TabularDataSource / MarkupSnapshotSource + adapters
# - ranking.py  → AuxiliaryRanker contract, StaticRanker, BudgetedRanker
# - budget.py   → RunBudget (per-call timeout + overall budget)
#
# ==============================================

from .budget import RunBudget, recorded_call
from .ranking import AuxiliaryRanker, BudgetedRanker, StaticRanker
from .sources import (
    DelimitedFileSource,
    FileMarkupSource,
    HttpMarkupSource,
    InMemoryDataSource,
    MarkupSnapshotSource,
    StaticMarkupSource,
    TabularDataSource,
)

__all__ = [
    "RunBudget",
    "recorded_call",
    "AuxiliaryRanker",
    "BudgetedRanker",
    "StaticRanker",
    "TabularDataSource",
    "InMemoryDataSource",
    "DelimitedFileSource",
    "MarkupSnapshotSource",
    "StaticMarkupSource",
    "FileMarkupSource",
    "HttpMarkupSource",
]
