"""
Exception types used at the edges of the learning pipeline.

The classifiers, matcher and synthesizer never raise for bad input; they
return empty results. These exceptions belong to collaborator adapters and
the run budget, and the orchestrator turns them into degraded output.
"""


class PatternBridgeError(Exception):
    """Base class for all errors raised by patternbridge."""
    pass


class SourceError(PatternBridgeError):
    """Raised when a record source or markup source cannot deliver its input."""
    pass


class BudgetExceededError(PatternBridgeError):
    """Raised when a collaborator call times out or the run budget is spent."""
    pass
