# ==============================================
# LearningContext
# ==============================================
#
# PURPOSE:
#   Caller-owned record of one learning run: every collaborator call
#   (record source, markup source, ranker) with its outcome, the last
#   response of each collaborator, and degradation warnings.
#
#   The caller creates it, passes it by reference into the pipeline and
#   reads it afterwards. Nothing in patternbridge keeps process-wide
#   call logs or response caches.
#
# CLASSES:
# --------
# - CallRecord (dataclass)
#     name, status ("ok" | "timeout" | "failed"), elapsed_seconds, detail
#
# - LearningContext (dataclass)
#     calls, last_responses, warnings
#     record(...), warn(...), failed_calls(), to_dict()
#
# ==============================================

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List

OK = "ok"
TIMEOUT = "timeout"
FAILED = "failed"


@dataclass
class CallRecord:
    name: str
    status: str
    elapsed_seconds: float
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "detail": self.detail,
        }


@dataclass
class LearningContext:
    """
    Call log and collaborator responses for one learning run.
    """
    calls: List[CallRecord] = field(default_factory=list)
    last_responses: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, name: str, status: str, elapsed_seconds: float,
               detail: str = "", response: Any = None) -> CallRecord:
        """
        Log one collaborator call.

        Args:
            name: Collaborator name ("records", "markup", "ranker", ...)
            status: "ok", "timeout" or "failed"
            elapsed_seconds: Wall-clock time spent in the call
            detail: Error text for failed calls
            response: Stored as the collaborator's last response when the call succeeded
        """
        call = CallRecord(name, status, elapsed_seconds, detail)
        with self._lock:
            self.calls.append(call)
            if status == OK:
                self.last_responses[name] = response
        return call

    def warn(self, message: str) -> None:
        with self._lock:
            self.warnings.append(message)

    def failed_calls(self) -> List[CallRecord]:
        return [c for c in self.calls if c.status != OK]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calls": [c.to_dict() for c in self.calls],
            "warnings": list(self.warnings),
        }
