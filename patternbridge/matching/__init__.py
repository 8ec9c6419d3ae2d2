# ==============================================
# TOPIC 3: MATCHING
# ==============================================
#
# This package pairs classified data fields with classified UI
# elements and scores how likely each pairing is to be testable.
#
# Modules:
# --------
# - connection.py → ConnectionType, Connection, Connections, MatchingWeights
# - matcher.py    → ConnectionMatcher (validation + confidence scoring)
#
# ==============================================

from .connection import Connection, Connections, ConnectionType, MatchingWeights
from .matcher import ConnectionMatcher

__all__ = [
    "Connection",
    "Connections",
    "ConnectionType",
    "ConnectionMatcher",
    "MatchingWeights",
]
