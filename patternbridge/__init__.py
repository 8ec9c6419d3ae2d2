# ==============================================
# patternbridge
# ==============================================
#
# Bootstraps functional UI tests for a data-driven web interface
# from two inputs: a tabular data export and a markup snapshot.
#
# Package Structure (4 Topics + Orchestrator):
#
# patternbridge/
# ├── data/            # Topic 1: Classify tabular fields
# ├── ui/              # Topic 2: Classify UI elements in a snapshot
# ├── matching/        # Topic 3: Pair fields with UI elements
# ├── synthesis/       # Topic 4: Turn connections into test cases
# ├── collaborators/   # Record/markup sources, ranker, run budget
# ├── config.py        # Configuration management
# ├── exceptions.py    # Error types raised by collaborators
# ├── learning.py      # Orchestrator class
# └── cli.py           # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
