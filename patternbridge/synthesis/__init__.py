# ==============================================
# TOPIC 4: TEST SYNTHESIS
# ==============================================
#
# This package turns accepted connections (or, with no tabular data,
# the detected UI elements alone) into concrete TestCase records.
#
# Modules:
# --------
# - test_case.py    → TestCase, SynthesisOptions, type/category constants
# - synthesizer.py  → TestSynthesizer (connection mode + degraded mode)
#
# ==============================================

from .synthesizer import TestSynthesizer
from .test_case import SynthesisOptions, TestCase

__all__ = ["TestSynthesizer", "TestCase", "SynthesisOptions"]
