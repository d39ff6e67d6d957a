"""
Analysis passes over aggregated name data.

Analyses are optional: each is registered under an option key and runs only
when the run options enable that key. They read the aggregated data without
changing it and may write their own artifacts.

Main components:
    - AnalysisRegistry: Ordered list of (key, predicate, function) entries
    - AnalysisPipeline: Runs the enabled entries in registration order
    - phonemes: Groups names by a phoneme of their pronunciation
"""

from babynames.analysis.base import AnalysisEntry, AnalysisRegistry, register_analysis, get_analysis_registry
from babynames.analysis.pipeline import AnalysisPipeline

# Import analyses to ensure they're registered
from babynames.analysis.phonemes import phonemes, group_by_phoneme, select_phoneme

__all__ = [
    'AnalysisEntry',
    'AnalysisRegistry',
    'register_analysis',
    'get_analysis_registry',
    'AnalysisPipeline',
    'phonemes',
    'group_by_phoneme',
    'select_phoneme',
]
