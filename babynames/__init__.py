"""babynames package: per-name statistics from SSA natality data."""

from babynames.aggregate import aggregate, resolve_year_range
from babynames.analysis import AnalysisPipeline, AnalysisRegistry, get_analysis_registry, register_analysis
from babynames.errors import BabyNamesError, ConfigError, DataError, SinkError, SourceError
from babynames.model import NameRecord, Peak, PhonemeGroup, RawRecord, Sex
from babynames.options import StoreOptions
from babynames.raw_store import RawRecordStore, load_pronunciations
from babynames.sinks import dispatch_output

__all__ = [
    "aggregate",
    "resolve_year_range",
    "AnalysisPipeline",
    "AnalysisRegistry",
    "get_analysis_registry",
    "register_analysis",
    "BabyNamesError",
    "ConfigError",
    "DataError",
    "SinkError",
    "SourceError",
    "NameRecord",
    "Peak",
    "PhonemeGroup",
    "RawRecord",
    "Sex",
    "StoreOptions",
    "RawRecordStore",
    "load_pronunciations",
    "dispatch_output",
]
