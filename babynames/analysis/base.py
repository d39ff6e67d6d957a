"""
Registry of optional analysis passes.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Iterator, List, Mapping, Optional

from babynames.model import NameRecord
from babynames.options import option_value

logger = logging.getLogger(__name__)

AnalysisFn = Callable[[Mapping[str, NameRecord], Any], Any]
Predicate = Callable[[Any], bool]


def _option_flag(key: str) -> Predicate:
    """Predicate that is true when the options enable ``key``."""
    def predicate(options: Any) -> bool:
        is_enabled = getattr(options, 'is_enabled', None)
        if callable(is_enabled):
            return bool(is_enabled(key))
        return bool(option_value(options, key, False))
    return predicate


@dataclass(frozen=True)
class AnalysisEntry:
    """
    One registered analysis.

    Attributes:
        key: Option name that switches the analysis on
        predicate: Decides from the run options whether to run
        fn: Called as fn(aggregated_data, options)
    """
    key: str
    predicate: Predicate
    fn: AnalysisFn

    def enabled(self, options: Any) -> bool:
        return self.predicate(options)


class AnalysisRegistry:
    """
    Ordered list of analyses.

    Analyses run in the order they were registered, so combined output is
    reproducible between runs.
    """

    def __init__(self) -> None:
        self._entries: List[AnalysisEntry] = []

    def register(self, key: str, fn: AnalysisFn, predicate: Optional[Predicate] = None) -> AnalysisEntry:
        """
        Append an analysis.

        Args:
            key: Option name that enables it
            fn: The analysis function
            predicate: Custom enable test; defaults to the truthiness of options[key]

        Returns:
            The new entry

        Raises:
            ValueError: If key is already registered
        """
        if key in self.keys():
            raise ValueError(f"Analysis '{key}' is already registered")
        entry = AnalysisEntry(key=key, predicate=predicate or _option_flag(key), fn=fn)
        self._entries.append(entry)
        logger.debug(f"Registered analysis: {key}")
        return entry

    def keys(self) -> List[str]:
        return [entry.key for entry in self._entries]

    def get(self, key: str) -> Optional[AnalysisEntry]:
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def enabled_entries(self, options: Any) -> List[AnalysisEntry]:
        """Entries whose predicate accepts the options, in registration order."""
        return [entry for entry in self._entries if entry.enabled(options)]

    def __iter__(self) -> Iterator[AnalysisEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


# Default registry filled by @register_analysis at import time
_ANALYSIS_REGISTRY = AnalysisRegistry()


def register_analysis(key: str, predicate: Optional[Predicate] = None) -> Callable[[AnalysisFn], AnalysisFn]:
    """
    Decorator to register an analysis function in the default registry.

    Usage:
        @register_analysis("phonemes")
        def phonemes(data, options):
            ...
    """
    def decorator(fn: AnalysisFn) -> AnalysisFn:
        _ANALYSIS_REGISTRY.register(key, fn, predicate)
        return fn
    return decorator


def get_analysis_registry() -> AnalysisRegistry:
    """Get the default analysis registry."""
    return _ANALYSIS_REGISTRY
