"""
Pipeline for running analyses over aggregated name data.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from babynames.analysis.base import AnalysisRegistry, get_analysis_registry
from babynames.app_hooks import AppHooks, report_step
from babynames.model import NameRecord

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """
    Runs the enabled analyses of a registry, in registration order.

    Analyses read the aggregated data and may write their own artifacts;
    the data itself passes through unchanged.

    Attributes:
        registry: Analyses to consider
        app_hooks: Optional application hooks for progress reporting
    """

    def __init__(self, registry: Optional[AnalysisRegistry] = None, app_hooks: Optional[AppHooks] = None) -> None:
        self.registry = registry if registry is not None else get_analysis_registry()
        self.app_hooks = app_hooks

    def run(self, data: Mapping[str, NameRecord], options: Any) -> List[str]:
        """
        Run every analysis the options enable.

        Errors raised by an analysis propagate and end the run.

        Args:
            data: Aggregated name id -> NameRecord
            options: Run options, passed to each analysis

        Returns:
            Keys of the analyses that ran, in order
        """
        enabled = self.registry.enabled_entries(options)
        report_step(self.app_hooks, info="Running analyses", target=len(enabled), reset_counter=True, log=logger)

        ran: List[str] = []
        for entry in enabled:
            logger.info(f"Running analysis {entry.key}")
            entry.fn(data, options)
            ran.append(entry.key)
            report_step(self.app_hooks, plus_step=1)

        skipped = [key for key in self.registry.keys() if key not in ran]
        if skipped:
            logger.debug(f"Analyses not enabled: {', '.join(skipped)}")
        return ran
