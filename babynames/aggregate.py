"""
aggregate.py - Build per-name profiles from raw yearly counts.

Each (name, sex) pair becomes one NameRecord whose yearly percentages are
normalized against the total births of the same sex in that year.
"""
from __future__ import annotations

from collections import defaultdict
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from babynames.app_hooks import AppHooks, report_step
from babynames.errors import DataError
from babynames.model import NameRecord, Peak, RawRecord, Sex, make_name_id
from babynames.options import option_value

logger = logging.getLogger(__name__)

RawInput = Union[RawRecord, Mapping[str, Any]]

# Records between progress reports
PROGRESS_INTERVAL = 10000


def resolve_year_range(
    raw_records: Iterable[RawInput],
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> Optional[Tuple[int, int]]:
    """
    Fill in a missing start or end from the span of years in the data.

    Args:
        raw_records: Raw records (or dicts) to scan.
        start: Explicit first year, or None.
        end: Explicit last year, or None.

    Returns:
        (start, end), or None when a bound is missing and there is no data.
    """
    if start is not None and end is not None:
        return start, end
    years = set()
    for record in raw_records:
        year = record.year if isinstance(record, RawRecord) else record.get('year')
        try:
            years.add(int(year))
        except (TypeError, ValueError):
            continue
    if not years:
        return None
    return (min(years) if start is None else start, max(years) if end is None else end)


def find_peak(percents: Mapping[int, float]) -> Peak:
    """
    Entry with the highest value; the earliest year wins ties.

    Args:
        percents: Year -> value mapping, in ascending year order.

    Returns:
        Peak of the mapping.
    """
    peak: Optional[Peak] = None
    for year, value in percents.items():
        if peak is None or value > peak.value:
            peak = Peak(year=year, value=value)
    if peak is None:
        raise DataError("Cannot find the peak of an empty year range")
    return peak


def _coerce_records(raw_records: Iterable[RawInput]) -> List[RawRecord]:
    """Convert input to RawRecords, skipping unusable ones and rejecting negative counts."""
    records: List[RawRecord] = []
    for index, raw in enumerate(raw_records):
        try:
            record = raw if isinstance(raw, RawRecord) else RawRecord.from_dict(raw)
        except DataError as e:
            logger.warning(f"Skipping raw record {index}: {e}")
            continue
        if record.count < 0:
            raise DataError(
                f"Negative count {record.count} for {record.name or '<unnamed>'} "
                f"({record.sex.value}) in {record.year}"
            )
        if not record.name:
            logger.warning(f"Skipping raw record {index} with no name ({record.sex.value}, {record.year})")
            continue
        records.append(record)
    return records


def aggregate(
    raw_records: Iterable[RawInput],
    options: Any,
    pronunciations: Optional[Mapping[str, str]] = None,
    app_hooks: Optional[AppHooks] = None,
) -> Dict[str, NameRecord]:
    """
    Group raw records by name and sex and compute each name's profile.

    Args:
        raw_records: RawRecord objects or dicts with name, sex, year, count.
        options: Run options (object or mapping) with start and end; a None bound
            is taken from the span of the data.
        pronunciations: Optional upper-cased name -> pronunciation lookup.
        app_hooks: Optional progress hooks.

    Returns:
        Name id -> NameRecord, in the order each pair first appears.

    Raises:
        DataError: If start is after end or a record has a negative count.
    """
    records = _coerce_records(raw_records)
    year_range = resolve_year_range(records, option_value(options, 'start'), option_value(options, 'end'))
    if year_range is None:
        logger.info("No raw records to aggregate")
        return {}
    start, end = year_range
    if start > end:
        raise DataError(f"start ({start}) must not be after end ({end})")

    # (name, sex) -> year -> count, in first-seen order
    groups: Dict[Tuple[str, Sex], Dict[int, int]] = {}
    totals: Dict[Tuple[int, Sex], int] = defaultdict(int)

    report_step(app_hooks, info="Grouping raw records", target=len(records), reset_counter=True, log=logger)
    for index, record in enumerate(records, start=1):
        counts = groups.setdefault((record.name, record.sex), defaultdict(int))
        counts[record.year] += record.count
        totals[(record.year, record.sex)] += record.count
        if index % PROGRESS_INTERVAL == 0:
            report_step(app_hooks, plus_step=PROGRESS_INTERVAL)

    logger.info(f"Aggregating {len(groups)} names from {len(records)} raw records ({start}-{end})")
    report_step(app_hooks, info="Building name profiles", target=len(groups), reset_counter=True, log=logger)

    data: Dict[str, NameRecord] = {}
    for (name, sex), counts in groups.items():
        percents: Dict[int, float] = {}
        for year in range(start, end + 1):
            total = totals.get((year, sex), 0)
            count = counts.get(year)
            percents[year] = 100 * count / total if total and count else 0.0
        pronunciation = pronunciations.get(name.upper()) if pronunciations else None
        name_id = make_name_id(name, sex)
        data[name_id] = NameRecord(
            id=name_id,
            name=name,
            sex=sex,
            percents=percents,
            peak=find_peak(percents),
            total_count=sum(counts.values()),
            pronunciation=pronunciation,
        )
    report_step(app_hooks, plus_step=len(groups))
    return data
