"""
Phoneme grouping analysis.

Groups names by one phoneme of their pronunciation (the Nth token, with
negative N counting from the back) and sums the members' yearly
percentages. The result is written to its own phonemes.json artifact.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from babynames.analysis.base import register_analysis
from babynames.errors import SinkError
from babynames.model import NameRecord, PhonemeGroup
from babynames.options import option_value

logger = logging.getLogger(__name__)

ARTIFACT_NAME = "phonemes.json"


def select_phoneme(pronunciation: str, n: int) -> Optional[str]:
    """
    Pick the Nth whitespace-delimited token of a pronunciation.

    Args:
        pronunciation: e.g. 'AE1 N AH0'
        n: Index; negative values count from the back

    Returns:
        The token, or None if n is out of range
    """
    tokens = pronunciation.split()
    try:
        return tokens[n]
    except IndexError:
        return None


def _year_range(data: Mapping[str, NameRecord], options: Any) -> Tuple[int, int]:
    """Configured year range, falling back to the keys of the aggregated percents."""
    start = option_value(options, 'start')
    end = option_value(options, 'end')
    if start is not None and end is not None:
        return start, end
    for record in data.values():
        years = list(record.percents)
        if years:
            return (years[0] if start is None else start, years[-1] if end is None else end)
    return (0, -1)


def group_by_phoneme(data: Mapping[str, NameRecord], n: int, start: int, end: int) -> List[PhonemeGroup]:
    """
    Build phoneme groups from aggregated names.

    Args:
        data: Aggregated name id -> NameRecord
        n: Phoneme index
        start: First year
        end: Last year

    Returns:
        Groups in the order their phoneme was first seen. Names are sorted
        by descending peak (stable on ties) and zero-valued years dropped.
    """
    # phoneme -> (name/peak list, year -> summed percent)
    working: Dict[str, Tuple[List[Tuple[str, float]], Dict[int, float]]] = {}

    for record in data.values():
        if not (record.pronunciation or '').strip():
            continue
        phoneme = select_phoneme(record.pronunciation, n)
        if phoneme is None:
            logger.warning(f"Couldn't locate phoneme {n} in the pronunciation of {record.name} ({record.id})")
            continue
        if phoneme not in working:
            working[phoneme] = ([], {year: 0 for year in range(start, end + 1)})
        names, percents = working[phoneme]
        names.append((record.name, record.peak.value))
        for year in range(start, end + 1):
            percents[year] += record.percents.get(year) or 0

    groups: List[PhonemeGroup] = []
    for phoneme, (names, percents) in working.items():
        ordered = sorted(names, key=lambda item: item[1], reverse=True)
        groups.append(PhonemeGroup(
            phoneme=phoneme,
            names=[name for name, _peak in ordered],
            percents=[{'year': year, 'value': value} for year, value in percents.items() if value != 0],
        ))
    logger.info(f"Grouped {sum(len(g.names) for g in groups)} names into {len(groups)} phonemes")
    return groups


def write_phoneme_groups(groups: List[PhonemeGroup], output_dir: Path) -> Path:
    """
    Write groups as a JSON array to output_dir/phonemes.json.

    Raises:
        SinkError: If the file cannot be written.
    """
    path = Path(output_dir) / ARTIFACT_NAME
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([group.to_dict() for group in groups], f)
    except OSError as e:
        raise SinkError(f"Failed to write {path}: {e}")
    logger.info(f"Wrote {len(groups)} phoneme groups to {path}")
    return path


@register_analysis("phonemes")
def phonemes(data: Mapping[str, NameRecord], options: Any) -> List[PhonemeGroup]:
    """
    Group names by their Nth phoneme and save the groups.

    Args:
        data: Aggregated name id -> NameRecord (not modified)
        options: Run options; uses N, start, end and output_dir

    Returns:
        The phoneme groups that were written
    """
    n = int(option_value(options, 'N', 0))
    start, end = _year_range(data, options)
    groups = group_by_phoneme(data, n, start, end)
    write_phoneme_groups(groups, Path(option_value(options, 'output_dir', 'flat_files')))
    return groups
