"""
flat_files.py - Write aggregated names as JSON, JSONP or CSV files.

Layout under the output directory:
    json   names.json          one array of every record
    jsonp  jsonp/<id>.js       one callback-wrapped record per file
    csv    names.csv           one row per record, a column per year
    csvs   csvs/<id>.csv       one year,percent table per record
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from babynames.errors import ConfigError, SinkError
from babynames.model import NameRecord
from babynames.options import option_value

logger = logging.getLogger(__name__)

CSV_FIXED_COLUMNS = ['id', 'name', 'sex', 'total_count', 'peak_year', 'peak_value']


def _write_json(data: Mapping[str, NameRecord], output_dir: Path, options: Any) -> List[Path]:
    path = output_dir / "names.json"
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([record.to_dict() for record in data.values()], f)
    return [path]


def _write_jsonp(data: Mapping[str, NameRecord], output_dir: Path, options: Any) -> List[Path]:
    callback = option_value(options, 'jsonp_callback') or "babynames"
    directory = output_dir / "jsonp"
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for record in data.values():
        path = directory / f"{record.id}.js"
        with open(path, 'w', encoding='utf-8') as f:
            f.write(f"{callback}({json.dumps(record.to_dict())});")
        paths.append(path)
    return paths


def _year_columns(data: Mapping[str, NameRecord]) -> List[int]:
    for record in data.values():
        return list(record.percents)
    return []


def _write_csv(data: Mapping[str, NameRecord], output_dir: Path, options: Any) -> List[Path]:
    path = output_dir / "names.csv"
    years = _year_columns(data)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_FIXED_COLUMNS + [str(year) for year in years])
        for record in data.values():
            writer.writerow(
                [record.id, record.name, record.sex.value, record.total_count, record.peak.year, record.peak.value]
                + [record.percents.get(year, 0) for year in years]
            )
    return [path]


def _write_csvs(data: Mapping[str, NameRecord], output_dir: Path, options: Any) -> List[Path]:
    directory = output_dir / "csvs"
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for record in data.values():
        path = directory / f"{record.id}.csv"
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['year', 'percent'])
            for year, value in record.percents.items():
                writer.writerow([year, value])
        paths.append(path)
    return paths


WRITERS: Dict[str, Callable[[Mapping[str, NameRecord], Path, Any], List[Path]]] = {
    'json': _write_json,
    'jsonp': _write_jsonp,
    'csv': _write_csv,
    'csvs': _write_csvs,
}


def write_flat_files(data: Mapping[str, NameRecord], options: Any) -> List[Path]:
    """
    Write aggregated data in the format named by the options.

    Args:
        data: Aggregated name id -> NameRecord
        options: Run options; uses format, output_dir and jsonp_callback

    Returns:
        List[Path]: Files written.

    Raises:
        ConfigError: If the format has no flat-file writer.
        SinkError: If a file cannot be written.
    """
    fmt = str(option_value(options, 'format', '')).lower()
    writer = WRITERS.get(fmt)
    if writer is None:
        raise ConfigError(f"No flat-file writer for format '{fmt}'. Options are " + ", ".join(WRITERS))
    output_dir = Path(option_value(options, 'output_dir', 'flat_files'))
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = writer(data, output_dir, options)
    except OSError as e:
        raise SinkError(f"Failed to write {fmt} output to {output_dir}: {e}")
    logger.info(f"Wrote {len(data)} names as {fmt} to {output_dir} ({len(paths)} files)")
    return paths
