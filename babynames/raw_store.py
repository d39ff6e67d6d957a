"""
raw_store.py - Raw natality records read from downloaded SSA files.

Handles the national dataset (one yobYYYY.txt per year), the per-state
dataset (one XX.TXT per state) and CMU-format pronunciation dictionaries.
"""

import csv
import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from babynames.errors import ConfigError, DataError
from babynames.model import RawRecord

logger = logging.getLogger(__name__)

NATIONAL_FILE_PATTERN = re.compile(r'^yob(\d{4})\.txt$', re.IGNORECASE)
STATE_FILE_PATTERN = re.compile(r'^([A-Z]{2})\.txt$', re.IGNORECASE)
CMU_VARIANT_PATTERN = re.compile(r'\(\d+\)$')


class RawRecordStore:
    """
    In-memory collection of raw yearly counts for one run.

    Attributes:
        records (List[RawRecord]): Records in the order they were read.
    """

    def __init__(self, records: Optional[List[RawRecord]] = None) -> None:
        self.records: List[RawRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RawRecord]:
        return iter(self.records)

    def years(self) -> List[int]:
        """Sorted distinct years present in the store."""
        return sorted({record.year for record in self.records})

    def year_span(self) -> Optional[Tuple[int, int]]:
        """(first, last) year in the store, or None if it is empty."""
        years = self.years()
        if not years:
            return None
        return years[0], years[-1]

    @classmethod
    def from_directory(cls, data_dir: Path, dataset: str = "national") -> 'RawRecordStore':
        """
        Load a downloaded dataset.

        Args:
            data_dir (Path): Root data directory; files are read from
                data_dir/<dataset>, or from data_dir itself if that
                subdirectory does not exist.
            dataset (str): 'national' or 'states'.

        Returns:
            RawRecordStore: Store holding every readable record.

        Raises:
            ConfigError: If the directory or dataset is unknown.
        """
        data_dir = Path(data_dir)
        source_dir = data_dir / dataset if (data_dir / dataset).is_dir() else data_dir
        if not source_dir.is_dir():
            raise ConfigError(f"Raw data directory not found: {source_dir}. Run the download command first.")
        if dataset == "national":
            store = cls(cls._read_national(source_dir))
        elif dataset == "states":
            store = cls(cls._read_states(source_dir))
        else:
            raise ConfigError(f"Unknown dataset '{dataset}'")
        logger.info(f"Loaded {len(store)} raw records from {source_dir}")
        return store

    @staticmethod
    def _read_national(source_dir: Path) -> List[RawRecord]:
        """Read yobYYYY.txt files, lines of Name,Sex,Count."""
        records: List[RawRecord] = []
        for path in sorted(source_dir.iterdir()):
            match = NATIONAL_FILE_PATTERN.match(path.name)
            if not match:
                continue
            year = int(match.group(1))
            with open(path, 'r', encoding='utf-8', newline='') as f:
                for line_num, row in enumerate(csv.reader(f), start=1):
                    if not row:
                        continue
                    if len(row) != 3:
                        logger.warning(f"{path.name}:{line_num}: expected 3 fields, got {len(row)}; skipping")
                        continue
                    record = _parse_row(path, line_num, name=row[0], sex=row[1], year=year, count=row[2])
                    if record:
                        records.append(record)
        return records

    @staticmethod
    def _read_states(source_dir: Path) -> List[RawRecord]:
        """Read XX.TXT files, lines of State,Sex,Year,Name,Count."""
        records: List[RawRecord] = []
        for path in sorted(source_dir.iterdir()):
            if not STATE_FILE_PATTERN.match(path.name):
                continue
            with open(path, 'r', encoding='utf-8', newline='') as f:
                for line_num, row in enumerate(csv.reader(f), start=1):
                    if not row:
                        continue
                    if len(row) != 5:
                        logger.warning(f"{path.name}:{line_num}: expected 5 fields, got {len(row)}; skipping")
                        continue
                    record = _parse_row(path, line_num, name=row[3], sex=row[1], year=row[2], count=row[4], state=row[0])
                    if record:
                        records.append(record)
        return records


def _parse_row(path: Path, line_num: int, **fields) -> Optional[RawRecord]:
    """Build a RawRecord from one file row, or log and return None."""
    try:
        return RawRecord.from_dict(fields)
    except DataError as e:
        logger.warning(f"{path.name}:{line_num}: {e}; skipping")
        return None


def load_pronunciations(path: Path) -> Dict[str, str]:
    """
    Load a CMU Pronouncing Dictionary style file.

    Lines look like 'ANNA  AE1 N AH0'. Comment lines start with ';;;' and
    alternate pronunciations such as 'ANNA(1)' are ignored in favour of the
    first entry.

    Args:
        path (Path): Dictionary file.

    Returns:
        Dict[str, str]: Upper-cased word -> space-separated phonemes.

    Raises:
        ConfigError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Pronunciation dictionary not found: {path}")
    pronunciations: Dict[str, str] = {}
    with open(path, 'r', encoding='latin-1') as f:
        for line in f:
            if not line.strip() or line.startswith(';;;'):
                continue
            parts = line.split()
            if len(parts) < 2:
                continue
            word = parts[0].upper()
            if CMU_VARIANT_PATTERN.search(word) or word in pronunciations:
                continue
            pronunciations[word] = " ".join(parts[1:])
    logger.info(f"Loaded {len(pronunciations)} pronunciations from {path}")
    return pronunciations
