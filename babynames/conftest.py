"""
Pytest fixtures shared by the babynames tests.
"""
from __future__ import annotations

import pytest
from pathlib import Path
from typing import Dict, List

from babynames.model import NameRecord, Peak, Sex
from babynames.options import StoreOptions


@pytest.fixture
def raw_records() -> List[dict]:
    """Small two-year dataset with both sexes."""
    return [
        {'name': 'Ann', 'sex': 'F', 'year': 2000, 'count': 30},
        {'name': 'Bee', 'sex': 'F', 'year': 2000, 'count': 70},
        {'name': 'Ann', 'sex': 'F', 'year': 2001, 'count': 60},
        {'name': 'Bee', 'sex': 'F', 'year': 2001, 'count': 40},
        {'name': 'Cal', 'sex': 'M', 'year': 2000, 'count': 10},
        {'name': 'Dan', 'sex': 'M', 'year': 2001, 'count': 40},
        {'name': 'Cal', 'sex': 'M', 'year': 2001, 'count': 10},
        {'name': 'Ann', 'sex': 'F', 'year': 1990, 'count': 5},
    ]


@pytest.fixture
def make_record():
    """Build a NameRecord directly, peak computed from the percents."""
    def _make(name: str, percents: Dict[int, float], sex: str = 'F', pronunciation: str = None) -> NameRecord:
        peak_year = min(percents, key=lambda year: (-percents[year], year))
        return NameRecord(
            id=f"{name}-{sex}",
            name=name,
            sex=Sex(sex),
            percents=dict(percents),
            peak=Peak(year=peak_year, value=percents[peak_year]),
            total_count=0,
            pronunciation=pronunciation,
        )
    return _make


@pytest.fixture
def options_factory(tmp_path):
    """StoreOptions writing into a temporary directory."""
    def _options(**kwargs) -> StoreOptions:
        kwargs.setdefault('output_dir', tmp_path / 'out')
        kwargs.setdefault('data_dir', tmp_path / 'data')
        return StoreOptions(**kwargs)
    return _options


@pytest.fixture
def national_data_dir(tmp_path) -> Path:
    """A data directory laid out like an unpacked national archive."""
    national = tmp_path / 'data' / 'national'
    national.mkdir(parents=True)
    (national / 'yob2000.txt').write_text("Ann,F,30\nBee,F,70\nCal,M,10\n", encoding='utf-8')
    (national / 'yob2001.txt').write_text("Ann,F,60\nBee,F,40\nCal,M,10\nDan,M,40\n", encoding='utf-8')
    (national / 'NationalReadMe.pdf').write_bytes(b'%PDF')
    return tmp_path / 'data'


@pytest.fixture
def pronunciation_file(tmp_path) -> Path:
    """CMU-style dictionary covering some of the sample names."""
    path = tmp_path / 'cmudict.txt'
    path.write_text(
        ";;; comment line\n"
        "ANN  AE1 N\n"
        "ANN(1)  AA1 N\n"
        "BEE  B IY1\n"
        "DAN  D AE1 N\n",
        encoding='latin-1',
    )
    return path
