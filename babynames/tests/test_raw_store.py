"""
Tests for raw_store module.
"""
from __future__ import annotations

import logging

import pytest

from babynames.errors import ConfigError
from babynames.model import RawRecord, Sex
from babynames.raw_store import RawRecordStore, load_pronunciations


class TestNationalDataset:
    """Tests for reading yobYYYY.txt files."""

    def test_reads_all_years(self, national_data_dir):
        store = RawRecordStore.from_directory(national_data_dir, 'national')

        assert len(store) == 7
        assert store.years() == [2000, 2001]
        assert store.year_span() == (2000, 2001)
        assert store.records[0] == RawRecord('Ann', Sex.FEMALE, 2000, 30)

    def test_skips_malformed_lines(self, tmp_path, caplog):
        """Rows with the wrong field count or bad values are logged and skipped."""
        (tmp_path / 'yob1999.txt').write_text("Ann,F,3\nBroken,F\nCal,Q,4\nDan,M,x\n", encoding='utf-8')

        with caplog.at_level(logging.WARNING, logger='babynames.raw_store'):
            store = RawRecordStore.from_directory(tmp_path, 'national')

        assert [r.name for r in store] == ['Ann']
        assert "yob1999.txt:2" in caplog.text
        assert "yob1999.txt:3" in caplog.text
        assert "yob1999.txt:4" in caplog.text

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigError):
            RawRecordStore.from_directory(tmp_path / 'nowhere', 'national')


class TestStatesDataset:
    """Tests for reading per-state XX.TXT files."""

    def test_reads_state_rows(self, tmp_path):
        states = tmp_path / 'states'
        states.mkdir()
        (states / 'AK.TXT').write_text("AK,F,1910,Mary,14\nAK,M,1910,John,8\n", encoding='utf-8')
        (states / 'AL.TXT').write_text("AL,F,1910,Mary,875\n", encoding='utf-8')
        (states / 'StateReadMe.pdf').write_bytes(b'%PDF')

        store = RawRecordStore.from_directory(tmp_path, 'states')

        assert len(store) == 3
        assert store.records[0] == RawRecord('Mary', Sex.FEMALE, 1910, 14, state='AK')
        assert store.records[2].state == 'AL'

    def test_unknown_dataset(self, national_data_dir):
        with pytest.raises(ConfigError):
            RawRecordStore.from_directory(national_data_dir / 'national', 'county')


class TestEmptyStore:
    def test_empty(self):
        store = RawRecordStore()

        assert len(store) == 0
        assert store.year_span() is None


class TestPronunciations:
    """Tests for load_pronunciations."""

    def test_first_entry_wins(self, pronunciation_file):
        """Comments and alternate pronunciations are ignored."""
        pronunciations = load_pronunciations(pronunciation_file)

        assert pronunciations == {'ANN': 'AE1 N', 'BEE': 'B IY1', 'DAN': 'D AE1 N'}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_pronunciations(tmp_path / 'none.txt')
