"""
Data models for raw natality records and aggregated name profiles.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from babynames.errors import DataError


class Sex(str, Enum):
    """Sex as recorded in the source data."""
    MALE = "M"
    FEMALE = "F"

    @classmethod
    def parse(cls, value: Any) -> Sex:
        """
        Parse a sex code, case-insensitively.

        Raises:
            DataError: If the value is not M or F.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise DataError(f"Unknown sex code: {value!r}")


@dataclass(frozen=True)
class RawRecord:
    """
    A single yearly count for one name.

    Attributes:
        name: Given name as spelled in the source
        sex: Sex the count applies to
        year: Year of birth
        count: Number of births
        state: Two letter state code for the per-state dataset, else None
    """
    name: str
    sex: Sex
    year: int
    count: int
    state: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> RawRecord:
        """
        Create a RawRecord from a dictionary, converting types as needed.

        A missing name is kept as an empty string so the aggregator can
        report and skip it.

        Args:
            d (dict): Dictionary with name, sex, year and count keys.
        Returns:
            RawRecord: The constructed record.
        Raises:
            DataError: If sex, year or count cannot be parsed.
        """
        name = d.get('name') or ''
        sex = Sex.parse(d.get('sex'))
        try:
            year = int(d.get('year'))
            count = int(d.get('count'))
        except (TypeError, ValueError):
            raise DataError(f"Malformed year/count in raw record: {d!r}")
        return cls(name=str(name).strip(), sex=sex, year=year, count=count, state=d.get('state'))


@dataclass(frozen=True)
class Peak:
    """Year and percentage of a name's most popular year."""
    year: int
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {'year': self.year, 'value': self.value}


def make_name_id(name: str, sex: Sex) -> str:
    """Identifier for a (name, sex) pair, e.g. 'Ann-F'."""
    return f"{name}-{Sex.parse(sex).value}"


@dataclass(frozen=True)
class NameRecord:
    """
    Aggregated profile of one name for one sex.

    Attributes:
        id: Identifier derived from name and sex
        name: Given name
        sex: Sex of the births counted
        percents: Year -> percentage of that year's same-sex births,
            covering exactly the configured year range
        peak: Highest entry in percents, earliest year on ties
        total_count: Births across the whole available history
        pronunciation: Whitespace-delimited phonemes, if known
    """
    id: str
    name: str
    sex: Sex
    percents: Dict[int, float]
    peak: Peak
    total_count: int
    pronunciation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'sex': self.sex.value,
            'pronunciation': self.pronunciation,
            'percents': {str(year): value for year, value in self.percents.items()},
            'peak': self.peak.to_dict(),
            'total_count': self.total_count,
        }

    def to_document(self) -> Dict[str, Any]:
        """Dictionary tagged with an explicit document-store identifier."""
        document = self.to_dict()
        document['_id'] = self.id
        return document


@dataclass
class PhonemeGroup:
    """
    Names sharing one phoneme, with their percentages summed per year.

    Attributes:
        phoneme: The grouping token
        names: Member names, most popular peak first
        percents: (year, value) pairs with zero years dropped
    """
    phoneme: str
    names: List[str] = field(default_factory=list)
    percents: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'phoneme': self.phoneme, 'names': list(self.names), 'percents': list(self.percents)}
