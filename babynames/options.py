"""
options.py - Run options for the store command.

Defaults are loaded from config.yaml next to this module. A user YAML file
and explicit overrides (usually parsed command-line flags) are layered on top.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
import yaml

from babynames.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

FLAT_FILE_FORMATS = ('json', 'csv', 'csvs', 'jsonp')
DOCUMENT_STORE_FORMATS = ('mongo', 'mongodb')
SUPPORTED_FORMATS = FLAT_FILE_FORMATS + DOCUMENT_STORE_FORMATS
DATASETS = ('national', 'states')

FALSE_STRINGS = ('', '0', 'false', 'no', 'off')


def is_truthy(value: Any) -> bool:
    """Interpret a flag value the way a command line would."""
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def option_value(options: Any, key: str, default: Any = None) -> Any:
    """
    Read one option from a StoreOptions-like object or a plain mapping.

    A missing key or a None value gives the default.
    """
    if isinstance(options, Mapping):
        value = options.get(key)
    else:
        value = getattr(options, key, None)
    return default if value is None else value


def load_yaml_options(path: Path) -> Dict[str, Any]:
    """
    Load an options mapping from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        dict: Parsed mapping (empty for an empty file).

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping.
    """
    if not path or not Path(path).exists():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


@dataclass
class StoreOptions:
    """
    Options for one run of the store command.

    Attributes:
        format: Output format, lowercased (json, csv, csvs, jsonp, mongo, mongodb)
        start: First year of the percents range, None for the data's first year
        end: Last year of the percents range, None for the data's last year
        N: Index of the phoneme used by the phonemes analysis
        db_name: Document-store database name
        mongo_uri: Document-store connection URI
        collection: Document-store collection name
        data_dir: Directory holding downloaded raw data
        dataset: Which raw dataset to read (national or states)
        output_dir: Directory for flat files and analysis artifacts
        pronunciations: Optional CMU-format pronunciation dictionary
        jsonp_callback: Function name wrapping jsonp output
        analyses: Analysis key -> enabled flag
    """
    format: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    N: int = 0
    db_name: str = "babynames"
    mongo_uri: str = "mongodb://localhost:27017"
    collection: str = "names"
    data_dir: Path = Path("data")
    dataset: str = "national"
    output_dir: Path = Path("flat_files")
    pronunciations: Optional[Path] = None
    jsonp_callback: str = "babynames"
    analyses: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.format is not None:
            self.format = str(self.format).strip().lower() or None
        self.start = None if self.start is None else int(self.start)
        self.end = None if self.end is None else int(self.end)
        self.N = int(self.N or 0)
        self.data_dir = Path(self.data_dir)
        self.output_dir = Path(self.output_dir)
        if self.pronunciations is not None:
            self.pronunciations = Path(self.pronunciations)
        self.analyses = {key: is_truthy(value) for key, value in (self.analyses or {}).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StoreOptions:
        """
        Create options from a dictionary.

        Keys that do not name a field are treated as analysis flags when
        their key is already listed under 'analyses', and are otherwise
        ignored with a warning.

        Args:
            data: Mapping of option name to value.

        Returns:
            StoreOptions instance
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        analyses = dict(data.get('analyses') or {})
        for key, value in data.items():
            if key == 'analyses':
                continue
            if key in known:
                kwargs[key] = value
            elif key in analyses:
                analyses[key] = value
            else:
                logger.warning(f"Ignoring unknown option '{key}'")
        return cls(analyses=analyses, **kwargs)

    @classmethod
    def load(
        cls,
        config_file: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> StoreOptions:
        """
        Build options from packaged defaults, an optional user file and overrides.

        Overrides whose value is None are treated as not given.

        Args:
            config_file: Optional user YAML file.
            overrides: Values taking precedence over both files.

        Returns:
            StoreOptions instance
        """
        merged = load_yaml_options(DEFAULT_CONFIG_PATH)
        layers = []
        if config_file:
            layers.append(load_yaml_options(Path(config_file)))
            logger.info(f"Loaded options from {config_file}")
        if overrides:
            layers.append({k: v for k, v in overrides.items() if v is not None})
        for layer in layers:
            analyses = dict(merged.get('analyses') or {})
            analyses.update(layer.get('analyses') or {})
            merged.update({k: v for k, v in layer.items() if k != 'analyses'})
            merged['analyses'] = analyses
        return cls.from_dict(merged)

    def validate(self) -> None:
        """
        Check options that must hold before any work starts.

        Raises:
            ConfigError: If format is missing or unknown, the dataset is
                unknown, or start is after end.
        """
        if not self.format:
            raise ConfigError(
                "Please provide a --format param. Options are " + ", ".join(SUPPORTED_FORMATS)
            )
        if self.format not in SUPPORTED_FORMATS:
            raise ConfigError(
                f"Unsupported format '{self.format}'. Options are " + ", ".join(SUPPORTED_FORMATS)
            )
        if self.dataset not in DATASETS:
            raise ConfigError(f"Unknown dataset '{self.dataset}'. Options are " + ", ".join(DATASETS))
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ConfigError(f"start ({self.start}) must not be after end ({self.end})")

    def is_enabled(self, key: str) -> bool:
        """
        Check whether an analysis flag is set.

        Args:
            key: Analysis key, e.g. 'phonemes'

        Returns:
            True if the flag is truthy, False if unset or falsy
        """
        return is_truthy(self.analyses.get(key, False))

    @property
    def uses_document_store(self) -> bool:
        return self.format in DOCUMENT_STORE_FORMATS

    def year_range(self) -> Tuple[int, int]:
        """
        The resolved (start, end) range.

        Raises:
            ConfigError: If the range has not been resolved yet.
        """
        if self.start is None or self.end is None:
            raise ConfigError("Year range is not resolved; set start and end")
        return self.start, self.end

    def with_year_range(self, start: int, end: int) -> StoreOptions:
        """Copy of these options with the given year range."""
        return replace(self, start=start, end=end)
