"""
cli.py - Command line entry point.

Usage:
    babynames download [--states]
    babynames store --format=<json|csv|csvs|jsonp|mongo|mongodb> [--N=<int>]
                    [--phonemes=1] [--db_name=<name>] [--mongo_uri=<uri>]
                    [--start=<year>] [--end=<year>]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from babynames.aggregate import aggregate, resolve_year_range
from babynames.analysis import AnalysisPipeline, get_analysis_registry
from babynames.download import download
from babynames.errors import BabyNamesError, ConfigError
from babynames.options import StoreOptions
from babynames.raw_store import RawRecordStore, load_pronunciations
from babynames.sinks import dispatch_output

logger = logging.getLogger(__name__)

COMMANDS = ('download', 'store')

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def configure_logging(level: Optional[str]) -> None:
    """Configure the root logger; level names are case-insensitive."""
    numeric_level = logging.getLevelName(str(level or 'info').upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger().setLevel(numeric_level)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the top-level CLI parser.

    Analysis flags are generated from the analysis registry, so every
    registered analysis can be switched on with --<key>=1.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log", "--log_level", dest="log", help="Log level (debug, info, warning, error)")
    common.add_argument("--data-dir", "--data_dir", dest="data_dir", help="Directory for raw data")

    parser = argparse.ArgumentParser(prog="babynames", description="Baby name statistics from SSA natality data")
    subparsers = parser.add_subparsers(dest="command")

    download_parser = subparsers.add_parser("download", parents=[common], help="Download raw data")
    download_parser.add_argument("--states", action="store_true", help="Per-state dataset instead of national")

    store_parser = subparsers.add_parser("store", parents=[common], help="Aggregate, analyse and write names")
    store_parser.add_argument("--format", help="json, csv, csvs, jsonp, mongo or mongodb")
    store_parser.add_argument("--N", type=int, help="Phoneme index for the phonemes analysis")
    store_parser.add_argument("--db_name", help="Document-store database name")
    store_parser.add_argument("--mongo_uri", help="Document-store connection URI")
    store_parser.add_argument("--start", type=int, help="First year (default: first year in the data)")
    store_parser.add_argument("--end", type=int, help="Last year (default: last year in the data)")
    store_parser.add_argument("--output-dir", "--output_dir", dest="output_dir", help="Directory for output files")
    store_parser.add_argument("--states", action="store_true", help="Read the per-state dataset")
    store_parser.add_argument("--pronunciations", help="CMU-format pronunciation dictionary")
    store_parser.add_argument("--config", help="YAML options file")
    for key in get_analysis_registry().keys():
        store_parser.add_argument(f"--{key}", nargs="?", const="1", default=None, help=f"Run the {key} analysis")
    return parser


def _store_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Options given explicitly on the command line."""
    overrides: Dict[str, Any] = {
        'format': args.format,
        'N': args.N,
        'db_name': args.db_name,
        'mongo_uri': args.mongo_uri,
        'start': args.start,
        'end': args.end,
        'output_dir': args.output_dir,
        'data_dir': args.data_dir,
        'pronunciations': args.pronunciations,
        'dataset': 'states' if args.states else None,
    }
    analyses = {}
    for key in get_analysis_registry().keys():
        value = getattr(args, key, None)
        if value is not None:
            analyses[key] = value
    if analyses:
        overrides['analyses'] = analyses
    return overrides


def run_store(options: StoreOptions) -> Any:
    """
    Aggregate raw data, run enabled analyses and write the result.

    Args:
        options: Run options; validated before any data is read.

    Returns:
        Whatever the chosen sink reports (files written or document count)
    """
    options.validate()
    pronunciations = load_pronunciations(options.pronunciations) if options.pronunciations else None
    store = RawRecordStore.from_directory(options.data_dir, options.dataset)

    year_range = resolve_year_range(store, options.start, options.end)
    if year_range is not None:
        options = options.with_year_range(*year_range)

    data = aggregate(store.records, options, pronunciations=pronunciations)
    AnalysisPipeline().run(data, options)
    return dispatch_output(data, options)


def run_download(args: argparse.Namespace) -> List[Path]:
    dataset = 'states' if args.states else 'national'
    return download(dataset=dataset, data_dir=Path(args.data_dir or 'data'))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code: 0 on success, 2 for configuration errors,
        1 for any other failure.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] not in COMMANDS:
        configure_logging('info')
        logger.error(f"Command not found. Options are: {', '.join(COMMANDS)}")
        return EXIT_CONFIG_ERROR

    args = build_parser().parse_args(argv)
    configure_logging(args.log)

    try:
        if args.command == 'download':
            run_download(args)
        else:
            options = StoreOptions.load(
                config_file=Path(args.config) if args.config else None,
                overrides=_store_overrides(args),
            )
            run_store(options)
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    except BabyNamesError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    return EXIT_OK
