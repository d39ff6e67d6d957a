"""
download.py - Fetch the SSA baby names archives.

The national archive holds one yobYYYY.txt per year; the per-state archive
one XX.TXT per state. Each is unpacked into <data_dir>/<dataset>/.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, List

import requests

from babynames.errors import ConfigError, SourceError

logger = logging.getLogger(__name__)

DATASET_URLS: Dict[str, str] = {
    'national': "https://www.ssa.gov/oact/babynames/names.zip",
    'states': "https://www.ssa.gov/oact/babynames/state/namesbystate.zip",
}
DOWNLOAD_TIMEOUT = 60  # seconds
CHUNK_SIZE = 1 << 16
USER_AGENT = "babynames-downloader"


def fetch_archive(url: str, timeout: int = DOWNLOAD_TIMEOUT) -> bytes:
    """
    Download an archive into memory.

    Args:
        url (str): Archive URL.
        timeout (int): Seconds before giving up on the connection.

    Returns:
        bytes: The archive contents.

    Raises:
        SourceError: On any HTTP or network failure.
    """
    logger.info(f"Downloading {url}")
    buffer = io.BytesIO()
    try:
        with requests.get(url, stream=True, timeout=timeout, headers={'User-Agent': USER_AGENT}) as response:
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                buffer.write(chunk)
    except requests.RequestException as e:
        raise SourceError(f"Failed to download {url}: {e}")
    logger.debug(f"Downloaded {buffer.tell()} bytes from {url}")
    return buffer.getvalue()


def extract_archive(content: bytes, target_dir: Path) -> List[Path]:
    """
    Unpack the .txt members of a zip archive into target_dir.

    Raises:
        SourceError: If the archive is corrupt or cannot be written.
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            for member in archive.infolist():
                name = Path(member.filename).name
                if member.is_dir() or not name.lower().endswith('.txt'):
                    continue
                path = target_dir / name
                path.write_bytes(archive.read(member))
                written.append(path)
    except (zipfile.BadZipFile, OSError) as e:
        raise SourceError(f"Failed to unpack archive into {target_dir}: {e}")
    return written


def download(dataset: str = "national", data_dir: Path = Path("data")) -> List[Path]:
    """
    Download and unpack one SSA dataset.

    Args:
        dataset (str): 'national' or 'states'.
        data_dir (Path): Root data directory.

    Returns:
        List[Path]: Extracted data files.

    Raises:
        ConfigError: If the dataset is unknown.
        SourceError: If fetching or unpacking fails.
    """
    url = DATASET_URLS.get(dataset)
    if url is None:
        raise ConfigError(f"Unknown dataset '{dataset}'. Options are " + ", ".join(DATASET_URLS))
    target_dir = Path(data_dir) / dataset
    files = extract_archive(fetch_archive(url), target_dir)
    logger.info(f"Extracted {len(files)} files to {target_dir}")
    return files
