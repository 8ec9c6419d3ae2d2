# ==============================================
# Record and Markup Sources
# ==============================================
#
# PURPOSE:
#   Thin adapters that deliver the two pipeline inputs. They are the
#   only place where files and the network are touched; the core only
#   ever sees parsed records and markup.
#
# CONTRACTS:
# ----------
# - TabularDataSource.records() -> list[dict]
#     InMemoryDataSource    → records handed in by the caller
#     DelimitedFileSource   → TSV / CSV files read with pandas
#
# - MarkupSnapshotSource.snapshot() -> str | Tag
#     StaticMarkupSource    → markup (or a parsed tree) handed in
#     FileMarkupSource      → markup read from a file
#     HttpMarkupSource      → markup fetched with requests
#
#   Every adapter raises SourceError when it cannot deliver.
#
# ==============================================

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
import requests

from ..exceptions import SourceError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ======================================
# Tabular data
# ======================================
class TabularDataSource(ABC):
    """
    Abstract base class for anything that yields parsed tabular records.
    """

    @abstractmethod
    def records(self) -> List[Dict[str, Any]]:
        """
        Return the parsed records, flattened across source tables.

        Raises:
            SourceError: If the records cannot be read.
        """
        pass


class InMemoryDataSource(TabularDataSource):
    """Records that are already parsed."""

    def __init__(self, records: Iterable[Dict[str, Any]]):
        self._records = list(records)

    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)


class DelimitedFileSource(TabularDataSource):
    """
    Reads one or more TSV/CSV exports into a single record list.

    Tab is the delimiter for ``.tsv`` files, comma otherwise. Every cell
    is read as a string and blank cells become empty strings, so value
    detection happens in the classifier and not in pandas.
    """

    def __init__(self, paths: Union[PathLike, Iterable[PathLike]], delimiter: Optional[str] = None):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self.paths = [Path(p) for p in paths]
        self.delimiter = delimiter

    def records(self) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        for path in self.paths:
            delimiter = self.delimiter or self.delimiter_for(path)
            try:
                frame = self._read(path, delimiter)
            except (OSError, ValueError, pd.errors.ParserError) as e:
                raise SourceError(f"Failed to read tabular file {path}: {e}") from e

            file_records = frame.to_dict(orient="records")
            logger.info("Read %d records from %s", len(file_records), path)
            records.extend(file_records)
        return records

    @staticmethod
    def delimiter_for(path: PathLike) -> str:
        return "\t" if Path(path).suffix.lower() == ".tsv" else ","

    @staticmethod
    def _read(source: Any, delimiter: str) -> pd.DataFrame:
        try:
            return pd.read_csv(
                source,
                sep=delimiter,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame()

    @classmethod
    def from_text(cls, text: str, delimiter: str = ",") -> List[Dict[str, Any]]:
        """
        Parse delimited content that is already in memory.

        Returns:
            List of records; empty for blank content.
        """
        if not text or not text.strip():
            return []
        try:
            frame = cls._read(io.StringIO(text), delimiter)
        except (ValueError, pd.errors.ParserError) as e:
            raise SourceError(f"Failed to parse delimited text: {e}") from e
        return frame.to_dict(orient="records")


# ======================================
# Markup snapshots
# ======================================
class MarkupSnapshotSource(ABC):
    """
    Abstract base class for anything that yields a markup snapshot.
    """

    @abstractmethod
    def snapshot(self) -> Any:
        """
        Return markup text or an already parsed BeautifulSoup tree.

        Raises:
            SourceError: If the snapshot cannot be obtained.
        """
        pass


class StaticMarkupSource(MarkupSnapshotSource):
    """Markup (or a parsed tree) handed in by the caller."""

    def __init__(self, markup: Any):
        self.markup = markup

    def snapshot(self) -> Any:
        return self.markup


class FileMarkupSource(MarkupSnapshotSource):
    """Markup saved to a file (e.g. a page.content() dump)."""

    def __init__(self, path: PathLike, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def snapshot(self) -> str:
        try:
            return self.path.read_text(encoding=self.encoding, errors="replace")
        except OSError as e:
            raise SourceError(f"Failed to read markup file {self.path}: {e}") from e


class HttpMarkupSource(MarkupSnapshotSource):
    """
    Fetches server-rendered markup with a plain GET.

    Client-side rendered pages need a browser snapshot instead; this
    adapter only sees what the server sends.
    """

    def __init__(self, url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def snapshot(self) -> str:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceError(f"Failed to fetch markup from {self.url}: {e}") from e

        logger.info("Fetched %d characters of markup from %s", len(response.text), self.url)
        return response.text
