"""
Streaming row source for PyRegress.

CSVRowSource is the "I have rows" abstraction. It doesn't know which
field is the target or what the rows will train. It just turns text into
mappings from field name to float, one row at a time.

Usage:
    from pyregress.core.rows import CSVRowSource

    rows = CSVRowSource.from_file("samples.csv")
    for row in rows:
        row['user_us']   # float

    rows = CSVRowSource.from_rows([{'a': 1.0, 'user_us': 2.0}])

The first line of a CSV file is the header; every later non-blank line is
a data row. Files are read lazily in chunks, so memory use does not grow
with the file. A source can be iterated only once.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

import numpy as np
import pandas as pd

from pyregress.core.exceptions import IngestionError, ParseError, ValidationError
from pyregress.core.validation import check_name, check_positive_int, check_predictors


DEFAULT_CHUNKSIZE = 1024

_LINE_IN_MESSAGE = re.compile(r"line (\d+)")


class CSVRowSource:
    """
    Lazy, finite, non-restartable sequence of numeric rows.

    Construct via factory classmethods, not directly.

    End of data is ordinary iterator exhaustion. Any malformed row raises
    ParseError from __next__; there is no partial-row recovery.
    """

    def __init__(self, rows: Iterator[dict[str, float]], *, path: str | None = None):
        self._rows = rows
        self._path = path
        self._iterated = False
        self._rows_read = 0

    # === Iteration ===

    def __iter__(self) -> CSVRowSource:
        if self._iterated:
            raise IngestionError(
                f"Row source {self._path or '<rows>'} has already been iterated; "
                f"row sources are single-use",
                path=self._path,
            )
        self._iterated = True
        return self

    def __next__(self) -> dict[str, float]:
        row = next(self._rows)
        self._rows_read += 1
        return row

    # === Properties ===

    @property
    def path(self) -> str | None:
        """Source file, or None for in-memory rows."""
        return self._path

    @property
    def rows_read(self) -> int:
        """Number of data rows yielded so far."""
        return self._rows_read

    # === Factory Methods ===

    @classmethod
    def from_file(cls, path: str | Path, *, chunksize: int = DEFAULT_CHUNKSIZE) -> CSVRowSource:
        """
        Stream rows from a CSV file with a header line.

        Args:
            path: CSV file to read
            chunksize: Number of lines parsed per pandas chunk

        Raises:
            IngestionError: If the file does not exist
            ValidationError: If chunksize is not a positive int
        """
        chunksize = check_positive_int(chunksize, 'chunksize')
        path = Path(path)
        if not path.is_file():
            raise IngestionError(f"No such file: {path}", path=str(path))
        return cls(_read_csv(path, chunksize), path=str(path))

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> CSVRowSource:
        """
        Wrap already-parsed mappings.

        Each mapping is validated and copied as it is consumed.
        """
        return cls(_check_rows(rows))


def _check_rows(rows: Iterable[Mapping[str, Any]]) -> Iterator[dict[str, float]]:
    for line, row in enumerate(rows, start=1):
        try:
            yield check_predictors(row, 'row')
        except ValidationError as e:
            raise ParseError(f"row {line}: {e}", line=line) from e


def _read_csv(path: Path, chunksize: int) -> Iterator[dict[str, float]]:
    """
    Yield one dict per data line of a CSV file.

    The header line is read on its own first; its width is then pinned
    with explicit ``names`` for the chunked read. The header line stays in
    the chunked stream as row 0 (and is dropped) so the first data row is
    held to the same width as every other row, and is never mistaken for
    an index column. The python engine checks every row against that
    width regardless of where chunks start. Line numbers count non-blank
    lines only.
    """
    options = dict(
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        engine='python',
    )
    try:
        first = pd.read_csv(path, nrows=1, **options)
    except pd.errors.EmptyDataError:
        return
    except pd.errors.ParserError as e:
        raise _parser_error(e, path) from e
    except OSError as e:
        raise IngestionError(f"Cannot read {path}: {e}", path=str(path)) from e

    columns = _header(first.iloc[0], path)
    reader = pd.read_csv(
        path,
        names=list(range(len(columns))),
        chunksize=chunksize,
        **options,
    )

    header_pending = True
    with reader:
        while True:
            try:
                chunk = next(reader)
            except StopIteration:
                return
            except pd.errors.ParserError as e:
                raise _parser_error(e, path) from e

            if header_pending:
                header_pending = False
                chunk = chunk.iloc[1:]
                if chunk.empty:
                    continue

            values = _to_float(chunk, columns, path)
            for record in values.tolist():
                yield dict(zip(columns, record))


def _parser_error(error: pd.errors.ParserError, path: Path) -> ParseError:
    """Wrap a tokenizer error, keeping the line number it reports."""
    match = _LINE_IN_MESSAGE.search(str(error))
    line = int(match.group(1)) if match else None
    return ParseError(f"{path}: {error}", path=str(path), line=line)


def _header(first: pd.Series, path: Path) -> list[str]:
    """Validate the header line and return the column names."""
    columns = []
    for position, name in enumerate(first.tolist()):
        if _is_missing(name):
            raise ParseError(
                f"{path}: header column {position} is empty",
                path=str(path), line=1,
            )
        columns.append(check_name(name, 'header'))
    return columns


def _to_float(chunk: pd.DataFrame, columns: list[str], path: Path) -> np.ndarray:
    """
    Convert a chunk of text fields to a float64 matrix.

    Fast path converts the whole chunk at once; on failure the chunk is
    rescanned cell by cell to report the first offending field.
    """
    text = chunk.to_numpy(dtype=object)
    missing = np.frompyfunc(_is_missing, 1, 1)(text).astype(bool)
    if not missing.any():
        try:
            return text.astype(np.float64)
        except (TypeError, ValueError):
            pass
    _raise_first_bad_field(chunk, columns, path)
    raise AssertionError("chunk failed float conversion but no bad field was found")


def _raise_first_bad_field(chunk: pd.DataFrame, columns: list[str], path: Path) -> None:
    for index, record in zip(chunk.index, chunk.itertuples(index=False)):
        line = int(index) + 1
        for column, text in zip(columns, record):
            if _is_missing(text):
                raise ParseError(
                    f"{path}:{line}: missing value for column {column!r}",
                    path=str(path), line=line, column=column, value=None,
                )
            try:
                float(text)
            except ValueError as e:
                raise ParseError(
                    f"{path}:{line}: cannot parse {text!r} in column {column!r} as a number",
                    path=str(path), line=line, column=column, value=text,
                ) from e


def _is_missing(text: Any) -> bool:
    return not isinstance(text, str) or text == ''
