"""
Core protocols for PyRegress.

We use Protocol (structural typing) rather than ABC (nominal typing) so
that any iterator of numeric rows can feed the passes, not only the CSV
reader shipped here.
"""

from typing import Protocol, Iterator, Mapping, runtime_checkable


@runtime_checkable
class RowSource(Protocol):
    """
    Minimal protocol for a source of observations.

    A row source is a lazy, finite, non-restartable sequence of mappings
    from field name to numeric value. End of data is ordinary iterator
    exhaustion; malformed input raises ParseError (or another
    IngestionError) from __next__ and is fatal to the pass.
    """

    def __iter__(self) -> Iterator[Mapping[str, float]]:
        ...

    def __next__(self) -> Mapping[str, float]:
        ...
