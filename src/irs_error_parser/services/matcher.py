"""
Name lookup strategies and error/name correlation.

Provides pluggable strategies for finding the name record that shares an
error record's key, and correlate() which joins an error sequence against
one of them.

Design:
- Strategy Pattern: lookups are interchangeable
- The name side is fully materialized before correlation starts
- Duplicate name keys: the FIRST occurrence in file order wins, in every
  strategy
"""

import logging
from abc import ABC, abstractmethod
from bisect import bisect_left
from typing import Dict, Iterable, Iterator, Optional

from irs_error_parser.models import ErrorRecord, NameRecord, OutputRow, RecordCollection
from irs_error_parser.validators import validate_lookup_strategy

logger = logging.getLogger(__name__)


class NameLookup(ABC):
    """
    Abstract base class for name lookup strategies.

    Finds the name record for a record key.
    """

    @abstractmethod
    def find(self, record_id: int) -> Optional[NameRecord]:
        """
        Find the name record with the given key.

        Args:
            record_id: Key of an error record

        Returns:
            Matching NameRecord (first occurrence), or None
        """
        pass


class IndexLookup(NameLookup):
    """
    Hash index keyed by record_id, built once up front.

    Constant-time lookups. Default strategy.
    """

    def __init__(self, names: Iterable[NameRecord]):
        self._index: Dict[int, NameRecord] = {}
        duplicates = 0
        for record in names:
            if record.record_id in self._index:
                duplicates += 1
                continue  # first occurrence wins
            self._index[record.record_id] = record

        if duplicates:
            logger.warning(f"{duplicates} name records share a key with an earlier record; keeping the first")

    def find(self, record_id: int) -> Optional[NameRecord]:
        return self._index.get(record_id)

    def __len__(self) -> int:
        return len(self._index)


class SortedLookup(NameLookup):
    """
    Binary search over a key-sorted collection.

    Logarithmic lookups without building an extra index. Because the
    collection is sorted stably, bisect_left lands on the first occurrence
    of a duplicated key.

    Args:
        names: RecordCollection sorted ascending by record_id

    Raises:
        ValueError: If the collection is not sorted
    """

    def __init__(self, names: RecordCollection[NameRecord]):
        if not names.is_sorted:
            raise ValueError("SortedLookup requires a collection sorted by record_id")
        self._names = names
        self._keys = names.keys

    def find(self, record_id: int) -> Optional[NameRecord]:
        pos = bisect_left(self._keys, record_id)
        if pos < len(self._keys) and self._keys[pos] == record_id:
            return self._names[pos]
        return None


class LinearScanLookup(NameLookup):
    """
    Scan the name records in order for every lookup.

    Only suitable for small inputs.
    """

    def __init__(self, names: Iterable[NameRecord]):
        self._names = list(names)

    def find(self, record_id: int) -> Optional[NameRecord]:
        for record in self._names:
            if record.record_id == record_id:
                return record
        return None


def create_lookup(names: Iterable[NameRecord], strategy: str = 'index') -> NameLookup:
    """
    Create a name lookup from its configuration name.

    Args:
        names: Name records (a sorted RecordCollection for 'sorted'; other
               iterables are drained and sorted first)
        strategy: 'index', 'sorted' or 'linear'

    Returns:
        NameLookup instance

    Raises:
        ValueError: If strategy is unknown
    """
    validate_lookup_strategy(strategy)

    if strategy == 'sorted':
        if not isinstance(names, RecordCollection) or not names.is_sorted:
            names = RecordCollection(names, sort=True)
        return SortedLookup(names)
    if strategy == 'linear':
        return LinearScanLookup(names)
    return IndexLookup(names)


def match_error(error: ErrorRecord, lookup: NameLookup) -> OutputRow:
    """
    Build the output row for a single error record.

    Args:
        error: Error record
        lookup: Name lookup strategy

    Returns:
        OutputRow with names filled in if a name record shares the key
    """
    name = lookup.find(error.record_id)
    if name is None:
        return OutputRow(record_id=error.record_id, error_text=error.error_text)
    return OutputRow(
        record_id=error.record_id,
        error_text=error.error_text,
        first_name=name.first_name,
        last_name=name.last_name,
    )


def correlate(errors: Iterable[ErrorRecord], lookup: NameLookup) -> Iterator[OutputRow]:
    """
    Join error records against name records by record_id.

    Exactly one row per error record, in the order the errors arrive.
    Works lazily, so errors can come straight from a RecordStream.

    Args:
        errors: Error records (any iterable, consumed once)
        lookup: Name lookup strategy

    Yields:
        OutputRow per error record

    Example:
        >>> lookup = IndexLookup(names)
        >>> [row.as_cells() for row in correlate(errors, lookup)]
        [(1, 'Missing SSN', 'Ann', 'Lee'), (3, 'Bad DOB', '', '')]
    """
    for error in errors:
        yield match_error(error, lookup)
