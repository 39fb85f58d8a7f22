"""
RecordCollection: immutable, ordered records of one kind.

A collection is produced by fully draining a RecordStream. It is either
key-sorted (ready for binary search) or kept in file order.
"""

from bisect import bisect_left
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union, overload

from irs_error_parser.models.records import KeyedRecord

R = TypeVar('R', bound=KeyedRecord)


class RecordCollection(Generic[R]):
    """
    Ordered, read-only collection of records of a single kind.

    Sorting is stable, so records sharing a key keep their file order and
    the first occurrence is always the one found by find().

    Attributes:
        is_sorted: True if records are ordered ascending by record_id

    Example:
        >>> names = RecordCollection(stream, sort=True)
        >>> len(names)
        3
        >>> names.find(2).first_name
        'Bo'
        >>> names[0].record_id
        1
    """

    def __init__(self, records: Iterable[R], sort: bool = False):
        """
        Drain records into the collection.

        Args:
            records: Any iterable of records (typically a RecordStream)
            sort: Sort ascending by record_id after draining
        """
        items: List[R] = list(records)
        if sort:
            items.sort(key=lambda r: r.record_id)
        self._records: Tuple[R, ...] = tuple(items)
        self._keys: Tuple[int, ...] = tuple(r.record_id for r in self._records)
        self.is_sorted = sort or _keys_ascending(self._keys)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    @overload
    def __getitem__(self, key: int) -> R: ...

    @overload
    def __getitem__(self, key: slice) -> 'RecordCollection[R]': ...

    def __getitem__(self, key: Union[int, slice]) -> Union[R, 'RecordCollection[R]']:
        """Access by position, or slice into a new collection."""
        if isinstance(key, slice):
            return RecordCollection(self._records[key])
        return self._records[key]

    def __repr__(self) -> str:
        return f"RecordCollection(count={len(self)}, sorted={self.is_sorted})"

    @property
    def keys(self) -> Tuple[int, ...]:
        """Record keys in collection order."""
        return self._keys

    def find(self, record_id: int) -> Optional[R]:
        """
        Find the first record with the given key.

        Uses binary search when the collection is sorted, a linear scan
        otherwise.

        Args:
            record_id: Key to look up

        Returns:
            First matching record, or None
        """
        if self.is_sorted:
            pos = bisect_left(self._keys, record_id)
            if pos < len(self._keys) and self._keys[pos] == record_id:
                return self._records[pos]
            return None

        for record in self._records:
            if record.record_id == record_id:
                return record
        return None


def _keys_ascending(keys: Tuple[int, ...]) -> bool:
    return all(a <= b for a, b in zip(keys, keys[1:]))
