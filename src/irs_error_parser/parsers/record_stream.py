"""
Lazy record extraction from an XML file.

RecordStream drives the tokenizer and routes its events:
- StartEvent -> record kind's classifier -> active field (or None)
- TextEvent  -> assembler, only while a field is active
- EndEvent   -> clears the active field
- MalformedEvent -> logged and skipped (tolerant parsing)

Records are produced one at a time, in file order, on demand. A stream is
forward-only: once exhausted it cannot be restarted, build a new one to
read the file again.
"""

import logging
from pathlib import Path
from typing import Generic, Iterator, Optional, Type, TypeVar, Union

from irs_error_parser.config import get_app_config
from irs_error_parser.models.collection import RecordCollection
from irs_error_parser.models.records import KeyedRecord
from irs_error_parser.parsers.assembler import (
    BoundaryPolicy,
    RecordAssembler,
    create_boundary_policy,
)
from irs_error_parser.parsers.tokenizer import (
    EndEvent,
    MalformedEvent,
    StartEvent,
    TextEvent,
    iter_events,
)

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=KeyedRecord)


class RecordStream(Generic[T]):
    """
    Single-pass iterator over the records of one XML file.
    
    Configuration (chunk size, text trimming, boundary policy) defaults to
    get_app_config(); explicit arguments take precedence.
    
    Usage:
        >>> stream = RecordStream('ack.xml', ErrorRecord)
        >>> for record in stream:
        ...     print(record.record_id, record.error_text)
        >>> stream.malformed_count
        0
    
    Attributes:
        path: Input XML file
        record_type: Record kind extracted from the file
        policy: Boundary policy handed to the assembler
        record_count: Records produced so far
        malformed_count: Malformed parse events skipped so far
    
    Raises:
        FileNotFoundError: If path does not exist (at construction)
    """
    
    def __init__(
        self,
        path: Union[str, Path],
        record_type: Type[T],
        policy: Optional[BoundaryPolicy] = None,
        chunk_size: Optional[int] = None,
        trim_text: Optional[bool] = None
    ):
        config = get_app_config()
        
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"Input file not found: {self.path}")
        
        self.record_type = record_type
        self.policy = policy if policy is not None else create_boundary_policy(config.boundary_policy)
        self.chunk_size = chunk_size or config.parser_chunk_size
        self.trim_text = config.trim_text if trim_text is None else trim_text
        
        self.record_count = 0
        self.malformed_count = 0
        self._records: Optional[Iterator[T]] = None
        self._exhausted = False
    
    def __iter__(self) -> 'RecordStream[T]':
        if self._exhausted:
            raise RuntimeError(
                f"RecordStream over {self.path} is exhausted; "
                f"create a new stream to read the file again"
            )
        return self
    
    def __next__(self) -> T:
        if self._exhausted:
            raise StopIteration
        if self._records is None:
            self._records = self._extract()
        try:
            return next(self._records)
        except StopIteration:
            self._exhausted = True
            raise
    
    def close(self) -> None:
        """Stop reading and release the input file."""
        if self._records is not None:
            self._records.close()
        self._exhausted = True
    
    def __enter__(self) -> 'RecordStream[T]':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
    
    def __repr__(self) -> str:
        return (
            f"RecordStream(path='{self.path}', "
            f"record_type={self.record_type.__name__}, "
            f"records={self.record_count}, "
            f"malformed={self.malformed_count})"
        )
    
    def _extract(self) -> Iterator[T]:
        assembler = RecordAssembler(self.record_type, self.policy)
        active_field = None
        
        logger.debug(f"Extracting {self.record_type.__name__} records from {self.path} ({self.policy!r})")
        
        for event in iter_events(self.path, self.chunk_size, self.trim_text):
            if isinstance(event, StartEvent):
                active_field = self.record_type.classify(event.name)
            elif isinstance(event, TextEvent):
                if active_field is None:
                    continue
                record = assembler.assign(active_field, event.content)
                if record is not None:
                    self.record_count += 1
                    yield record
            elif isinstance(event, EndEvent):
                active_field = None
            elif isinstance(event, MalformedEvent):
                self.malformed_count += 1
                logger.warning(
                    f"Skipping malformed XML in {self.path.name} "
                    f"(line {event.line}): {event.message}"
                )
        
        record = assembler.finish()
        if record is not None:
            self.record_count += 1
            yield record
        
        logger.info(
            f"Extracted {self.record_count} {self.record_type.__name__} records "
            f"from {self.path.name} ({self.malformed_count} malformed events skipped)"
        )


def parse_data_file(
    path: Union[str, Path],
    record_type: Type[T],
    sort: bool = True,
    policy: Optional[BoundaryPolicy] = None
) -> RecordCollection[T]:
    """
    Extract every record of one kind from a file into a collection.
    
    Args:
        path: Input XML file
        record_type: Record kind (NameRecord, ErrorRecord)
        sort: Sort by record_id (required for SortedLookup)
        policy: Boundary policy (defaults to configuration)
    
    Returns:
        RecordCollection with all records of the file
    
    Raises:
        FileNotFoundError: If path does not exist
    
    Example:
        >>> names = parse_data_file('submission.xml', NameRecord)
        >>> names.find(1).last_name
        'Lee'
    """
    with RecordStream(path, record_type, policy=policy) as stream:
        return RecordCollection(stream, sort=sort)
