"""
Record models extracted from IRS XML files.

Two record kinds exist:
- NameRecord: one covered person from the submission file
  (RecordId, PersonFirstNm, PersonLastNm)
- ErrorRecord: one rejection from the IRS acknowledgement file
  (UniqueRecordId, ns2:ErrorMessageTxt)

Key semantics:
- Equality and ordering compare record_id ONLY. Two records with the same
  key are "equal" even if their text differs. Sorting a collection therefore
  sorts by key, and the matcher can compare records directly.
- Unparseable keys fall back to 0 instead of failing the whole extraction.

Extraction capability:
Each record kind implements XmlExtractable on its own (classify + assign +
designated last field). RecordStream and RecordAssembler are written once,
generic over that protocol.
"""

import logging
import re
from enum import Enum
from functools import total_ordering
from typing import ClassVar, Optional, Protocol, Type

from pydantic import BaseModel, ConfigDict, Field

from irs_error_parser.models.fields import ErrorField, NameField, classify
from irs_error_parser.text import normalize_whitespace

logger = logging.getLogger(__name__)

# "<prefix>|<segments>| <digits>" - digits after the last pipe-delimited segment
_ERROR_RECORD_ID = re.compile(r'\|.+\|\s*?(\d+)')
_NAME_RECORD_ID = re.compile(r'\s*(\d+)\s*')


class XmlExtractable(Protocol):
    """
    Capability of a record kind that can be built from tagged text events.

    Implementations provide:
    - field_type: the closed enum of recognized element names
    - last_field: field that closes a record under the last-field policy
    - classify(tag): element name -> field identifier (or None)
    - assign(field, raw_text): store normalized text into the field's slot
    """

    field_type: ClassVar[Type[Enum]]
    last_field: ClassVar[Enum]

    @classmethod
    def classify(cls, tag: str) -> Optional[Enum]:
        ...

    def assign(self, field: Enum, raw_text: str) -> None:
        ...


def parse_error_record_id(text: str) -> int:
    """
    Extract the record key from an IRS UniqueRecordId blob.

    The blob is pipe-delimited (receipt id, submission id, record number).
    The key is the run of digits after the last pipe.

    Args:
        text: UniqueRecordId text (already whitespace-normalized)

    Returns:
        Parsed key, or 0 if the pattern is not found

    Example:
        >>> parse_error_record_id('1095B-22-00012345|1|42')
        42
        >>> parse_error_record_id('no pipes here')
        0
    """
    match = _ERROR_RECORD_ID.search(text)
    if match is None:
        logger.debug(f"No record id pattern in {text!r}, using 0")
        return 0
    return int(match.group(1))


def parse_name_record_id(text: str) -> int:
    """
    Parse a RecordId element as a whole-text decimal key.

    Returns 0 when the text is not a plain non-negative integer.
    """
    match = _NAME_RECORD_ID.fullmatch(text)
    if match is None:
        logger.debug(f"RecordId {text!r} is not an integer, using 0")
        return 0
    return int(match.group(1))


@total_ordering
class KeyedRecord(BaseModel):
    """
    Base for records whose identity is their integer key.

    Equality and ordering are defined on record_id alone, and only between
    records of the same kind.
    """

    record_id: int = Field(
        default=0,
        ge=0,
        description="Record key shared between the name and error files"
    )

    model_config = ConfigDict(validate_assignment=True)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.record_id == other.record_id

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.record_id < other.record_id


class NameRecord(KeyedRecord):
    """
    Person name keyed by submission RecordId.

    Example:
        >>> record = NameRecord()
        >>> record.assign(NameField.RECORD_ID, '7')
        >>> record.assign(NameField.FIRST_NAME, 'Ann')
        >>> record.record_id, record.first_name
        (7, 'Ann')
    """

    field_type: ClassVar[Type[NameField]] = NameField
    last_field: ClassVar[NameField] = NameField.LAST_NAME

    first_name: str = Field(default='', description="PersonFirstNm")
    last_name: str = Field(default='', description="PersonLastNm")

    @classmethod
    def classify(cls, tag: str) -> Optional[NameField]:
        return classify(NameField, tag)

    def assign(self, field: NameField, raw_text: str) -> None:
        text = normalize_whitespace(raw_text)
        if field is NameField.RECORD_ID:
            self.record_id = parse_name_record_id(text)
        elif field is NameField.FIRST_NAME:
            self.first_name = text
        elif field is NameField.LAST_NAME:
            self.last_name = text
        else:
            raise ValueError(f"Not a name record field: {field!r}")


class ErrorRecord(KeyedRecord):
    """
    IRS rejection message keyed by the record number inside UniqueRecordId.

    Example:
        >>> record = ErrorRecord()
        >>> record.assign(ErrorField.RECORD_ID, 'abc|1|  3')
        >>> record.record_id
        3
    """

    field_type: ClassVar[Type[ErrorField]] = ErrorField
    last_field: ClassVar[ErrorField] = ErrorField.ERROR_TEXT

    error_text: str = Field(default='', description="ns2:ErrorMessageTxt")

    @classmethod
    def classify(cls, tag: str) -> Optional[ErrorField]:
        return classify(ErrorField, tag)

    def assign(self, field: ErrorField, raw_text: str) -> None:
        text = normalize_whitespace(raw_text)
        if field is ErrorField.RECORD_ID:
            self.record_id = parse_error_record_id(text)
        elif field is ErrorField.ERROR_TEXT:
            self.error_text = text
        else:
            raise ValueError(f"Not an error record field: {field!r}")
