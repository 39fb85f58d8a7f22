"""
Field identifiers for each record kind.

Each enum member's value is the exact element name it stands for, so the
enum doubles as the classification table: adding a field to a record kind
means adding one member here.

Only a handful of element names in an IRS file are interesting. Everything
else classifies to None and is skipped by the record stream.
"""

from enum import Enum
from typing import Optional, Type, TypeVar

F = TypeVar('F', bound=Enum)


class NameField(str, Enum):
    """Element names that make up a name record (1094-B/1095-B submission file)."""

    RECORD_ID = 'RecordId'
    FIRST_NAME = 'PersonFirstNm'
    LAST_NAME = 'PersonLastNm'


class ErrorField(str, Enum):
    """Element names that make up an error record (IRS acknowledgement file)."""

    RECORD_ID = 'UniqueRecordId'
    ERROR_TEXT = 'ns2:ErrorMessageTxt'


def classify(field_type: Type[F], tag: str) -> Optional[F]:
    """
    Map a raw element name to a field identifier.

    Matching is exact and case-sensitive. Namespace prefixes are part of
    the name ('ns2:ErrorMessageTxt' does not match 'ErrorMessageTxt').

    Args:
        field_type: Field enum of the record kind (NameField, ErrorField)
        tag: Element name as reported at element start

    Returns:
        Matching field identifier, or None if the tag is not a field
        of this record kind

    Example:
        >>> classify(NameField, 'PersonFirstNm')
        <NameField.FIRST_NAME: 'PersonFirstNm'>
        >>> classify(NameField, 'personfirstnm') is None
        True
    """
    try:
        return field_type(tag)
    except ValueError:
        return None
