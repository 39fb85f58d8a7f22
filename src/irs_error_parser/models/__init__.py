"""
Pydantic models for extracted records and report rows.
"""

from irs_error_parser.models.fields import NameField, ErrorField, classify
from irs_error_parser.models.records import (
    KeyedRecord,
    NameRecord,
    ErrorRecord,
    XmlExtractable,
    parse_error_record_id,
    parse_name_record_id,
)
from irs_error_parser.models.collection import RecordCollection
from irs_error_parser.models.report import OutputRow, InputPaths

__all__ = [
    'NameField',
    'ErrorField',
    'classify',
    'KeyedRecord',
    'NameRecord',
    'ErrorRecord',
    'XmlExtractable',
    'parse_error_record_id',
    'parse_name_record_id',
    'RecordCollection',
    'OutputRow',
    'InputPaths',
]
