"""
irs-error-parser: match IRS 1094-B/1095-B acknowledgement errors to names.

Main package exports for user-facing API.
"""

from irs_error_parser.api import ErrorReportPipeline, process_files
from irs_error_parser.models import ErrorRecord, NameRecord, OutputRow, RecordCollection
from irs_error_parser.parsers import RecordStream, parse_data_file
from irs_error_parser.services import correlate, create_lookup
from irs_error_parser.text import normalize_whitespace

__all__ = [
    'ErrorReportPipeline',
    'process_files',
    'ErrorRecord',
    'NameRecord',
    'OutputRow',
    'RecordCollection',
    'RecordStream',
    'parse_data_file',
    'correlate',
    'create_lookup',
    'normalize_whitespace',
]
