"""
Business logic layer services for irs-error-parser.

- matcher: name lookup strategies and error/name correlation
- ReportWriter: CSV rendering of correlated rows
"""

from irs_error_parser.services.matcher import (
    NameLookup,
    IndexLookup,
    SortedLookup,
    LinearScanLookup,
    create_lookup,
    correlate,
    match_error,
)
from irs_error_parser.services.report_writer import ReportWriter

__all__ = [
    'NameLookup',
    'IndexLookup',
    'SortedLookup',
    'LinearScanLookup',
    'create_lookup',
    'correlate',
    'match_error',
    'ReportWriter',
]
