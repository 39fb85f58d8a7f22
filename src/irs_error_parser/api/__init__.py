"""
User-facing API for irs-error-parser.
"""

from irs_error_parser.api.pipeline import ErrorReportPipeline, process_files

__all__ = [
    'ErrorReportPipeline',
    'process_files',
]
