"""
High-level pipeline for the IRS error report.

ErrorReportPipeline coordinates the complete workflow:
- Extract name records from the submission file (fully materialized)
- Stream error records from the acknowledgement file
- Correlate each error with the name sharing its record key
- Write the combined CSV report

Design Philosophy:
- Fail fast on missing inputs: nothing is parsed or written
- Resilient parsing: malformed XML is logged and skipped, not fatal
- Statistics-based monitoring (returns actionable metrics)
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from irs_error_parser.config import get_app_config
from irs_error_parser.models import ErrorRecord, InputPaths, NameRecord, RecordCollection
from irs_error_parser.parsers import RecordStream, create_boundary_policy
from irs_error_parser.services import ReportWriter, correlate, create_lookup
from irs_error_parser.validators import validate_boundary_policy, validate_lookup_strategy

logger = logging.getLogger(__name__)


class ErrorReportPipeline:
    """
    Orchestrator for one error-report run.
    
    Example:
        pipeline = ErrorReportPipeline()
        stats = pipeline.run(
            error_file="ack.xml",
            name_file="submission.xml",
            output_file="errors.csv"
        )
        print(f"{stats['rows']} rows, {stats['unmatched']} without a name")
    
    Args:
        report_writer: Output sink (defaults to ReportWriter())
        boundary_policy: 'last_field' | 'repeat_sentinel' (defaults to config)
        lookup_strategy: 'index' | 'sorted' | 'linear' (defaults to config)
    """
    
    def __init__(
        self,
        report_writer: Optional[ReportWriter] = None,
        boundary_policy: Optional[str] = None,
        lookup_strategy: Optional[str] = None
    ):
        config = get_app_config()
        self._writer = report_writer or ReportWriter()
        self.boundary_policy = boundary_policy or config.boundary_policy
        self.lookup_strategy = lookup_strategy or config.lookup_strategy
        
        # Fail on bad names before touching any file
        validate_boundary_policy(self.boundary_policy)
        validate_lookup_strategy(self.lookup_strategy)
    
    def run(
        self,
        error_file: Union[str, Path],
        name_file: Union[str, Path],
        output_file: Union[str, Path]
    ) -> Dict[str, int]:
        """
        Complete workflow: names -> errors -> correlate -> CSV.
        
        Args:
            error_file: Acknowledgement XML with error records
            name_file: Submission XML with name records
            output_file: CSV report destination
        
        Returns:
            Statistics dictionary:
            {
                'names': 120,      # Name records extracted
                'errors': 7,       # Error records extracted
                'rows': 7,         # Rows written (always == errors)
                'matched': 6,      # Rows with a name
                'unmatched': 1,    # Rows without a name
                'malformed': 0     # Malformed XML events skipped
            }
        
        Raises:
            FileNotFoundError: If either input file does not exist
            ValidationError: If output_file is one of the input files
        """
        paths = InputPaths(
            error_file=Path(error_file),
            name_file=Path(name_file),
            output_file=Path(output_file)
        )
        
        missing = paths.missing_inputs()
        if missing:
            error_msg = f"Input file not found: {', '.join(str(p) for p in missing)}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)
        
        # Name side must be complete before correlation starts
        policy = create_boundary_policy(self.boundary_policy)
        with RecordStream(paths.name_file, NameRecord, policy=policy) as name_stream:
            names = RecordCollection(name_stream, sort=(self.lookup_strategy == 'sorted'))
        lookup = create_lookup(names, self.lookup_strategy)
        
        policy = create_boundary_policy(self.boundary_policy)
        with RecordStream(paths.error_file, ErrorRecord, policy=policy) as error_stream:
            rows = list(correlate(error_stream, lookup))
        
        written = self._writer.write(rows, paths.output_file)
        matched = sum(1 for row in rows if row.is_matched)
        
        stats = {
            'names': len(names),
            'errors': error_stream.record_count,
            'rows': written,
            'matched': matched,
            'unmatched': written - matched,
            'malformed': name_stream.malformed_count + error_stream.malformed_count,
        }
        
        logger.info(
            f"Report complete: {stats['rows']} rows "
            f"({stats['matched']} matched, {stats['unmatched']} unmatched), "
            f"{stats['malformed']} malformed events skipped"
        )
        return stats


def process_files(
    error_file: Union[str, Path],
    name_file: Union[str, Path],
    output_file: Union[str, Path]
) -> Dict[str, int]:
    """
    Run the error report with configured defaults.
    
    Returns:
        Statistics dictionary from ErrorReportPipeline.run()
    
    Example:
        >>> from irs_error_parser import process_files
        >>> process_files('ack.xml', 'submission.xml', 'errors.csv')['rows']
        2
    """
    return ErrorReportPipeline().run(error_file, name_file, output_file)
