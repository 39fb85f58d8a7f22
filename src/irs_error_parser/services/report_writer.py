"""
CSV report writer.

Renders OutputRows as a delimited file through a pandas DataFrame. The
layout (header names, delimiter, encoding) comes from config/report.yaml.

Every line has all four columns; rows without a matched name leave the
name cells empty. The file is written next to its destination first and
moved into place only when complete, so a failed run never leaves a
half-written report behind.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from irs_error_parser.config import ReportConfig, get_report_config
from irs_error_parser.models import OutputRow

logger = logging.getLogger(__name__)


class ReportWriter:
    """
    Write correlated rows to a CSV report.
    
    Usage:
        >>> writer = ReportWriter()
        >>> writer.write(rows, Path('report.csv'))
        2
    
    Args:
        report_config: Layout override (defaults to get_report_config())
    """
    
    def __init__(self, report_config: Optional[ReportConfig] = None):
        self.config = report_config or get_report_config()
    
    def to_dataframe(self, rows: Iterable[OutputRow]) -> pd.DataFrame:
        """
        Build the report table.
        
        Args:
            rows: Output rows in report order
        
        Returns:
            DataFrame with one column per configured header
        """
        return pd.DataFrame(
            [row.as_cells() for row in rows],
            columns=self.config.columns
        )
    
    def write(self, rows: Iterable[OutputRow], output_path: Union[str, Path]) -> int:
        """
        Write rows to output_path, replacing any existing file.
        
        Args:
            rows: Output rows in report order
            output_path: Destination file
        
        Returns:
            Number of data rows written (header excluded)
        
        Raises:
            OSError: If the destination cannot be written
            UnicodeEncodeError: If a value cannot be represented in the
                                configured encoding
            No partial file is left behind in either case.
        """
        output_path = Path(output_path)
        df = self.to_dataframe(rows)
        
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = output_path.with_name(output_path.name + '.tmp')
        
        try:
            df.to_csv(
                tmp_path,
                sep=self.config.delimiter,
                index=False,
                encoding=self.config.encoding
            )
            os.replace(tmp_path, output_path)
        except Exception:
            logger.error(f"Failed to write report {output_path}, discarding partial output")
            tmp_path.unlink(missing_ok=True)
            raise
        
        logger.info(f"Wrote {len(df)} rows to {output_path}")
        return len(df)
