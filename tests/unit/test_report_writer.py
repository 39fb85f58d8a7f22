"""
Unit tests for the CSV report writer.
"""

import pandas as pd
import pytest

from irs_error_parser.config import ReportConfig
from irs_error_parser.models import OutputRow
from irs_error_parser.services import ReportWriter


def read_report(path, sep=','):
    return pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False)


ROWS = [
    OutputRow(record_id=1, error_text='Missing SSN', first_name='Ann', last_name='Lee'),
    OutputRow(record_id=3, error_text='Bad DOB'),
]


class TestReportWriter:
    """Test suite for ReportWriter."""

    def test_writes_header_and_rows(self, tmp_path):
        output = tmp_path / 'report.csv'

        written = ReportWriter().write(ROWS, output)

        df = read_report(output)
        assert written == 2
        assert list(df.columns) == ['ID', 'Error', 'First Name', 'Last Name']
        assert df.values.tolist() == [
            ['1', 'Missing SSN', 'Ann', 'Lee'],
            ['3', 'Bad DOB', '', ''],
        ]

    def test_unmatched_rows_keep_four_columns(self, tmp_path):
        output = tmp_path / 'report.csv'
        ReportWriter().write([ROWS[1]], output)

        lines = output.read_text(encoding='utf-8').splitlines()
        assert lines == ['ID,Error,First Name,Last Name', '3,Bad DOB,,']

    def test_delimiters_in_text_are_quoted(self, tmp_path):
        output = tmp_path / 'report.csv'
        row = OutputRow(record_id=5, error_text='TIN, name mismatch', first_name='Ann', last_name='Lee')

        ReportWriter().write([row], output)

        assert read_report(output).loc[0, 'Error'] == 'TIN, name mismatch'

    def test_empty_report_has_header_only(self, tmp_path):
        output = tmp_path / 'report.csv'

        assert ReportWriter().write([], output) == 0
        assert output.read_text(encoding='utf-8').splitlines() == ['ID,Error,First Name,Last Name']

    def test_custom_layout(self, tmp_path):
        output = tmp_path / 'report.tsv'
        config = ReportConfig(columns=['Key', 'Message', 'Given', 'Family'], delimiter='\t')

        ReportWriter(config).write(ROWS, output)

        df = read_report(output, sep='\t')
        assert list(df.columns) == ['Key', 'Message', 'Given', 'Family']

    def test_creates_parent_directories_and_leaves_no_temp_file(self, tmp_path):
        output = tmp_path / 'out' / 'nested' / 'report.csv'

        ReportWriter().write(ROWS, output)

        assert output.exists()
        assert list(output.parent.iterdir()) == [output]

    def test_unencodable_text_leaves_no_files(self, tmp_path):
        output = tmp_path / 'report.csv'
        config = ReportConfig(columns=['ID', 'Error', 'First Name', 'Last Name'], encoding='latin-1')
        row = OutputRow(record_id=1, error_text='Missing SSN', first_name='李', last_name='Lee')

        with pytest.raises(UnicodeEncodeError):
            ReportWriter(config).write([row], output)

        assert list(tmp_path.iterdir()) == []
