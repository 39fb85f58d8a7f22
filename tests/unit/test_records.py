"""
Unit tests for NameRecord / ErrorRecord models and key parsing.
"""

import pytest
from pydantic import ValidationError

from irs_error_parser.models import (
    ErrorField,
    ErrorRecord,
    NameField,
    NameRecord,
    parse_error_record_id,
    parse_name_record_id,
)


class TestParseErrorRecordId:
    """Test suite for the pipe-delimited UniqueRecordId key."""

    @pytest.mark.parametrize('text, expected', [
        ('1095B-22-00012345|1|42', 42),
        ('1095B-22-00012345|1| 7', 7),
        ('a|b|c|99', 99),
        ('prefix|x|0', 0),
    ])
    def test_digits_after_last_pipe(self, text, expected):
        assert parse_error_record_id(text) == expected

    @pytest.mark.parametrize('text', [
        'no pipes here',
        '12345',
        '|missing digits|',
        '||5',
        '',
    ])
    def test_falls_back_to_zero(self, text):
        """Unparseable keys never raise."""
        assert parse_error_record_id(text) == 0


class TestParseNameRecordId:
    """Test suite for whole-text RecordId parsing."""

    @pytest.mark.parametrize('text, expected', [
        ('1', 1),
        ('000123', 123),
        (' 12 ', 12),
    ])
    def test_integer_text(self, text, expected):
        assert parse_name_record_id(text) == expected

    @pytest.mark.parametrize('text', ['12a', '-3', '1 2', '', 'abc', '+4'])
    def test_falls_back_to_zero(self, text):
        assert parse_name_record_id(text) == 0


class TestNameRecord:
    """Test suite for NameRecord."""

    def test_default_state(self):
        record = NameRecord()
        assert record.record_id == 0
        assert record.first_name == ''
        assert record.last_name == ''

    def test_assign_each_field(self):
        record = NameRecord()
        record.assign(NameField.RECORD_ID, '7')
        record.assign(NameField.FIRST_NAME, 'Ann')
        record.assign(NameField.LAST_NAME, 'Lee')

        assert (record.record_id, record.first_name, record.last_name) == (7, 'Ann', 'Lee')

    def test_assign_normalizes_whitespace(self):
        record = NameRecord()
        record.assign(NameField.LAST_NAME, '  Smith \n Jones ')
        assert record.last_name == ' Smith Jones '

    def test_assign_wrong_field_kind_raises(self):
        with pytest.raises(ValueError):
            NameRecord().assign(ErrorField.ERROR_TEXT, 'x')

    def test_negative_key_rejected(self):
        with pytest.raises(ValidationError):
            NameRecord(record_id=-1)


class TestErrorRecord:
    """Test suite for ErrorRecord."""

    def test_assign_parses_key_from_blob(self):
        record = ErrorRecord()
        record.assign(ErrorField.RECORD_ID, '1095B-22-00012345|1|3')
        record.assign(ErrorField.ERROR_TEXT, 'Bad\n   DOB')

        assert record.record_id == 3
        assert record.error_text == 'Bad DOB'

    def test_unparseable_key_becomes_zero(self):
        record = ErrorRecord()
        record.assign(ErrorField.RECORD_ID, 'garbage')
        assert record.record_id == 0


class TestKeySemantics:
    """Equality and ordering use record_id only."""

    def test_equal_when_keys_match(self):
        assert NameRecord(record_id=1, first_name='Ann') == NameRecord(record_id=1, first_name='Bo')

    def test_not_equal_when_keys_differ(self):
        assert NameRecord(record_id=1, first_name='Ann') != NameRecord(record_id=2, first_name='Ann')

    def test_different_kinds_never_equal(self):
        assert NameRecord(record_id=1) != ErrorRecord(record_id=1)

    def test_sorting_by_key(self):
        records = [NameRecord(record_id=k) for k in (3, 1, 2)]
        assert [r.record_id for r in sorted(records)] == [1, 2, 3]

    def test_ordering_operators(self):
        assert ErrorRecord(record_id=1) < ErrorRecord(record_id=2)
        assert ErrorRecord(record_id=2) >= ErrorRecord(record_id=2, error_text='x')
