"""
Unit tests for RecordCollection.
"""

import pytest

from irs_error_parser.models import NameRecord, RecordCollection


@pytest.fixture
def unsorted_names():
    return [
        NameRecord(record_id=3, first_name='Cy'),
        NameRecord(record_id=1, first_name='Ann'),
        NameRecord(record_id=2, first_name='Bo'),
        NameRecord(record_id=1, first_name='Duplicate'),
    ]


class TestRecordCollection:
    """Test suite for RecordCollection."""

    def test_keeps_file_order_by_default(self, unsorted_names):
        names = RecordCollection(unsorted_names)
        assert names.keys == (3, 1, 2, 1)
        assert not names.is_sorted

    def test_sort_is_stable(self, unsorted_names):
        names = RecordCollection(unsorted_names, sort=True)

        assert names.keys == (1, 1, 2, 3)
        assert names.is_sorted
        assert [r.first_name for r in names][:2] == ['Ann', 'Duplicate']

    def test_already_ascending_input_is_sorted(self):
        names = RecordCollection([NameRecord(record_id=k) for k in (1, 2, 2, 5)])
        assert names.is_sorted

    def test_len_iter_getitem(self, unsorted_names):
        names = RecordCollection(unsorted_names)

        assert len(names) == 4
        assert [r.record_id for r in names] == [3, 1, 2, 1]
        assert names[0].first_name == 'Cy'
        assert names[-1].first_name == 'Duplicate'

    def test_slice_returns_collection(self, unsorted_names):
        subset = RecordCollection(unsorted_names, sort=True)[1:3]

        assert isinstance(subset, RecordCollection)
        assert subset.keys == (1, 2)

    @pytest.mark.parametrize('sort', [True, False])
    def test_find_returns_first_occurrence(self, unsorted_names, sort):
        names = RecordCollection(unsorted_names, sort=sort)

        assert names.find(1).first_name == 'Ann'
        assert names.find(3).first_name == 'Cy'
        assert names.find(42) is None

    def test_empty(self):
        names = RecordCollection([], sort=True)
        assert len(names) == 0
        assert names.find(1) is None

    def test_drains_iterators(self):
        names = RecordCollection(iter([NameRecord(record_id=9)]))
        assert names.keys == (9,)
