"""
Record assembly from (field, text) pairs.

RecordAssembler accumulates field assignments into one in-progress record
and hands back the record once a boundary policy says it is complete.

Boundary policies (Strategy Pattern, never mixed within one assembler):
- LastFieldPolicy: the record closes when its designated last field is
  assigned. Relies on schema-guaranteed field order. Default.
- RepeatSentinelPolicy: the record closes when every field has been seen,
  or when a field recurs before that (the recurrence starts a new record).
  Tolerates reordered fields.

Both policies guarantee that a record that never received an assignment
is never emitted, and that no state survives from one record into the next.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import AbstractSet, Generic, Optional, Set, Type, TypeVar

from irs_error_parser.models.records import XmlExtractable
from irs_error_parser.validators import validate_boundary_policy

T = TypeVar('T', bound=XmlExtractable)


class BoundaryPolicy(ABC):
    """
    Abstract base class for record-boundary policies.

    The assembler consults the policy around every assignment:
    - starts_new_record(): before the assignment; True flushes the pending record
    - completes_record(): after the assignment; True emits the record
    - flush_at_end: whether a pending record is emitted at end of input
    """

    flush_at_end: bool = False

    def starts_new_record(self, field: Enum, seen: AbstractSet[Enum]) -> bool:
        return False

    @abstractmethod
    def completes_record(
        self,
        field: Enum,
        seen: AbstractSet[Enum],
        record_type: Type[XmlExtractable]
    ) -> bool:
        """
        Decide whether the record is complete after assigning field.

        Args:
            field: Field that was just assigned
            seen: Fields assigned since the last boundary (includes field)
            record_type: Record kind being assembled

        Returns:
            True if the in-progress record should be emitted now
        """
        pass


class LastFieldPolicy(BoundaryPolicy):
    """
    Complete a record when its designated last field is assigned.

    Args:
        last_field: Override the record kind's own last_field
    """

    def __init__(self, last_field: Optional[Enum] = None):
        self.last_field = last_field

    def completes_record(self, field, seen, record_type) -> bool:
        last = self.last_field if self.last_field is not None else record_type.last_field
        return field == last

    def __repr__(self) -> str:
        return f"LastFieldPolicy(last_field={self.last_field!r})"


class RepeatSentinelPolicy(BoundaryPolicy):
    """
    Complete a record when all fields are seen, or split it when one repeats.

    A pending record that never saw all of its fields is still emitted when
    a repeat (or the end of input) closes it.
    """

    flush_at_end = True

    def starts_new_record(self, field, seen) -> bool:
        return field in seen

    def completes_record(self, field, seen, record_type) -> bool:
        return len(seen) == len(record_type.field_type)

    def __repr__(self) -> str:
        return "RepeatSentinelPolicy()"


def create_boundary_policy(name: str = 'last_field') -> BoundaryPolicy:
    """
    Create a boundary policy from its configuration name.

    Args:
        name: 'last_field' or 'repeat_sentinel'

    Returns:
        BoundaryPolicy instance

    Raises:
        ValueError: If name is unknown
    """
    validate_boundary_policy(name)
    if name == 'repeat_sentinel':
        return RepeatSentinelPolicy()
    return LastFieldPolicy()


class RecordAssembler(Generic[T]):
    """
    Accumulate field assignments into records of one kind.

    Usage:
        >>> assembler = RecordAssembler(NameRecord)
        >>> assembler.assign(NameField.RECORD_ID, '1')
        >>> assembler.assign(NameField.FIRST_NAME, 'Ann')
        >>> assembler.assign(NameField.LAST_NAME, 'Lee')
        NameRecord(record_id=1, first_name='Ann', last_name='Lee')

    Attributes:
        record_type: Record kind (must implement XmlExtractable)
        policy: Boundary policy in use
        emitted_count: Records handed out so far
    """

    def __init__(self, record_type: Type[T], policy: Optional[BoundaryPolicy] = None):
        self.record_type = record_type
        self.policy = policy if policy is not None else LastFieldPolicy()
        self.emitted_count = 0
        self._current: T = record_type()
        self._seen: Set[Enum] = set()

    @property
    def has_pending(self) -> bool:
        """True if the in-progress record has received at least one assignment."""
        return bool(self._seen)

    def assign(self, field: Enum, raw_text: str) -> Optional[T]:
        """
        Store text into field of the in-progress record.

        Args:
            field: Field identifier of this record kind
            raw_text: Text content (normalized by the record on assignment)

        Returns:
            The completed record if this assignment closed one, else None.
            Under RepeatSentinelPolicy a repeat returns the record that the
            repeat closed; the new assignment goes into the next record.
        """
        flushed = None
        if self.policy.starts_new_record(field, self._seen):
            flushed = self._emit()

        self._current.assign(field, raw_text)
        self._seen.add(field)

        # At most one of flush / completion fires per assignment
        if self.policy.completes_record(field, self._seen, self.record_type):
            return self._emit()
        return flushed

    def finish(self) -> Optional[T]:
        """
        Signal end of input.

        Returns:
            The pending record if the policy flushes at end and one exists,
            else None. The assembler is reset either way.
        """
        if self.policy.flush_at_end:
            return self._emit()
        self._reset()
        return None

    def _emit(self) -> Optional[T]:
        if not self._seen:
            return None
        record = self._current
        self._reset()
        self.emitted_count += 1
        return record

    def _reset(self) -> None:
        self._current = self.record_type()
        self._seen = set()
