"""
Streaming XML extraction for IRS submission and acknowledgement files.

- tokenizer: lxml pull parser -> primitive start/text/end/malformed events
- assembler: (field, text) pairs -> records, with pluggable boundary policies
- record_stream: lazy single-pass record iterator over one file
"""

from .tokenizer import (
    StartEvent,
    TextEvent,
    EndEvent,
    MalformedEvent,
    iter_events,
)
from .assembler import (
    BoundaryPolicy,
    LastFieldPolicy,
    RepeatSentinelPolicy,
    RecordAssembler,
    create_boundary_policy,
)
from .record_stream import RecordStream, parse_data_file

__all__ = [
    # Tokenizer
    'StartEvent',
    'TextEvent',
    'EndEvent',
    'MalformedEvent',
    'iter_events',
    # Assembly
    'BoundaryPolicy',
    'LastFieldPolicy',
    'RepeatSentinelPolicy',
    'RecordAssembler',
    'create_boundary_policy',
    # Streaming
    'RecordStream',
    'parse_data_file',
]
