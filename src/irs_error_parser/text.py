"""
Text normalization for XML text nodes.

IRS XML files are pretty-printed, so text nodes often carry line breaks
and indentation from the surrounding markup. Every extracted value goes
through normalize_whitespace() before it is stored on a record.
"""

import re

# Compiled once at import, shared read-only afterwards
_WHITESPACE_RUN = re.compile(r'\s+')


def normalize_whitespace(text: str) -> str:
    """
    Collapse every maximal run of whitespace into a single ASCII space.
    
    Edge runs are collapsed but NOT trimmed: a leading or trailing run
    becomes one space. Callers that want stripped values must strip.
    
    Args:
        text: Raw text node content
    
    Returns:
        Text with no two adjacent whitespace characters
    
    Example:
        >>> normalize_whitespace("  Smith \\n Jones ")
        ' Smith Jones '
    """
    return _WHITESPACE_RUN.sub(' ', text)
