"""
End-of-line handling.

Responsibilities:
- infer the EOL convention from the first terminator in the content
- verify that every terminator in the content uses one convention
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import EolConvention
from .rules import CHAR_CODE_CR, CHAR_CODE_LF

logger = logging.getLogger(__name__)


def detect_eol(data: bytes) -> EolConvention:
    """
    Return the convention of the first line terminator in data.

    A CR directly followed by LF is CRLF, a CR followed by anything else
    (or by the end of data) is CR. NA means the data holds no terminator.
    """
    for i, byte in enumerate(data):
        if byte == CHAR_CODE_LF:
            return EolConvention.LF
        if byte == CHAR_CODE_CR:
            if i + 1 < len(data) and data[i + 1] == CHAR_CODE_LF:
                return EolConvention.CRLF
            return EolConvention.CR
    return EolConvention.NA


def validate_eol(data: bytes, eol: EolConvention) -> Optional[int]:
    """
    Check that every terminator in data matches eol.

    Returns the 1-based line number of the first mismatching terminator,
    or None when all terminators match. Stops at the first mismatch.
    """
    if eol == EolConvention.NA:
        return None

    line = 1
    size = len(data)
    i = 0
    while i < size:
        byte = data[i]
        if eol == EolConvention.CRLF:
            if byte == CHAR_CODE_CR:
                if i + 1 < size and data[i + 1] == CHAR_CODE_LF:
                    line += 1
                    i += 2
                    continue
                return line
            if byte == CHAR_CODE_LF:
                return line
        elif eol == EolConvention.CR:
            if byte == CHAR_CODE_CR:
                line += 1
            elif byte == CHAR_CODE_LF:
                return line
        else:
            if byte == CHAR_CODE_LF:
                line += 1
            elif byte == CHAR_CODE_CR:
                return line
        i += 1

    logger.debug("EOL %s consistent over %d line(s)", eol.value, line)
    return None
