"""
Deterministic validation rules.

This file exists to make the byte policy explicit and enforceable.
"""

from enum import IntEnum

VERSION = "0.1.0"

CHUNK_SIZE = 16 * 1024

MAX_VALID_CHAR = 126  # table covers 0..126, anything above is always invalid

CHAR_CODE_HT = 0x09
CHAR_CODE_LF = 0x0A
CHAR_CODE_VT = 0x0B
CHAR_CODE_FF = 0x0C
CHAR_CODE_CR = 0x0D
CHAR_CODE_DOLLAR = 0x24
CHAR_CODE_AT = 0x40
CHAR_CODE_BACKTICK = 0x60

PRINTABLE_FIRST = 0x20

# permitted by default: printable ASCII plus these control characters
BASELINE_CONTROL = (CHAR_CODE_HT, CHAR_CODE_LF, CHAR_CODE_CR)
# printable, but rejected unless all printable ASCII is permitted
BASELINE_EXCLUDED = (CHAR_CODE_DOLLAR, CHAR_CODE_AT, CHAR_CODE_BACKTICK)


class ExitStatus(IntEnum):
    VALID = 0
    INVALID = 1
    ERROR_EOL = 2
    ERROR_UNSPECIFIC = 3
    ERROR_INPUT = 4
    ERROR_PARAMETER = 5


EXIT_STATUS_HELP = {
    ExitStatus.VALID: "valid",
    ExitStatus.INVALID: "validation failed, invalid characters found",
    ExitStatus.ERROR_EOL: "EOL indicator mismatch",
    ExitStatus.ERROR_UNSPECIFIC: "unspecific error",
    ExitStatus.ERROR_INPUT: "input error, e.g., file could not be read",
    ExitStatus.ERROR_PARAMETER: "invalid parameter",
}
