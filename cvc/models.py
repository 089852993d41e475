from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .rules import (
    BASELINE_CONTROL,
    BASELINE_EXCLUDED,
    CHAR_CODE_FF,
    CHAR_CODE_HT,
    CHAR_CODE_VT,
    MAX_VALID_CHAR,
    PRINTABLE_FIRST,
    ExitStatus,
)


class EolConvention(str, Enum):
    NA = "NA"  # not available: request auto-detection, or no EOL in content
    CR = "CR"  # "Mac"
    LF = "LF"  # "Unix/Linux"
    CRLF = "CRLF"  # "Windows"

    @property
    def sequence(self) -> bytes:
        return _EOL_SEQUENCES[self]


_EOL_SEQUENCES = {
    EolConvention.NA: b"",
    EolConvention.CR: b"\r",
    EolConvention.LF: b"\n",
    EolConvention.CRLF: b"\r\n",
}


def build_allow_list(
    permit_ff: bool = False,
    permit_vt: bool = False,
    forbid_ht: bool = False,
    permit_all_printable: bool = False,
) -> Tuple[bool, ...]:
    """Baseline policy adjusted by the permit/forbid flags, indexed by byte value."""
    table = [False] * (MAX_VALID_CHAR + 1)
    for i in range(PRINTABLE_FIRST, MAX_VALID_CHAR + 1):
        table[i] = True
    for code in BASELINE_CONTROL:
        table[code] = True
    for code in BASELINE_EXCLUDED:
        table[code] = permit_all_printable
    if permit_ff:
        table[CHAR_CODE_FF] = True
    if permit_vt:
        table[CHAR_CODE_VT] = True
    if forbid_ht:
        table[CHAR_CODE_HT] = False
    return tuple(table)


class ValidatorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    eol: EolConvention = EolConvention.NA
    permit_ff: bool = False
    permit_vt: bool = False
    forbid_ht: bool = False
    permit_all_printable: bool = False
    verbose: bool = False

    @property
    def allow_list(self) -> Tuple[bool, ...]:
        return build_allow_list(
            permit_ff=self.permit_ff,
            permit_vt=self.permit_vt,
            forbid_ht=self.forbid_ht,
            permit_all_printable=self.permit_all_printable,
        )


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    offset: int = Field(ge=0)
    value: int = Field(ge=0, le=255)

    @computed_field
    @property
    def hex(self) -> str:
        return f"0x{self.value:02X}"

    @computed_field
    @property
    def printable(self) -> str:
        if PRINTABLE_FIRST <= self.value <= MAX_VALID_CHAR:
            return chr(self.value)
        return f"\\x{self.value:02x}"

    def __str__(self) -> str:
        return f"{self.hex} ({self.printable})"


class ValidationReport(BaseModel):
    eol_requested: EolConvention = EolConvention.NA
    eol_resolved: EolConvention = EolConvention.NA
    empty: bool = False
    eol_mismatch_line: Optional[int] = Field(default=None, examples=[None])
    count: int = 0
    # filled only for verbose configurations
    violations: List[Violation] = Field(default_factory=list)
    status: ExitStatus = ExitStatus.VALID

    @computed_field
    @property
    def valid(self) -> bool:
        return self.status == ExitStatus.VALID


class ValidateResponse(BaseModel):
    filename: Optional[str] = None
    report: ValidationReport
    diagnostics: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
