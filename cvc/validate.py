"""
Core validation logic.

Responsibilities:
- EOL convention resolution (explicit or detected) + consistency check
- per-byte classification against the allow-list
- line-numbered violation reporting
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Sequence, Tuple

from .eol import detect_eol, validate_eol
from .models import EolConvention, ValidationReport, ValidatorConfig, Violation
from .rules import MAX_VALID_CHAR, ExitStatus

logger = logging.getLogger(__name__)


def is_permitted(value: int, allow_list: Sequence[bool]) -> bool:
    if value < 0 or value > MAX_VALID_CHAR:
        return False
    return allow_list[value]


class ScanResult(NamedTuple):
    count: int
    # (line, offset, value) per rejected byte, only filled in verbose scans
    hits: List[Tuple[int, int, int]]


def scan(
    data: bytes,
    eol: EolConvention,
    allow_list: Sequence[bool],
    verbose: bool = False,
) -> ScanResult:
    """
    Single pass over data, counting every byte the allow-list rejects.

    Bytes forming the resolved eol sequence only advance the line counter;
    they are never classified. Embedded zero bytes are scanned like any
    other byte. Positions of rejected bytes are kept only when verbose.
    """
    permitted = [is_permitted(value, allow_list) for value in range(256)]
    seq = eol.sequence
    seq_len = len(seq)
    first = seq[0] if seq else -1

    count = 0
    hits: List[Tuple[int, int, int]] = []
    line = 1
    i = 0
    size = len(data)
    while i < size:
        value = data[i]
        if value == first and (seq_len == 1 or data.startswith(seq, i)):
            i += seq_len
            line += 1
            continue
        if not permitted[value]:
            count += 1
            if verbose:
                hits.append((line, i, value))
        i += 1
    return ScanResult(count, hits)


def render_diagnostics(violations: Sequence[Violation]) -> List[str]:
    """One `line N: 0xHH (c) ...` entry per line holding violations, in scan order."""
    by_line: Dict[int, List[str]] = {}
    for v in violations:
        by_line.setdefault(v.line, []).append(str(v))
    return [f"line {line}: " + " ".join(items) for line, items in by_line.items()]


def validate_bytes(raw: bytes, config: ValidatorConfig) -> ValidationReport:
    """
    Run the whole pipeline over raw.

    Empty input is trivially valid. An EOL mismatch ends the run before
    classification; character violations never abort the scan. Violation
    records are only built for verbose configurations.
    """
    report = ValidationReport(eol_requested=config.eol)

    if not raw:
        report.empty = True
        return report

    eol = config.eol
    if eol == EolConvention.NA:
        eol = detect_eol(raw)
        logger.debug("Detected EOL: %s", eol.value)
    report.eol_resolved = eol

    mismatch = validate_eol(raw, eol)
    if mismatch is not None:
        logger.debug("EOL mismatch in line %d", mismatch)
        report.eol_mismatch_line = mismatch
        report.status = ExitStatus.ERROR_EOL
        return report

    result = scan(raw, eol, config.allow_list, verbose=config.verbose)
    report.count = result.count
    report.violations = [
        Violation(line=line, offset=offset, value=value)
        for line, offset, value in result.hits
    ]
    report.status = ExitStatus.INVALID if result.count else ExitStatus.VALID
    logger.debug("Scanned %d byte(s), %d violation(s)", len(raw), result.count)
    return report
