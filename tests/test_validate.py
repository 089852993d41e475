import tracemalloc

import pytest
from pydantic import ValidationError

from cvc.models import EolConvention, ValidatorConfig, Violation, build_allow_list
from cvc.rules import ExitStatus
from cvc.validate import is_permitted, render_diagnostics, scan, validate_bytes


def test_baseline_allow_list():
    table = build_allow_list()
    assert len(table) == 127
    assert all(table[i] for i in range(0x20, 0x7F) if i not in (0x24, 0x40, 0x60))
    assert not any(table[i] for i in (0x24, 0x40, 0x60))
    assert [i for i in range(0x20) if table[i]] == [0x09, 0x0A, 0x0D]


def test_allow_list_flags():
    table = build_allow_list(permit_ff=True, permit_vt=True, forbid_ht=True,
                             permit_all_printable=True)
    assert table[0x0C] and table[0x0B]
    assert not table[0x09]
    assert table[0x24] and table[0x40] and table[0x60]


def test_is_permitted_rejects_out_of_range():
    table = [True] * 127
    assert is_permitted(126, table)
    assert not is_permitted(127, table)
    assert not is_permitted(255, table)
    assert not is_permitted(-1, table)


def test_config_is_immutable():
    config = ValidatorConfig()
    with pytest.raises(ValidationError):
        config.verbose = True


def test_clean_input_is_valid():
    report = validate_bytes(b"abc\tdef\n", ValidatorConfig(eol=EolConvention.LF))
    assert report.count == 0
    assert report.status == ExitStatus.VALID
    assert report.valid


def test_control_character_is_a_violation():
    report = validate_bytes(b"a\x01b\n", ValidatorConfig(verbose=True))
    assert report.count == 1
    assert report.status == ExitStatus.INVALID
    assert report.violations[0] == Violation(line=1, offset=1, value=1)
    assert render_diagnostics(report.violations) == ["line 1: 0x01 (\\x01)"]


def test_mixed_eol_is_a_mismatch_not_a_violation():
    report = validate_bytes(b"a\nb\r\nc\n", ValidatorConfig())
    assert report.status == ExitStatus.ERROR_EOL
    assert report.eol_resolved == EolConvention.LF
    assert report.eol_mismatch_line == 2
    assert report.violations == []


def test_mismatch_takes_precedence_over_violations():
    report = validate_bytes(b"\x01\x02\n\x03\r\n", ValidatorConfig())
    assert report.status == ExitStatus.ERROR_EOL
    assert report.count == 0


@pytest.mark.parametrize("apa, expected", [(False, 1), (True, 0)])
def test_permit_all_printable(apa, expected):
    report = validate_bytes(b"a@b\n", ValidatorConfig(permit_all_printable=apa))
    assert report.count == expected


def test_high_bytes_always_rejected():
    config = ValidatorConfig(permit_ff=True, permit_vt=True, permit_all_printable=True,
                             verbose=True)
    report = validate_bytes(bytes([0x7F, 0x80, 0xFF, 0x0A]), config)
    assert [v.value for v in report.violations] == [0x7F, 0x80, 0xFF]


def test_tab_form_feed_vertical_tab_flags():
    data = b"\t\x0b\x0c\n"
    assert validate_bytes(data, ValidatorConfig()).count == 2
    assert validate_bytes(data, ValidatorConfig(permit_ff=True, permit_vt=True)).count == 0
    assert validate_bytes(data, ValidatorConfig(forbid_ht=True)).count == 3


def test_empty_input():
    report = validate_bytes(b"", ValidatorConfig(eol=EolConvention.CRLF))
    assert report.empty
    assert report.status == ExitStatus.VALID
    assert report.eol_resolved == EolConvention.NA
    assert report.violations == []


def test_zero_bytes_do_not_stop_the_scan():
    report = validate_bytes(b"a\x00b\n\x01\n", ValidatorConfig(verbose=True))
    assert [(v.line, v.value) for v in report.violations] == [(1, 0x00), (2, 0x01)]


def test_single_line_without_terminator():
    report = validate_bytes(b"x$y", ValidatorConfig())
    assert report.eol_resolved == EolConvention.NA
    assert report.count == 1


@pytest.mark.parametrize("data", [
    b"a\x01\nb`\n",
    b"a\x01\r\nb`\r\n",
    b"a\x01\rb`\r",
    b"a\x01b",
])
def test_explicit_mode_matches_auto_detection(data):
    auto = validate_bytes(data, ValidatorConfig(verbose=True))
    explicit = validate_bytes(data, ValidatorConfig(eol=auto.eol_resolved, verbose=True))
    assert explicit.violations == auto.violations
    assert explicit.count == auto.count
    assert explicit.status == auto.status


def test_crlf_scan_counts_lines_by_pair():
    result = scan(b"a\r\n\x01\r\n\r\n@", EolConvention.CRLF, build_allow_list(), verbose=True)
    assert result.count == 2
    assert [(line, offset) for line, offset, _ in result.hits] == [(2, 3), (4, 8)]


def test_render_groups_by_line():
    violations = [
        Violation(line=1, offset=0, value=0x24),
        Violation(line=1, offset=3, value=0x80),
        Violation(line=4, offset=9, value=0x07),
    ]
    assert render_diagnostics(violations) == [
        "line 1: 0x24 ($) 0x80 (\\x80)",
        "line 4: 0x07 (\\x07)",
    ]


def test_quiet_scan_keeps_only_a_count():
    result = scan(b"\xc3\xa9\n\x01\n", EolConvention.LF, build_allow_list())
    assert result.count == 3
    assert result.hits == []

    report = validate_bytes(b"\xc3\xa9\n\x01\n", ValidatorConfig())
    assert report.count == 3
    assert report.violations == []
    assert report.status == ExitStatus.INVALID


def test_quiet_run_memory_does_not_grow_with_violations():
    data = b"\xc3\xa9" * 250_000 + b"\n"
    config = ValidatorConfig()

    tracemalloc.start()
    try:
        report = validate_bytes(data, config)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    assert report.count == 500_000
    # 500 000 per-violation records would take tens of MB
    assert peak < 1024 * 1024
