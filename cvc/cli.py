"""
Character Set Validator for C/C++ source code.

Usage:
    cvc -f main.c                  Validate a file, EOL detected automatically
    cvc -e CRLF --apa < main.c     Validate standard input as CRLF, permit $ @ `
    cvc -v -f main.c               Print every offending byte per line
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from .errors import ConfigurationError, CvcError, InputError
from .models import EolConvention, ValidatorConfig
from .rules import CHUNK_SIZE, EXIT_STATUS_HELP, VERSION, ExitStatus
from .validate import render_diagnostics, validate_bytes

logger = logging.getLogger(__name__)

EOL_CHOICES = {
    "LF": EolConvention.LF,
    "CRLF": EolConvention.CRLF,
    "CR": EolConvention.CR,
    "NA": EolConvention.NA,
    "AUTO": EolConvention.NA,
}


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    epilog = "With no FILE, read standard input.\n\nExit codes:\n" + "\n".join(
        f"  {int(status)}: {text}" for status, text in EXIT_STATUS_HELP.items()
    )
    parser = _ArgumentParser(
        prog="cvc",
        description="Character Set Validator for C/C++ Source Code.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-f", "--file", metavar="FILE", help="Specify a file (default: n/a)")
    parser.add_argument("-e", "--eol", metavar="LF/CRLF/CR/NA", default="NA",
                        help="End-of-line indicator, NA or AUTO detects it (default: NA)")
    parser.add_argument("--ff", action="store_true", help="Permit form feed character")
    parser.add_argument("--vt", action="store_true", help="Permit vertical tab character")
    parser.add_argument("--apa", action="store_true", help="Permit all printable ASCII characters")
    parser.add_argument("--noht", action="store_true", help="Forbid horizontal tab character")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Enable verbose output (twice for debug logging)")
    parser.add_argument("-h", "--help", action="store_true", help="Show the command help")
    parser.add_argument("--version", action="store_true", help="Show the program version")
    return parser


def config_from_args(args: argparse.Namespace) -> ValidatorConfig:
    eol = EOL_CHOICES.get(args.eol)
    if eol is None:
        raise ConfigurationError(f"EOL '{args.eol}' not supported!")
    return ValidatorConfig(
        eol=eol,
        permit_ff=args.ff,
        permit_vt=args.vt,
        forbid_ht=args.noht,
        permit_all_printable=args.apa,
        verbose=args.verbose > 0,
    )


def read_stream(stream: BinaryIO) -> bytearray:
    data = bytearray()
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            data += chunk
    except MemoryError as e:
        raise CvcError("Memory allocation failed!", ExitStatus.ERROR_UNSPECIFIC) from e
    except OSError as e:
        raise InputError(f"Failed to read input: {e}") from e
    return data


def read_input(path: Optional[str], verbose: bool = False) -> bytearray:
    if path is None:
        return read_stream(sys.stdin.buffer)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise InputError(f"Failed to open file {path}!") from e
    with f:
        if verbose:
            print(f"file: {path}")
        return read_stream(f)


def run(args: argparse.Namespace, config: ValidatorConfig) -> int:
    raw = read_input(args.file, verbose=config.verbose)

    report = validate_bytes(raw, config)

    if report.empty:
        if config.verbose:
            print("Empty input/file.")
        return int(ExitStatus.VALID)

    if report.eol_mismatch_line is not None:
        if config.verbose:
            print(f"Unexpected end-of-line indicator in line {report.eol_mismatch_line}!",
                  file=sys.stderr)
        return int(report.status)

    if config.verbose:
        for line in render_diagnostics(report.violations):
            print(line)
    print(report.count)
    return int(report.status)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        if args.help:
            parser.print_help()
            return int(ExitStatus.VALID)
        if args.version:
            print(VERSION)
            return int(ExitStatus.VALID)
        config = config_from_args(args)
        return run(args, config)
    except CvcError as e:
        print(f"Error: {e}", file=sys.stderr)
        return int(e.status)


if __name__ == "__main__":
    raise SystemExit(main())
