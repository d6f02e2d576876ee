#!/usr/bin/env python3
"""cyclasar CLI entrypoint: amplitude spectrum or band filter of a TSV series."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from cyclasar import __version__, config
from cyclasar.dsp.gate import GateParameters
from cyclasar.errors import InvalidPointCountError, SeriesFormatError
from cyclasar.pipeline.runner import FILTER, SPECTRUM, run_analysis
from cyclasar.util.exit_codes import ExitCode
from cyclasar.util.logging import configure_logging, get_logger, log_exception

_EPILOG = """\
filter args:
  low    0 .. +inf  frequency in unit of the reciprocal base time
  high   0 .. +inf  frequency in unit of the reciprocal base time
  kT     0 .. 100   blur of the cut(s) in percent of the passed frequency range
  low > high selects the complementary band-reject filter.

A path of '-' reads from stdin or writes to stdout.
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cyclasar",
        description="Spectrum or frequency-domain band filter of an equally spaced time series",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log-level", dest="log_level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR); default from CYCLASAR_LOG_LEVEL or WARNING")
    p.add_argument("--log-json", dest="log_json", type=str, default=None, help="Append JSON-lines logs to this file")
    p.add_argument(
        "--fft-backend",
        dest="fft_backend",
        choices=["scipy", "numpy"],
        default=config.FFT_BACKEND,
        help=f"Fourier transform implementation (default {config.FFT_BACKEND})",
    )
    p.add_argument("--freq-unit", dest="freq_unit", type=str, default=config.FREQ_UNIT, help=f"Frequency unit in the spectrum header (default {config.FREQ_UNIT})")
    p.add_argument("--time-unit", dest="time_unit", type=str, default=config.TIME_UNIT, help=f"Time unit in the filter header (default {config.TIME_UNIT})")
    p.add_argument("--value-unit", dest="value_unit", type=str, default=config.VALUE_UNIT, help=f"Amplitude unit in both headers (default {config.VALUE_UNIT})")

    sub = p.add_subparsers(dest="mode", metavar="method")
    sub.required = True

    sp = sub.add_parser(SPECTRUM, help="Write the one-sided amplitude spectrum")
    sp.add_argument("infile", help="Input TSV path or '-'")
    sp.add_argument("outfile", help="Output TSV path or '-'")

    fp = sub.add_parser(FILTER, help="Pass the series through a band gate")
    fp.add_argument("low", type=float, help="Low cut frequency (>= 0)")
    fp.add_argument("high", type=float, help="High cut frequency (>= 0, 'inf' for none)")
    fp.add_argument("kt", metavar="kT", type=float, help="Blur in percent of the passed band (0..100)")
    fp.add_argument("infile", help="Input TSV path or '-'")
    fp.add_argument("outfile", help="Output TSV path or '-'")

    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = build_parser()
    args = p.parse_args(argv)

    if args.mode == FILTER:
        try:
            GateParameters(low_cut=args.low, high_cut=args.high, kt=args.kt).validate()
        except ValueError as exc:
            p.error(str(exc))

    return args


def run(args: argparse.Namespace) -> int:
    """Run the selected method and map failures onto exit codes."""
    configure_logging(level=args.log_level, json_file=args.log_json, default_level="WARNING")
    logger = get_logger(__name__)
    usage = build_parser().format_usage()

    try:
        run_analysis(args)
    except InvalidPointCountError as exc:
        code = ExitCode.INVALID_POINT_COUNT
        logger.error("%s (declared %d)", ExitCode.message(code), exc.count, extra={"error_type": "point_count"})
        print("Invalid number of Points", file=sys.stderr)
        print(usage, file=sys.stderr, end="")
        return code
    except SeriesFormatError as exc:
        code = ExitCode.FORMAT_ERROR
        logger.error("%s: %s", ExitCode.message(code), exc, extra={"error_type": "truncated_input"})
        return code
    except OSError as exc:
        code = ExitCode.IO_ERROR
        logger.error("%s: %s", ExitCode.message(code), exc, extra={"error_type": "io"})
        print(usage, file=sys.stderr, end="")
        return code
    except Exception:
        code = ExitCode.GENERAL_ERROR
        log_exception(logger, ExitCode.message(code), error_type="internal", mode=args.mode)
        return code
    return ExitCode.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
