import sys
import argparse
import logging

from .controller import AnalysisController
from .errors import TraceError
from .model import TraceAggregator
from .trace import read_trace
from .view import ReportView, StepLogger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mipsstats",
        description="Summarize a MIPS32 execution trace (addr/word hex pairs) into instruction statistics")
    p.add_argument("trace", nargs="?", default="trace.txt", help="Trace file, one '<addr> <word>' hex pair per line")
    p.add_argument("output", nargs="?", default="statistics.txt", help="Report file to write ('-' for stdout)")
    p.add_argument("--max-entries", type=int, default=None, help="Reject traces with more entries than this")
    p.add_argument("--strict", action="store_true", help="Fail if any register counter ends up negative")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for progress, -vv to log every instruction")
    p.add_argument("-q", "--quiet", action="store_true", help="Only report errors")
    return p

def setup_logging(verbose: int, quiet: bool):
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

def main(argv=None) -> int:
    """Entry point: read the trace, aggregate it and write the report."""
    p = build_parser()
    args = p.parse_args(argv)
    if args.max_entries is not None and args.max_entries < 0:
        p.error("--max-entries must be non-negative")
    setup_logging(args.verbose, args.quiet)

    aggregator = TraceAggregator()
    if args.verbose >= 2:
        aggregator.attach(StepLogger())
    ctl = AnalysisController(aggregator, ReportView(args.output), strict=args.strict)

    try:
        entries = read_trace(args.trace, max_entries=args.max_entries)
        ctl.run_all(entries)
    except TraceError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
